"""
Microsoft Graph index target.

Components:
- graph: external connection REST client
- schema: supplier item schema
- sync: supplier -> external item upsert
"""

from .graph import GraphConnectorClient
from .schema import CONNECTION_DESCRIPTION, SUPPLIER_SCHEMA
from .sync import IndexSync, UploadReport

__all__ = [
    "GraphConnectorClient",
    "CONNECTION_DESCRIPTION",
    "SUPPLIER_SCHEMA",
    "IndexSync",
    "UploadReport",
]
