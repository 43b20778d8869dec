"""
Index sync: upsert collected suppliers as Graph external items.

One item per supplier, keyed by supplier id, granted to everyone in the
tenant. A failed upload is logged and recorded, and the loop moves on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

import httpx

from ..exceptions import GraphError
from ..models import Supplier
from .graph import GraphConnectorClient

logger = logging.getLogger(__name__)


@dataclass
class UploadReport:
    """Outcome of one upload batch."""

    attempted: int = 0
    succeeded: int = 0
    failed: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True iff no item failed."""
        return not self.failed


class IndexSync:
    """Maps suppliers to external items and upserts them one at a time."""

    def __init__(
        self,
        graph: GraphConnectorClient,
        connection_id: str,
        link_base: str,
        icon_url: str,
        tenant_id: str,
    ):
        self.graph = graph
        self.connection_id = connection_id
        self.link_base = link_base.rstrip("/")
        self.icon_url = icon_url
        self.tenant_id = tenant_id

    def build_item(self, supplier: Supplier) -> Dict[str, Any]:
        """External item payload for one supplier."""
        return {
            "id": supplier.id,
            "acl": [
                {
                    "accessType": "grant",
                    "type": "everyone",
                    "value": self.tenant_id,
                }
            ],
            "properties": {
                "supplierId": supplier.id,
                "supplier": supplier.name,
                "status": supplier.status,
                "businessRelationship": supplier.business_relationship,
                "taxOrganizationType": supplier.tax_organization_type,
                "url": f"{self.link_base}/{supplier.id}",
                "iconUrl": self.icon_url,
            },
            "content": {
                "type": "text",
                "value": supplier.document,
            },
        }

    async def upload(self, suppliers: Sequence[Supplier]) -> UploadReport:
        """Upsert every supplier, in order, and report the outcome."""
        report = UploadReport()
        logger.info(f"Uploading {len(suppliers)} suppliers to connection {self.connection_id}...")

        for supplier in suppliers:
            report.attempted += 1
            try:
                await self.graph.put_item(self.connection_id, self.build_item(supplier))
            except (GraphError, httpx.HTTPError) as e:
                report.failed.append(supplier.id)
                logger.error(f"Uploading supplier {supplier.name} with ID {supplier.id} FAILED: {e}")
                continue

            report.succeeded += 1
            logger.info(f"Uploaded supplier {supplier.name} with ID {supplier.id}")

        if report.success:
            logger.info(f"Successfully uploaded {report.succeeded} suppliers")
        else:
            logger.warning(
                f"There were errors uploading suppliers: {len(report.failed)} of "
                f"{report.attempted} failed ({', '.join(report.failed)})"
            )
        return report
