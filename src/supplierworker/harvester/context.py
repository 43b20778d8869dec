"""Per-run source context.

Built once per run and handed to every component that talks to Oracle
Fusion, so no client state lives at module level.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import httpx

PAGE_SIZE = 100


@dataclass(frozen=True)
class SourceContext:
    """HTTP client, bearer token and supplier resource for one run."""

    client: httpx.AsyncClient
    token: str
    supplier_url: str
    page_size: int = PAGE_SIZE

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "cache-control": "no-cache",
        }

    def child_url(self, supplier_id: str, path: str) -> str:
        """URL of a child resource under one supplier."""
        return f"{self.supplier_url.rstrip('/')}/{supplier_id}/child/{path}"
