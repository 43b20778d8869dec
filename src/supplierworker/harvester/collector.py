"""
Supplier collection.

Pages through the supplier resource, applies the incremental filter and
builds each qualifying supplier's document from its child tables.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from ..models import Supplier
from .context import SourceContext
from .pager import Pager
from .render import render_document
from .state import parse_timestamp
from .tables import SUPPLIER_TABLES, ChildTable, ChildTableFetcher

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "SupplierId",
    "Supplier",
    "Status",
    "BusinessRelationship",
    "TaxOrganizationType",
)
LAST_UPDATE_FIELD = "LastUpdateDate"


class SupplierCollector:
    """Produces the list of suppliers to sync, documents included.

    In incremental mode results are requested newest first, but every item
    is still checked against the cutoff and paging continues until the
    server reports no more data. ``incomplete`` is set when a listing
    request failed and paging stopped early.
    """

    def __init__(
        self,
        context: SourceContext,
        fetcher: Optional[ChildTableFetcher] = None,
        tables: Sequence[ChildTable] = SUPPLIER_TABLES,
    ):
        self.context = context
        self.fetcher = fetcher or ChildTableFetcher(context)
        self.tables = tables
        self.incomplete = False

    def _pager(self, incremental_only: bool) -> Pager:
        if incremental_only:
            return Pager(
                context=self.context,
                url=self.context.supplier_url,
                fields=PROFILE_FIELDS + (LAST_UPDATE_FIELD,),
                order_by=LAST_UPDATE_FIELD,
                description="suppliers",
            )
        return Pager(
            context=self.context,
            url=self.context.supplier_url,
            fields=PROFILE_FIELDS,
            description="suppliers",
        )

    def select(
        self,
        item: Dict[str, Any],
        incremental_only: bool,
        cutoff: Optional[datetime],
    ) -> Optional[Supplier]:
        """Supplier for a page item, or None when the item is filtered out."""
        if not isinstance(item, dict):
            logger.warning(f"Skipping malformed supplier item: {item!r}")
            return None

        supplier_id = item.get("SupplierId")
        if supplier_id is None or str(supplier_id) == "":
            logger.info("Skipping supplier item without SupplierId")
            return None

        if not incremental_only:
            return Supplier.from_item(item)

        raw = item.get(LAST_UPDATE_FIELD)
        if not raw:
            logger.debug(f"Supplier {supplier_id} has no {LAST_UPDATE_FIELD}, skipping")
            return None
        try:
            last_updated = parse_timestamp(str(raw))
        except ValueError:
            logger.warning(f"Supplier {supplier_id} has invalid {LAST_UPDATE_FIELD} {raw!r}")
            return None

        if cutoff is not None and last_updated <= cutoff:
            return None
        return Supplier.from_item(item, last_updated=last_updated)

    async def build_document(self, supplier: Supplier) -> str:
        """Fetch every child table in order and render the document."""
        sections = {}
        for table in self.tables:
            sections[table.key] = await self.fetcher.fetch(supplier.id, table)
        return render_document(supplier.name, self.tables, sections)

    async def collect(
        self,
        incremental_only: bool = False,
        cutoff: Optional[datetime] = None,
    ) -> List[Supplier]:
        """Collect qualifying suppliers in source order.

        Raises:
            PageFormatError: a supplier page could not be parsed
        """
        if cutoff is not None and cutoff.tzinfo is None:
            cutoff = cutoff.replace(tzinfo=timezone.utc)

        suppliers: List[Supplier] = []
        pager = self._pager(incremental_only)

        self.incomplete = False
        async for page in pager.pages():
            for item in page.items:
                supplier = self.select(item, incremental_only, cutoff)
                if supplier is None:
                    continue

                logger.info(f"Getting additional data for supplier {supplier.name} ({supplier.id})...")
                document = await self.build_document(supplier)
                suppliers.append(supplier.with_document(document))

        if pager.failed:
            self.incomplete = True
            logger.error(f"Supplier listing stopped early, collected {len(suppliers)} suppliers")
        else:
            logger.info(f"Collected {len(suppliers)} suppliers")
        return suppliers
