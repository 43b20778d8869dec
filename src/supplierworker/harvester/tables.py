"""
Supplier child tables.

SUPPLIER_TABLES is the canonical, ordered list of related datasets rendered
into every supplier document. The order is load-bearing: documents must
have the same section order whatever data is available.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .context import SourceContext
from .pager import Pager
from .render import render_table
from .retry import RetryPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChildTable:
    """A related dataset under ``{supplier}/child/{path}``."""

    key: str
    path: str
    heading: str
    description: str
    fields: Tuple[str, ...]


SUPPLIER_TABLES: Tuple[ChildTable, ...] = (
    ChildTable(
        key="sites",
        path="sites",
        heading="Supplier Sites Data",
        description=(
            "This table captures site-specific data for each supplier, allowing for detailed "
            "reasoning about supplier operations, geographic alignment, and procurement "
            "eligibility. It supports scenarios where a supplier operates across multiple "
            "locations, enabling filtering and analysis based on regional or business unit "
            "criteria. Users want to know if a Supplier is eligible for procurement in their "
            "BU (Business Unit) as reflected in a matching ProcurementBU field."
        ),
        fields=(
            "SupplierSiteId",
            "SupplierSite",
            "ProcurementBUId",
            "ProcurementBU",
            "SupplierAddressName",
            "Email",
            "PayGroup",
            "PaymentTerms",
        ),
    ),
    ChildTable(
        key="dff",
        path="DFF",
        heading="Descriptive Flexfields Data",
        description=(
            "This table captures third-party risk intelligence from Exiger, providing "
            "structured risk scores and metadata for each supplier. It enables reasoning "
            "about supplier risk exposure (exigerRiskLevel), compliance posture, and "
            "mitigation needs (exigerRelationshipStatus)."
        ),
        fields=("exigerRelationshipStatus", "exigerRiskLevel"),
    ),
    ChildTable(
        key="business_classifications",
        path="businessClassifications",
        heading="Business Classifications Data",
        description=(
            "This table contains the business classifications of a supplier. It is used to "
            "track diversity certifications, their statuses, and the agencies that issued "
            "them. This supports compliance, reporting, and supplier diversity initiatives."
        ),
        fields=(
            "Classification",
            "Subclassification",
            "Status",
            "CertifyingAgency",
            "CertificateExpirationDate",
            "Notes",
        ),
    ),
    ChildTable(
        key="contacts",
        path="contacts",
        heading="Contacts Data",
        description=(
            "This table contains the supplier's contacts, including the contact name "
            "(FirstName + LastName), email address, phone number, job title and contact "
            "status. This is useful for understanding who is the primary contact at the "
            "supplier for various purposes."
        ),
        fields=("FirstName", "LastName", "JobTitle", "PhoneNumber", "Email", "Status"),
    ),
    ChildTable(
        key="products_and_services",
        path="productsAndServices",
        heading="Products and Services Data",
        description=(
            "This table captures structured information about the offerings of each "
            "supplier, enabling reasoning about supplier capabilities, matching offerings to "
            "business needs, and supporting procurement decisions. CategoryName identifies "
            "the category of Products and Services offered by the Supplier. "
            "CategoryDescription is a detailed description of the product or service offered."
        ),
        fields=("CategoryName", "CategoryDescription", "CategoryType"),
    ),
    ChildTable(
        key="addresses",
        path="addresses",
        heading="Address Data",
        description=(
            "Contains structured location and contact data for each supplier, including "
            "address lines, city, state, postal code, and country. This enables geolocation, "
            "regional compliance checks, and communication routing for supplier entities."
        ),
        fields=(
            "AddressName",
            "Country",
            "AddressLine1",
            "AddressLine2",
            "AddressLine3",
            "AddressLine4",
            "City",
            "State",
            "PostalCode",
            "Status",
            "AddressPurposeOrderingFlag",
            "AddressPurposeRemitToFlag",
            "AddressPurposeRFQOrBiddingFlag",
        ),
    ),
)


class ChildTableFetcher:
    """Fetches and renders one child table for a supplier.

    Each page request is retried under ``retry``; when a page still fails,
    pagination for that table stops and the rows gathered so far are
    rendered. Failures never propagate to the caller.
    """

    def __init__(self, context: SourceContext, retry: Optional[RetryPolicy] = None):
        self.context = context
        self.retry = retry or RetryPolicy()

    async def fetch_rows(self, supplier_id: str, table: ChildTable) -> List[Dict[str, Any]]:
        """Collect every row of ``table`` for one supplier."""
        pager = Pager(
            context=self.context,
            url=self.context.child_url(supplier_id, table.path),
            fields=table.fields,
            retry=self.retry,
            description=f"{table.heading} for supplier {supplier_id}",
        )

        rows: List[Dict[str, Any]] = []
        async for page in pager.pages():
            rows.extend(page.items)

        if pager.failed:
            logger.warning(
                f"Incomplete {table.key} data for supplier {supplier_id}: "
                f"keeping {len(rows)} rows"
            )
        return rows

    async def fetch(self, supplier_id: str, table: ChildTable) -> str:
        """Rendered markdown table, or an empty string when there are no rows."""
        rows = await self.fetch_rows(supplier_id, table)
        if not rows:
            return ""
        return render_table(table.fields, rows)
