"""Supplier entity."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Supplier(BaseModel):
    """Identity and profile snapshot of one Oracle Fusion supplier.

    Immutable: the rendered document is attached once via ``with_document``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Oracle SupplierId")
    name: str = ""
    status: str = ""
    business_relationship: str = ""
    tax_organization_type: str = ""
    last_updated: Optional[datetime] = None
    document: str = ""

    @classmethod
    def from_item(cls, item: Dict[str, Any], last_updated: Optional[datetime] = None) -> "Supplier":
        """Build from a supplier page item (SupplierId must be present)."""

        def text(key: str) -> str:
            value = item.get(key)
            return "" if value is None else str(value)

        return cls(
            id=text("SupplierId"),
            name=text("Supplier"),
            status=text("Status"),
            business_relationship=text("BusinessRelationship"),
            tax_organization_type=text("TaxOrganizationType"),
            last_updated=last_updated,
        )

    def with_document(self, document: str) -> "Supplier":
        return self.model_copy(update={"document": document})
