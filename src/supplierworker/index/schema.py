"""External connection schema for supplier items."""

from typing import Any, Dict, List

CONNECTION_DESCRIPTION = (
    "Structured supplier entity schema from Oracle Supplier Management, encompassing core "
    "profile attributes, business classifications, contact hierarchies, and "
    "procurement-relevant metadata, formatted in a modular and structured way to support "
    "AI reasoning and intelligent operations in Copilot."
)


def _profile_property(name: str, labels: List[str] = None) -> Dict[str, Any]:
    prop = {
        "name": name,
        "type": "string",
        "isQueryable": True,
        "isSearchable": True,
        "isRetrievable": True,
        "isRefinable": False,
    }
    if labels:
        prop["labels"] = labels
    return prop


def _reference_property(name: str, label: str) -> Dict[str, Any]:
    return {
        "name": name,
        "type": "string",
        "isQueryable": False,
        "isSearchable": False,
        "isRetrievable": True,
        "isRefinable": False,
        "labels": [label],
    }


SUPPLIER_SCHEMA: Dict[str, Any] = {
    "baseType": "microsoft.graph.externalItem",
    "properties": [
        # Supplier profile
        _profile_property("supplierId"),
        _profile_property("supplier", labels=["title"]),
        _profile_property("status"),
        _profile_property("businessRelationship"),
        _profile_property("taxOrganizationType"),
        # References
        _reference_property("url", "url"),
        _reference_property("iconUrl", "iconUrl"),
    ],
}
