"""
Markdown rendering of supplier data.

Tables are fixed-column: header, separator, one row per record. A field
that is absent (or null) in a record is left out of that row, so sparse
records produce rows shorter than the header.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, Mapping, Sequence

if TYPE_CHECKING:
    from .tables import ChildTable


def _cell(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def render_table(fields: Sequence[str], records: Sequence[Dict[str, Any]]) -> str:
    """Render records as a markdown table projected onto ``fields``."""
    lines = [
        "| " + " | ".join(fields) + " |",
        "| " + " | ".join("---" for _ in fields) + " |",
    ]

    for record in records:
        row = "| "
        for name in fields:
            value = record.get(name)
            if value is not None:
                row += _cell(value) + " | "
        lines.append(row.rstrip(" |"))

    return "\n".join(lines) + "\n"


def render_document(
    supplier_name: str,
    tables: Sequence["ChildTable"],
    sections: Mapping[str, str],
) -> str:
    """Assemble the supplier document.

    Every table in ``tables`` gets its heading and description, in that
    order, whether or not ``sections`` has rows for it.
    """
    parts = [f"# Supplemental information for {supplier_name}:\n"]
    for table in tables:
        parts.append(f"## {table.heading}:\n{table.description}\n")
        parts.append(sections.get(table.key, ""))
    return "".join(parts)
