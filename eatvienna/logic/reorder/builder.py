"""Nachbestellung builder.

Turns the products and ingredients requested for an event into reorder items,
each labelled with the packaging unit the item is ordered in.
"""
from typing import Any, Dict, Iterable, List, Optional

from eatvienna.domain.Nachbestellung import Nachbestellung, NachbestellungItem
from eatvienna.domain.Packaging import PackagingUnit
from eatvienna.domain.Selection import parse_quantity
from eatvienna.utilities.constants import (
    PACKAGING_NAME_KEYWORDS, PACKAGING_UNIT_KEYWORDS, DEFAULT_PACKAGING_UNIT, INGREDIENTS_CATEGORY
)

__all__ = ["guess_packaging_unit", "build_items", "build_nachbestellung"]


def guess_packaging_unit(name: str, unit: str) -> str:
    """Best guess of the packaging unit from keywords in the name, then the unit."""
    name_lower = (name or "").lower()
    unit_lower = (unit or "").lower()
    for keywords, packaging in PACKAGING_NAME_KEYWORDS:
        if any(k in name_lower for k in keywords):
            return packaging
    for keywords, packaging in PACKAGING_UNIT_KEYWORDS:
        if any(k in unit_lower for k in keywords):
            return packaging
    return DEFAULT_PACKAGING_UNIT


def _resolve_packaging_unit(entry: Dict[str, Any], packaging: Dict[str, PackagingUnit]) -> str:
    explicit = entry.get("packaging_unit")
    if explicit:
        return explicit
    configured = packaging.get(entry.get("name", ""))
    if configured is not None and configured.packaging_unit:
        return configured.packaging_unit
    return guess_packaging_unit(entry.get("name", ""), entry.get("unit", ""))


def build_items(entries: Iterable[Dict[str, Any]], item_type: str,
                packaging: Optional[Dict[str, PackagingUnit]] = None) -> List[NachbestellungItem]:
    """Build reorder items; entries without a name or with quantity <= 0 are skipped."""
    packaging = packaging or {}
    default_category = INGREDIENTS_CATEGORY if item_type == "ingredient" else ""
    items: List[NachbestellungItem] = []
    for entry in entries or []:
        name = (entry.get("name") or "").strip()
        quantity = parse_quantity(entry.get("quantity"), minimum=0)
        if not name or quantity <= 0:
            continue
        items.append(NachbestellungItem(
            item_type=item_type,
            item_name=name,
            quantity=quantity,
            unit=entry.get("unit") or "",
            packaging_unit=_resolve_packaging_unit(entry, packaging),
            category=entry.get("category") or default_category,
            notes=entry.get("notes") or "",
        ))
    return items


def build_nachbestellung(event_id: int, event_name: str, products: Iterable[Dict[str, Any]],
                         ingredients: Iterable[Dict[str, Any]], *, notes: str = "", created_by: str = "",
                         packaging: Optional[Dict[str, PackagingUnit]] = None) -> Nachbestellung:
    """Create an open Nachbestellung (not yet persisted, ids unassigned)."""
    items = build_items(products, "product", packaging) + build_items(ingredients, "ingredient", packaging)
    return Nachbestellung(
        event_id=event_id,
        event_name=event_name,
        status="offen",
        notes=notes,
        created_by=created_by,
        items=items,
    )
