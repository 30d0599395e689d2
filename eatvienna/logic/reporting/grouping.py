"""Grouping of selected products by category for the Packliste exports."""
from typing import Dict, List, Optional, Tuple

from eatvienna.domain.Selection import Selection, SelectedProduct
from eatvienna.utilities.constants import PACKLISTE_CATEGORIES, UNCATEGORIZED

__all__ = ["category_sort_key", "group_by_category"]

ProductGroup = Tuple[str, List[Tuple[str, SelectedProduct]]]


def category_sort_key(category: str):
    """Packliste categories in their fixed order, then others alphabetically, 'Sonstige' last."""
    if category in PACKLISTE_CATEGORIES:
        return (0, PACKLISTE_CATEGORIES.index(category), "")
    if category == UNCATEGORIZED:
        return (2, 0, "")
    return (1, 0, category.lower())


def group_by_category(products: Selection, categories: Optional[Dict[str, str]] = None) -> List[ProductGroup]:
    """Split a selection into (category, [(name, product), ...]) groups; names sorted within a group.

    Products missing from ``categories`` are grouped under 'Sonstige'. Empty groups are omitted.
    """
    categories = categories or {}
    groups: Dict[str, List[Tuple[str, SelectedProduct]]] = {}
    for name, product in products.items.items():
        groups.setdefault(categories.get(name) or UNCATEGORIZED, []).append((name, product))
    return [
        (category, sorted(groups[category], key=lambda entry: entry[0].lower()))
        for category in sorted(groups, key=category_sort_key)
    ]
