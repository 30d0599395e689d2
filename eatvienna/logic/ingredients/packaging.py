"""Packaging calculator: total amount -> whole packages."""
import math
from typing import Optional, Tuple

from eatvienna.domain.Packaging import PackagingUnit
from eatvienna.utilities.constants import UNKNOWN_PACKAGING

__all__ = ["packages_needed", "compute_packaging"]

# Division results are rounded to this many places before ceil, so 0.3 / 0.1 is 3 packages, not 4
_RATIO_PRECISION = 9


def packages_needed(total_amount: float, amount_per_package: float) -> int:
    """Minimum number of packages whose combined content is >= total_amount."""
    if total_amount <= 0:
        return 0
    if amount_per_package <= 0:
        raise ValueError(f"amount_per_package must be positive: {amount_per_package}")
    return math.ceil(round(total_amount / amount_per_package, _RATIO_PRECISION))


def compute_packaging(total_amount: float, packaging: Optional[PackagingUnit]) -> Tuple[str, float, int]:
    """Return (packaging label, amount per package, package count).

    Without a usable packaging configuration the whole total counts as one
    package of its own size.
    """
    if packaging is not None and packaging.is_configured():
        label = packaging.packaging_unit or UNKNOWN_PACKAGING
        return label, packaging.amount_per_package, packages_needed(total_amount, packaging.amount_per_package)
    if total_amount <= 0:
        return UNKNOWN_PACKAGING, 0, 0
    return UNKNOWN_PACKAGING, total_amount, 1
