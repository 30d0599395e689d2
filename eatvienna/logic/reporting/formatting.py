"""Display formatting shared by the API, PDF and Excel exports."""
import re

from eatvienna.domain.Event import EventDetails
from eatvienna.utilities.constants import UNIT_PLURALS, DOCUMENT_TITLES

__all__ = ["format_number", "format_weight", "unit_plural", "packaging_text", "export_filename"]


def format_number(value) -> str:
    """Integral floats are shown without decimals (50.0 -> '50')."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.3f}".rstrip("0").rstrip(".")
    return str(value)


def format_weight(value, unit: str) -> str:
    """Render an amount, switching Gramm/Milliliter to Kg/L from 1000 upwards."""
    u = (unit or "").lower()
    if u == "gramm" and value >= 1000:
        return f"{value / 1000:.1f} Kg"
    if u == "milliliter" and value >= 1000:
        return f"{value / 1000:.1f} L"
    return f"{format_number(value)} {unit}".strip()


def unit_plural(quantity, unit: str) -> str:
    if quantity > 1:
        return UNIT_PLURALS.get(unit, unit)
    return unit


def packaging_text(ingredient) -> str:
    """'<count> <packaging> à <amount per package>' for a CalculatedIngredient."""
    return (f"{ingredient.packaging_count} {unit_plural(ingredient.packaging_count, ingredient.packaging)} à "
            f"{format_weight(ingredient.amount_per_package, ingredient.unit)}")


def export_filename(details: EventDetails, mode: str = "packliste", extension: str = "xlsx") -> str:
    """YYYY-MM-DD_<name>.<ext> for Packlisten, <Title>_<name>_<date>.<ext> otherwise; ASCII only."""
    title = DOCUMENT_TITLES.get(mode, DOCUMENT_TITLES["packliste"])
    parts = details.date.split(".") if details.date else []
    if mode == "packliste" and len(parts) == 3:
        day, month, year = parts
        name = f"{year}-{month}-{day}_{details.name or title}"
    elif mode == "bestellung" and details.supplier_name:
        name = f"Bestellung_{details.supplier_name}_{details.date or 'Kein-Datum'}"
    else:
        name = f"{title}_{details.name or 'Dokument'}_{details.date or 'Kein-Datum'}"
    name = re.sub(r"\s+", "_", name)
    name = re.sub(r"[^A-Za-z0-9_\-.]", "", name)
    return f"{name}.{extension.lstrip('.')}"
