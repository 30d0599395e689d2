"""Excel import and export of Packlisten.

Worksheet layout (first sheet):

    <Title>
    Typ            | <type>
    Event Name     | <name>
    Foodtruck      | <ft>            (optional)
    Kühlanhänger   | <ka>            (optional)
    Datum          | <date>

    Produkte
                   | Anzahl          | Produkt   | Kategorie
    ☐              | <qty> [<unit>]  | <product> | <category>
    ...
    Zutaten
                   | Menge/Verpackung | Zutat | Gesamtmenge | Einheit
    ☐              | <n> <pack> à <amount> <unit> | <ingredient> | <total> | <unit>

Products are grouped by category. Rows of the 'Zutaten' category are manual
ingredient entries and are read back as such.
"""
import io
import logging
import re
from typing import Dict, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from eatvienna.domain.Event import EventDetails, format_event_date
from eatvienna.domain.Selection import Selection, SelectedProduct
from eatvienna.logic.ingredients.calculator import IngredientCalculation
from eatvienna.logic.reporting.formatting import format_number, unit_plural
from eatvienna.logic.reporting.grouping import group_by_category
from eatvienna.utilities.constants import DOCUMENT_TITLES, DEFAULT_EVENT_TYPE, INGREDIENTS_CATEGORY, UNCATEGORIZED

logger = logging.getLogger(__name__)

PRODUCTS_MARKER = "Produkte"
INGREDIENTS_MARKER = "Zutaten"
CHECKBOX = "☐"
QUANTITY_PATTERN = re.compile(r"^\s*(\d+)(?:\s+(.+?))?\s*$")
DETAIL_LABELS = {
    "Typ": "type",
    "Event Name": "name",
    "Foodtruck": "ft",
    "Kühlanhänger": "ka",
    "Datum": "date",
    "Mitarbeiter": "supplier_name",
}
COLUMN_WIDTHS = [5, 30, 40, 15, 10]


class ExcelImportError(ValueError):
    """The uploaded workbook does not follow the Packliste layout."""


class ExcelImport:
    def __init__(self, products: Selection, details: EventDetails, skipped_rows: Optional[list] = None,
                 ingredients: Optional[Selection] = None, categories: Optional[Dict[str, str]] = None):
        self.products = products
        self.ingredients = ingredients or Selection()
        self.details = details
        self.categories = categories or {}
        self.skipped_rows = skipped_rows or []

    def to_dict(self):
        return {
            "products": self.products.to_dict(),
            "ingredients": self.ingredients.to_dict(),
            "categories": dict(self.categories),
            "details": self.details.to_dict(),
            "skipped_rows": list(self.skipped_rows),
        }


def _cell(row, index):
    if row is None or index >= len(row):
        return None
    return row[index]


def _text(value) -> str:
    return "" if value is None else str(value).strip()


def import_excel(data: bytes) -> ExcelImport:
    """Parse an uploaded workbook into selected products and event details.

    Raises:
        ExcelImportError: the file is not a readable workbook or has no 'Produkte' section.
    """
    try:
        workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as e:
        raise ExcelImportError(f"Datei konnte nicht gelesen werden: {e}") from e
    try:
        sheet = workbook.worksheets[0]
        rows = [tuple(r) for r in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    details = {"type": DEFAULT_EVENT_TYPE}
    products_index = -1
    for i, row in enumerate(rows):
        label = _text(_cell(row, 0))
        if label == PRODUCTS_MARKER:
            products_index = i
            break
        value = _cell(row, 1)
        if label in DETAIL_LABELS and value not in (None, ""):
            key = DETAIL_LABELS[label]
            details[key] = format_event_date(value) if key == "date" else _text(value)

    if products_index < 0:
        raise ExcelImportError(f"Abschnitt '{PRODUCTS_MARKER}' nicht gefunden")

    products: Dict[str, SelectedProduct] = {}
    ingredients: Dict[str, SelectedProduct] = {}
    categories: Dict[str, str] = {}
    skipped = []
    # marker row is followed by one column-header row
    for row_number, row in enumerate(rows[products_index + 2:], start=products_index + 3):
        if _text(_cell(row, 0)) == INGREDIENTS_MARKER:
            break
        name = _text(_cell(row, 2))
        if not name:
            continue
        match = QUANTITY_PATTERN.match(_text(_cell(row, 1)))
        if not match:
            logger.warning("Excel import: row %d (%r) has no '<quantity> [unit]' cell, skipped", row_number, name)
            skipped.append(row_number)
            continue
        quantity = int(match.group(1))
        if quantity <= 0:
            skipped.append(row_number)
            continue
        entry = SelectedProduct(quantity, match.group(2) or "")
        category = _text(_cell(row, 3))
        if category == INGREDIENTS_CATEGORY:
            ingredients[name] = entry
            continue
        products[name] = entry
        if category and category != UNCATEGORIZED:
            categories[name] = category

    logger.info("Excel import: %d products, %d manual ingredients for %r",
                len(products), len(ingredients), details.get("name", ""))
    return ExcelImport(Selection(products), EventDetails.from_dict(details), skipped,
                       Selection(ingredients), categories)


def generate_excel(products: Selection, calculation: IngredientCalculation, details: EventDetails,
                   mode: str = "packliste", product_categories: Optional[Dict[str, str]] = None) -> bytes:
    """Write the Packliste layout that import_excel reads back."""
    title = DOCUMENT_TITLES.get(mode, DOCUMENT_TITLES["packliste"])
    wb = Workbook()
    ws = wb.active
    ws.title = "Übersicht"

    ws.append([title, ""])
    ws.cell(row=1, column=1).font = Font(bold=True, size=14)
    if mode != "einkaufen":
        ws.append(["Typ", details.type])
        ws.append(["Event Name", details.name])
        if mode == "bestellung" and details.supplier_name:
            ws.append(["Mitarbeiter", details.supplier_name])
        if details.ft and details.ft != "none":
            ws.append(["Foodtruck", details.ft])
        if details.ka and details.ka != "none":
            ws.append(["Kühlanhänger", details.ka])
    ws.append(["Datum", details.date])
    ws.append([])

    ws.append([PRODUCTS_MARKER])
    ws.cell(row=ws.max_row, column=1).font = Font(bold=True)
    ws.append(["", "Anzahl", "Produkt", "Kategorie"])
    for category, entries in group_by_category(products, product_categories):
        for name, p in entries:
            ws.append([CHECKBOX, f"{p.quantity} {p.unit}".strip(), name, category])

    if mode != "einkaufen":
        ws.append([])
        ws.append([INGREDIENTS_MARKER])
        ws.cell(row=ws.max_row, column=1).font = Font(bold=True)
        ws.append(["", "Menge/Verpackung", "Zutat", "Gesamtmenge", "Einheit"])
        for name, ing in calculation.sorted_items():
            text = (f"{ing.packaging_count} {unit_plural(ing.packaging_count, ing.packaging)} à "
                    f"{format_number(ing.amount_per_package)} {ing.unit}").strip()
            ws.append([CHECKBOX, text, name, ing.total_amount, ing.unit])

    for i, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(i)].width = width

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()

