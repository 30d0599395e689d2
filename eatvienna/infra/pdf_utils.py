import io
from xml.sax.saxutils import escape
from typing import Dict, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from eatvienna.domain.Event import EventDetails
from eatvienna.domain.Selection import Selection
from eatvienna.logic.ingredients.calculator import IngredientCalculation
from eatvienna.logic.reporting.formatting import format_weight, packaging_text
from eatvienna.logic.reporting.grouping import group_by_category
from eatvienna.utilities.constants import DOCUMENT_TITLES

CHECKBOX = "[ ]"
HEADER_COLOR = colors.HexColor("#2E7D32")

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 11),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
    ("ALIGN", (0, 0), (0, -1), "CENTER"),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
])


def _details_rows(details: EventDetails, mode: str):
    rows = [["Typ", details.type], ["Event Name", details.name]]
    if mode == "bestellung" and details.supplier_name:
        rows.append(["Mitarbeiter", details.supplier_name])
    if details.ft and details.ft != "none":
        rows.append(["Foodtruck", details.ft])
    if details.ka and details.ka != "none":
        rows.append(["Kühlanhänger", details.ka])
    rows.append(["Datum", details.date or "-"])
    return rows


def _product_rows(entries):
    rows = [["", "Anzahl", "Produkt"]]
    for name, p in entries:
        rows.append([CHECKBOX, f"{p.quantity} {p.unit}".strip(), name])
    return rows


def generate_pdf(products: Selection, calculation: IngredientCalculation, details: EventDetails,
                 mode: str = "packliste", product_categories: Optional[Dict[str, str]] = None,
                 notes: str = "") -> bytes:
    """Render a Packliste / Einkaufsliste / Bestellung for one event as PDF bytes."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20)
    styles = getSampleStyleSheet()
    title = DOCUMENT_TITLES.get(mode, DOCUMENT_TITLES["packliste"])

    elements = [Paragraph(escape(f"{title} – {details.name or 'Event'}"), styles["Title"]), Spacer(1, 8)]
    if mode != "einkaufen":
        info = Table(_details_rows(details, mode), hAlign="LEFT")
        info.setStyle(TableStyle([("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold")]))
        elements += [info, Spacer(1, 12)]

    elements.append(Paragraph("Produkte", styles["Heading2"]))
    if len(products):
        # one table per category, Packliste categories first
        for category, entries in group_by_category(products, product_categories):
            table = Table(_product_rows(entries), colWidths=[30, 110, None], hAlign="LEFT", repeatRows=1)
            table.setStyle(_TABLE_STYLE)
            elements += [Paragraph(escape(category), styles["Heading3"]), table, Spacer(1, 6)]
    else:
        elements.append(Paragraph("Keine Produkte ausgewählt", styles["Normal"]))

    if mode != "einkaufen":
        elements += [Spacer(1, 12), Paragraph("Zutaten", styles["Heading2"])]
        if len(calculation):
            rows = [["", "Verpackung", "Zutat", "Gesamtmenge"]]
            for name, ing in calculation.sorted_items():
                rows.append([CHECKBOX, packaging_text(ing), name, format_weight(ing.total_amount, ing.unit)])
            table = Table(rows, repeatRows=1)
            table.setStyle(_TABLE_STYLE)
            elements.append(table)
        else:
            elements.append(Paragraph("Keine Zutaten berechnet", styles["Normal"]))

    if notes and notes.strip():
        elements += [Spacer(1, 12), Paragraph("Spezielle Infos", styles["Heading2"])]
        for line in notes.strip().splitlines():
            elements.append(Paragraph(escape(line) or "&nbsp;", styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
