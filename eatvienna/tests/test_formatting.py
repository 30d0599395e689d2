import unittest
from eatvienna.domain.CalculatedIngredient import CalculatedIngredient
from eatvienna.domain.Event import EventDetails
from eatvienna.logic.reporting.formatting import (
    format_weight, unit_plural, packaging_text, format_number, export_filename
)


class TestFormatting(unittest.TestCase):

    def test_format_weight_switches_to_kg_and_l(self):
        self.assertEqual(format_weight(1500, "Gramm"), "1.5 Kg")
        self.assertEqual(format_weight(2000, "Milliliter"), "2.0 L")
        self.assertEqual(format_weight(999, "Gramm"), "999 Gramm")

    def test_format_weight_other_units(self):
        self.assertEqual(format_weight(50.0, "Stück"), "50 Stück")
        self.assertEqual(format_weight(2.5, "kg"), "2.5 kg")
        self.assertEqual(format_number(0.125), "0.125")

    def test_unit_plural(self):
        self.assertEqual(unit_plural(2, "Packung"), "Packungen")
        self.assertEqual(unit_plural(1, "Packung"), "Packung")
        self.assertEqual(unit_plural(3, "Glas"), "Gläser")
        self.assertEqual(unit_plural(3, "Unknown"), "Unknown")

    def test_packaging_text(self):
        ing = CalculatedIngredient(50, "Stück", "Packung", 5, 12)
        self.assertEqual(packaging_text(ing), "5 Packungen à 12 Stück")

    def test_export_filenames(self):
        details = EventDetails(name="Firmenfeier", date="03.10.2025")
        self.assertEqual(export_filename(details, "packliste"), "2025-10-03_Firmenfeier.xlsx")
        self.assertEqual(export_filename(details, "packliste", "pdf"), "2025-10-03_Firmenfeier.pdf")
        details = EventDetails(name="Grätzlfest Wien", date="", supplier_name="Metro")
        self.assertEqual(export_filename(details, "einkaufen", ".pdf"), "Einkaufsliste_Grtzlfest_Wien_Kein-Datum.pdf")
        self.assertEqual(export_filename(details, "bestellung"), "Bestellung_Metro_Kein-Datum.xlsx")
