import unittest
from eatvienna.domain.Selection import Selection, SelectedProduct, QuantityWrite, WriteKind, parse_quantity


class TestQuantityWrites(unittest.TestCase):

    def setUp(self):
        self.selection = Selection({"Burger": SelectedProduct(3, "Stück")})

    def test_add_increments(self):
        entry = self.selection.apply("Burger", QuantityWrite.add(2))
        self.assertEqual(entry.quantity, 5)

    def test_set_overwrites(self):
        entry = self.selection.apply("Burger", QuantityWrite.set(2))
        self.assertEqual(entry.quantity, 2)

    def test_set_replaces_unit(self):
        entry = self.selection.apply("Burger", QuantityWrite.set(2), unit="Tablett")
        self.assertEqual(entry, SelectedProduct(2, "Tablett"))

    def test_add_keeps_existing_unit(self):
        entry = self.selection.apply("Burger", QuantityWrite.add(1), unit="Tablett")
        self.assertEqual(entry, SelectedProduct(4, "Stück"))

    def test_add_creates_missing_entry(self):
        entry = self.selection.apply("Cola", QuantityWrite.add(1), unit="Kiste")
        self.assertEqual(entry, SelectedProduct(1, "Kiste"))
        self.assertIn("Cola", self.selection)

    def test_add_of_non_positive_amount_to_missing_entry_creates_nothing(self):
        self.assertIsNone(self.selection.apply("Cola", QuantityWrite.add(-1)))
        self.assertNotIn("Cola", self.selection)

    def test_entry_removed_when_quantity_drops_to_zero(self):
        self.assertIsNone(self.selection.apply("Burger", QuantityWrite.add(-3)))
        self.assertNotIn("Burger", self.selection)
        self.selection.apply("Pommes", QuantityWrite.set(4))
        self.assertIsNone(self.selection.apply("Pommes", QuantityWrite.set(0)))
        self.assertEqual(len(self.selection), 0)

    def test_kind_accepts_plain_strings(self):
        write = QuantityWrite("set", 7)
        self.assertIs(write.kind, WriteKind.SET)
        self.assertEqual(write.apply_to(3), 7)
        self.assertEqual(QuantityWrite.add(2).apply_to(None), 2)


class TestParseQuantity(unittest.TestCase):

    def test_numbers_and_numeric_strings(self):
        self.assertEqual(parse_quantity("12"), 12)
        self.assertEqual(parse_quantity(" 4 "), 4)
        self.assertEqual(parse_quantity("2,9"), 2)
        self.assertEqual(parse_quantity(5.0, minimum=1), 5)

    def test_clamps_instead_of_raising(self):
        self.assertEqual(parse_quantity("abc", minimum=1), 1)
        self.assertEqual(parse_quantity("", minimum=0), 0)
        self.assertEqual(parse_quantity(None, minimum=1), 1)
        self.assertEqual(parse_quantity(-5, minimum=0), 0)
        self.assertEqual(parse_quantity(0, minimum=1), 1)
        self.assertEqual(parse_quantity(True, minimum=0), 0)


class TestSelectionSerialization(unittest.TestCase):

    def test_from_dict_drops_empty_entries(self):
        selection = Selection.from_dict({
            "Burger": {"quantity": 50, "unit": "Stück"},
            "Pommes": {"quantity": 0, "unit": "Portion"},
            "Cola": {"quantity": "x"},
        })
        self.assertEqual(selection.to_dict(), {"Burger": {"quantity": 50, "unit": "Stück"}})
