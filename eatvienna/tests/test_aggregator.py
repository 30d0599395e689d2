import unittest
from eatvienna.domain.Recipe import recipe_table_from_dict
from eatvienna.domain.Selection import Selection
from eatvienna.logic.ingredients.aggregator import aggregate_ingredients


class TestQuantityAggregator(unittest.TestCase):

    def setUp(self):
        self.recipes = recipe_table_from_dict({
            "Burger": {
                "Bun": {"menge": 1, "einheit": "Stück"},
                "Patty": {"menge": 1, "einheit": "Stück"},
                "Cheddar": {"menge": 20, "einheit": "Gramm"},
            },
            "Cheeseburger": {
                "Bun": {"menge": 1, "einheit": "Stück"},
                "Cheddar": {"menge": 40, "einheit": "Gramm"},
            },
            "Pommes": {"Pommes TK": {"amount": 0.25, "unit": "Kilogramm"}},
        })

    def test_totals_sum_recipe_amount_times_quantity(self):
        selection = Selection.from_dict({
            "Burger": {"quantity": 10, "unit": "Stück"},
            "Cheeseburger": {"quantity": 5, "unit": "Stück"},
        })
        result = aggregate_ingredients(selection, self.recipes)
        self.assertEqual(result.totals, {"Bun": 15, "Patty": 10, "Cheddar": 10 * 20 + 5 * 40})
        self.assertEqual(result.units["Cheddar"], "Gramm")
        self.assertEqual(result.missing_recipes, [])

    def test_unreferenced_ingredients_are_omitted(self):
        result = aggregate_ingredients(Selection.from_dict({"Pommes": {"quantity": 8}}), self.recipes)
        self.assertEqual(list(result.totals), ["Pommes TK"])
        self.assertAlmostEqual(result.totals["Pommes TK"], 2.0)
        self.assertNotIn("Bun", result)

    def test_missing_recipe_contributes_zero_and_is_reported(self):
        selection = Selection.from_dict({
            "Burger": {"quantity": 2},
            "Cola": {"quantity": 24, "unit": "Flasche"},
        })
        with self.assertLogs("eatvienna.logic.ingredients.aggregator", level="WARNING"):
            result = aggregate_ingredients(selection, self.recipes)
        self.assertEqual(result.totals["Bun"], 2)
        self.assertEqual(result.missing_recipes, ["Cola"])

    def test_empty_recipe_counts_as_missing(self):
        recipes = recipe_table_from_dict({"Kassa": {}})
        result = aggregate_ingredients(Selection.from_dict({"Kassa": {"quantity": 1}}), recipes)
        self.assertEqual(result.totals, {})
        self.assertEqual(result.missing_recipes, ["Kassa"])

    def test_manual_ingredients_bypass_recipes(self):
        products = Selection.from_dict({"Burger": {"quantity": 10}})
        manual = Selection.from_dict({
            "Bun": {"quantity": 6, "unit": "Stück"},
            "Servietten": {"quantity": 200, "unit": "Stück"},
        })
        result = aggregate_ingredients(products, self.recipes, manual)
        self.assertEqual(result.totals["Bun"], 16)
        self.assertEqual(result.totals["Servietten"], 200)
        self.assertEqual(result.missing_recipes, [])

    def test_plain_dict_selection_is_accepted(self):
        selection = Selection.from_dict({"Burger": {"quantity": 3}})
        result = aggregate_ingredients(dict(selection.items), self.recipes)
        self.assertEqual(result.totals["Patty"], 3)

    def test_none_recipe_table_raises(self):
        with self.assertRaises(TypeError):
            aggregate_ingredients(Selection(), None)
