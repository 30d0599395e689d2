from typing import Final, Dict, List, Tuple

DATE_FORMAT: Final[str] = "%d.%m.%Y"

DEFAULT_EVENT_TYPE: Final[str] = "Catering"
EVENT_TYPES: Final[List[str]] = ["Catering", "Verkauf", "Lieferung"]

# Category used by the manual ingredient panel
INGREDIENTS_CATEGORY: Final[str] = "Zutaten"
UNKNOWN_PACKAGING: Final[str] = "Unknown"

UNIT_PLURALS: Final[Dict[str, str]] = {
    "Packung": "Packungen",
    "Flasche": "Flaschen",
    "Kiste": "Kisten",
    "Dose": "Dosen",
    "Glas": "Gläser",
    "Rolle": "Rollen",
    "Karton": "Kartons",
    "Tasse": "Tassen",
    "Kanister": "Kanister",
    "Beutel": "Beutel",
    "Sackerl": "Sackerl",
    "Stück": "Stück",
    "Set": "Sets",
}

# (keywords in ingredient/product name, packaging unit); first match wins
PACKAGING_NAME_KEYWORDS: Final[List[Tuple[Tuple[str, ...], str]]] = [
    (("öl", "essig", "sauce"), "Flasche"),
    (("mehl", "zucker", "salz"), "Sackerl"),
    (("marmelade", "honig", "mus"), "Glas"),
    (("milch", "sahne", "joghurt"), "Packung"),
    (("käse", "butter", "wurst"), "Packung"),
    (("brot", "brötchen"), "Stück"),
    (("ei",), "Stück"),
    (("dose", "konserve"), "Dose"),
]
PACKAGING_UNIT_KEYWORDS: Final[List[Tuple[Tuple[str, ...], str]]] = [
    (("ml", "liter"), "Flasche"),
    (("g", "kg"), "Packung"),
]
DEFAULT_PACKAGING_UNIT: Final[str] = "Stück"

NACHBESTELLUNG_STATUSES: Final[List[str]] = ["offen", "in_bearbeitung", "abgeschlossen", "storniert"]
ITEM_STATUSES: Final[List[str]] = ["offen", "bestellt", "erhalten", "storniert", "erledigt"]
ITEM_TYPES: Final[List[str]] = ["product", "ingredient"]

DOCUMENT_TITLES: Final[Dict[str, str]] = {
    "packliste": "Packliste",
    "einkaufen": "Einkaufsliste",
    "bestellung": "Bestellung",
}

# Category order of the Packliste; other categories follow alphabetically, uncategorized products last
PACKLISTE_CATEGORIES: Final[List[str]] = [
    "Essen", "Getränke Pet", "Getränke Glas", "Getränke Spezial", "Equipment", "Kassa",
]
UNCATEGORIZED: Final[str] = "Sonstige"

FOODTRUCK_NAMES: Final[Dict[str, str]] = {
    "ft1": "Foodtruck 1",
    "ft2": "Foodtruck 2",
    "ft3": "Foodtruck 3",
    "main": "Hauptküche",
    "storage": "Lager",
    "mobile": "Mobil",
}
