from pathlib import Path
from eatvienna.utilities.config import DATA_DIR as _CONFIG_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIG_DATA_DIR).resolve()
RECIPES_FILE = DATA_DIR / 'recipes.json'
PACKAGING_FILE = DATA_DIR / 'packaging.json'
EVENTS_FILE = DATA_DIR / 'events.json'
NACHBESTELLUNGEN_FILE = DATA_DIR / 'nachbestellungen.json'
PUSH_SUBSCRIPTIONS_FILE = DATA_DIR / 'push_subscriptions.json'
PRODUCTS_FILE = DATA_DIR / 'products.json'

__all__ = ['DATA_DIR', 'RECIPES_FILE', 'PACKAGING_FILE', 'EVENTS_FILE', 'NACHBESTELLUNGEN_FILE',
           'PUSH_SUBSCRIPTIONS_FILE', 'PRODUCTS_FILE']
