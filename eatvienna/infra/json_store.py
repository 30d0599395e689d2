"""JSON file helpers shared by the repositories."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def load_json(path, default):
    """Read a JSON file; missing or unreadable files yield `default` with a logged cause."""
    path = Path(path)
    if not path.exists():
        logger.warning("Data file not found: %s. Using empty data.", path)
        return default
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", path, e)
        return default
    except OSError as e:
        logger.error("Error reading %s: %s", path, e)
        return default
    if not isinstance(data, type(default)):
        logger.error("Unexpected data shape in %s: %s", path, type(data).__name__)
        return default
    return data


def atomic_write_json(path, data) -> None:
    """Write JSON through a temp file in the same directory, then move it into place."""
    path = Path(path)
    os.makedirs(path.parent, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.stem}_", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, str(path))
    finally:
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                logger.warning("Could not remove temp file %s", tmp_path)
