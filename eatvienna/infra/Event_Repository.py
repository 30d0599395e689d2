"""Event store: events with their selected products (JSON file persistence)."""
import logging
from datetime import datetime
from typing import List, Optional

from eatvienna.domain.Event import Event, EventDetails
from eatvienna.domain.Selection import Selection, QuantityWrite, SelectedProduct
from eatvienna.infra import paths
from eatvienna.infra.json_store import load_json, atomic_write_json

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class EventRepository:
    def __init__(self, events_file=None):
        self.events_file = events_file or paths.EVENTS_FILE

    # --- raw store -----------------------------------------------------------
    def _load(self) -> List[dict]:
        return load_json(self.events_file, [])

    def _save(self, raw: List[dict]) -> None:
        atomic_write_json(self.events_file, raw)

    def _find_index(self, raw: List[dict], event_id: int) -> int:
        for i, entry in enumerate(raw):
            if int(entry.get("id") or 0) == event_id:
                return i
        return -1

    # --- queries -------------------------------------------------------------
    def list_events(self) -> List[Event]:
        """All events ordered by date (undated events last)."""
        events = [Event.from_dict(e) for e in self._load()]
        events.sort(key=lambda e: e.sort_key())
        return events

    def get_event(self, event_id: int) -> Optional[Event]:
        raw = self._load()
        idx = self._find_index(raw, event_id)
        return Event.from_dict(raw[idx]) if idx >= 0 else None

    # --- writes --------------------------------------------------------------
    def create_event(self, details: EventDetails, products: Optional[Selection] = None,
                     ingredients: Optional[Selection] = None) -> Event:
        raw = self._load()
        next_id = max((int(e.get("id") or 0) for e in raw), default=0) + 1
        ts = _now()
        event = Event(id=next_id, details=details, products=products, ingredients=ingredients,
                      created_at=ts, updated_at=ts)
        raw.append(event.to_dict())
        self._save(raw)
        logger.info("Created event #%s %r", event.id, event.name)
        return event

    def update_event(self, event: Event) -> Optional[Event]:
        raw = self._load()
        idx = self._find_index(raw, event.id)
        if idx < 0:
            logger.warning("Cannot update unknown event #%s", event.id)
            return None
        event.updated_at = _now()
        raw[idx] = event.to_dict()
        self._save(raw)
        return event

    def delete_event(self, event_id: int) -> bool:
        raw = self._load()
        idx = self._find_index(raw, event_id)
        if idx < 0:
            return False
        del raw[idx]
        self._save(raw)
        logger.info("Deleted event #%s", event_id)
        return True

    def _update_field(self, event_id: int, **fields) -> Optional[Event]:
        event = self.get_event(event_id)
        if event is None:
            return None
        for key, value in fields.items():
            setattr(event, key, value)
        return self.update_event(event)

    def set_print_ready(self, event_id: int, is_ready: bool) -> Optional[Event]:
        return self._update_field(event_id, print=is_ready)

    def set_finished(self, event_id: int, is_finished: bool) -> Optional[Event]:
        return self._update_field(event_id, finished=is_finished)

    def set_notes(self, event_id: int, notes: str) -> Optional[Event]:
        return self._update_field(event_id, notes=notes)

    # --- selected products ---------------------------------------------------
    def get_products(self, event_id: int) -> Selection:
        """Selected products of an event; unknown events yield an empty selection."""
        event = self.get_event(event_id)
        if event is None:
            logger.warning("Products requested for unknown event #%s", event_id)
            return Selection()
        return event.products

    def save_products(self, event_id: int, products: Selection,
                      ingredients: Optional[Selection] = None) -> Optional[Event]:
        fields = {"products": products}
        if ingredients is not None:
            fields["ingredients"] = ingredients
        return self._update_field(event_id, **fields)

    def apply_write(self, event_id: int, name: str, write: QuantityWrite, unit: str = "",
                    target: str = "products") -> Optional[SelectedProduct]:
        """Apply an ADD/SET write to one product (or manual ingredient) of the event and persist it.

        Raises:
            KeyError: unknown event.
            ValueError: unknown target.
        """
        if target not in ("products", "ingredients"):
            raise ValueError(f"Unknown selection target: {target}")
        event = self.get_event(event_id)
        if event is None:
            raise KeyError(event_id)
        entry = getattr(event, target).apply(name, write, unit)
        self.update_event(event)
        logger.info("Event #%s %s: %s %s -> %s", event_id, target, name, write,
                    entry.quantity if entry else "removed")
        return entry
