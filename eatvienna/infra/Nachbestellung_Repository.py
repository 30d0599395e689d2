"""Nachbestellung store (JSON file persistence)."""
import logging
from typing import List, Optional

from eatvienna.domain.Nachbestellung import Nachbestellung, NachbestellungItem
from eatvienna.infra import paths
from eatvienna.infra.json_store import load_json, atomic_write_json

logger = logging.getLogger(__name__)


class NachbestellungRepository:
    def __init__(self, store_file=None):
        self.store_file = store_file or paths.NACHBESTELLUNGEN_FILE

    def _load_all(self) -> List[Nachbestellung]:
        result = []
        for entry in load_json(self.store_file, []):
            try:
                result.append(Nachbestellung.from_dict(entry))
            except (ValueError, TypeError) as e:
                logger.error("Skipping invalid Nachbestellung record %s: %s", entry.get("id"), e)
        return result

    def _save_all(self, reorders: List[Nachbestellung]) -> None:
        atomic_write_json(self.store_file, [r.to_dict() for r in reorders])

    def create(self, reorder: Nachbestellung) -> Nachbestellung:
        '''Assigns ids to the reorder and its items and persists it.'''
        reorders = self._load_all()
        reorder.id = max((r.id for r in reorders), default=0) + 1
        next_item_id = max((i.id for r in reorders for i in r.items), default=0) + 1
        for item in reorder.items:
            item.id = next_item_id
            next_item_id += 1
        reorders.append(reorder)
        self._save_all(reorders)
        logger.info("Created Nachbestellung #%s for event #%s with %d items",
                    reorder.id, reorder.event_id, reorder.total_items)
        return reorder

    def list_reorders(self, created_by: Optional[str] = None) -> List[Nachbestellung]:
        """Newest first, optionally only those created by one user."""
        reorders = self._load_all()
        if created_by:
            reorders = [r for r in reorders if r.created_by == created_by]
        reorders.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return reorders

    def get(self, reorder_id: int) -> Optional[Nachbestellung]:
        for r in self._load_all():
            if r.id == reorder_id:
                return r
        return None

    def update_status(self, reorder_id: int, status: str, user: str = "") -> Optional[Nachbestellung]:
        reorders = self._load_all()
        for r in reorders:
            if r.id == reorder_id:
                r.set_status(status, user)
                self._save_all(reorders)
                logger.info("Nachbestellung #%s -> %s", reorder_id, status)
                return r
        return None

    def update_item(self, item_id: int, *, status: Optional[str] = None,
                    is_packed: Optional[bool] = None) -> Optional[NachbestellungItem]:
        reorders = self._load_all()
        for r in reorders:
            item = r.get_item(item_id)
            if item is None:
                continue
            if status is not None:
                item.set_status(status)
            if is_packed is not None:
                item.is_packed = is_packed
            self._save_all(reorders)
            return item
        return None

    def delete(self, reorder_id: int) -> bool:
        reorders = self._load_all()
        remaining = [r for r in reorders if r.id != reorder_id]
        if len(remaining) == len(reorders):
            return False
        self._save_all(remaining)
        logger.info("Deleted Nachbestellung #%s", reorder_id)
        return True
