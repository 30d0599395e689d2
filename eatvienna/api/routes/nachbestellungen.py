import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query

from eatvienna.events.event_helpers import publish_nachbestellung_created, publish_status_changed
from eatvienna.infra.Event_Repository import EventRepository
from eatvienna.infra.Nachbestellung_Repository import NachbestellungRepository
from eatvienna.infra.Recipe_Repository import RecipeRepository
from eatvienna.logic.reorder.builder import build_nachbestellung
from eatvienna.utilities.validators import NachbestellungInput, StatusInput, ItemUpdateInput

router = APIRouter(prefix="/api/nachbestellungen", tags=["nachbestellungen"])
logger = logging.getLogger(__name__)


@router.get("")
def list_nachbestellungen(created_by: Optional[str] = Query(default=None)):
    reorders = NachbestellungRepository().list_reorders(created_by)
    return {"count": len(reorders), "nachbestellungen": [r.to_dict(with_items=False) for r in reorders]}


@router.post("")
def create_nachbestellung(payload: NachbestellungInput, background_tasks: BackgroundTasks):
    event = EventRepository().get_event(payload.event_id)
    if event is None:
        raise HTTPException(status_code=404, detail=f"Event {payload.event_id} not found")
    reorder = build_nachbestellung(
        event.id, event.name,
        [p.model_dump() for p in payload.products],
        [i.model_dump() for i in payload.ingredients],
        notes=payload.notes,
        created_by=payload.created_by,
        packaging=RecipeRepository().get_packaging(),
    )
    if not reorder.items:
        raise HTTPException(status_code=400, detail="No item with a quantity above 0")
    reorder = NachbestellungRepository().create(reorder)
    publish_nachbestellung_created(reorder, background_tasks)
    return reorder.to_dict()


@router.get("/{reorder_id}")
def get_nachbestellung(reorder_id: int):
    reorder = NachbestellungRepository().get(reorder_id)
    if reorder is None:
        raise HTTPException(status_code=404, detail=f"Nachbestellung {reorder_id} not found")
    return reorder.to_dict()


@router.put("/{reorder_id}/status")
def update_status(reorder_id: int, payload: StatusInput):
    reorder = NachbestellungRepository().update_status(reorder_id, payload.status, payload.user)
    if reorder is None:
        raise HTTPException(status_code=404, detail=f"Nachbestellung {reorder_id} not found")
    publish_status_changed(reorder, payload.status)
    return reorder.to_dict()


@router.put("/items/{item_id}")
def update_item(item_id: int, payload: ItemUpdateInput):
    item = NachbestellungRepository().update_item(item_id, status=payload.status, is_packed=payload.is_packed)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
    return item.to_dict()


@router.delete("/{reorder_id}")
def delete_nachbestellung(reorder_id: int):
    if not NachbestellungRepository().delete(reorder_id):
        raise HTTPException(status_code=404, detail=f"Nachbestellung {reorder_id} not found")
    return {"status": "success"}
