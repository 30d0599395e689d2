import logging
from typing import Dict, Optional, Tuple

from fastapi import APIRouter, HTTPException, Query, Response, UploadFile, File

from eatvienna.domain.Event import Event
from eatvienna.infra.Event_Repository import EventRepository
from eatvienna.infra.Recipe_Repository import RecipeRepository
from eatvienna.infra.excel_utils import import_excel, generate_excel, ExcelImportError
from eatvienna.infra.Product_Repository import ProductRepository
from eatvienna.infra.pdf_utils import generate_pdf
from eatvienna.domain.Selection import QuantityWrite, Selection
from eatvienna.logic.ingredients.calculator import calculate_ingredients, IngredientCalculation
from eatvienna.logic.reporting.formatting import export_filename
from eatvienna.utilities.validators import (
    EventInput, FlagInput, NotesInput, SelectionInput, QuantityWriteInput
)
from eatvienna.utilities.constants import INGREDIENTS_CATEGORY

router = APIRouter(prefix="/api", tags=["events"])
logger = logging.getLogger(__name__)

MODE_PATTERN = r'^(packliste|einkaufen|bestellung)$'
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _get_event_or_404(repo: EventRepository, event_id: int) -> Event:
    event = repo.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail=f"Event {event_id} not found")
    return event


def calculate_for_event(event: Event) -> IngredientCalculation:
    repo = RecipeRepository()
    return calculate_ingredients(event.products, repo.get_recipes(), repo.get_packaging(), event.ingredients)


def _listed_products(event: Event) -> Tuple[Selection, Dict[str, str]]:
    # manual ingredient entries are listed among the products in their own category
    listed = Selection(event.products.items)
    listed.items.update(event.ingredients.items)
    categories = ProductRepository().product_categories()
    categories.update((name, INGREDIENTS_CATEGORY) for name in event.ingredients.items)
    return listed, categories


# -------------------- Events --------------------
@router.get("/events")
def list_events(finished: Optional[bool] = Query(default=None)):
    events = EventRepository().list_events()
    if finished is not None:
        events = [e for e in events if e.finished == finished]
    return {"count": len(events), "events": [e.to_dict() for e in events]}


@router.post("/events")
def create_event(payload: EventInput):
    repo = EventRepository()
    event = repo.create_event(payload.to_details())
    if payload.notes:
        event = repo.set_notes(event.id, payload.notes)
    return event.to_dict()


@router.get("/events/{event_id}")
def get_event(event_id: int):
    return _get_event_or_404(EventRepository(), event_id).to_dict()


@router.put("/events/{event_id}")
def update_event(event_id: int, payload: EventInput):
    repo = EventRepository()
    event = _get_event_or_404(repo, event_id)
    event.details = payload.to_details()
    if payload.notes is not None:
        event.notes = payload.notes
    return repo.update_event(event).to_dict()


@router.delete("/events/{event_id}")
def delete_event(event_id: int):
    if not EventRepository().delete_event(event_id):
        raise HTTPException(status_code=404, detail=f"Event {event_id} not found")
    return {"status": "success"}


@router.put("/events/{event_id}/print")
def set_print_ready(event_id: int, payload: FlagInput):
    event = EventRepository().set_print_ready(event_id, payload.value)
    if event is None:
        raise HTTPException(status_code=404, detail=f"Event {event_id} not found")
    return event.to_dict()


@router.put("/events/{event_id}/finished")
def set_finished(event_id: int, payload: FlagInput):
    event = EventRepository().set_finished(event_id, payload.value)
    if event is None:
        raise HTTPException(status_code=404, detail=f"Event {event_id} not found")
    return event.to_dict()


@router.put("/events/{event_id}/notes")
def set_notes(event_id: int, payload: NotesInput):
    event = EventRepository().set_notes(event_id, payload.notes)
    if event is None:
        raise HTTPException(status_code=404, detail=f"Event {event_id} not found")
    return event.to_dict()


# -------------------- Selected products --------------------
@router.get("/events/{event_id}/products")
def get_products(event_id: int):
    event = _get_event_or_404(EventRepository(), event_id)
    return {"products": event.products.to_dict(), "ingredients": event.ingredients.to_dict()}


@router.put("/events/{event_id}/products")
def save_products(event_id: int, payload: SelectionInput):
    repo = EventRepository()
    _get_event_or_404(repo, event_id)
    event = repo.save_products(event_id, payload.products_selection(), payload.ingredients_selection())
    logger.info("Saved Packliste of event #%s: %d products, %d manual ingredients",
                event_id, len(event.products), len(event.ingredients))
    return {"products": event.products.to_dict(), "ingredients": event.ingredients.to_dict()}


@router.post("/events/{event_id}/products/write")
def write_product(event_id: int, payload: QuantityWriteInput):
    """Apply ADD ("add N more") or SET ("set to exactly N") to one entry."""
    repo = EventRepository()
    _get_event_or_404(repo, event_id)
    entry = repo.apply_write(event_id, payload.name, QuantityWrite(payload.kind, payload.amount),
                             payload.unit, payload.target)
    return {
        "name": payload.name,
        "target": payload.target,
        "removed": entry is None,
        "entry": entry.to_dict() if entry else None,
    }


@router.get("/events/{event_id}/packliste")
def get_packliste(event_id: int):
    event = _get_event_or_404(EventRepository(), event_id)
    result = calculate_for_event(event)
    data = result.to_dict()
    data.update({"event": event.to_dict()})
    return data


# -------------------- Exports --------------------
@router.get("/events/{event_id}/pdf")
def export_pdf(event_id: int, mode: str = Query(default="packliste", pattern=MODE_PATTERN)):
    event = _get_event_or_404(EventRepository(), event_id)
    listed, categories = _listed_products(event)
    pdf_bytes = generate_pdf(listed, calculate_for_event(event), event.details, mode, categories, event.notes)
    filename = export_filename(event.details, mode, "pdf")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/events/{event_id}/excel")
def export_excel(event_id: int, mode: str = Query(default="packliste", pattern=MODE_PATTERN)):
    event = _get_event_or_404(EventRepository(), event_id)
    listed, categories = _listed_products(event)
    data = generate_excel(listed, calculate_for_event(event), event.details, mode, categories)
    filename = export_filename(event.details, mode, "xlsx")
    return Response(
        content=data,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# -------------------- Import --------------------
@router.post("/import/excel")
async def import_excel_file(file: UploadFile = File(...), create: bool = Query(default=False)):
    """Parse an uploaded Packliste; with create=true the event is stored as well."""
    content = await file.read()
    try:
        result = import_excel(content)
    except ExcelImportError as e:
        logger.warning("Excel import of %r rejected: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=str(e))
    data = result.to_dict()
    if create:
        event = EventRepository().create_event(result.details, result.products, result.ingredients)
        data["event"] = event.to_dict()
    return data


__all__ = ["router", "calculate_for_event"]
