from fastapi import FastAPI, Query, HTTPException
from typing import Optional
import logging

from eatvienna.domain.Selection import parse_quantity
from eatvienna.events.push_observers import start as start_push_observers, get_notifications
from eatvienna.infra.Recipe_Repository import RecipeRepository
from eatvienna.infra.push_notifications import SubscriptionRepository, PushSender, build_payload
from eatvienna.logic.ingredients.calculator import calculate_ingredients
from eatvienna.logic.reporting.formatting import format_weight, packaging_text
from eatvienna.utilities.validators import CalculationInput, PushSubscriptionInput
from eatvienna.utilities import config

# Routers
from eatvienna.api.routes import recipes, events, nachbestellungen, products

# Logging
logger = logging.getLogger("eatvienna_app")

# Initialize FastAPI app
app = FastAPI(title="I Eat Vienna – Packliste & Nachbestellung API")

# Include routers
app.include_router(recipes.router)
app.include_router(events.router)
app.include_router(nachbestellungen.router)
app.include_router(products.router)


@app.on_event("startup")
def _startup_push_observers():
    """Register event bus subscribers for push notifications when the app starts."""
    start_push_observers()
    logger.info("Push observers for Nachbestellung events started")


@app.get("/api/health")
def health():
    return {"status": "ok"}


# -------------------- API: Calculation (JSON) --------------------
@app.post("/api/calculate")
def api_calculate(payload: CalculationInput):
    """Aggregate ingredients for an ad-hoc selection; nothing is stored."""
    repo = RecipeRepository()
    result = calculate_ingredients(payload.products_selection(), repo.get_recipes(), repo.get_packaging(),
                                   payload.ingredients_selection())
    data = result.to_dict()
    # display strings as shown on the Packliste
    data["rows"] = [
        {"ingredient": name, "total": format_weight(ing.total_amount, ing.unit), "packaging": packaging_text(ing)}
        for name, ing in result.sorted_items()
    ]
    if result.warnings:
        logger.info("Calculation with %d items lacking recipes: %s", len(result.warnings), result.warnings)
    return data


# -------------------- API: Push notifications --------------------
@app.get("/api/notifications")
def api_notifications(since: Optional[str] = Query(default=None)):
    cursor = parse_quantity(since, minimum=0) if since is not None else None
    return get_notifications(cursor)


@app.get("/api/push-notifications/public-key")
def push_public_key():
    """VAPID application server key the browser subscribes with."""
    if not config.VAPID_PUBLIC_KEY:
        raise HTTPException(status_code=404, detail="Push notifications are not configured")
    return {"public_key": config.VAPID_PUBLIC_KEY}


@app.post("/api/push-notifications/subscribe")
def push_subscribe(payload: PushSubscriptionInput):
    sub = SubscriptionRepository().subscribe(payload.user_email, payload.endpoint,
                                             payload.keys.p256dh, payload.keys.auth)
    return {"status": "success", "id": sub["id"]}


@app.post("/api/push-notifications/unsubscribe")
def push_unsubscribe(payload: dict):
    endpoint = payload.get("endpoint")
    if not endpoint:
        raise HTTPException(status_code=400, detail="'endpoint' is required")
    return {"status": "success", "deactivated": SubscriptionRepository().deactivate(endpoint)}


@app.post("/api/push-notifications/test")
def push_test(payload: dict):
    user_email = payload.get("user_email")
    if not user_email:
        raise HTTPException(status_code=400, detail="'user_email' is required")
    delivered = PushSender().send(
        build_payload("Test-Benachrichtigung", "Push-Benachrichtigungen funktionieren!", url="/app"),
        [user_email],
    )
    return {"status": "success", "delivered": delivered}
