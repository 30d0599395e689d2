"""Push observers for Nachbestellung events.

Subscribes to the GLOBAL_EVENT_BUS for nachbestellung.created and sends a
push notification to the admin recipients. Delivery runs after the response:
on the request's BackgroundTasks when the publisher passes them, otherwise on
a daemon thread. Every notification is also kept in a small in-memory ring
buffer that the web layer can poll (since=<last_id_seen>).
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any, Optional
from threading import Lock, Thread
from datetime import datetime, timezone

from .Event_Bus import GLOBAL_EVENT_BUS, NACHBESTELLUNG_CREATED, NACHBESTELLUNG_STATUS_CHANGED
from eatvienna.infra.push_notifications import PushSender, build_payload

logger = logging.getLogger(__name__)

_lock = Lock()
_notifications: List[Dict[str, Any]] = []
_next_id = 1
MAX_NOTIFICATIONS = 300
_started = False
_sender: Optional[PushSender] = None

STATUS_LABELS = {
    "offen": "offen",
    "in_bearbeitung": "in Bearbeitung",
    "abgeschlossen": "abgeschlossen",
    "storniert": "storniert",
}


def _get_sender() -> PushSender:
    global _sender
    if _sender is None:
        _sender = PushSender()
    return _sender


def set_sender(sender: Optional[PushSender]):
    """Replace the sender (None restores the configured default on next use)."""
    global _sender
    _sender = sender


def _record(event_name: str, payload: Dict[str, Any], delivered: int):
    global _next_id
    with _lock:
        _notifications.append({
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
            'title': payload.get('title', ''),
            'message': payload.get('message', ''),
            'url': payload.get('url', ''),
            'delivered': delivered,
        })
        _next_id += 1
        if len(_notifications) > MAX_NOTIFICATIONS:
            del _notifications[: len(_notifications) - MAX_NOTIFICATIONS]


def _deliver_to_admins(event_name: str, notification: Dict[str, Any]):
    try:
        delivered = _get_sender().send_to_admins(notification)
    except Exception:
        logger.exception("Push delivery for %s failed", event_name)
        delivered = 0
    _record(event_name, notification, delivered)


def _schedule(background_tasks, func, *args):
    if background_tasks is not None:
        background_tasks.add_task(func, *args)
    else:
        Thread(target=func, args=args, daemon=True).start()


def _on_created(event_name: str, payload: Any):
    reorder = payload.get('nachbestellung') if isinstance(payload, dict) else None
    if reorder is None:
        return
    notification = build_payload(
        title="Neue Nachbestellung",
        message=f"{reorder.event_name}: {reorder.total_items} Artikel nachbestellt",
        url=f"/app/nachbestellungen/view/{reorder.id}",
    )
    _schedule(payload.get('background_tasks'), _deliver_to_admins, event_name, notification)


def _on_status_changed(event_name: str, payload: Any):
    reorder = payload.get('nachbestellung') if isinstance(payload, dict) else None
    if reorder is None:
        return
    label = STATUS_LABELS.get(payload.get('status'), payload.get('status'))
    notification = build_payload(
        title="Nachbestellung aktualisiert",
        message=f"{reorder.event_name}: Status {label}",
        url=f"/app/nachbestellungen/view/{reorder.id}",
    )
    # status changes are only listed in the app, not pushed
    _record(event_name, notification, 0)


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(NACHBESTELLUNG_CREATED, _on_created)
    GLOBAL_EVENT_BUS.subscribe(NACHBESTELLUNG_STATUS_CHANGED, _on_status_changed)
    _started = True
    logger.debug("Push observers subscribed")


def get_notifications(since: int | None = None) -> Dict[str, Any]:
    """Return notifications newer than 'since' (exclusive) plus next_cursor for polling."""
    with _lock:
        if since is None:
            data = list(_notifications)
        else:
            data = [n for n in _notifications if n['id'] > since]
        next_cursor = _notifications[-1]['id'] if _notifications else since or 0
    return {'notifications': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_notifications', 'set_sender']
