"""Event helper utilities.

Quick import:
    from eatvienna.events.event_helpers import (
        publish_nachbestellung_created, publish_status_changed
    )
"""
from __future__ import annotations
from typing import Any
from .Event_Bus import publish_event, NACHBESTELLUNG_CREATED, NACHBESTELLUNG_STATUS_CHANGED

__all__ = ['publish_nachbestellung_created', 'publish_status_changed']


def publish_nachbestellung_created(nachbestellung: Any, background_tasks: Any = None):
    """Publish a nachbestellung.created event; observers may defer work onto background_tasks."""
    publish_event(NACHBESTELLUNG_CREATED, {'nachbestellung': nachbestellung, 'background_tasks': background_tasks})


def publish_status_changed(nachbestellung: Any, status: str):
    """Publish a nachbestellung.status_changed event."""
    publish_event(NACHBESTELLUNG_STATUS_CHANGED, {
        'nachbestellung': nachbestellung,
        'status': status
    })
