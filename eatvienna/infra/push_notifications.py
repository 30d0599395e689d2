"""Web Push notification sender.

Notifications are encrypted and VAPID-signed with pywebpush and posted to
each subscription's push service endpoint. Sending is fire-and-forget:
failures are logged and never raised to the caller. Subscriptions the push
service reports as gone (404/410) are deactivated.
"""
import json
import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

from pywebpush import webpush, WebPushException

from eatvienna.infra import paths
from eatvienna.infra.json_store import load_json, atomic_write_json
from eatvienna.utilities import config

logger = logging.getLogger(__name__)

DEFAULT_URL = "/app/nachbestellungen"
DEFAULT_ICON = "/icon-192x192.png"
GONE_STATUS_CODES = (404, 410)


class SubscriptionRepository:
    def __init__(self, store_file=None):
        self.store_file = store_file or paths.PUSH_SUBSCRIPTIONS_FILE

    def list_active(self, user_emails: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        subs = [s for s in load_json(self.store_file, []) if s.get("active", True)]
        if user_emails is not None:
            wanted = set(user_emails)
            subs = [s for s in subs if s.get("user_email") in wanted]
        return subs

    def subscribe(self, user_email: str, endpoint: str, p256dh: str, auth: str) -> Dict[str, Any]:
        '''Registers (or re-activates) the subscription for this endpoint.'''
        subs = load_json(self.store_file, [])
        for s in subs:
            if s.get("endpoint") == endpoint:
                s.update({"user_email": user_email, "p256dh": p256dh, "auth": auth, "active": True})
                atomic_write_json(self.store_file, subs)
                return s
        sub = {
            "id": max((int(s.get("id") or 0) for s in subs), default=0) + 1,
            "user_email": user_email,
            "endpoint": endpoint,
            "p256dh": p256dh,
            "auth": auth,
            "active": True,
        }
        subs.append(sub)
        atomic_write_json(self.store_file, subs)
        logger.info("Push subscription added for %s", user_email)
        return sub

    def deactivate(self, endpoint: str) -> bool:
        subs = load_json(self.store_file, [])
        changed = False
        for s in subs:
            if s.get("endpoint") == endpoint and s.get("active", True):
                s["active"] = False
                changed = True
        if changed:
            atomic_write_json(self.store_file, subs)
        return changed


def build_payload(title: str, message: str, url: Optional[str] = None, icon: Optional[str] = None) -> Dict[str, Any]:
    return {
        "title": title,
        "message": message,
        "url": url or DEFAULT_URL,
        "icon": icon or DEFAULT_ICON,
        "badge": DEFAULT_ICON,
        "timestamp": int(time.time() * 1000),
    }


class PushSender:
    def __init__(self, vapid_private_key: Optional[str] = None,
                 subscriptions: Optional[SubscriptionRepository] = None,
                 vapid_subject: Optional[str] = None, timeout: Optional[float] = None,
                 send_func: Optional[Callable[..., Any]] = None):
        self.vapid_private_key = config.VAPID_PRIVATE_KEY if vapid_private_key is None else vapid_private_key
        self.vapid_subject = vapid_subject or config.VAPID_SUBJECT
        self.subscriptions = subscriptions or SubscriptionRepository()
        self.timeout = config.PUSH_TIMEOUT if timeout is None else timeout
        self._webpush = send_func or webpush

    def _send_one(self, sub: Dict[str, Any], data: str) -> bool:
        subscription_info = {
            "endpoint": sub.get("endpoint"),
            "keys": {"p256dh": sub.get("p256dh"), "auth": sub.get("auth")},
        }
        try:
            # pywebpush adds aud/exp to the claims dict, so every call gets its own
            self._webpush(
                subscription_info=subscription_info,
                data=data,
                vapid_private_key=self.vapid_private_key,
                vapid_claims={"sub": self.vapid_subject},
                timeout=self.timeout,
            )
        except WebPushException as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("Push to %s failed with status %s: %s", sub.get("user_email"), status, e)
            if status in GONE_STATUS_CODES:
                self.subscriptions.deactivate(sub.get("endpoint"))
                logger.info("Deactivated expired push subscription of %s", sub.get("user_email"))
            return False
        except (OSError, ValueError) as e:
            # connection errors from requests are OSErrors, malformed keys are ValueErrors
            logger.error("Push to %s failed: %s", sub.get("user_email"), e)
            return False
        logger.info("Notification sent to %s", sub.get("user_email"))
        return True

    def send(self, payload: Dict[str, Any], user_emails: Optional[Iterable[str]] = None) -> int:
        """Send to all active subscriptions (optionally only these users); returns the number delivered."""
        if not self.vapid_private_key:
            logger.info("VAPID_PRIVATE_KEY not configured; notification %r not sent", payload.get("title"))
            return 0
        recipients = list(user_emails) if user_emails is not None else None
        subs = self.subscriptions.list_active(recipients)
        if not subs:
            logger.info("No push subscriptions found for %s", recipients or "anyone")
            return 0
        data = json.dumps(payload, ensure_ascii=False)
        return sum(self._send_one(s, data) for s in subs)

    def send_to_admins(self, payload: Dict[str, Any]) -> int:
        return self.send(payload, config.PUSH_ADMIN_RECIPIENTS)
