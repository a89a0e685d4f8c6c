"""JSON helpers shared by the Flask controllers."""

from __future__ import annotations

import hmac
import logging
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.constants import UNKNOWN_IP
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    StoreFailure,
    ValidationError,
    WindowViolation,
)

logger = logging.getLogger(__name__)


def ok(data: Optional[dict] = None, **extra):
    payload = {"success": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload)


def fail(message: str, status: int, **extra):
    payload = {"success": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status


def json_api(view):
    """Translate domain errors into `{"success": false, "error": ...}` responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except AuthenticationError:
            return fail("Unauthorized", 401)
        except AuthorizationError as e:
            return fail(str(e) or "Forbidden", 403)
        except WindowViolation as e:
            return fail(str(e), 400, reason=e.reason.value, window_start=e.window_start, window_end=e.window_end)
        except ValidationError as e:
            return fail(str(e), 400)
        except StoreFailure:
            # Storage details stay in the log.
            logger.exception("store failure in %s", request.path)
            return fail("Could not save attendance, please try again", 500)
        except Exception:
            logger.exception("unexpected error in %s", request.path)
            return fail("Internal server error", 500)

    return wrapper


def current_user_id() -> Optional[int]:
    user_id = session.get("user_id")
    return int(user_id) if user_id is not None else None


def require_admin(cron_secret: Optional[str] = None) -> None:
    """Admin session, or `Authorization: Bearer <cron_secret>` for the scheduler."""
    if cron_secret:
        header = request.headers.get("Authorization", "")
        if header.startswith("Bearer ") and hmac.compare_digest(header[len("Bearer "):], cron_secret):
            return

    if current_user_id() is None:
        raise AuthenticationError("Unauthorized")
    if session.get("role") != Role.ADMIN.value:
        raise AuthorizationError("Admin access required")


def client_ip() -> str:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    return request.headers.get("X-Real-IP") or request.remote_addr or UNKNOWN_IP
