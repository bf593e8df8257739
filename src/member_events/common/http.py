from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.exceptions import DomainError, NotFoundError, PersistenceFailure

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal Server Error"


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, PersistenceFailure):
        return 500
    return 400


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Access Denied. Please log in.", 401)
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Turn domain errors into JSON error responses; hide anything unexpected."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except PersistenceFailure:
            logger.exception("persistence failure in %s %s", request.method, request.path)
            return fail(INTERNAL_ERROR, 500)
        except DomainError as e:
            return fail(str(e), status_for(e))
        except Exception:
            logger.exception("unhandled error in %s %s", request.method, request.path)
            return fail(INTERNAL_ERROR, 500)

    return wrapper


def api_view(view):
    """Login check plus JSON error mapping, the stack every data endpoint uses."""
    return login_required(json_errors(view))


def request_data() -> dict:
    """JSON body, or form fields for multipart uploads."""
    if request.is_json:
        return dict(request.get_json(silent=True) or {})
    return request.form.to_dict()
