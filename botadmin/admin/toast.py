"""One-shot status messages carried in the session between a POST and the next rendered page."""

from collections.abc import MutableMapping
from typing import Any

from pydantic import ValidationError

from botadmin.models import Toast
from botadmin.utils.logger import get_logger

logger = get_logger("botadmin.admin.toast")

TOAST_KEY = "toast"


def set_toast(session: MutableMapping[str, Any], type_: str, msg: str) -> Toast:
    """Store the pending toast, replacing any previous one."""
    toast = Toast(type=type_, msg=msg)
    session[TOAST_KEY] = toast.model_dump()
    return toast


def consume_toast(session: MutableMapping[str, Any]) -> Toast | None:
    """Return the pending toast and clear it. A second call returns None."""
    raw = session.pop(TOAST_KEY, None)
    if raw is None:
        return None
    try:
        return Toast.model_validate(raw)
    except ValidationError as e:
        logger.warning("toast.invalid_payload", error=str(e))
        return None
