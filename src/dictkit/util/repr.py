from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def safe_repr(obj: Any) -> str:
    """Like :func:`repr`, but substitutes a placeholder if the object's `__repr__` raises."""

    try:
        return repr(obj)
    except Exception:
        logger.exception(
            "An unhandled exception occurred converting object of type `%s` to string.",
            type(obj).__qualname__,
        )
        return f"<... {type(obj).__qualname__} ...>"
