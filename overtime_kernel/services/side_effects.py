"""
Best-effort side effects.

Notifications and activity-log appends follow every state transition but
never decide its outcome.  A failure is logged with its traceback and
reported to the caller as ``False``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from overtime_kernel.logging_config import get_logger

logger = get_logger("services.side_effects")


def best_effort(effect: str, fn: Callable[..., Any] | None, *args: Any, **kwargs: Any) -> bool:
    """Call ``fn`` and swallow any exception.  True when it completed."""
    if fn is None:
        return False
    try:
        fn(*args, **kwargs)
    except Exception:
        logger.warning(
            "side_effect_failed",
            extra={"effect": effect},
            exc_info=True,
        )
        return False
    return True
