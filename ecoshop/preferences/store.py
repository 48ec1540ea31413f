from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from .state import Preference, PreferenceState

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_states: dict[str, PreferenceState] = {}


def get_state(user_id: str) -> PreferenceState:
    return _states.get(user_id, PreferenceState())


def set_preference(user_id: str, product_id: str, preference: Preference) -> PreferenceState:
    with _lock:
        state = _states.get(user_id, PreferenceState()).set_preference(product_id, preference)
        _states[user_id] = state
    logger.info(
        "Preference updated",
        extra={"user_id": user_id, "product_id": product_id, "preference": preference.value},
    )
    return state


def set_categories(user_id: str, categories: Iterable[str]) -> PreferenceState:
    with _lock:
        state = _states.get(user_id, PreferenceState()).with_categories(categories)
        _states[user_id] = state
    return state


def clear_preferences() -> None:
    with _lock:
        _states.clear()
