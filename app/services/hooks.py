"""Registry of named WordPress actions and their subscribers."""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class HookBus:
    """
    Dispatches hook firings to subscribed callbacks, in subscription order.

    Callbacks run synchronously; an exception raised by one of them
    propagates to the caller of ``do_action``.
    """

    def __init__(self):
        self._actions: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def add_action(self, hook: str, callback: Callable[..., Any]) -> None:
        self._actions[hook].append(callback)

    def has_action(self, hook: str) -> bool:
        return bool(self._actions.get(hook))

    def do_action(self, hook: str, *args: Any) -> None:
        callbacks = self._actions.get(hook)
        if not callbacks:
            logger.debug(f"do_action {hook}: no subscribers")
            return

        logger.debug(f"do_action {hook} ({len(callbacks)} subscribers)")
        for callback in callbacks:
            callback(*args)
