"""HookRegistry - persistent and one-shot listeners keyed by state."""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any

from fsm_control.types import Hook

logger = logging.getLogger(__name__)


class HookRegistry:
    """Persistent and one-shot hook lists keyed by state name."""

    def __init__(self) -> None:
        self._on: dict[str, list[Hook]] = {}
        self._once: dict[str, list[Hook]] = {}
        self._tasks: set[asyncio.Future[Any]] = set()

    def add(self, state: str, fn: Hook) -> None:
        self._on.setdefault(state, []).append(fn)

    def add_once(self, state: str, fn: Hook) -> None:
        self._once.setdefault(state, []).append(fn)

    def remove(self, state: str, fn: Hook) -> None:
        for registry in (self._on, self._once):
            fns = registry.get(state)
            if fns:
                try:
                    fns.remove(fn)
                except ValueError:
                    pass

    def clear(self, state: str | None = None) -> None:
        if state is None:
            self._on.clear()
            self._once.clear()
        else:
            self._on.pop(state, None)
            self._once.pop(state, None)

    def listeners(self, state: str) -> tuple[list[Hook], list[Hook]]:
        return list(self._on.get(state, ())), list(self._once.get(state, ()))

    def dispatch(self, state: str, args: tuple[Any, ...]) -> None:
        """Fire hooks for ``state``: persistent ones first, then drain one-shots.

        Hook results are not awaited. Only the one-shots registered when
        the dispatch starts fire; each is removed from the live list just
        before it runs, so ``off`` and ``clear`` called by a firing hook
        still apply to the ones after it, and ``once`` registrations made
        during the dispatch wait for the next entry.
        """
        for fn in list(self._on.get(state, ())):
            self._forget(fn(*args), state)

        for fn in list(self._once.get(state, ())):
            live = self._once.get(state)
            if not live:
                break
            try:
                live.remove(fn)
            except ValueError:
                continue
            self._forget(fn(*args), state)

        if not self._once.get(state, True):
            del self._once[state]

    def _forget(self, result: Any, state: str) -> None:
        if not inspect.isawaitable(result):
            return
        task = asyncio.ensure_future(result)
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._reap(t, state))

    def _reap(self, task: asyncio.Future[Any], state: str) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Hook for state %r failed", state, exc_info=exc)
