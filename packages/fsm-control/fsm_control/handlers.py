"""Transition handlers run between a table step and hook dispatch."""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Mapping

from fsm_control.types import WILDCARD, EventData, TransitionHandler


@dataclass(frozen=True)
class SingleHandler:
    """One catch-all handler, called for every transition."""

    fn: TransitionHandler

    async def dispatch(self, event: EventData) -> None:
        result = self.fn(event)
        if inspect.isawaitable(result):
            await result


@dataclass(frozen=True)
class KeyedHandlers:
    """Handlers keyed by destination state, plus an optional ``"*"`` entry.

    Both the wildcard and the destination entry are called before either
    result is awaited.
    """

    handlers: Mapping[str, TransitionHandler]

    async def dispatch(self, event: EventData) -> None:
        pending: list[Any] = []
        try:
            for key in (WILDCARD, event.on):
                fn = self.handlers.get(key)
                if fn is None:
                    continue
                result = fn(event)
                if inspect.isawaitable(result):
                    pending.append(result)
            for result in pending:
                await result
        finally:
            # Coroutines left unawaited after a failure.
            for result in pending:
                if inspect.iscoroutine(result):
                    result.close()


def _noop(event: EventData) -> None:
    return None


def resolve_handler(
    on_transition: TransitionHandler | Mapping[str, TransitionHandler] | None,
) -> SingleHandler | KeyedHandlers:
    """Pick the handler variant for a constructor argument."""
    if on_transition is None:
        return KeyedHandlers({WILDCARD: _noop})
    if isinstance(on_transition, Mapping):
        return KeyedHandlers(dict(on_transition))
    if callable(on_transition):
        return SingleHandler(on_transition)
    raise TypeError(
        f"on_transition must be a callable or a mapping, got {type(on_transition).__name__}"
    )
