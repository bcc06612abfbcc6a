from __future__ import annotations

import logging

from typing import Any, Callable, Optional, Sequence, TypeVar

from ._errors import MiddlewareError
from ._store import Dispatch, GetState, Store


__all__ = (
    "Middleware",

    "apply_middleware",
)


A = TypeVar("A")
S = TypeVar("S")


logger = logging.getLogger(__name__)


Middleware = Callable[[Store[S, A]], Callable[[Dispatch[A]], Dispatch[A]]]


def _middleware_name(middleware: Any) -> str:
    return getattr(middleware, "__qualname__", None) or repr(middleware)


def apply_middleware(
    middleware: Sequence[Middleware],
    get_state: GetState[S],
    dispatch: Dispatch[A]
) -> Dispatch[A]:
    composed: Optional[Dispatch[A]] = None

    def dispatch_from_top(action: A) -> Any:
        if composed is None:
            raise MiddlewareError(
                "Cannot dispatch while the middleware chain is being composed"
            )

        return composed(action)

    store: Store[S, A] = Store(get_state=get_state, dispatch=dispatch_from_top)

    enhanced_dispatch = dispatch

    for index in reversed(range(len(middleware))):
        current = middleware[index]

        if not callable(current):
            raise MiddlewareError(
                f"Middleware at index {index} is not callable: {current!r}"
            )

        wrap = current(store)

        if not callable(wrap):
            raise MiddlewareError(
                f"Middleware at index {index} ({_middleware_name(current)}) "
                f"must return a callable taking next, got {wrap!r}"
            )

        enhanced_dispatch = wrap(enhanced_dispatch)

        if not callable(enhanced_dispatch):
            raise MiddlewareError(
                f"Middleware at index {index} ({_middleware_name(current)}) "
                f"must return a dispatch callable, got {enhanced_dispatch!r}"
            )

    logger.debug("Composed dispatch from %d middleware", len(middleware))

    composed = enhanced_dispatch

    return composed
