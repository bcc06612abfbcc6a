from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, TypeVar

from ._host import Host
from ._middleware import Middleware, apply_middleware
from ._reducer import Initializer, ReducerLike
from ._store import Dispatch


__all__ = (
    "use_reducest",
)


A = TypeVar("A")
I = TypeVar("I")  # noqa: E741
S = TypeVar("S")


_UNSET: Any = object()


def _identity(value: Any) -> Any:
    return value


def use_reducest(
    host: Host,
    reducer: ReducerLike[S, A],
    initializer_arg: I,
    initializer: Optional[Initializer[I, S]] = None,
    middleware: Sequence[Middleware] = ()
) -> tuple[S, Dispatch[A]]:
    """Reducer hook whose dispatch runs through ``middleware`` first.

    Must be called from within a render of ``host``. Returns the current
    state and the composed dispatch, which keeps its identity across
    renders for as long as ``reducer`` and every middleware do.
    """
    middleware = tuple(middleware)

    state_ref = host.use_ref(_UNSET)

    if state_ref.current is _UNSET:
        init = initializer if initializer is not None else _identity
        state_ref.current = init(initializer_arg)

    _, set_state = host.use_state(state_ref.current)

    def update_state(action: A) -> A:
        state_ref.current = reducer(state_ref.current, action)
        set_state(state_ref.current)

        return action

    base_dispatch: Callable[[A], A] = host.use_callback(update_state, [reducer])

    def get_state() -> S:
        return state_ref.current

    dispatch: Dispatch[A] = host.use_memo(
        lambda: apply_middleware(middleware, get_state, base_dispatch),
        [base_dispatch, *middleware]
    )

    return state_ref.current, dispatch
