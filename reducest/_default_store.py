from __future__ import annotations

from typing import Any, Callable, Generic, Optional, Sequence, TypeVar

from ._host import Component, Unsubscribe
from ._middleware import Middleware
from ._reducer import Initializer, ReducerLike
from ._reducest import use_reducest
from ._store import Dispatch


__all__ = (
    "ReducestStore",
    "Subscriber",

    "create_store",
)


A = TypeVar("A")
S = TypeVar("S")


Subscriber = Callable[[S], None]


class ReducestStore(Generic[S, A]):
    _reducer: ReducerLike[S, A]
    _initializer_arg: Any
    _initializer: Optional[Initializer[Any, S]]
    _middleware: tuple[Middleware, ...]

    _subscribers: list[Subscriber[S]]

    _component: Component[tuple[S, Dispatch[A]]]

    def __init__(
        self,
        reducer: ReducerLike[S, A],
        initializer_arg: Any,
        initializer: Optional[Initializer[Any, S]] = None,
        middleware: Sequence[Middleware] = ()
    ) -> None:
        self._reducer = reducer
        self._initializer_arg = initializer_arg
        self._initializer = initializer
        self._middleware = tuple(middleware)

        self._subscribers = []

        self._component = Component(self._render)
        self._component.subscribe(self._on_update)
        self._component.render()

    def _render(self, host: Component[Any]) -> tuple[S, Dispatch[A]]:
        return use_reducest(
            host,
            self._reducer,
            self._initializer_arg,
            self._initializer,
            self._middleware
        )

    def _on_update(self, component: Component[Any]) -> None:
        state, _ = component.render()
        render_count = component.render_count

        for subscriber in list(self._subscribers):
            # a subscriber dispatched; the nested update already notified
            if component.render_count != render_count:
                break

            subscriber(state)

    def _rerender(self, attribute: str, value: Any) -> None:
        previous = getattr(self, attribute)
        setattr(self, attribute, value)

        try:
            self._component.render()
        except Exception:
            setattr(self, attribute, previous)
            self._component.render()

            raise

    @property
    def state(self) -> S:
        self._component.flush()

        state, _ = self._component.result

        return state

    @property
    def composed_dispatch(self) -> Dispatch[A]:
        _, dispatch = self._component.result

        return dispatch

    def get_state(self) -> S:
        return self.state

    def dispatch(self, action: A) -> Any:
        return self.composed_dispatch(action)

    def subscribe(self, subscriber: Subscriber[S]) -> Unsubscribe:
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def replace_reducer(self, reducer: ReducerLike[S, A]) -> None:
        self._rerender("_reducer", reducer)

    def replace_middleware(self, middleware: Sequence[Middleware]) -> None:
        self._rerender("_middleware", tuple(middleware))


def create_store(
    reducer: ReducerLike[S, A],
    initializer_arg: Any,
    initializer: Optional[Initializer[Any, S]] = None,
    middleware: Sequence[Middleware] = ()
) -> ReducestStore[S, A]:
    return ReducestStore(reducer, initializer_arg, initializer, middleware)
