from __future__ import annotations

import logging

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Generic,
    Optional,
    Sequence,
    TypeVar
)

from ._errors import HookOrderError, InvalidStateError


__all__ = (
    "Component",
    "Host",
    "Listener",
    "Ref",
    "SetState",
    "Unsubscribe",
)


R = TypeVar("R")
T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


logger = logging.getLogger(__name__)


SetState = Callable[[T], None]
Unsubscribe = Callable[[], None]


class Ref(Generic[T]):
    __slots__ = ("current",)

    def __init__(self, current: T) -> None:
        self.current = current

    def __repr__(self) -> str:
        return f"Ref({self.current!r})"


class Host:
    def use_ref(self, initial: T) -> Ref[T]:
        raise NotImplementedError

    def use_state(self, initial: T) -> tuple[T, SetState[T]]:
        raise NotImplementedError

    def use_memo(self, factory: Callable[[], T], deps: Sequence[Any]) -> T:
        raise NotImplementedError

    def use_callback(self, callback: F, deps: Sequence[Any]) -> F:
        return self.use_memo(lambda: callback, deps)


_REF = "use_ref"
_STATE = "use_state"
_MEMO = "use_memo"


@dataclass
class _Slot:
    kind: str
    value: Any = None
    deps: Optional[tuple[Any, ...]] = None
    setter: Optional[Callable[[Any], None]] = None


def _deps_changed(previous: Optional[tuple[Any, ...]], deps: tuple[Any, ...]) -> bool:
    if previous is None or len(previous) != len(deps):
        return True

    return any(a is not b for a, b in zip(previous, deps))


Listener = Callable[["Component[Any]"], None]


class Component(Host, Generic[R]):
    """Minimal hook host driving a render function.

    Hooks are matched to slots by call position, so every render must call
    the same hooks in the same order. A state change marks the component
    dirty and notifies listeners; re-rendering is up to the caller.
    """

    _render_fn: Callable[[Component[R]], R]
    _slots: list[_Slot]
    _cursor: int
    _rendering: bool
    _mounted: bool
    _dirty: bool
    _result: Optional[R]
    _listeners: list[Listener]

    render_count: int

    def __init__(self, render: Callable[[Component[R]], R]) -> None:
        self._render_fn = render
        self._slots = []
        self._cursor = 0
        self._rendering = False
        self._mounted = False
        self._dirty = True
        self._result = None
        self._listeners = []

        self.render_count = 0

    def __repr__(self) -> str:
        name = getattr(self._render_fn, "__qualname__", repr(self._render_fn))

        return f"Component({name})"

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def result(self) -> R:
        if not self._mounted:
            raise InvalidStateError("Component has not been rendered yet")

        return self._result  # type: ignore[return-value]

    def _use_slot(self, kind: str) -> _Slot:
        if not self._rendering:
            raise InvalidStateError(f"{kind}() called outside of render")

        index = self._cursor
        self._cursor += 1

        if index < len(self._slots):
            slot = self._slots[index]

            if slot.kind != kind:
                raise HookOrderError(
                    f"Hook #{index} was {slot.kind}() on the first render, "
                    f"got {kind}()"
                )

            return slot

        if self._mounted:
            raise HookOrderError(
                f"Rendered more hooks than the first render ({len(self._slots)})"
            )

        slot = _Slot(kind)
        self._slots.append(slot)

        return slot

    def _schedule(self) -> None:
        self._dirty = True

        logger.debug("State changed, %r scheduled for re-render", self)

        for listener in list(self._listeners):
            listener(self)

    def use_ref(self, initial: T) -> Ref[T]:
        slot = self._use_slot(_REF)

        if slot.value is None:
            slot.value = Ref(initial)

        return slot.value

    def use_state(self, initial: T) -> tuple[T, SetState[T]]:
        slot = self._use_slot(_STATE)

        if slot.setter is None:
            slot.value = initial

            def set_state(value: T) -> None:
                if value is slot.value:
                    return

                slot.value = value
                self._schedule()

            slot.setter = set_state

        return slot.value, slot.setter

    def use_memo(self, factory: Callable[[], T], deps: Sequence[Any]) -> T:
        slot = self._use_slot(_MEMO)
        current_deps = tuple(deps)

        if _deps_changed(slot.deps, current_deps):
            slot.value = factory()
            slot.deps = current_deps

        return slot.value

    def render(self) -> R:
        if self._rendering:
            raise InvalidStateError(f"{self!r} is already rendering")

        self._rendering = True
        self._cursor = 0
        self._dirty = False

        memos = [
            (slot, slot.value, slot.deps)
            for slot in self._slots
            if slot.kind == _MEMO
        ]

        try:
            result = self._render_fn(self)

            if self._mounted and self._cursor != len(self._slots):
                raise HookOrderError(
                    f"Rendered {self._cursor} hooks, "
                    f"the first render used {len(self._slots)}"
                )
        except Exception:
            self._dirty = True

            if not self._mounted:
                self._slots.clear()

            for slot, value, deps in memos:
                slot.value = value
                slot.deps = deps

            raise
        finally:
            self._rendering = False

        self._result = result
        self._mounted = True
        self.render_count += 1

        logger.debug("Rendered %r (render #%d)", self, self.render_count)

        return result

    def flush(self) -> bool:
        if not self._dirty:
            return False

        self.render()

        return True

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
