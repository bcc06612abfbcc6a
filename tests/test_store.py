from dataclasses import dataclass
from typing import Union

import pytest

from pydantic import BaseModel

from reducest import MiddlewareError, ReducestStore, create_store


class TodoState(BaseModel):
    items: tuple[str, ...] = ()
    done: frozenset[str] = frozenset()


@dataclass(frozen=True)
class AddTodo:
    text: str


@dataclass(frozen=True)
class CompleteTodo:
    text: str


TodoAction = Union[AddTodo, CompleteTodo]


def todo_reducer(state: TodoState, action: TodoAction) -> TodoState:
    match action:
        case AddTodo(text=text):
            return state.model_copy(update={"items": (*state.items, text)})
        case CompleteTodo(text=text) if text in state.items:
            return state.model_copy(update={"done": state.done | {text}})

    return state


def test_create_store_initial_state() -> None:
    store = create_store(todo_reducer, ["a"], lambda items: TodoState(items=tuple(items)))

    assert isinstance(store, ReducestStore)
    assert store.state == TodoState(items=("a",))
    assert store.get_state() is store.state


def test_dispatch_updates_state() -> None:
    store = create_store(todo_reducer, TodoState())

    store.dispatch(AddTodo("write"))
    store.dispatch(CompleteTodo("write"))
    store.dispatch(CompleteTodo("missing"))

    assert store.state.items == ("write",)
    assert store.state.done == frozenset({"write"})


def test_subscribers_receive_new_state() -> None:
    store = create_store(todo_reducer, TodoState())
    received = []

    unsubscribe = store.subscribe(received.append)
    store.dispatch(AddTodo("a"))
    unsubscribe()
    unsubscribe()
    store.dispatch(AddTodo("b"))

    assert received == [TodoState(items=("a",))]
    assert store.state.items == ("a", "b")


def test_unchanged_state_does_not_notify() -> None:
    store = create_store(todo_reducer, TodoState())
    received = []

    store.subscribe(received.append)
    store.dispatch(CompleteTodo("missing"))

    assert received == []


def test_subscriber_error_propagates() -> None:
    store = create_store(todo_reducer, TodoState())

    def failing(state: TodoState) -> None:
        raise RuntimeError("subscriber failed")

    store.subscribe(failing)

    with pytest.raises(RuntimeError):
        store.dispatch(AddTodo("a"))

    assert store.state.items == ("a",)


def test_dispatch_returns_chain_result() -> None:
    def tagger(store):
        def wrap(next):
            def dispatch(action):
                next(action)
                return "tagged"

            return dispatch

        return wrap

    store = create_store(todo_reducer, TodoState(), middleware=[tagger])

    assert store.dispatch(AddTodo("a")) == "tagged"
    assert store.state.items == ("a",)


def test_middleware_can_dispatch_follow_up_actions() -> None:
    def auto_complete(store):
        def wrap(next):
            def dispatch(action):
                result = next(action)

                if isinstance(action, AddTodo) and action.text.startswith("!"):
                    store.dispatch(CompleteTodo(action.text))

                return result

            return dispatch

        return wrap

    store = create_store(todo_reducer, TodoState(), middleware=[auto_complete])
    store.dispatch(AddTodo("!urgent"))
    store.dispatch(AddTodo("later"))

    assert store.state.items == ("!urgent", "later")
    assert store.state.done == frozenset({"!urgent"})


def test_replace_reducer_keeps_state() -> None:
    store = create_store(lambda state, action: state + action, 1)
    dispatch = store.composed_dispatch

    store.dispatch(2)
    store.replace_reducer(lambda state, action: state * action)

    assert store.composed_dispatch is not dispatch

    store.dispatch(4)
    assert store.state == 12


def test_replace_middleware_rebuilds_dispatch() -> None:
    seen = []

    def spy(store):
        def wrap(next):
            def dispatch(action):
                seen.append(action)
                return next(action)

            return dispatch

        return wrap

    store = create_store(lambda state, action: state + action, 0)
    dispatch = store.composed_dispatch

    store.dispatch(1)
    assert store.composed_dispatch is dispatch

    store.replace_middleware([spy])
    store.dispatch(2)

    assert store.composed_dispatch is not dispatch
    assert seen == [2]
    assert store.state == 3


def test_subscriber_dispatch_does_not_replay_stale_state() -> None:
    store = create_store(lambda state, action: state + action, 0)
    first_seen = []
    second_seen = []

    def follow_up(state: int) -> None:
        first_seen.append(state)

        if state == 1:
            store.dispatch(10)

    store.subscribe(follow_up)
    store.subscribe(second_seen.append)
    store.dispatch(1)

    assert first_seen == [1, 11]
    assert second_seen == [11]
    assert store.state == 11


def test_failed_replace_middleware_keeps_previous_chain() -> None:
    seen = []

    def spy(store):
        def wrap(next):
            def dispatch(action):
                seen.append(action)
                return next(action)

            return dispatch

        return wrap

    def broken(store):
        return None

    store = create_store(lambda state, action: state + action, 0, middleware=[spy])
    dispatch = store.composed_dispatch

    with pytest.raises(MiddlewareError):
        store.replace_middleware([broken])

    assert store.composed_dispatch is dispatch

    store.dispatch(1)

    assert seen == [1]
    assert store.state == 1


def test_failed_replace_reducer_keeps_previous_reducer() -> None:
    ready = [True]

    def needs_config(store):
        if not ready[0]:
            raise LookupError("middleware config missing")

        def wrap(next):
            def dispatch(action):
                return next(action)

            return dispatch

        return wrap

    store = create_store(
        lambda state, action: state + action,
        1,
        middleware=[needs_config]
    )
    dispatch = store.composed_dispatch

    ready[0] = False

    with pytest.raises(LookupError):
        store.replace_reducer(lambda state, action: state * action)

    assert store.composed_dispatch is dispatch

    store.dispatch(3)

    assert store.state == 4
