"""Reducer state with a redux-style middleware chain for hook-based hosts."""

from ._default_store import ReducestStore, Subscriber, create_store
from ._errors import (
    HookOrderError,
    InvalidStateError,
    MiddlewareError,
    ReducestError
)
from ._host import Component, Host, Listener, Ref, SetState, Unsubscribe
from ._middleware import Middleware, apply_middleware
from ._reducer import Initializer, Reducer, ReducerLike
from ._reducest import use_reducest
from ._store import Dispatch, GetState, Store


__all__ = (
    "Component",
    "Dispatch",
    "GetState",
    "Host",
    "HookOrderError",
    "Initializer",
    "InvalidStateError",
    "Listener",
    "Middleware",
    "MiddlewareError",
    "Reducer",
    "ReducerLike",
    "ReducestError",
    "ReducestStore",
    "Ref",
    "SetState",
    "Store",
    "Subscriber",
    "Unsubscribe",

    "apply_middleware",
    "create_store",
    "use_reducest",
)
