from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict


A = TypeVar("A")
S = TypeVar("S")


__all__ = (
    "Dispatch",
    "GetState",
    "Store",
)


Dispatch = Callable[[A], Any]
GetState = Callable[[], S]


class Store(BaseModel, Generic[S, A]):
    model_config = ConfigDict(frozen=True)

    get_state: Callable[[], S]
    dispatch: Callable[[A], Any]
