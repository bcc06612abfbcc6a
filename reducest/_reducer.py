from typing import Callable, Generic, TypeVar, Union


A = TypeVar("A")
I = TypeVar("I")  # noqa: E741
S = TypeVar("S")


__all__ = (
    "Initializer",
    "Reducer",
    "ReducerLike",
)


Initializer = Callable[[I], S]


class Reducer(Generic[S, A]):
    def apply(self, state: S, action: A) -> S:
        raise NotImplementedError

    def __call__(self, state: S, action: A) -> S:
        return self.apply(state, action)


ReducerLike = Union[Reducer[S, A], Callable[[S, A], S]]
