__all__ = (
    "HookOrderError",
    "InvalidStateError",
    "MiddlewareError",
    "ReducestError",
)


class ReducestError(Exception):
    pass


class InvalidStateError(ReducestError):
    pass


class HookOrderError(ReducestError):
    pass


class MiddlewareError(ReducestError):
    pass
