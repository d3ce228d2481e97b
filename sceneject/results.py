"""
Result values for injection passes that shouldn't raise.

``Injector.try_inject_scene`` runs a pass inside a ``ResultBuilder`` and hands back a ``Success`` holding the pass
report or a ``Failure`` holding the injection error. Both can be matched positionally.
"""
from typing import Callable, Self


class Result[T]:
    """Base of Success and Failure. A builder that never had a result set holds a bare Result with neither a result
    nor an exception."""
    result: T | None = None
    exception: Exception | None = None


class Success[T](Result[T]):
    __match_args__ = ("result",)

    def __init__(self, result: T):
        self.result = result


class Failure[T](Result[T]):
    """Falsy. Reading ``result`` raises the captured exception."""
    __match_args__ = ("exception",)

    def __init__(self, exception: Exception):
        self.exception = exception

    def __bool__(self):
        return False

    @property
    def result(self) -> T:
        raise self.exception


class ResultBuilder[T]:
    """Captures the outcome of a block as a Result. Only exceptions matching the catch types become a Failure, any
    other exception propagates out of the block."""
    def __init__(self, catch: type[Exception] | tuple[type[Exception], ...] = Exception):
        self.catch = catch
        self.result: Result[T] = Result[T]()

    def set(self, result: T | Result[T]) -> T | Result[T]:
        match result:
            case Result():
                self.result = result
            case _:
                self.result = Success[T](result)

        return result

    def __enter__(self) -> tuple[Self, Callable[[T | Result[T]], T | Result[T]]]:
        return self, self.set

    def __exit__(self, exc_type, exc_val, exc_tb):
        if isinstance(exc_val, self.catch):
            self.result = Failure[T](exc_val)
            return True

        return False
