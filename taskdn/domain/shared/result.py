"""Result monad for operations that can be rejected.

Ordering operations never raise for expected failures such as a task that
was deleted between the drag start and the drop. They return ``Ok`` with
the produced value or ``Err`` with an error value instead, so callers must
look at the outcome before assuming the order changed.

Example usage:
    >>> result = store.set_task_project("t1", "p2")
    >>> if is_err(result):
    ...     print(result.error.message)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Rejected outcome carrying an error value."""

    error: E


# TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is Ok."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is Err."""
    return isinstance(result, Err)


def map_result(result: Ok[T] | Err[E], fn: Callable[[T], U]) -> Ok[U] | Err[E]:
    """Transform the value of an Ok result, passing Err through untouched.

    Args:
        result: The result to transform.
        fn: Function applied to the Ok value.

    Returns:
        Ok with the transformed value, or the original Err.
    """
    if isinstance(result, Ok):
        return Ok(fn(result.value))
    return result


def flat_map(result: Ok[T] | Err[E], fn: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
    """Chain a second fallible step after a successful one.

    The first rejection short-circuits the remaining steps.

    Args:
        result: The result to chain from.
        fn: Step that takes the Ok value and returns a new Result.

    Returns:
        The Result of the step, or the original Err.
    """
    if isinstance(result, Ok):
        return fn(result.value)
    return result


def unwrap_or(result: Ok[T] | Err[E], default: T) -> T:
    """Return the Ok value, or ``default`` when the result is Err."""
    if isinstance(result, Ok):
        return result.value
    return default
