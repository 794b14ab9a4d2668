"""Success/failure values shared by the parsing, decoding, and dispatch stages.

Each stage of a command invocation returns either :class:`Ok` carrying the
value for the next stage or :class:`Err` naming the stage that rejected the
input.  Callers short-circuit on the first :class:`Err` they see.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterable, TypeVar, Union

T = TypeVar("T")


class Stage(Enum):
    """Pipeline stage that produced a failure."""

    OPTION = "option"
    ARITY = "arity"
    DECODE = "decode"
    COMMAND = "command"
    WALLET = "wallet"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    stage: Stage
    message: str

    def __str__(self) -> str:
        return f"{self.stage.value} error: {self.message}"


Result = Union[Ok[T], Err]


def collect(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Return every value, or the first failure if any result failed."""

    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
