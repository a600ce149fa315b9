"""Computation units bound to graph nodes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from ._context import EvaluationContext


@runtime_checkable
class Computation(Protocol):
    """Anything that can produce a node's value from an evaluation context."""

    def evaluate(self, ctx: EvaluationContext) -> float: ...


@dataclass(frozen=True, slots=True)
class Constant:
    """Leaf computation returning a fixed value regardless of its context."""

    value: float

    def evaluate(self, ctx: EvaluationContext) -> float:  # noqa: ARG002
        return self.value


@dataclass(frozen=True, slots=True)
class FunctionComputation:
    """Computation backed by a plain function of the evaluation context."""

    fn: Callable[[EvaluationContext], float]

    def evaluate(self, ctx: EvaluationContext) -> float:
        return self.fn(ctx)


ComputationLike: TypeAlias = "Computation | Callable[[EvaluationContext], float] | float"


def as_computation(obj: ComputationLike) -> Computation:
    """Coerce a computation, a function of the context, or a number to a Computation.

    Raises:
        TypeError: If the object is none of the accepted kinds.

    """
    # bool is a Real, but a truth value is almost certainly a mistake here
    if isinstance(obj, Real) and not isinstance(obj, bool):
        return Constant(float(obj))
    if isinstance(obj, Computation):
        return obj
    if callable(obj):
        return FunctionComputation(obj)
    msg = f"Expected a Computation, a callable or a number, got {type(obj).__name__}"
    raise TypeError(msg)
