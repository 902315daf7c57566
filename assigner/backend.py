"""
Solver backend interface.

The assignment model talks to a constraint engine only through
SolverBackend: declare boolean variables, add linear bounds over them,
check satisfiability. A SolverModel can only be obtained from a satisfiable
CheckResult, so reading values before a successful check is not possible
through the normal API.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .errors import PrematureEvaluation, SolverSetupError


class SolveStatus(Enum):
    """Outcome of a satisfiability check."""
    SATISFIABLE = "sat"
    UNSATISFIABLE = "unsat"
    UNKNOWN = "unknown"


@dataclass(frozen=True, eq=False)
class Variable:
    """Handle for one boolean decision variable; `native` is the engine object."""
    name: str
    native: Any = field(repr=False)


class SolverModel:
    """Values of every declared variable, captured when the check succeeded."""

    def __init__(self, values: Dict[str, bool]):
        self._values = dict(values)

    def evaluate(self, var: Variable) -> bool:
        try:
            return self._values[var.name]
        except KeyError:
            raise PrematureEvaluation(
                f"model has no value for variable {var.name!r}") from None

    def __len__(self) -> int:
        return len(self._values)


@dataclass(frozen=True)
class CheckResult:
    status: SolveStatus
    model: Optional[SolverModel] = None

    @property
    def satisfiable(self) -> bool:
        return self.status is SolveStatus.SATISFIABLE

    def require_model(self) -> SolverModel:
        if not self.satisfiable or self.model is None:
            raise PrematureEvaluation(
                f"no model available: solver status is {self.status.value}")
        return self.model


class SolverBackend(ABC):
    """
    Base class for constraint engines.

    Subclasses implement `_new_bool`, `_add_linear` and `_check`; the base
    keeps the variable registry and handles constant (empty) sums.
    """

    name = "abstract"

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._variables: Dict[str, Variable] = {}
        self._constraint_count = 0
        self._trivially_infeasible = False

    # ── declarations ──
    def declare_bool(self, name: str) -> Variable:
        """Declare a fresh boolean variable. Names must be unique per backend."""
        if name in self._variables:
            raise SolverSetupError(f"variable {name!r} already declared")
        try:
            native = self._new_bool(name)
        except SolverSetupError:
            raise
        except Exception as e:
            raise SolverSetupError(f"{self.name}: cannot declare {name!r}: {e}") from e
        var = Variable(name=name, native=native)
        self._variables[name] = var
        return var

    def add_linear(
        self,
        variables: Iterable[Variable],
        lower: Optional[int] = None,
        upper: Optional[int] = None,
    ) -> None:
        """Constrain lower <= sum(variables) <= upper, each variable counting 0/1."""
        vs = list(variables)
        if lower is None and upper is None:
            raise ValueError("add_linear needs a lower or an upper bound")
        for v in vs:
            if self._variables.get(v.name) is not v:
                raise SolverSetupError(
                    f"variable {v.name!r} was not declared on this {self.name} backend")
        self._constraint_count += 1
        if not vs:
            # Constant sum 0: decide now instead of handing the engine an empty expression
            if (lower is not None and lower > 0) or (upper is not None and upper < 0):
                self.logger.debug("Empty sum outside [%s, %s]: model is infeasible", lower, upper)
                self._trivially_infeasible = True
            return
        try:
            self._add_linear([v.native for v in vs], lower, upper)
        except SolverSetupError:
            raise
        except Exception as e:
            raise SolverSetupError(f"{self.name}: constraint rejected: {e}") from e

    def check(self) -> CheckResult:
        """Run the engine. The model is only attached to a satisfiable result."""
        self.logger.debug(
            "%s: checking %d variables, %d constraints",
            self.name, len(self._variables), self._constraint_count)
        if self._trivially_infeasible:
            return CheckResult(SolveStatus.UNSATISFIABLE)
        return self._check()

    @property
    def variables(self) -> List[Variable]:
        return list(self._variables.values())

    @property
    def constraint_count(self) -> int:
        return self._constraint_count

    # ── engine hooks ──
    @abstractmethod
    def _new_bool(self, name: str) -> Any:
        """Create the engine's boolean variable."""

    @abstractmethod
    def _add_linear(self, natives: List[Any], lower: Optional[int], upper: Optional[int]) -> None:
        """Post the bound to the engine; `natives` is never empty."""

    @abstractmethod
    def _check(self) -> CheckResult:
        """Solve and snapshot the values of every declared variable."""
