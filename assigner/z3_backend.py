"""
Z3 backend.
"""

from typing import Any, List, Optional

import z3

from .backend import CheckResult, SolveStatus, SolverBackend, SolverModel


class Z3Backend(SolverBackend):
    """Booleans are summed as If(b, 1, 0) terms; values are read with model completion."""

    name = "z3"

    def __init__(self, time_limit_seconds: Optional[float] = None, random_seed: Optional[int] = None):
        super().__init__()
        self.solver = z3.Solver()
        if time_limit_seconds is not None:
            # z3 timeout is in milliseconds
            self.solver.set("timeout", int(time_limit_seconds * 1000))
        if random_seed is not None:
            self.solver.set("random_seed", random_seed)

    def _new_bool(self, name: str) -> Any:
        return z3.Bool(name)

    def _add_linear(self, natives: List[Any], lower: Optional[int], upper: Optional[int]) -> None:
        expr = z3.Sum([z3.If(b, 1, 0) for b in natives])
        if lower is not None and lower == upper:
            self.solver.add(expr == lower)
            return
        if lower is not None:
            self.solver.add(expr >= lower)
        if upper is not None:
            self.solver.add(expr <= upper)

    def _check(self) -> CheckResult:
        result = self.solver.check()
        self.logger.info("z3: solver status %s", result)

        if result == z3.sat:
            model = self.solver.model()
            values = {
                v.name: z3.is_true(model.eval(v.native, model_completion=True))
                for v in self.variables
            }
            return CheckResult(SolveStatus.SATISFIABLE, SolverModel(values))
        if result == z3.unsat:
            return CheckResult(SolveStatus.UNSATISFIABLE)
        self.logger.warning("z3: check returned unknown (%s)", self.solver.reason_unknown())
        return CheckResult(SolveStatus.UNKNOWN)
