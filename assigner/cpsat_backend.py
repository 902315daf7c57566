"""
OR-Tools CP-SAT backend.
"""

from typing import Any, List, Optional

from ortools.sat.python import cp_model

from .backend import CheckResult, SolveStatus, SolverBackend, SolverModel
from .errors import SolverSetupError


class CpSatBackend(SolverBackend):
    """CpModel holds the variables and constraints; a CpSolver runs each check."""

    name = "cpsat"

    def __init__(
        self,
        time_limit_seconds: Optional[float] = None,
        num_workers: int = 8,
        random_seed: Optional[int] = None,
    ):
        super().__init__()
        self.model = cp_model.CpModel()
        self.time_limit_seconds = time_limit_seconds
        self.num_workers = num_workers
        self.random_seed = random_seed

    def _new_bool(self, name: str) -> Any:
        return self.model.NewBoolVar(name)

    def _add_linear(self, natives: List[Any], lower: Optional[int], upper: Optional[int]) -> None:
        expr = sum(natives)
        if lower is not None and lower == upper:
            self.model.Add(expr == lower)
            return
        if lower is not None:
            self.model.Add(expr >= lower)
        if upper is not None:
            self.model.Add(expr <= upper)

    def _check(self) -> CheckResult:
        solver = cp_model.CpSolver()
        if self.time_limit_seconds is not None:
            solver.parameters.max_time_in_seconds = self.time_limit_seconds
        solver.parameters.num_workers = self.num_workers
        if self.random_seed is not None:
            solver.parameters.random_seed = self.random_seed

        status = solver.Solve(self.model)
        self.logger.info("cpsat: solver status %s", solver.StatusName(status))

        if status in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            values = {v.name: bool(solver.BooleanValue(v.native)) for v in self.variables}
            return CheckResult(SolveStatus.SATISFIABLE, SolverModel(values))
        if status == cp_model.INFEASIBLE:
            return CheckResult(SolveStatus.UNSATISFIABLE)
        if status == cp_model.MODEL_INVALID:
            raise SolverSetupError(f"cpsat: invalid model: {self.model.Validate()}")
        return CheckResult(SolveStatus.UNKNOWN)
