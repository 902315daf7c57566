"""
Assignment engine.
Builds the decision-variable table, posts the visit and capacity
constraints, runs the backend and decodes the model.
"""

import logging
from typing import List, Optional, Tuple

from .backend import SolveStatus, SolverBackend
from .constraints import eq_visits, max_attendees
from .extract import read_assignments
from .models import AssignmentConfig, AssignmentContext, AttendeeAssignment
from .table import AssignmentTable
from .validate import dry_run_feasibility

logger = logging.getLogger(__name__)


def make_backend(config: AssignmentConfig) -> SolverBackend:
    """Instantiate the backend named in `config.backend`."""
    if config.backend == "cpsat":
        from .cpsat_backend import CpSatBackend
        return CpSatBackend(
            time_limit_seconds=config.time_limit_seconds,
            num_workers=config.num_workers,
            random_seed=config.random_seed,
        )
    if config.backend == "z3":
        from .z3_backend import Z3Backend
        return Z3Backend(
            time_limit_seconds=config.time_limit_seconds,
            random_seed=config.random_seed,
        )
    raise ValueError(f"unknown backend {config.backend!r} (expected 'cpsat' or 'z3')")


def build_model(ctx: AssignmentContext, backend: SolverBackend) -> AssignmentTable:
    """Declare the variables and post both constraint families."""
    table = AssignmentTable.build(ctx.attendees, ctx.timeslots, backend)
    eq_visits(table, backend, ctx.config.visits)
    max_attendees(table, backend)
    return table


def solve(
    ctx: AssignmentContext,
    backend: Optional[SolverBackend] = None,
) -> Tuple[Optional[List[AttendeeAssignment]], SolveStatus, List[str]]:
    """
    Returns (assignments, status, conflict_messages).
    assignments is None unless the status is SATISFIABLE.
    """
    if backend is None:
        backend = make_backend(ctx.config)

    table = build_model(ctx, backend)
    logger.info(
        "Solving %d attendee(s) x %d timeslot(s), visits=%d, backend=%s",
        len(table.attendees), len(table.timeslots), ctx.config.visits, backend.name)

    result = backend.check()
    if result.satisfiable:
        assignments = read_assignments(table, result.require_model())
        logger.info("Assignment found for %d attendee(s)",
                    sum(1 for a in assignments if a.is_assigned))
        return assignments, result.status, []

    # No model — report what the counting bounds say
    conflicts = [f"Solver status: {result.status.value}"]
    _, msgs = dry_run_feasibility(ctx)
    conflicts.extend(msgs)
    logger.info("No valid assignment: %s", "; ".join(conflicts))
    return None, result.status, conflicts
