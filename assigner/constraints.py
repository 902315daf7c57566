"""
Constraint generators for the assignment table.

Each generator posts its constraints to the backend and leaves the table
untouched. Call each at most once per run: a second call posts duplicate
(redundant) constraints.
"""

import logging

from .backend import SolverBackend
from .table import AssignmentTable

logger = logging.getLogger(__name__)


def eq_visits(table: AssignmentTable, backend: SolverBackend, visits: int) -> int:
    """
    Every attendee visits exactly `visits` timeslots: sum(row) == visits.

    `visits` is not checked against the number of timeslots; a value larger
    than the timeslot count makes the model unsatisfiable.
    Returns the number of constraints posted.
    """
    if visits < 0:
        raise ValueError(f"visits must be non-negative, got {visits}")
    count = 0
    for a in table.attendees:
        row = [var for _, var in table.row(a)]
        if visits > len(row):
            # A 0/1 row cannot reach `visits`; post a bound the engine can represent
            backend.add_linear(row, lower=len(row) + 1)
        else:
            backend.add_linear(row, lower=visits, upper=visits)
        count += 1
    logger.debug("eq_visits(%d): %d row constraints", visits, count)
    return count


def max_attendees(table: AssignmentTable, backend: SolverBackend) -> int:
    """
    Every bounded timeslot holds at most its capacity: sum(column) <= capacity.

    Timeslots without a capacity are unbounded and get no constraint, as are
    timeslots whose capacity is at least the number of attendees.
    Returns the number of constraints posted.
    """
    count = 0
    for t in table.timeslots:
        if not t.is_bounded:
            logger.debug("Timeslot %r has no capacity: unbounded", t.name)
            continue
        if t.capacity >= len(table.attendees):
            logger.debug("Timeslot %r capacity %d covers every attendee", t.name, t.capacity)
            continue
        backend.add_linear(table.column(t), upper=t.capacity)
        count += 1
    logger.debug("max_attendees: %d column constraints", count)
    return count
