"""
Solution extraction: turn a solver model back into attendee → timeslot.

Nothing here calls the solver. The caller obtains a SolverModel from a
satisfiable CheckResult and the functions below evaluate row variables on it.
"""

from typing import List, Optional, Union

from .backend import SolverModel
from .models import Attendee, AttendeeAssignment, Timeslot
from .table import AssignmentTable, AttendeeRow


def assignments_for(table: AssignmentTable, attendee: Union[Attendee, str]) -> AttendeeRow:
    """(timeslot_index, variable) pairs for one attendee, in timeslot order."""
    return table.row(attendee)


def first_assigned(
    table: AssignmentTable,
    attendee: Union[Attendee, str],
    model: SolverModel,
) -> Optional[Timeslot]:
    """
    The first timeslot whose variable is true, or None if the attendee is unassigned.

    With visits > 1 an attendee can hold several slots; only the first
    (in timeslot order) is returned. Use all_assigned for the full set.
    """
    for j, var in assignments_for(table, attendee):
        if model.evaluate(var):
            return table.timeslots[j]
    return None


def all_assigned(
    table: AssignmentTable,
    attendee: Union[Attendee, str],
    model: SolverModel,
) -> List[Timeslot]:
    """Every timeslot whose variable is true, in timeslot order."""
    return [table.timeslots[j] for j, var in assignments_for(table, attendee) if model.evaluate(var)]


def read_assignments(table: AssignmentTable, model: SolverModel) -> List[AttendeeAssignment]:
    """One AttendeeAssignment per attendee, in attendee order."""
    result = []
    for a in table.attendees:
        slots = all_assigned(table, a, model)
        result.append(AttendeeAssignment(
            attendee=a.name,
            timeslot=slots[0].name if slots else None,
            timeslots=tuple(t.name for t in slots),
        ))
    return result
