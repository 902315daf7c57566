"""
Assignment table: the attendee × timeslot matrix of boolean decision variables.

Row i belongs to attendees[i], column j to timeslots[j]; both orders are the
input order. Variables are created once in `build` and are only ever looked
up afterwards, through the name → index maps.
"""

import logging
from typing import Dict, Iterator, List, Sequence, Tuple, Union

from .backend import SolverBackend, Variable
from .models import Attendee, Timeslot

logger = logging.getLogger(__name__)


def _index_by_name(kind: str, records) -> Dict[str, int]:
    index = {}
    for i, r in enumerate(records):
        if r.name in index:
            raise ValueError(f"duplicate {kind} name {r.name!r}")
        index[r.name] = i
    return index


class AttendeeRow:
    """
    Re-iterable view over one attendee's row.
    Yields (timeslot_index, variable) in timeslot order.
    """

    def __init__(self, variables: Sequence[Variable]):
        self._variables = variables

    def __iter__(self) -> Iterator[Tuple[int, Variable]]:
        return enumerate(self._variables)

    def __len__(self) -> int:
        return len(self._variables)


class AssignmentTable:

    def __init__(
        self,
        attendees: List[Attendee],
        timeslots: List[Timeslot],
        matrix: List[List[Variable]],
    ):
        self.attendees = list(attendees)
        self.timeslots = list(timeslots)
        self._matrix = matrix
        self._attendee_idx = _index_by_name("attendee", self.attendees)
        self._timeslot_idx = _index_by_name("timeslot", self.timeslots)

    @classmethod
    def build(
        cls,
        attendees: Sequence[Attendee],
        timeslots: Sequence[Timeslot],
        backend: SolverBackend,
    ) -> "AssignmentTable":
        """
        Declare one boolean x_i_j per (attendee i, timeslot j) on `backend`.
        No constraints are added here. Raises SolverSetupError if the backend
        rejects a declaration.
        """
        # Check names before touching the backend
        _index_by_name("attendee", attendees)
        _index_by_name("timeslot", timeslots)

        matrix = []
        for i in range(len(attendees)):
            matrix.append([backend.declare_bool(f"x_{i}_{j}") for j in range(len(timeslots))])
        logger.debug("Declared %d x %d decision variables on %s",
                     len(attendees), len(timeslots), backend.name)
        return cls(attendees, timeslots, matrix)

    # ── index maps ──
    def attendee_index(self, attendee: Union[Attendee, str]) -> int:
        name = attendee.name if isinstance(attendee, Attendee) else attendee
        try:
            return self._attendee_idx[name]
        except KeyError:
            raise KeyError(f"unknown attendee {name!r}") from None

    def timeslot_index(self, timeslot: Union[Timeslot, str]) -> int:
        name = timeslot.name if isinstance(timeslot, Timeslot) else timeslot
        try:
            return self._timeslot_idx[name]
        except KeyError:
            raise KeyError(f"unknown timeslot {name!r}") from None

    # ── variable access ──
    def variable(self, attendee: Union[Attendee, str], timeslot: Union[Timeslot, str]) -> Variable:
        return self._matrix[self.attendee_index(attendee)][self.timeslot_index(timeslot)]

    def row(self, attendee: Union[Attendee, str]) -> AttendeeRow:
        return AttendeeRow(self._matrix[self.attendee_index(attendee)])

    def column(self, timeslot: Union[Timeslot, str]) -> List[Variable]:
        j = self.timeslot_index(timeslot)
        return [row[j] for row in self._matrix]

    @property
    def variable_count(self) -> int:
        return sum(len(row) for row in self._matrix)
