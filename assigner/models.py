"""
Data models for the AttendeeAssigner system.
Records are loaded once from the input document and never mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Attendee:
    """Attendee identity; the name is unique within a run."""
    name: str


@dataclass(frozen=True)
class Timeslot:
    """Timeslot identity and the maximum number of simultaneous attendees."""
    name: str
    capacity: Optional[int] = None   # None = unbounded, no capacity constraint

    @property
    def is_bounded(self) -> bool:
        return self.capacity is not None


@dataclass
class AssignmentConfig:
    """Solver parameters, filled from the command line."""
    visits: int = 1                              # exact timeslots per attendee
    backend: str = "cpsat"                       # "cpsat" or "z3"
    time_limit_seconds: Optional[float] = None   # None = no limit
    num_workers: int = 8
    random_seed: Optional[int] = None
    all_slots: bool = False                      # report every assigned slot, not just the first


@dataclass
class AssignmentContext:
    """All parsed data needed by the solver."""
    attendees: List[Attendee]
    timeslots: List[Timeslot]
    config: AssignmentConfig = field(default_factory=AssignmentConfig)


@dataclass(frozen=True)
class AttendeeAssignment:
    """Decoded result for one attendee."""
    attendee: str
    timeslot: Optional[str]                   # first assigned slot; None = unassigned
    timeslots: Tuple[str, ...] = ()           # every assigned slot, in load order

    @property
    def is_assigned(self) -> bool:
        return self.timeslot is not None


# Label printed for attendees without a slot
UNASSIGNED_LABEL = "Nothing found"

BACKEND_NAMES = ("cpsat", "z3")
