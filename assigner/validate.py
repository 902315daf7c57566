"""
Post-solve validation and dry-run feasibility checks.
"""

from typing import Dict, List, Tuple

from .models import AssignmentContext, AttendeeAssignment


def validate_assignments(
    assignments: List[AttendeeAssignment],
    ctx: AssignmentContext,
) -> Tuple[bool, List[str]]:
    """
    Validate decoded assignments against the hard constraints.
    Returns (is_valid, list_of_violation_messages).
    """
    violations = []
    visits = ctx.config.visits
    known = {t.name for t in ctx.timeslots}

    # Visit count per attendee
    per_slot: Dict[str, int] = {t.name: 0 for t in ctx.timeslots}
    for a in assignments:
        if len(a.timeslots) != visits:
            violations.append(f"{a.attendee}: visits = {len(a.timeslots)} (expected {visits})")
        for name in a.timeslots:
            if name not in known:
                violations.append(f"{a.attendee}: unknown timeslot {name!r}")
                continue
            per_slot[name] += 1

    # Capacity per timeslot
    for t in ctx.timeslots:
        if t.is_bounded and per_slot[t.name] > t.capacity:
            violations.append(f"{t.name}: attendees = {per_slot[t.name]} (max {t.capacity})")

    return len(violations) == 0, violations


def dry_run_feasibility(ctx: AssignmentContext) -> Tuple[bool, List[str]]:
    """Check the counting bounds that make the model infeasible before solving."""
    msgs = []
    visits = ctx.config.visits
    n_att = len(ctx.attendees)
    n_slot = len(ctx.timeslots)

    if n_att and visits > n_slot:
        msgs.append(f"visits = {visits} but only {n_slot} timeslot(s) exist")

    if n_slot and all(t.is_bounded for t in ctx.timeslots):
        total = sum(t.capacity for t in ctx.timeslots)
        needed = visits * n_att
        if total < needed:
            msgs.append(
                f"total capacity {total} < {needed} required visits "
                f"({n_att} attendee(s) × {visits})")

    return len(msgs) == 0, msgs
