"""
Write decoded assignments to an Excel workbook.
Adds a CONFLICTS sheet when the solver finds no assignment.
"""

from pathlib import Path
from typing import Dict, List

import openpyxl

from .models import UNASSIGNED_LABEL, AttendeeAssignment, Timeslot


def write_assignments(
    output_path: str,
    assignments: List[AttendeeAssignment],
    timeslots: List[Timeslot],
) -> str:
    """
    Create a fresh workbook with an ASSIGNMENTS sheet (one row per attendee)
    and a TIMESLOTS sheet (capacity and head count per timeslot).
    """
    output = Path(output_path)
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "ASSIGNMENTS"
    ws.append(["Attendee", "Timeslot", "All timeslots"])
    for a in assignments:
        ws.append([
            a.attendee,
            a.timeslot if a.is_assigned else UNASSIGNED_LABEL,
            ", ".join(a.timeslots) or None,
        ])

    counts: Dict[str, int] = {t.name: 0 for t in timeslots}
    for a in assignments:
        for name in a.timeslots:
            counts[name] = counts.get(name, 0) + 1

    ws_t = wb.create_sheet("TIMESLOTS")
    ws_t.append(["Timeslot", "Capacity", "Assigned"])
    for t in timeslots:
        ws_t.append([t.name, t.capacity if t.is_bounded else "unbounded", counts[t.name]])

    wb.save(output)
    return str(output)


def add_conflicts_sheet(
    wb_path: str,
    conflicts: List[str],
) -> None:
    """Add a CONFLICTS sheet listing infeasibility messages; creates the workbook if needed."""
    path = Path(wb_path)
    if path.exists():
        wb = openpyxl.load_workbook(path)
    else:
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
    if "CONFLICTS" in wb.sheetnames:
        del wb["CONFLICTS"]
    ws = wb.create_sheet("CONFLICTS")
    ws.cell(1, 1, "Conflict / Issue")
    for i, msg in enumerate(conflicts, 2):
        ws.cell(i, 1, msg)
    wb.save(path)
