"""
Tests for the run_assigner command line and workbook output.
"""
from pathlib import Path

import openpyxl
import pytest

import run_assigner
from assigner.models import AttendeeAssignment, Timeslot
from assigner.write_assignments import add_conflicts_sheet, write_assignments


ROOMS = {
    "attendees": [{"name": "Alice"}, {"name": "Bob"}],
    "timeslots": [{"name": "Room A", "capacity": 1}, {"name": "Room B", "capacity": 1}],
}


def test_solve_prints_one_line_per_attendee(write_input, capsys):
    code = run_assigner.main(["solve", write_input(ROOMS)])
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert len(out) == 2
    assert out[0].startswith(" Alice -> Room ")
    assert out[1].startswith(" Bob -> Room ")
    assert out[0][-1] != out[1][-1]


def test_solve_unassigned(write_input, capsys):
    code = run_assigner.main(["solve", write_input(ROOMS), "--visits", "0"])
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out == ["Alice -> Nothing found", "Bob -> Nothing found"]


def test_solve_all_slots(write_input, capsys):
    doc = {"attendees": [{"name": "Solo"}],
           "timeslots": [{"name": "Mon", "capacity": 5}, {"name": "Tue", "capacity": 5}]}
    code = run_assigner.main(["solve", write_input(doc), "--visits", "2", "--all-slots"])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == [" Solo -> Mon, Tue"]


@pytest.mark.parametrize("backend", ["cpsat", "z3"])
def test_solve_infeasible(write_input, capsys, backend):
    code = run_assigner.main(["solve", write_input(ROOMS), "--visits", "3", "--backend", backend])
    out = capsys.readouterr().out
    assert code == 1
    assert out.startswith("No valid assignment found (unsat)")
    assert "visits = 3 but only 2 timeslot(s) exist" in out


def test_malformed_input(write_input, capsys):
    code = run_assigner.main(["solve", write_input({"attendees": [{"name": 1}], "timeslots": []})])
    assert code == 2
    assert "Malformed input" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    code = run_assigner.main(["solve", str(tmp_path / "nope.json")])
    assert code == 2
    assert "Cannot read input" in capsys.readouterr().err


def test_negative_visits_rejected(write_input):
    with pytest.raises(SystemExit):
        run_assigner.main(["solve", write_input(ROOMS), "--visits", "-1"])


def test_no_command(capsys):
    assert run_assigner.main([]) == 1


def test_dry_run(write_input, capsys):
    assert run_assigner.main(["dry-run", write_input(ROOMS)]) == 0
    assert "Feasibility: OK" in capsys.readouterr().out
    assert run_assigner.main(["dry-run", write_input(ROOMS), "--visits", "3"]) == 1
    assert "only 2 timeslot(s)" in capsys.readouterr().out


def test_solve_writes_workbook(write_input, tmp_path, capsys):
    out = tmp_path / "assignments.xlsx"
    assert run_assigner.main(["solve", write_input(ROOMS), "--out", str(out)]) == 0
    wb = openpyxl.load_workbook(out)
    rows = list(wb["ASSIGNMENTS"].iter_rows(min_row=2, values_only=True))
    assert [r[0] for r in rows] == ["Alice", "Bob"]
    assert {r[1] for r in rows} == {"Room A", "Room B"}


def test_infeasible_writes_conflicts(write_input, tmp_path, capsys):
    out = tmp_path / "conflicts.xlsx"
    assert run_assigner.main(["solve", write_input(ROOMS), "--visits", "3", "--out", str(out)]) == 1
    wb = openpyxl.load_workbook(out)
    assert wb.sheetnames == ["CONFLICTS"]
    assert wb["CONFLICTS"].cell(2, 1).value == "Solver status: unsat"


class TestWriteAssignments:

    def test_sheets(self, tmp_path):
        path = tmp_path / "out.xlsx"
        timeslots = [Timeslot("Mon", 2), Timeslot("Hall")]
        write_assignments(str(path), [
            AttendeeAssignment("A", "Mon", ("Mon", "Hall")),
            AttendeeAssignment("B", None, ()),
        ], timeslots)
        wb = openpyxl.load_workbook(path)
        assert wb.sheetnames == ["ASSIGNMENTS", "TIMESLOTS"]
        assert list(wb["ASSIGNMENTS"].iter_rows(values_only=True)) == [
            ("Attendee", "Timeslot", "All timeslots"),
            ("A", "Mon", "Mon, Hall"),
            ("B", "Nothing found", None),
        ]
        assert list(wb["TIMESLOTS"].iter_rows(min_row=2, values_only=True)) == [
            ("Mon", 2, 1),
            ("Hall", "unbounded", 1),
        ]

    def test_conflicts_sheet_replaced(self, tmp_path):
        path = tmp_path / "out.xlsx"
        write_assignments(str(path), [], [Timeslot("Mon", 1)])
        add_conflicts_sheet(str(path), ["first"])
        add_conflicts_sheet(str(path), ["second", "third"])
        wb = openpyxl.load_workbook(path)
        assert wb.sheetnames == ["ASSIGNMENTS", "TIMESLOTS", "CONFLICTS"]
        ws = wb["CONFLICTS"]
        assert [ws.cell(i, 1).value for i in range(1, 4)] == ["Conflict / Issue", "second", "third"]


def test_not_utf8_input(tmp_path, capsys):
    p = tmp_path / "latin1.json"
    p.write_bytes(b'{"attendees": [{"name": "\xff\xfe"}], "timeslots": []}')
    assert run_assigner.main(["solve", str(p)]) == 2
    assert "Malformed input" in capsys.readouterr().err


def test_huge_visits_is_reported_unsatisfiable(write_input, capsys):
    code = run_assigner.main(["solve", write_input(ROOMS), "--visits", str(2**63)])
    assert code == 1
    assert capsys.readouterr().out.startswith("No valid assignment found (unsat)")


@pytest.mark.parametrize("extra", [
    ["--backend", "z3"],
    ["--backend", "z3", "--seed", "11", "--time-limit", "30"],
    ["--seed", "11", "--time-limit", "30"],
])
def test_solve_with_solver_options(write_input, capsys, extra):
    code = run_assigner.main(["solve", write_input(ROOMS)] + extra)
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert sorted(line.split(" -> ")[1] for line in out) == ["Room A", "Room B"]


def test_unwritable_output(write_input, tmp_path, capsys):
    out = tmp_path / "missing" / "out.xlsx"
    assert run_assigner.main(["solve", write_input(ROOMS), "--out", str(out)]) == 4
    assert "Cannot write output" in capsys.readouterr().err
    assert run_assigner.main(
        ["solve", write_input(ROOMS), "--visits", "3", "--out", str(out)]) == 4
    assert "Cannot write output" in capsys.readouterr().err


def test_example_file(capsys):
    example = Path(run_assigner.__file__).resolve().parent / "example.json"
    assert run_assigner.main(["solve", str(example)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert [line.split(" -> ")[0].strip() for line in out] == ["Alice", "Bob", "Carol", "Dave"]
    assert all("Nothing found" not in line for line in out)
