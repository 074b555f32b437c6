from __future__ import annotations

import io
from datetime import date, time

import pandas as pd
import pytest

from hr_workflow.attendance.importing import DEFAULT_COLUMN_MAPPING, ColumnMapping, SpreadsheetImportSource
from hr_workflow.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from hr_workflow.attendance.service import AttendanceLedger
from hr_workflow.core.exceptions import ValidationError

CSV = """Employee_ID,Date,In,Out,Status,Minutes
EMP01,2026-02-02,08:55,17:00,,485
EMP02,2026-02-02,--,--,ABSENT,0
EMP03,2026-02-02,17:00,09:00,,0
"""


def test_reads_csv_with_default_mapping():
    rows = SpreadsheetImportSource().read(io.StringIO(CSV), filename="biometric.csv")

    assert rows[0] == {
        "employee_id": "EMP01",
        "work_date": "2026-02-02",
        "check_in": "08:55",
        "check_out": "17:00",
        "status": None,
    }
    assert rows[1]["check_in"] is None
    assert rows[1]["status"] == "ABSENT"


def test_csv_rows_feed_bulk_import(employees):
    repo = InMemoryAttendanceRepository()
    ledger = AttendanceLedger(repo, employees)

    result = ledger.bulk_import(SpreadsheetImportSource().read(io.StringIO(CSV), filename="biometric.csv"))

    assert result.accepted == 2
    assert len(result.rejected) == 1
    assert repo.get("EMP01", date(2026, 2, 2)).work_minutes == 485


def test_custom_mapping_version():
    mapping = ColumnMapping(version=2, employee_id="Emp Code", work_date="Day", check_in="Punch In", check_out="Punch Out")
    data = "Emp Code,Day,Punch In,Punch Out\nEMP02,2026-02-05,09:00,12:00\n"

    rows = SpreadsheetImportSource(mapping).read(io.StringIO(data), filename="v2.csv")

    assert rows == [{"employee_id": "EMP02", "work_date": "2026-02-05", "check_in": "09:00", "check_out": "12:00"}]


def test_missing_columns_fail_the_file():
    with pytest.raises(ValidationError) as exc:
        SpreadsheetImportSource().read(io.StringIO("Employee,Date\nEMP01,2026-02-02\n"), filename="x.csv")

    assert "Employee_ID" in str(exc.value)


def test_mapping_from_dict_requires_all_columns():
    with pytest.raises(ValidationError):
        ColumnMapping.from_dict({"version": 3, "employee_id": "Id"})


def test_reads_excel_cells(tmp_path):
    path = tmp_path / "biometric.xlsx"
    pd.DataFrame(
        {
            "Employee_ID": ["EMP01"],
            "Date": [pd.Timestamp("2026-02-02")],
            "In": [time(9, 0)],
            "Out": [time(17, 15)],
            "Status": [None],
        }
    ).to_excel(path, index=False)

    rows = SpreadsheetImportSource(DEFAULT_COLUMN_MAPPING).read(path)

    assert rows[0]["employee_id"] == "EMP01"
    assert rows[0]["work_date"].date() == date(2026, 2, 2)
    assert rows[0]["check_in"] == time(9, 0)
    assert rows[0]["status"] is None


def test_corrupt_excel_file_is_a_validation_error():
    with pytest.raises(ValidationError):
        SpreadsheetImportSource().read(io.BytesIO(b"not a zip"), filename="biometric.xlsx")


def test_unparseable_csv_is_a_validation_error():
    with pytest.raises(ValidationError):
        SpreadsheetImportSource().read(io.StringIO(""), filename="empty.csv")


@pytest.mark.parametrize("raw", ["{bad", "[1, 2]", '"v1"'])
def test_mapping_from_json_rejects_bad_input(raw):
    with pytest.raises(ValidationError):
        ColumnMapping.from_json(raw)


def test_mapping_from_json():
    mapping = ColumnMapping.from_json(
        '{"version": 2, "employee_id": "Id", "work_date": "Day", "check_in": "A", "check_out": "B"}'
    )

    assert mapping.version == 2
    assert mapping.status is None
