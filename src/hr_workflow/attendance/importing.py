"""Spreadsheet import source for attendance rows.

Column names are resolved through an explicit, versioned ColumnMapping
supplied by the caller. Cell values are passed through untouched so that
parsing problems surface as per-row rejections in AttendanceLedger.bulk_import.
"""

from __future__ import annotations

import json
import logging
import zipfile
from dataclasses import dataclass
from datetime import datetime, time
from pathlib import Path
from typing import IO, Any, Iterator, Optional, Union

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xls"}


@dataclass(frozen=True)
class ColumnMapping:
    """Spreadsheet header -> canonical row key."""

    version: int
    employee_id: str
    work_date: str
    check_in: str
    check_out: str
    status: Optional[str] = None

    def required_columns(self) -> list[str]:
        return [self.employee_id, self.work_date, self.check_in, self.check_out]

    def as_rename_map(self) -> dict[str, str]:
        out = {
            self.employee_id: "employee_id",
            self.work_date: "work_date",
            self.check_in: "check_in",
            self.check_out: "check_out",
        }
        if self.status:
            out[self.status] = "status"
        return out

    @classmethod
    def from_dict(cls, data: Any) -> "ColumnMapping":
        if not isinstance(data, dict):
            raise ValidationError("Column mapping must be an object")
        try:
            return cls(
                version=int(data["version"]),
                employee_id=str(data["employee_id"]),
                work_date=str(data["work_date"]),
                check_in=str(data["check_in"]),
                check_out=str(data["check_out"]),
                status=data.get("status"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid column mapping: {exc}")

    @classmethod
    def from_json(cls, raw: str) -> "ColumnMapping":
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise ValidationError(f"Column mapping is not valid JSON: {exc}")
        return cls.from_dict(data)


# Matches the columns of the attendance CSV export.
DEFAULT_COLUMN_MAPPING = ColumnMapping(
    version=1,
    employee_id="Employee_ID",
    work_date="Date",
    check_in="In",
    check_out="Out",
    status="Status",
)


def _cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        v = value.strip()
        return None if v in {"", "--", "-"} else v
    if pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, (datetime, time)):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SpreadsheetImportSource:
    """Reads CSV/Excel files into canonical attendance row mappings."""

    def __init__(self, mapping: ColumnMapping = DEFAULT_COLUMN_MAPPING):
        self._mapping = mapping

    @property
    def mapping(self) -> ColumnMapping:
        return self._mapping

    def _load(self, source: Union[str, Path, IO], filename: Optional[str]) -> pd.DataFrame:
        name = filename or (str(source) if isinstance(source, (str, Path)) else "")
        suffix = Path(name).suffix.lower()
        try:
            if suffix in EXCEL_SUFFIXES:
                return pd.read_excel(source, dtype=object)
            return pd.read_csv(source, dtype=str, keep_default_na=False)
        except (ValueError, zipfile.BadZipFile, InvalidFileException) as exc:
            raise ValidationError(f"Could not read {name or 'upload'}: {exc}")

    def read(self, source: Union[str, Path, IO], *, filename: Optional[str] = None) -> list[dict]:
        df = self._load(source, filename)
        df.columns = [str(c).strip() for c in df.columns]

        missing = [c for c in self._mapping.required_columns() if c not in df.columns]
        if missing:
            raise ValidationError(
                f"Missing columns for mapping v{self._mapping.version}: {', '.join(missing)}"
            )

        rename = {k: v for k, v in self._mapping.as_rename_map().items() if k in df.columns}
        df = df[list(rename)].rename(columns=rename)

        rows = list(self._iter_rows(df))
        logger.info("read %d attendance rows (mapping v%d)", len(rows), self._mapping.version)
        return rows

    @staticmethod
    def _iter_rows(df: pd.DataFrame) -> Iterator[dict]:
        for record in df.to_dict(orient="records"):
            yield {key: _cell(value) for key, value in record.items()}
