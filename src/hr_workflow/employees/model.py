from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by the workflow core.

    Note: Plain data object, no storage access.
    """

    employee_id: str
    full_name: str
    department: Optional[str] = None
    shift_start: Optional[time] = None
