from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .enums import Role


@dataclass(frozen=True)
class Principal:
    """Identity of whoever invokes an operation.

    Passed explicitly into operations that need an actor, instead of reading
    role flags from ambient session state.
    """

    employee_id: str
    role: Role = Role.EMPLOYEE
    department: Optional[str] = None

    @property
    def can_approve(self) -> bool:
        return self.role in {Role.ADMIN, Role.MANAGER}

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
