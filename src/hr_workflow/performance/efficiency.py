from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..common.validators import require_non_negative
from ..core.constants import DEFAULT_EFFICIENCY_CEILING
from ..core.exceptions import ValidationError

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class EfficiencyPolicy:
    """Estimated-vs-actual time as a percentage, clamped for display.

    The clamp is presentation policy only; nothing stores the clamped value.
    """

    ceiling: Decimal = Decimal(DEFAULT_EFFICIENCY_CEILING)

    def __post_init__(self) -> None:
        if Decimal(self.ceiling) <= 0:
            raise ValidationError("ceiling must be positive")

    def raw(self, estimated: Any, actual: Any) -> Decimal:
        est = require_non_negative(estimated, "estimated")
        act = require_non_negative(actual, "actual")
        if act == 0:
            return Decimal("0")
        return est / act * HUNDRED

    def clamped(self, estimated: Any, actual: Any) -> Decimal:
        return min(self.raw(estimated, actual), Decimal(self.ceiling))
