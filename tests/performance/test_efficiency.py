from decimal import Decimal

import pytest

from hr_workflow.core.exceptions import ValidationError
from hr_workflow.performance.efficiency import EfficiencyPolicy


@pytest.mark.parametrize(
    "estimated, actual, raw, shown",
    [
        (100, 100, Decimal("100"), Decimal("100")),
        (80, 100, Decimal("80"), Decimal("80")),
        (300, 100, Decimal("300"), Decimal("150")),
        (40, 0, Decimal("0"), Decimal("0")),
    ],
)
def test_raw_and_clamped(estimated, actual, raw, shown):
    policy = EfficiencyPolicy()

    assert policy.raw(estimated, actual) == raw
    assert policy.clamped(estimated, actual) == shown


def test_custom_ceiling():
    assert EfficiencyPolicy(ceiling=Decimal("120")).clamped(300, 100) == Decimal("120")


def test_rejects_negative_inputs():
    with pytest.raises(ValidationError):
        EfficiencyPolicy().raw(-1, 10)


def test_rejects_non_positive_ceiling():
    with pytest.raises(ValidationError):
        EfficiencyPolicy(ceiling=Decimal("0"))
