from decimal import Decimal

import pytest

from app.modules.sales.service import calculate_discount, NO_FLAGS


@pytest.mark.parametrize("flags, rate, discount", [
    (NO_FLAGS, "0", "0.00"),
    ((True, False, False), "0.25", "250.00"),
    ((False, True, True), "0.50", "500.00"),
    ((True, True, True), "0.75", "750.00"),
])
def test_discount_is_cumulative_per_flag(flags, rate, discount):
    assert calculate_discount(Decimal("1000"), flags) == (Decimal(rate), Decimal(discount))


def test_discount_is_rounded_to_cents():
    _, discount = calculate_discount(Decimal("10.01"), (True, False, False))
    assert discount == Decimal("2.50")
