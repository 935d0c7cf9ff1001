from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from unistay.services.pricing import as_utc, billable_months, calculate_total_price

D0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "days, months",
    [
        (1, 1),
        (29, 1),
        (30, 1),
        (31, 2),
        (60, 2),
        (61, 3),
        (365, 13),
    ],
)
def test_billable_months_rounds_partial_months_up(days, months):
    assert billable_months(D0, D0 + timedelta(days=days)) == months


def test_sixty_one_days_bill_three_months():
    price = Decimal("250.50")
    assert calculate_total_price(price, D0, D0 + timedelta(days=61)) == price * 3


def test_thirty_one_day_stay_costs_two_months():
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    end = datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert calculate_total_price(Decimal("300000"), start, end) == Decimal("600000.00")


def test_any_remainder_counts_as_a_month():
    assert billable_months(D0, D0 + timedelta(days=30, seconds=1)) == 2


def test_naive_datetimes_are_treated_as_utc():
    naive = datetime(2024, 1, 1)
    assert as_utc(naive) == D0
    assert billable_months(naive, D0 + timedelta(days=30)) == 1


def test_aware_datetimes_in_other_zones_are_normalised():
    plus_three = timezone(timedelta(hours=3))
    start = datetime(2024, 1, 1, 3, 0, tzinfo=plus_three)  # midnight UTC
    assert billable_months(start, D0 + timedelta(days=30)) == 1


@pytest.mark.parametrize("days", [0, -1])
def test_non_positive_durations_are_rejected(days):
    with pytest.raises(ValueError):
        billable_months(D0, D0 + timedelta(days=days))


def test_price_is_quantized_to_cents():
    total = calculate_total_price(Decimal("100"), D0, D0 + timedelta(days=10))
    assert total == Decimal("100.00")
    assert total.as_tuple().exponent == -2
