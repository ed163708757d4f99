import pytest

from savings.trend import analyze_pattern, classify_trend, valid_months

from conftest import bucket, steady_buckets


def test_constant_surplus_is_stable_with_no_variance():
    pattern = analyze_pattern(steady_buckets(3000, 2000))

    assert pattern.average_monthly_income == pytest.approx(3000)
    assert pattern.average_monthly_expense == pytest.approx(2000)
    assert pattern.average_monthly_surplus == pytest.approx(1000)
    assert pattern.monthly_variance == 0
    assert pattern.trend == "stable"
    assert len(pattern.monthly_data) == 6


def test_empty_months_kept_in_series_but_not_averaged():
    buckets = [
        bucket("2024-02", 0, 0),
        bucket("2024-03", 0, 0),
        bucket("2024-04", 4000, 1000),
        bucket("2024-05", 2000, 1000),
    ]
    pattern = analyze_pattern(buckets)

    assert len(valid_months(buckets)) == 2
    assert pattern.average_monthly_income == pytest.approx(3000)
    assert pattern.average_monthly_surplus == pytest.approx(2000)
    assert [b.month for b in pattern.monthly_data] == ["2024-02", "2024-03", "2024-04", "2024-05"]


def test_no_activity_at_all():
    pattern = analyze_pattern([bucket("2024-07", 0, 0)])

    assert pattern.average_monthly_surplus == 0
    assert pattern.monthly_variance == 0
    assert pattern.trend == "stable"


def test_variance_is_population_std_dev():
    pattern = analyze_pattern([bucket("2024-06", 1100, 1000), bucket("2024-07", 1300, 1000)])
    # surpluses 100 and 300 around a mean of 200
    assert pattern.monthly_variance == pytest.approx(100)


def test_single_active_month_has_zero_variance():
    pattern = analyze_pattern([bucket("2024-06", 0, 0), bucket("2024-07", 500, 100)])
    assert pattern.monthly_variance == 0


def test_trend_needs_three_active_months():
    months = [bucket("2024-06", 1000, 900), bucket("2024-07", 5000, 900)]
    assert classify_trend(months) == "stable"


@pytest.mark.parametrize(
    "surpluses, expected",
    [
        ([100, 100, 200, 200], "increasing"),
        ([200, 200, 100, 100], "decreasing"),
        ([100, 100, 105, 105], "stable"),
        ([100, 100, 95, 95], "stable"),
        # odd count: the later half gets the extra month
        ([100, 100, 100], "stable"),
        ([100, 200, 200], "increasing"),
    ],
)
def test_trend_classification(surpluses, expected):
    months = [bucket(f"2024-0{i + 1}", 5000 + s, 5000) for i, s in enumerate(surpluses)]
    assert classify_trend(months) == expected


def test_trend_with_zero_first_half_uses_unit_denominator():
    flat = [bucket("2024-01", 100, 100), bucket("2024-02", 100, 100)]

    rising = flat + [bucket("2024-03", 150, 100), bucket("2024-04", 150, 100)]
    assert classify_trend(rising) == "increasing"

    barely = flat + [bucket("2024-03", 100.05, 100), bucket("2024-04", 100.05, 100)]
    assert classify_trend(barely) == "stable"


def test_negative_first_half_compares_against_its_magnitude():
    months = [
        bucket("2024-01", 1000, 1200),
        bucket("2024-02", 1000, 1200),
        bucket("2024-03", 1000, 1100),
        bucket("2024-04", 1000, 1100),
    ]
    # -200 -> -100 is an improvement of 50%
    assert classify_trend(months) == "increasing"
