from datetime import date

import pytest

from attendly.services.workdays import (
    count_working_days,
    days_in_month,
    implicit_absences,
    last_n_days,
    month_range,
    passed_through_day,
    passed_working_days,
)


class TestCountWorkingDays:
    def test_june_2024_has_twenty_working_days(self) -> None:
        # 2024-06-01 is a Saturday
        assert count_working_days(2024, 6, 30) == 20

    def test_zero_through_day(self) -> None:
        assert count_working_days(2024, 6, 0) == 0

    def test_weekend_prefix_counts_nothing(self) -> None:
        assert count_working_days(2024, 6, 2) == 0
        assert count_working_days(2024, 6, 3) == 1

    def test_through_day_clamped_to_month_length(self) -> None:
        assert count_working_days(2024, 2, 40) == count_working_days(2024, 2, 29)

    @pytest.mark.parametrize("year, month", [(2024, 2), (2024, 6), (2025, 12), (2026, 10)])
    def test_never_exceeds_through_day_and_skips_weekends(self, year: int, month: int) -> None:
        previous = 0
        for d in range(0, days_in_month(year, month) + 1):
            count = count_working_days(year, month, d)
            assert count <= d
            if d > 0 and date(year, month, d).weekday() >= 5:
                assert count == previous
            previous = count


class TestPassedWorkingDays:
    def test_current_month_counts_through_today(self) -> None:
        today = date(2024, 6, 12)
        assert passed_through_day(2024, 6, today) == 12
        assert passed_working_days(2024, 6, today) == 8

    def test_past_month_counts_whole_month(self) -> None:
        assert passed_through_day(2024, 6, date(2024, 8, 1)) == 30
        assert passed_working_days(2024, 6, date(2025, 1, 1)) == 20

    def test_future_month_has_no_elapsed_days(self) -> None:
        assert passed_through_day(2024, 7, date(2024, 6, 12)) == 0
        assert passed_working_days(2025, 1, date(2024, 6, 12)) == 0


class TestHelpers:
    def test_month_range_leap_february(self) -> None:
        assert month_range(2024, 2) == ("2024-02-01", "2024-02-29")
        assert month_range(2023, 2) == ("2023-02-01", "2023-02-28")
        assert month_range(2024, 12) == ("2024-12-01", "2024-12-31")

    def test_implicit_absences_never_negative(self) -> None:
        assert implicit_absences(20, 3) == 17
        assert implicit_absences(0, 2) == 0
        assert implicit_absences(5, 7) == 0

    def test_last_n_days_oldest_first(self) -> None:
        days = last_n_days(date(2024, 6, 3), 7)
        assert days[0] == date(2024, 5, 28)
        assert days[-1] == date(2024, 6, 3)
        assert len(days) == 7
