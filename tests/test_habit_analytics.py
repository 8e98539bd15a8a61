"""Tests for completion rates, dashboard stats and habit views."""

from __future__ import annotations

from conftest import EVERY_DAY, TODAY, days_ago, make_habit, make_log

from habitvision.services.habits import (
    Stats,
    completion_rate,
    compute_stats,
    habit_view,
    overall_completion_rate,
)


class TestCompletionRate:
    def test_no_logs_returns_zero(self):
        assert completion_rate(1, []) == 0

    def test_two_of_three_rounds_to_67(self):
        logs = [make_log(days_ago(1)), make_log(days_ago(2)), make_log(days_ago(3), completed=False)]
        assert completion_rate(1, logs) == 67

    def test_half_rounds_up(self):
        logs = [make_log(days_ago(1)), make_log(days_ago(2), completed=False)]
        assert completion_rate(1, logs) == 50
        logs = [make_log(days_ago(n)) for n in range(1, 8)] + [make_log(days_ago(8), completed=False)]
        # 7 / 8 == 87.5
        assert completion_rate(1, logs) == 88

    def test_only_logs_of_the_habit_count(self):
        logs = [
            make_log(days_ago(1), habit_id=1),
            make_log(days_ago(1), completed=False, habit_id=2),
            make_log(days_ago(2), completed=False, habit_id=2),
        ]
        assert completion_rate(1, logs) == 100
        assert completion_rate(2, logs) == 0
        assert completion_rate(3, logs) == 0

    def test_denominator_is_logged_days_not_due_days(self):
        # Only two completions logged over a fortnight of due days.
        logs = [make_log(days_ago(3)), make_log(days_ago(10))]
        assert completion_rate(1, logs) == 100

    def test_overall_rate_spans_habits(self):
        logs = [
            make_log(days_ago(1), habit_id=1),
            make_log(days_ago(1), completed=False, habit_id=2),
            make_log(days_ago(2), habit_id=2),
            make_log(days_ago(2), habit_id=3),
        ]
        assert overall_completion_rate(logs) == 75
        assert overall_completion_rate([]) == 0


class TestStats:
    def test_empty_account(self):
        assert compute_stats([], [], today=TODAY) == Stats()

    def test_aggregates_across_habits(self):
        running = make_habit(EVERY_DAY, habit_id=1)
        reading = make_habit(["monday", "wednesday", "friday"], habit_id=2)
        paused = make_habit(EVERY_DAY, habit_id=3, active=False)

        logs = [make_log(days_ago(n), habit_id=1) for n in (1, 2)]
        logs.append(make_log(days_ago(3), completed=False, habit_id=1))
        logs += [make_log(days_ago(n), habit_id=2) for n in (2, 5, 7, 9)]
        logs += [make_log(days_ago(n), habit_id=3) for n in range(1, 7)]

        stats = compute_stats([running, reading, paused], logs, today=TODAY)

        assert stats.active_habits == 2
        # Inactive habits do not contribute to the current streak.
        assert stats.current_streak == 4
        assert stats.longest_streak == 6
        assert stats.total_completed == 12
        assert stats.total_skipped == 1
        assert stats.completion_rate == 92

    def test_to_dict_uses_camel_case(self):
        stats = Stats(
            current_streak=1,
            completion_rate=2,
            active_habits=3,
            longest_streak=4,
            total_completed=5,
            total_skipped=6,
        )
        assert stats.to_dict() == {
            "currentStreak": 1,
            "completionRate": 2,
            "activeHabits": 3,
            "longestStreak": 4,
            "totalCompleted": 5,
            "totalSkipped": 6,
        }


def test_habit_view_includes_derived_fields():
    habit = make_habit(["friday", "monday"], habit_id=7)
    habit.description = "Stretch"
    logs = [
        make_log(days_ago(2), habit_id=7),
        make_log(days_ago(5), completed=False, habit_id=7),
        make_log(days_ago(1), habit_id=8),
    ]

    view = habit_view(habit, logs, today=TODAY)

    assert view["id"] == 7
    assert view["frequency"] == ["monday", "friday"]
    assert view["frequency_label"] == "Mon, Fri"
    assert view["streak"] == 1
    assert view["completion_rate"] == 50
    assert view["completions"] == [
        {"date": days_ago(2).isoformat(), "completed": True},
        {"date": days_ago(5).isoformat(), "completed": False},
    ]
    assert view["category"] == "other"
    assert view["color"] == "primary"
    assert view["created_at"] == TODAY.isoformat()
