"""Tests for per-severity conflict counts."""

from datetime import date

from barbersched.engine.summary import summarize_conflicts, conflicts_by_severity
from barbersched.models.conflict import ScheduleConflict, ConflictType, ConflictSeverity


def _conflict(conflict_id, severity):
    return ScheduleConflict(
        id=conflict_id,
        type=ConflictType.OVERLAP,
        severity=severity,
        date=date(2024, 2, 15),
        description="Overlapping appointments",
    )


def test_summary_counts_each_severity():
    conflicts = [
        _conflict("1", ConflictSeverity.HIGH),
        _conflict("2", ConflictSeverity.HIGH),
        _conflict("3", ConflictSeverity.MEDIUM),
        _conflict("4", ConflictSeverity.LOW),
    ]

    summary = summarize_conflicts(conflicts)

    assert summary.total == 4
    assert summary.high == 2
    assert summary.medium == 1
    assert summary.low == 1
    assert summary.has_conflicts is True


def test_summary_of_no_conflicts():
    summary = summarize_conflicts([])

    assert summary.total == 0
    assert summary.has_conflicts is False


def test_conflicts_by_severity_keeps_order():
    conflicts = [
        _conflict("1", ConflictSeverity.LOW),
        _conflict("2", ConflictSeverity.HIGH),
        _conflict("3", ConflictSeverity.LOW),
    ]

    assert [c.id for c in conflicts_by_severity(conflicts, ConflictSeverity.LOW)] == ["1", "3"]
