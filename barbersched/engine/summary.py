"""Derived views over a detected conflict list."""

from typing import List

from barbersched.models.conflict import ScheduleConflict, ConflictSeverity, ConflictSummary


def conflicts_by_severity(conflicts: List[ScheduleConflict], severity: ConflictSeverity) -> List[ScheduleConflict]:
    """Conflicts of one severity, in their original order."""
    return [c for c in conflicts if c.severity == severity]


def summarize_conflicts(conflicts: List[ScheduleConflict]) -> ConflictSummary:
    """Count conflicts per severity.

    high = critical, medium = warning, low = informational.
    """
    return ConflictSummary(
        total=len(conflicts),
        high=len(conflicts_by_severity(conflicts, ConflictSeverity.HIGH)),
        medium=len(conflicts_by_severity(conflicts, ConflictSeverity.MEDIUM)),
        low=len(conflicts_by_severity(conflicts, ConflictSeverity.LOW)),
        has_conflicts=len(conflicts) > 0,
    )
