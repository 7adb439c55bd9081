"""Vote Tally: project sort keys computed from review values. Pure, no IO."""

from collections.abc import Iterable

from app.core.domain_types import ReviewValue


def compute_vote_tally(values: Iterable[str | ReviewValue]) -> tuple[int, int]:
    """Return (vote_total, vote_ratio) where ratio is the rounded % of up votes."""
    values = [ReviewValue(v) for v in values]
    total = len(values)
    if total == 0:
        return 0, 0
    up = sum(1 for v in values if v is ReviewValue.UP)
    return total, round(up / total * 100)
