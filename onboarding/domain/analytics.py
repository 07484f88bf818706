"""Aggregate statistics over onboarding progress records.

Pure domain function -- callers load the records, this only counts.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from onboarding.domain.progress import ONBOARDING_STATUS_COMPLETED, ONBOARDING_STATUS_FIELD
from onboarding.domain.records import OnboardingRecord


@dataclass
class OnboardingAnalytics:
    """Funnel summary across many users."""

    total_users: int = 0
    completed_users: int = 0
    completion_rate: float = 0.0
    phase_distribution: dict[str, int] = field(default_factory=dict)
    average_progress: float = 0.0
    average_step: float = 0.0


def summarize_progress(records: Iterable[OnboardingRecord]) -> OnboardingAnalytics:
    """Summarize completion, phase distribution and average progress.

    Args:
        records: Stored progress records, one per user

    Returns:
        OnboardingAnalytics. An empty input yields all zeros.

    A user counts as completed only when their stored user data carries
    onboardingStatus == "completed", regardless of the stored step (which
    may have been forced).
    """
    total = 0
    completed = 0
    progress_sum = 0
    step_sum = 0
    phases: Counter[str] = Counter()

    for record in records:
        total += 1
        if record.user_data.get(ONBOARDING_STATUS_FIELD) == ONBOARDING_STATUS_COMPLETED:
            completed += 1
        phases[str(record.phase)] += 1
        progress_sum += record.progress_percentage
        step_sum += record.current_step

    if total == 0:
        return OnboardingAnalytics()

    return OnboardingAnalytics(
        total_users=total,
        completed_users=completed,
        completion_rate=round(completed / total * 100, 2),
        phase_distribution=dict(phases),
        average_progress=progress_sum / total,
        average_step=step_sum / total,
    )
