"""Stored onboarding progress record.

Mirrors what a persistence layer keeps per user: the merged user data plus
the progress fields derived from it at the last update.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from onboarding.domain.milestones import DEFAULT_MILESTONE_ID
from onboarding.domain.phases import OnboardingPhase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OnboardingRecord:
    """Per-user onboarding progress as persisted by the caller."""

    email: str
    user_data: dict[str, Any] = field(default_factory=dict)
    current_step: int = 0
    current_milestone: str = DEFAULT_MILESTONE_ID
    completed_milestones: list[str] = field(default_factory=list)
    phase: OnboardingPhase = OnboardingPhase.ACCOUNT_SETUP
    progress_percentage: int = 0
    last_updated: datetime = field(default_factory=_utcnow)
    created_at: datetime = field(default_factory=_utcnow)
