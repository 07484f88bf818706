"""Progress record service: merges incoming user data into a stored record.

This is where the pure progress calculator meets a persisted record. The
caller loads and saves the record; every function here returns a new
record and leaves its input untouched.
"""

from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

import structlog

from onboarding.core.exceptions import InvalidEmailError, InvalidStepError
from onboarding.domain.milestones import (
    DEFAULT_MILESTONE_ID,
    ONBOARDING_MILESTONES,
    MilestoneDefinition,
    get_milestone_by_step,
)
from onboarding.domain.phases import OnboardingPhase
from onboarding.domain.progress import calculate_progress
from onboarding.domain.records import OnboardingRecord

logger = structlog.get_logger(__name__)

MAX_STEP = len(ONBOARDING_MILESTONES)


def normalize_email(email: str) -> str:
    """Lower-case and strip an email so it can key a record.

    Raises:
        InvalidEmailError: If the email is not a string or is blank
    """
    if not isinstance(email, str) or not email.strip():
        raise InvalidEmailError("Email is required")
    return email.strip().lower()


def start_record(email: str, now: datetime | None = None) -> OnboardingRecord:
    """Create the initial record for a user who has only given an email.

    Args:
        email: User email (normalized before use)
        now: Current time (injectable for testing, defaults to datetime.now(timezone.utc))
    """
    email = normalize_email(email)
    if now is None:
        now = datetime.now(timezone.utc)

    logger.info("onboarding_record_started", email=email)
    return OnboardingRecord(
        email=email,
        user_data={"email": email, "onboardingStatus": "in_progress"},
        current_step=0,
        current_milestone=DEFAULT_MILESTONE_ID,
        completed_milestones=[],
        phase=OnboardingPhase.ACCOUNT_SETUP,
        progress_percentage=0,
        last_updated=now,
        created_at=now,
    )


def _validate_step(step: Any) -> int:
    if not isinstance(step, int) or isinstance(step, bool) or not 0 <= step <= MAX_STEP:
        raise InvalidStepError(step, MAX_STEP)
    return step


def apply_update(
    record: OnboardingRecord,
    user_data: Mapping[str, Any] | None,
    force_step: int | None = None,
    now: datetime | None = None,
) -> OnboardingRecord:
    """Merge new user data into a record and recompute its progress.

    Args:
        record: Currently stored record
        user_data: Fields to merge (shallow, new values win); None merges nothing
        force_step: Optional step override for admin/testing flows
        now: Current time (injectable for testing, defaults to datetime.now(timezone.utc))

    Returns:
        A new OnboardingRecord; ``record`` is not modified.

    Raises:
        InvalidStepError: If force_step is not an integer in 0..len(registry)

    The stored email always wins over an email inside user_data. Only
    current_step honours force_step; phase, percentage and completed
    milestones always reflect the merged data. A finished record keeps the
    final milestone id rather than falling back to the first one.
    """
    if force_step is not None:
        force_step = _validate_step(force_step)
    if now is None:
        now = datetime.now(timezone.utc)

    merged = {**record.user_data, **(user_data or {}), "email": record.email}
    report = calculate_progress(merged)

    current_step = force_step if force_step is not None else report.current_step
    if report.current_milestone is not None:
        current_milestone = report.current_milestone.id
    elif report.is_complete:
        current_milestone = ONBOARDING_MILESTONES[-1].id
    else:
        current_milestone = DEFAULT_MILESTONE_ID

    logger.info(
        "onboarding_record_updated",
        email=record.email,
        previous_step=record.current_step,
        current_step=current_step,
        forced=force_step is not None,
        phase=str(report.phase),
    )
    return replace(
        record,
        user_data=merged,
        current_step=current_step,
        current_milestone=current_milestone,
        completed_milestones=list(report.completed_milestones),
        phase=report.phase,
        progress_percentage=report.progress_percentage,
        last_updated=now,
    )


def describe_record(record: OnboardingRecord) -> MilestoneDefinition | None:
    """Return the milestone for the record's stored step, or None."""
    return get_milestone_by_step(record.current_step)
