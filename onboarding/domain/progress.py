"""Onboarding progress calculation.

Derives where a user is in the onboarding flow from a snapshot of their data
instead of from stored transitions. Pure functions -- no I/O, the snapshot is
never mutated and every call builds a fresh report.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from onboarding.domain.milestones import (
    ONBOARDING_MILESTONES,
    MilestoneDefinition,
    get_milestone_by_step,
    get_next_milestone,
)
from onboarding.domain.phases import OnboardingPhase, classify_phase

logger = structlog.get_logger(__name__)

ONBOARDING_STATUS_FIELD = "onboardingStatus"
ONBOARDING_STATUS_COMPLETED = "completed"


@dataclass(frozen=True)
class ProgressReport:
    """Result of evaluating a user data snapshot against the registry."""

    current_step: int
    current_milestone: MilestoneDefinition | None
    next_milestone: MilestoneDefinition | None
    phase: OnboardingPhase
    completed_milestones: tuple[str, ...]
    progress_percentage: int

    @property
    def is_complete(self) -> bool:
        return self.phase == OnboardingPhase.COMPLETE


def is_field_present(user_data: Any, field: str) -> bool:
    """Check whether a required field counts as filled in.

    ``onboardingStatus`` only counts once it is exactly "completed". Every
    other field is present unless it is missing, None or an empty string, so
    falsy values like 0 and False still count.
    """
    if not isinstance(user_data, Mapping):
        return False

    value = user_data.get(field)
    if field == ONBOARDING_STATUS_FIELD:
        return isinstance(value, str) and value == ONBOARDING_STATUS_COMPLETED
    return value is not None and not (isinstance(value, str) and value == "")


def compute_progress_percentage(current_step: int, total_steps: int) -> int:
    """Percentage of steps reached, rounding halves up and clamped to 0-100."""
    if total_steps <= 0:
        return 0
    percentage = math.floor(100 * current_step / total_steps + 0.5)
    return max(0, min(100, percentage))


def calculate_progress(user_data: Any) -> ProgressReport:
    """Compute onboarding progress from a user data snapshot.

    Args:
        user_data: Mapping of field name -> value. Anything that is not a
            mapping is treated as an empty snapshot.

    Returns:
        ProgressReport for the snapshot

    Milestones are evaluated in registry order and the scan stops at the
    first incomplete one: a later milestone never counts while an earlier
    one is missing data, even if its own fields are filled in.
    """
    current_step = 0
    completed: list[str] = []

    for milestone in ONBOARDING_MILESTONES:
        if all(is_field_present(user_data, field) for field in milestone.required_fields):
            current_step = milestone.step + 1
            completed.append(milestone.id)
        else:
            break

    phase = classify_phase(current_step)
    report = ProgressReport(
        current_step=current_step,
        current_milestone=get_milestone_by_step(current_step),
        next_milestone=get_next_milestone(current_step),
        phase=phase,
        completed_milestones=tuple(completed),
        progress_percentage=compute_progress_percentage(current_step, len(ONBOARDING_MILESTONES)),
    )

    logger.debug(
        "onboarding_progress_calculated",
        current_step=report.current_step,
        phase=str(phase),
        completed_count=len(completed),
        progress_percentage=report.progress_percentage,
    )
    return report
