"""Onboarding progress engine.

Derives a user's position in the signup flow (step, phase, next milestone,
percentage) from whatever user data has been collected so far.
"""

from onboarding.domain.milestones import (
    ONBOARDING_MILESTONES,
    MilestoneDefinition,
    get_milestone_by_id,
    get_milestone_by_step,
    get_next_milestone,
)
from onboarding.domain.phases import OnboardingPhase, classify_phase
from onboarding.domain.progress import ProgressReport, calculate_progress

__all__ = [
    "ONBOARDING_MILESTONES",
    "MilestoneDefinition",
    "OnboardingPhase",
    "ProgressReport",
    "calculate_progress",
    "classify_phase",
    "get_milestone_by_id",
    "get_milestone_by_step",
    "get_next_milestone",
]
