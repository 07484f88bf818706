"""Phase classification for onboarding steps.

Pure domain logic with no external dependencies.
"""
from enum import StrEnum


class OnboardingPhase(StrEnum):
    """Coarse, user-facing grouping of onboarding steps."""

    ACCOUNT_SETUP = "Account Setup"
    INVESTMENT_PROFILE = "Investment Profile"
    PERSONAL_INFORMATION = "Personal Information"
    INVESTMENT_SETUP = "Investment Setup"
    COMPLETE = "Complete"


# Inclusive upper bound of each phase; anything past the last bound is COMPLETE
PHASE_UPPER_BOUNDS: tuple[tuple[int, OnboardingPhase], ...] = (
    (1, OnboardingPhase.ACCOUNT_SETUP),
    (8, OnboardingPhase.INVESTMENT_PROFILE),
    (11, OnboardingPhase.PERSONAL_INFORMATION),
    (14, OnboardingPhase.INVESTMENT_SETUP),
)


def classify_phase(step: int) -> OnboardingPhase:
    """Map a step index to its phase label.

    Total over all integers: negative steps are Account Setup and
    anything at or beyond 15 is Complete.
    """
    for upper_bound, phase in PHASE_UPPER_BOUNDS:
        if step <= upper_bound:
            return phase
    return OnboardingPhase.COMPLETE
