"""Onboarding milestone registry and lookup helpers.

The registry is built once at import time and never mutated, so it can be
shared across threads and requests without synchronization.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MilestoneDefinition:
    """A named checkpoint in the onboarding sequence."""

    id: str
    name: str
    description: str
    step: int
    route: str
    required_fields: tuple[str, ...]


ONBOARDING_MILESTONES: tuple[MilestoneDefinition, ...] = (
    # Phase 1: Account Setup
    MilestoneDefinition(
        id="email_setup",
        name="Account Creation",
        description="Email address provided",
        step=0,
        route="/signup",
        required_fields=("email",),
    ),
    MilestoneDefinition(
        id="password_setup",
        name="Account Security",
        description="Password created",
        step=1,
        route="/onboarding/password",
        required_fields=("password",),
    ),
    # Phase 2: Investment Profile
    MilestoneDefinition(
        id="profile_intro",
        name="Profile Setup Started",
        description="Investment profile discovery began",
        step=2,
        route="/onboarding/intro",
        required_fields=("hasSeenIntro",),
    ),
    MilestoneDefinition(
        id="investment_priority",
        name="Investment Preferences",
        description="Investment priorities defined",
        step=3,
        route="/onboarding/most-important",
        required_fields=("investmentPriority",),
    ),
    MilestoneDefinition(
        id="investment_goal",
        name="Investment Goals",
        description="Primary investment goals selected",
        step=4,
        route="/onboarding/motivation",
        required_fields=("investmentGoal",),
    ),
    MilestoneDefinition(
        id="annual_income",
        name="Financial Profile",
        description="Annual income range provided",
        step=5,
        route="/onboarding/income",
        required_fields=("annualIncome",),
    ),
    MilestoneDefinition(
        id="investment_amount",
        name="Investment Capacity",
        description="Annual investment amount selected",
        step=6,
        route="/onboarding/satisfied-amount",
        required_fields=("annualInvestmentAmount",),
    ),
    MilestoneDefinition(
        id="referral_source",
        name="Discovery Channel",
        description="How the investor heard about us",
        step=7,
        route="/onboarding/hdyh",
        required_fields=("referralSource",),
    ),
    MilestoneDefinition(
        id="portfolio_recommendation",
        name="Portfolio Recommended",
        description="Personalized portfolio generated and presented",
        step=8,
        route="/onboarding/investment-recommendation",
        required_fields=("recommendedPortfolio",),
    ),
    # Phase 3: Personal Information
    MilestoneDefinition(
        id="personal_intro",
        name="Personal Information Phase",
        description="Personal details collection started",
        step=9,
        route="/onboarding/personal-intro",
        required_fields=("hasSeenPersonalIntro",),
    ),
    MilestoneDefinition(
        id="account_type",
        name="Account Structure",
        description="Investment account type selected",
        step=10,
        route="/onboarding/select-account-form",
        required_fields=("accountType",),
    ),
    MilestoneDefinition(
        id="personal_details",
        name="Identity Verification",
        description="Personal details and legal name provided",
        step=11,
        route="/onboarding/personal-info",
        required_fields=("firstName", "lastName"),
    ),
    # Phase 4: Investment Setup
    # The invest intro screen (/invest/intro) has no milestone of its own: its
    # hasSeenInvestIntro flag gates payment_amount, so users who have not seen
    # it resume at /invest/payment-amount.
    MilestoneDefinition(
        id="payment_amount",
        name="Investment Amount",
        description="Investment phase opened and initial amount specified",
        step=12,
        route="/invest/payment-amount",
        required_fields=("hasSeenInvestIntro", "initialInvestmentAmount"),
    ),
    MilestoneDefinition(
        id="recurring_setup",
        name="Recurring Investment",
        description="Automatic investment preferences set",
        step=13,
        route="/invest/auto-invest",
        required_fields=("recurringInvestment",),
    ),
    MilestoneDefinition(
        id="completed",
        name="Onboarding Complete",
        description="Full onboarding process completed",
        step=14,
        route="/dashboard",
        required_fields=("onboardingStatus",),
    ),
)

_MILESTONES_BY_STEP: dict[int, MilestoneDefinition] = {m.step: m for m in ONBOARDING_MILESTONES}
_MILESTONES_BY_ID: dict[str, MilestoneDefinition] = {m.id: m for m in ONBOARDING_MILESTONES}

# Milestone a record points at before any progress has been derived
DEFAULT_MILESTONE_ID = ONBOARDING_MILESTONES[0].id


def get_milestone_by_step(step: int) -> MilestoneDefinition | None:
    """Return the milestone whose step equals ``step``, or None."""
    if not isinstance(step, int) or isinstance(step, bool):
        return None
    return _MILESTONES_BY_STEP.get(step)


def get_next_milestone(current_step: int) -> MilestoneDefinition | None:
    """Return the first milestone strictly after ``current_step``, or None.

    Args:
        current_step: Step index the user is currently on

    Returns:
        The next MilestoneDefinition in registry order, or None when the
        user is already on (or past) the final milestone.
    """
    if not isinstance(current_step, int) or isinstance(current_step, bool):
        return None
    for milestone in ONBOARDING_MILESTONES:
        if milestone.step > current_step:
            return milestone
    return None


def get_milestone_by_id(milestone_id: str) -> MilestoneDefinition | None:
    """Return the milestone with the given id, or None."""
    if not isinstance(milestone_id, str):
        return None
    return _MILESTONES_BY_ID.get(milestone_id)


def required_fields() -> tuple[str, ...]:
    """All user data fields the registry tracks, in registry order."""
    seen: dict[str, None] = {}
    for milestone in ONBOARDING_MILESTONES:
        for field in milestone.required_fields:
            seen.setdefault(field, None)
    return tuple(seen)
