"""Tests for onboarding progress calculation.

Tests enforce pure function behavior:
- Gated, in-order milestone evaluation
- Presence rule (only missing/None/"" are absent)
- Never raises for malformed snapshots
"""
import pytest

from onboarding.domain.milestones import ONBOARDING_MILESTONES
from onboarding.domain.phases import OnboardingPhase
from onboarding.domain.progress import (
    ProgressReport,
    calculate_progress,
    compute_progress_percentage,
    is_field_present,
)

pytestmark = pytest.mark.unit

ALL_IDS = [m.id for m in ONBOARDING_MILESTONES]


class TestIsFieldPresent:
    """Test the field presence rule."""

    @pytest.mark.parametrize("value", [0, False, {}, [], {"allocation": "moderate"}, "x", " ", 0.0])
    def test_falsy_but_valid_values_are_present(self, value):
        """Only missing, None and empty string count as absent."""
        assert is_field_present({"annualIncome": value}, "annualIncome") is True

    @pytest.mark.parametrize("snapshot", [{}, {"annualIncome": None}, {"annualIncome": ""}])
    def test_absent_values(self, snapshot):
        """Missing, None and empty string are absent."""
        assert is_field_present(snapshot, "annualIncome") is False

    def test_onboarding_status_requires_completed(self):
        """onboardingStatus only counts when exactly "completed"."""
        assert is_field_present({"onboardingStatus": "completed"}, "onboardingStatus") is True
        assert is_field_present({"onboardingStatus": "in_progress"}, "onboardingStatus") is False
        assert is_field_present({"onboardingStatus": "Completed"}, "onboardingStatus") is False
        assert is_field_present({"onboardingStatus": True}, "onboardingStatus") is False
        assert is_field_present({}, "onboardingStatus") is False

    @pytest.mark.parametrize("user_data", [None, "email", 42, ["email"]])
    def test_non_mapping_is_absent(self, user_data):
        """Non-mapping snapshots never have fields."""
        assert is_field_present(user_data, "email") is False


class TestComputeProgressPercentage:
    """Test percentage rounding."""

    def test_rounds_to_nearest(self):
        """1/15 -> 6.67 -> 7, 2/15 -> 13.33 -> 13."""
        assert compute_progress_percentage(1, 15) == 7
        assert compute_progress_percentage(2, 15) == 13
        assert compute_progress_percentage(14, 15) == 93

    def test_half_rounds_up(self):
        """Halves round up rather than to even."""
        assert compute_progress_percentage(1, 8) == 13  # 12.5
        assert compute_progress_percentage(5, 8) == 63  # 62.5

    def test_bounds(self):
        """Result is clamped to 0-100 and safe for an empty registry."""
        assert compute_progress_percentage(0, 15) == 0
        assert compute_progress_percentage(15, 15) == 100
        assert compute_progress_percentage(20, 15) == 100
        assert compute_progress_percentage(3, 0) == 0


class TestCalculateProgress:
    """Test progress reports for representative users."""

    def test_empty_snapshot(self):
        """Brand new user is at step 0 in Account Setup."""
        report = calculate_progress({})
        assert isinstance(report, ProgressReport)
        assert report.current_step == 0
        assert report.completed_milestones == ()
        assert report.progress_percentage == 0
        assert report.phase == "Account Setup"
        assert report.current_milestone.id == "email_setup"
        assert report.next_milestone.id == "password_setup"
        assert report.is_complete is False

    def test_email_only(self):
        """Email completes the first milestone."""
        report = calculate_progress({"email": "a@b.com"})
        assert report.current_step == 1
        assert report.completed_milestones == ("email_setup",)
        assert report.phase == OnboardingPhase.ACCOUNT_SETUP
        assert report.current_milestone.id == "password_setup"
        assert report.next_milestone.id == "profile_intro"
        assert report.progress_percentage == 7

    def test_email_and_password_enters_investment_profile(self):
        """Step 2 is the boundary into Investment Profile."""
        report = calculate_progress({"email": "a@b.com", "password": "x"})
        assert report.current_step == 2
        assert report.completed_milestones == ("email_setup", "password_setup")
        assert report.phase == "Investment Profile"
        assert report.current_milestone.id == "profile_intro"
        assert report.progress_percentage == 13

    def test_mid_profile_user(self, account_snapshot):
        """User partway through the investment profile."""
        report = calculate_progress({
            **account_snapshot,
            "hasSeenIntro": True,
            "investmentPriority": "growth",
            "investmentGoal": "diversification",
        })
        assert report.current_step == 5
        assert report.phase == OnboardingPhase.INVESTMENT_PROFILE
        assert report.current_milestone.id == "annual_income"
        assert report.progress_percentage == 33

    def test_later_field_without_earlier_is_gated(self):
        """A later milestone never counts while an earlier one is incomplete."""
        report = calculate_progress({"investmentGoal": "growth"})
        assert report.current_step == 0
        assert report.completed_milestones == ()

    def test_gap_in_middle_stops_scan(self, near_complete_snapshot):
        """Removing a mid-flow field stops progress right there."""
        snapshot = {**near_complete_snapshot, "annualIncome": ""}
        report = calculate_progress(snapshot)
        assert report.current_step == 5
        assert report.completed_milestones == tuple(ALL_IDS[:5])
        assert report.current_milestone.id == "annual_income"

    def test_multi_field_milestone_needs_all_fields(self, near_complete_snapshot):
        """personal_details needs both first and last name."""
        snapshot = dict(near_complete_snapshot)
        del snapshot["lastName"]
        report = calculate_progress(snapshot)
        assert report.current_step == 11
        assert report.phase == OnboardingPhase.PERSONAL_INFORMATION
        assert "personal_details" not in report.completed_milestones

    def test_near_complete_user(self, near_complete_snapshot):
        """Everything but the completion flag lands on the final milestone."""
        report = calculate_progress(near_complete_snapshot)
        assert report.current_step == 14
        assert report.phase == OnboardingPhase.INVESTMENT_SETUP
        assert report.current_milestone.id == "completed"
        assert report.next_milestone is None
        assert report.progress_percentage == 93
        assert report.is_complete is False

    def test_complete_user(self, complete_snapshot):
        """Every field including onboardingStatus == "completed"."""
        report = calculate_progress(complete_snapshot)
        assert report.current_step == 15
        assert report.progress_percentage == 100
        assert report.phase == "Complete"
        assert report.current_milestone is None
        assert report.next_milestone is None
        assert report.completed_milestones == tuple(ALL_IDS)
        assert report.is_complete is True

    def test_falsy_values_count_as_present(self, near_complete_snapshot):
        """Amount 0 and flag False do not block progress."""
        snapshot = {
            **near_complete_snapshot,
            "hasSeenIntro": False,
            "initialInvestmentAmount": 0,
            "onboardingStatus": "completed",
        }
        assert calculate_progress(snapshot).current_step == 15

    @pytest.mark.parametrize("user_data", [None, "a@b.com", 42, ["email"], object()])
    def test_malformed_snapshot_degrades_to_zero(self, user_data):
        """Non-mapping snapshots never raise."""
        report = calculate_progress(user_data)
        assert report.current_step == 0
        assert report.progress_percentage == 0
        assert report.phase == OnboardingPhase.ACCOUNT_SETUP

    def test_snapshot_not_mutated(self, near_complete_snapshot):
        """Calculation leaves the caller's data untouched."""
        before = dict(near_complete_snapshot)
        calculate_progress(near_complete_snapshot)
        assert near_complete_snapshot == before

    def test_extra_fields_ignored(self):
        """Unknown fields have no effect."""
        assert calculate_progress({"favouriteColour": "blue"}).current_step == 0


class TestProgressProperties:
    """Properties that hold for every snapshot built up field by field."""

    def _cumulative_snapshots(self, complete_snapshot):
        snapshot: dict = {}
        yield dict(snapshot)
        for milestone in ONBOARDING_MILESTONES:
            for field in milestone.required_fields:
                snapshot[field] = complete_snapshot[field]
                yield dict(snapshot)

    def test_progress_never_decreases_as_fields_are_added(self, complete_snapshot):
        """Adding data never lowers the reported step."""
        previous = -1
        for snapshot in self._cumulative_snapshots(complete_snapshot):
            step = calculate_progress(snapshot).current_step
            assert step >= previous
            previous = step
        assert previous == 15

    def test_completed_is_always_a_prefix(self, complete_snapshot):
        """Completed milestones never have a gap."""
        for snapshot in self._cumulative_snapshots(complete_snapshot):
            completed = calculate_progress(snapshot).completed_milestones
            assert list(completed) == ALL_IDS[: len(completed)]

    def test_percentage_in_bounds(self, complete_snapshot):
        """Percentage is always within 0-100."""
        for snapshot in self._cumulative_snapshots(complete_snapshot):
            assert 0 <= calculate_progress(snapshot).progress_percentage <= 100

    def test_each_field_in_reverse_order_is_gated(self, complete_snapshot):
        """Filling fields from the end backwards reports nothing until email arrives."""
        snapshot: dict = {}
        for field in reversed(list(complete_snapshot)):
            if field == "email":
                continue
            snapshot[field] = complete_snapshot[field]
            assert calculate_progress(snapshot).current_step == 0
        snapshot["email"] = complete_snapshot["email"]
        assert calculate_progress(snapshot).current_step == 15
