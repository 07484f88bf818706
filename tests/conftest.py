"""Shared test fixtures for all test groups."""

from datetime import datetime, timezone

import pytest


@pytest.fixture
def fixed_now():
    """Deterministic timestamp for record tests."""
    return datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def account_snapshot():
    """User who has finished account setup (email + password)."""
    return {
        "email": "test@example.com",
        "password": "hashedpassword123",
    }


@pytest.fixture
def near_complete_snapshot(account_snapshot):
    """User with every field filled in except the final completion flag."""
    return {
        **account_snapshot,
        "hasSeenIntro": True,
        "investmentPriority": "growth",
        "investmentGoal": "diversification",
        "annualIncome": "100000-200000",
        "annualInvestmentAmount": "10000-25000",
        "referralSource": "google",
        "recommendedPortfolio": {"allocation": "moderate"},
        "hasSeenPersonalIntro": True,
        "accountType": "general",
        "firstName": "John",
        "lastName": "Doe",
        "hasSeenInvestIntro": True,
        "initialInvestmentAmount": 5000,
        "recurringInvestment": {"enabled": True},
        "onboardingStatus": "in_progress",
    }


@pytest.fixture
def complete_snapshot(near_complete_snapshot):
    """User who has finished the whole onboarding flow."""
    return {**near_complete_snapshot, "onboardingStatus": "completed"}
