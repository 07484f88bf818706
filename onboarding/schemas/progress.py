"""Onboarding progress Pydantic schemas, the API contracts for progress tracking."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from onboarding.core.exceptions import InvalidEmailError
from onboarding.domain.analytics import OnboardingAnalytics
from onboarding.domain.milestones import ONBOARDING_MILESTONES, MilestoneDefinition
from onboarding.domain.progress import ProgressReport
from onboarding.domain.records import OnboardingRecord
from onboarding.services.progress_service import normalize_email


class CamelModel(BaseModel):
    """Base model serializing to the camelCase keys the frontend expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MilestoneResponse(CamelModel):
    """A single milestone definition."""

    id: str
    name: str
    description: str
    step: int
    route: str
    required_fields: list[str]

    @classmethod
    def from_definition(cls, milestone: MilestoneDefinition | None) -> "MilestoneResponse | None":
        if milestone is None:
            return None
        return cls(
            id=milestone.id,
            name=milestone.name,
            description=milestone.description,
            step=milestone.step,
            route=milestone.route,
            required_fields=list(milestone.required_fields),
        )


class ProgressResponse(CamelModel):
    """Computed progress for a user data snapshot."""

    current_step: int
    current_milestone: MilestoneResponse | None = None
    next_milestone: MilestoneResponse | None = None
    phase: str
    completed_milestones: list[str] = Field(default_factory=list)
    progress_percentage: int = Field(..., ge=0, le=100)

    @classmethod
    def from_report(cls, report: ProgressReport) -> "ProgressResponse":
        return cls(
            current_step=report.current_step,
            current_milestone=MilestoneResponse.from_definition(report.current_milestone),
            next_milestone=MilestoneResponse.from_definition(report.next_milestone),
            phase=str(report.phase),
            completed_milestones=list(report.completed_milestones),
            progress_percentage=report.progress_percentage,
        )


class OnboardingRecordResponse(CamelModel):
    """Stored progress record with the milestone object for its step."""

    email: str
    current_step: int
    current_milestone: MilestoneResponse | None = None
    completed_milestones: list[str] = Field(default_factory=list)
    phase: str
    progress_percentage: int
    user_data: dict[str, Any] = Field(default_factory=dict)
    last_updated: datetime

    @classmethod
    def from_record(
        cls, record: OnboardingRecord, milestone: MilestoneDefinition | None
    ) -> "OnboardingRecordResponse":
        """Build the response; ``password`` never leaves the service."""
        return cls(
            email=record.email,
            current_step=record.current_step,
            current_milestone=MilestoneResponse.from_definition(milestone),
            completed_milestones=list(record.completed_milestones),
            phase=str(record.phase),
            progress_percentage=record.progress_percentage,
            user_data={k: v for k, v in record.user_data.items() if k != "password"},
            last_updated=record.last_updated,
        )


class AnalyticsResponse(CamelModel):
    """Onboarding funnel statistics."""

    total_users: int
    completed_users: int
    completion_rate: float
    phase_distribution: dict[str, int] = Field(default_factory=dict)
    average_progress: float
    average_step: float

    @classmethod
    def from_analytics(cls, analytics: OnboardingAnalytics) -> "AnalyticsResponse":
        return cls(
            total_users=analytics.total_users,
            completed_users=analytics.completed_users,
            completion_rate=analytics.completion_rate,
            phase_distribution=dict(analytics.phase_distribution),
            average_progress=analytics.average_progress,
            average_step=analytics.average_step,
        )


class UpdateProgressRequest(CamelModel):
    """Request to merge user data into a progress record."""

    email: str = Field(..., min_length=1)
    user_data: dict[str, Any]
    force_step: int | None = Field(default=None, ge=0, le=len(ONBOARDING_MILESTONES))

    @field_validator("email")
    @classmethod
    def normalize_request_email(cls, v: str) -> str:
        """Apply the record key normalization; reject whitespace-only emails."""
        try:
            return normalize_email(v)
        except InvalidEmailError as e:
            raise ValueError(str(e)) from e
