"""Pydantic schemas for progress, dashboard and analytics responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from nanobio.domain.progress.entities.module_progress import ModuleProgress
from nanobio.domain.progress.services.domain_aggregator import DomainStat
from nanobio.infrastructure.progression.schemas import ProfileSchema


class ModuleProgressSchema(BaseModel):
    """Schema for one user's progress on one module."""

    module_id: str
    completed: bool
    progress: int = Field(..., ge=0, le=100)
    last_score: int | None = Field(None, ge=0, le=100)
    last_opened: datetime | None = None

    @classmethod
    def from_entity(cls, progress: ModuleProgress) -> "ModuleProgressSchema":
        return cls(
            module_id=progress.module_id.value,
            completed=progress.completed,
            progress=progress.progress,
            last_score=progress.last_score,
            last_opened=progress.last_opened,
        )


class RecentModuleSchema(BaseModel):
    """The module the user opened most recently."""

    module_id: str
    title: str
    slug: str
    progress: ModuleProgressSchema


class DashboardResponse(BaseModel):
    """Schema for the dashboard summary."""

    profile: ProfileSchema | None
    total_modules: int = Field(..., ge=0)
    completed_modules: int = Field(..., ge=0)
    mastery_percentage: int = Field(..., ge=0, le=100)
    recent_module: RecentModuleSchema | None


class DomainStatSchema(BaseModel):
    """Completion figures for one domain."""

    domain_name: str
    completed: int = Field(..., ge=0)
    total: int = Field(..., ge=1)
    percentage: int = Field(..., ge=0, le=100)

    @classmethod
    def from_stat(cls, stat: DomainStat) -> "DomainStatSchema":
        return cls(
            domain_name=stat.domain_name,
            completed=stat.completed,
            total=stat.total,
            percentage=stat.percentage,
        )


class AnalyticsResponse(BaseModel):
    """Schema for the analytics page."""

    profile: ProfileSchema | None
    domain_stats: list[DomainStatSchema]
    total_completed: int = Field(..., ge=0)
    accuracy: int = Field(..., ge=0, le=100, description="Share of correct quiz answers")
