"""Pydantic schemas for module, lecture and quiz catalog responses."""

from pydantic import BaseModel, Field

from nanobio.domain.catalog.entities.key_term import KeyTerm
from nanobio.domain.catalog.entities.module import Module
from nanobio.infrastructure.progress.schemas import ModuleProgressSchema


class ModuleSummary(BaseModel):
    """Base schema for a catalog module."""

    id: str
    title: str
    slug: str
    domain: str | None
    description: str | None
    difficulty: int = Field(..., ge=1, le=3, description="Difficulty tier")
    estimated_minutes: int = Field(..., ge=0)

    @classmethod
    def from_entity(cls, module: Module) -> "ModuleSummary":
        return cls(
            id=module.id.value,
            title=module.title,
            slug=module.slug,
            domain=module.domain,
            description=module.description,
            difficulty=module.difficulty,
            estimated_minutes=module.estimated_minutes,
        )


class ModuleListItem(BaseModel):
    """Schema for one entry of the learn page catalog."""

    module: ModuleSummary
    completed: bool = Field(..., description="Whether the current user completed the module")


class ModuleListResponse(BaseModel):
    modules: list[ModuleListItem]


class KeyTermSchema(BaseModel):
    """Schema for a key term (flashcard)."""

    id: str
    term: str
    definition: str

    @classmethod
    def from_entity(cls, key_term: KeyTerm) -> "KeyTermSchema":
        return cls(id=key_term.id.value, term=key_term.term, definition=key_term.definition)


class LectureResponse(BaseModel):
    """Schema for the lecture page: module content and its key terms."""

    module: ModuleSummary
    content: str | None = Field(None, description="Lecture body as markdown")
    key_terms: list[KeyTermSchema]


class ModuleCompleteResponse(BaseModel):
    """Schema for marking a module complete."""

    success: bool = Field(..., description="Whether the completion was recorded")
    message: str = Field(..., description="Response message")
    progress: ModuleProgressSchema


class QuizListItem(BaseModel):
    """Schema for one entry of the quiz catalog."""

    module: ModuleSummary
    tier: str = Field(..., description="Foundation, Intermediate or Advanced")
    category: str = Field(..., description="Category derived from the module title")


class QuizListResponse(BaseModel):
    quizzes: list[QuizListItem]
