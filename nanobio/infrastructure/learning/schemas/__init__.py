"""Pydantic schemas for live quiz and flashcard sessions."""

from pydantic import BaseModel, Field

from nanobio.domain.catalog.entities.question import Question
from nanobio.domain.learning.entities.flashcard_session import FlashcardSession, Grade
from nanobio.domain.learning.entities.quiz_session import QuizSession, QuizState
from nanobio.infrastructure.catalog.schemas import ModuleSummary
from nanobio.infrastructure.progress.schemas import ModuleProgressSchema


class QuizSessionStartRequest(BaseModel):
    """Schema for starting a quiz on one module."""

    slug: str = Field(..., min_length=1, description="Module slug")

    model_config = {"extra": "forbid"}


class OptionSelectRequest(BaseModel):
    """Schema for choosing an answer; accepts ``a`` as well as ``option_a``."""

    option: str = Field(..., min_length=1, max_length=16)


class QuizQuestionSchema(BaseModel):
    """A question as shown while answering; the correct option is withheld."""

    id: str
    prompt: str
    options: dict[str, str]
    difficulty: int

    @classmethod
    def from_entity(cls, question: Question) -> "QuizQuestionSchema":
        return cls(
            id=question.id.value,
            prompt=question.prompt,
            options={label.value: text for label, text in question.options.items()},
            difficulty=question.difficulty,
        )


class QuizRevealSchema(BaseModel):
    """Outcome of the verified question."""

    correct: bool
    correct_option: str
    explanation: str


class QuizSessionResponse(BaseModel):
    """Schema for the state of the user's quiz session."""

    state: str
    module: ModuleSummary | None
    question_index: int = Field(..., ge=0)
    question_count: int = Field(..., ge=0)
    score: int = Field(..., ge=0)
    selection: str | None
    question: QuizQuestionSchema | None
    reveal: QuizRevealSchema | None = None
    final_percentage: int | None = Field(None, ge=0, le=100)
    passed: bool | None = None

    @classmethod
    def from_session(cls, session: QuizSession) -> "QuizSessionResponse":
        question = session.current_question
        reveal = None
        if session.state is QuizState.REVEALED and question is not None:
            reveal = QuizRevealSchema(
                correct=bool(session.last_answer_correct),
                correct_option=question.correct_option.value,
                explanation=question.explanation,
            )
        finished = session.state is QuizState.FINISHED
        return cls(
            state=session.state.value,
            module=ModuleSummary.from_entity(session.module) if session.module else None,
            question_index=session.index,
            question_count=session.question_count,
            score=session.score,
            selection=session.selection.value if session.selection else None,
            question=QuizQuestionSchema.from_entity(question) if question else None,
            reveal=reveal,
            final_percentage=session.final_percentage if finished else None,
            passed=session.passed if finished else None,
        )


class QuizFinishResponse(BaseModel):
    """Schema for replaying the result write of a finished quiz."""

    session: QuizSessionResponse
    progress: ModuleProgressSchema

class FlashcardSessionStartRequest(BaseModel):
    """Schema for starting a review; without a module every key term is used."""

    module_id: str | None = Field(None, min_length=1)

    model_config = {"extra": "forbid"}


class FlashcardGradeRequest(BaseModel):
    grade: Grade


class FlashcardSessionResponse(BaseModel):
    """Schema for the state of the user's flashcard review."""

    state: str
    position: int = Field(..., ge=0, description="Index of the current card")
    card_count: int = Field(..., ge=0)
    remaining: int = Field(..., ge=0)
    face: str
    card_id: str | None
    text: str | None = Field(None, description="Term on the front, definition on the back")
    mastered: int = Field(..., ge=0)
    reviewing: int = Field(..., ge=0)
    reward_granted: bool

    @classmethod
    def from_session(cls, session: FlashcardSession) -> "FlashcardSessionResponse":
        card = session.current_card
        return cls(
            state=session.state.value,
            position=session.cursor,
            card_count=len(session.cards),
            remaining=session.remaining,
            face=session.face.value,
            card_id=card.id.value if card else None,
            text=session.visible_text,
            mastered=session.mastered,
            reviewing=session.reviewing,
            reward_granted=session.reward_granted,
        )
