"""
QuizSession aggregate: the answer/verify/advance state machine of one quiz run.

The aggregate is pure. Persisting attempts and progress is the job of the
application engine, which must record the current attempt before calling
``advance`` (the aggregate refuses to move past an unrecorded attempt).
"""

from dataclasses import dataclass, field
from enum import StrEnum

from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.catalog.entities.question import Question
from nanobio.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvariantViolationError,
    ValidationError,
)
from nanobio.domain.common.percentage import round_half_up_percentage
from nanobio.domain.common.value_objects import OptionLabel, UserId
from nanobio.domain.progress.entities.module_progress import ModuleProgress
from nanobio.domain.progress.entities.quiz_attempt import QuizAttempt


class QuizState(StrEnum):
    LOADING = "loading"
    ANSWERING = "answering"
    REVEALED = "revealed"
    FINISHED = "finished"
    NOT_FOUND = "not_found"


@dataclass
class QuizSession:
    """
    One user's run through the questions of one module.

    Business Rules:
    - Questions are asked in the order given, never re-ordered
    - One selection per question; a new selection before verifying replaces it
    - Verifying needs a selection and scores exactly 0 or 1
    - Exactly one attempt per question is recorded, after verification
    - The score never exceeds the number of questions
    """

    user_id: UserId
    module: Module | None = None
    questions: list[Question] = field(default_factory=list)
    state: QuizState = QuizState.LOADING
    index: int = 0
    selection: OptionLabel | None = None
    score: int = 0
    last_answer_correct: bool | None = None
    revealed_attempt: QuizAttempt | None = None
    _recorded: set[int] = field(default_factory=set, repr=False)

    # Lifecycle

    def load(self, module: Module, questions: list[Question]) -> None:
        """Leave LOADING with the module's questions; no questions finishes at once."""
        self._require(QuizState.LOADING, "load_once")
        self.module = module
        self.questions = list(questions)
        self.state = QuizState.ANSWERING if self.questions else QuizState.FINISHED

    def mark_not_found(self) -> None:
        """Terminal empty state for a module that does not exist."""
        self._require(QuizState.LOADING, "load_once")
        self.state = QuizState.NOT_FOUND

    # Answering

    @property
    def current_question(self) -> Question | None:
        if self.state in (QuizState.ANSWERING, QuizState.REVEALED):
            return self.questions[self.index]
        return None

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def is_last_question(self) -> bool:
        return self.index == len(self.questions) - 1

    def select(self, option: OptionLabel | str) -> None:
        """Choose an option for the current question, replacing any earlier choice."""
        self._require(QuizState.ANSWERING, "select_while_answering")
        self.selection = option if isinstance(option, OptionLabel) else OptionLabel.parse(option)

    def verify(self) -> bool:
        """
        Reveal the current question's answer and score it.

        Returns:
            Whether the selection was correct

        Raises:
            ValidationError: If no option is selected (state is unchanged)
        """
        self._require(QuizState.ANSWERING, "verify_while_answering")
        if self.selection is None:
            raise ValidationError("Select an option before verifying", field="selection")

        question = self.questions[self.index]
        correct = question.is_correct(self.selection)
        if correct:
            self.score += 1
        self.last_answer_correct = correct
        self.revealed_attempt = QuizAttempt(
            user_id=self.user_id,
            question_id=question.id,
            selected_option=self.selection,
            is_correct=correct,
        )
        self.state = QuizState.REVEALED
        return correct

    # Recording and advancing

    @property
    def attempt_recorded(self) -> bool:
        return self.index in self._recorded

    def pending_attempt(self) -> QuizAttempt:
        """The attempt record captured when the current question was verified."""
        self._require(QuizState.REVEALED, "attempt_after_verify")
        if self.revealed_attempt is None:
            raise InvariantViolationError("QuizSession", "revealed question has no attempt")
        return self.revealed_attempt

    def mark_attempt_recorded(self) -> None:
        self._require(QuizState.REVEALED, "attempt_after_verify")
        self._recorded.add(self.index)

    def advance(self) -> None:
        """Move to the next question, or finish after the last one."""
        self._require(QuizState.REVEALED, "advance_after_verify")
        if not self.attempt_recorded:
            raise BusinessRuleViolationError(
                "write_before_advance", "The attempt must be recorded before advancing"
            )
        self.selection = None
        self.last_answer_correct = None
        self.revealed_attempt = None
        if self.is_last_question:
            self.state = QuizState.FINISHED
        else:
            self.index += 1
            self.state = QuizState.ANSWERING

    # Outcome

    @property
    def is_terminal(self) -> bool:
        return self.state in (QuizState.FINISHED, QuizState.NOT_FOUND)

    @property
    def final_percentage(self) -> int:
        return round_half_up_percentage(self.score, len(self.questions))

    @property
    def passed(self) -> bool:
        return self.question_count > 0 and ModuleProgress.passes(self.final_percentage)

    def progress_snapshot(self) -> ModuleProgress:
        """Progress implied by the final score; only meaningful once the score is final."""
        if self.module is None:
            raise BusinessRuleViolationError("progress_needs_module")
        return ModuleProgress.for_quiz_result(self.user_id, self.module.id, self.final_percentage)

    def _require(self, state: QuizState, rule: str) -> None:
        if self.state != state:
            raise BusinessRuleViolationError(
                rule, f"Quiz session is {self.state.value}, expected {state.value}"
            )
