from .flashcard_session import CardFace, DeckState, FlashcardSession, Grade
from .quiz_session import QuizSession, QuizState

__all__ = [
    "CardFace",
    "DeckState",
    "FlashcardSession",
    "Grade",
    "QuizSession",
    "QuizState",
]
