from .module_progress import ModuleProgress
from .quiz_attempt import QuizAttempt

__all__ = ["ModuleProgress", "QuizAttempt"]
