from .key_term_repository import KeyTermRepositoryProtocol
from .module_repository import ModuleRepositoryProtocol
from .question_repository import QuestionRepositoryProtocol

__all__ = ["KeyTermRepositoryProtocol", "ModuleRepositoryProtocol", "QuestionRepositoryProtocol"]
