from .attempt_repository import AttemptRepositoryProtocol
from .progress_repository import ProgressRepositoryProtocol

__all__ = ["AttemptRepositoryProtocol", "ProgressRepositoryProtocol"]
