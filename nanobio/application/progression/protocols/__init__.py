from .profile_repository import ProfileRepositoryProtocol

__all__ = ["ProfileRepositoryProtocol"]
