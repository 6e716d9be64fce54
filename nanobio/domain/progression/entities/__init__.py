from .profile import Profile, level_for_xp

__all__ = ["Profile", "level_for_xp"]
