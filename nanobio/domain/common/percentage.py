"""Integer percentage arithmetic shared by every mastery figure."""


def round_half_up_percentage(part: int, whole: int) -> int:
    """
    Return ``round(100 * part / whole)`` with halves rounded up.

    Integer arithmetic only, so 1/8 (12.5%) is 13 and 2/3 is 67 on every
    platform. A zero or negative ``whole`` yields 0.
    """
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)
