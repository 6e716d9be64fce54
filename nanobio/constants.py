"""
Application constants.

Scoring rules shared by the quiz, flashcard and progression code.
"""

# Minimum final quiz percentage that completes a module
PASS_THRESHOLD = 70

# Experience awarded once for reviewing a whole flashcard deck
FLASHCARD_DECK_XP = 50

# Experience needed per level step; level 1 starts at 0 XP
XP_PER_LEVEL = 500

# Name of the store procedure that adds experience to a profile
INCREMENT_XP_PROCEDURE = "increment_xp"
