"""StudyMatch Application Package: campus study-partner matchmaking.

Invariants:
    - Package root contains no executable code (no import side effects)
"""
