"""Core Layer: pure domain logic, no IO, no HTTP, no hashing.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic given their inputs

Design Decisions:
    - Functional core separated from imperative shell
"""
