"""Infrastructure Layer: in-memory stores, credentials, tokens, logging.

Invariants:
    - Infrastructure never imports domain rules, only records and errors
"""
