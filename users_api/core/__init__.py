"""Core Layer: user records, validation rules, and the in-memory store.

Invariants:
    - No module in core/ imports from api/, schemas/, or infrastructure/
    - Nothing here knows about HTTP requests or responses
"""
