"""Users API package: in-memory user directory served over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
