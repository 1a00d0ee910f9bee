"""Infrastructure: database sessions, structured logging and token signing.

Invariants:
    - Everything here does IO or holds process-wide resources
    - Nothing here encodes business rules
"""
