"""Domain Services: orchestrate repository calls and enforce cross-record business rules.

Invariants:
    - Services depend on core/repository_protocols.py, never on SQLAlchemy
    - Services receive already-validated input (rule sets from schemas/)
    - Domain errors propagate unchanged; services never translate them to HTTP

Design Decisions:
    - One class per aggregate, constructed per request with its repositories injected
"""
