"""Pydantic Schemas: request rule sets and response shapes for API endpoints.

Invariants:
    - Request schemas subclass core.validation.RuleSet (create) or PartialRuleSet (update)
    - Response schemas read domain entities via from_attributes and emit camelCase

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - One validate_<entity>_<operation> function per rule set: routes never touch pydantic errors
"""
