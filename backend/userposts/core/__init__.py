"""Core Layer: pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, repositories/, infrastructure/ or db/
    - Validation and ownership rules are plain functions over plain values

Design Decisions:
    - Functional core separated from imperative shell: rules are testable without a database
"""
