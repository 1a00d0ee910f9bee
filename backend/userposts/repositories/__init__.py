"""Repositories: SQLAlchemy implementations of core/repository_protocols.py.

Invariants:
    - Rows are translated to core.entities at this boundary; ORM objects never escape
    - Every mutating call commits its own unit of work
    - Unique-constraint violations surface as AlreadyExistsError, never as IntegrityError
"""
