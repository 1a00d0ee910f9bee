"""Route Modules: one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to services/ and core/)
    - Path identifiers are validated on mutating routes only; reads resolve malformed ids to not-found
"""
