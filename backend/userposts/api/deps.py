"""Request Dependencies: the Authorization Gate and per-request service wiring.

Invariants:
    - get_caller_id runs before the handler body: a missing/malformed header or an
      unverifiable token raises UnauthorizedError (401) and nothing else executes
    - The resolved caller identity is also attached to request.state.caller_id
    - Services are built per request on the request's AsyncSession

Design Decisions:
    - HTTPBearer(auto_error=False): we raise our own UnauthorizedError so the error envelope
      is uniform (FastAPI's default would answer 403 with a different body)
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from userposts.config import get_settings
from userposts.core.domain_types import UserId
from userposts.core.errors import UnauthorizedError
from userposts.infrastructure.database import get_db
from userposts.infrastructure.tokens import TokenService
from userposts.repositories.address_repository import SqlAlchemyAddressRepository
from userposts.repositories.post_repository import SqlAlchemyPostRepository
from userposts.repositories.user_repository import SqlAlchemyUserRepository
from userposts.services.address_service import AddressService
from userposts.services.auth_service import AuthService
from userposts.services.post_service import PostService
from userposts.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service() -> TokenService:
    return TokenService.from_settings(get_settings())


async def get_caller_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> UserId:
    """Authorization Gate: bearer token in, caller identity out."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    caller_id = UserId(tokens.verify(credentials.credentials))
    request.state.caller_id = caller_id
    return caller_id


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(SqlAlchemyUserRepository(db))


def get_address_service(db: AsyncSession = Depends(get_db)) -> AddressService:
    return AddressService(SqlAlchemyAddressRepository(db), SqlAlchemyUserRepository(db))


def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(SqlAlchemyPostRepository(db), SqlAlchemyUserRepository(db))


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(SqlAlchemyUserRepository(db), tokens)
