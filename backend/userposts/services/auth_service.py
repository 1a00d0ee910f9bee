"""Auth Service: email-only login issuing a signed identity token.

Invariants:
    - Unknown email is ResourceNotFoundError (404), not 401
    - The issued token embeds the user id and expires after settings.access_token_ttl_seconds (1 hour)

Design Decisions:
    - No password or second factor: intentional simplification, recorded in DESIGN.md.
      Do not expose this service on a public network as-is.
"""

import logging

from userposts.core.repository_protocols import UserRepository
from userposts.infrastructure.tokens import TokenService
from userposts.services.user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = UserService(users)
        self._tokens = tokens

    async def login(self, email: str) -> str:
        user = await self._users.find_by_email(email)
        token = self._tokens.issue(user.id)
        logger.info("Token issued", extra={"user_id": str(user.id)})
        return token
