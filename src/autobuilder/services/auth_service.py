"""Authentication service - registration and login."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.autobuilder.core.exceptions import AuthenticationError, ConflictError
from src.autobuilder.core.logging import get_logger
from src.autobuilder.core.security import (
    DUMMY_PASSWORD_HASH,
    create_access_token,
    hash_password,
    verify_password,
)
from src.autobuilder.models import User
from src.autobuilder.repositories import UserRepository

logger = get_logger(__name__)


class AuthService:
    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create a user and issue an access token.

        Raises:
            ConflictError: If the email is already registered.
        """
        email = email.lower().strip()
        if await self.user_repo.exists_by_email(email):
            raise ConflictError("User already exists", code="USER_EXISTS")

        user = User(email=email, hashed_password=hash_password(password), name=name)
        self.user_repo.add(user)

        # Unique constraint on email handles concurrent registrations
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("User already exists", code="USER_EXISTS") from e

        await self.session.refresh(user)
        logger.info("User registered", user_id=str(user.id))
        return user, create_access_token(user.id, user.email)

    async def authenticate(self, email: str, password: str) -> tuple[User, str]:
        """Check credentials and issue an access token.

        Raises:
            AuthenticationError: On unknown email, wrong password or inactive user.
        """
        user = await self.user_repo.get_by_email(email.lower().strip())

        # Always verify a hash so response time does not reveal whether the email exists
        password_hash = user.hashed_password if user else DUMMY_PASSWORD_HASH
        password_valid = verify_password(password, password_hash)

        if user is None or not password_valid or not user.is_active:
            logger.info("Login failed")
            raise AuthenticationError("Invalid credentials", code="INVALID_CREDENTIALS")

        logger.info("User logged in", user_id=str(user.id))
        return user, create_access_token(user.id, user.email)
