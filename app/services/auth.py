"""Authentication service handling signup, credential checks and token issuance."""

from datetime import timedelta

from app.configs import settings
from app.errors import DuplicateEntryError, InvalidCredentialsError, UserDeactivatedError
from app.managers.password_manager import get_password_hasher, hash_password, verify_password
from app.managers.token_manager import create_access_token
from app.models import UserDB
from app.monitoring import get_logger
from app.repositories import UserRepository
from app.schemas.auth import LoginResponse, SignupRequest
from app.schemas.user import UserPublic

logger = get_logger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, user_repo: UserRepository) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
        """
        self.user_repo = user_repo

    async def signup(self, payload: SignupRequest) -> UserDB:
        """
        Register a new account with the ``user`` role.

        A requested role is never honoured; elevation goes through the admin
        role endpoint.

        Args:
            payload: Validated signup data

        Returns:
            UserDB: Created user

        Raises:
            DuplicateEntryError: If username or email is already taken
        """
        if payload.role and payload.role != "user":
            logger.warning(
                f"Ignoring self-assigned role '{payload.role}' on signup of {payload.username}",
            )

        if conflict := await self.user_repo.find_conflict(payload.username, payload.email):
            raise DuplicateEntryError(detail=conflict)

        user = await self.user_repo.create(
            name=payload.name,
            email=payload.email,
            username=payload.username,
            password_hash=await hash_password(payload.password.get_secret_value()),
        )
        logger.info(f"User {user.id} signed up")
        return user

    async def authenticate_user(self, username_or_email: str, password: str | None) -> UserDB:
        """
        Authenticate a user by username or email and password.

        Args:
            username_or_email: User username or email
            password: User password

        Returns:
            UserDB: Authenticated user

        Raises:
            InvalidCredentialsError: If the user is unknown or the password is wrong
            UserDeactivatedError: If the account was deactivated
        """
        user = await self.user_repo.get_by_login(username_or_email)
        stored_hash = user.password_hash if user else None
        # Unknown users still pay for a (dummy) verification
        if not await verify_password(password or "", stored_hash) or user is None:
            raise InvalidCredentialsError

        if not user.is_active:
            raise UserDeactivatedError

        if password and get_password_hasher().needs_rehash(user.password_hash):
            await self.user_repo.update(user, {"password_hash": await hash_password(password)})
            logger.info(f"Password hash upgraded for user {user.id}")

        return user

    def create_token_for_user(self, user: UserDB) -> LoginResponse:
        """
        Issue an access token for a user.

        Args:
            user: Authenticated user

        Returns:
            LoginResponse: Token together with the public profile
        """
        token = create_access_token(
            user_id=user.id,
            role=user.role,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        return LoginResponse(token=token, user=UserPublic.model_validate(user))
