"""User repository for database operations."""

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shopfront.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user.

        Args:
            user: User model to create.

        Returns:
            Created user model with its ID assigned.
        """
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: int) -> UserModel | None:
        """Get a user by ID."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> UserModel | None:
        """Get a user by username, ignoring case."""
        result = await self.session.execute(
            select(UserModel).where(func.lower(UserModel.username) == username.lower())
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by email, ignoring case."""
        result = await self.session.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_by_login(self, login: str) -> UserModel | None:
        """Get a user by username or email, ignoring case.

        Args:
            login: The identifier a user typed at login.

        Returns:
            User model if found, None otherwise.
        """
        if "@" in login:
            user = await self.get_by_email(login)
            if user is not None:
                return user
        return await self.get_by_username(login)

    async def username_or_email_exists(self, username: str, email: str) -> bool:
        """Check whether either identifier is already taken (case-insensitive)."""
        result = await self.session.execute(
            select(UserModel.id)
            .where(
                or_(
                    func.lower(UserModel.username) == username.lower(),
                    func.lower(UserModel.email) == email.lower(),
                )
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def update_password_hash(self, user_id: int, password_hash: str) -> None:
        """Replace a user's stored password hash (credential rotation)."""
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash)
        )
