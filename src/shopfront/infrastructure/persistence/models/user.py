"""SQLAlchemy model for the users table.

Usernames and emails are unique regardless of case.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from shopfront.infrastructure.persistence.database import Base


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Primary key; ``str(id)`` is the token subject.
        username: Login name.
        email: User's email address.
        password_hash: Argon2 hash string. Never returned by the API.
        created_at: Timestamp when the user was created.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Login name",
    )
    email: Mapped[str] = mapped_column(
        String(254),
        nullable=False,
        comment="User email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Argon2id password hash",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint(
            "length(username) BETWEEN 3 AND 64", name="ck_users_username_length"
        ),
        CheckConstraint("length(email) BETWEEN 3 AND 254", name="ck_users_email_length"),
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"


# Case-insensitive uniqueness, so "Alice" and "alice" cannot both register.
Index("ix_users_username_lower", func.lower(UserModel.username), unique=True)
Index("ix_users_email_lower", func.lower(UserModel.email), unique=True)
