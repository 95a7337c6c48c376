"""PostgreSQL implementation of UserRepository."""

from typing import Any

from teamhub.adapters.db.app_db import AppDatabase
from teamhub.core.auth.errors import UserNotFoundError
from teamhub.core.auth.types import AvatarUrl, Email, HashedPassword, User, UserId

USER_COLUMNS = """id, email, password, name, avatar_url, is_active,
    password_reset_token, password_reset_expires, created_at, updated_at"""


def row_to_user(row: dict[str, Any]) -> User:
    """Convert database row to User entity."""
    avatar = row.get("avatar_url")
    return User(
        id=UserId(str(row["id"])),
        email=Email(row["email"]),
        password=HashedPassword(row["password"]),
        name=row["name"],
        avatar_url=AvatarUrl(avatar) if avatar else None,
        is_active=row.get("is_active", True),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        password_reset_token=row.get("password_reset_token"),
        password_reset_expires=row.get("password_reset_expires"),
    )


class PostgresUserRepository:
    """PostgreSQL implementation of user repository."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    async def find_by_id(self, user_id: UserId) -> User | None:
        row = await self._db.fetch_one(
            f"SELECT {USER_COLUMNS} FROM users WHERE id = $1",
            user_id.uuid,
        )
        return row_to_user(row) if row else None

    async def find_by_email(self, email: Email) -> User | None:
        row = await self._db.fetch_one(
            f"SELECT {USER_COLUMNS} FROM users WHERE email = $1",
            email.value,
        )
        return row_to_user(row) if row else None

    async def exists_by_email(self, email: Email) -> bool:
        result = await self._db.fetch_value(
            "SELECT EXISTS(SELECT 1 FROM users WHERE email = $1)",
            email.value,
        )
        return bool(result)

    async def save(self, user: User) -> User:
        """Insert the user, or update every mutable column if it exists."""
        row = await self._db.execute_returning(
            f"""INSERT INTO users (id, email, password, name, avatar_url, is_active,
                   password_reset_token, password_reset_expires, created_at, updated_at)
               VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
               ON CONFLICT (id) DO UPDATE SET
                   email = EXCLUDED.email,
                   password = EXCLUDED.password,
                   name = EXCLUDED.name,
                   avatar_url = EXCLUDED.avatar_url,
                   is_active = EXCLUDED.is_active,
                   password_reset_token = EXCLUDED.password_reset_token,
                   password_reset_expires = EXCLUDED.password_reset_expires,
                   updated_at = EXCLUDED.updated_at
               RETURNING {USER_COLUMNS}""",
            user.id.uuid,
            user.email.value,
            user.password.value,
            user.name,
            user.avatar_url.value if user.avatar_url else None,
            user.is_active,
            user.password_reset_token,
            user.password_reset_expires,
            user.created_at,
            user.updated_at,
        )
        if row is None:
            raise RuntimeError("Failed to save user")
        return row_to_user(row)

    async def delete(self, user_id: UserId) -> None:
        await self._db.execute("DELETE FROM users WHERE id = $1", user_id.uuid)

    async def find_by_password_reset_token(self, token: str) -> User | None:
        row = await self._db.fetch_one(
            f"SELECT {USER_COLUMNS} FROM users WHERE password_reset_token = $1",
            token,
        )
        return row_to_user(row) if row else None

    async def update_profile(
        self, user_id: UserId, name: str, avatar_url: AvatarUrl | None
    ) -> User:
        row = await self._db.execute_returning(
            f"""UPDATE users SET name = $2, avatar_url = $3, updated_at = NOW()
               WHERE id = $1
               RETURNING {USER_COLUMNS}""",
            user_id.uuid,
            name,
            avatar_url.value if avatar_url else None,
        )
        if row is None:
            raise UserNotFoundError(user_id.value)
        return row_to_user(row)
