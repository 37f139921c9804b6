"""SQL implementation of User repository."""

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from credo.domain.error import AlreadyExistsError
from credo.domain.model import PROVIDER_ID_FIELDS, User
from credo.domain.repository import UserRepository
from credo.domain.value import AuthProvider, Email, UserId
from credo.persistence.mappers import row_to_user, user_to_dict
from credo.persistence.tables import users_table


class SqlUserRepository(UserRepository):
    """SQLAlchemy Core implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, *criteria) -> Optional[User]:
        stmt = select(users_table).where(*criteria)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Normalized email to search for

        Returns:
            User if found, None otherwise
        """
        return await self._find_one(users_table.c.email == email.root)

    async def find_by_provider_identity(
        self, provider: AuthProvider, external_id: str
    ) -> Optional[User]:
        """Find a user by their external provider identity.

        Args:
            provider: The authentication provider
            external_id: The user's ID on that provider

        Returns:
            User if found, None otherwise
        """
        column = users_table.c[PROVIDER_ID_FIELDS[provider]]
        return await self._find_one(column == external_id)

    async def find_by_provider_identity_or_email(
        self, provider: AuthProvider, external_id: str, email: Email
    ) -> Optional[User]:
        """Find a user by external identity, falling back to email.

        Single query; with two matching rows the external id match wins.

        Args:
            provider: The authentication provider
            external_id: The user's ID on that provider
            email: Email reported by the provider

        Returns:
            User if found, None otherwise
        """
        field = PROVIDER_ID_FIELDS[provider]
        column = users_table.c[field]
        stmt = select(users_table).where(
            or_(column == external_id, users_table.c.email == email.root)
        )
        result = await self.session.execute(stmt)
        rows = [dict(row) for row in result.mappings().all()]
        if not rows:
            return None

        for row in rows:
            if row[field] == external_id:
                return row_to_user(row)
        return row_to_user(rows[0])

    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: User to insert

        Returns:
            Inserted user

        Raises:
            AlreadyExistsError: If the email or an external id is taken
        """
        stmt = users_table.insert().values(**user_to_dict(user))
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except IntegrityError as e:
            # The failed statement poisons the transaction
            await self.session.rollback()
            raise AlreadyExistsError("User", user.email.root) from e
        return user

    async def save(self, user: User) -> User:
        """Update an existing user.

        Args:
            user: User to save

        Returns:
            Saved user
        """
        values = user_to_dict(user)
        values.pop("id")
        values.pop("created_at")
        stmt = users_table.update().where(users_table.c.id == user.id).values(**values)
        await self.session.execute(stmt)
        await self.session.flush()
        return user
