"""
Users service - persistence operations for the users resource
"""

import logging

from database.connection import Database, DatabaseError
from models.user import User
from services.base_service import BaseService, ServiceResult

logger = logging.getLogger(__name__)

CREATE_USERS_TABLE = "CREATE TABLE IF NOT EXISTS users (id SERIAL PRIMARY KEY, name TEXT, email TEXT)"
SELECT_USERS = "SELECT id, name, email FROM users ORDER BY id"
SELECT_USER = "SELECT id, name, email FROM users WHERE id = $1"
INSERT_USER = "INSERT INTO users (name, email) VALUES ($1, $2) RETURNING id"
UPDATE_USER = "UPDATE users SET name = $1, email = $2 WHERE id = $3"
DELETE_USER = "DELETE FROM users WHERE id = $1"


class UsersService(BaseService):
    """Service for user management operations"""

    def __init__(self, db: Database):
        super().__init__(db, "users")

    async def ensure_table(self) -> None:
        """Create the users table if it does not exist yet"""
        await self.db.execute(CREATE_USERS_TABLE)
        logger.info("users table ready")

    async def list_users(self) -> ServiceResult:
        try:
            rows = await self.db.query(SELECT_USERS)
        except DatabaseError as e:
            return self._database_failure("List", e)
        return self._ok([User.from_record(row) for row in rows])

    async def get_user(self, user_id: int) -> ServiceResult:
        """
        Get a user by its ID

        Args:
            user_id: Store-assigned user ID

        Returns:
            ServiceResult with one user, or RESOURCE_NOT_FOUND
        """
        try:
            row = await self.db.query_row(SELECT_USER, user_id)
        except DatabaseError as e:
            return self._database_failure("Get", e)

        if row is None:
            return self._not_found(user_id)
        return self._ok([User.from_record(row)])

    async def create_user(self, user: User) -> ServiceResult:
        """
        Insert a new user; any id on the input is ignored

        Args:
            user: Decoded request body

        Returns:
            ServiceResult with the stored user and its assigned ID
        """
        try:
            row = await self.db.query_row(INSERT_USER, user.name, user.email)
        except DatabaseError as e:
            return self._database_failure("Create", e)

        created = User(id=row["id"], name=user.name, email=user.email)
        logger.info(f"Created user {created.id}")
        return self._ok([created])

    async def update_user(self, user_id: int, user: User) -> ServiceResult:
        """
        Overwrite name and email of an existing user

        Args:
            user_id: ID of the user to update
            user: Decoded request body; its id is ignored

        Returns:
            ServiceResult with the user as re-read after the update,
            or RESOURCE_NOT_FOUND when no row has that ID
        """
        try:
            updated = await self.db.execute(UPDATE_USER, user.name, user.email, user_id)
            if updated == 0:
                return self._not_found(user_id)
            row = await self.db.query_row(SELECT_USER, user_id)
        except DatabaseError as e:
            return self._database_failure("Update", e)

        # Deleted between the update and the re-read
        if row is None:
            return self._not_found(user_id)

        logger.info(f"Updated user {user_id}")
        return self._ok([User.from_record(row)])

    async def delete_user(self, user_id: int) -> ServiceResult:
        """
        Delete a user after checking it exists

        Returns:
            ServiceResult with the deleted user, or RESOURCE_NOT_FOUND
        """
        try:
            row = await self.db.query_row(SELECT_USER, user_id)
            if row is None:
                return self._not_found(user_id)
            await self.db.execute(DELETE_USER, user_id)
        except DatabaseError as e:
            return self._database_failure("Delete", e)

        logger.info(f"Deleted user {user_id}")
        return self._ok([User.from_record(row)])
