"""User CRUD operations."""
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from worktracker.crud.base import CRUDBase
from worktracker.models.user import User
from worktracker.schemas.user import UserCreate, UserUpdate
from worktracker.utils.security import get_password_hash


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    """CRUD operations for User."""

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[User]:
        """Get user by email."""
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def list_newest_first(self, db: AsyncSession) -> List[User]:
        """All users, most recently registered first."""
        result = await db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: UserCreate) -> User:
        """Create a new user with a hashed password."""
        user_data = obj_in.model_dump(exclude={"password"})
        user_data["email"] = user_data["email"].lower()
        user_data["password_hash"] = get_password_hash(obj_in.password)
        db_obj = User(**user_data)

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: User,
        obj_in: UserUpdate,
    ) -> User:
        """Update profile fields; unset and empty values keep the stored ones."""
        update_data = {
            field: value
            for field, value in obj_in.model_dump(exclude_unset=True).items()
            if value
        }
        if "email" in update_data:
            update_data["email"] = update_data["email"].lower()
        return await super().update(db, db_obj=db_obj, obj_in=update_data)


user = CRUDUser(User)
