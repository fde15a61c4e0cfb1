from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.models.garden_entry import GardenEntry
from frostline.models.plant import Plant
from frostline.models.setting import Setting
from frostline.models.task import Task
from frostline.models.user import User
from frostline.schemas.user import UserCreate


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    user = User(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    """Delete an owner together with their tasks, plants, settings and journal."""
    await db.execute(delete(Task).where(Task.user_id == user.id))
    await db.execute(delete(Plant).where(Plant.user_id == user.id))
    await db.execute(delete(Setting).where(Setting.user_id == user.id))
    await db.execute(delete(GardenEntry).where(GardenEntry.user_id == user.id))
    await db.delete(user)
    await db.commit()
