from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.db.session import get_db
from frostline.models.user import User
from frostline.services.user_service import get_user_by_id


async def get_owner(user_id: int, db: AsyncSession = Depends(get_db)) -> User:
    """Resolve the ``{user_id}`` path segment. Identity is enforced upstream of this API."""
    user = await get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


Owner = Annotated[User, Depends(get_owner)]

__all__ = ["Owner", "get_db", "get_owner"]
