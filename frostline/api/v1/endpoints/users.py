from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.core.deps import Owner, get_db
from frostline.schemas.user import UserCreate, UserRead
from frostline.services.user_service import create_user, delete_user, get_user_by_email

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(data: UserCreate, db: AsyncSession = Depends(get_db)):
    existing = await get_user_by_email(db, data.email)
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")
    return await create_user(db, data)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(owner: Owner):
    return owner


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user(owner: Owner, db: AsyncSession = Depends(get_db)):
    await delete_user(db, owner)
