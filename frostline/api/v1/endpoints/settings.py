from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.core.deps import Owner, get_db
from frostline.core.exceptions import DateParseError
from frostline.schemas.setting import FrostDateRead, FrostDateUpdateRequest, FrostDateUpdateResult
from frostline.services.frost_date import read_frost_date, set_frost_date

router = APIRouter(prefix="/users/{user_id}/settings", tags=["settings"])


@router.get("/frost-date", response_model=FrostDateRead)
async def get_frost_date(owner: Owner, db: AsyncSession = Depends(get_db)):
    frost_date, is_default = await read_frost_date(db, owner.id)
    return FrostDateRead(frost_date=frost_date, is_default=is_default)


@router.put("/frost-date", response_model=FrostDateUpdateResult)
async def update_frost_date(
    body: FrostDateUpdateRequest, owner: Owner, db: AsyncSession = Depends(get_db)
):
    try:
        return await set_frost_date(db, owner.id, body.frost_date)
    except DateParseError:
        raise HTTPException(status_code=422, detail="Invalid date format")
