from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, field_validator
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.core.deps import Owner, get_db
from frostline.models.garden_entry import GardenEntry

router = APIRouter(prefix="/users/{user_id}/journal", tags=["journal"])


# ── Schemas ───────────────────────────────────────────────────────────────────


def _require_body(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("Body can't be blank")
    return value


class GardenEntryCreate(BaseModel):
    entry_date: date
    body: str

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value: str) -> str:
        return _require_body(value)


class GardenEntryUpdate(BaseModel):
    entry_date: Optional[date] = None
    body: Optional[str] = None

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value: Optional[str]) -> Optional[str]:
        return _require_body(value)


# ── Helpers ───────────────────────────────────────────────────────────────────


def _entry_to_dict(entry: GardenEntry) -> dict:
    return {
        "id": entry.id,
        "entry_date": entry.entry_date.isoformat(),
        "body": entry.body,
        "created_at": entry.created_at,
        "updated_at": entry.updated_at,
    }


async def _load_entry(db: AsyncSession, entry_id: int, user_id: int) -> GardenEntry:
    result = await db.execute(
        select(GardenEntry)
        .where(GardenEntry.id == entry_id, GardenEntry.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    entry = result.scalar_one_or_none()
    if entry is None:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    return entry


# ── Endpoints ─────────────────────────────────────────────────────────────────


@router.get("")
async def list_garden_entries(
    owner: Owner,
    db: AsyncSession = Depends(get_db),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
) -> dict:
    base = select(GardenEntry).where(GardenEntry.user_id == owner.id)
    total = await db.scalar(
        select(func.count()).select_from(GardenEntry).where(GardenEntry.user_id == owner.id)
    ) or 0
    offset = (page - 1) * per_page

    result = await db.execute(
        base
        .order_by(GardenEntry.entry_date.desc(), GardenEntry.created_at.desc(), GardenEntry.id.desc())
        .offset(offset)
        .limit(per_page)
    )
    entries = result.scalars().all()

    return {
        "items": [_entry_to_dict(e) for e in entries],
        "total": total,
        "page": page,
        "per_page": per_page,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_garden_entry(
    data: GardenEntryCreate,
    owner: Owner,
    db: AsyncSession = Depends(get_db),
) -> dict:
    entry = GardenEntry(user_id=owner.id, entry_date=data.entry_date, body=data.body)
    db.add(entry)
    await db.commit()
    await db.refresh(entry)
    return _entry_to_dict(entry)


@router.get("/{entry_id}")
async def get_garden_entry(
    entry_id: int,
    owner: Owner,
    db: AsyncSession = Depends(get_db),
) -> dict:
    entry = await _load_entry(db, entry_id, owner.id)
    return _entry_to_dict(entry)


@router.patch("/{entry_id}")
async def update_garden_entry(
    entry_id: int,
    data: GardenEntryUpdate,
    owner: Owner,
    db: AsyncSession = Depends(get_db),
) -> dict:
    entry = await _load_entry(db, entry_id, owner.id)

    update_data = data.model_dump(exclude_unset=True)
    # entry_date and body can't be cleared
    for field, value in update_data.items():
        if value is not None:
            setattr(entry, field, value)

    await db.commit()
    await db.refresh(entry)
    return _entry_to_dict(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_garden_entry(
    entry_id: int,
    owner: Owner,
    db: AsyncSession = Depends(get_db),
) -> None:
    entry = await _load_entry(db, entry_id, owner.id)
    await db.delete(entry)
    await db.commit()
