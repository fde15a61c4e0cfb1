from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.core.deps import Owner, get_db
from frostline.core.exceptions import ConfigurationInvalid, GenerationFailure
from frostline.models.plant import Plant
from frostline.schemas.plant import PlantCreate, PlantRead, PlantUpdate
from frostline.schemas.task import TaskRead
from frostline.services import plant_service
from frostline.services.task_service import list_plant_tasks

router = APIRouter(prefix="/users/{user_id}/plants", tags=["plants"])


# ── Helpers ────────────────────────────────────────────────────────────────────


async def _get_owned_plant(db: AsyncSession, plant_id: int, user_id: int) -> Plant:
    plant = await plant_service.get_owned_plant(db, user_id, plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return plant


async def _save(db: AsyncSession, user_id: int, data, plant: Optional[Plant] = None) -> Plant:
    try:
        return await plant_service.validate_and_save(db, user_id, data, plant)
    except ConfigurationInvalid as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail={"errors": exc.errors}
        )
    except GenerationFailure:
        raise HTTPException(status_code=500, detail="Could not save plant and its tasks")


# ── Plant endpoints ────────────────────────────────────────────────────────────


@router.get("", response_model=list[PlantRead])
async def list_plants(
    owner: Owner,
    db: AsyncSession = Depends(get_db),
    muted: Optional[bool] = Query(None, description="true = only muted, false = only active"),
):
    return await plant_service.list_plants(db, owner.id, muted=muted)


@router.post("", response_model=PlantRead, status_code=status.HTTP_201_CREATED)
async def create_plant(data: PlantCreate, owner: Owner, db: AsyncSession = Depends(get_db)):
    return await _save(db, owner.id, data)


@router.get("/{plant_id}", response_model=PlantRead)
async def get_plant(plant_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    return await _get_owned_plant(db, plant_id, owner.id)


@router.patch("/{plant_id}", response_model=PlantRead)
async def update_plant(
    plant_id: int, data: PlantUpdate, owner: Owner, db: AsyncSession = Depends(get_db)
):
    plant = await _get_owned_plant(db, plant_id, owner.id)
    return await _save(db, owner.id, data, plant)


@router.delete("/{plant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plant(plant_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    plant = await _get_owned_plant(db, plant_id, owner.id)
    await plant_service.delete_plant(db, plant)


@router.get("/{plant_id}/tasks", response_model=list[TaskRead])
async def get_plant_tasks(plant_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    plant = await _get_owned_plant(db, plant_id, owner.id)
    return await list_plant_tasks(db, plant.id)


@router.post("/{plant_id}/regenerate", response_model=list[TaskRead])
async def regenerate_tasks(plant_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    plant = await _get_owned_plant(db, plant_id, owner.id)
    try:
        await plant_service.regenerate(db, plant)
    except GenerationFailure:
        raise HTTPException(status_code=500, detail="Could not regenerate tasks")
    return await list_plant_tasks(db, plant_id)


@router.post("/{plant_id}/mute", response_model=PlantRead)
async def mute_plant(plant_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    plant = await _get_owned_plant(db, plant_id, owner.id)
    return await plant_service.set_muted(db, plant, True)


@router.post("/{plant_id}/unmute", response_model=PlantRead)
async def unmute_plant(plant_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    plant = await _get_owned_plant(db, plant_id, owner.id)
    return await plant_service.set_muted(db, plant, False)
