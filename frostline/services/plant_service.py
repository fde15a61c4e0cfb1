"""
Plant create/update/regenerate operations.

Every successful create or update regenerates the plant's tasks against the
owner's current frost date, committed together with the plant itself.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Union

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.models.plant import Plant
from frostline.models.task import Task
from frostline.schemas.plant import PlantCreate, PlantUpdate
from frostline.services.frost_date import get_frost_date
from frostline.services.plant_config import PlantConfiguration, ensure_valid
from frostline.services.task_engine import regenerate_plant

logger = logging.getLogger(__name__)

_OFFSET_FIELDS = {
    "seed_start": "seed_start_offset_days",
    "hardening": "hardening_offset_days",
    "transplant": "transplant_offset_days",
}
_TEXT_FIELDS = ("variety", "notes", "days_to_sprout", "seed_depth", "plant_spacing")
_CONFIG_COLUMNS = (
    "name",
    "sowing_method",
    "variety",
    "seed_start_offset_days",
    "hardening_offset_days",
    "transplant_offset_days",
    "days_to_sprout",
    "seed_depth",
    "plant_spacing",
)


def plant_fields(data: Union[PlantCreate, PlantUpdate]) -> dict:
    """Map submitted fields onto Plant columns. Only fields the caller sent are included."""
    fields = {}
    for key, value in data.model_dump(exclude_unset=True).items():
        if key in _OFFSET_FIELDS:
            offset = getattr(data, key)
            fields[_OFFSET_FIELDS[key]] = offset.offset_days if offset is not None else None
        elif key in _TEXT_FIELDS and isinstance(value, str):
            # Blank optional text means "not set"
            fields[key] = value.strip() or None
        elif isinstance(value, str):
            fields[key] = value.strip()
        else:
            fields[key] = value
    return fields


async def get_owned_plant(db: AsyncSession, user_id: int, plant_id: int) -> Optional[Plant]:
    return await db.scalar(select(Plant).where(Plant.id == plant_id, Plant.user_id == user_id))


async def list_plants(db: AsyncSession, user_id: int, muted: Optional[bool] = None) -> list[Plant]:
    query = select(Plant).where(Plant.user_id == user_id)
    if muted is True:
        query = query.where(Plant.muted_at.isnot(None))
    elif muted is False:
        query = query.where(Plant.muted_at.is_(None))
    result = await db.execute(query.order_by(Plant.name, Plant.id))
    return list(result.scalars().all())


async def validate_and_save(
    db: AsyncSession,
    user_id: int,
    data: Union[PlantCreate, PlantUpdate],
    plant: Optional[Plant] = None,
) -> Plant:
    """
    Validate the submitted configuration, save the plant and regenerate its tasks.

    For updates the submitted fields are merged over the stored plant before
    validation. Raises ConfigurationInvalid before anything is written, or
    GenerationFailure if the save/regeneration could not be committed.
    """
    fields = plant_fields(data)
    current = {col: getattr(plant, col) for col in _CONFIG_COLUMNS} if plant is not None else {}
    merged = {**current, **fields}
    ensure_valid(
        PlantConfiguration(
            name=merged.get("name") or "",
            sowing_method=merged.get("sowing_method") or "",
            variety=merged.get("variety"),
            seed_start_offset_days=merged.get("seed_start_offset_days"),
            hardening_offset_days=merged.get("hardening_offset_days"),
            transplant_offset_days=merged.get("transplant_offset_days"),
            days_to_sprout=merged.get("days_to_sprout"),
            seed_depth=merged.get("seed_depth"),
            plant_spacing=merged.get("plant_spacing"),
        )
    )

    frost_date = await get_frost_date(db, user_id)

    if plant is None:
        plant = Plant(user_id=user_id)
        db.add(plant)
    for field, value in fields.items():
        setattr(plant, field, value)

    tasks = await regenerate_plant(db, plant, frost_date)
    await db.refresh(plant)
    logger.info("validate_and_save: plant %d saved with %d tasks", plant.id, len(tasks))
    return plant


async def regenerate(db: AsyncSession, plant: Plant) -> list[Task]:
    """Rebuild the plant's tasks from its stored configuration and the current frost date."""
    frost_date = await get_frost_date(db, plant.user_id)
    return await regenerate_plant(db, plant, frost_date)


async def set_muted(db: AsyncSession, plant: Plant, muted: bool) -> Plant:
    if muted and plant.muted_at is None:
        plant.muted_at = datetime.now(timezone.utc)
    elif not muted:
        plant.muted_at = None
    await db.commit()
    await db.refresh(plant)
    return plant


async def delete_plant(db: AsyncSession, plant: Plant) -> None:
    # Explicit so backends without enforced FK cascades behave the same
    await db.execute(delete(Task).where(Task.plant_id == plant.id))
    await db.delete(plant)
    await db.commit()
