"""
Per-owner frost date and its propagation.

Each owner has at most one stored frost date (settings row keyed by
``frost_date``); owners who never set one get settings.DEFAULT_FROST_DATE.

set_frost_date() validates first and mutates second: an unparsable value
leaves the stored date and every task untouched. Once the new date is
committed, each of the owner's plants is regenerated in its own transaction.
A failure on one plant is logged and reported but does not stop the rest.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.core.config import settings
from frostline.core.exceptions import DateParseError, GenerationFailure
from frostline.models.plant import Plant
from frostline.models.setting import FROST_DATE_KEY, Setting
from frostline.services.task_engine import regenerate_plant

logger = logging.getLogger(__name__)


@dataclass
class FrostDateUpdate:
    frost_date: date
    regenerated_plant_ids: list[int] = field(default_factory=list)
    failed_plant_ids: list[int] = field(default_factory=list)


def parse_frost_date(value: object) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise DateParseError(value)
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise DateParseError(value) from None


async def _get_setting(db: AsyncSession, user_id: int, key: str) -> Optional[Setting]:
    return await db.scalar(select(Setting).where(Setting.user_id == user_id, Setting.key == key))


async def read_frost_date(db: AsyncSession, user_id: int) -> tuple[date, bool]:
    """Return (frost_date, is_default)."""
    setting = await _get_setting(db, user_id, FROST_DATE_KEY)
    if setting is None or not setting.value:
        return settings.DEFAULT_FROST_DATE, True
    return date.fromisoformat(setting.value), False


async def get_frost_date(db: AsyncSession, user_id: int) -> date:
    frost_date, _ = await read_frost_date(db, user_id)
    return frost_date


async def _store_frost_date(db: AsyncSession, user_id: int, frost_date: date) -> None:
    value = frost_date.isoformat()
    setting = await _get_setting(db, user_id, FROST_DATE_KEY)
    if setting is not None:
        setting.value = value
        await db.commit()
        return

    db.add(Setting(user_id=user_id, key=FROST_DATE_KEY, value=value))
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent first save won uq_settings_user_key; update its row instead
        await db.rollback()
        logger.info("_store_frost_date: user %d setting already created, updating", user_id)
        setting = await _get_setting(db, user_id, FROST_DATE_KEY)
        setting.value = value
        await db.commit()


async def set_frost_date(db: AsyncSession, user_id: int, value: object) -> FrostDateUpdate:
    """Store a new frost date for the owner and regenerate all of their plants."""
    frost_date = parse_frost_date(value)

    await _store_frost_date(db, user_id, frost_date)
    logger.info("set_frost_date: user %d frost date is now %s", user_id, frost_date)

    # Ids up front: a rollback below expires any loaded Plant instances
    result = await db.execute(select(Plant.id).where(Plant.user_id == user_id).order_by(Plant.id))
    plant_ids = list(result.scalars().all())

    update = FrostDateUpdate(frost_date=frost_date)
    for plant_id in plant_ids:
        plant = await db.get(Plant, plant_id, populate_existing=True)
        if plant is None:
            continue
        try:
            await regenerate_plant(db, plant, frost_date)
            update.regenerated_plant_ids.append(plant_id)
        except GenerationFailure as exc:
            logger.warning("set_frost_date: skipping plant %d: %s", plant_id, exc.cause)
            update.failed_plant_ids.append(plant_id)

    logger.info(
        "set_frost_date: user %d: %d plants regenerated, %d failed",
        user_id,
        len(update.regenerated_plant_ids),
        len(update.failed_plant_ids),
    )
    return update
