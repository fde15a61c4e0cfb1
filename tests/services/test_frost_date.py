from datetime import date, datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.core.config import settings
from frostline.core.exceptions import DateParseError
from frostline.models.enums import TaskType
from frostline.models.plant import Plant
from frostline.models.setting import Setting
from frostline.models.task import Task
from frostline.models.user import User
from frostline.services import frost_date, task_engine
from frostline.services.frost_date import parse_frost_date, read_frost_date, set_frost_date
from frostline.services.task_engine import TaskDraft

_real_build_tasks = task_engine.build_tasks


async def _add_plant(
    db: AsyncSession, user_id: int, name: str = "Tomato", transplant_offset_days: int = 7
) -> int:
    plant = Plant(
        user_id=user_id,
        name=name,
        sowing_method="indoor_start",
        seed_start_offset_days=-42,
        hardening_offset_days=-7,
        transplant_offset_days=transplant_offset_days,
    )
    db.add(plant)
    await db.commit()
    return plant.id


async def _due_dates(db: AsyncSession, plant_id: int) -> list[date]:
    result = await db.execute(
        select(Task.due_date).where(Task.plant_id == plant_id).order_by(Task.due_date)
    )
    return list(result.scalars().all())


def test_parse_frost_date_accepts_iso():
    assert parse_frost_date("2026-04-20") == date(2026, 4, 20)
    assert parse_frost_date(" 2026-04-20 ") == date(2026, 4, 20)


@pytest.mark.parametrize("value", ["", "April 20", "2026-13-01", "20/04/2026", None])
def test_parse_frost_date_rejects_other_values(value):
    with pytest.raises(DateParseError):
        parse_frost_date(value)


async def test_default_frost_date_when_unset(db: AsyncSession, owner: User):
    frost_date, is_default = await read_frost_date(db, owner.id)
    assert frost_date == settings.DEFAULT_FROST_DATE
    assert is_default is True


async def test_set_frost_date_keeps_a_single_row(db: AsyncSession, owner: User):
    owner_id = owner.id
    await set_frost_date(db, owner_id, "2026-05-01")
    await set_frost_date(db, owner_id, "2026-04-20")

    count = await db.scalar(select(func.count()).select_from(Setting).where(Setting.user_id == owner_id))
    assert count == 1
    assert await read_frost_date(db, owner_id) == (date(2026, 4, 20), False)


async def test_set_frost_date_regenerates_owner_plants(db: AsyncSession, owner: User):
    owner_id = owner.id
    plant_id = await _add_plant(db, owner_id)

    update = await set_frost_date(db, owner_id, "2026-05-01")

    assert update.frost_date == date(2026, 5, 1)
    assert update.regenerated_plant_ids == [plant_id]
    assert update.failed_plant_ids == []
    assert await _due_dates(db, plant_id) == [date(2026, 3, 20), date(2026, 4, 24), date(2026, 5, 8)]


async def test_set_frost_date_includes_muted_plants(db: AsyncSession, owner: User):
    owner_id = owner.id
    plant_id = await _add_plant(db, owner_id)
    plant = await db.get(Plant, plant_id)
    plant.muted_at = datetime.now(timezone.utc)
    await db.commit()

    update = await set_frost_date(db, owner_id, "2026-05-01")
    assert update.regenerated_plant_ids == [plant_id]


async def test_frost_date_is_scoped_to_owner(db: AsyncSession, owner: User, other_owner: User):
    owner_id, other_id = owner.id, other_owner.id
    other_plant_id = await _add_plant(db, other_id)

    update = await set_frost_date(db, owner_id, "2026-04-20")

    assert update.regenerated_plant_ids == []
    assert (await read_frost_date(db, other_id))[1] is True
    assert await _due_dates(db, other_plant_id) == []


async def test_invalid_frost_date_changes_nothing(db: AsyncSession, owner: User):
    owner_id = owner.id
    plant_id = await _add_plant(db, owner_id)
    await set_frost_date(db, owner_id, "2026-05-01")
    before = await _due_dates(db, plant_id)

    with pytest.raises(DateParseError):
        await set_frost_date(db, owner_id, "not-a-date")

    assert await read_frost_date(db, owner_id) == (date(2026, 5, 1), False)
    assert await _due_dates(db, plant_id) == before


async def test_one_failing_plant_does_not_stop_the_rest(
    db: AsyncSession, owner: User, monkeypatch
):
    owner_id = owner.id
    good_id = await _add_plant(db, owner_id, "Tomato")
    broken_id = await _add_plant(db, owner_id, "Broken")
    late_id = await _add_plant(db, owner_id, "Pepper")

    def flaky_build(config, frost_date):
        if config.name == "Broken":
            return [TaskDraft(TaskType.plant_seeds, None, "no date")]
        return _real_build_tasks(config, frost_date)

    monkeypatch.setattr(task_engine, "build_tasks", flaky_build)

    update = await set_frost_date(db, owner_id, "2026-05-01")

    assert update.regenerated_plant_ids == [good_id, late_id]
    assert update.failed_plant_ids == [broken_id]
    assert await read_frost_date(db, owner_id) == (date(2026, 5, 1), False)
    assert await _due_dates(db, good_id) == [date(2026, 3, 20), date(2026, 4, 24), date(2026, 5, 8)]
    assert await _due_dates(db, late_id) == [date(2026, 3, 20), date(2026, 4, 24), date(2026, 5, 8)]
    assert await _due_dates(db, broken_id) == []


async def test_out_of_calendar_plant_does_not_stop_the_rest(db: AsyncSession, owner: User):
    owner_id = owner.id
    late_id = await _add_plant(db, owner_id, "Squash", transplant_offset_days=7)
    early_id = await _add_plant(db, owner_id, "Onion", transplant_offset_days=-1)

    update = await set_frost_date(db, owner_id, "9999-12-30")

    assert update.failed_plant_ids == [late_id]
    assert update.regenerated_plant_ids == [early_id]
    assert await read_frost_date(db, owner_id) == (date(9999, 12, 30), False)
    assert await _due_dates(db, early_id) == [
        date(9999, 11, 18),
        date(9999, 12, 23),
        date(9999, 12, 29),
    ]


async def test_concurrent_first_save_becomes_an_update(db: AsyncSession, owner: User, monkeypatch):
    owner_id = owner.id
    # Another request stored a frost date between our read and our insert
    db.add(Setting(user_id=owner_id, key="frost_date", value="2026-05-20"))
    await db.commit()

    real_get_setting = frost_date._get_setting
    calls = []

    async def stale_first_read(session, user_id, key):
        calls.append(key)
        if len(calls) == 1:
            return None
        return await real_get_setting(session, user_id, key)

    monkeypatch.setattr(frost_date, "_get_setting", stale_first_read)

    update = await set_frost_date(db, owner_id, "2026-04-20")
    monkeypatch.undo()

    assert update.frost_date == date(2026, 4, 20)
    count = await db.scalar(select(func.count()).select_from(Setting).where(Setting.user_id == owner_id))
    assert count == 1
    assert await read_frost_date(db, owner_id) == (date(2026, 4, 20), False)
