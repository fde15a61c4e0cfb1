"""
Task generation engine.

build_tasks() derives a plant's dated tasks from its sowing configuration and a
frost date. It is pure: same configuration and date, same drafts.

generate_tasks() persists them with a destructive replace: every task that
belongs to the plant is deleted, then the new drafts are inserted. General
tasks (no plant) are never touched.

regenerate_plant() wraps that in one committed unit of work and rolls back on
failure, so a plant always ends up with either its old task set or its new one.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.core.exceptions import GenerationFailure
from frostline.models.enums import SowingMethod, TaskStatus, TaskType
from frostline.models.plant import Plant
from frostline.models.task import Task
from frostline.services.plant_config import PlantConfiguration

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"\d+")


@dataclass(frozen=True)
class TaskDraft:
    task_type: TaskType
    due_date: date
    notes: str
    end_date: Optional[date] = None
    status: TaskStatus = TaskStatus.pending


def parse_sprout_window(days_to_sprout: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Return (earliest, latest) days to sprout, or None when no number is present.

    "7-14" -> (7, 14); "10" -> (10, 10); "about a week" -> None.
    """
    if not days_to_sprout:
        return None
    numbers = [int(n) for n in _NUMBER.findall(days_to_sprout)]
    if not numbers:
        return None
    return min(numbers), max(numbers)


def _label(name: str, variety: Optional[str]) -> str:
    if variety and variety.strip():
        return f"{name} ({variety})"
    return name


def _seed_start_note(config: PlantConfiguration, method: SowingMethod) -> str:
    if method is SowingMethod.direct_sow:
        return f"Plant {config.name} seeds outdoors"
    return f"Sow seeds for {_label(config.name, config.variety)}"


def build_tasks(config: PlantConfiguration, frost_date: date) -> list[TaskDraft]:
    method = config.method
    drafts: list[TaskDraft] = []

    if config.seed_start_offset_days is None:
        return drafts

    seed_date = frost_date + timedelta(days=config.seed_start_offset_days)
    drafts.append(TaskDraft(TaskType.plant_seeds, seed_date, _seed_start_note(config, method)))

    window = parse_sprout_window(config.days_to_sprout)
    if window is not None:
        earliest, latest = window
        drafts.append(
            TaskDraft(
                TaskType.observe_sprouts,
                seed_date + timedelta(days=earliest),
                f"{_label(config.name, config.variety)} seedlings expected to appear "
                f"({config.days_to_sprout} days after planting)",
                end_date=seed_date + timedelta(days=latest),
            )
        )

    if method.hardens_off and config.hardening_offset_days is not None:
        drafts.append(
            TaskDraft(
                TaskType.begin_hardening_off,
                frost_date + timedelta(days=config.hardening_offset_days),
                f"Begin hardening off {config.name} seedlings",
            )
        )

    if method.needs_transplant and config.transplant_offset_days is not None:
        drafts.append(
            TaskDraft(
                TaskType.plant_seedlings,
                frost_date + timedelta(days=config.transplant_offset_days),
                f"Transplant {config.name} seedlings",
            )
        )

    return drafts


async def generate_tasks(db: AsyncSession, plant: Plant, frost_date: date) -> list[Task]:
    """Replace the plant's tasks with a fresh batch. Flushes; does not commit."""
    # Serialize overlapping regenerations of the same plant (no-op on SQLite)
    await db.execute(select(Plant.id).where(Plant.id == plant.id).with_for_update())

    drafts = build_tasks(PlantConfiguration.from_plant(plant), frost_date)

    await db.execute(delete(Task).where(Task.plant_id == plant.id))

    tasks = [
        Task(
            user_id=plant.user_id,
            plant_id=plant.id,
            task_type=draft.task_type.value,
            due_date=draft.due_date,
            end_date=draft.end_date,
            status=draft.status.value,
            notes=draft.notes,
        )
        for draft in drafts
    ]
    db.add_all(tasks)
    await db.flush()

    logger.debug(
        "generate_tasks: plant %d -> %d tasks (frost date %s)", plant.id, len(tasks), frost_date
    )
    return tasks


async def regenerate_plant(db: AsyncSession, plant: Plant, frost_date: date) -> list[Task]:
    """
    Run generate_tasks() as one unit of work and commit it.

    Any pending changes in the session (e.g. the plant's own edits) commit with
    the new tasks. On a database error, or a due date that falls outside the
    calendar, everything is rolled back and GenerationFailure is raised; the
    plant keeps its previous tasks.
    """
    # Read before anything can fail: a failed flush expires the plant
    plant_id: Optional[int] = None
    try:
        await db.flush()
        plant_id = plant.id
        tasks = await generate_tasks(db, plant, frost_date)
        await db.commit()
    except (SQLAlchemyError, OverflowError) as exc:
        await db.rollback()
        logger.error("regenerate_plant: plant %s rolled back: %s", plant_id, exc)
        raise GenerationFailure(plant_id, exc) from exc
    return tasks
