"""
Task queries and general (user-created) task editing.

Read paths always eager-load the owning plant so responses can show its name
and variety without lazy loading.
"""
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from frostline.core.config import settings
from frostline.core.exceptions import InvalidTaskDates, PlantNotFound, TaskNotFound
from frostline.models.enums import TaskStatus
from frostline.models.plant import Plant
from frostline.models.task import Task
from frostline.schemas.task import TaskCreate, TaskUpdate


async def fetch_task(db: AsyncSession, task_id: int) -> Task:
    """Re-fetch a task with its plant loaded (use after commit)."""
    return await db.scalar(
        select(Task)
        .options(selectinload(Task.plant))
        .where(Task.id == task_id)
        .execution_options(populate_existing=True)
    )


async def get_owned_task(db: AsyncSession, user_id: int, task_id: int) -> Task:
    task = await db.scalar(
        select(Task)
        .options(selectinload(Task.plant))
        .where(Task.id == task_id, Task.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    if task is None:
        raise TaskNotFound(task_id)
    return task


async def list_tasks(
    db: AsyncSession,
    user_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    include_muted: bool = False,
    today: Optional[date] = None,
) -> list[Task]:
    """
    List the owner's tasks ordered by due date.

    With a start and/or end date, tasks due in that (inclusive) range.
    Otherwise tasks due no earlier than TASK_HISTORY_DAYS ago.
    Tasks of muted plants are left out unless include_muted is set.
    """
    query = (
        select(Task)
        .outerjoin(Plant, Task.plant_id == Plant.id)
        .options(selectinload(Task.plant))
        .where(Task.user_id == user_id)
    )

    if start is None and end is None:
        today = today or date.today()
        query = query.where(Task.due_date >= today - timedelta(days=settings.TASK_HISTORY_DAYS))
    if start is not None:
        query = query.where(Task.due_date >= start)
    if end is not None:
        query = query.where(Task.due_date <= end)
    if not include_muted:
        query = query.where(or_(Task.plant_id.is_(None), Plant.muted_at.is_(None)))

    result = await db.execute(
        query.order_by(Task.due_date, Task.id).execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def list_plant_tasks(db: AsyncSession, plant_id: int) -> list[Task]:
    result = await db.execute(
        select(Task)
        .options(selectinload(Task.plant))
        .where(Task.plant_id == plant_id)
        .order_by(Task.due_date, Task.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def _check_plant_owner(db: AsyncSession, user_id: int, plant_id: int) -> None:
    owned = await db.scalar(select(Plant.id).where(Plant.id == plant_id, Plant.user_id == user_id))
    if owned is None:
        raise PlantNotFound(plant_id)


async def create_task(db: AsyncSession, user_id: int, data: TaskCreate) -> Task:
    if data.plant_id is not None:
        await _check_plant_owner(db, user_id, data.plant_id)

    task = Task(
        user_id=user_id,
        plant_id=data.plant_id,
        task_type=data.task_type.value,
        due_date=data.due_date,
        end_date=data.end_date,
        status=TaskStatus.pending.value,
        notes=data.notes,
    )
    db.add(task)
    await db.commit()
    return await fetch_task(db, task.id)


async def update_task(db: AsyncSession, task: Task, data: TaskUpdate) -> Task:
    """Manual edit of a task. Edits to plant tasks last until the plant is next regenerated."""
    changes = data.model_dump(exclude_unset=True)
    # task_type and due_date can't be cleared; notes and end_date can
    for required in ("task_type", "due_date"):
        if required in changes and changes[required] is None:
            del changes[required]
    if "task_type" in changes:
        changes["task_type"] = changes["task_type"].value

    due_date = changes.get("due_date", task.due_date)
    end_date = changes.get("end_date", task.end_date)
    if end_date is not None and end_date < due_date:
        raise InvalidTaskDates("end_date must be on or after due_date")

    for field, value in changes.items():
        setattr(task, field, value)
    await db.commit()
    return await fetch_task(db, task.id)


async def delete_task(db: AsyncSession, task: Task) -> None:
    await db.delete(task)
    await db.commit()
