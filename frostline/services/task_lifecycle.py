"""
Task status transitions.

pending -> done, pending -> skipped, and done/skipped -> pending (reset).
Re-applying the current status is a no-op. There are no automatic
transitions; "overdue" is something a view derives from the due date.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from frostline.core.exceptions import InvalidTransition
from frostline.models.enums import TaskStatus
from frostline.models.task import Task
from frostline.services.task_service import fetch_task, get_owned_task

logger = logging.getLogger(__name__)

TASK_TRANSITIONS: dict[TaskStatus, list[TaskStatus]] = {
    TaskStatus.pending: [TaskStatus.done, TaskStatus.skipped],
    TaskStatus.done: [TaskStatus.pending],
    TaskStatus.skipped: [TaskStatus.pending],
}


def is_valid_transition(current: TaskStatus, target: TaskStatus) -> bool:
    return current == target or target in TASK_TRANSITIONS.get(current, [])


async def transition_task(db: AsyncSession, user_id: int, task_id: int, target: TaskStatus) -> Task:
    """Move one of the owner's tasks to ``target``. Raises TaskNotFound or InvalidTransition."""
    task = await get_owned_task(db, user_id, task_id)
    current = TaskStatus(task.status)
    if not is_valid_transition(current, target):
        raise InvalidTransition(current.value, target.value)
    if current != target:
        task.status = target.value
        await db.commit()
        logger.info("transition_task: task %d %s -> %s", task_id, current.value, target.value)
    return await fetch_task(db, task_id)


async def mark_done(db: AsyncSession, user_id: int, task_id: int) -> Task:
    return await transition_task(db, user_id, task_id, TaskStatus.done)


async def mark_skipped(db: AsyncSession, user_id: int, task_id: int) -> Task:
    return await transition_task(db, user_id, task_id, TaskStatus.skipped)


async def reset_task(db: AsyncSession, user_id: int, task_id: int) -> Task:
    return await transition_task(db, user_id, task_id, TaskStatus.pending)
