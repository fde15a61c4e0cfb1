from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from frostline.core.deps import Owner, get_db
from frostline.core.exceptions import (
    InvalidTaskDates,
    InvalidTransition,
    PlantNotFound,
    TaskNotFound,
)
from frostline.models.task import Task
from frostline.schemas.task import TaskCreate, TaskRead, TaskUpdate
from frostline.services import task_lifecycle, task_service

router = APIRouter(prefix="/users/{user_id}/tasks", tags=["tasks"])


async def _get_owned_task(db: AsyncSession, task_id: int, user_id: int) -> Task:
    try:
        return await task_service.get_owned_task(db, user_id, task_id)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")


async def _transition(db: AsyncSession, user_id: int, task_id: int, verb) -> Task:
    try:
        return await verb(db, user_id, task_id)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")
    except InvalidTransition as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get("", response_model=list[TaskRead])
async def list_tasks(
    owner: Owner,
    db: AsyncSession = Depends(get_db),
    start: Optional[date] = Query(None, description="ISO date, tasks due on or after"),
    end: Optional[date] = Query(None, description="ISO date, tasks due on or before"),
    include_muted: bool = Query(False, description="Include tasks of muted plants"),
):
    if start and end and end < start:
        raise HTTPException(status_code=422, detail="end must be on or after start")
    return await task_service.list_tasks(
        db, owner.id, start=start, end=end, include_muted=include_muted
    )


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(data: TaskCreate, owner: Owner, db: AsyncSession = Depends(get_db)):
    try:
        return await task_service.create_task(db, owner.id, data)
    except PlantNotFound:
        raise HTTPException(status_code=404, detail="Plant not found")


@router.patch("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: int, data: TaskUpdate, owner: Owner, db: AsyncSession = Depends(get_db)
):
    task = await _get_owned_task(db, task_id, owner.id)
    try:
        return await task_service.update_task(db, task, data)
    except InvalidTaskDates as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    task = await _get_owned_task(db, task_id, owner.id)
    await task_service.delete_task(db, task)


@router.post("/{task_id}/complete", response_model=TaskRead)
async def complete_task(task_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    return await _transition(db, owner.id, task_id, task_lifecycle.mark_done)


@router.post("/{task_id}/skip", response_model=TaskRead)
async def skip_task(task_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    return await _transition(db, owner.id, task_id, task_lifecycle.mark_skipped)


@router.post("/{task_id}/reset", response_model=TaskRead)
async def reset_task(task_id: int, owner: Owner, db: AsyncSession = Depends(get_db)):
    return await _transition(db, owner.id, task_id, task_lifecycle.reset_task)
