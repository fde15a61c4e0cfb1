from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, model_validator

from frostline.models.enums import TaskType


class TaskCreate(BaseModel):
    plant_id: Optional[int] = None
    task_type: TaskType = TaskType.garden_task
    due_date: date
    end_date: Optional[date] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self) -> "TaskCreate":
        if self.end_date is not None and self.end_date < self.due_date:
            raise ValueError("end_date must be on or after due_date")
        return self


class TaskUpdate(BaseModel):
    task_type: Optional[TaskType] = None
    due_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None


class TaskRead(BaseModel):
    id: int
    user_id: int
    plant_id: Optional[int] = None
    task_type: str
    display_name: str
    display_subject: str
    due_date: date
    end_date: Optional[date] = None
    status: str
    notes: Optional[str] = None
    plant_name: Optional[str] = None
    plant_variety: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @model_validator(mode="before")
    @classmethod
    def join_plant(cls, data):
        """Convert ORM object → dict, flattening the owning plant (must be loaded)."""
        if hasattr(data, "task_type") and hasattr(data, "plant"):
            display_name = TaskType(data.task_type).display_name
            plant = data.plant
            if plant is not None:
                label = f"{plant.name} ({plant.variety})" if plant.variety else plant.name
                subject = f"{label} - {display_name}"
            else:
                subject = display_name
            return {
                "id": data.id,
                "user_id": data.user_id,
                "plant_id": data.plant_id,
                "task_type": data.task_type,
                "display_name": display_name,
                "display_subject": subject,
                "due_date": data.due_date,
                "end_date": data.end_date,
                "status": data.status,
                "notes": data.notes,
                "plant_name": plant.name if plant else None,
                "plant_variety": plant.variety if plant else None,
                "created_at": data.created_at,
                "updated_at": data.updated_at,
            }
        return data
