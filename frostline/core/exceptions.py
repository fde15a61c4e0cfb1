"""Domain errors raised by the scheduling core and translated to HTTP errors by the API."""
from typing import Optional


class FrostlineError(Exception):
    """Base exception for scheduling errors."""

    pass


class ConfigurationInvalid(FrostlineError):
    """Raised when a plant's sowing configuration fails validation.

    ``errors`` is a base-level list of messages; an entry does not necessarily
    map to a single field.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class DateParseError(FrostlineError):
    """Raised when a frost date string cannot be parsed."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid date format: {value!r}")


class TransitionError(FrostlineError):
    """Base for task lifecycle errors."""

    pass


class TaskNotFound(TransitionError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class InvalidTransition(TransitionError):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move task from {current} to {target}")


class GenerationFailure(FrostlineError):
    """Raised when a plant's task regeneration fails to persist.

    The transaction has been rolled back; the plant keeps its previous tasks.
    """

    def __init__(self, plant_id: Optional[int], cause: Exception):
        self.plant_id = plant_id
        self.cause = cause
        super().__init__(f"Task generation failed for plant {plant_id}: {cause}")


class PlantNotFound(FrostlineError):
    def __init__(self, plant_id: int):
        self.plant_id = plant_id
        super().__init__(f"Plant {plant_id} not found")


class InvalidTaskDates(FrostlineError):
    """Raised when a task's end date falls before its due date."""

    pass
