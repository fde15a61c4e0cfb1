from frostline.models.user import User
from frostline.models.plant import Plant
from frostline.models.task import Task
from frostline.models.setting import Setting
from frostline.models.garden_entry import GardenEntry

__all__ = [
    "User",
    "Plant",
    "Task",
    "Setting",
    "GardenEntry",
]
