"""Closed enumerations shared by models, schemas and the task engine.

Properties that branch on a member use ``match`` with ``assert_never`` so a
new member shows up at every branch point under a type checker.
"""
from enum import Enum
from typing import assert_never


class SowingMethod(str, Enum):
    indoor_start = "indoor_start"
    direct_sow = "direct_sow"
    outdoor_start = "outdoor_start"
    fridge_stratify = "fridge_stratify"

    @property
    def needs_transplant(self) -> bool:
        match self:
            case SowingMethod.direct_sow:
                return False
            case SowingMethod.indoor_start | SowingMethod.outdoor_start | SowingMethod.fridge_stratify:
                return True
            case _:
                assert_never(self)

    @property
    def hardens_off(self) -> bool:
        """Only plants started under cover get a hardening-off task."""
        match self:
            case SowingMethod.indoor_start:
                return True
            case SowingMethod.direct_sow | SowingMethod.outdoor_start | SowingMethod.fridge_stratify:
                return False
            case _:
                assert_never(self)

    @property
    def display_name(self) -> str:
        match self:
            case SowingMethod.indoor_start:
                return "Indoor Start"
            case SowingMethod.direct_sow:
                return "Direct Sow"
            case SowingMethod.outdoor_start:
                return "Outdoor Start"
            case SowingMethod.fridge_stratify:
                return "Fridge Stratify"
            case _:
                assert_never(self)


class TaskType(str, Enum):
    plant_seeds = "plant_seeds"
    observe_sprouts = "observe_sprouts"
    begin_hardening_off = "begin_hardening_off"
    plant_seedlings = "plant_seedlings"
    begin_stratification = "begin_stratification"
    garden_task = "garden_task"

    @property
    def display_name(self) -> str:
        match self:
            case TaskType.plant_seeds:
                return "Plant seeds"
            case TaskType.observe_sprouts:
                return "Observe sprouts"
            case TaskType.begin_hardening_off:
                return "Begin hardening off"
            case TaskType.plant_seedlings:
                return "Plant seedlings"
            case TaskType.begin_stratification:
                return "Begin fridge stratification"
            case TaskType.garden_task:
                return "Garden task"
            case _:
                assert_never(self)


class TaskStatus(str, Enum):
    pending = "pending"
    done = "done"
    skipped = "skipped"


SOWING_METHOD_VALUES = [m.value for m in SowingMethod]
TASK_TYPE_VALUES = [t.value for t in TaskType]
TASK_STATUS_VALUES = [s.value for s in TaskStatus]
