from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

from frostline.models.enums import SowingMethod
from frostline.services.offsets import format_offset, parse_magnitude, split_offset, to_days


class OffsetInput(BaseModel):
    """A frost-relative offset as a person enters it: "2 weeks before"."""

    magnitude: Optional[int] = None
    unit: Literal["days", "weeks"] = "weeks"
    direction: Literal["before", "after"] = "before"

    @field_validator("magnitude", mode="before")
    @classmethod
    def parse_blank_as_absent(cls, value):
        return parse_magnitude(value)

    @property
    def offset_days(self) -> Optional[int]:
        if self.magnitude is None:
            return None
        return to_days(self.magnitude, self.unit, self.direction)

    @classmethod
    def from_offset_days(cls, offset_days: Optional[int]) -> Optional["OffsetInput"]:
        split = split_offset(offset_days)
        if split is None:
            return None
        magnitude, unit, direction = split
        return cls(magnitude=magnitude, unit=unit, direction=direction)


class PlantCreate(BaseModel):
    name: str
    variety: Optional[str] = None
    notes: Optional[str] = None
    # Checked against SowingMethod by the configuration validator
    sowing_method: str
    seed_start: Optional[OffsetInput] = None
    hardening: Optional[OffsetInput] = None
    transplant: Optional[OffsetInput] = None
    days_to_sprout: Optional[str] = None
    seed_depth: Optional[str] = None
    plant_spacing: Optional[str] = None


class PlantUpdate(BaseModel):
    name: Optional[str] = None
    variety: Optional[str] = None
    notes: Optional[str] = None
    sowing_method: Optional[str] = None
    seed_start: Optional[OffsetInput] = None
    hardening: Optional[OffsetInput] = None
    transplant: Optional[OffsetInput] = None
    days_to_sprout: Optional[str] = None
    seed_depth: Optional[str] = None
    plant_spacing: Optional[str] = None


class PlantRead(BaseModel):
    id: int
    user_id: int
    name: str
    variety: Optional[str] = None
    notes: Optional[str] = None
    sowing_method: str
    sowing_method_display: str
    seed_start_offset_days: Optional[int] = None
    hardening_offset_days: Optional[int] = None
    transplant_offset_days: Optional[int] = None
    seed_start_label: str = ""
    hardening_label: str = ""
    transplant_label: str = ""
    seed_start: Optional[OffsetInput] = None
    hardening: Optional[OffsetInput] = None
    transplant: Optional[OffsetInput] = None
    days_to_sprout: Optional[str] = None
    seed_depth: Optional[str] = None
    plant_spacing: Optional[str] = None
    muted_at: Optional[datetime] = None
    is_muted: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @model_validator(mode="before")
    @classmethod
    def derive_display_fields(cls, data):
        """Convert ORM object → dict, adding offset labels and form triples."""
        if hasattr(data, "sowing_method") and hasattr(data, "seed_start_offset_days"):
            return {
                "id": data.id,
                "user_id": data.user_id,
                "name": data.name,
                "variety": data.variety,
                "notes": data.notes,
                "sowing_method": data.sowing_method,
                "sowing_method_display": SowingMethod(data.sowing_method).display_name,
                "seed_start_offset_days": data.seed_start_offset_days,
                "hardening_offset_days": data.hardening_offset_days,
                "transplant_offset_days": data.transplant_offset_days,
                "seed_start_label": format_offset(data.seed_start_offset_days),
                "hardening_label": format_offset(data.hardening_offset_days),
                "transplant_label": format_offset(data.transplant_offset_days),
                "seed_start": OffsetInput.from_offset_days(data.seed_start_offset_days),
                "hardening": OffsetInput.from_offset_days(data.hardening_offset_days),
                "transplant": OffsetInput.from_offset_days(data.transplant_offset_days),
                "days_to_sprout": data.days_to_sprout,
                "seed_depth": data.seed_depth,
                "plant_spacing": data.plant_spacing,
                "muted_at": data.muted_at,
                "is_muted": data.muted_at is not None,
                "created_at": data.created_at,
                "updated_at": data.updated_at,
            }
        return data
