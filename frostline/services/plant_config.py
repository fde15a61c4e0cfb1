"""
Plant sowing configuration and its validation.

Validation collects every problem into one base-level list so callers can
render them together. It always runs before a plant is written or its tasks
are generated; the task engine assumes a configuration that passed.
"""
import re
from dataclasses import dataclass
from typing import Optional

from frostline.core.exceptions import ConfigurationInvalid
from frostline.models.enums import SowingMethod
from frostline.models.plant import Plant
from frostline.services.offsets import MAX_OFFSET_DAYS

_HAS_NUMBER = re.compile(r"\d+")
_SEED_DEPTH = re.compile(r"\A(\d+/\d+|0|surface sow)\Z", re.IGNORECASE)


@dataclass(frozen=True)
class PlantConfiguration:
    name: str
    sowing_method: str
    variety: Optional[str] = None
    seed_start_offset_days: Optional[int] = None
    hardening_offset_days: Optional[int] = None
    transplant_offset_days: Optional[int] = None
    days_to_sprout: Optional[str] = None
    seed_depth: Optional[str] = None
    plant_spacing: Optional[str] = None

    @property
    def method(self) -> SowingMethod:
        """The sowing method as an enum member. Only valid after validation."""
        return SowingMethod(self.sowing_method)

    @classmethod
    def from_plant(cls, plant: Plant) -> "PlantConfiguration":
        return cls(
            name=plant.name,
            sowing_method=plant.sowing_method,
            variety=plant.variety,
            seed_start_offset_days=plant.seed_start_offset_days,
            hardening_offset_days=plant.hardening_offset_days,
            transplant_offset_days=plant.transplant_offset_days,
            days_to_sprout=plant.days_to_sprout,
            seed_depth=plant.seed_depth,
            plant_spacing=plant.plant_spacing,
        )


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_plant_config(config: PlantConfiguration) -> list[str]:
    errors: list[str] = []

    if _blank(config.name):
        errors.append("Name can't be blank")

    try:
        method: Optional[SowingMethod] = SowingMethod(config.sowing_method)
    except ValueError:
        method = None
        allowed = ", ".join(m.value for m in SowingMethod)
        errors.append(f"Sowing method '{config.sowing_method}' is not recognized (expected one of: {allowed})")

    if config.seed_start_offset_days is None:
        errors.append("Please fill out the 'Plant seeds' field")

    if method is not None and method.needs_transplant and config.transplant_offset_days is None:
        errors.append("Please fill out the 'Transplant seedlings' field for this sowing method")

    offsets = (
        config.seed_start_offset_days,
        config.hardening_offset_days,
        config.transplant_offset_days,
    )
    if any(offset is not None and abs(offset) > MAX_OFFSET_DAYS for offset in offsets):
        errors.append(f"Offsets must be within {MAX_OFFSET_DAYS} days of the frost date")

    if not _blank(config.days_to_sprout) and not _HAS_NUMBER.search(config.days_to_sprout):
        errors.append("Days to sprout should contain a number or range (e.g., '7-14')")
    if not _blank(config.seed_depth) and not _SEED_DEPTH.match(config.seed_depth.strip()):
        errors.append("Seed depth should be a fraction (e.g., '1/4'), '0', or 'surface sow'")
    if not _blank(config.plant_spacing) and not _HAS_NUMBER.search(config.plant_spacing):
        errors.append("Plant spacing should contain a number or range (e.g., '12-18')")

    return errors


def ensure_valid(config: PlantConfiguration) -> PlantConfiguration:
    errors = validate_plant_config(config)
    if errors:
        raise ConfigurationInvalid(errors)
    return config
