from datetime import date

from pydantic import BaseModel


class FrostDateRead(BaseModel):
    frost_date: date
    is_default: bool


class FrostDateUpdateRequest(BaseModel):
    # Kept as text so an unparsable value surfaces as a domain error, not a schema error
    frost_date: str


class FrostDateUpdateResult(BaseModel):
    frost_date: date
    regenerated_plant_ids: list[int]
    failed_plant_ids: list[int]

    model_config = {"from_attributes": True}
