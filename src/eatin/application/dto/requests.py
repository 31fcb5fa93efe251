from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictInt


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class CreateOrderTableRequest(CamelBaseModel):
    # left optional so a missing name reaches the service and is rejected there
    name: str | None = None


class ChangeNumberOfGuestsRequest(CamelBaseModel):
    # strict: true, 4.0 and "4" are not guest counts
    number_of_guests: StrictInt
