from __future__ import annotations

from pydantic import BaseModel


class OrderTableResponse(BaseModel):
    id: str
    name: str
    numberOfGuests: int
    occupied: bool
