from __future__ import annotations

from typing import NewType

OrderTableId = NewType("OrderTableId", str)
OrderId = NewType("OrderId", str)
