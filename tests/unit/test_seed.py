from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from eatin.application.use_cases.order_table_service import OrderTableService
from eatin.infrastructure.memory.repositories import (
    InMemoryEatInOrderRepository,
    InMemoryOrderTableRepository,
)
from eatin.tools.seed import DEMO_TABLE_NAMES, seed_order_tables


def test_seed_is_idempotent() -> None:
    service = OrderTableService(
        order_table_repository=InMemoryOrderTableRepository(),
        order_lookup=InMemoryEatInOrderRepository(),
    )

    assert seed_order_tables(service) == len(DEMO_TABLE_NAMES)
    assert seed_order_tables(service) == 0
    assert [table.name for table in service.find_all()] == list(DEMO_TABLE_NAMES)
