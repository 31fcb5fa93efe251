from __future__ import annotations

from eatin.application.use_cases.order_table_service import OrderTableService
from eatin.infrastructure.db.repositories.order_lookup import SqlAlchemyOrderLookup
from eatin.infrastructure.db.repositories.order_table_repo import SqlAlchemyOrderTableRepository
from eatin.infrastructure.db.session import get_engine

DEMO_TABLE_NAMES = ("1번", "2번", "3번", "4번", "Patio 1", "Patio 2", "Bar")


def seed_order_tables(service: OrderTableService) -> int:
    existing = {table.name for table in service.find_all()}
    created = 0
    for name in DEMO_TABLE_NAMES:
        if name in existing:
            continue
        service.create(name)
        created += 1
    return created


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    service = OrderTableService(
        order_table_repository=SqlAlchemyOrderTableRepository(engine),
        order_lookup=SqlAlchemyOrderLookup(engine),
    )
    created = seed_order_tables(service)
    print(f"seed complete: {created} order tables created")


if __name__ == "__main__":
    main()
