from __future__ import annotations

from prometheus_client import Counter

ORDER_TABLES_CREATED_TOTAL = Counter(
    "eatin_order_tables_created_total",
    "Total number of order tables created.",
)

ORDER_TABLES_SEATED_TOTAL = Counter(
    "eatin_order_tables_seated_total",
    "Total number of empty order tables that became occupied.",
)

ORDER_TABLES_CLEARED_TOTAL = Counter(
    "eatin_order_tables_cleared_total",
    "Total number of order tables cleared.",
)

ORDER_TABLE_CLEAR_BLOCKED_TOTAL = Counter(
    "eatin_order_table_clear_blocked_total",
    "Total number of rejected order table clear attempts.",
    ["reason"],
)

ORDER_TABLE_GUEST_CHANGES_TOTAL = Counter(
    "eatin_order_table_guest_changes_total",
    "Total number of guest count changes applied to occupied tables.",
)


def record_order_table_created() -> None:
    ORDER_TABLES_CREATED_TOTAL.inc()


def record_order_table_seated() -> None:
    ORDER_TABLES_SEATED_TOTAL.inc()


def record_order_table_cleared() -> None:
    ORDER_TABLES_CLEARED_TOTAL.inc()


def record_order_table_clear_blocked(reason: str) -> None:
    ORDER_TABLE_CLEAR_BLOCKED_TOTAL.labels(reason=reason).inc()


def record_guest_count_changed() -> None:
    ORDER_TABLE_GUEST_CHANGES_TOTAL.inc()
