from __future__ import annotations

import concurrent.futures
import sys
from pathlib import Path
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy import update
from sqlalchemy.orm import Session

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from eatin.api.main import app
from eatin.infrastructure.db.models.order import EatInOrderModel
from eatin.infrastructure.db.session import get_engine


def _create_table(client: TestClient) -> str:
    response = client.post("/v1/order-tables", json={"name": f"it-{uuid4().hex[:6]}"})
    assert response.status_code == 201
    return response.json()["id"]


def test_clear_waits_for_order_completion() -> None:
    with TestClient(app) as client:
        table_id = _create_table(client)
        assert client.put(f"/v1/order-tables/{table_id}/sit").status_code == 200
        assert (
            client.put(
                f"/v1/order-tables/{table_id}/number-of-guests",
                json={"numberOfGuests": 3},
            ).json()["numberOfGuests"]
            == 3
        )

        order_id = f"ord_{uuid4().hex[:12]}"
        with Session(get_engine()) as session:
            session.add(EatInOrderModel(id=order_id, order_table_id=table_id, status="SERVED"))
            session.commit()

        blocked = client.put(f"/v1/order-tables/{table_id}/clear")
        assert blocked.status_code == 409
        assert blocked.json()["error"]["code"] == "ORDER_TABLE_HAS_UNCOMPLETED_ORDERS"

        with Session(get_engine()) as session:
            session.execute(
                update(EatInOrderModel)
                .where(EatInOrderModel.id == order_id)
                .values(status="COMPLETED")
            )
            session.commit()

        cleared = client.put(f"/v1/order-tables/{table_id}/clear")
        assert cleared.status_code == 200
        assert cleared.json()["occupied"] is False
        assert cleared.json()["numberOfGuests"] == 0

        listed = client.get("/v1/order-tables").json()
        assert table_id in {table["id"] for table in listed}


def test_concurrent_guest_changes_all_apply() -> None:
    with TestClient(app) as client:
        table_id = _create_table(client)
        client.put(f"/v1/order-tables/{table_id}/sit")

        def _change(guests: int) -> int:
            response = client.put(
                f"/v1/order-tables/{table_id}/number-of-guests",
                json={"numberOfGuests": guests},
            )
            return response.status_code

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            statuses = list(executor.map(_change, range(1, 9)))

        assert statuses == [200] * 8
        final = client.get(f"/v1/order-tables/{table_id}").json()
        assert final["occupied"] is True
        assert 1 <= final["numberOfGuests"] <= 8
