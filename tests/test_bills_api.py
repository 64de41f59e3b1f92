"""Bill API tests."""

from datetime import date
from decimal import Decimal

from billbook.core.security import AuthUser

BOB = AuthUser(id="user-bob", email="bob@example.com", username="bob")


async def test_create_bill(client):
    response = await client.post(
        "/api/v1/bills",
        json={
            "type": "expense",
            "amount": "42.50",
            "category": "food",
            "description": "  lunch  ",
            "date": "2024-03-12",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["type"] == "expense"
    assert Decimal(data["amount"]) == Decimal("42.50")
    assert data["category"] == "food"
    assert data["category_label"] == "餐饮"
    assert data["category_icon"] == "utensils"
    assert data["description"] == "lunch"
    assert data["date"] == "2024-03-12"
    assert data["id"]
    assert data["created_at"]


async def test_create_bill_blank_description_is_null(make_bill):
    bill = await make_bill(description="   ")
    assert bill["description"] is None


async def test_create_bill_rejects_non_positive_amount(client):
    for amount in ("0", "-5"):
        response = await client.post(
            "/api/v1/bills",
            json={"type": "expense", "amount": amount, "category": "food", "date": "2024-03-12"},
        )
        assert response.status_code == 422


async def test_create_bill_rejects_more_than_two_decimals(client):
    response = await client.post(
        "/api/v1/bills",
        json={"type": "expense", "amount": "1.005", "category": "food", "date": "2024-03-12"},
    )
    assert response.status_code == 422


async def test_create_bill_rejects_category_of_other_type(client):
    response = await client.post(
        "/api/v1/bills",
        json={"type": "expense", "amount": "10", "category": "salary", "date": "2024-03-12"},
    )
    assert response.status_code == 422


async def test_create_bill_rejects_unknown_type(client):
    response = await client.post(
        "/api/v1/bills",
        json={"type": "transfer", "amount": "10", "category": "food", "date": "2024-03-12"},
    )
    assert response.status_code == 422


async def test_list_defaults_to_current_month_with_totals(client, make_bill):
    await make_bill(type="expense", amount="50", category="food", date=date(2024, 3, 1))
    await make_bill(type="income", amount="3000", category="salary", date=date(2024, 3, 31))
    await make_bill(type="expense", amount="99", category="food", date=date(2024, 2, 29))

    response = await client.get("/api/v1/bills")
    assert response.status_code == 200
    data = response.json()
    assert (data["year"], data["month"]) == (2024, 3)
    assert data["date_from"] == "2024-03-01"
    assert data["date_to"] == "2024-03-31"
    assert Decimal(data["total_income"]) == Decimal("3000")
    assert Decimal(data["total_expense"]) == Decimal("50")
    assert Decimal(data["net_balance"]) == Decimal("2950")
    assert [b["date"] for b in data["data"]] == ["2024-03-31", "2024-03-01"]


async def test_list_selected_month(client, make_bill):
    await make_bill(amount="99", date=date(2024, 2, 29))
    await make_bill(amount="1", date=date(2024, 3, 1))

    data = (await client.get("/api/v1/bills", params={"year": 2024, "month": 2})).json()

    assert data["date_to"] == "2024-02-29"
    assert len(data["data"]) == 1
    assert Decimal(data["total_expense"]) == Decimal("99")


async def test_list_filters_by_type_and_category(client, make_bill):
    await make_bill(type="expense", category="food", amount="5")
    await make_bill(type="expense", category="transport", amount="7")
    await make_bill(type="income", category="gift", amount="100")

    data = (await client.get("/api/v1/bills", params={"type": "expense"})).json()
    assert {b["category"] for b in data["data"]} == {"food", "transport"}
    assert Decimal(data["total_income"]) == 0

    data = (await client.get("/api/v1/bills", params={"category": "transport"})).json()
    assert [b["category"] for b in data["data"]] == ["transport"]


async def test_list_rejects_invalid_month(client):
    response = await client.get("/api/v1/bills", params={"month": 13})
    assert response.status_code == 422


async def test_get_bill(client, make_bill):
    bill = await make_bill()
    response = await client.get(f"/api/v1/bills/{bill['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == bill["id"]


async def test_get_missing_bill(client):
    response = await client.get("/api/v1/bills/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404


async def test_update_bill(client, make_bill):
    bill = await make_bill(amount="10", category="food")

    response = await client.patch(
        f"/api/v1/bills/{bill['id']}",
        json={"amount": "12.34", "category": "shopping", "description": "shoes"},
    )
    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["amount"]) == Decimal("12.34")
    assert data["category"] == "shopping"
    assert data["description"] == "shoes"
    assert data["date"] == bill["date"]


async def test_update_type_requires_matching_category(client, make_bill):
    bill = await make_bill(type="expense", category="food")

    response = await client.patch(f"/api/v1/bills/{bill['id']}", json={"type": "income"})
    assert response.status_code == 422

    response = await client.patch(
        f"/api/v1/bills/{bill['id']}", json={"type": "income", "category": "salary"}
    )
    assert response.status_code == 200
    assert response.json()["type"] == "income"


async def test_update_rejects_null_required_field(client, make_bill):
    bill = await make_bill()
    response = await client.patch(f"/api/v1/bills/{bill['id']}", json={"amount": None})
    assert response.status_code == 422


async def test_delete_bill(client, make_bill):
    bill = await make_bill()

    response = await client.delete(f"/api/v1/bills/{bill['id']}")
    assert response.status_code == 204

    assert (await client.get(f"/api/v1/bills/{bill['id']}")).status_code == 404
    assert (await client.get("/api/v1/bills")).json()["data"] == []


async def test_bills_are_isolated_per_user(client, make_bill, current_user):
    bill = await make_bill(amount="10")

    current_user["user"] = BOB
    assert (await client.get("/api/v1/bills")).json()["data"] == []
    assert (await client.get(f"/api/v1/bills/{bill['id']}")).status_code == 404
    assert (await client.delete(f"/api/v1/bills/{bill['id']}")).status_code == 404
    response = await client.patch(f"/api/v1/bills/{bill['id']}", json={"amount": "1"})
    assert response.status_code == 404


async def test_create_bill_without_date_uses_reference_date(client):
    response = await client.post(
        "/api/v1/bills",
        json={"type": "income", "amount": "8", "category": "gift"},
    )
    assert response.status_code == 201
    assert response.json()["date"] == "2024-03-13"

    data = (await client.get("/api/v1/stats", params={"period": "week"})).json()
    assert Decimal(data["total_income"]) == Decimal("8")
