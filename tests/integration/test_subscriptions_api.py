from decimal import Decimal

import pytest

from app.models.discount import Discount
from app.models.plan import SubscriptionPlan


@pytest.fixture
def plan(make_plan):
    return make_plan(plan_name="Standard", price=1000)


@pytest.fixture
def user(make_user):
    return make_user()


def test_quote_without_discount(client, auth_headers, plan):
    r = client.post("/subscriptions/quote", headers=auth_headers, json={
        "plan_id": plan["id"], "duration_months": 3,
    })
    assert r.status_code == 200
    body = r.json()
    assert body["original_price"] == 3000
    assert body["duration_discount_amount"] == 150
    assert body["final_price"] == 2850
    assert body["discount_percentage"] == 5


def test_quote_with_manual_discount(client, auth_headers, plan):
    r = client.post("/subscriptions/quote", headers=auth_headers, json={
        "plan_id": plan["id"], "duration_months": 12, "manual_discount_percentage": 10,
    })
    body = r.json()
    assert body["final_price"] == 9180
    assert body["total_discount"] == 2820
    assert body["discount_percentage"] == 23.5


def test_quote_with_saved_discount(client, auth_headers, plan, make_discount):
    discount = make_discount(percentage=10)
    r = client.post("/subscriptions/quote", headers=auth_headers, json={
        "plan_id": plan["id"], "duration_months": 12, "discount_id": discount["id"],
    })
    assert r.json()["final_price"] == 9180


def test_quote_rejects_both_discount_sources(client, auth_headers, plan, make_discount):
    discount = make_discount()
    r = client.post("/subscriptions/quote", headers=auth_headers, json={
        "plan_id": plan["id"], "duration_months": 1,
        "discount_id": discount["id"], "manual_discount_percentage": 5,
    })
    assert r.status_code == 422


@pytest.mark.parametrize("body", [
    {"duration_months": 2},
    {"manual_discount_percentage": 0},
    {"manual_discount_percentage": 120},
])
def test_quote_validation(client, auth_headers, plan, body):
    r = client.post("/subscriptions/quote", headers=auth_headers, json={"plan_id": plan["id"], **body})
    assert r.status_code == 422


def test_quote_unknown_plan_or_inactive_discount(client, auth_headers, plan, make_discount):
    r = client.post("/subscriptions/quote", headers=auth_headers, json={"plan_id": 999})
    assert r.status_code == 404

    discount = make_discount()
    client.post(f"/discounts/{discount['id']}/deactivate", headers=auth_headers)
    r = client.post("/subscriptions/quote", headers=auth_headers, json={
        "plan_id": plan["id"], "discount_id": discount["id"],
    })
    assert r.status_code == 404


def test_plan_default_discount_applies_when_none_chosen(client, auth_headers, make_plan, make_discount):
    discount = make_discount(percentage=10)
    plan = make_plan(plan_name="Promo", price=1000, default_discount_id=discount["id"])

    r = client.post("/subscriptions/quote", headers=auth_headers, json={
        "plan_id": plan["id"], "duration_months": 12,
    })
    assert r.json()["final_price"] == 9180

    # a manual choice replaces the default
    r = client.post("/subscriptions/quote", headers=auth_headers, json={
        "plan_id": plan["id"], "duration_months": 12, "manual_discount_percentage": 50,
    })
    assert r.json()["final_price"] == 5100


def test_assign_stamps_quote_and_discount(client, auth_headers, plan, user, make_discount):
    discount = make_discount(name="Festive", percentage=10)
    r = client.post("/subscriptions", headers=auth_headers, json={
        "user_id": user["id"], "plan_id": plan["id"], "duration_months": 12,
        "discount_id": discount["id"],
    })
    assert r.status_code == 201, r.text
    sub = r.json()
    assert sub["status"] == "active"
    assert sub["discount_id"] == discount["id"]
    assert sub["discount_name"] == "Festive"
    assert sub["discount_percentage"] == 10
    assert sub["discount_is_manual"] is False
    assert sub["original_price"] == 12000
    assert sub["final_price"] == 9180
    assert sub["effective_discount_percentage"] == 23.5


def test_assign_manual_discount(client, auth_headers, plan, user):
    r = client.post("/subscriptions", headers=auth_headers, json={
        "user_id": user["id"], "plan_id": plan["id"], "duration_months": 1,
        "manual_discount_percentage": 25,
    })
    sub = r.json()
    assert sub["discount_is_manual"] is True
    assert sub["discount_id"] is None
    assert sub["final_price"] == 750


def test_reassign_deactivates_previous(client, auth_headers, plan, user, make_plan):
    other = make_plan(plan_name="Premium", price=2000)
    first = client.post("/subscriptions", headers=auth_headers, json={
        "user_id": user["id"], "plan_id": plan["id"],
    }).json()
    second = client.post("/subscriptions", headers=auth_headers, json={
        "user_id": user["id"], "plan_id": other["id"], "duration_months": 6,
    }).json()

    history = client.get(f"/users/{user['id']}/subscriptions", headers=auth_headers).json()
    assert [s["id"] for s in history] == [second["id"], first["id"]]
    assert [s["status"] for s in history] == ["active", "inactive"]

    active = client.get("/subscriptions", params={"status": "active"}, headers=auth_headers).json()
    assert [s["id"] for s in active] == [second["id"]]


def test_assign_unknown_user(client, auth_headers, plan):
    r = client.post("/subscriptions", headers=auth_headers, json={"user_id": 42, "plan_id": plan["id"]})
    assert r.status_code == 404


def test_remove_subscription(client, auth_headers, plan, user):
    sub = client.post("/subscriptions", headers=auth_headers, json={
        "user_id": user["id"], "plan_id": plan["id"],
    }).json()

    r = client.post(f"/subscriptions/{sub['id']}/remove", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "inactive"

    assert client.post("/subscriptions/999/remove", headers=auth_headers).status_code == 404


def test_list_rejects_unknown_status(client, auth_headers):
    r = client.get("/subscriptions", params={"status": "paused"}, headers=auth_headers)
    assert r.status_code == 422


def test_stored_plan_with_bad_price_is_rejected(client, auth_headers, db_session):
    legacy = SubscriptionPlan(plan_name="Legacy", price=Decimal("0"), features=["x"], duration_months=1)
    db_session.add(legacy)
    db_session.commit()

    r = client.post("/subscriptions/quote", headers=auth_headers, json={"plan_id": legacy.id})
    assert r.status_code == 422
    assert r.json()["detail"] == "Price must be greater than 0"


def test_stored_discount_with_bad_percentage_is_rejected(client, auth_headers, db_session, plan, user):
    broken = Discount(name="Broken", percentage=Decimal("0"), status="active")
    db_session.add(broken)
    db_session.commit()

    r = client.post("/subscriptions", headers=auth_headers, json={
        "user_id": user["id"], "plan_id": plan["id"], "discount_id": broken.id,
    })
    assert r.status_code == 422
    assert "Discount percentage" in r.json()["detail"]
    assert client.get("/subscriptions", headers=auth_headers).json() == []
