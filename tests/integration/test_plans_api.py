def test_create_and_list_plans(client, auth_headers, make_plan):
    first = make_plan(plan_name="Basic")
    second = make_plan(plan_name="Pro", price=2500)

    r = client.get("/plans", headers=auth_headers)
    assert r.status_code == 200
    names = [p["plan_name"] for p in r.json()]
    assert names == ["Pro", "Basic"]
    assert first["status"] == "active"
    assert second["price"] == 2500


def test_features_from_comma_separated_text(make_plan):
    plan = make_plan(features=" HD , 4K ,, Offline ")
    assert plan["features"] == ["HD", "4K", "Offline"]


def test_plan_name_is_trimmed_and_unique(client, auth_headers, make_plan):
    make_plan(plan_name="Basic")
    r = client.post("/plans", headers=auth_headers, json={
        "plan_name": "  Basic  ", "price": 10, "features": ["x"], "duration_months": 1,
    })
    assert r.status_code == 400
    assert r.json()["detail"] == "A plan with this name already exists"


def test_plan_validation(client, auth_headers):
    base = {"plan_name": "Gold", "price": 100, "features": ["x"], "duration_months": 3}
    for override in (
        {"plan_name": "   "},
        {"price": 0},
        {"price": -10},
        {"features": []},
        {"features": " , "},
        {"duration_months": 2},
        {"status": "archived"},
    ):
        r = client.post("/plans", headers=auth_headers, json={**base, **override})
        assert r.status_code == 422, override


def test_default_discount_must_be_active(client, auth_headers, make_plan, make_discount):
    discount = make_discount()
    plan = make_plan(default_discount_id=discount["id"])
    assert plan["default_discount_id"] == discount["id"]

    client.post(f"/discounts/{discount['id']}/deactivate", headers=auth_headers)
    r = client.post("/plans", headers=auth_headers, json={
        "plan_name": "Other", "price": 10, "features": ["x"], "default_discount_id": discount["id"],
    })
    assert r.status_code == 404


def test_delete_plan(client, auth_headers, make_plan):
    plan = make_plan()
    r = client.delete(f"/plans/{plan['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert client.get("/plans", headers=auth_headers).json() == []

    r = client.delete(f"/plans/{plan['id']}", headers=auth_headers)
    assert r.status_code == 404


def test_price_must_fit_in_cents(client, auth_headers):
    for price in ("0.004", "12.345"):
        r = client.post("/plans", headers=auth_headers, json={
            "plan_name": f"Plan {price}", "price": price, "features": ["x"],
        })
        assert r.status_code == 422, price

    r = client.post("/plans", headers=auth_headers, json={
        "plan_name": "Cents", "price": "12.50", "features": ["x"],
    })
    assert r.status_code == 201
    assert r.json()["price"] == 12.5
