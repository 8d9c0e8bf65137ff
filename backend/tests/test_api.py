from factories import make_recipe, make_user

from mercado.services.catalog_seed import SEED_RECIPE_IDS

REGISTRATION = {
    "name": "Ana",
    "email": "ana@example.com",
    "password": "secret1",
    "age": 30,
    "weight": 70,
    "height": 170,
    "medical_conditions": ["diabetes"],
    "allergies": ["lacteos"],
    "monthly_budget": "400",
}


def _register(client):
    resp = client.post("/api/users", json=REGISTRATION)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_register_returns_profile_and_seeds_catalog(client, local):
    body = _register(client)
    assert body["id"] == "uid-1"
    assert body["bmi_class"] == "normal"
    assert body["allergies"] == ["lacteos"]
    assert local.recipe_count() == len(SEED_RECIPE_IDS)


def test_register_validation_error(client):
    resp = client.post("/api/users", json=dict(REGISTRATION, age=15))
    assert resp.status_code == 422
    assert resp.json()["kind"] == "ValidationError"


def test_login(client):
    _register(client)
    resp = client.post("/api/sessions", json={"email": "ana@example.com", "password": "secret1"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["user_id"] == "uid-1"
    assert body["user_sync"] == "committed"
    assert body["recipes"]["state"] == "committed"


def test_login_rejected(client):
    _register(client)
    resp = client.post("/api/sessions", json={"email": "ana@example.com", "password": "wrong!!"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "invalid email or password"


def test_generate_and_read_active_plan(client):
    user = _register(client)
    resp = client.post(f"/api/users/{user['id']}/menu-plans")
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["plan"]["is_active"] is True
    assert len(body["plan"]["days"]) == 7
    assert body["usage_recorded"] is True
    assert body["remote_synced"] is True

    active = client.get(f"/api/users/{user['id']}/menu-plans/active").json()
    assert active["plan"]["id"] == body["plan"]["id"]
    assert [day["name"] for day in active["days"]][0] == "Monday"
    assert all(len(day["recipes"]) == 3 for day in active["days"])
    for day in active["days"]:
        for recipe in day["recipes"]:
            assert "lacteos" not in recipe["allergens"]
    assert isinstance(active["within_budget"], bool)


def test_no_active_plan(client):
    user = _register(client)
    resp = client.get(f"/api/users/{user['id']}/menu-plans/active")
    assert resp.status_code == 200
    assert resp.json() is None


def test_generate_with_missing_category_is_conflict(client, local):
    local.put_user(make_user("u1", conditions=["celiaquia"]))
    local.put_recipes([make_recipe(1, "Breakfast", suitable_for=["celiaquia"])])
    resp = client.post("/api/users/u1/menu-plans")
    assert resp.status_code == 409
    assert resp.json() == {"detail": "no lunch recipes available for your profile", "kind": "InsufficientCategory"}
    assert client.get("/api/users/u1/menu-plans").json() == []


def test_generate_for_unknown_user(client):
    assert client.post("/api/users/ghost/menu-plans").status_code == 404


def test_patch_profile(client):
    user = _register(client)
    resp = client.patch(f"/api/users/{user['id']}", json={"weight": 95, "allergies": []})
    assert resp.status_code == 200
    body = resp.json()
    assert body["bmi_class"] == "obese"
    assert body["allergies"] == []
    assert body["medical_conditions"] == ["diabetes"]


def test_recipes_filters(client):
    user = _register(client)
    everything = client.get("/api/recipes").json()
    assert len(everything) == len(SEED_RECIPE_IDS)

    compatible = client.get("/api/recipes", params={"compatible_for": user["id"]}).json()
    assert sorted(r["id"] for r in compatible) == [1, 2, 4, 5, 8]

    dinners = client.get("/api/recipes", params={"category": "Dinner"}).json()
    assert all(r["category"] == "Dinner" for r in dinners)


def test_add_recipe(client, remote):
    _register(client)
    resp = client.post(
        "/api/recipes",
        json={"name": "Sopa de lentejas", "category": "cena", "estimated_cost": "2.10", "suitable_for": ["diabetes "]},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["id"] == max(SEED_RECIPE_IDS) + 1
    assert body["category"] == "Dinner"
    assert body["suitable_for"] == ["diabetes"]
    assert str(body["id"]) in remote.collections["recipes"]


def test_add_recipe_rejects_unknown_category(client):
    resp = client.post("/api/recipes", json={"name": "Brunch bowl", "category": "Brunch"})
    assert resp.status_code == 422


def test_recipe_sync_endpoint(client):
    body = client.post("/api/recipes/sync").json()
    assert body["state"] == "committed"
    assert body["seeded"] is True


def test_favorite_and_delete_plan(client, remote):
    user = _register(client)
    plan_id = client.post(f"/api/users/{user['id']}/menu-plans").json()["plan"]["id"]

    fav = client.post(f"/api/menu-plans/{plan_id}/favorite")
    assert fav.json()["is_favorite"] is True
    favorites = client.get(f"/api/users/{user['id']}/menu-plans", params={"favorites_only": True}).json()
    assert [p["id"] for p in favorites] == [plan_id]

    deleted = client.delete(f"/api/menu-plans/{plan_id}").json()
    assert deleted == {"ok": True, "remote": "committed", "remote_deleted": 1}
    assert client.delete(f"/api/menu-plans/{plan_id}").status_code == 404
