"""HTTP surface: auth, status mapping and request validation."""


def _create_genetic(client, name="Blue Dream", **fields):
    payload = {"name": name, "type": "hybrid", **fields}
    resp = client.post("/genetics", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(anonymous_client):
    resp = anonymous_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "db": "ok"}


def test_requests_carry_request_id_and_security_headers(anonymous_client):
    resp = anonymous_client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_entity_endpoints_require_token(anonymous_client):
    for path in ("/genetics", "/batches", "/plants", "/dashboard/summary"):
        assert anonymous_client.get(path).status_code == 401


def test_invalid_token_is_rejected(anonymous_client):
    resp = anonymous_client.get("/genetics", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_me_returns_current_user(client, user):
    resp = client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["email"] == user.email


def test_login_with_unknown_email_fails(anonymous_client):
    resp = anonymous_client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 401


def test_create_and_fetch_genetic(client):
    created = _create_genetic(client, thc_potential=12.5, terpene_profile={"myrcene": 0.5})
    assert created["slug"] == "blue-dream"
    assert created["thc_potential"] == 12.5

    resp = client.get("/genetics/blue-dream")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == created["id"]
    assert body["plants"] == []
    assert body["batches"] == []
    assert body["plant_count"] == 0


def test_list_genetics_includes_creator(client, user):
    _create_genetic(client, "Zeta")
    _create_genetic(client, "Alpha")

    body = client.get("/genetics").json()

    assert [item["name"] for item in body] == ["Alpha", "Zeta"]
    assert body[0]["created_by"]["email"] == user.email


def test_missing_genetic_maps_to_404(client):
    resp = client.get("/genetics/unknown")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Genetic not found", "code": "NOT_FOUND"}


def test_validation_errors_are_422(client):
    assert client.post("/genetics", json={"name": "  ", "type": "hybrid"}).status_code == 422
    assert client.post("/genetics", json={"name": "Hot", "type": "hybrid", "thc_potential": 150}).status_code == 422
    assert client.post("/genetics", json={"name": "Odd", "type": "ruderalis"}).status_code == 422


def test_patch_is_partial(client):
    created = _create_genetic(client, breeder="Humboldt")

    resp = client.patch(f"/genetics/{created['id']}", json={"flowering_time": 63})

    assert resp.status_code == 200
    assert resp.json()["flowering_time"] == 63
    assert resp.json()["breeder"] == "Humboldt"
    assert client.patch(f"/genetics/{created['id']}", json={"name": None}).status_code == 422


def test_delete_genetic_in_use_maps_to_412(client):
    created = _create_genetic(client)
    plant = client.post("/plants", json={"genetic_id": created["id"], "source": "seed", "stage": "seedling"})
    assert plant.status_code == 201

    resp = client.delete(f"/genetics/{created['id']}")

    assert resp.status_code == 412
    assert resp.json()["code"] == "PRECONDITION_FAILED"


def test_delete_genetic(client):
    created = _create_genetic(client)

    assert client.delete(f"/genetics/{created['id']}").status_code == 204
    assert client.get("/genetics/blue-dream").status_code == 404


def test_genetic_history(client, user):
    created = _create_genetic(client)
    client.patch(f"/genetics/{created['id']}", json={"description": "Classic"})

    body = client.get(f"/genetics/{created['id']}/history").json()

    assert [entry["action"] for entry in body] == ["UPDATE", "CREATE"]
    assert body[0]["user_email"] == user.email


def test_batch_and_plant_flow(client):
    genetic = _create_genetic(client)
    batch = client.post("/batches", json={"name": "Run 1", "genetic_id": genetic["id"]}).json()
    assert batch["strain"] == "Blue Dream"

    plant = client.post("/plants", json={
        "code": "BD-1", "batch_id": batch["id"], "genetic_id": genetic["id"],
        "source": "clone", "stage": "vegetative",
    })
    assert plant.status_code == 201

    detail = client.get(f"/batches/{batch['id']}").json()
    assert detail["plant_count"] == 1
    assert [p["code"] for p in detail["plants"]] == ["BD-1"]

    fetched = client.get("/plants/BD-1").json()
    assert fetched["batch"]["name"] == "Run 1"
    assert fetched["genetic"]["slug"] == "blue-dream"

    listed = client.get("/plants", params={"batch_id": batch["id"]}).json()
    assert [p["code"] for p in listed] == ["BD-1"]

    assert client.delete(f"/batches/{batch['id']}").status_code == 412


def test_duplicate_plant_code_maps_to_409(client):
    payload = {"code": "DUP-1", "source": "seed", "stage": "seedling"}
    assert client.post("/plants", json=payload).status_code == 201

    resp = client.post("/plants", json=payload)

    assert resp.status_code == 409
    assert resp.json()["code"] == "CONFLICT"


def test_plant_count_override_maps_to_400(client):
    batch = client.post("/batches", json={"name": "Run", "strain": "Mixed"}).json()
    client.post("/plants", json={"batch_id": batch["id"], "source": "seed", "stage": "seedling"})

    resp = client.patch(f"/batches/{batch['id']}", json={"plant_count": 9})

    assert resp.status_code == 400
    assert resp.json()["code"] == "BAD_REQUEST"


def test_dashboard(client):
    genetic = _create_genetic(client)
    client.post("/plants", json={"genetic_id": genetic["id"], "source": "seed", "stage": "seedling"})

    shares = {row["type"]: row["count"] for row in client.get("/dashboard/strain-distribution").json()}
    assert shares == {"sativa": 0, "indica": 0, "hybrid": 1}

    summary = client.get("/dashboard/summary").json()
    assert summary["plants"] == 1
    assert summary["genetics"] == 1


def test_batch_with_naive_start_and_aware_end(client):
    resp = client.post("/batches", json={
        "name": "Run", "strain": "Mixed",
        "start_date": "2026-01-01T00:00:00", "end_date": "2026-02-01T00:00:00Z",
    })
    assert resp.status_code == 201

    resp = client.post("/batches", json={
        "name": "Backwards", "strain": "Mixed",
        "start_date": "2026-03-01T00:00:00", "end_date": "2026-02-01T00:00:00Z",
    })
    assert resp.status_code == 422
