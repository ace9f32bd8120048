
def _phase(client, headers, fr="Phase d'évaluation"):
    return client.post("/api/amendment-phases", json={"designation_fr": fr}, headers=headers)


def test_crud_round_over_http(client, admin_headers):
    created = _phase(client, admin_headers)
    assert created.status_code == 201
    phase_id = created.json()["id"]

    step = client.post(
        "/api/amendment-steps",
        json={"designation_fr": "Étape 1", "amendment_phase_id": phase_id},
        headers=admin_headers,
    )
    assert step.status_code == 201

    full = client.get(
        f"/api/amendment-steps/{step.json()['id']}?withRelations=true", headers=admin_headers
    )
    assert full.json()["amendment_phase"]["id"] == phase_id

    by_phase = client.get(f"/api/amendment-steps/by-phase/{phase_id}", headers=admin_headers)
    assert by_phase.status_code == 200
    assert by_phase.json()["total_elements"] == 1

    renamed = client.put(
        f"/api/amendment-phases/{phase_id}",
        json={"designation_fr": "Phase renommée"},
        headers=admin_headers,
    )
    assert renamed.status_code == 200
    assert renamed.json()["designation_fr"] == "Phase renommée"


def test_not_found_envelope(client, admin_headers):
    r = client.get("/api/amendment-phases/4242", headers=admin_headers)
    assert r.status_code == 404
    body = r.json()
    assert body["errorCode"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Amendment phase with ID 4242 not found"
    assert body["path"] == "/api/amendment-phases/4242"
    assert body["timestamp"]
    assert r.headers["X-Request-ID"]


def test_duplicate_envelope(client, admin_headers):
    _phase(client, admin_headers)
    r = _phase(client, admin_headers)
    assert r.status_code == 400
    assert r.json()["errorCode"] == "DUPLICATE_RESOURCE"


def test_missing_relation_envelope(client, admin_headers):
    r = client.post(
        "/api/amendment-steps",
        json={"designation_fr": "Orpheline", "amendment_phase_id": 777},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert r.json()["errorCode"] == "RELATION_MISSING"


def test_required_field_envelope(client, admin_headers):
    r = client.post("/api/amendment-phases", json={}, headers=admin_headers)
    assert r.status_code == 400
    body = r.json()
    assert body["errorCode"] == "VALIDATION_ERROR"
    assert body["details"]["fieldErrors"] == {"designation_fr": "French designation is required"}


def test_request_schema_violation_is_a_validation_error(client, admin_headers):
    r = client.post(
        "/api/amendment-phases", json={"designation_fr": "x" * 300}, headers=admin_headers
    )
    assert r.status_code == 400
    assert "designation_fr" in r.json()["details"]["fieldErrors"]


def test_dependents_envelope(client, admin_headers):
    phase_id = _phase(client, admin_headers).json()["id"]
    client.post(
        "/api/amendment-steps",
        json={"designation_fr": "Étape", "amendment_phase_id": phase_id},
        headers=admin_headers,
    )
    r = client.delete(f"/api/amendment-phases/{phase_id}", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot delete amendment phase as it has amendment steps"


def test_any_authenticated_user_may_write_reference_data(client, user_headers):
    assert _phase(client, user_headers).status_code == 201


def test_anonymous_writes_are_rejected(client, seeded):
    r = client.post("/api/amendment-phases", json={"designation_fr": "Anonyme"})
    assert r.status_code == 401


def test_page_size_is_capped(client, admin_headers):
    r = client.get("/api/amendment-phases?size=100000", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["size"] == 200


def test_unknown_category_is_not_found(client, admin_headers):
    r = client.get("/api/amendment-phases/category/NOPE", headers=admin_headers)
    assert r.status_code == 404


def test_health_endpoints(client):
    for path in ("/health", "/healthz", "/api/health"):
        r = client.get(path)
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
