import json

from app import models
from app.schemas.amendment import AmendmentPhaseCreate
from app.services.amendment import AmendmentPhaseService
from app.services.audit import AuditActor, audit_event


def test_successful_create_is_recorded(client, seeded, admin_headers):
    r = client.post(
        "/api/amendment-phases", json={"designation_fr": "Publication"}, headers=admin_headers
    )
    phase_id = r.json()["id"]

    log = (
        seeded.query(models.AuditLog)
        .filter_by(entity_name="AmendmentPhase", action=models.AuditAction.CREATE)
        .one()
    )
    assert log.entity_id == phase_id
    assert log.username == "admin"
    assert log.status == models.AuditStatus.SUCCESS
    assert log.method_name == "create"
    assert json.loads(log.new_values)["designation_fr"] == "Publication"


def test_failed_operation_is_recorded_despite_rollback(db_session):
    service = AmendmentPhaseService(db_session, AuditActor(username="alice"))
    service.create(AmendmentPhaseCreate(designation_fr="Doublon"))
    try:
        service.create(AmendmentPhaseCreate(designation_fr="Doublon"))
    except Exception:
        pass

    failed = db_session.query(models.AuditLog).filter_by(status=models.AuditStatus.FAILED).one()
    assert failed.username == "alice"
    assert "already exists" in failed.error_message


def test_update_keeps_old_and_new_values(db_session):
    service = AmendmentPhaseService(db_session)
    phase = service.create(AmendmentPhaseCreate(designation_fr="Avant"))
    service.update(phase.id, AmendmentPhaseCreate(designation_fr="Après"))

    log = db_session.query(models.AuditLog).filter_by(action=models.AuditAction.UPDATE).one()
    assert json.loads(log.old_values)["designation_fr"] == "Avant"
    assert json.loads(log.new_values)["designation_fr"] == "Après"


def test_secrets_are_redacted(db_session):
    audit_event(
        models.AuditAction.CREATE,
        AuditActor(username="bob"),
        bind=db_session.get_bind(),
        entity_name="User",
        parameters={"username": "bob", "password": "hunter22", "nested": {"refresh_token": "t"}},
    )
    log = db_session.query(models.AuditLog).one()
    params = json.loads(log.parameters)
    assert params["password"] == "***"
    assert params["nested"]["refresh_token"] == "***"
    assert params["username"] == "bob"


def test_login_attempts_are_audited(client, seeded):
    client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})
    log = seeded.query(models.AuditLog).filter_by(action=models.AuditAction.LOGIN).one()
    assert log.status == models.AuditStatus.FAILED
    assert log.module == "auth"


def test_audit_log_endpoints(client, seeded, admin_headers):
    phase_id = client.post(
        "/api/amendment-phases", json={"designation_fr": "Analyse"}, headers=admin_headers
    ).json()["id"]
    client.delete(f"/api/amendment-phases/{phase_id}", headers=admin_headers)

    history = client.get(
        f"/api/audit-logs/entity/AmendmentPhase/{phase_id}", headers=admin_headers
    )
    assert history.status_code == 200
    assert [h["action"] for h in history.json()] == ["DELETE", "CREATE"]

    by_user = client.get("/api/audit-logs/user/admin", headers=admin_headers).json()
    assert by_user["total_elements"] >= 3

    summary = client.get("/api/audit-logs/summary/admin", headers=admin_headers).json()
    assert summary["CREATE"] == 1
    assert summary["DELETE"] == 1
    assert summary["LOGIN"] == 1
