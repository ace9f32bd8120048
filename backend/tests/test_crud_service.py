import pytest

from app import models
from app.core.errors import (
    ConflictError,
    DependentsExistError,
    NotFoundError,
    RelationMissingError,
    ValidationFailedError,
)
from app.schemas.amendment import AmendmentPhaseCreate, AmendmentStepCreate
from app.schemas.common import PageRequest
from app.services.amendment import AmendmentPhaseService, AmendmentStepService
from app.services.core import CurrencyService


def _phase(db, fr="Phase de préparation"):
    return AmendmentPhaseService(db).create(AmendmentPhaseCreate(designation_fr=fr))


def test_create_returns_generated_id_and_fields(db_session):
    phase = _phase(db_session)
    assert phase.id is not None
    assert phase.designation_fr == "Phase de préparation"


def test_duplicate_designation_is_rejected(db_session):
    _phase(db_session)
    with pytest.raises(ConflictError) as exc:
        _phase(db_session)
    assert "already exists" in exc.value.message
    assert db_session.query(models.AmendmentPhase).count() == 1


def test_update_to_another_rows_designation_conflicts(db_session):
    service = AmendmentPhaseService(db_session)
    _phase(db_session, "Alpha")
    beta = _phase(db_session, "Beta")
    with pytest.raises(ConflictError) as exc:
        service.update(beta.id, AmendmentPhaseCreate(designation_fr="Alpha"))
    assert exc.value.message.startswith("Another amendment phase")


def test_update_keeping_own_designation_is_allowed(db_session):
    service = AmendmentPhaseService(db_session)
    phase = _phase(db_session, "Alpha")
    updated = service.update(
        phase.id, AmendmentPhaseCreate(designation_fr="Alpha", designation_en="Alpha EN")
    )
    assert updated.designation_en == "Alpha EN"


def test_blank_required_designation_reports_field_error(db_session):
    with pytest.raises(ValidationFailedError) as exc:
        AmendmentPhaseService(db_session).create(AmendmentPhaseCreate(designation_fr="   "))
    assert exc.value.field_errors == {"designation_fr": "French designation is required"}


def test_patch_only_touches_supplied_fields(db_session):
    service = AmendmentPhaseService(db_session)
    phase = service.create(
        AmendmentPhaseCreate(designation_fr="Gamma", designation_ar="غاما")
    )
    patched = service.patch(phase.id, AmendmentPhaseCreate(designation_en="Gamma EN"))
    assert patched.designation_fr == "Gamma"
    assert patched.designation_ar == "غاما"
    assert patched.designation_en == "Gamma EN"


def test_step_with_missing_phase_is_rejected_without_side_effects(db_session):
    with pytest.raises(RelationMissingError) as exc:
        AmendmentStepService(db_session).create(
            AmendmentStepCreate(designation_fr="Étape", amendment_phase_id=999)
        )
    assert exc.value.message == "Amendment phase with ID 999 not found"
    assert db_session.query(models.AmendmentStep).count() == 0


def test_step_requires_phase(db_session):
    with pytest.raises(ValidationFailedError) as exc:
        AmendmentStepService(db_session).create(AmendmentStepCreate(designation_fr="Étape"))
    assert "amendment_phase_id" in exc.value.field_errors


def test_phase_with_steps_cannot_be_deleted_until_steps_are_gone(db_session):
    phases = AmendmentPhaseService(db_session)
    steps = AmendmentStepService(db_session)
    phase = _phase(db_session)
    step = steps.create(AmendmentStepCreate(designation_fr="Étape 1", amendment_phase_id=phase.id))

    with pytest.raises(DependentsExistError) as exc:
        phases.delete(phase.id)
    assert exc.value.message == "Cannot delete amendment phase as it has amendment steps"

    steps.delete(step.id)
    phases.delete(phase.id)
    with pytest.raises(NotFoundError):
        phases.get(phase.id)


def test_designation_can_be_reused_after_delete(db_session):
    service = AmendmentPhaseService(db_session)
    phase = _phase(db_session, "Recyclé")
    service.delete(phase.id)
    again = _phase(db_session, "Recyclé")
    assert again.id is not None


def test_get_with_relations_embeds_parent(db_session):
    phase = _phase(db_session)
    step = AmendmentStepService(db_session).create(
        AmendmentStepCreate(designation_fr="Étape", amendment_phase_id=phase.id)
    )
    plain = AmendmentStepService(db_session).get(step.id)
    assert plain.amendment_phase is None

    full = AmendmentStepService(db_session).get(step.id, with_relations=True)
    assert full.amendment_phase.id == phase.id
    assert full.amendment_phase.designation_fr == phase.designation_fr


def test_pagination_and_sorting(db_session):
    service = AmendmentPhaseService(db_session)
    for name in ("Delta", "Alpha", "Charlie", "Bravo", "Echo"):
        _phase(db_session, name)

    first = service.find_all(PageRequest(page=0, size=2))
    assert first.total_elements == 5
    assert first.total_pages == 3
    assert [p.designation_fr for p in first.content] == ["Alpha", "Bravo"]

    last = service.find_all(PageRequest(page=2, size=2))
    assert [p.designation_fr for p in last.content] == ["Echo"]

    desc = service.find_all(PageRequest(page=0, size=1, sort_by="designation_fr", sort_dir="desc"))
    assert desc.content[0].designation_fr == "Echo"


def test_search_is_case_insensitive_and_blank_term_lists_all(db_session):
    service = AmendmentPhaseService(db_session)
    _phase(db_session, "Phase Publication")
    _phase(db_session, "Phase Évaluation")

    hits = service.search("publi", PageRequest())
    assert [p.designation_fr for p in hits.content] == ["Phase Publication"]
    assert service.search("  ", PageRequest()).total_elements == 2


def test_find_by_parent_and_count(db_session):
    phase = _phase(db_session)
    other = _phase(db_session, "Autre phase")
    steps = AmendmentStepService(db_session)
    for i in range(3):
        steps.create(AmendmentStepCreate(designation_fr=f"Étape {i}", amendment_phase_id=phase.id))
    steps.create(AmendmentStepCreate(designation_fr="Étape x", amendment_phase_id=other.id))

    page = steps.find_by_parent("amendment_phase_id", phase.id, PageRequest())
    assert page.total_elements == 3
    assert steps.count_by_parent("amendment_phase_id", other.id) == 1


def test_currency_requires_all_codes_and_designations(db_session):
    with pytest.raises(ValidationFailedError) as exc:
        CurrencyService(db_session).create({"designation_fr": "Euro"})
    assert set(exc.value.field_errors) == {
        "designation_ar",
        "designation_en",
        "code_ar",
        "code_lt",
    }


def test_currency_code_uniqueness(db_session):
    service = CurrencyService(db_session)
    payload = {
        "designation_ar": "يورو",
        "designation_en": "Euro",
        "designation_fr": "Euro",
        "code_ar": "يور",
        "code_lt": "EUR",
    }
    service.create(payload)
    with pytest.raises(ConflictError) as exc:
        service.create({**payload, "designation_ar": "x", "designation_en": "y", "designation_fr": "z", "code_ar": "w"})
    assert "Latin code 'EUR'" in exc.value.message


def test_failed_patch_leaves_stored_row_unchanged(db_session):
    phase = _phase(db_session)
    step = AmendmentStepService(db_session).create(
        AmendmentStepCreate(designation_fr="Étape", amendment_phase_id=phase.id)
    )
    service = AmendmentStepService(db_session)

    with pytest.raises(RelationMissingError):
        service.patch(step.id, {"designation_fr": "Renommée", "amendment_phase_id": 999})
    with pytest.raises(ValidationFailedError):
        service.update(step.id, AmendmentStepCreate(designation_fr=" ", amendment_phase_id=phase.id))

    db_session.expire_all()
    stored = db_session.get(models.AmendmentStep, step.id)
    assert stored.designation_fr == "Étape"
    assert stored.amendment_phase_id == phase.id


def test_read_view_carries_back_every_written_scalar(db_session):
    payload = {
        "designation_ar": "يورو",
        "designation_en": "Euro",
        "designation_fr": "Euro",
        "code_ar": "يور",
        "code_lt": "EUR",
    }
    service = CurrencyService(db_session)
    created = service.create(payload)
    assert created.model_dump(include=set(payload)) == payload
    assert service.get(created.id).model_dump(include=set(payload)) == payload
