from datetime import date, timedelta

import pytest

from app import models
from app.core.errors import BusinessRuleError, ConflictError, DependentsExistError, ValidationFailedError
from app.schemas.consultation import ConsultationCreate, SubmissionCreate
from app.schemas.provider import ProviderCreate
from app.services.consultation import ConsultationService, SubmissionService
from app.services.provider import ProviderService


@pytest.fixture
def provider_refs(db_session):
    nature = models.EconomicNature(designation_fr="SARL", acronym_fr="SARL")
    country = models.Country(designation_fr="Algérie")
    db_session.add_all([nature, country])
    db_session.commit()
    return {"economic_nature_id": nature.id, "country_id": country.id}


def _provider(db, refs, name):
    return ProviderService(db).create(ProviderCreate(designation_lt=name, **refs))


def _consultation(db, **overrides):
    data = {"designation_fr": "Acquisition de matériel informatique"}
    data.update(overrides)
    return ConsultationService(db).create(ConsultationCreate(**data))


def test_server_side_defaults_are_filled(db_session):
    year = date.today().year
    first = _consultation(db_session, financial_estimation=5000)
    second = _consultation(db_session, designation_fr="Travaux de peinture")

    assert first.consultation_year == year
    assert first.internal_id == "001"
    assert first.reference == f"CONS-001-{year}"
    assert first.allocated_amount == 5000
    assert first.start_date == date.today()
    assert second.internal_id == "002"


def test_internal_id_sequence_is_per_year(db_session):
    _consultation(db_session, consultation_year=2025)
    other = _consultation(db_session, designation_fr="Autre", consultation_year=2024)
    assert other.internal_id == "001"
    assert other.reference == "CONS-001-2024"


def test_deadline_must_follow_start_date(db_session):
    with pytest.raises(ValidationFailedError) as exc:
        _consultation(db_session, start_date=date(2026, 3, 10), deadline=date(2026, 3, 1))
    assert exc.value.field_errors == {"deadline": "Start date cannot be after deadline"}


def test_consultation_period_has_a_minimum_length(db_session):
    with pytest.raises(ValidationFailedError) as exc:
        _consultation(db_session, start_date=date(2026, 3, 1), deadline=date(2026, 3, 10))
    assert exc.value.field_errors == {"deadline": "Consultation period must be at least 15 days"}

    ok = _consultation(db_session, start_date=date(2026, 3, 1), deadline=date(2026, 3, 16))
    assert ok.id is not None


def test_read_reports_deadline_status(db_session):
    today = date.today()
    open_one = _consultation(
        db_session, start_date=today, publish_date=today, deadline=today + timedelta(days=20)
    )
    assert open_one.days_until_deadline == 20
    assert open_one.is_expired is False
    assert open_one.is_active is True
    assert open_one.submission_count == 0

    closed = _consultation(
        db_session,
        designation_fr="Ancienne consultation",
        start_date=today - timedelta(days=40),
        publish_date=today - timedelta(days=40),
        deadline=today - timedelta(days=5),
    )
    assert closed.is_expired is True
    assert closed.is_active is False


def test_provider_submits_once_per_consultation(db_session, provider_refs):
    today = date.today()
    consultation = _consultation(db_session, start_date=today, deadline=today + timedelta(days=30))
    acme = _provider(db_session, provider_refs, "ACME")
    submissions = SubmissionService(db_session)

    first = submissions.create(
        SubmissionCreate(consultation_id=consultation.id, tender_id=acme.id, financial_offer=900)
    )
    assert first.submission_date == today

    with pytest.raises(ConflictError) as exc:
        submissions.create(SubmissionCreate(consultation_id=consultation.id, tender_id=acme.id))
    assert exc.value.message == "Provider has already submitted to this consultation"

    assert ConsultationService(db_session).get(consultation.id).submission_count == 1


def test_submission_after_deadline_is_rejected(db_session, provider_refs):
    today = date.today()
    consultation = _consultation(
        db_session, start_date=today - timedelta(days=30), deadline=today - timedelta(days=1)
    )
    acme = _provider(db_session, provider_refs, "ACME")
    with pytest.raises(BusinessRuleError) as exc:
        SubmissionService(db_session).create(
            SubmissionCreate(consultation_id=consultation.id, tender_id=acme.id)
        )
    assert exc.value.message == "Cannot submit after consultation deadline"


def test_consultation_with_submissions_cannot_be_deleted(db_session, provider_refs):
    today = date.today()
    consultation = _consultation(db_session, start_date=today, deadline=today + timedelta(days=30))
    acme = _provider(db_session, provider_refs, "ACME")
    SubmissionService(db_session).create(
        SubmissionCreate(consultation_id=consultation.id, tender_id=acme.id)
    )
    with pytest.raises(DependentsExistError):
        ConsultationService(db_session).delete(consultation.id)


def test_provider_needs_latin_or_arabic_designation(db_session, provider_refs):
    with pytest.raises(ValidationFailedError) as exc:
        ProviderService(db_session).create(ProviderCreate(acronym_lt="X", **provider_refs))
    assert set(exc.value.field_errors) == {"designation_lt", "designation_ar"}


def test_unpublished_consultation_is_not_active(db_session):
    today = date.today()
    draft = _consultation(db_session, start_date=today, deadline=today + timedelta(days=20))
    assert draft.is_active is False

    scheduled = _consultation(
        db_session,
        designation_fr="Publication prévue",
        start_date=today,
        publish_date=today + timedelta(days=2),
        deadline=today + timedelta(days=20),
    )
    assert scheduled.is_active is False


def test_full_update_keeps_generated_numbering(db_session):
    created = _consultation(db_session, financial_estimation=1000)
    service = ConsultationService(db_session)

    updated = service.update(created.id, ConsultationCreate(designation_fr="Acquisition v2"))
    assert updated.designation_fr == "Acquisition v2"
    assert updated.internal_id == created.internal_id
    assert updated.reference == created.reference
    assert updated.consultation_year == created.consultation_year

    renamed = service.patch(created.id, ConsultationCreate(reference="CONS-SPECIAL"))
    assert renamed.reference == "CONS-SPECIAL"
    assert renamed.internal_id == created.internal_id


def test_backdated_submission_to_closed_consultation_is_rejected(db_session, provider_refs):
    today = date.today()
    consultation = _consultation(
        db_session, start_date=today - timedelta(days=60), deadline=today - timedelta(days=30)
    )
    acme = _provider(db_session, provider_refs, "ACME")
    with pytest.raises(BusinessRuleError) as exc:
        SubmissionService(db_session).create(
            SubmissionCreate(
                consultation_id=consultation.id,
                tender_id=acme.id,
                submission_date=today - timedelta(days=40),
            )
        )
    assert exc.value.message == "Cannot submit after consultation deadline"
    assert db_session.query(models.Submission).count() == 0


def test_consultation_statistics_per_year(db_session):
    _consultation(db_session, consultation_year=2025, allocated_amount=1000)
    _consultation(db_session, designation_fr="Deux", consultation_year=2025, allocated_amount=3000)
    _consultation(db_session, designation_fr="Autre année", consultation_year=2024, allocated_amount=50)

    stats = ConsultationService(db_session).statistics(2025)
    assert stats.total_consultations == 2
    assert stats.total_allocated_amount == 4000
    assert stats.average_consultation_value == 2000

    empty = ConsultationService(db_session).statistics(2030)
    assert empty.total_consultations == 0
    assert empty.average_consultation_value == 0


def test_submission_offer_analytics(db_session, provider_refs):
    today = date.today()
    consultation = _consultation(db_session, start_date=today, deadline=today + timedelta(days=30))
    parts = [models.File(path=f"files/{n}.pdf", extension="pdf") for n in ("a", "t", "f")]
    db_session.add_all(parts)
    db_session.commit()

    submissions = SubmissionService(db_session)
    offers = {"ACME": 900, "BETA": 700, "GAMMA": 700, "DELTA": 0}
    ids = {}
    for name, offer in offers.items():
        extra = {}
        if name == "ACME":
            extra = {
                "administrative_part_id": parts[0].id,
                "technical_part_id": parts[1].id,
                "financial_part_id": parts[2].id,
            }
        provider = _provider(db_session, provider_refs, name)
        ids[name] = submissions.create(
            SubmissionCreate(
                consultation_id=consultation.id, tender_id=provider.id, financial_offer=offer, **extra
            )
        ).id

    lowest = submissions.lowest_offers(consultation.id)
    assert {s.id for s in lowest} == {ids["BETA"], ids["GAMMA"]}

    stats = submissions.financial_statistics(consultation.id)
    assert (stats.min_offer, stats.max_offer) == (700, 900)
    assert round(stats.avg_offer, 2) == round(2300 / 3, 2)
    assert stats.total_submissions == 4
    assert stats.competitive_submissions == 3

    summary = submissions.summary(consultation.id)
    assert summary.complete_submissions == 1
    assert summary.partial_submissions == 3
    assert summary.financial_statistics.competitive_submissions == 3


def test_submission_analytics_without_offers(db_session):
    today = date.today()
    consultation = _consultation(db_session, start_date=today, deadline=today + timedelta(days=30))
    submissions = SubmissionService(db_session)
    assert submissions.lowest_offers(consultation.id) == []
    stats = submissions.financial_statistics(consultation.id)
    assert stats.min_offer is None
    assert stats.total_submissions == 0


def test_consultation_statistics_endpoint(client, admin_headers, db_session):
    _consultation(db_session, consultation_year=2025, allocated_amount=1200)
    r = client.get("/api/consultations/statistics/2025", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["total_consultations"] == 1
    assert r.json()["total_allocated_amount"] == 1200
