from datetime import date, timedelta

import pytest

from app import models
from app.core.errors import BusinessRuleError, DependentsExistError, RelationMissingError, ValidationFailedError
from app.schemas.common import PageRequest
from app.schemas.provider import (
    ClearanceCreate,
    ProviderCreate,
    ProviderExclusionCreate,
    ProviderRepresentatorCreate,
)
from app.services.provider import (
    ClearanceService,
    EconomicDomainService,
    ProviderExclusionService,
    ProviderRepresentatorService,
    ProviderService,
)


@pytest.fixture
def refs(db_session):
    nature = models.EconomicNature(designation_fr="SPA", acronym_fr="SPA")
    country = models.Country(designation_fr="Algérie")
    building = models.EconomicDomain(designation_fr="Bâtiment", code=41)
    it = models.EconomicDomain(designation_fr="Informatique", code=62)
    exclusion = models.ExclusionType(designation_fr="Fraude")
    db_session.add_all([nature, country, building, it, exclusion])
    db_session.commit()
    return {
        "economic_nature_id": nature.id,
        "country_id": country.id,
        "domains": [building.id, it.id],
        "exclusion_type_id": exclusion.id,
    }


def _provider(db, refs, name="Sonatech", **extra):
    return ProviderService(db).create(
        ProviderCreate(
            designation_lt=name,
            economic_nature_id=refs["economic_nature_id"],
            country_id=refs["country_id"],
            **extra,
        )
    )


def test_provider_economic_domains_are_replaced_on_update(db_session, refs):
    provider = _provider(db_session, refs, economic_domain_ids=refs["domains"])
    assert provider.economic_domain_ids == sorted(refs["domains"])

    service = ProviderService(db_session)
    patched = service.patch(provider.id, ProviderCreate(economic_domain_ids=[refs["domains"][1]]))
    assert patched.economic_domain_ids == [refs["domains"][1]]

    untouched = service.patch(provider.id, ProviderCreate(address="Alger"))
    assert untouched.economic_domain_ids == [refs["domains"][1]]


def test_unknown_economic_domain_is_rejected(db_session, refs):
    with pytest.raises(RelationMissingError) as exc:
        _provider(db_session, refs, economic_domain_ids=[refs["domains"][0], 9999])
    assert exc.value.details["ids"] == [9999]
    assert db_session.query(models.Provider).count() == 0


def test_economic_domain_used_by_a_provider_cannot_be_deleted(db_session, refs):
    _provider(db_session, refs, economic_domain_ids=[refs["domains"][0]])
    with pytest.raises(DependentsExistError):
        EconomicDomainService(db_session).delete(refs["domains"][0])


def test_exclusion_period_must_be_ordered(db_session, refs):
    provider = _provider(db_session, refs)
    with pytest.raises(ValidationFailedError) as exc:
        ProviderExclusionService(db_session).create(
            ProviderExclusionCreate(
                start_date=date(2026, 5, 1),
                end_date=date(2026, 4, 1),
                exclusion_type_id=refs["exclusion_type_id"],
                provider_id=provider.id,
            )
        )
    assert "end_date" in exc.value.field_errors


def test_clearance_representator_must_belong_to_the_provider(db_session, refs):
    first = _provider(db_session, refs, "Alpha")
    second = _provider(db_session, refs, "Beta")
    rep = ProviderRepresentatorService(db_session).create(
        ProviderRepresentatorCreate(firstname="Amel", lastname="Haddad", provider_id=first.id)
    )
    clearances = ClearanceService(db_session)

    with pytest.raises(BusinessRuleError):
        clearances.create(
            ClearanceCreate(
                start_date=date(2026, 1, 1), provider_id=second.id, provider_representator_id=rep.id
            )
        )

    ok = clearances.create(
        ClearanceCreate(start_date=date(2026, 1, 1), provider_id=first.id, provider_representator_id=rep.id)
    )
    assert ok.provider_representator_id == rep.id


def test_provider_with_representators_cannot_be_deleted(db_session, refs):
    provider = _provider(db_session, refs)
    ProviderRepresentatorService(db_session).create(
        ProviderRepresentatorCreate(firstname="Karim", lastname="Benali", provider_id=provider.id)
    )
    with pytest.raises(DependentsExistError) as exc:
        ProviderService(db_session).delete(provider.id)
    assert exc.value.message == "Cannot delete provider as it has representators"


def test_full_update_without_domain_ids_keeps_links(db_session, refs):
    provider = _provider(db_session, refs, economic_domain_ids=refs["domains"])
    updated = ProviderService(db_session).update(
        provider.id,
        ProviderCreate(
            designation_lt="Sonatech SPA",
            economic_nature_id=refs["economic_nature_id"],
            country_id=refs["country_id"],
        ),
    )
    assert updated.designation_lt == "Sonatech SPA"
    assert updated.economic_domain_ids == sorted(refs["domains"])


def _exclusion(db, refs, provider_id, start, end=None):
    return ProviderExclusionService(db).create(
        ProviderExclusionCreate(
            start_date=start,
            end_date=end,
            exclusion_type_id=refs["exclusion_type_id"],
            provider_id=provider_id,
        )
    )


def test_active_and_expiring_exclusions(db_session, refs):
    today = date.today()
    provider = _provider(db_session, refs)
    other = _provider(db_session, refs, "Autre")
    open_ended = _exclusion(db_session, refs, provider.id, today - timedelta(days=10))
    ending = _exclusion(
        db_session, refs, provider.id, today - timedelta(days=5), today + timedelta(days=10)
    )
    _exclusion(db_session, refs, provider.id, today - timedelta(days=60), today - timedelta(days=1))
    _exclusion(db_session, refs, provider.id, today + timedelta(days=3))
    _exclusion(db_session, refs, other.id, today - timedelta(days=1), today + timedelta(days=90))

    service = ProviderExclusionService(db_session)
    active = service.active_for_provider(provider.id)
    assert {e.id for e in active} == {open_ended.id, ending.id}
    assert service.count_active_for_provider(provider.id) == 2
    assert service.active(PageRequest()).total_elements == 3

    soon = service.expiring_soon(PageRequest())
    assert [e.id for e in soon.content] == [ending.id]


def test_active_clearances_per_provider(db_session, refs):
    today = date.today()
    provider = _provider(db_session, refs)
    service = ClearanceService(db_session)
    current = service.create(
        ClearanceCreate(
            start_date=today - timedelta(days=30),
            end_date=today + timedelta(days=20),
            provider_id=provider.id,
        )
    )
    service.create(
        ClearanceCreate(
            start_date=today - timedelta(days=400),
            end_date=today - timedelta(days=35),
            provider_id=provider.id,
        )
    )

    assert [c.id for c in service.active_for_provider(provider.id)] == [current.id]
    assert service.expiring_soon(PageRequest(), days=10).total_elements == 0
    assert service.expiring_soon(PageRequest()).total_elements == 1


def test_active_exclusion_endpoints(client, admin_headers, db_session, refs):
    today = date.today()
    provider = _provider(db_session, refs)
    _exclusion(db_session, refs, provider.id, today - timedelta(days=2), today + timedelta(days=5))

    r = client.get(f"/api/provider-exclusions/by-provider/{provider.id}/active", headers=admin_headers)
    assert r.status_code == 200
    assert len(r.json()) == 1
    count = client.get(
        f"/api/provider-exclusions/by-provider/{provider.id}/active/count", headers=admin_headers
    )
    assert count.json() == {"count": 1}
    soon = client.get("/api/provider-exclusions/expiring-soon?days=7", headers=admin_headers)
    assert soon.json()["total_elements"] == 1
