import pytest

from app import models
from app.core.errors import DependentsExistError, RelationMissingError, ValidationFailedError
from app.schemas.amendment import AmendmentCreate
from app.schemas.contract import ContractCreate, ContractItemCreate
from app.services.amendment import AmendmentService
from app.services.contract import ContractItemService, ContractService


@pytest.fixture
def contract_refs(db_session):
    nature = models.EconomicNature(designation_fr="SPA")
    country = models.Country(designation_fr="Algérie")
    contract_type = models.ContractType(designation_fr="Marché de fournitures")
    currency = models.Currency(
        designation_ar="دينار",
        designation_en="Dinar",
        designation_fr="Dinar",
        code_ar="دج",
        code_lt="DZD",
    )
    doc_type = models.DocumentType(designation_fr="Ordre de service", scope=1)
    db_session.add_all([nature, country, contract_type, currency, doc_type])
    db_session.flush()
    provider = models.Provider(
        designation_lt="ACME", economic_nature_id=nature.id, country_id=country.id
    )
    document = models.Document(reference="OS-01", document_type_id=doc_type.id)
    db_session.add_all([provider, document])
    db_session.commit()
    return {
        "contract_type_id": contract_type.id,
        "provider_id": provider.id,
        "currency_id": currency.id,
        "document_id": document.id,
    }


def _contract(db, refs, internal_id="C-001", **overrides):
    data = {
        "internal_id": internal_id,
        "designation_fr": "Fourniture de serveurs",
        "contract_type_id": refs["contract_type_id"],
        "provider_id": refs["provider_id"],
        "currency_id": refs["currency_id"],
    }
    data.update(overrides)
    return ContractService(db).create(ContractCreate(**data))


def test_contract_links_documents(db_session, contract_refs):
    contract = _contract(db_session, contract_refs, document_ids=[contract_refs["document_id"]])
    assert contract.document_ids == [contract_refs["document_id"]]

    cleared = ContractService(db_session).patch(contract.id, ContractCreate(document_ids=[]))
    assert cleared.document_ids == []


def test_unknown_document_is_rejected(db_session, contract_refs):
    with pytest.raises(RelationMissingError) as exc:
        _contract(db_session, contract_refs, document_ids=[404])
    assert exc.value.message == "Some documents were not found"
    assert db_session.query(models.Contract).count() == 0


def test_contract_cannot_be_its_own_parent(db_session, contract_refs):
    contract = _contract(db_session, contract_refs)
    with pytest.raises(ValidationFailedError) as exc:
        ContractService(db_session).patch(contract.id, ContractCreate(contract_up_id=contract.id))
    assert exc.value.field_errors == {"contract_up_id": "A contract cannot be its own parent"}


def test_contract_with_items_cannot_be_deleted(db_session, contract_refs):
    contract = _contract(db_session, contract_refs)
    ContractItemService(db_session).create(
        ContractItemCreate(designation="Serveur rack", quantity=4, contract_id=contract.id)
    )
    with pytest.raises(DependentsExistError) as exc:
        ContractService(db_session).delete(contract.id)
    assert exc.value.message == "Cannot delete contract as it has contract items"


def test_amendment_with_relations_nests_contract_and_currency(db_session, contract_refs):
    contract = _contract(db_session, contract_refs)
    status = models.RealizationStatus(designation_fr="En cours")
    amendment_type = models.AmendmentType(designation_fr="Avenant de prix")
    phase = models.AmendmentPhase(designation_fr="Préparation")
    db_session.add_all([status, amendment_type, phase])
    db_session.flush()
    step = models.AmendmentStep(designation_fr="Rédaction", amendment_phase_id=phase.id)
    db_session.add(step)
    db_session.commit()

    service = AmendmentService(db_session)
    amendment = service.create(
        AmendmentCreate(
            internal_id=1,
            reference="AV-01",
            designation_fr="Avenant n°1",
            contract_id=contract.id,
            amendment_type_id=amendment_type.id,
            realization_status_id=status.id,
            amendment_step_id=step.id,
            currency_id=contract_refs["currency_id"],
        )
    )

    full = service.get(amendment.id, with_relations=True)
    assert full.contract.internal_id == "C-001"
    assert full.currency.code_lt == "DZD"
    assert full.amendment_step.id == step.id
    assert full.approval_status is None

    with pytest.raises(DependentsExistError):
        ContractService(db_session).delete(contract.id)


def test_nested_contract_view_keeps_its_document_links(db_session, contract_refs):
    contract = _contract(db_session, contract_refs, document_ids=[contract_refs["document_id"]])
    status = models.RealizationStatus(designation_fr="En cours")
    amendment_type = models.AmendmentType(designation_fr="Avenant de délai")
    phase = models.AmendmentPhase(designation_fr="Préparation")
    db_session.add_all([status, amendment_type, phase])
    db_session.flush()
    step = models.AmendmentStep(designation_fr="Rédaction", amendment_phase_id=phase.id)
    db_session.add(step)
    db_session.commit()

    service = AmendmentService(db_session)
    amendment = service.create(
        AmendmentCreate(
            internal_id=2,
            reference="AV-02",
            designation_fr="Avenant n°2",
            contract_id=contract.id,
            amendment_type_id=amendment_type.id,
            realization_status_id=status.id,
            amendment_step_id=step.id,
            currency_id=contract_refs["currency_id"],
        )
    )

    full = service.get(amendment.id, with_relations=True)
    assert full.contract.document_ids == [contract_refs["document_id"]]


def test_contract_item_totals(db_session, contract_refs):
    contract = _contract(db_session, contract_refs)
    items = ContractItemService(db_session)
    items.create(
        ContractItemCreate(designation="Serveur", quantity=2, unit_price=1500, contract_id=contract.id)
    )
    items.create(
        ContractItemCreate(designation="Licence", quantity=10, unit_price=40, contract_id=contract.id)
    )

    totals = items.totals(contract.id)
    assert totals.item_count == 2
    assert totals.total_quantity == 12
    assert totals.total_value == 3400

    empty = items.totals(contract.id + 100)
    assert (empty.item_count, empty.total_value) == (0, 0)


def test_contract_item_totals_endpoint(client, admin_headers, db_session, contract_refs):
    contract = _contract(db_session, contract_refs)
    ContractItemService(db_session).create(
        ContractItemCreate(designation="Câble", quantity=5, unit_price=3, contract_id=contract.id)
    )
    r = client.get(f"/api/contract-items/by-contract/{contract.id}/totals", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["total_value"] == 15
