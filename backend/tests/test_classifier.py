from app.core.classifier import APPROVAL_STATUS, PROCUREMENT_PHASE, REALIZATION_NATURE


def test_first_matching_label_wins_case_insensitively():
    assert APPROVAL_STATUS.classify("Dossier APPROUVÉ") == "APPROVED"
    assert APPROVAL_STATUS.classify("En attente de signature") == "PENDING"
    assert REALIZATION_NATURE.classify("Travaux de construction") == "INFRASTRUCTURE_NATURE"


def test_unmatched_and_empty_text_fall_back():
    assert PROCUREMENT_PHASE.classify("Quelque chose") == "OTHER"
    assert PROCUREMENT_PHASE.classify(None) == "OTHER"
    assert "OTHER" in PROCUREMENT_PHASE.labels


def test_category_endpoints(client, admin_headers):
    for name in ("Phase de publication", "Annonce presse", "Divers"):
        client.post("/api/amendment-phases", json={"designation_fr": name}, headers=admin_headers)

    counts = client.get("/api/amendment-phases/categories", headers=admin_headers).json()
    assert counts["PUBLICATION"] == 2
    assert counts["OTHER"] == 1

    page = client.get("/api/amendment-phases/category/publication", headers=admin_headers).json()
    assert page["total_elements"] == 2
