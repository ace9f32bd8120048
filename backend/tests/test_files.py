import logging

from app import models
from app.core.errors import FileStorageError
from app.services.files import FileService, detect_file_type, extension_of


def test_file_type_detection():
    assert extension_of("Rapport Final.PDF") == "pdf"
    assert detect_file_type("pdf") == "PDF"
    assert detect_file_type("xlsx") == "EXCEL"
    assert detect_file_type("zip") == "OTHER"
    assert extension_of(None) is None


def test_upload_download_and_delete(client, seeded, admin_headers):
    r = client.post(
        "/api/files",
        files={"file": ("offre.pdf", b"%PDF-1.4 test", "application/pdf")},
        headers=admin_headers,
    )
    assert r.status_code == 201
    meta = r.json()
    assert meta["extension"] == "pdf"
    assert meta["file_type"] == "PDF"
    assert meta["size"] == len(b"%PDF-1.4 test")
    assert meta["original_name"] == "offre.pdf"

    content = client.get(f"/api/files/{meta['id']}/content", headers=admin_headers)
    assert content.status_code == 200
    assert content.content == b"%PDF-1.4 test"
    assert content.headers["content-type"] == "application/pdf"

    assert client.delete(f"/api/files/{meta['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/files/{meta['id']}", headers=admin_headers).status_code == 404
    assert seeded.query(models.File).count() == 0


def test_file_used_by_a_document_cannot_be_deleted(client, seeded, admin_headers):
    file_id = client.post(
        "/api/files",
        files={"file": ("note.docx", b"docx-bytes", "application/octet-stream")},
        headers=admin_headers,
    ).json()["id"]
    doc_type = models.DocumentType(designation_fr="Note", scope=1)
    seeded.add(doc_type)
    seeded.flush()
    seeded.add(models.Document(reference="N-1", document_type_id=doc_type.id, file_id=file_id))
    seeded.commit()

    r = client.delete(f"/api/files/{file_id}", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot delete file as it is used by documents"


def test_byte_cleanup_failure_does_not_fail_the_delete(db_session, monkeypatch, caplog):
    service = FileService(db_session)
    stored = service.upload("devis.pdf", b"%PDF")

    def broken_delete(path):
        raise FileStorageError("Could not delete file")

    monkeypatch.setattr(service.store, "delete", broken_delete)
    with caplog.at_level(logging.WARNING, logger="raas"):
        service.delete(stored.id)

    assert db_session.query(models.File).count() == 0
    assert "file_bytes_delete_failed" in caplog.text
    audit = (
        db_session.query(models.AuditLog)
        .filter_by(entity_name="File", action=models.AuditAction.DELETE)
        .one()
    )
    assert audit.status == models.AuditStatus.SUCCESS
