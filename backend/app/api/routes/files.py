from typing import Optional

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from app.api.crud import service_dependency
from app.api.deps import page_request, require_roles
from app.schemas.common import Page, PageRequest
from app.schemas.files import FileRead
from app.services.files import FileService

router = APIRouter(prefix="/files", tags=["files"], dependencies=[Depends(require_roles())])

_service = service_dependency(FileService)


@router.post(
    "", response_model=FileRead, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED
)
def upload_file(
    file: UploadFile = File(...),
    file_type: Optional[str] = Query(None, alias="fileType", max_length=50),
    service: FileService = Depends(_service),
):
    content = file.file.read()
    return service.upload(file.filename, content, file.content_type, file_type)


@router.get("", response_model=Page[FileRead], response_model_exclude_none=True)
def list_files(page: PageRequest = Depends(page_request), service: FileService = Depends(_service)):
    return service.find_all(page)


@router.get("/search", response_model=Page[FileRead], response_model_exclude_none=True)
def search_files(
    query: Optional[str] = Query(None),
    page: PageRequest = Depends(page_request),
    service: FileService = Depends(_service),
):
    return service.search(query, page)


@router.get("/{file_id}", response_model=FileRead, response_model_exclude_none=True)
def get_file(file_id: int, service: FileService = Depends(_service)):
    return service.get(file_id)


@router.get("/{file_id}/content")
def download_file(file_id: int, service: FileService = Depends(_service)):
    entity, content = service.content(file_id)
    filename = entity.original_name or f"file-{entity.id}"
    return Response(
        content=content,
        media_type=entity.content_type or "application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(file_id: int, service: FileService = Depends(_service)):
    service.delete(file_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
