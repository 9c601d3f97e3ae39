# userhub/api/storage.py

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from fastapi.responses import FileResponse

from userhub.api.auth import get_current_user
from userhub.api.deps import get_storage_service, unwrap
from userhub.core.entities import User
from userhub.services.storage import StorageService


def create_router(endpoint: str) -> APIRouter:
    """
    Builds the file router mounted under the configured storage endpoint.
    """
    router = APIRouter(prefix=f"/{endpoint.strip('/')}")

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def upload_file(
        file: UploadFile = File(...),
        current_user: User = Depends(get_current_user),
        storage: StorageService = Depends(get_storage_service),
    ):
        data = unwrap(await storage.save_stream(file.filename or "", file.file))
        return {"status": "success", "data": data}

    @router.get("/{file_name}")
    async def get_file(file_name: str, storage: StorageService = Depends(get_storage_service)):
        path = unwrap(await storage.get_file(file_name))
        return FileResponse(path=path, filename=file_name)

    @router.delete("/{file_name}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_file(
        file_name: str,
        current_user: User = Depends(get_current_user),
        storage: StorageService = Depends(get_storage_service),
    ):
        await storage.delete_file(file_name)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
