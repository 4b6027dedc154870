"""
Serving of stored course files.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from webacademy.core.dependencies import get_storage
from webacademy.services.storage.uploads import UploadStorage

router = APIRouter()


@router.get("/{course_id}/{filename}")
async def serve_upload(
    course_id: str,
    filename: str,
    storage: UploadStorage = Depends(get_storage),
):
    return FileResponse(storage.resolve(course_id, filename))
