"""
Map upload pipeline errors to HTTP errors
"""
from fastapi import HTTPException, status

from atlantic_cms.apps.uploads.services.upload_pipeline import UploadFailed
from atlantic_cms.apps.uploads.utils.validation import UploadRejected


def upload_http_error(error: Exception) -> HTTPException:
    if isinstance(error, UploadRejected):
        status_code = (
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
            if error.reason == UploadRejected.TOO_LARGE
            else status.HTTP_400_BAD_REQUEST
        )
        return HTTPException(
            status_code=status_code,
            detail={"reason": error.reason, "message": error.detail},
        )
    if isinstance(error, UploadFailed):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(error),
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Upload failed: {str(error)}",
    )
