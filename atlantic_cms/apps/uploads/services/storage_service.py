"""
Supabase Storage Service
Object storage for CMS media (bucket configured by STORAGE_BUCKET)
"""
from supabase import Client
from typing import Dict, Any, List, Optional
import logging

from atlantic_cms.apps.authentication.utils import get_supabase_client
from atlantic_cms.config import STORAGE_BUCKET

logger = logging.getLogger(__name__)


class SupabaseStorageService:
    def __init__(self, client: Optional[Client] = None, bucket_name: str = STORAGE_BUCKET):
        self.client: Client = client or get_supabase_client()
        self.bucket_name = bucket_name

    def upload_file(self, file_path: str, file_content: bytes, content_type: str = "application/octet-stream") -> Dict[str, Any]:
        """
        Upload a file to Supabase storage.

        Args:
            file_path: The path where the file should be stored in the bucket.
            file_content: The file content as bytes.
            content_type: The MIME type of the file (default: "application/octet-stream").

        Returns:
            A dictionary with success status and response data, or error information.
        """
        try:
            response = self.client.storage.from_(self.bucket_name).upload(
                path=file_path,
                file=file_content,
                file_options={"content-type": content_type, "cache-control": "3600", "upsert": "false"}
            )
            return {"success": True, "data": response}
        except Exception as e:
            logger.error(f"Error uploading file {file_path}: {str(e)}")
            return {"success": False, "error": str(e)}

    def get_public_url(self, file_path: str) -> Optional[str]:
        """
        Public URL of a stored file, or None if it can't be built.
        """
        try:
            url = self.client.storage.from_(self.bucket_name).get_public_url(file_path)
            return url or None
        except Exception as e:
            logger.error(f"Error getting public URL for {file_path}: {str(e)}")
            return None

    def remove_files(self, file_paths: List[str]) -> Dict[str, Any]:
        try:
            response = self.client.storage.from_(self.bucket_name).remove(file_paths)
            return {"success": True, "data": response}
        except Exception as e:
            logger.error(f"Error removing files {file_paths}: {str(e)}")
            return {"success": False, "error": str(e)}


# Singleton instance
_storage_service: Optional[SupabaseStorageService] = None


def get_storage_service() -> SupabaseStorageService:
    """
    FastAPI dependency returning the shared storage service.
    """
    global _storage_service

    if _storage_service is None:
        _storage_service = SupabaseStorageService()
        logger.info(f"Storage service initialized for bucket {_storage_service.bucket_name}")

    return _storage_service
