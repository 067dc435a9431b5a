"""Pydantic response schemas returned by the service layer."""

from service.schemas.auth import LoginResponse, RegisterResponse
from service.schemas.files import (
    DeleteFileResponse,
    FileMetadataResponse,
    ListFilesResponse,
    UploadFileResponse,
)
from service.schemas.stats import DedupStatsResponse, StorageInfoResponse

__all__ = [
    "DedupStatsResponse",
    "DeleteFileResponse",
    "FileMetadataResponse",
    "ListFilesResponse",
    "LoginResponse",
    "RegisterResponse",
    "StorageInfoResponse",
    "UploadFileResponse",
]
