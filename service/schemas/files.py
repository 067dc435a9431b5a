"""Pydantic schemas for file operation results."""

from typing import List
from pydantic import BaseModel


class UploadFileResponse(BaseModel):
    """Response model for file upload."""
    file_id: str
    name: str
    size: int
    chunk_count: int
    new_chunks: int
    deduplicated_chunks: int


class FileMetadataResponse(BaseModel):
    """Response model for file metadata."""
    file_id: str
    name: str
    size: int
    chunk_count: int
    owner_id: str
    created_at: str


class ListFilesResponse(BaseModel):
    """Response model for file listing."""
    files: List[FileMetadataResponse]


class DeleteFileResponse(BaseModel):
    """Response model for file deletion."""
    file_id: str
    name: str
    size: int
    released_chunks: int
    purged_chunks: int
