"""
Small response schemas shared by several routers.
"""
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class DirSizeResponse(BaseModel):
    """Human readable size of the upload directory."""

    size: str
