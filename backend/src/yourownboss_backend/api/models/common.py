"""Payloads shared by several routers."""

from __future__ import annotations

from pydantic import BaseModel

from yourownboss_backend.shared import ErrorKind


class ErrorResponse(BaseModel):
    error: str
    kind: ErrorKind


class MessageResponse(BaseModel):
    message: str
