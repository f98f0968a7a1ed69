"""Helpers for multipart endpoints."""

from __future__ import annotations

import json
from typing import Any, TypeVar

from fastapi import UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from vidshare.exceptions import BadRequestError
from vidshare.services.media_store import UploadedFile

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_upload(upload: UploadFile | None) -> UploadedFile | None:
    """Read an uploaded file into memory; None when nothing was sent."""
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    return UploadedFile(
        data=data, filename=upload.filename, content_type=upload.content_type
    )


def parse_form(model: type[ModelT], **fields: Any) -> ModelT:
    """
    Validate form fields into ``model``.

    Fields left at None are treated as absent. Failures surface like any
    other request validation error.
    """
    try:
        return model(**{k: v for k, v in fields.items() if v is not None})
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors()]
        ) from e


def parse_id_list(raw: str | None, field: str) -> list[Any] | None:
    """Decode a JSON array sent as a single form field."""
    if raw is None or not raw.strip():
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise BadRequestError(
            message=f"{field} must be a JSON array", details={"field": field}
        ) from e
    if not isinstance(value, list):
        raise BadRequestError(
            message=f"{field} must be a JSON array", details={"field": field}
        )
    return value
