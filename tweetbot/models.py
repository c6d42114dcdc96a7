"""
Pydantic models for the Twitter API responses used by tweetbot.
"""

from __future__ import annotations

from typing import Any, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, model_validator

from tweetbot.exceptions import MalformedResponse, UploadPhase

TERMINAL_STATES = frozenset({"succeeded", "failed"})


def _to_mapping(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        data = payload.get("data")
        return data if isinstance(data, Mapping) else payload
    if hasattr(payload, "data"):
        return _to_mapping(payload.data)
    if hasattr(payload, "__dict__"):
        return _to_mapping(vars(payload))
    raise TypeError(f"Cannot convert payload of type {type(payload)!r} to mapping.")


class ApiError(BaseModel):
    code: int
    name: str | None = None
    message: str

    def __str__(self) -> str:
        label = f"{self.name} " if self.name else ""
        return f"{label}({self.code}): {self.message}"


class ApiErrorList(BaseModel):
    """Structured error payload, ``{"errors": [...]}``."""

    errors: list[ApiError]

    def summary(self) -> str:
        return "; ".join(str(error) for error in self.errors) or "Unknown API error."


class ProcessingInfo(BaseModel):
    state: Literal["pending", "in_progress", "succeeded", "failed"]
    check_after_secs: int | None = None
    progress_percent: int | None = None
    error: ApiError | None = None

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="after")
    def require_poll_delay(self) -> "ProcessingInfo":
        if not self.is_terminal and self.check_after_secs is None:
            raise ValueError(f"check_after_secs is required while state is '{self.state}'.")
        return self

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES


class MediaUploadSession(BaseModel):
    """Media upload state as reported by INIT, FINALIZE and STATUS."""

    media_id: int
    media_id_string: str
    expires_after_secs: int | None = None
    processing_info: ProcessingInfo | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def is_terminal(self) -> bool:
        return self.processing_info is None or self.processing_info.is_terminal


UploadResponse = Union[MediaUploadSession, ApiErrorList]
_upload_response_adapter: TypeAdapter[UploadResponse] = TypeAdapter(UploadResponse)
_error_list_adapter: TypeAdapter[ApiErrorList] = TypeAdapter(ApiErrorList)


def parse_upload_response(body: str, *, phase: UploadPhase | None = None) -> UploadResponse:
    """
    Decode a media upload response into a session or an error list.

    Raises:
        MalformedResponse: when the body matches neither schema.
    """
    try:
        return _upload_response_adapter.validate_json(body)
    except ValidationError as exc:
        raise MalformedResponse(
            f"Unexpected upload response: {exc.error_count()} validation error(s).",
            phase=phase,
            body=body,
        ) from exc


def parse_error_list(body: str, *, phase: UploadPhase | None = None) -> ApiErrorList:
    try:
        return _error_list_adapter.validate_json(body)
    except ValidationError as exc:
        raise MalformedResponse(
            "Unexpected error response body.", phase=phase, body=body
        ) from exc


class Tweet(BaseModel):
    """Normalized representation of a created tweet."""

    id: str
    text: str | None = None

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_api(cls, payload: Any) -> "Tweet":
        return cls.model_validate(_to_mapping(payload))
