"""
Media upload workflows implementing Twitter's chunked upload process.
"""

from __future__ import annotations

import logging
import mimetypes
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Protocol

import requests

from tweetbot.exceptions import (
    ApiResponseError,
    MalformedResponse,
    MediaProcessingFailed,
    MediaProcessingTimeout,
    MediaValidationError,
    UploadCancelled,
    UploadPhase,
)
from tweetbot.models import ApiErrorList, MediaUploadSession, parse_error_list, parse_upload_response
from tweetbot.oauth.parameter import Parameter, from_mapping
from tweetbot.transport import HttpResponse

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://upload.twitter.com/1.1/media/upload.json"
CHUNK_SIZE = 1_024_000
VIDEO_MAX_BYTES = 512 * 1024 * 1024
ALLOWED_VIDEO_MIME_TYPES = {"video/mp4"}


class RequestSigner(Protocol):
    def authorize(
        self,
        request: requests.PreparedRequest,
        parameters: list[Parameter],
    ) -> requests.PreparedRequest:
        ...


class Transport(Protocol):
    def execute(
        self,
        request: requests.PreparedRequest,
        *,
        phase: UploadPhase | None = None,
    ) -> HttpResponse:
        ...

    def close(self) -> None:
        ...


@dataclass(slots=True)
class MediaUploadService:
    """
    Drives one INIT / APPEND / FINALIZE / STATUS upload session at a time.

    ``poll_timeout`` and ``max_status_polls`` bound the STATUS loop; with
    neither set, polling continues until the server reports a terminal state.
    Setting ``cancel_event`` aborts a pending poll loop.
    """

    signer: RequestSigner
    transport: Transport
    upload_url: str = UPLOAD_URL
    chunk_size: int = CHUNK_SIZE
    init_delay: float = 1.0
    poll_timeout: float | None = None
    max_status_polls: int | None = None
    cancel_event: threading.Event | None = None
    sleep: Callable[[float], None] = field(default=time.sleep)
    clock: Callable[[], float] = field(default=time.monotonic)

    def upload_video(self, path: Path) -> MediaUploadSession:
        """
        Upload an mp4 file (up to 512MB) and wait for processing to finish.

        Raises:
            MediaValidationError: If the file is missing, too large or not mp4
        """
        path = self._validate_path(path)
        mime_type = self._validate_video(path)
        with path.open("rb") as stream:
            return self.upload(stream, path.stat().st_size, media_type=mime_type)

    def upload(
        self,
        stream: BinaryIO,
        total_bytes: int,
        *,
        media_type: str = "video/mp4",
        media_category: str = "tweet_video",
    ) -> MediaUploadSession:
        """
        Run the complete chunked upload for ``total_bytes`` read from ``stream``.

        Returns:
            The final session; its processing state is absent or succeeded.

        Raises:
            TransportError: on any network failure, no phase is retried
            ApiResponseError: when a phase returns an error payload
            MalformedResponse: when a response matches no known schema
            MediaProcessingFailed: when the server reports processing failure
            MediaProcessingTimeout: when a poll bound is exceeded
            UploadCancelled: when ``cancel_event`` is set while polling
        """
        logger.info("Initializing media upload now.")
        session = self.init(total_bytes, media_type=media_type, media_category=media_category)
        if session.expires_after_secs is not None:
            logger.debug("Media expiration: %d minutes", session.expires_after_secs // 60)
        logger.info("Got media ID: %s", session.media_id_string)

        self.sleep(self.init_delay)
        self.append_stream(session.media_id_string, stream, total_bytes)
        logger.info("Successfully uploaded media to endpoint.")

        session = self._same_media(session, self.finalize(session.media_id_string), UploadPhase.FINALIZE)
        logger.info("Successfully finalized media upload.")

        session = self.await_processing(session)
        logger.info("Media successfully uploaded.")
        return session

    def init(
        self,
        total_bytes: int,
        *,
        media_type: str = "video/mp4",
        media_category: str = "tweet_video",
    ) -> MediaUploadSession:
        if total_bytes <= 0:
            raise MediaValidationError("Media must contain at least one byte.", phase=UploadPhase.INIT)

        fields = {
            "command": "INIT",
            "total_bytes": str(total_bytes),
            "media_category": media_category,
            "media_type": media_type,
        }
        request = requests.Request("POST", self.upload_url, data=fields).prepare()
        return self._send_for_session(request, from_mapping(fields), UploadPhase.INIT)

    def append(self, media_id: str, segment_index: int, chunk: bytes) -> None:
        fields = {
            "command": "APPEND",
            "media_id": media_id,
            "segment_index": str(segment_index),
        }
        request = requests.Request(
            "POST",
            self.upload_url,
            data=fields,
            files={"media": ("media", chunk, "application/octet-stream")},
        ).prepare()
        # Multipart form fields are not part of the OAuth signature.
        response = self._send(request, [], UploadPhase.APPEND)

        if response.body.strip():
            errors = parse_error_list(response.body, phase=UploadPhase.APPEND)
            raise self._api_error(errors, response, UploadPhase.APPEND)
        if not response.ok:
            raise ApiResponseError(
                f"APPEND of segment {segment_index} returned HTTP {response.status}.",
                phase=UploadPhase.APPEND,
                status=response.status,
            )

    def append_stream(self, media_id: str, stream: BinaryIO, total_bytes: int) -> int:
        """
        Send ``total_bytes`` from ``stream`` as consecutive APPEND segments.

        Returns:
            Number of segments sent.
        """
        segment_index = 0
        sent = 0
        while sent != total_bytes:
            chunk = self._read_chunk(stream, min(self.chunk_size, total_bytes - sent))
            if not chunk:
                raise MediaValidationError(
                    f"Media stream ended after {sent} of {total_bytes} bytes.",
                    phase=UploadPhase.APPEND,
                )
            self.append(media_id, segment_index, chunk)
            logger.info("Uploaded chunk %d", segment_index)
            segment_index += 1
            sent += len(chunk)
        return segment_index

    def finalize(self, media_id: str) -> MediaUploadSession:
        fields = {"command": "FINALIZE", "media_id": media_id}
        request = requests.Request("POST", self.upload_url, data=fields).prepare()
        return self._send_for_session(request, from_mapping(fields), UploadPhase.FINALIZE)

    def status(self, media_id: str) -> MediaUploadSession:
        fields = {"command": "STATUS", "media_id": media_id}
        request = requests.Request("GET", self.upload_url, params=fields).prepare()
        return self._send_for_session(request, from_mapping(fields), UploadPhase.STATUS)

    def await_processing(self, session: MediaUploadSession) -> MediaUploadSession:
        info = session.processing_info
        if info is None:
            return session

        logger.info("Media processing detected, waiting until finished.")
        deadline = None if self.poll_timeout is None else self.clock() + self.poll_timeout
        polls = 0
        current = session
        while not current.is_terminal:
            wait_seconds = float(info.check_after_secs or 0)
            if deadline is not None and self.clock() + wait_seconds > deadline:
                raise MediaProcessingTimeout(
                    "Timed out waiting for media processing to complete.",
                    phase=UploadPhase.STATUS,
                )
            if self.max_status_polls is not None and polls >= self.max_status_polls:
                raise MediaProcessingTimeout(
                    f"Media still processing after {polls} status checks.",
                    phase=UploadPhase.STATUS,
                )

            self._check_cancelled()
            logger.info(
                "Processing %s (%s%%), checking again in %ss.",
                info.state,
                info.progress_percent if info.progress_percent is not None else "?",
                info.check_after_secs,
            )
            self.sleep(wait_seconds)
            self._check_cancelled()

            current = self._same_media(current, self.status(current.media_id_string), UploadPhase.STATUS)
            polls += 1
            if current.processing_info is None:
                raise MalformedResponse(
                    "STATUS response is missing processing_info.", phase=UploadPhase.STATUS
                )
            info = current.processing_info

        if info.state == "failed":
            message = str(info.error) if info.error else "Media processing failed."
            phase = UploadPhase.STATUS if polls else UploadPhase.FINALIZE
            raise MediaProcessingFailed(message, error=info.error, phase=phase)

        return current

    def _send(
        self,
        request: requests.PreparedRequest,
        parameters: list[Parameter],
        phase: UploadPhase,
    ) -> HttpResponse:
        request = self.signer.authorize(request, parameters)
        return self.transport.execute(request, phase=phase)

    def _send_for_session(
        self,
        request: requests.PreparedRequest,
        parameters: list[Parameter],
        phase: UploadPhase,
    ) -> MediaUploadSession:
        response = self._send(request, parameters, phase)
        try:
            result = parse_upload_response(response.body, phase=phase)
        except MalformedResponse as exc:
            if response.ok:
                raise
            raise ApiResponseError(
                f"{phase.value} returned HTTP {response.status}.", phase=phase, status=response.status
            ) from exc
        if isinstance(result, ApiErrorList):
            raise self._api_error(result, response, phase)
        if not response.ok:
            raise ApiResponseError(
                f"{phase.value} returned HTTP {response.status}.", phase=phase, status=response.status
            )
        return result

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise UploadCancelled("Media upload was cancelled.", phase=UploadPhase.STATUS)

    @staticmethod
    def _api_error(errors: ApiErrorList, response: HttpResponse, phase: UploadPhase) -> ApiResponseError:
        return ApiResponseError(
            f"{phase.value} failed: {errors.summary()}",
            code=errors.errors[0].code if errors.errors else None,
            phase=phase,
            status=response.status,
            errors=errors.errors,
        )

    @staticmethod
    def _same_media(
        previous: MediaUploadSession,
        current: MediaUploadSession,
        phase: UploadPhase,
    ) -> MediaUploadSession:
        if current.media_id_string != previous.media_id_string:
            raise MalformedResponse(
                f"{phase.value} returned media {current.media_id_string}, "
                f"expected {previous.media_id_string}.",
                phase=phase,
            )
        return current

    @staticmethod
    def _read_chunk(stream: BinaryIO, size: int) -> bytes:
        buffer = bytearray()
        while len(buffer) < size:
            data = stream.read(size - len(buffer))
            if not data:
                break
            buffer.extend(data)
        return bytes(buffer)

    @staticmethod
    def _validate_path(path: Path) -> Path:
        resolved = path.expanduser()
        if not resolved.exists() or not resolved.is_file():
            raise MediaValidationError(f"Media file '{path}' does not exist or is not a file.")
        return resolved

    @staticmethod
    def _validate_video(path: Path) -> str:
        size = path.stat().st_size
        if size > VIDEO_MAX_BYTES:
            raise MediaValidationError(
                f"Video '{path}' exceeds the {VIDEO_MAX_BYTES} byte size limit."
            )
        mime_type, _ = mimetypes.guess_type(path.name)
        if mime_type not in ALLOWED_VIDEO_MIME_TYPES:
            raise MediaValidationError(
                f"Unsupported video MIME type '{mime_type}' for '{path.name}'."
            )
        return mime_type
