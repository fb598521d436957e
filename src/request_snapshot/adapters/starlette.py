"""Starlette integration: request conversion and snapshot logging middleware."""

from __future__ import annotations

import json
import time
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from request_snapshot.core.options import NormalizeOptions
from request_snapshot.normalizer import normalize
from request_snapshot.observability.constants import LogEvents
from request_snapshot.observability.logger import get_logger
from request_snapshot.utils.urls import parse_query

logger = get_logger(__name__)

RESPONSE_TIME_HEADER = "X-Response-Time"

MULTIPART_MEDIA_TYPE = "multipart/form-data"


def media_type(content_type: str | None) -> str:
    """Return the lower-cased media type of a ``Content-Type`` value."""
    return (content_type or "").split(";")[0].strip().lower()


def decode_body(raw: bytes, content_type: str | None) -> Any:
    """Decode a raw request body according to its content type.

    JSON and URL-encoded forms become structures so field masking applies to
    them; other text is returned as a string and undecodable payloads as bytes.
    Multipart bodies are left to ``read_form`` and decode to None.
    """
    kind = media_type(content_type)
    if not raw or kind == MULTIPART_MEDIA_TYPE:
        return None
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw
    if kind == "application/json" or kind.endswith("+json"):
        try:
            return json.loads(text)
        except ValueError:
            return text
    if kind == "application/x-www-form-urlencoded":
        return parse_query(text)
    return text


async def read_form(request: Request) -> tuple[dict[str, Any], dict[str, list[UploadFile]]]:
    """Split a multipart form into its text fields and its uploaded files.

    Repeated text fields collect their values in a list; files are grouped by
    field name.
    """
    form = await request.form()
    fields: dict[str, Any] = {}
    files: dict[str, list[UploadFile]] = {}
    for name, value in form.multi_items():
        if isinstance(value, UploadFile):
            files.setdefault(name, []).append(value)
        elif name not in fields:
            fields[name] = value
        elif isinstance(fields[name], list):
            fields[name].append(value)
        else:
            fields[name] = [fields[name], value]
    return fields, files


def request_from_starlette(
    request: Request,
    body: Any = None,
    received_at: datetime | None = None,
    files: dict[str, list[UploadFile]] | None = None,
) -> dict[str, Any]:
    """Build the request-like mapping for a Starlette request.

    Args:
        request: The incoming request.
        body: The already-read (and decoded) body, if any.
        received_at: When the request arrived.
        files: Uploaded files by form field name, if any.

    Returns:
        A request-like mapping for ``normalize(req=...)``.
    """
    converted: dict[str, Any] = {
        "method": request.method,
        "url": str(request.url),
        "headers": dict(request.headers),
    }
    if body is not None:
        converted["body"] = body
    if files:
        converted["files"] = files
    if request.client:
        converted["ip"] = request.client.host
    if request.scope.get("http_version"):
        converted["http_version"] = request.scope["http_version"]
    if request.scope.get("user") is not None:
        converted["user"] = request.scope["user"]
    if received_at is not None:
        converted["request_received_start_time"] = received_at
    return converted


def response_head(response: Response, http_version: str = "1.1") -> str:
    """Render a response's status line and headers as raw HTTP text."""
    try:
        reason = HTTPStatus(response.status_code).phrase
    except ValueError:
        reason = ""
    lines = [f"HTTP/{http_version} {response.status_code} {reason}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    return "\r\n".join(lines) + "\r\n\r\n"


class SnapshotLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs a redacted snapshot of every request/response.

    The snapshot is logged under the ``snapshot`` key of a
    ``request.snapshot.completed`` event. Building or logging it never affects the
    response.
    """

    def __init__(
        self,
        app: ASGIApp,
        exclude_paths: set[str] | None = None,
        add_response_time: bool = True,
        **options: Any,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application.
            exclude_paths: Paths to skip (e.g., health checks).
            add_response_time: Whether to set an ``X-Response-Time`` header.
            **options: ``NormalizeOptions`` fields applied to every snapshot.
        """
        super().__init__(app)
        self.exclude_paths = exclude_paths if exclude_paths is not None else {"/health"}
        self.add_response_time = add_response_time
        self.options = NormalizeOptions(**options)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process the request and log its snapshot.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware/handler in the chain.

        Returns:
            The response.
        """
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        received_at = datetime.now(timezone.utc)
        start_time = time.perf_counter()
        body, files = await self._read_body(request)
        req = request_from_starlette(request, body, received_at, files)

        try:
            response = await call_next(request)
        except Exception as exc:
            self._log_snapshot(
                LogEvents.REQUEST_SNAPSHOT_ERRORED, req, None, error_type=type(exc).__name__
            )
            raise

        if self.add_response_time:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            response.headers[RESPONSE_TIME_HEADER] = f"{elapsed_ms:.3f}ms"

        http_version = request.scope.get("http_version") or "1.1"
        self._log_snapshot(LogEvents.REQUEST_SNAPSHOT, req, response_head(response, http_version))
        return response

    async def _read_body(self, request: Request) -> tuple[Any, dict[str, list[UploadFile]] | None]:
        raw = await request.body()
        content_type = request.headers.get("content-type")
        if media_type(content_type) != MULTIPART_MEDIA_TYPE:
            return decode_body(raw, content_type), None
        try:
            return await read_form(request)
        except (HTTPException, MultiPartException) as e:
            logger.debug(LogEvents.REQUEST_FORM_INVALID, error=str(e))
            return None, None
        finally:
            # Uploads are only described, never read; release their spooled files
            await request.close()

    def _log_snapshot(
        self,
        event: str,
        req: dict[str, Any],
        response_headers: str | None,
        **context: Any,
    ) -> None:
        try:
            snapshot = normalize(self.options, req=req, response_headers=response_headers)
        except Exception as e:
            # Don't let snapshot failures break the response
            logger.warning(LogEvents.REQUEST_SNAPSHOT_FAILED, error=str(e))
            return

        status_code = snapshot.get("response", {}).get("status_code")
        if event == LogEvents.REQUEST_SNAPSHOT and status_code is not None and status_code >= 500:
            logger.error(event, snapshot=snapshot, **context)
        else:
            logger.info(event, snapshot=snapshot, **context)
