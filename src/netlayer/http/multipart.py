# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Multipart upload bodies and chunked progress reporting."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import Optional

import httpx

from .headers import set_header
from .models import HttpRequest, ProgressCallback

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_BYTES = 64 * 1024
DEFAULT_FIELD_NAME = "file"
_UNKNOWN_MIME_TYPES = {"", "application/octet-stream", "application/x-empty", "inode/x-empty"}

MimeSniffer = Callable[[bytes], Optional[str]]


def sniff_mime_type(data: bytes) -> str | None:
    """Return the MIME type detected from the leading bytes, or None when unrecognized."""
    import magic

    try:
        detected = magic.from_buffer(data[:2048], mime=True)
    except magic.MagicException as exc:
        logger.debug("MIME detection failed: %s", exc)
        return None
    detected = (detected or "").strip().lower()
    if detected in _UNKNOWN_MIME_TYPES:
        return None
    return detected


@dataclass
class MultipartBody:
    content: bytes
    content_type: str

    @property
    def boundary(self) -> str:
        return self.content_type.partition("boundary=")[2]


def encode_multipart(
    file: bytes | None,
    field_name: str | None = None,
    *,
    sniffer: MimeSniffer | None = None,
    boundary: str | None = None,
) -> MultipartBody:
    """
    Build a multipart/form-data body with a single file part.

    A missing file yields an empty body, and so does a file whose content type
    cannot be sniffed; neither case is an error.
    """
    boundary = boundary or os.urandom(16).hex()
    content_type = f"multipart/form-data; boundary={boundary}"
    if not file:
        return MultipartBody(b"", content_type)

    mime_type = (sniffer or sniff_mime_type)(file)
    if mime_type is None:
        logger.debug("Omitting multipart part %r: content type not recognized", field_name)
        return MultipartBody(b"", content_type)

    name = field_name or DEFAULT_FIELD_NAME
    encoder = httpx.Request(
        "POST",
        "http://multipart.invalid/",
        headers={"Content-Type": content_type},
        files={name: (None, file, mime_type)},
    )
    content = encoder.read()
    return MultipartBody(content, encoder.headers.get("Content-Type", content_type))


def wrap_multipart(request: HttpRequest, body: MultipartBody, on_progress: ProgressCallback | None = None) -> HttpRequest:
    """Use ``request`` as the envelope for a multipart body."""
    wrapped = request.copy()
    set_header(wrapped.headers, "Content-Type", body.content_type)
    wrapped.body = body.content
    wrapped.on_upload_progress = on_progress
    return wrapped


async def iter_upload_chunks(
    body: bytes | None,
    on_progress: ProgressCallback | None = None,
    chunk_size: int = DEFAULT_CHUNK_BYTES,
) -> AsyncIterator[bytes]:
    """Yield ``body`` in chunks, reporting the fraction sent after each one."""
    if not body:
        return
    total = len(body)
    sent = 0
    while sent < total:
        chunk = body[sent : sent + chunk_size]
        sent += len(chunk)
        yield chunk
        if on_progress is not None:
            on_progress(min(1.0, sent / total))


__all__ = [
    "DEFAULT_CHUNK_BYTES",
    "DEFAULT_FIELD_NAME",
    "MimeSniffer",
    "MultipartBody",
    "encode_multipart",
    "iter_upload_chunks",
    "sniff_mime_type",
    "wrap_multipart",
]
