"""Result shapes produced by the orchestrator.

One variant per task family, so the UI dispatches on the result type
instead of re-deriving the shape from the task identifier.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import ClassVar, Tuple, Union

from .tasks import ResultKind

DATA_URI_PREFIX = "data:"


def to_data_uri(b64_data: str, mime_type: str = "image/jpeg") -> str:
    return f"{DATA_URI_PREFIX}{mime_type};base64,{b64_data}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into (mime type, raw bytes)."""
    if not uri.startswith(DATA_URI_PREFIX) or ";base64," not in uri:
        raise ValueError("Not a base64 data URI.")
    header, payload = uri[len(DATA_URI_PREFIX) :].split(";base64,", 1)
    try:
        return header, base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc


@dataclass(frozen=True)
class TextResult:
    text: str
    kind: ClassVar[ResultKind] = ResultKind.TEXT


@dataclass(frozen=True)
class ImageResult:
    data_uri: str
    kind: ClassVar[ResultKind] = ResultKind.IMAGE


@dataclass(frozen=True)
class StoryboardResult:
    """Ordered frames; index i is the image for scene i."""

    frames: Tuple[str, ...]
    kind: ClassVar[ResultKind] = ResultKind.STORYBOARD


GenerationResult = Union[TextResult, ImageResult, StoryboardResult]
