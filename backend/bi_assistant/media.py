"""Turn uploaded files into inline media parts.

Images are sent as-is (base64). Videos are reduced to a single JPEG frame
taken at the midpoint of the clip: `ffprobe` reads the duration, then
`ffmpeg` seeks to duration / 2 and writes one frame to stdout. Both stages
are bounded by a timeout so a broken upload never hangs a request.
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
import mimetypes
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import MediaEncodingError
from .tasks import InputKind

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0
FRAME_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class MediaFile:
    """A user-supplied file held in memory."""

    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> "MediaFile":
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise MediaEncodingError(f"Could not read file '{path.name}': {exc}") from exc
        return cls(name=path.name, mime_type=mime_type or _guess_mime(path.name), data=data)

    @classmethod
    def from_upload(cls, uploaded: Any) -> "MediaFile":
        """Wrap an upload object exposing `name`, `type` and `getvalue()`."""
        name = getattr(uploaded, "name", "") or "upload"
        mime_type = getattr(uploaded, "type", "") or _guess_mime(name)
        return cls(name=name, mime_type=mime_type, data=bytes(uploaded.getvalue()))


@dataclass(frozen=True)
class MediaPart:
    """Base64 payload plus MIME type, ready to inline into a request."""

    data: str
    mime_type: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    def to_content_part(self) -> dict[str, Any]:
        return {"type": "image_url", "image_url": {"url": self.data_url}}


def _guess_mime(name: str) -> str:
    guessed, _ = mimetypes.guess_type(name)
    return guessed or "application/octet-stream"


def _safe_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def encode_image(file: MediaFile) -> MediaPart:
    if not file.data:
        raise MediaEncodingError(f"Could not read file '{file.name}': it is empty.")
    mime_type = file.mime_type or _guess_mime(file.name)
    return MediaPart(data=base64.b64encode(file.data).decode("ascii"), mime_type=mime_type)


async def _run_tool(args: list[str], timeout: float, stage: str) -> bytes:
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise MediaEncodingError(f"{args[0]} is not installed; cannot {stage}.") from exc

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        raise MediaEncodingError(f"Timed out after {timeout:g}s trying to {stage}.") from None

    if proc.returncode != 0:
        reason = (stderr or b"").decode("utf-8", errors="replace").strip()[:200]
        raise MediaEncodingError(f"Could not {stage}: {reason or f'exit code {proc.returncode}'}")
    return stdout or b""


def _parse_duration(probe_output: bytes) -> float | None:
    try:
        payload = json.loads(probe_output.decode("utf-8") or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None

    duration = _safe_float((payload.get("format") or {}).get("duration"))
    if duration is None:
        video_stream = next(
            (
                s
                for s in payload.get("streams") or []
                if str(s.get("codec_type", "")).lower() == "video"
            ),
            None,
        )
        if video_stream:
            duration = _safe_float(video_stream.get("duration"))
    return duration


async def extract_video_frame(
    file: MediaFile,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> MediaPart:
    """Capture the frame at the temporal midpoint of a video as JPEG."""
    if not file.data:
        raise MediaEncodingError(f"Could not read file '{file.name}': it is empty.")

    suffix = Path(file.name or "clip.mp4").suffix or ".mp4"
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
            tmp.write(file.data)
            temp_path = Path(tmp.name)

        probe_output = await _run_tool(
            [
                "ffprobe",
                "-v",
                "error",
                "-show_format",
                "-show_streams",
                "-print_format",
                "json",
                str(temp_path),
            ],
            timeout,
            "load video metadata",
        )
        duration = _parse_duration(probe_output)
        if not duration or duration <= 0:
            raise MediaEncodingError("Could not load video metadata: duration is unavailable.")

        midpoint = duration / 2
        logger.debug("Capturing frame at %.3fs of %s", midpoint, file.name)
        frame = await _run_tool(
            [
                "ffmpeg",
                "-v",
                "error",
                "-ss",
                f"{midpoint:.3f}",
                "-i",
                str(temp_path),
                "-frames:v",
                "1",
                "-f",
                "image2",
                "-c:v",
                "mjpeg",
                "pipe:1",
            ],
            timeout,
            "capture a video frame",
        )
        if not frame:
            raise MediaEncodingError("Could not capture a video frame: no image data produced.")
        return MediaPart(data=base64.b64encode(frame).decode("ascii"), mime_type=FRAME_MIME_TYPE)
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)


async def encode_media(
    file: MediaFile,
    kind: InputKind,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> MediaPart:
    if kind is InputKind.IMAGE:
        return encode_image(file)
    if kind is InputKind.VIDEO:
        return await extract_video_frame(file, timeout=timeout)
    raise MediaEncodingError(f"Files are not accepted for {kind.value} input.")
