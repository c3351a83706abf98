"""Output-pane helper tests for the Streamlit app."""

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bi_assistant.results import (  # noqa: E402
    ImageResult,
    StoryboardResult,
    TextResult,
    decode_data_uri,
    to_data_uri,
)
from bi_assistant.tasks import TaskType, get_task  # noqa: E402
from streamlit_app import _download_payloads, _strip_mermaid_fence, _text_source  # noqa: E402

from conftest import JPEG_BYTES, b64  # noqa: E402


def test_strip_mermaid_fence_removes_code_block():
    reply = "```mermaid\nclassDiagram\n  Customer --> Order\n```"
    assert _strip_mermaid_fence(reply) == "classDiagram\n  Customer --> Order"


def test_strip_mermaid_fence_leaves_bare_source_alone():
    assert _strip_mermaid_fence("  classDiagram\n  A <|-- B  ") == "classDiagram\n  A <|-- B"


def test_text_result_downloads_as_markdown():
    payloads = _download_payloads(get_task(TaskType.SWOT), TextResult("## Strengths"))

    assert payloads == [("Download Markdown", "swot_analysis.md", "## Strengths", "text/markdown")]


def test_diagram_result_downloads_bare_mermaid():
    result = TextResult("```mermaid\nclassDiagram\n```")
    (label, file_name, data, _mime), = _download_payloads(get_task(TaskType.DIAGRAM_AI), result)

    assert label == "Download Diagram"
    assert file_name.endswith(".mmd")
    assert data == "classDiagram"


def test_image_and_storyboard_downloads_decode_frames():
    image = ImageResult(to_data_uri(b64(JPEG_BYTES)))
    (_, file_name, data, mime), = _download_payloads(get_task(TaskType.IMAGE_CREATE), image)
    assert (file_name, data, mime) == ("generated_image.jpg", JPEG_BYTES, "image/jpeg")

    frames = tuple(to_data_uri(b64(f"scene {i}".encode())) for i in range(3))
    payloads = _download_payloads(get_task(TaskType.STORYBOARD_CREATOR), StoryboardResult(frames))
    assert [p[0] for p in payloads] == ["Scene 1", "Scene 2", "Scene 3"]
    assert [p[2] for p in payloads] == [b"scene 0", b"scene 1", b"scene 2"]


def test_decode_data_uri_rejects_non_data_uris():
    with pytest.raises(ValueError):
        decode_data_uri("https://example.com/cat.jpg")
    with pytest.raises(ValueError):
        decode_data_uri("data:image/jpeg;base64,@@not-base64@@")


def test_text_source_is_copyable_markdown():
    result = TextResult("## Strengths\n- Loyal customers")

    assert _text_source(get_task(TaskType.KEY_INSIGHTS), result) == (result.text, "markdown")


def test_diagram_source_is_bare_mermaid():
    result = TextResult("```mermaid\nsequenceDiagram\n  A->>B: hi\n```")

    assert _text_source(get_task(TaskType.DIAGRAM_AI), result) == (
        "sequenceDiagram\n  A->>B: hi",
        "mermaid",
    )
