"""Main Streamlit UI for the AI Business Intelligence Assistant.

The page is a task picker, an input panel (text plus an optional upload),
and an output pane that renders one of three result shapes: formatted
text, a single image, or an ordered storyboard of images.
"""

from __future__ import annotations

import asyncio
import html
import os
import sys
from pathlib import Path
from typing import Any

import streamlit as st
from dotenv import load_dotenv

# Ensure backend package is importable when running `streamlit run streamlit_app.py`.
ROOT = Path(__file__).resolve().parent
BACKEND_ROOT = ROOT / "backend"
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
load_dotenv(ROOT / ".env", override=False)

SECRET_ENV_KEYS = (
    "API_KEY",
    "AI_BASE_URL",
    "AI_TEXT_MODEL",
    "AI_IMAGE_MODEL",
    "MEDIA_TIMEOUT_SECONDS",
    "LOG_LEVEL",
)


def _hydrate_env_from_streamlit_secrets() -> None:
    """Load AI config from Streamlit Secrets into env when not already set."""
    try:
        secrets = st.secrets.to_dict()
    except Exception:
        # No secrets.toml present; the environment is the only source.
        return

    ai_block = secrets.get("ai")
    if isinstance(ai_block, dict):
        mapping = {
            "api_key": "API_KEY",
            "base_url": "AI_BASE_URL",
            "text_model": "AI_TEXT_MODEL",
            "image_model": "AI_IMAGE_MODEL",
        }
        for secret_key, env_key in mapping.items():
            value = ai_block.get(secret_key)
            if isinstance(value, str) and value.strip() and not os.getenv(env_key):
                os.environ[env_key] = value.strip()

    for key in SECRET_ENV_KEYS:
        value = secrets.get(key)
        if isinstance(value, str) and value.strip() and not os.getenv(key):
            os.environ[key] = value.strip()


_hydrate_env_from_streamlit_secrets()

from bi_assistant.app import create_app  # noqa: E402
from bi_assistant.errors import AssistantError, InputValidationError  # noqa: E402
from bi_assistant.media import MediaFile  # noqa: E402
from bi_assistant.results import (  # noqa: E402
    GenerationResult,
    TextResult,
    decode_data_uri,
)
from bi_assistant.tasks import TASKS, ResultKind, Task, TaskType, get_task  # noqa: E402
from bi_assistant.validation import is_submittable, validate_submission  # noqa: E402

TASK_COLUMNS = 3


@st.cache_resource
def _get_app() -> dict[str, Any]:
    return create_app()


def _strip_mermaid_fence(text: str) -> str:
    """Return bare Mermaid source from a reply wrapped in a ```mermaid block."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        first_newline = cleaned.find("\n")
        cleaned = cleaned[first_newline + 1 :] if first_newline != -1 else ""
        if cleaned.rstrip().endswith("```"):
            cleaned = cleaned.rstrip()[:-3]
    return cleaned.strip()


def _text_source(task: Task, result: TextResult) -> tuple[str, str]:
    """Return (source, language) for the copyable view of a text result."""
    if task.id is TaskType.DIAGRAM_AI:
        return _strip_mermaid_fence(result.text), "mermaid"
    return result.text, "markdown"


def _download_payloads(task: Task, result: GenerationResult) -> list[tuple[str, str, Any, str]]:
    """Return (label, file_name, data, mime) tuples for the output pane."""
    if result.kind is ResultKind.TEXT:
        source, language = _text_source(task, result)
        if language == "mermaid":
            return [("Download Diagram", "diagram.mmd", source, "text/plain")]
        slug = task.title.lower().replace(" ", "_")
        return [("Download Markdown", f"{slug}.md", source, "text/markdown")]

    if result.kind is ResultKind.IMAGE:
        mime, data = decode_data_uri(result.data_uri)
        return [("Download Image", "generated_image.jpg", data, mime)]

    payloads = []
    for index, frame in enumerate(result.frames, 1):
        mime, data = decode_data_uri(frame)
        payloads.append((f"Scene {index}", f"storyboard_scene_{index}.jpg", data, mime))
    return payloads


def _init_state() -> None:
    defaults = {
        "bi_task": TaskType.KEY_INSIGHTS.value,
        "bi_input_text": "",
        "bi_upload_nonce": 0,
        "bi_output": None,
        "bi_error": None,
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)


def _select_task(task_id: str) -> None:
    st.session_state["bi_task"] = task_id
    st.session_state["bi_input_text"] = ""
    st.session_state["bi_upload_nonce"] += 1
    st.session_state["bi_output"] = None
    st.session_state["bi_error"] = None


def _inject_styles() -> None:
    st.markdown(
        """
        <style>
        .block-container {
            max-width: 1280px;
            padding-top: 1.2rem;
        }

        .hero-title {
            margin: 0;
            font-size: 1.8rem;
            font-weight: 700;
            letter-spacing: -0.01em;
        }

        .hero-rule {
            height: 2px;
            margin: 0.6rem 0 1.2rem;
            background: linear-gradient(90deg, #4f46e5, #06b6d4, #a855f7);
        }

        .task-desc {
            font-size: 0.8rem;
            opacity: 0.75;
            min-height: 2.4em;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _header() -> None:
    st.markdown(
        """
        <h1 class="hero-title">🧠 AI Business Intelligence Assistant</h1>
        <div class="hero-rule"></div>
        """,
        unsafe_allow_html=True,
    )


def _sidebar(app: dict[str, Any]) -> None:
    settings = app["settings"]
    st.sidebar.markdown("## Assistant")
    if settings.configured:
        st.sidebar.success("AI service configured.")
    else:
        st.sidebar.warning(
            "API key is not configured. Add `API_KEY` to Streamlit Secrets or your local `.env`."
        )
    st.sidebar.caption(f"Text model: `{settings.text_model}`")
    st.sidebar.caption(f"Image model: `{settings.image_model}`")


def _task_selector() -> None:
    st.subheader("Choose a task")
    columns = st.columns(TASK_COLUMNS)
    for index, task in enumerate(TASKS):
        with columns[index % TASK_COLUMNS]:
            selected = st.session_state["bi_task"] == task.id.value
            st.button(
                f"{task.icon} {task.title}",
                key=f"bi_task_{index}",
                type="primary" if selected else "secondary",
                use_container_width=True,
                on_click=_select_task,
                args=(task.id.value,),
            )
            st.markdown(f"<p class='task-desc'>{html.escape(task.description)}</p>", unsafe_allow_html=True)


def _input_panel(task: Task) -> tuple[Any | None, bool]:
    """Render the input widgets; return (uploaded file, submit clicked)."""
    st.subheader("Input")
    uploaded = None
    if task.accepts_file:
        uploaded = st.file_uploader(
            f"Click to upload or drag and drop ({task.upload_hint})",
            type=task.upload_extensions,
            key=f"bi_upload_{st.session_state['bi_upload_nonce']}",
        )

    st.text_area(
        "Prompt",
        key="bi_input_text",
        placeholder=task.placeholder,
        height=160,
        label_visibility="collapsed",
    )

    ready = is_submittable(task.id, st.session_state["bi_input_text"], uploaded)
    submit = st.button(task.button_label, type="primary", use_container_width=True, disabled=not ready)
    return uploaded, submit


def _run_generation(app: dict[str, Any], task: Task, uploaded: Any | None) -> None:
    text = st.session_state["bi_input_text"]
    st.session_state["bi_output"] = None
    st.session_state["bi_error"] = None

    try:
        validate_submission(task.id, text, uploaded)
    except InputValidationError as exc:
        st.session_state["bi_error"] = exc.message
        return

    file = MediaFile.from_upload(uploaded) if uploaded is not None else None
    with st.spinner(f"AI is thinking... Analyzing your input for {task.title}."):
        try:
            result = asyncio.run(app["orchestrator"].generate(task.id, text, file))
        except AssistantError as exc:
            st.session_state["bi_error"] = f"An error occurred: {exc.message}"
            return
    st.session_state["bi_output"] = result


def _render_downloads(task: Task, result: GenerationResult) -> None:
    payloads = _download_payloads(task, result)
    columns = st.columns(len(payloads))
    for index, (label, file_name, data, mime) in enumerate(payloads):
        columns[index].download_button(
            label,
            data=data,
            file_name=file_name,
            mime=mime,
            use_container_width=True,
            key=f"bi_download_{index}",
        )


def _output_pane(task: Task) -> None:
    st.subheader("Output")
    error = st.session_state["bi_error"]
    result = st.session_state["bi_output"]

    if error:
        st.error(f"**Error**\n\n{error}")
        return
    if result is None:
        st.info(f"Your {task.title} result will appear here.")
        return

    if result.kind is ResultKind.STORYBOARD:
        st.markdown("#### AI Storyboard")
        columns = st.columns(len(result.frames))
        for index, frame in enumerate(result.frames):
            _, data = decode_data_uri(frame)
            columns[index].image(data, caption=f"Scene {index + 1}", use_container_width=True)
    elif result.kind is ResultKind.IMAGE:
        _, data = decode_data_uri(result.data_uri)
        st.image(data, caption="AI generated content", use_container_width=True)
    else:
        source, language = _text_source(task, result)
        if language == "mermaid":
            st.code(source, language="mermaid")
        else:
            st.markdown(result.text)
            # st.code carries a copy-to-clipboard button.
            if st.toggle("Show Markdown source", key="bi_show_source"):
                st.code(source, language="markdown")

    _render_downloads(task, result)


def main() -> None:
    st.set_page_config(
        page_title="AI Business Intelligence Assistant",
        page_icon="🧠",
        layout="wide",
    )

    _init_state()
    _inject_styles()

    app = _get_app()
    _header()
    _sidebar(app)

    task = get_task(st.session_state["bi_task"])
    left, right = st.columns([2, 3], gap="large")
    with left:
        _task_selector()
        uploaded, submit = _input_panel(task)
        if submit:
            _run_generation(app, task, uploaded)

    with right:
        _output_pane(task)


if __name__ == "__main__":
    main()
