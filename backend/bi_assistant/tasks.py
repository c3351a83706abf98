"""Static catalog of the assistant's tasks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import UnknownTaskError


class TaskType(str, Enum):
    KEY_INSIGHTS = "Key Insights"
    SWOT = "SWOT Analysis"
    CONTENT_ENHANCER = "Content Enhancer"
    HUMANIZE_TEXT = "Humanize Text"
    CODE_GENERATOR = "Code Generator"
    CODE_DEBUGGER = "Code Debugger"
    IMAGE_ANALYSIS = "Image Analysis"
    VIDEO_ANALYSIS = "Video Analysis"
    DIAGRAM_AI = "Diagram AI"
    IMAGE_CREATE = "Image Creator AI"
    STORYBOARD_CREATOR = "Storyboard Creator AI"


class InputKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class ResultKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    STORYBOARD = "storyboard"


IMAGE_EXTENSIONS = ["png", "jpg", "jpeg", "gif", "webp"]
VIDEO_EXTENSIONS = ["mp4", "mov", "webm"]


@dataclass(frozen=True)
class Task:
    """Display metadata for one user-selectable task."""

    id: TaskType
    title: str
    description: str
    icon: str
    placeholder: str
    accepts: InputKind = InputKind.TEXT

    @property
    def accepts_file(self) -> bool:
        return self.accepts in (InputKind.IMAGE, InputKind.VIDEO)

    @property
    def result_kind(self) -> ResultKind:
        if self.id is TaskType.IMAGE_CREATE:
            return ResultKind.IMAGE
        if self.id is TaskType.STORYBOARD_CREATOR:
            return ResultKind.STORYBOARD
        return ResultKind.TEXT

    @property
    def button_label(self) -> str:
        labels = {
            TaskType.IMAGE_CREATE: "Generate Image",
            TaskType.DIAGRAM_AI: "Generate Diagram",
            TaskType.STORYBOARD_CREATOR: "Generate Storyboard",
        }
        return labels.get(self.id, "Generate Analysis")

    @property
    def upload_hint(self) -> str:
        if self.accepts is InputKind.IMAGE:
            return "PNG, JPG, GIF up to 10MB"
        if self.accepts is InputKind.VIDEO:
            return "MP4, MOV, WEBM up to 50MB"
        return ""

    @property
    def upload_extensions(self) -> list[str]:
        if self.accepts is InputKind.IMAGE:
            return list(IMAGE_EXTENSIONS)
        if self.accepts is InputKind.VIDEO:
            return list(VIDEO_EXTENSIONS)
        return []


TASKS: tuple[Task, ...] = (
    Task(
        id=TaskType.KEY_INSIGHTS,
        title="Key Insights",
        description="Extract trends, sentiments, and opportunities from text.",
        icon="💡",
        placeholder=(
            "Paste customer feedback, market research, or meeting transcripts here "
            "to extract key insights..."
        ),
    ),
    Task(
        id=TaskType.SWOT,
        title="SWOT Analysis",
        description="Generate a SWOT analysis from business descriptions.",
        icon="📊",
        placeholder=(
            "Provide a description of your business, a competitor analysis, or a "
            "project plan to generate a SWOT analysis..."
        ),
    ),
    Task(
        id=TaskType.CONTENT_ENHANCER,
        title="Content Enhancer",
        description="Improve clarity, tone, and impact of your writing.",
        icon="✨",
        placeholder=(
            "Enter marketing copy, customer service scripts, or any text you want to "
            "refine for better communication..."
        ),
    ),
    Task(
        id=TaskType.HUMANIZE_TEXT,
        title="Humanize Text",
        description="Rewrite text to sound more natural and empathetic.",
        icon="🤝",
        placeholder=(
            "Paste your corporate jargon, technical writing, or any text you want to "
            "make more human-friendly..."
        ),
    ),
    Task(
        id=TaskType.CODE_GENERATOR,
        title="Code Generator",
        description="Create code from a natural language description.",
        icon="💻",
        placeholder=(
            "Describe the function or component you want to build. For example, "
            '"Create a React button component with a loading state" or "Write a Python '
            'function to sort a list of objects by a specific key"...'
        ),
    ),
    Task(
        id=TaskType.CODE_DEBUGGER,
        title="Code Debugger",
        description="Find and fix bugs in your code snippets.",
        icon="🛡️",
        placeholder=(
            "Paste a code snippet and the error message you are receiving. The AI will "
            "analyze it and suggest a fix..."
        ),
    ),
    Task(
        id=TaskType.DIAGRAM_AI,
        title="Diagram AI",
        description="Generate UML class diagrams from a description.",
        icon="🧩",
        placeholder=(
            "Describe the classes, attributes, and relationships for your diagram. "
            "E.g., 'A Customer has a name and email, and can have many Orders. An Order "
            "has an ID and a total amount.'"
        ),
    ),
    Task(
        id=TaskType.IMAGE_ANALYSIS,
        title="Image Analysis",
        description="Describe contents, extract text, or identify objects in an image.",
        icon="🖼️",
        placeholder=(
            'Optionally provide a prompt to guide the analysis, e.g., "What brand of car '
            'is this?" or "Extract all text from this screenshot."...'
        ),
        accepts=InputKind.IMAGE,
    ),
    Task(
        id=TaskType.IMAGE_CREATE,
        title="Image Creator AI",
        description="Generate a unique image from a text description.",
        icon="🎨",
        placeholder=(
            'Describe the image you want to create. Be detailed! E.g., "A photorealistic '
            'image of a red panda wearing a tiny chef hat, cooking a miniature pizza"...'
        ),
    ),
    Task(
        id=TaskType.VIDEO_ANALYSIS,
        title="Video Analysis",
        description="Analyze a single frame from a video to describe its contents.",
        icon="🎞️",
        placeholder="Optionally provide a prompt to guide the analysis of a frame from your video...",
        accepts=InputKind.VIDEO,
    ),
    Task(
        id=TaskType.STORYBOARD_CREATOR,
        title="AI Storyboard Creator",
        description="Generate a sequence of images from a story prompt.",
        icon="🎬",
        placeholder=(
            "Describe a short story or scene. The AI will create a sequence of images to "
            'visualize it. E.g., "A robot exploring a mysterious, glowing cave"...'
        ),
    ),
)

_TASKS_BY_ID = {task.id: task for task in TASKS}


def get_task(task_id: TaskType | str) -> Task:
    """Look up a task by enum member or its string value."""
    try:
        key = TaskType(task_id)
    except ValueError:
        raise UnknownTaskError("Invalid task selected.", {"task": str(task_id)}) from None
    return _TASKS_BY_ID[key]
