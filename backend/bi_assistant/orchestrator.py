"""Turns a (task, text, file) submission into a generation result.

Three flows exist:

- text tasks: one completion call, optionally with an inline media part;
- image creation: one image call (1:1);
- storyboard: a structured completion that yields scene prompts, then one
  16:9 image call per scene, run concurrently and joined all-or-nothing.

Each call is attempted once. Whatever goes wrong surfaces as a single
`AssistantError` whose message is shown to the user.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

from .ai.openai_client import NOT_CONFIGURED_MESSAGE, OpenAIClient
from .errors import (
    AssistantError,
    ConfigurationError,
    EmptyResultError,
    GenerationError,
    ResponseParseError,
)
from .media import DEFAULT_TIMEOUT_SECONDS, MediaFile, encode_media
from .prompts import DEFAULT_MEDIA_PROMPT, DIRECTOR_INSTRUCTION, resolve_system_instruction
from .results import GenerationResult, ImageResult, StoryboardResult, TextResult, to_data_uri
from .tasks import Task, TaskType, get_task

logger = logging.getLogger(__name__)

TEMPERATURE = 0.5
TOP_P = 0.95
TOP_K = 64

IMAGE_MIME_TYPE = "image/jpeg"
STORYBOARD_SCENES = 3

SCENES_SCHEMA = {
    "type": "object",
    "properties": {"scenes": {"type": "array", "items": {"type": "string"}}},
    "required": ["scenes"],
}


class SceneList(BaseModel):
    scenes: List[str]


class GenerationOrchestrator:
    def __init__(
        self,
        ai_client: OpenAIClient,
        media_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.ai_client = ai_client
        self.media_timeout_seconds = media_timeout_seconds

    async def generate(
        self,
        task: TaskType | str,
        text: str = "",
        file: Optional[MediaFile] = None,
    ) -> GenerationResult:
        """Run one generation request for `task`."""
        if not self.ai_client.configured:
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

        task_info = get_task(task)
        logger.info("Dispatching %s request", task_info.id.value)
        text = text or ""
        try:
            if task_info.id is TaskType.STORYBOARD_CREATOR:
                return await self._generate_storyboard(text)
            if task_info.id is TaskType.IMAGE_CREATE:
                return await self._generate_image(text)
            return await self._generate_text(task_info, text, file)
        except AssistantError:
            raise
        except Exception as exc:
            logger.exception("Unexpected failure while generating %s", task_info.id.value)
            raise GenerationError(
                f"An unexpected error occurred while communicating with the AI: {exc}"
            ) from exc

    async def _generate_text(
        self,
        task: Task,
        text: str,
        file: Optional[MediaFile],
    ) -> TextResult:
        contents: Any
        if file is not None and task.accepts_file:
            media_part = await encode_media(file, task.accepts, timeout=self.media_timeout_seconds)
            contents = [
                media_part.to_content_part(),
                {"type": "text", "text": text or DEFAULT_MEDIA_PROMPT},
            ]
        else:
            contents = text

        reply = await self.ai_client.complete(
            contents,
            system_instruction=resolve_system_instruction(task.id),
            temperature=TEMPERATURE,
            top_p=TOP_P,
            top_k=TOP_K,
        )
        if not reply:
            raise EmptyResultError("Received an empty response from the AI.")
        return TextResult(reply)

    async def _generate_image(self, prompt: str) -> ImageResult:
        images = await self.ai_client.generate_images(
            prompt,
            number_of_images=1,
            output_mime_type=IMAGE_MIME_TYPE,
            aspect_ratio="1:1",
        )
        if not images:
            raise EmptyResultError("Received no image from the AI.")
        return ImageResult(to_data_uri(images[0], IMAGE_MIME_TYPE))

    async def _request_scenes(self, prompt: str) -> List[str]:
        raw = await self.ai_client.complete(
            prompt,
            system_instruction=DIRECTOR_INSTRUCTION,
            response_schema=SCENES_SCHEMA,
            schema_name="storyboard",
        )
        try:
            scene_list = SceneList.model_validate_json(raw or "{}")
        except ValidationError as exc:
            raise ResponseParseError(
                f"Could not parse the storyboard scenes: {exc.errors()[0]['msg']}"
            ) from exc

        scenes = [scene.strip() for scene in scene_list.scenes if scene.strip()]
        if not scenes:
            raise EmptyResultError("The AI failed to generate storyboard scenes.")
        if len(scenes) > STORYBOARD_SCENES:
            logger.warning("Model returned %d scenes; keeping the first %d", len(scenes), STORYBOARD_SCENES)
            scenes = scenes[:STORYBOARD_SCENES]
        return scenes

    async def _render_scene(self, scene: str) -> str:
        images = await self.ai_client.generate_images(
            scene,
            number_of_images=1,
            output_mime_type=IMAGE_MIME_TYPE,
            aspect_ratio="16:9",
        )
        if not images:
            raise EmptyResultError("An image could not be generated for one of the scenes.")
        return to_data_uri(images[0], IMAGE_MIME_TYPE)

    async def _generate_storyboard(self, prompt: str) -> StoryboardResult:
        scenes = await self._request_scenes(prompt)
        logger.info("Rendering %d storyboard scenes", len(scenes))

        # TaskGroup cancels the remaining scenes as soon as one fails.
        try:
            async with asyncio.TaskGroup() as group:
                jobs = [group.create_task(self._render_scene(scene)) for scene in scenes]
        except ExceptionGroup as failures:
            raise _first_leaf(failures) from None

        return StoryboardResult(tuple(job.result() for job in jobs))


def _first_leaf(group: BaseExceptionGroup) -> BaseException:
    first = group.exceptions[0]
    if isinstance(first, BaseExceptionGroup):
        return _first_leaf(first)
    return first
