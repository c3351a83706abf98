"""System instruction lookup."""

import pytest

from bi_assistant.prompts import (
    DEFAULT_SYSTEM_INSTRUCTION,
    SYSTEM_INSTRUCTIONS,
    resolve_system_instruction,
)
from bi_assistant.tasks import TaskType


@pytest.mark.parametrize("task", list(TaskType))
def test_every_task_resolves_to_non_empty_instruction(task):
    assert resolve_system_instruction(task).strip()


def test_unknown_identifier_gets_fallback():
    assert resolve_system_instruction("Astrology") == DEFAULT_SYSTEM_INSTRUCTION
    assert DEFAULT_SYSTEM_INSTRUCTION == "You are a helpful assistant."


def test_string_identifier_matches_enum_lookup():
    assert resolve_system_instruction("SWOT Analysis") == SYSTEM_INSTRUCTIONS[TaskType.SWOT]


def test_diagram_instruction_demands_mermaid_only():
    instruction = resolve_system_instruction(TaskType.DIAGRAM_AI)
    assert "```mermaid" in instruction
