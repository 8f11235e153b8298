"""
Tests for prompt construction.

Validates:
- System prompt, shape, and inputs are included
- List-input and placeholder instructions appear only when relevant
- Feedback is placed before the inputs
"""

import pytest

from strict_output.core.config import RequestConfig
from strict_output.core.prompts import build_prompt


@pytest.fixture
def qa_config():
    """Single-input question/answer request."""
    return RequestConfig(
        system_prompt="You are a helpful AI that answers questions.",
        user_prompt="What is the capital of France?",
        output_format={"answer": "a short answer"},
    )


def test_prompt_includes_system_prompt_first(qa_config):
    """Test that the prompt starts with the system instructions."""
    prompt = build_prompt(qa_config)

    assert prompt.startswith("You are a helpful AI that answers questions.")


def test_prompt_includes_shape(qa_config):
    """Test that the serialized shape is in the prompt."""
    prompt = build_prompt(qa_config)

    assert '{"answer": "a short answer"}' in prompt
    assert "Do not use single quotes." in prompt
    assert "Avoid trailing commas." in prompt


def test_prompt_includes_enum_values():
    """Test that allowed values are rendered as a JSON array."""
    config = RequestConfig(
        system_prompt="Rate the question.",
        user_prompt="What is 2+2?",
        output_format={"difficulty": ["easy", "medium", "hard"]},
    )

    prompt = build_prompt(config)

    assert '"difficulty": ["easy", "medium", "hard"]' in prompt


def test_prompt_ends_with_input(qa_config):
    """Test that the input text follows the INPUT marker."""
    prompt = build_prompt(qa_config)

    assert prompt.endswith("\n\nINPUT:\nWhat is the capital of France?")


def test_list_input_instructions():
    """Test that multiple inputs ask for one object per input, in order."""
    config = RequestConfig(
        system_prompt="Write a question for each topic.",
        user_prompt=["photosynthesis", "mitosis"],
        output_format={"question": "a question"},
    )

    prompt = build_prompt(config)

    assert "one for each user input" in prompt
    assert "same order" in prompt
    assert prompt.endswith("INPUT:\nphotosynthesis\nmitosis")


def test_single_input_has_no_list_instructions(qa_config):
    """Test that a single input does not ask for an array."""
    assert "one for each user input" not in build_prompt(qa_config)


def test_placeholder_instructions():
    """Test that placeholders trigger the dynamic replacement instruction."""
    config = RequestConfig(
        system_prompt="Describe the topic.",
        user_prompt="The water cycle",
        output_format={"<key_term>": "definition of the term"},
    )

    assert "wrapped in <...>" in build_prompt(config)


def test_no_placeholder_instructions_without_placeholders(qa_config):
    """Test that plain shapes do not mention placeholders."""
    assert "wrapped in <...>" not in build_prompt(qa_config)


def test_feedback_precedes_input(qa_config):
    """Test that error feedback is inserted before the input section."""
    feedback = "\n\n[PREVIOUS ATTEMPT FAILED: No valid JSON object found.]"

    prompt = build_prompt(qa_config, feedback)

    assert feedback in prompt
    assert prompt.index(feedback) < prompt.index("INPUT:")


def test_no_feedback_on_first_attempt(qa_config):
    """Test that an empty feedback leaves no failure marker."""
    assert "PREVIOUS ATTEMPT FAILED" not in build_prompt(qa_config)
