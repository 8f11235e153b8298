"""
Tests for OutputShape and RequestConfig.

Validates:
- Shapes built from mappings keep order and field kinds
- Duplicate and empty shapes are rejected
- Placeholder detection
- RequestConfig coercion, defaults and immutability
"""

import pytest
from pydantic import ValidationError

from strict_output.core.config import RequestConfig
from strict_output.llm.schemas import EnumField, LiteralField, OutputShape, is_placeholder_key


def test_from_mapping_builds_field_kinds():
    """Test that strings become literal fields and lists become enum fields."""
    shape = OutputShape.from_mapping({
        "question": "a quiz question",
        "difficulty": ["easy", "medium", "hard"],
    })

    assert isinstance(shape.get("question"), LiteralField)
    assert isinstance(shape.get("difficulty"), EnumField)
    assert shape.get("difficulty").allowed_values == ("easy", "medium", "hard")
    assert shape.get("missing") is None


def test_key_order_is_preserved():
    """Test that keys keep insertion order."""
    shape = OutputShape.from_mapping({"z": "last letter", "a": "first letter", "m": "middle"})

    assert shape.keys == ["z", "a", "m"]
    assert len(shape) == 3


def test_to_mapping_roundtrip():
    """Test that to_mapping gives back the original mapping."""
    mapping = {"answer": "a short answer", "confidence": ["low", "high"]}

    assert OutputShape.from_mapping(mapping).to_mapping() == mapping


def test_prompt_text_is_json():
    """Test the canonical prompt rendering."""
    shape = OutputShape.from_mapping({"answer": "a short answer", "tone": ["formal", "casual"]})

    assert shape.to_prompt_text() == '{"answer": "a short answer", "tone": ["formal", "casual"]}'


def test_duplicate_names_rejected():
    """Test that two fields with the same name are rejected."""
    with pytest.raises(ValidationError) as exc_info:
        OutputShape(entries=(
            LiteralField(name="answer", description="first"),
            LiteralField(name="answer", description="second"),
        ))

    assert "duplicate" in str(exc_info.value).lower()


def test_empty_shape_rejected():
    """Test that a shape needs at least one field."""
    with pytest.raises(ValidationError):
        OutputShape.from_mapping({})


def test_invalid_field_spec_rejected():
    """Test that values other than str or list raise TypeError."""
    with pytest.raises(TypeError) as exc_info:
        OutputShape.from_mapping({"count": 3})

    assert "count" in str(exc_info.value)


def test_discriminated_union_from_dict():
    """Test that raw field dicts are parsed by their kind."""
    shape = OutputShape.model_validate({
        "entries": [
            {"kind": "literal", "name": "answer", "description": "short"},
            {"kind": "enum", "name": "tone", "allowed_values": ["formal", "casual"]},
        ]
    })

    assert isinstance(shape.entries[0], LiteralField)
    assert isinstance(shape.entries[1], EnumField)


def test_placeholder_detection():
    """Test placeholders are detected in keys and in values."""
    assert OutputShape.from_mapping({"<topic>": "a fact"}).has_placeholders()
    assert OutputShape.from_mapping({"fact": "a fact about <topic>"}).has_placeholders()
    assert OutputShape.from_mapping({"level": ["<level>", "basic"]}).has_placeholders()
    assert not OutputShape.from_mapping({"fact": "a fact"}).has_placeholders()


def test_is_placeholder_key():
    """Test that any angle bracket marks a dynamic key."""
    assert is_placeholder_key("<topic>")
    assert is_placeholder_key("fact about <topic>")
    assert not is_placeholder_key("topic")


def test_shape_is_immutable():
    """Test that shapes cannot be modified after creation."""
    shape = OutputShape.from_mapping({"answer": "short"})

    with pytest.raises(ValidationError):
        shape.entries = ()


def test_config_defaults():
    """Test RequestConfig default values."""
    config = RequestConfig(
        system_prompt="You answer questions.",
        user_prompt="What is 2+2?",
        output_format={"answer": "the answer"},
    )

    assert config.default_category == ""
    assert config.output_value_only is False
    assert config.model is None
    assert config.temperature == 0.7
    assert config.num_tries == 3
    assert config.verbose is False


def test_config_coerces_mapping_to_shape():
    """Test that a plain mapping becomes an OutputShape."""
    config = RequestConfig(
        system_prompt="s",
        user_prompt="u",
        output_format={"answer": "the answer"},
    )

    assert isinstance(config.output_format, OutputShape)
    assert config.output_format.keys == ["answer"]


def test_config_accepts_shape_instance():
    """Test that an OutputShape can be passed directly."""
    shape = OutputShape.from_mapping({"answer": "the answer"})

    config = RequestConfig(system_prompt="s", user_prompt="u", output_format=shape)

    assert config.output_format == shape


def test_config_list_input():
    """Test list inputs are detected and exposed in order."""
    config = RequestConfig(
        system_prompt="s",
        user_prompt=["first", "second"],
        output_format={"answer": "the answer"},
    )

    assert config.is_list_input
    assert config.inputs == ["first", "second"]


def test_config_single_input():
    """Test a single string input."""
    config = RequestConfig(system_prompt="s", user_prompt="only", output_format={"a": "b"})

    assert not config.is_list_input
    assert config.inputs == ["only"]


def test_config_rejects_zero_tries():
    """Test that at least one attempt is required."""
    with pytest.raises(ValidationError):
        RequestConfig(
            system_prompt="s",
            user_prompt="u",
            output_format={"answer": "the answer"},
            num_tries=0,
        )


def test_config_rejects_empty_output_format():
    """Test that an empty shape is rejected at configuration time."""
    with pytest.raises(ValidationError):
        RequestConfig(system_prompt="s", user_prompt="u", output_format={})


def test_config_is_immutable():
    """Test that RequestConfig cannot be modified."""
    config = RequestConfig(system_prompt="s", user_prompt="u", output_format={"a": "b"})

    with pytest.raises(ValidationError):
        config.num_tries = 5


def test_config_keeps_temperature_unvalidated():
    """Test that temperature is stored as given for the provider to judge."""
    config = RequestConfig(
        system_prompt="s",
        user_prompt="u",
        output_format={"a": "b"},
        temperature=-0.5,
    )

    assert config.temperature == -0.5
