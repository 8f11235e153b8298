"""
Pydantic schemas describing the JSON shape requested from the model.

An OutputShape is an ordered list of field descriptors. Each descriptor is
either a LiteralField (free-form value described in words) or an EnumField
(value must be one of a closed set). Names or values wrapped in angle
brackets, e.g. "<topic>", are placeholders the model fills in dynamically.
"""

import json
import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator


PLACEHOLDER_PATTERN = re.compile(r"<.*?>")


class LiteralField(BaseModel):
    """A field whose value is free-form text described by `description`."""

    kind: Literal["literal"] = "literal"
    name: str = Field(..., description="JSON key expected in each record")
    description: str = Field(..., description="What the value should contain")

    model_config = {"frozen": True}

    def prompt_value(self) -> str:
        return self.description


class EnumField(BaseModel):
    """A field whose value must be exactly one of `allowed_values`."""

    kind: Literal["enum"] = "enum"
    name: str = Field(..., description="JSON key expected in each record")
    allowed_values: tuple[str, ...] = Field(
        ..., description="Closed set of values, in prompt order"
    )

    model_config = {"frozen": True}

    def prompt_value(self) -> list[str]:
        return list(self.allowed_values)


ShapeField = Annotated[Union[LiteralField, EnumField], Field(discriminator="kind")]


class OutputShape(BaseModel):
    """
    Ordered, unique-keyed description of the records to request.

    Example:
        >>> shape = OutputShape.from_mapping({
        ...     "question": "a quiz question about the topic",
        ...     "difficulty": ["easy", "medium", "hard"],
        ... })
        >>> shape.keys
        ['question', 'difficulty']
        >>> shape.to_prompt_text()
        '{"question": "a quiz question about the topic", "difficulty": ["easy", "medium", "hard"]}'
    """

    entries: tuple[ShapeField, ...] = Field(..., min_length=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_unique_names(self) -> "OutputShape":
        names = [f.name for f in self.entries]
        if len(set(names)) != len(names):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"OutputShape contains duplicate field names: {duplicates}")
        return self

    @classmethod
    def from_mapping(cls, mapping: dict[str, Union[str, list[str]]]) -> "OutputShape":
        """
        Build a shape from a plain {name: description | allowed_values} mapping.

        Raises:
            TypeError: If a value is neither a string nor a list of strings
        """
        fields: list[Union[LiteralField, EnumField]] = []
        for name, spec in mapping.items():
            if isinstance(spec, str):
                fields.append(LiteralField(name=name, description=spec))
            elif isinstance(spec, (list, tuple)):
                fields.append(EnumField(name=name, allowed_values=tuple(spec)))
            else:
                raise TypeError(
                    f"Field '{name}' must be a description string or a list of "
                    f"allowed values, got {type(spec).__name__}"
                )
        return cls(entries=tuple(fields))

    @property
    def keys(self) -> list[str]:
        return [f.name for f in self.entries]

    def get(self, name: str) -> Union[LiteralField, EnumField, None]:
        for f in self.entries:
            if f.name == name:
                return f
        return None

    def to_mapping(self) -> dict[str, Union[str, list[str]]]:
        return {f.name: f.prompt_value() for f in self.entries}

    def to_prompt_text(self) -> str:
        """Canonical JSON rendering used inside prompts."""
        return json.dumps(self.to_mapping(), ensure_ascii=False)

    def has_placeholders(self) -> bool:
        """True if any field name or value contains an <...> placeholder."""
        return bool(PLACEHOLDER_PATTERN.search(self.to_prompt_text()))

    def __len__(self) -> int:
        return len(self.entries)


def is_placeholder_key(name: str) -> bool:
    """Dynamic keys are marked by an angle bracket anywhere in the name."""
    return "<" in name
