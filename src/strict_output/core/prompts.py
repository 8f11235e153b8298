"""Prompt construction for structured-output requests."""

from strict_output.core.config import RequestConfig


FORMAT_INSTRUCTIONS = """

ONLY return a valid JSON object following this shape: {shape}.
Do not wrap the JSON inside code blocks.
Do not use single quotes.
Avoid trailing commas.
Return ONLY raw valid JSON with NO explanations, NO markdown, and NO comments.
"""

LIST_INPUT_INSTRUCTIONS = (
    "\nReturn a JSON array of objects, one for each user input, "
    "in the same order as the inputs."
)

PLACEHOLDER_INSTRUCTIONS = (
    "\nAny key or value wrapped in <...> must be replaced dynamically "
    "with contextually accurate content."
)

PARSE_INSTRUCTIONS = (
    "\n\nThe output MUST be directly parsable by a strict JSON parser: "
    "no explanation, no markdown formatting, no extra comments."
)


def build_format_instructions(config: RequestConfig) -> str:
    """Render the shape and the fixed formatting rules."""
    instructions = FORMAT_INSTRUCTIONS.format(shape=config.output_format.to_prompt_text())

    if config.is_list_input:
        instructions += LIST_INPUT_INSTRUCTIONS

    if config.output_format.has_placeholders():
        instructions += PLACEHOLDER_INSTRUCTIONS

    return instructions + PARSE_INSTRUCTIONS


def build_prompt(config: RequestConfig, feedback: str = "") -> str:
    """
    Build the full prompt for one attempt.

    Args:
        config: The request configuration
        feedback: Accumulated failure feedback from earlier attempts

    Returns:
        System prompt, format instructions, feedback and inputs as one string
    """
    inputs = "\n".join(config.inputs)
    return (
        f"{config.system_prompt}"
        f"{build_format_instructions(config)}"
        f"{feedback}"
        f"\n\nINPUT:\n{inputs}"
    )
