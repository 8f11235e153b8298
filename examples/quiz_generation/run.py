"""
Example: Quiz question generation with structured output.

Demonstrates strict-output with:
- A question/answer shape requested for several topics at once
- An enum field defaulted when the model goes off-list
- Values-only mode for single answers
- MockProvider for running without API calls
"""

import json
import logging

from strict_output import RequestConfig, StructuredOutputRequester, strict_output
from strict_output.llm.providers.mock import MockProvider
from strict_output.llm.providers.gemini import GeminiProvider

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def create_provider():
    """
    Create the LLM provider for the example.

    Returns:
        MockProvider with canned replies
    """
    # Option 1: Use MockProvider for testing without API calls.
    # The first reply is deliberately messy to show sanitization and retry.
    llm_provider = MockProvider(responses=[
        "Here are your questions!",
        "```json\n["
        "{'question': 'What gas do plants release during photosynthesis?', "
        "'answer': 'Oxygen', 'difficulty': 'easy'},"
        "{'question': 'How many daughter cells does mitosis produce?', "
        "'answer': 'Two', 'difficulty': 'trivial'},"
        "]\n```",
        '{"answer": "Paris"}',
    ])

    # Option 2: Use GeminiProvider (requires GEMINI_API_KEY)
    # llm_provider = GeminiProvider()

    return llm_provider


def main():
    """Run the example requests."""
    print("=" * 80)
    print("Quiz Generation Example")
    print("=" * 80)
    print()

    provider = create_provider()
    requester = StructuredOutputRequester(provider)

    print("Step 1: Generating one question per topic...")
    print("-" * 80)
    questions = requester.request(RequestConfig(
        system_prompt="You are a helpful AI that writes short quiz questions for students.",
        user_prompt=["photosynthesis", "mitosis"],
        output_format={
            "question": "a quiz question about the topic",
            "answer": "the answer, under 15 words",
            "difficulty": ["easy", "medium", "hard"],
        },
        default_category="medium",
        verbose=True,
    ))
    print(json.dumps(questions, indent=2))
    print()

    print("Step 2: Asking for a single value...")
    print("-" * 80)
    answer = strict_output(
        provider,
        system_prompt="You are a helpful AI that answers questions.",
        user_prompt="What is the capital of France?",
        output_format={"answer": "a short answer"},
        output_value_only=True,
    )
    print(answer)
    print()

    print("Done!")
    print("=" * 80)

    return questions


if __name__ == "__main__":
    main()
