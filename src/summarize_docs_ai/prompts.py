"""
Request normalizer.

Turns a SummarizationRequest into the vendor-agnostic prompt string sent to
every provider. Everything here is pure: no I/O, no randomness, and the same
request always yields the same prompt.
"""

from __future__ import annotations

from enum import Enum

from summarize_docs_ai.errors import InvalidQuickAction
from summarize_docs_ai.models import Mode, SummarizationRequest

SUMMARIZER_SYSTEM_PROMPT = (
    "You are a helpful AI assistant that specializes in summarizing text."
)

GRAMMAR_SYSTEM_PROMPT = (
    "You are a professional editor. Your task is to check the text for grammar, "
    "spelling, and style issues. Provide corrections and explanations in a clear, "
    "concise format."
)

DEFAULT_CUSTOM_INSTRUCTIONS = "Summarize the following text in a creative way"

LOW_THRESHOLD = 0.3
HIGH_THRESHOLD = 0.7

# (low, middle, high) qualifiers per mode
QUALIFIERS: dict[Mode, tuple[str, str, str]] = {
    Mode.PARAGRAPH: ("very concise", "moderate in length", "detailed"),
    Mode.BULLET: ("few", "some", "many"),
    Mode.CUSTOM: ("very brief", "balanced", "comprehensive"),
}


class QuickAction(str, Enum):
    """Canned custom instructions offered next to the custom-mode text box."""

    CONCLUSION = "conclusion"
    ACADEMIC = "academic"
    TITLE = "title"


QUICK_ACTION_INSTRUCTIONS = {
    QuickAction.CONCLUSION: "Generate a concise conclusion for this text",
    QuickAction.ACADEMIC: "Rewrite this text in an academic style",
    QuickAction.TITLE: "Generate an appropriate title for this text",
}

LENGTH_LABELS = ("Very Brief", "Brief", "Detailed", "Very Detailed")


def length_qualifier(mode: Mode, length_factor: float) -> str:
    """
    Map a length factor to the qualitative adjective for a mode.

    ``< 0.3`` picks the low qualifier, ``> 0.7`` the high one, anything else
    the middle one.
    """
    low, middle, high = QUALIFIERS[mode]
    if length_factor < LOW_THRESHOLD:
        return low
    if length_factor > HIGH_THRESHOLD:
        return high
    return middle


def normalize(request: SummarizationRequest) -> str:
    """
    Build the normalized prompt for a request.

    Args:
        request: The user-facing request.

    Returns:
        The prompt string, identical for identical requests.

    Raises:
        InvalidMode: If the request mode is not recognized.
    """
    mode = Mode.parse(request.mode)
    text = request.text

    if mode is Mode.GRAMMAR:
        return f'Please check this text for grammar and style issues: "{text}"'

    qualifier = length_qualifier(mode, request.length_factor)

    if mode is Mode.PARAGRAPH:
        return (
            "Summarize the following text in a single paragraph. "
            f"Make the summary {qualifier}:\n\n{text}"
        )
    if mode is Mode.BULLET:
        return (
            "Summarize the following text in bullet points. "
            f"Provide {qualifier} key points:\n\n{text}"
        )

    instructions = (request.custom_instructions or "").strip() or DEFAULT_CUSTOM_INSTRUCTIONS
    return f"{instructions}. The summary should be {qualifier}:\n\n{text}"


def system_prompt(mode: Mode | str) -> str:
    """System prompt that accompanies the normalized prompt for a mode."""
    if Mode.parse(mode) is Mode.GRAMMAR:
        return GRAMMAR_SYSTEM_PROMPT
    return SUMMARIZER_SYSTEM_PROMPT


def quick_action_instructions(action: QuickAction | str) -> str:
    """Return the canned custom instructions for a quick action."""
    try:
        key = QuickAction(action.strip().lower() if isinstance(action, str) else action)
    except ValueError:
        raise InvalidQuickAction(action, [a.value for a in QuickAction]) from None
    return QUICK_ACTION_INSTRUCTIONS[key]


def apply_quick_action(
    mode: Mode | str,
    instructions: str | None,
    action: QuickAction | str | None,
) -> tuple[Mode | str, str | None]:
    """
    Resolve a quick action into (mode, custom instructions).

    The canned instructions only fill an empty instructions field, and a
    filled field always switches the request to custom mode.

    Raises:
        InvalidQuickAction: If the action name is unknown.
    """
    if not action:
        return mode, instructions
    canned = quick_action_instructions(action)
    if instructions and instructions.strip():
        return mode, instructions
    return Mode.CUSTOM, canned


def length_factor_from_slider(position: int) -> float:
    """Convert a 0..3 slider position into the length factor sent with requests."""
    position = max(0, min(len(LENGTH_LABELS) - 1, int(position)))
    return (position + 1) * 0.25


def length_label(position: int) -> str:
    if 0 <= position < len(LENGTH_LABELS):
        return LENGTH_LABELS[position]
    return "Brief"
