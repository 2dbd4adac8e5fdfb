"""AI generated todo suggestions."""

import json
import logging
import re

from tododash.errors import ProviderError, ValidationError
from tododash.providers.completion import CompletionClient

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5

SYSTEM_PROMPT = (
    "You are a helpful productivity assistant. Create specific, actionable todo "
    "items based on the user's input. ALWAYS answer with a valid JSON array of "
    "strings and nothing else."
)

USER_PROMPT = (
    'Based on this input: "{goal}", create 3-5 specific, realistic and actionable '
    "todo items that help the user reach their goal.\n\n"
    "Format the answer as a JSON array of strings, one todo per string.\n\n"
    'Example:\n["Finish specific task 1", "Do specific task 2", "Complete specific task 3"]\n\n'
    "IMPORTANT: answer with the JSON array only, no extra text."
)

MESSAGES = {
    "en": {
        "empty_goal": "Please describe what you want to achieve",
        "no_response": "No response from the AI",
        "invalid_format": "The AI response has an invalid format",
        "parse_failed": "Could not parse the AI suggestions",
    },
    "id": {
        "empty_goal": "Silakan jelaskan apa yang ingin kamu capai",
        "no_response": "Tidak ada respons dari AI",
        "invalid_format": "Format respons AI tidak valid",
        "parse_failed": "Gagal memparse saran AI",
    },
}

_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


def message(key: str, locale: str = "en") -> str:
    return MESSAGES.get(locale, MESSAGES["en"])[key]


def strip_code_fences(text: str) -> str:
    text = text.strip()
    text = _FENCE_OPEN.sub("", text)
    return _FENCE_CLOSE.sub("", text).strip()


def first_json_array(text: str) -> list | None:
    """Decode the first well-formed JSON array literal found in ``text``."""
    decoder = json.JSONDecoder()
    start = text.find("[")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except ValueError:
            value = None
        if isinstance(value, list):
            return value
        start = text.find("[", start + 1)
    return None


def parse_suggestions(text: str, locale: str = "en") -> list[str]:
    """Turn a raw completion into a list of todo strings.

    Raises ValidationError with a localized message when nothing usable is
    found.
    """
    if not text or not text.strip():
        raise ValidationError(message("no_response", locale))

    items = first_json_array(strip_code_fences(text))
    if items is None:
        logger.warning("no JSON array in completion: %r", text)
        raise ValidationError(message("parse_failed", locale))

    suggestions = [item.strip() for item in items if isinstance(item, str) and item.strip()]
    if not suggestions:
        raise ValidationError(message("invalid_format", locale))
    return suggestions[:MAX_SUGGESTIONS]


class SuggestionService:
    def __init__(self, completion: CompletionClient, locale: str = "en"):
        self.completion = completion
        self.locale = locale

    async def suggest(self, goal: str) -> list[str]:
        goal = (goal or "").strip()
        if not goal:
            raise ValidationError(message("empty_goal", self.locale))
        try:
            text = await self.completion.complete(SYSTEM_PROMPT, USER_PROMPT.format(goal=goal))
        except ProviderError:
            logger.exception("completion request failed")
            raise
        return parse_suggestions(text, self.locale)
