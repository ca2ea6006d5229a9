"""Pure state helpers for the admin UI.

Nothing here touches Streamlit, so the list bookkeeping, form parsing and
the narrative state machine can be exercised without a running app.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

TRAITS_HINT = 'Traits must be valid JSON, e.g. {"temperament": "steadfast"}'

# ASCII or full-width comma
_COMMA_SPLIT = re.compile(r"[,，]")

Item = dict[str, Any]


def prepend_item(items: list[Item], item: Item) -> list[Item]:
    """New records go to the top of the list."""
    return [item, *items]


def replace_item(items: list[Item], item: Item) -> list[Item]:
    """Swap the record with the same id for its updated version."""
    item_id = item.get("id")
    return [item if existing.get("id") == item_id else existing for existing in items]


def remove_item(items: list[Item], item_id: str) -> list[Item]:
    """Drop the record with this id."""
    return [existing for existing in items if existing.get("id") != item_id]


def parse_comma_list(text: str | None) -> list[str]:
    """Split comma separated input into trimmed, non-empty entries."""
    if not text:
        return []
    return [part.strip() for part in _COMMA_SPLIT.split(text) if part.strip()]


def format_comma_list(values: list[str] | None) -> str:
    """Inverse of ``parse_comma_list`` for pre-filling a form."""
    return ", ".join(values or [])


def parse_traits(text: str | None) -> dict[str, Any]:
    """Parse the traits textarea.

    Raises:
        ValueError: With the fixed traits hint when the text is not a JSON object
    """
    if not text or not text.strip():
        return {}
    try:
        value = json.loads(text)
    except ValueError as e:
        raise ValueError(TRAITS_HINT) from e
    if not isinstance(value, dict):
        raise ValueError(TRAITS_HINT)
    return value


def format_traits(traits: dict[str, Any] | None) -> str:
    """Pretty-print traits for the textarea."""
    if not traits:
        return ""
    return json.dumps(traits, ensure_ascii=False, indent=2)


def count_nonblank_lines(text: str | None) -> int:
    """Number of lines with visible content."""
    if not text:
        return 0
    return sum(1 for line in text.splitlines() if line.strip())


def optional_text(value: str | None) -> str | None:
    """Blank form input means 'not provided'."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def optional_number(value: str | None, label: str) -> int | float | None:
    """Parse an optional numeric text input.

    Raises:
        ValueError: If the text is not blank and not a number
    """
    text = optional_text(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError as e:
        raise ValueError(f"{label} must be a number") from e


class NarrativeStatus(str, Enum):
    """Lifecycle of a narrative request."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


_HELPER_TEXT = {
    NarrativeStatus.IDLE: "Enter a movie and a character, then generate.",
    NarrativeStatus.LOADING: "Generating the narrative...",
    NarrativeStatus.SUCCESS: "Narrative ready.",
    NarrativeStatus.ERROR: "Generation failed. Adjust the input and try again.",
}


@dataclass
class NarrativeState:
    """idle -> loading -> success | error, with reset back to idle."""

    status: NarrativeStatus = NarrativeStatus.IDLE
    story: str | None = None
    error: str | None = None
    last_request: dict[str, Any] | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def start(self) -> None:
        """Enter the loading state, clearing the previous error and meta."""
        self.status = NarrativeStatus.LOADING
        self.error = None
        self.meta = {}

    def succeed(self, request: dict[str, Any], data: dict[str, Any]) -> None:
        """Record a successful response."""
        self.status = NarrativeStatus.SUCCESS
        self.story = data.get("story")
        self.last_request = request
        self.meta = {
            "cached": data.get("cached"),
            "generatedAt": data.get("generatedAt"),
        }

    def fail(self, message: str | None) -> None:
        """Record a failure."""
        self.status = NarrativeStatus.ERROR
        self.error = message or "Unknown error"

    def reset(self) -> None:
        """Back to idle, keeping the last request for pre-filling the form."""
        self.status = NarrativeStatus.IDLE
        self.story = None
        self.error = None
        self.meta = {}

    @property
    def helper_text(self) -> str:
        """Status line shown under the form."""
        return _HELPER_TEXT[self.status]


def missing_narrative_fields(movie_title: str, character_name: str) -> list[str]:
    """Form-level check before calling the API."""
    missing = []
    if not movie_title.strip():
        missing.append("movie title")
    if not character_name.strip():
        missing.append("character name")
    return missing
