"""Placeholder narrative builder.

Produces a fixed first-person template from a movie title and character
name. There is no generation model behind it: the output depends only on
the request fields.
"""

from datetime import UTC, datetime

from npcdb.models import NarrativeRequest, NarrativeResult

OPENING_LINE = "I am {character_name}, from 《{movie_title}》."
PLACEHOLDER_LINES = (
    "This is a placeholder narrative assembled from the database material; "
    "real generation will be connected later.",
    "Following the plot as it unfolds, I will walk you through the moments "
    "that mattered, in my own words.",
)
EMPHASIS_LINE = "You asked me to put particular weight on: {modifiers}."
CLOSING_LINE = "Now, let us set out once more from the very beginning of the story..."


def build_story(request: NarrativeRequest) -> str:
    """Assemble the template lines, separated by blank lines."""
    lines = [
        OPENING_LINE.format(
            character_name=request.character_name,
            movie_title=request.movie_title,
        ),
        *PLACEHOLDER_LINES,
    ]
    if request.prompt_modifiers:
        lines.append(EMPHASIS_LINE.format(modifiers=request.prompt_modifiers))
    lines.append(CLOSING_LINE)
    return "\n\n".join(lines)


def generate_narrative(
    request: NarrativeRequest, now: datetime | None = None
) -> NarrativeResult:
    """Build the stub narrative response."""
    generated_at = (now or datetime.now(UTC)).isoformat().replace("+00:00", "Z")
    return NarrativeResult(
        story=build_story(request),
        movie_title=request.movie_title,
        character_name=request.character_name,
        cached=False,
        generated_at=generated_at,
    )
