"""Parser for the TOC microsyntax.

Each line has the form <asterisks><marker?><text>:

- the number of asterisks is the nesting depth;
- '-' marks a plain text label;
- '!' marks a standalone topic, given by its full page name;
- '+' marks a borrowed topic, given by its full page name;
- with no marker the text is the name of one of the Manual's topics.

There is no escape for text that starts with a marker character.
"""

from typing import List, Optional

from .models import TocLine

TEXT_MARKER = "-"
STANDALONE_MARKER = "!"
BORROWED_MARKER = "+"
MARKERS = (TEXT_MARKER, STANDALONE_MARKER, BORROWED_MARKER)


def parse_line(line: str) -> Optional[TocLine]:
    """Parse one line of TOC markup.

    Returns:
        TocLine, or None for blank lines, lines of only asterisks and lines
        not starting with an asterisk

    Example:
        >>> parse_line("** !Widget/1.0/Guide/Setup")
        TocLine(depth=2, marker='!', text='Widget/1.0/Guide/Setup')
    """
    stripped = line.strip()
    if not stripped.startswith("*"):
        return None
    body = stripped.lstrip("*")
    depth = len(stripped) - len(body)
    body = body.strip()
    if not body:
        return None
    if body[0] in MARKERS:
        return TocLine(depth=depth, marker=body[0], text=body[1:].strip())
    return TocLine(depth=depth, marker=None, text=body)


def parse_toc_markup(text: str) -> List[TocLine]:
    """Parse TOC markup into lines, dropping everything that is not an entry."""
    lines = []
    for raw_line in text.splitlines():
        parsed = parse_line(raw_line)
        if parsed is not None:
            lines.append(parsed)
    return lines


def normalize_name(name: str) -> str:
    """Normalize a page name for matching: underscores become spaces."""
    return " ".join(name.replace("_", " ").split())
