"""Link scanner: finds ``[display](target)`` constructs in raw text.

The scanner walks the text once per candidate with three states:
outside a link, inside the display text, inside the target. It is
lenient about escape markers: a backslash before ``[``, ``]`` or ``)``
is absorbed into the matched span but does not stop the match, so
``\\[label\\](path\\)`` is still reported as a link.

Display text and target never span a line break. Display text may
contain ``[``, which means ``[a [b](c)`` yields a single link with
display text ``a [b``.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from linkmender.core.models import LinkOccurrence

ESCAPE = "\\"
LINE_BREAKS = frozenset("\n\r\u2028\u2029")


class _State(Enum):
    DISPLAY = "display"
    TARGET = "target"


def scan_links(text: str) -> Iterator[LinkOccurrence]:
    """Yield every link occurrence in text, left to right.

    Never raises. Empty or link-free text yields nothing.
    """
    pos = 0
    resume = 0
    length = len(text)

    while pos < length:
        if text[pos] != "[":
            pos += 1
            continue

        occurrence = _match_at(text, pos, resume)
        if occurrence is None:
            pos += 1
            continue

        yield occurrence
        pos = resume = occurrence.end


def _match_at(text: str, open_pos: int, resume: int) -> LinkOccurrence | None:
    """Try to match a link whose opening bracket is at open_pos."""
    state = _State.DISPLAY
    display_start = open_pos + 1
    display_end = target_start = -1
    escaped = False
    i = display_start

    while i < len(text):
        ch = text[i]
        if ch in LINE_BREAKS:
            return None

        if state is _State.DISPLAY:
            if ch == "]" and text.startswith("(", i + 1):
                display_end = i
                if i > display_start and text[i - 1] == ESCAPE:
                    display_end -= 1
                    escaped = True
                target_start = i + 2
                state = _State.TARGET
                i = target_start
                continue
        elif state is _State.TARGET and ch == ")":
            target_end = i
            if i > target_start and text[i - 1] == ESCAPE:
                target_end -= 1
                escaped = True

            start = open_pos
            if open_pos > resume and text[open_pos - 1] == ESCAPE:
                start -= 1
                escaped = True

            return LinkOccurrence(
                display_text=text[display_start:display_end],
                target=text[target_start:target_end],
                raw_span=text[start : i + 1],
                start=start,
                end=i + 1,
                escaped=escaped,
            )
        i += 1

    return None
