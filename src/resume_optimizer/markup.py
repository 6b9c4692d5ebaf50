"""
HTML rendering for rewrite results.

Every fragment of document text and every tooltip is escaped before any
``<mark>`` element is added, so markup already present in the source text is
displayed literally instead of being interpreted.
"""

from __future__ import annotations

from html import escape
from typing import List

from .models import ChangeType, HighlightSpan, RewriteResult

CATEGORY_CLASSES = {
    ChangeType.KEYWORD: "highlight-keyword",
    ChangeType.ENHANCEMENT: "highlight-enhancement",
    ChangeType.METRIC: "highlight-metric",
}


def render_html(result: RewriteResult) -> str:
    """Render ``result.text`` with one ``<mark>`` per covering span.

    Overlapping spans are split at every boundary so the output stays well nested.
    """
    text = result.text
    spans = [span for span in result.spans if 0 <= span.start < span.end <= len(text)]
    boundaries = sorted({0, len(text), *(s.start for s in spans), *(s.end for s in spans)})

    pieces: List[str] = []
    for start, end in zip(boundaries, boundaries[1:]):
        fragment = escape(text[start:end])
        covering = sorted(
            (span for span in spans if span.start <= start and end <= span.end),
            key=lambda span: (span.start, -span.end),
        )
        for span in reversed(covering):
            fragment = _wrap(fragment, span)
        pieces.append(fragment)
    return "".join(pieces)


def _wrap(fragment: str, span: HighlightSpan) -> str:
    css_class = CATEGORY_CLASSES.get(span.category, "highlight")
    return (
        f'<mark class="{css_class}" title="{escape(span.tooltip, quote=True)}">'
        f"{fragment}</mark>"
    )
