from __future__ import annotations

from typing import Iterable

from markupsafe import Markup, escape

from qc_web.domain.models import TextSpanError


def highlight_errors(text: str, errors: Iterable[TextSpanError], *, css_class: str = "error") -> Markup:
    """
    Wraps each error span of `text` in <span class="...">; everything else passes through.
    All text is HTML-escaped, the result is safe to render as-is.

    Spans are applied in (offset, length) order. A span overlapping the previous
    one is clipped to start where the previous ended; spans past the end of the
    text produce nothing.
    """
    out = Markup("")
    cursor = 0

    for err in sorted(errors, key=lambda e: (e.offset, e.length)):
        start = max(err.offset, cursor)
        end = err.offset + err.length
        if end <= start:
            continue

        out += escape(text[cursor:start])
        marked = text[start:end]
        if marked:
            out += Markup('<span class="{}">{}</span>').format(css_class, marked)
        cursor = end

    out += escape(text[cursor:])
    return out
