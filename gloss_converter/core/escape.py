"""HTML escaping of tier names, matching how selections were stored.

WHY: The tier-selection UI stores the names it shows in escaped form.
To match a selection back to a tier, the resolver must escape the tier's
raw name with exactly the same table. Any difference (e.g. "&#x27;" vs
"&#39;") makes resolution silently fail.

RULES:
- Six characters are escaped: & < > " ' `
- "&" is replaced first so existing entities are double-escaped, as the
  storing side does
"""

from __future__ import annotations

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
    ("`", "&#96;"),
)


def html_escape(text: str) -> str:
    """Escape a raw tier name the way stored selections were escaped."""
    for raw, entity in _HTML_ESCAPES:
        text = text.replace(raw, entity)
    return text
