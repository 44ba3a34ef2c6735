"""Output formatter registry: pluggable format hub.

WHY: The CLI, presenter, and API layers need a single lookup to find the
right formatter by name. A central dict makes it trivial to add new
formats: create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["gb4e"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API requests)
- Values are BaseFormatter subclasses (not instances)
- "gb4e" is the primary format shown by the presenter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gloss_converter.formatters.gb4e import Gb4eFormatter
from gloss_converter.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from gloss_converter.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "gb4e": Gb4eFormatter,
    "plain_text": PlainTextFormatter,
}
