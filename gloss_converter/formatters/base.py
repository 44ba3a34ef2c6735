"""Abstract base formatter and output container.

WHY: Every output format consumes the same FormattedResult IR but produces
different text. This base class enforces a consistent interface so the
CLI, presenter, and HTTP API can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; the formatters here return one item
- ``suffix`` starts with a hyphen, e.g. ``"-gb4e.tex"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from gloss_converter.core.ir import FormattedResult


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-gb4e.tex"`` → ``"story12-gb4e.tex"``.
        content: The rendered text.
        media_type: MIME type for the content, e.g. ``"application/x-tex"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'gb4e LaTeX'."""

    @abstractmethod
    def format(self, result: FormattedResult) -> list[FormatterOutput]:
        """Render the FormattedResult IR into one or more outputs."""
