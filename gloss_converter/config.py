"""Configuration constants, section names, display strings, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Section names, sentinel tokens, and display labels
are plain data, not buried in logic, so the resolver, aligner,
formatters, and presenter all agree on the same strings.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level strings and tuples. Host-dependent values (page URL,
API bind address, log level) read from the environment with defaults.

RULES:
- SECTION_* are the four logical tier-map keys
- UNDEFINED_TOKEN is the visible sentinel for misaligned or missing data
- GLOSS_PAGE_URL is the fallback "current page" for sentence permalinks
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Logical LaTeX sections (tier-map keys)
# ---------------------------------------------------------------------------

SECTION_WORDS = "original sentence"
SECTION_MORPHEMES = "morphemes"
SECTION_GLOSSES = "morpheme translations"
SECTION_TRANSLATION = "sentence translation"

# ---------------------------------------------------------------------------
# Sentinels and display strings
# ---------------------------------------------------------------------------

UNDEFINED_TOKEN = "Undefined"
"""Shown in place of a morpheme, gloss, or translation that is missing."""

DEFAULT_TITLE_LOCALE = "_default"

RESULT_HEADER = "Format result: "
LATEX_LIBRARY_NOTE = "Formatted for gb4e and gb4e-modified LaTeX packages: "

# ---------------------------------------------------------------------------
# Host and server defaults
# ---------------------------------------------------------------------------

GLOSS_PAGE_URL = os.getenv("GLOSS_PAGE_URL", "http://localhost:8000/story")
GLOSS_API_HOST = os.getenv("GLOSS_API_HOST", "127.0.0.1")
GLOSS_API_PORT = int(os.getenv("GLOSS_API_PORT", "8000"))
GLOSS_LOG_LEVEL = os.getenv("GLOSS_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the CLI and API entry points.

    WHY: Library modules only create named loggers; the process entry
    point decides where records go and at what level.

    RULES:
    - Level defaults to GLOSS_LOG_LEVEL
    - Unknown level names raise ValueError (surfaced as a config error)
    """
    name = (level or GLOSS_LOG_LEVEL).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError("Unknown log level '{}'.".format(name))
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
