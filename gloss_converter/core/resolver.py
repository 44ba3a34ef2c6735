"""Match user-selected tier names to the sentence's tier data.

WHY: The user picks which tier plays which role (words, morphemes,
morpheme glosses, sentence translation). The picker stores escaped tier
names, while the sentence carries raw ones, so each tier name has to be
escaped before comparison.

HOW: Walk the dependents once, in list order. For each tier compare its
escaped name with all four selections and bind its values to every
section that matches.

RULES:
- One tier may fill several sections
- Several tiers matching one section: the last match wins
- A section with no match resolves to an empty tuple (never an error)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from gloss_converter.config import (
    SECTION_GLOSSES,
    SECTION_MORPHEMES,
    SECTION_TRANSLATION,
    SECTION_WORDS,
)
from gloss_converter.core.escape import html_escape
from gloss_converter.core.ir import Tier, TierValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedTiers:
    """Value lists bound to the four logical sections."""

    words: Tuple[TierValue, ...] = ()
    morphemes: Tuple[TierValue, ...] = ()
    glosses: Tuple[TierValue, ...] = ()
    translation: Tuple[TierValue, ...] = ()


def resolve_tiers(tier_map: Dict[str, str], tiers: Iterable[Tier]) -> ResolvedTiers:
    """Bind each logical section to the values of its selected tier.

    Args:
        tier_map: Logical section name → escaped tier name chosen by the user.
        tiers: The sentence's dependent tiers.

    Returns:
        ResolvedTiers with an empty tuple for every unmatched section.
    """
    selections = {
        "words": tier_map.get(SECTION_WORDS),
        "morphemes": tier_map.get(SECTION_MORPHEMES),
        "glosses": tier_map.get(SECTION_GLOSSES),
        "translation": tier_map.get(SECTION_TRANSLATION),
    }
    bound: Dict[str, Tuple[TierValue, ...]] = {}

    for tier in tiers:
        escaped = html_escape(tier.name)
        for section, selected in selections.items():
            if selected is not None and escaped == selected:
                if section in bound:
                    logger.debug(
                        "Tier %r overrides earlier match for %s", tier.name, section,
                    )
                bound[section] = tuple(tier.values)

    for section, selected in selections.items():
        if section not in bound:
            logger.warning("No tier matched %s selection %r", section, selected)

    return ResolvedTiers(**bound)

