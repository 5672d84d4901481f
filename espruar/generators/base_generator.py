#!/usr/bin/env python3
"""
Species Generator Base Class
============================
Shared framework for the five species generators:
- GeneratedName result record
- Injectable random source
- Recently-used history (biases picks away from repeats)
- Meaning composition and provenance merging
- Reversible post-hoc vowel modifiers (gender prefix vowel, final vowel)
"""

import logging
import re
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, Iterable, List, Optional, Sequence, Set

from ..config import FINAL_VOWELS, GENDER_PREFIX_VOWELS, resolve_options
from ..settings import get_setting
from .entropy import RandomSource, get_rng
from .lexicon import Component, LexiconError, normalize_gender
from . import phonetics

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class GeneratedName:
    """A generated name with its gloss and the sources it was built from."""
    name: str
    meaning: str = ""
    pronunciation: str = ""
    syllables: int = 0
    base_form: str = ""
    generator_type: str = ""
    breakdown: Dict[str, Any] = field(default_factory=dict)
    name_type: str = ""
    subrace: str = ""
    gender: str = ""
    style: str = ""
    final_vowel: Optional[str] = None
    gender_prefix_vowel: Optional[str] = None

    def __post_init__(self):
        if not self.base_form:
            self.base_form = self.name

    @property
    def prefix(self) -> Optional[Component]:
        return self.breakdown.get('prefix')

    @property
    def connector(self):
        return self.breakdown.get('connector')

    @property
    def suffix(self) -> Optional[Component]:
        return self.breakdown.get('suffix')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'meaning': self.meaning,
            'pronunciation': self.pronunciation,
            'syllables': self.syllables,
            'base_form': self.base_form,
            'generator_type': self.generator_type,
            'name_type': self.name_type,
            'subrace': self.subrace,
            'gender': self.gender,
            'style': self.style,
            'final_vowel': self.final_vowel,
            'gender_prefix_vowel': self.gender_prefix_vowel,
            'breakdown': {role: _breakdown_value(value) for role, value in self.breakdown.items()},
        }


def _breakdown_value(value: Any) -> Any:
    if value is None:
        return None
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _breakdown_value(v) for k, v in value.items()}
    return value


# =============================================================================
# Meaning Helpers
# =============================================================================

_PROVENANCE_RE = re.compile(
    r'(Halfling|Gnome) name from\s+'
    r'((?:(?!\s+(?:Halfling|Gnome) name from).)+?)'
    r'(?:\s*,\s*|\s*$|(?=\s+(?:Halfling|Gnome) name from))',
    re.IGNORECASE,
)


def join_meanings(*parts: Optional[str], separator: str = " + ") -> str:
    """Join the non-empty meaning fragments."""
    return separator.join(p for p in parts if p and p.strip())


def merge_provenance(fragments: Iterable[str]) -> str:
    """
    Combine meaning fragments, collapsing repeated provenance notes.

    Exact duplicate fragments are dropped. When the combined text holds
    "<Race> name from <Source>" notes, they collapse into one sentence:
    a single source is mentioned once; two are joined with "and"; three or
    more are listed with a serial comma.
    """
    unique = []
    seen = set()
    for fragment in fragments:
        if fragment and fragment not in seen:
            unique.append(fragment)
            seen.add(fragment)

    combined = ", ".join(unique)

    sources: List[str] = []
    race_name = ""
    for match in _PROVENANCE_RE.finditer(combined):
        race_name = match.group(1) or race_name
        source = match.group(2).strip()
        source = re.sub(r',\s*$', '', source)
        source = re.sub(r'\s+and\s*$', '', source).strip()
        # single letters are abbreviations, not sources
        if len(source) > 2 and source not in sources:
            sources.append(source)

    if len(sources) == 1:
        return f"{race_name} name from {sources[0]}"
    if len(sources) == 2:
        return f"{race_name} name from {sources[0]} and {sources[1]}"
    if len(sources) > 2:
        return f"{race_name} name from {', '.join(sources[:-1])}, and {sources[-1]}"
    return combined


def filter_by_subrace(items: Sequence[Component], subrace: str) -> List[Component]:
    """Entries untagged or tagged with the subrace."""
    return [item for item in items if not item.subrace or subrace in item.subrace]


def filter_by_gender(items: Sequence[Component], gender: str) -> List[Component]:
    """Entries untagged, neutral, or matching the requested gender."""
    gender = normalize_gender(gender) or 'neutral'
    return [
        item for item in items
        if not item.gender or item.gender == 'neutral' or item.gender == gender
    ]


# =============================================================================
# Post-hoc Vowel Modifiers
# =============================================================================

_FINAL_VOWEL_SET = {v['vowel'] for v in FINAL_VOWELS}
_GENDER_VOWEL_SET = {v['vowel'] for v in GENDER_PREFIX_VOWELS}


def _rebuild_from_base(result: GeneratedName) -> None:
    name = result.base_form
    if result.gender_prefix_vowel:
        name = result.gender_prefix_vowel.upper() + (name[:1].lower() + name[1:])
    if result.final_vowel:
        name = name + result.final_vowel
    result.name = name
    result.syllables = phonetics.count_syllables(name)


def apply_final_vowel(result: Optional[GeneratedName], vowel: str) -> Optional[GeneratedName]:
    """
    Append a final vowel to a result, rebuilt from its base form.

    Calling again with another vowel replaces the previous one. A gender
    prefix vowel already applied is kept, so the name becomes prefix vowel
    + base form + final vowel. A missing result is a no-op.
    """
    if result is None:
        return None
    if vowel not in _FINAL_VOWEL_SET:
        raise ValueError(f"Unknown final vowel '{vowel}'. Expected one of: {', '.join(sorted(_FINAL_VOWEL_SET))}")
    result.final_vowel = vowel
    _rebuild_from_base(result)
    return result


def apply_gender_prefix_vowel(result: Optional[GeneratedName], vowel: str) -> Optional[GeneratedName]:
    """
    Prepend a gender-marking vowel to a result, rebuilt from its base form.

    Keeps any final vowel already applied. A missing result is a no-op.
    """
    if result is None:
        return None
    vowel = (vowel or '').upper()
    if vowel not in _GENDER_VOWEL_SET:
        raise ValueError(f"Unknown gender prefix vowel '{vowel}'. Expected one of: {', '.join(sorted(_GENDER_VOWEL_SET))}")
    result.gender_prefix_vowel = vowel
    _rebuild_from_base(result)
    return result


# =============================================================================
# Base Generator
# =============================================================================

class SpeciesGenerator(ABC):
    """
    Abstract base class for all species name generators.

    Provides common functionality:
    - Option resolution against the species profile
    - Random source injection (``rng`` or ``seed``)
    - Bounded recently-used history
    - Empty-pool detection
    """

    species: str = ""

    def __init__(self, rng: RandomSource = None, seed: int = None):
        self._rng = rng or get_rng(seed)
        history_size = int(get_setting('generation.recent_history', 5))
        self.recently_used: Deque[Set[str]] = deque(maxlen=history_size)

    @property
    def rng(self) -> RandomSource:
        return self._rng

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def generate(self, options: Dict[str, Any] = None, **kwargs) -> GeneratedName:
        """
        Generate one name.

        Options may be passed as a dict, as keyword arguments, or both
        (keywords win). Missing options take the species defaults.
        """
        merged = dict(options or {})
        merged.update(kwargs)
        resolved = resolve_options(self.species, merged)
        result = self._generate(resolved)
        result.generator_type = self.species
        return result

    def generate_many(self, count: int, options: Dict[str, Any] = None, **kwargs) -> List[GeneratedName]:
        """
        Generate up to ``count`` names with distinct display strings.

        Small lexicons may not have enough combinations, so fewer names can
        come back.
        """
        results = []
        seen = set()
        multiplier = int(get_setting('generation.unique_attempts_multiplier', 10))
        max_attempts = count * multiplier
        attempts = 0

        while len(results) < count and attempts < max_attempts:
            attempts += 1
            result = self.generate(options, **kwargs)
            if result.name in seen:
                continue
            seen.add(result.name)
            results.append(result)

        logger.debug("%s: %d unique names in %d attempts", self.species, len(results), attempts)
        return results

    @abstractmethod
    def _generate(self, options: Dict[str, Any]) -> GeneratedName:
        """Build one result from fully resolved options."""

    # -------------------------------------------------------------------------
    # Selection helpers
    # -------------------------------------------------------------------------

    def _random_element(self, items: Sequence, role: str = "component"):
        if not items:
            raise LexiconError(f"No {role} candidates available for {self.species} generation")
        return self._rng.choice(items)

    def _recent_roots(self) -> Set[str]:
        roots: Set[str] = set()
        for used in self.recently_used:
            roots.update(used)
        return roots

    def _avoid_recent(self, items: Sequence, min_remaining: int,
                      key: Callable[[Any], str] = None) -> Sequence:
        """
        Drop recently used entries when enough others remain.

        ``min_remaining`` is the smallest filtered pool that is still used;
        below it the unfiltered pool comes back unchanged.
        """
        if not self.recently_used:
            return items
        key = key or (lambda c: c.root)
        recent = self._recent_roots()
        filtered = [item for item in items if key(item) not in recent]
        if len(filtered) >= min_remaining:
            return filtered
        return items

    def _track_used(self, roots: Iterable[Optional[str]]) -> None:
        used = {r for r in roots if r}
        if used:
            self.recently_used.append(used)
