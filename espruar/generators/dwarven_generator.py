#!/usr/bin/env python3
"""
Dwarven Name Generator
======================
Dethek first names and clan names.

Clan names draw from the union of the clan vocabulary (English words such
as "stone", "hammer") and the first-name morphemes, so a clan can read
"Stonegrim" or "Bronguard" as well as "Stonehammer".

Subrace weighting works by duplication: a component matching the subrace's
preferred categories or keywords appears ``subrace_weight`` times in the
pool before a uniform draw.
"""

import logging
import re
from typing import Any, Dict, List, Sequence, Tuple

from ..settings import get_setting
from .base_generator import GeneratedName, SpeciesGenerator, filter_by_gender, join_meanings
from .entropy import RandomSource
from .lexicon import Component, Lexicon, build_components, load_lexicon, validate_components
from . import phonetics

logger = logging.getLogger(__name__)


_TRIPLE_CONSONANT_RE = re.compile(r'([bcdfghjklmnpqrstvwxyz])\1{2,}', re.IGNORECASE)
_PLAIN_VOWELS = set('aeiou')


def smooth_consonant_cluster(prefix: str, suffix: str) -> str:
    """
    Join two cleaned components, trimming doubled consonants at the seam.

    - A run of three or more identical consonants anywhere in the join:
      a doubled consonant at the prefix end is cut to one.
    - A doubled consonant at the prefix end followed by a different
      consonant: cut to one, except 'nn'.
    - Anything else joins unchanged.
    """
    if not prefix:
        return suffix or ''
    if not suffix:
        return prefix

    last = prefix[-1].lower()
    before_last = prefix[-2:][:1].lower()
    first = suffix[0].lower()
    doubled = last == before_last and last not in _PLAIN_VOWELS

    if _TRIPLE_CONSONANT_RE.search(prefix + suffix):
        if doubled:
            return prefix[:-1] + suffix
        return prefix + suffix

    if doubled and first not in _PLAIN_VOWELS and first != last and last != 'n':
        return prefix[:-1] + suffix

    return prefix + suffix


def _as_components(items, name: str) -> Tuple[Component, ...]:
    items = list(items or [])
    if items and all(isinstance(i, Component) for i in items):
        return tuple(items)
    return build_components(validate_components(items, name=name), source=name.split('.')[-1])


class DwarvenGenerator(SpeciesGenerator):
    """
    Dwarven name generator.

    Parameters
    ----------
    first_names, clan_names : sequence
        Component records (or dicts) for the two lexicons
    """

    species = 'dwarven'

    def __init__(self, first_names: Sequence, clan_names: Sequence,
                 rng: RandomSource = None, seed: int = None):
        super().__init__(rng=rng, seed=seed)
        self.first_names = _as_components(first_names, 'dwarven.first_names')
        self.clan_names = _as_components(clan_names, 'dwarven.clan_names')

        self.first_name_prefixes = tuple(c for c in self.first_names if c.can_be_prefix and c.prefix_text)
        self.first_name_suffixes = tuple(c for c in self.first_names if c.can_be_suffix and c.suffix_text)
        self.clan_name_prefixes = tuple(c for c in self.clan_names if c.can_be_prefix and c.prefix_form())
        self.clan_name_suffixes = tuple(c for c in self.clan_names if c.can_be_suffix and c.suffix_form())

        self._weight = int(get_setting('dwarven.subrace_weight', 3))
        self._preferences = get_setting('dwarven.subrace_preferences', {}) or {}

    @classmethod
    def from_lexicon(cls, lexicon: Lexicon = None, lexicon_dir=None, **kwargs) -> 'DwarvenGenerator':
        lexicon = lexicon or load_lexicon('dwarven', lexicon_dir)
        return cls(lexicon['first_names'], lexicon['clan_names'], **kwargs)

    # =========================================================================
    # Public entry
    # =========================================================================

    def _generate(self, options: Dict[str, Any]) -> GeneratedName:
        name_type = options['name_type']
        gender = options['gender']
        subrace = options['subrace']

        first = self.generate_first_name(gender, subrace) if name_type in ('first', 'full') else None
        clan = self.generate_clan_name(subrace) if name_type in ('clan', 'full') else None

        if name_type == 'full':
            result = GeneratedName(
                name=f"{first.name} {clan.name}",
                meaning=join_meanings(first.meaning, clan.meaning),
                pronunciation=' '.join(p for p in (first.pronunciation, clan.pronunciation) if p),
                syllables=first.syllables + clan.syllables,
                breakdown={'first_name': first, 'clan_name': clan},
            )
        else:
            result = first if name_type == 'first' else clan

        result.name_type = name_type
        result.gender = gender
        result.subrace = subrace
        return result

    # =========================================================================
    # Name parts
    # =========================================================================

    def generate_first_name(self, gender: str = 'neutral', subrace: str = 'general') -> GeneratedName:
        """Gender-filtered, subrace-weighted prefix + suffix."""
        prefixes: Sequence[Component] = self.first_name_prefixes
        suffixes: Sequence[Component] = self.first_name_suffixes
        if gender != 'neutral':
            prefixes = filter_by_gender(prefixes, gender)
            suffixes = filter_by_gender(suffixes, gender)

        prefix = self._random_element(self.weight_by_subrace(prefixes, subrace), 'first-name prefix')
        suffix = self._random_element(self.weight_by_subrace(suffixes, subrace), 'first-name suffix')

        return self._join(
            prefix, suffix,
            phonetics.clean_component_text(prefix.prefix_text),
            phonetics.clean_component_text(suffix.suffix_text),
            name_type='first',
        )

    def generate_clan_name(self, subrace: str = 'general') -> GeneratedName:
        """Prefix and suffix drawn from clan words and first-name morphemes alike."""
        prefixes = (
            self.weight_by_subrace(self.clan_name_prefixes, subrace)
            + self.weight_by_subrace(self.first_name_prefixes, subrace)
        )
        suffixes = (
            self.weight_by_subrace(self.clan_name_suffixes, subrace)
            + self.weight_by_subrace(self.first_name_suffixes, subrace)
        )

        logger.debug("dwarven clan pools (%s): %d prefixes, %d suffixes", subrace, len(prefixes), len(suffixes))
        prefix = self._random_element(prefixes, 'clan-name prefix')
        suffix = self._random_element(suffixes, 'clan-name suffix')

        return self._join(
            prefix, suffix,
            phonetics.clean_component_text(prefix.prefix_form()).lower(),
            phonetics.clean_component_text(suffix.suffix_form()).lower(),
            name_type='clan',
        )

    def _join(self, prefix: Component, suffix: Component,
              prefix_text: str, suffix_text: str, name_type: str) -> GeneratedName:
        name = phonetics.capitalize(smooth_consonant_cluster(prefix_text, suffix_text))
        meaning = join_meanings(
            phonetics.format_meaning(prefix.prefix_gloss()),
            phonetics.format_meaning(suffix.suffix_gloss()),
        )
        pronunciation = '-'.join(p for p in (prefix.prefix_sound(), suffix.suffix_sound()) if p)

        return GeneratedName(
            name=name,
            meaning=meaning,
            pronunciation=pronunciation,
            syllables=phonetics.count_syllables(name),
            breakdown={'prefix': prefix, 'suffix': suffix},
            name_type=name_type,
        )

    # =========================================================================
    # Subrace weighting
    # =========================================================================

    def component_weight(self, component: Component, subrace: str) -> int:
        preferences = self._preferences.get(subrace)
        if not preferences:
            return 1

        text = (component.prefix_text or component.suffix_text or component.text or '').lower()
        meaning = (component.prefix_meaning or component.suffix_meaning or component.meaning or '').lower()
        category = (component.category or '').lower()

        if category in preferences.get('categories', []):
            return self._weight
        combined = f"{text} {meaning}"
        if any(keyword in combined for keyword in preferences.get('keywords', [])):
            return self._weight
        return 1

    def weight_by_subrace(self, components: Sequence[Component], subrace: str) -> List[Component]:
        """Repeat each matching component by its weight; 'general' leaves the pool as is."""
        if subrace == 'general' or subrace not in self._preferences:
            return list(components)

        weighted: List[Component] = []
        for component in components:
            weighted.extend([component] * self.component_weight(component, subrace))
        return weighted


__all__ = ['DwarvenGenerator', 'smooth_consonant_cluster']
