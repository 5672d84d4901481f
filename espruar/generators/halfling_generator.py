#!/usr/bin/env python3
"""
Halfling Name Generator
=======================
Personal name, family name and optional nickname, read as
``Personal Family "Nickname"``.

Same shape as the Gnomish generator, with two differences: the family name
is a plain uniform pick, and the nickname comes last instead of in the
middle.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from .base_generator import (
    GeneratedName, SpeciesGenerator,
    filter_by_gender, filter_by_subrace, join_meanings, merge_provenance,
)
from .entropy import RandomSource
from .lexicon import Component, Lexicon, LexiconError, build_components, load_lexicon, validate_components
from . import phonetics

logger = logging.getLogger(__name__)

NICKNAME_NAME_TYPES = ('full', 'full_with_nickname')


def _as_components(items, name: str, allow_empty: bool = False) -> Tuple[Component, ...]:
    items = list(items or [])
    if items and all(isinstance(i, Component) for i in items):
        return tuple(items)
    records = validate_components(items, name=name, required_fields=(), allow_empty=allow_empty)
    return build_components(records, source=name.split('.')[-1])


class HalflingGenerator(SpeciesGenerator):
    """Halfling name generator."""

    species = 'halfling'

    def __init__(self, personal_names: Sequence, family_names: Sequence,
                 nicknames: Sequence = None, rng: RandomSource = None, seed: int = None):
        super().__init__(rng=rng, seed=seed)
        self.personal_names = _as_components(personal_names, 'halfling.personal_names')
        self.family_names = _as_components(family_names, 'halfling.family_names')
        self.nicknames = _as_components(nicknames, 'halfling.nicknames', allow_empty=True)

    @classmethod
    def from_lexicon(cls, lexicon: Lexicon = None, lexicon_dir=None, **kwargs) -> 'HalflingGenerator':
        lexicon = lexicon or load_lexicon('halfling', lexicon_dir)
        return cls(lexicon['personal_names'], lexicon['family_names'], lexicon['nicknames'], **kwargs)

    # =========================================================================
    # Public entry
    # =========================================================================

    def _generate(self, options: Dict[str, Any]) -> GeneratedName:
        name_type = options['name_type']
        gender = options['gender']
        subrace = options['subrace']

        if name_type == 'personal':
            result = self.generate_personal_name(gender, subrace)
        elif name_type == 'family':
            result = self.generate_family_name(subrace)
        elif name_type == 'nickname':
            result = self.generate_nickname_only()
        else:
            result = self._full_name(gender, subrace, name_type in NICKNAME_NAME_TYPES)

        result.name_type = name_type
        result.gender = gender
        result.subrace = subrace
        return result

    def _full_name(self, gender: str, subrace: str, include_nickname: bool) -> GeneratedName:
        personal = self.generate_personal_name(gender, subrace)
        family = self.generate_family_name(subrace)
        nickname = self.pick_nickname() if include_nickname else None

        name = f"{personal.name} {family.name}"
        meaning = join_meanings(personal.meaning, family.meaning)
        sounds = [personal.pronunciation, family.pronunciation]
        if nickname is not None:
            name = f'{name} "{nickname.text}"'
            meaning = join_meanings(meaning, nickname.meaning or nickname.text)
            sounds.append(nickname.phonetic or nickname.text)

        return GeneratedName(
            name=name,
            meaning=meaning,
            pronunciation=' '.join(s for s in sounds if s),
            syllables=phonetics.count_syllables(name),
            breakdown={'personal': personal, 'family': family, 'nickname': nickname},
        )

    # =========================================================================
    # Name parts
    # =========================================================================

    def _personal_pool(self, gender: str, subrace: str) -> Sequence[Component]:
        pool = filter_by_subrace(self.personal_names, subrace) or self.personal_names
        gendered = filter_by_gender(pool, gender)
        if not gendered:
            logger.debug("halfling: no %s personal names for %s, ignoring gender", gender, subrace)
        return gendered or pool

    def generate_personal_name(self, gender: str = 'neutral', subrace: str = 'lightfoot') -> GeneratedName:
        """
        Prefix entry plus suffix entry; two complete names are not stacked,
        and a pool with no suffix forms yields the prefix entry alone.
        """
        available = self._personal_pool(gender, subrace)

        prefix_pool = [p for p in available if p.can_be_prefix]
        suffix_pool = [p for p in available if p.can_be_suffix and p.suffix_form()]

        prefix = self._random_element(prefix_pool or available, 'personal name')
        suffix = self._random_element(suffix_pool, 'personal name suffix') if suffix_pool else None

        parts = [prefix.prefix_form() or prefix.root]
        meanings = [prefix.prefix_gloss()]
        sounds = [prefix.prefix_sound()]

        use_suffix = suffix is not None and suffix is not prefix
        if use_suffix and prefix.is_complete_name and suffix.is_complete_name:
            use_suffix = False
        if use_suffix:
            parts.append(suffix.suffix_form() or suffix.root)
            meanings.append(suffix.suffix_gloss())
            sounds.append(suffix.suffix_sound())

        name = phonetics.capitalize(''.join(parts))
        return GeneratedName(
            name=name,
            meaning=merge_provenance(meanings) or name,
            pronunciation=' '.join(s for s in sounds if s),
            syllables=phonetics.count_syllables(name),
            breakdown={'prefix': prefix, 'suffix': suffix if use_suffix else None},
            name_type='personal',
        )

    def generate_family_name(self, subrace: str = 'lightfoot') -> GeneratedName:
        """Uniform pick from the subrace's family names."""
        pool = filter_by_subrace(self.family_names, subrace) or self.family_names
        entry = self._random_element(pool, 'family name')

        name = phonetics.capitalize(entry.text or entry.prefix_text or entry.root)
        return GeneratedName(
            name=name,
            meaning=entry.meaning or entry.prefix_meaning or name,
            pronunciation=entry.phonetic or entry.prefix_phonetic or name,
            syllables=phonetics.count_syllables(name),
            breakdown={'family': entry},
            name_type='family',
        )

    def pick_nickname(self) -> Optional[Component]:
        if not self.nicknames:
            return None
        return self._random_element(self.nicknames, 'nickname')

    def generate_nickname_only(self) -> GeneratedName:
        nickname = self.pick_nickname()
        if nickname is None:
            raise LexiconError("No nicknames available for halfling generation")
        name = f'"{nickname.text}"'
        return GeneratedName(
            name=name,
            meaning=nickname.meaning or nickname.text or '',
            pronunciation=nickname.phonetic or nickname.text or '',
            syllables=phonetics.count_syllables(name),
            breakdown={'nickname': nickname},
            name_type='nickname',
        )


__all__ = ['HalflingGenerator']
