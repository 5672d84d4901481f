#!/usr/bin/env python3
"""
Gnomish Name Generator
======================
Gnim conventions: a personal name, a clan name and an optional nickname,
read as ``Personal "Nickname" Clan``.

Subrace and gender tags are advisory. When a filter leaves nothing, the
unfiltered pool is used instead.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from ..settings import get_setting
from .base_generator import (
    GeneratedName, SpeciesGenerator,
    filter_by_gender, filter_by_subrace, join_meanings, merge_provenance,
)
from .entropy import RandomSource
from .lexicon import Component, Lexicon, LexiconError, build_components, load_lexicon, validate_components
from . import phonetics

logger = logging.getLogger(__name__)


def _as_components(items, name: str, allow_empty: bool = False) -> Tuple[Component, ...]:
    items = list(items or [])
    if items and all(isinstance(i, Component) for i in items):
        return tuple(items)
    records = validate_components(items, name=name, required_fields=(), allow_empty=allow_empty)
    return build_components(records, source=name.split('.')[-1])


def _nickname_key(entry: Component) -> str:
    return entry.root or entry.text or ''


class GnomishGenerator(SpeciesGenerator):
    """
    Gnomish name generator.

    Usage:
        gen = GnomishGenerator.from_lexicon(seed=7)
        print(gen.generate(subrace='forest').name)
    """

    species = 'gnomish'

    def __init__(self, personal_names: Sequence, clan_names: Sequence,
                 nicknames: Sequence = None, rng: RandomSource = None, seed: int = None):
        super().__init__(rng=rng, seed=seed)
        self.personal_names = _as_components(personal_names, 'gnomish.personal_names')
        self.clan_names = _as_components(clan_names, 'gnomish.clan_names')
        self.nicknames = _as_components(nicknames, 'gnomish.nicknames', allow_empty=True)

        minimums = get_setting('gnomish.recent_min_remaining', {}) or {}
        self._min_personal = int(minimums.get('personal', 10))
        self._min_clan = int(minimums.get('clan', 5))
        self._min_nickname = int(minimums.get('nickname', 10))

    @classmethod
    def from_lexicon(cls, lexicon: Lexicon = None, lexicon_dir=None, **kwargs) -> 'GnomishGenerator':
        lexicon = lexicon or load_lexicon('gnomish', lexicon_dir)
        return cls(lexicon['personal_names'], lexicon['clan_names'], lexicon['nicknames'], **kwargs)

    # =========================================================================
    # Public entry
    # =========================================================================

    def _generate(self, options: Dict[str, Any]) -> GeneratedName:
        name_type = options['name_type']
        gender = options['gender']
        subrace = options['subrace']

        if name_type == 'personal':
            result = self.generate_personal_name(gender, subrace)
        elif name_type == 'clan':
            result = self.generate_clan_name(subrace)
        elif name_type == 'nickname':
            result = self.generate_nickname_only()
        else:
            result = self._full_name(gender, subrace, options['include_nickname'])

        result.name_type = name_type
        result.gender = gender
        result.subrace = subrace
        return result

    def _full_name(self, gender: str, subrace: str, include_nickname: bool) -> GeneratedName:
        personal = self.generate_personal_name(gender, subrace)
        clan = self.generate_clan_name(subrace)
        nickname = self.pick_nickname() if include_nickname else None

        if nickname is not None:
            name = f'{personal.name} "{nickname.text}" {clan.name}'
            nick_meaning = f'"{nickname.meaning}"' if nickname.meaning else ''
            meaning = join_meanings(personal.meaning, nick_meaning, clan.meaning)
        else:
            name = f"{personal.name} {clan.name}"
            meaning = join_meanings(personal.meaning, clan.meaning)

        pronunciation = ' · '.join(p for p in (
            personal.pronunciation,
            nickname.phonetic if nickname is not None else None,
            clan.pronunciation,
        ) if p)

        return GeneratedName(
            name=name,
            meaning=meaning,
            pronunciation=pronunciation,
            syllables=phonetics.count_syllables(name),
            breakdown={'personal': personal, 'nickname': nickname, 'clan': clan},
        )

    # =========================================================================
    # Personal names
    # =========================================================================

    def _personal_pool(self, gender: str, subrace: str) -> Sequence[Component]:
        pool = filter_by_gender(filter_by_subrace(self.personal_names, subrace), gender)
        if not pool:
            logger.debug("gnomish: no personal names for %s/%s, dropping subrace filter", subrace, gender)
            pool = filter_by_gender(self.personal_names, gender)
        if not pool:
            pool = self.personal_names
        return self._avoid_recent(pool, self._min_personal)

    def generate_personal_name(self, gender: str = 'neutral', subrace: str = 'rock') -> GeneratedName:
        """
        One prefix-eligible and one suffix-eligible entry, concatenated.

        Two self-contained names are never stacked: when both picks are
        complete names only the first is used.
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

        self._track_used((prefix.root, suffix.root if use_suffix else None))

        name = phonetics.capitalize(''.join(parts))
        return GeneratedName(
            name=name,
            meaning=merge_provenance(meanings),
            pronunciation=' '.join(s for s in sounds if s),
            syllables=phonetics.count_syllables(name),
            breakdown={'prefix': prefix, 'suffix': suffix if use_suffix else None},
            name_type='personal',
        )

    # =========================================================================
    # Clan names
    # =========================================================================

    def _pick_clan_entry(self, pool: Sequence[Component]) -> Component:
        complete = [c for c in pool if c.can_be_prefix and c.can_be_suffix]
        prefix_only = [c for c in pool if c.can_be_prefix and not c.can_be_suffix]
        suffix_only = [c for c in pool if c.can_be_suffix and not c.can_be_prefix]

        if complete and self.rng.random() < float(get_setting('gnomish.complete_clan_probability', 0.5)):
            return self._random_element(complete, 'clan name')
        if prefix_only and self.rng.random() < float(get_setting('gnomish.prefix_clan_probability', 0.5)):
            return self._random_element(prefix_only, 'clan name')
        if suffix_only:
            return self._random_element(suffix_only, 'clan name')
        return self._random_element(pool, 'clan name')

    def generate_clan_name(self, subrace: str = 'rock') -> GeneratedName:
        """A single clan entry used whole, first letter capitalized."""
        pool = filter_by_subrace(self.clan_names, subrace) or self.clan_names
        entry = self._pick_clan_entry(self._avoid_recent(pool, self._min_clan))
        self._track_used((entry.root,))

        name = phonetics.capitalize(entry.prefix_text or entry.suffix_text or entry.text or entry.root)
        meaning = entry.prefix_meaning or entry.suffix_meaning or entry.meaning or name
        phonetic = entry.phonetic or entry.prefix_phonetic or entry.suffix_phonetic or name.upper()

        return GeneratedName(
            name=name,
            meaning=meaning,
            pronunciation=phonetic,
            syllables=phonetics.count_syllables(name),
            breakdown={'clan': entry},
            name_type='clan',
        )

    # =========================================================================
    # Nicknames
    # =========================================================================

    def pick_nickname(self) -> Optional[Component]:
        """A nickname entry, or None when the lexicon has none."""
        if not self.nicknames:
            return None
        pool = self._avoid_recent(self.nicknames, self._min_nickname, key=_nickname_key)
        entry = self._random_element(pool, 'nickname')
        self._track_used((_nickname_key(entry),))
        return entry

    def generate_nickname_only(self) -> GeneratedName:
        nickname = self.pick_nickname()
        if nickname is None:
            raise LexiconError("No nicknames available for gnomish generation")
        name = f'"{nickname.text}"'
        return GeneratedName(
            name=name,
            meaning=nickname.meaning or nickname.text or '',
            pronunciation=nickname.phonetic or '',
            syllables=phonetics.count_syllables(name),
            breakdown={'nickname': nickname},
            name_type='nickname',
        )


__all__ = ['GnomishGenerator']
