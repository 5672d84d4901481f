#!/usr/bin/env python3
"""
Orc Name Generator
==================
A personal name, optionally followed by an epithet ("Grom the Skull-Taker").

Clan names are accepted and stored, but generation does not read them yet.
Subrace and gender are accepted for interface parity and otherwise ignored:
all orcs share one pool.
"""

from typing import Any, Dict, Optional, Sequence, Tuple

from .base_generator import GeneratedName, SpeciesGenerator, join_meanings
from .entropy import RandomSource
from .lexicon import Component, Lexicon, LexiconError, build_components, load_lexicon, validate_components
from . import phonetics


EPITHET_NAME_TYPES = ('full', 'full-with-epithet')


def _as_components(items, name: str, allow_empty: bool = False) -> Tuple[Component, ...]:
    items = list(items or [])
    if items and all(isinstance(i, Component) for i in items):
        return tuple(items)
    records = validate_components(items, name=name, required_fields=(), allow_empty=allow_empty)
    return build_components(records, source=name.split('.')[-1])


def format_epithet(text: Optional[str]) -> Optional[str]:
    """'Skull-Taker' -> 'the Skull-Taker'; text already starting with 'the ' is kept."""
    if not text:
        return text
    if text.lower().startswith('the '):
        return text
    return f"the {text}"


class OrcGenerator(SpeciesGenerator):
    """Orc name generator."""

    species = 'orc'

    def __init__(self, personal_names: Sequence, clan_names: Sequence = None,
                 epithets: Sequence = None, rng: RandomSource = None, seed: int = None):
        super().__init__(rng=rng, seed=seed)
        self.personal_names = _as_components(personal_names, 'orc.personal_names')
        self.clan_names = _as_components(clan_names, 'orc.clan_names', allow_empty=True)
        self.epithets = _as_components(epithets, 'orc.epithets', allow_empty=True)

    @classmethod
    def from_lexicon(cls, lexicon: Lexicon = None, lexicon_dir=None, **kwargs) -> 'OrcGenerator':
        lexicon = lexicon or load_lexicon('orc', lexicon_dir)
        return cls(lexicon['personal_names'], lexicon['clan_names'], lexicon['epithets'], **kwargs)

    def _generate(self, options: Dict[str, Any]) -> GeneratedName:
        name_type = options['name_type']

        if name_type == 'epithet':
            epithet = self.pick_epithet()
            if epithet is None:
                raise LexiconError("No epithets available for orc generation")
            name = format_epithet(epithet.text)
            result = GeneratedName(
                name=name,
                meaning=epithet.meaning or epithet.text,
                pronunciation=epithet.phonetic or epithet.text,
                syllables=phonetics.count_syllables(name),
                breakdown={'epithet': epithet},
            )
        else:
            personal = self.pick_personal()
            text = personal.text or personal.root
            name = text
            meaning = personal.meaning or text
            sounds = [personal.phonetic or text]
            breakdown = {'personal': personal}

            epithet = self.pick_epithet() if name_type in EPITHET_NAME_TYPES else None
            if epithet is not None:
                name = f"{name} {format_epithet(epithet.text)}"
                meaning = join_meanings(meaning, epithet.meaning or epithet.text)
                sounds.append(epithet.phonetic or epithet.text)
                breakdown['epithet'] = epithet

            result = GeneratedName(
                name=name,
                meaning=meaning,
                pronunciation=' '.join(s for s in sounds if s),
                syllables=phonetics.count_syllables(name),
                breakdown=breakdown,
            )

        result.name_type = name_type
        result.gender = options['gender']
        result.subrace = options['subrace']
        return result

    def pick_personal(self) -> Component:
        return self._random_element(self.personal_names, 'personal name')

    def pick_epithet(self) -> Optional[Component]:
        if not self.epithets:
            return None
        return self._random_element(self.epithets, 'epithet')


__all__ = ['OrcGenerator', 'format_epithet']
