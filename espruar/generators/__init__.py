#!/usr/bin/env python3
"""
Species Name Generators
=======================
One generator per species, all sharing the SpeciesGenerator base:
- Elven: prefix/suffix components with connectors and a syllable target
- Dwarven: Dethek first names and union-pool clan names
- Gnomish: personal, clan and nickname pools
- Halfling: personal, family and nickname pools
- Orc: personal names with epithets
"""

from .base_generator import (
    GeneratedName,
    SpeciesGenerator,
    apply_final_vowel,
    apply_gender_prefix_vowel,
    join_meanings,
    merge_provenance,
)
from .entropy import RandomSource, SeededRandom, TrueRandom, get_rng
from .lexicon import Component, Connector, Lexicon, LexiconError, load_lexicon
from .elven_generator import ElvenGenerator
from .dwarven_generator import DwarvenGenerator, smooth_consonant_cluster
from .gnomish_generator import GnomishGenerator
from .halfling_generator import HalflingGenerator
from .orc_generator import OrcGenerator, format_epithet
from . import phonetics

GENERATORS = {
    'elven': ElvenGenerator,
    'dwarven': DwarvenGenerator,
    'gnomish': GnomishGenerator,
    'halfling': HalflingGenerator,
    'orc': OrcGenerator,
}


def get_generator(species: str, lexicon_dir=None, rng: RandomSource = None, seed: int = None) -> SpeciesGenerator:
    """
    Build a generator for a species from its lexicon files.

    Raises
    ------
    ValueError
        If the species is unknown
    """
    cls = GENERATORS.get(species)
    if cls is None:
        available = ', '.join(sorted(GENERATORS.keys()))
        raise ValueError(f"Unknown species '{species}'. Available species: {available}")
    return cls.from_lexicon(lexicon_dir=lexicon_dir, rng=rng, seed=seed)


__all__ = [
    'GeneratedName',
    'SpeciesGenerator',
    'apply_final_vowel',
    'apply_gender_prefix_vowel',
    'join_meanings',
    'merge_provenance',
    'RandomSource',
    'SeededRandom',
    'TrueRandom',
    'get_rng',
    'Component',
    'Connector',
    'Lexicon',
    'LexiconError',
    'load_lexicon',
    'ElvenGenerator',
    'DwarvenGenerator',
    'GnomishGenerator',
    'HalflingGenerator',
    'OrcGenerator',
    'smooth_consonant_cluster',
    'format_epithet',
    'phonetics',
    'GENERATORS',
    'get_generator',
]
