#!/usr/bin/env python3
"""
Espruar - Fantasy Character Name Generator
==========================================

Procedurally generates Elven, Dwarven, Gnomish, Halfling and Orc names by
recombining small hand-authored lexicons according to per-species phonetic
and cultural rules. Every result carries a meaning breakdown.

Quick Start
-----------
    from espruar import NameForge

    forge = NameForge()

    # One name
    result = forge.generate('elven', subrace='moon-elf', target_syllables=3)
    print(result.name, '-', result.meaning)

    # Several distinct names
    names = forge.generate_many('dwarven', count=5, name_type='clan')

    # Keep one
    forge.save(result)

Modules
-------
    espruar.generators - Species generators, phonetics, lexicon loading
    espruar.favorites  - SQLite favorites store
    espruar.config     - Species profiles and vowel modifier tables

CLI Usage
---------
    python -m espruar generate -s elven -n 5 --subrace wood-elf
    python -m espruar species
    python -m espruar favorites list
"""

__version__ = "0.4.0"
__author__ = "Espruar"

from typing import Dict, List, Optional, Tuple

# =============================================================================
# Submodule Imports
# =============================================================================

from . import generators
from . import config
from . import favorites

from .config import Config, get_config, list_species, resolve_options, SPECIES_PROFILES
from .favorites import FavoritesDB, get_favorites_db
from .generators import (
    GENERATORS,
    GeneratedName,
    SpeciesGenerator,
    ElvenGenerator,
    DwarvenGenerator,
    GnomishGenerator,
    HalflingGenerator,
    OrcGenerator,
    LexiconError,
    apply_final_vowel,
    apply_gender_prefix_vowel,
    get_generator,
    load_lexicon,
)
from .generators.entropy import RandomSource, SeededRandom, get_rng


class NameForge:
    """
    Main interface: one generator per species, plus the favorites store.

    Generators are built on first use from the bundled lexicons (or from
    ``ESPRUAR_LEXICON_DIR`` when set) and share one random source.

    Examples
    --------
        >>> forge = NameForge(seed=42)
        >>> result = forge.generate('orc')
        >>> forge.apply_final_vowel(result, 'a')
    """

    def __init__(self, lexicon_dir=None, db_path: str = None,
                 rng: RandomSource = None, seed: int = None):
        self._config = get_config()
        self._lexicon_dir = lexicon_dir or self._config.lexicon_dir
        self._db_path = db_path or self._config.favorites_db
        self._db: Optional[FavoritesDB] = None
        self._rng = rng or get_rng(seed)
        self._generators: Dict[str, SpeciesGenerator] = {}

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> Config:
        return self._config

    @property
    def db(self) -> FavoritesDB:
        """The favorites store (opened lazily)."""
        if self._db is None:
            self._db = FavoritesDB(self._db_path, max_favorites=self._config.max_favorites)
        return self._db

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generator(self, species: str) -> SpeciesGenerator:
        """The (cached) generator for a species."""
        if species not in self._generators:
            self._generators[species] = get_generator(species, lexicon_dir=self._lexicon_dir, rng=self._rng)
        return self._generators[species]

    def generate(self, species: str = 'elven', **options) -> GeneratedName:
        return self.generator(species).generate(options)

    def generate_many(self, species: str = 'elven', count: int = 10, **options) -> List[GeneratedName]:
        return self.generator(species).generate_many(count, options)

    @staticmethod
    def apply_final_vowel(result: Optional[GeneratedName], vowel: str) -> Optional[GeneratedName]:
        return apply_final_vowel(result, vowel)

    @staticmethod
    def apply_gender_prefix_vowel(result: Optional[GeneratedName], vowel: str) -> Optional[GeneratedName]:
        return apply_gender_prefix_vowel(result, vowel)

    # -------------------------------------------------------------------------
    # Favorites
    # -------------------------------------------------------------------------

    def save(self, result: GeneratedName) -> Tuple[bool, str]:
        return self.db.add(result)

    def favorites(self, species: str = None) -> list:
        return self.db.list(species)


# =============================================================================
# Convenience Functions
# =============================================================================

def generate(species: str = 'elven', **options) -> GeneratedName:
    """
    Quick generation using a fresh NameForge.

    See NameForge.generate() for full documentation.
    """
    return NameForge().generate(species, **options)


# =============================================================================
# Public API
# =============================================================================

__all__ = [
    '__version__',
    'NameForge',
    'generate',
    'GeneratedName',
    'SpeciesGenerator',
    'ElvenGenerator',
    'DwarvenGenerator',
    'GnomishGenerator',
    'HalflingGenerator',
    'OrcGenerator',
    'GENERATORS',
    'LexiconError',
    'apply_final_vowel',
    'apply_gender_prefix_vowel',
    'get_generator',
    'load_lexicon',
    'FavoritesDB',
    'get_favorites_db',
    'Config',
    'get_config',
    'list_species',
    'resolve_options',
    'SPECIES_PROFILES',
    'SeededRandom',
]
