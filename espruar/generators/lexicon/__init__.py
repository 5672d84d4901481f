#!/usr/bin/env python3
"""
Lexicon Loader
==============
Loads the hand-authored name component lexicons from YAML (or JSON) files
and validates them before any generator is built.

Usage:
    from espruar.generators.lexicon import load_lexicon

    elven = load_lexicon('elven')
    components = elven['components']
    connectors = elven.connectors

Lexicon entries are immutable; generators build filtered views of them once
at construction and never modify them.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from ...settings import get_setting, resolve_path

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Path
# =============================================================================

LEXICON_DIR = Path(__file__).parent


def default_lexicon_dir() -> Path:
    """Directory named by `lexicon.dir` in app.yaml, else the bundled lexicons."""
    configured = get_setting('lexicon.dir')
    return resolve_path(configured) if configured else LEXICON_DIR


# species -> collection name -> (file stem, required non-empty)
LEXICON_FILES = {
    'elven': {
        'components': ('components', True),
        'connectors': ('connectors', True),
    },
    'dwarven': {
        'first_names': ('dwarven_first_names', True),
        'clan_names': ('dwarven_clan_names', True),
    },
    'gnomish': {
        'personal_names': ('gnomish_personal_names', True),
        'clan_names': ('gnomish_clan_names', True),
        'nicknames': ('gnomish_nicknames', False),
    },
    'halfling': {
        'personal_names': ('halfling_personal_names', True),
        'family_names': ('halfling_family_names', True),
        'nicknames': ('halfling_nicknames', False),
    },
    'orc': {
        'personal_names': ('orc_personal_names', True),
        'clan_names': ('orc_clan_names', False),
        'epithets': ('orc_epithets', False),
    },
}

COMPONENT_REQUIRED_FIELDS = ('root', 'can_be_prefix', 'can_be_suffix')

GENDER_ALIASES = {
    'male': 'masculine',
    'female': 'feminine',
    'any': 'neutral',
}


class LexiconError(ValueError):
    """Lexicon data cannot satisfy a request (malformed data or empty pool)."""


# =============================================================================
# Data Classes
# =============================================================================

def _as_tuple(value) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def normalize_gender(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    value = str(value).lower()
    return GENDER_ALIASES.get(value, value)


@dataclass(frozen=True)
class Component:
    """
    A nameable morpheme.

    Elven and Dwarven entries carry separate prefix/suffix forms; the flat
    pools of the other species (and Dwarven clan words) use the generic
    ``text``/``meaning``/``phonetic`` fields. The ``*_form``/``*_gloss``/
    ``*_sound`` accessors fall back from the positional field to the
    generic one.
    """
    root: str
    prefix_text: Optional[str] = None
    prefix_meaning: Optional[str] = None
    prefix_phonetic: Optional[str] = None
    suffix_text: Optional[str] = None
    suffix_meaning: Optional[str] = None
    suffix_phonetic: Optional[str] = None
    can_be_prefix: bool = False
    can_be_suffix: bool = False
    is_gender_modifier: bool = False
    gender: Optional[str] = None
    tags: Tuple[str, ...] = ()
    category: Optional[str] = None
    subrace: Tuple[str, ...] = ()
    text: Optional[str] = None
    meaning: Optional[str] = None
    phonetic: Optional[str] = None
    source: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = '') -> 'Component':
        text = data.get('text')
        return cls(
            root=str(data.get('root') or text or data.get('prefix_text') or ''),
            prefix_text=data.get('prefix_text'),
            prefix_meaning=data.get('prefix_meaning'),
            prefix_phonetic=data.get('prefix_phonetic'),
            suffix_text=data.get('suffix_text'),
            suffix_meaning=data.get('suffix_meaning'),
            suffix_phonetic=data.get('suffix_phonetic'),
            can_be_prefix=bool(data.get('can_be_prefix', False)),
            can_be_suffix=bool(data.get('can_be_suffix', False)),
            is_gender_modifier=bool(data.get('is_gender_modifier', False)),
            gender=normalize_gender(data.get('gender')),
            tags=_as_tuple(data.get('tags')),
            category=data.get('category'),
            subrace=_as_tuple(data.get('subrace')),
            text=text,
            meaning=data.get('meaning'),
            phonetic=data.get('phonetic'),
            source=source,
        )

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def prefix_form(self) -> str:
        return self.prefix_text or self.text or ''

    def suffix_form(self) -> str:
        return self.suffix_text or self.text or ''

    def prefix_gloss(self) -> str:
        return self.prefix_meaning or self.meaning or ''

    def suffix_gloss(self) -> str:
        return self.suffix_meaning or self.meaning or ''

    def prefix_sound(self) -> str:
        return self.prefix_phonetic or self.phonetic or ''

    def suffix_sound(self) -> str:
        return self.suffix_phonetic or self.phonetic or ''

    @property
    def is_complete_name(self) -> bool:
        """A self-contained name: its prefix and suffix forms are the same word."""
        return bool(
            self.prefix_text and self.suffix_text
            and self.prefix_text.lower() == self.suffix_text.lower()
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['tags'] = list(self.tags)
        data['subrace'] = list(self.subrace)
        return {k: v for k, v in data.items() if v not in (None, '', [])}


@dataclass(frozen=True)
class Connector:
    """A short phonetic bridge joining two components."""
    text: str
    function: str = ''
    phonetic: Optional[str] = None
    meaning: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Connector':
        return cls(
            text=str(data.get('text') or ''),
            function=str(data.get('function') or ''),
            phonetic=data.get('phonetic'),
            meaning=data.get('meaning'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v not in (None, '')}


@dataclass
class Lexicon:
    """All collections loaded for one species."""
    species: str
    collections: Dict[str, Tuple[Component, ...]] = field(default_factory=dict)
    connectors: Tuple[Connector, ...] = ()

    def __getitem__(self, name: str) -> Tuple[Component, ...]:
        return self.collections.get(name, ())

    def sizes(self) -> Dict[str, int]:
        sizes = {name: len(items) for name, items in self.collections.items()}
        if self.connectors:
            sizes['connectors'] = len(self.connectors)
        return sizes


# =============================================================================
# Validation
# =============================================================================

def validate_components(items: Any, name: str = 'components',
                        required_fields: Iterable[str] = COMPONENT_REQUIRED_FIELDS,
                        allow_empty: bool = False) -> List[Dict[str, Any]]:
    """
    Validate raw component records.

    Raises
    ------
    LexiconError
        If the collection is not a list, is empty (unless allowed), or a
        record lacks a required field or any usable text.
    """
    if items is None and allow_empty:
        return []
    if not isinstance(items, list):
        raise LexiconError(f"{name}: expected a list of records, got {type(items).__name__}")
    if not items and not allow_empty:
        raise LexiconError(f"{name}: collection is empty")

    for index, record in enumerate(items):
        if not isinstance(record, dict):
            raise LexiconError(f"{name}[{index}]: expected a mapping")
        for required in required_fields:
            if required not in record:
                raise LexiconError(f"{name}[{index}]: missing required field '{required}'")
        if record.get('can_be_prefix') and not (record.get('prefix_text') or record.get('text')):
            raise LexiconError(f"{name}[{index}]: usable as prefix but has no prefix text")
        if record.get('can_be_suffix') and not (record.get('suffix_text') or record.get('text')):
            raise LexiconError(f"{name}[{index}]: usable as suffix but has no suffix text")
        if not (record.get('root') or record.get('text') or record.get('prefix_text')):
            raise LexiconError(f"{name}[{index}]: record has no root or text")

    return items


def validate_connectors(items: Any) -> List[Dict[str, Any]]:
    """Validate raw connector records (each needs text and function)."""
    if not isinstance(items, list) or not items:
        raise LexiconError("connectors: expected a non-empty list of records")
    for index, record in enumerate(items):
        if not isinstance(record, dict) or not record.get('text') or not record.get('function'):
            raise LexiconError(f"connectors[{index}]: missing required fields 'text'/'function'")
    return items


def build_components(items: Iterable[Dict[str, Any]], source: str = '') -> Tuple[Component, ...]:
    return tuple(Component.from_dict(item, source=source) for item in items)


def build_connectors(items: Iterable[Dict[str, Any]]) -> Tuple[Connector, ...]:
    return tuple(Connector.from_dict(item) for item in items)


# =============================================================================
# Loaders
# =============================================================================

@lru_cache(maxsize=32)
def _load_file(filepath: Path) -> Any:
    """Load one YAML or JSON file."""
    with open(filepath, 'r', encoding='utf-8') as f:
        if filepath.suffix == '.json':
            return json.load(f)
        return yaml.safe_load(f)


def _find_file(directory: Path, stem: str) -> Optional[Path]:
    for suffix in ('.yaml', '.yml', '.json'):
        candidate = directory / f"{stem}{suffix}"
        if candidate.exists():
            return candidate
    return None


def load_lexicon(species: str, lexicon_dir: Path = None) -> Lexicon:
    """
    Load and validate every collection a species generator needs.

    Parameters
    ----------
    species : str
        One of 'elven', 'dwarven', 'gnomish', 'halfling', 'orc'
    lexicon_dir : Path, optional
        Directory holding the data files (defaults to `lexicon.dir`)

    Raises
    ------
    ValueError
        Unknown species
    FileNotFoundError
        A required data file is missing
    LexiconError
        A file's content is malformed
    """
    files = LEXICON_FILES.get(species)
    if files is None:
        available = ', '.join(sorted(LEXICON_FILES.keys()))
        raise ValueError(f"Unknown species '{species}'. Available species: {available}")

    directory = Path(lexicon_dir) if lexicon_dir else default_lexicon_dir()
    lexicon = Lexicon(species=species)

    for collection, (stem, required) in files.items():
        filepath = _find_file(directory, stem)
        if filepath is None:
            if required:
                raise FileNotFoundError(f"Missing lexicon file for {species}.{collection}: {directory / stem}.yaml")
            data = []
        else:
            data = _load_file(filepath)

        if collection == 'connectors':
            lexicon.connectors = build_connectors(validate_connectors(data))
            continue

        if species in ('elven', 'dwarven'):
            records = validate_components(data, name=f"{species}.{collection}", allow_empty=not required)
        else:
            records = validate_components(data, name=f"{species}.{collection}",
                                          required_fields=(), allow_empty=not required)
        lexicon.collections[collection] = build_components(records, source=collection)

    logger.debug("Loaded %s lexicon: %s", species, lexicon.sizes())
    return lexicon


__all__ = [
    'LEXICON_DIR',
    'default_lexicon_dir',
    'LEXICON_FILES',
    'LexiconError',
    'Component',
    'Connector',
    'Lexicon',
    'normalize_gender',
    'validate_components',
    'validate_connectors',
    'build_components',
    'build_connectors',
    'load_lexicon',
]
