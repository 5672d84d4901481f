#!/usr/bin/env python3
"""
Configuration Management
========================
Species profiles (option defaults and allowed values), vowel modifier
tables, and environment-based application configuration.
"""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from .settings import get_setting, resolve_path


# =============================================================================
# Species Profiles
# =============================================================================
# Per-species option defaults and the values each option accepts.
# resolve_options() merges a caller's options over these.

SPECIES_PROFILES = {
    "elven": {
        "description": "Espruar names built from interchangeable prefix/suffix components",
        "defaults": {
            "subrace": "high-elf",
            "complexity": "auto",
            "target_syllables": 4,
            "style": "neutral",
        },
        "choices": {
            "subrace": ["high-elf", "sun-elf", "moon-elf", "wood-elf", "drow"],
            "complexity": ["simple", "auto", "complex"],
            "style": ["neutral", "feminine", "masculine", "martial", "lyrical"],
        },
    },
    "dwarven": {
        "description": "Dethek first names and clan names",
        "defaults": {
            "name_type": "full",
            "gender": "neutral",
            "subrace": "general",
        },
        "choices": {
            "name_type": ["first", "clan", "full"],
            "gender": ["neutral", "masculine", "feminine"],
            "subrace": ["general", "gold-dwarf", "shield-dwarf", "duergar"],
        },
    },
    "gnomish": {
        "description": "Personal names, clan names and nicknames",
        "defaults": {
            "name_type": "full",
            "gender": "neutral",
            "subrace": "rock",
            "include_nickname": True,
        },
        "choices": {
            "name_type": ["personal", "clan", "nickname", "full"],
            "gender": ["neutral", "masculine", "feminine"],
            "subrace": ["rock", "forest", "deep"],
        },
    },
    "halfling": {
        "description": "Personal names, family names and nicknames",
        "defaults": {
            "name_type": "full",
            "gender": "neutral",
            "subrace": "lightfoot",
        },
        "choices": {
            "name_type": ["personal", "family", "nickname", "full",
                          "full_with_nickname", "full-no-nickname"],
            "gender": ["neutral", "masculine", "feminine"],
            "subrace": ["lightfoot", "stout", "ghostwise"],
        },
    },
    "orc": {
        "description": "Personal names with optional epithets",
        "defaults": {
            "name_type": "full",
            "gender": "neutral",
            "subrace": "general",
        },
        "choices": {
            "name_type": ["personal", "epithet", "full", "full-with-epithet", "full-no-epithet"],
        },
    },
}


def list_species() -> dict:
    """List all species with their descriptions and defaults."""
    return {
        name: {
            "description": p["description"],
            "defaults": dict(p["defaults"]),
            "choices": {k: list(v) for k, v in p["choices"].items()},
        }
        for name, p in SPECIES_PROFILES.items()
    }


def get_species_defaults(species: str) -> dict:
    """
    Get the option defaults for a species.

    Raises
    ------
    ValueError
        If the species is unknown
    """
    profile = SPECIES_PROFILES.get(species)
    if profile is None:
        available = ', '.join(sorted(SPECIES_PROFILES.keys()))
        raise ValueError(
            f"Unknown species '{species}'. "
            f"Available species: {available}"
        )
    return dict(profile["defaults"])


def resolve_options(species: str, options: dict = None) -> dict:
    """
    Merge caller options over a species' defaults.

    Unknown keys are dropped. Missing or None values take the default.
    Enumerated values outside the species' choices raise ValueError.
    """
    resolved = get_species_defaults(species)
    choices = SPECIES_PROFILES[species]["choices"]

    for key, value in (options or {}).items():
        if value is None or key not in resolved:
            continue
        resolved[key] = value

    for key, allowed in choices.items():
        if key in resolved and resolved[key] not in allowed:
            raise ValueError(
                f"Invalid {key} '{resolved[key]}' for {species}. "
                f"Expected one of: {', '.join(allowed)}"
            )

    if "target_syllables" in resolved:
        resolved["target_syllables"] = int(resolved["target_syllables"])
    if "include_nickname" in resolved:
        resolved["include_nickname"] = bool(resolved["include_nickname"])

    return resolved


# =============================================================================
# Vowel Modifiers
# =============================================================================

FINAL_VOWELS = [
    {"vowel": "a", "tone": "Clear, bright, feminine"},
    {"vowel": "i", "tone": "Sharp, intellectual"},
    {"vowel": "o", "tone": "Deep, noble (rare)"},
    {"vowel": "u", "tone": "Mysterious, ancient"},
    {"vowel": "ae", "tone": "Lyrical, elegant"},
]

GENDER_PREFIX_VOWELS = [
    {"vowel": "A", "gender": "feminine", "note": "Traditional feminine marker"},
    {"vowel": "E", "gender": "masculine", "note": "Traditional masculine marker"},
    {"vowel": "I", "gender": "feminine", "note": "Feminine substitution"},
    {"vowel": "Y", "gender": "feminine", "note": "Feminine substitution"},
    {"vowel": "O", "gender": "masculine", "note": "Masculine substitution"},
]


def final_vowel_tone(vowel: str) -> Optional[str]:
    for v in FINAL_VOWELS:
        if v["vowel"] == vowel:
            return v["tone"]
    return None


# =============================================================================
# Application Configuration
# =============================================================================

@dataclass
class Config:
    """Application configuration"""
    lexicon_dir: Optional[Path] = None
    favorites_db: Optional[Path] = None
    max_favorites: int = 100

    @property
    def has_custom_lexicon(self) -> bool:
        return self.lexicon_dir is not None


def load_env(env_path: Path = None) -> dict:
    """Load environment variables from .env file."""
    if env_path is None:
        env_path = Path.cwd() / '.env'

    env_vars = {}
    if env_path.exists():
        for line in env_path.read_text().splitlines():
            line = line.strip()
            if '=' in line and not line.startswith('#'):
                key, value = line.split('=', 1)
                env_vars[key.strip()] = value.strip()
                os.environ.setdefault(key.strip(), value.strip())

    return env_vars


def get_config(env_path: Path = None) -> Config:
    """Get configuration from .env, environment and app.yaml."""
    env = load_env(env_path)

    lexicon_dir = env.get('ESPRUAR_LEXICON_DIR') or os.environ.get('ESPRUAR_LEXICON_DIR')
    favorites_db = (
        env.get('ESPRUAR_FAVORITES_DB')
        or os.environ.get('ESPRUAR_FAVORITES_DB')
        or get_setting('favorites.db_path')
    )

    return Config(
        lexicon_dir=resolve_path(lexicon_dir, base=Path.cwd()) if lexicon_dir else None,
        favorites_db=resolve_path(favorites_db) if favorites_db else None,
        max_favorites=int(get_setting('favorites.max_favorites', 100)),
    )
