#!/usr/bin/env python3
"""
Phonetic Utilities
==================
Pure string helpers shared by every species generator.

No I/O and no randomness. Every function tolerates empty or None input and
returns '', 0 or False instead of raising.

The syllable counter is a deliberately crude orthographic heuristic
(vowel-group counting with a silent-e rule). The syllable-target search in
the Elven generator depends on its exact behavior.
"""

import re
from typing import Optional


VOWELS = 'aeiouAEIOU'
LIQUID_CONSONANTS = 'lrnmw'
HARD_CONSONANTS = 'kptbdgcszxfv'
HARSH_CLUSTERS = ('gr', 'kr', 'dr', 'tr', 'thr', 'str')

_SLASH_RE = re.compile(r'\s*/\s*')


def is_vowel(char: str) -> bool:
    return bool(char) and len(char) == 1 and char in VOWELS


def is_liquid_consonant(char: str) -> bool:
    return bool(char) and len(char) == 1 and char.lower() in LIQUID_CONSONANTS


def ends_with_vowel(text: str) -> bool:
    if not text:
        return False
    return is_vowel(text[-1])


def starts_with_vowel(text: str) -> bool:
    if not text:
        return False
    return is_vowel(text[0])


def ends_with_hard_consonant(text: str) -> bool:
    if not text:
        return False
    return text[-1].lower() in HARD_CONSONANTS


def count_syllables(word: str) -> int:
    """
    Count syllables by vowel groups.

    Each run of consecutive vowels counts once. A trailing 'e' removes one
    syllable when the count is above 1. Non-empty input yields at least 1;
    empty input yields 0.
    """
    if not word:
        return 0

    word = word.lower()
    count = 0
    prev_vowel = False

    for char in word:
        if is_vowel(char):
            if not prev_vowel:
                count += 1
            prev_vowel = True
        else:
            prev_vowel = False

    # Silent 'e'
    if word.endswith('e') and count > 1:
        count -= 1

    return max(1, count)


def needs_connector(text1: str, text2: str) -> bool:
    """
    True when the junction of two components is consonant + consonant,
    unless both consonants are liquids (they blend on their own).
    """
    if not text1 or not text2:
        return False

    end = text1[-1]
    start = text2[0]

    if not is_vowel(end) and not is_vowel(start):
        if is_liquid_consonant(end) and is_liquid_consonant(start):
            return False
        return True

    return False


def has_harsh_cluster(text1: str, text2: str) -> bool:
    """
    True when the join of two components contains a harsh cluster
    (gr, kr, dr, tr, thr, str).

    Checks the last two characters of text1 together with the first three
    of text2, which covers the junction itself and both boundary edges.
    """
    if not text1 and not text2:
        return False

    boundary = ((text1 or '')[-2:] + (text2 or '')[:3]).lower()
    return any(cluster in boundary for cluster in HARSH_CLUSTERS)


def shares_vowel_sound(text1: str, text2: str) -> bool:
    """True when both strings contain at least one common vowel letter."""
    if not text1 or not text2:
        return False
    vowels1 = {c for c in text1.lower() if is_vowel(c)}
    vowels2 = {c for c in text2.lower() if is_vowel(c)}
    return bool(vowels1 & vowels2)


def should_suggest_final_vowel(name: str, syllables: int, target_syllables: int) -> bool:
    """Whether a UI should offer final-vowel variants of a name."""
    if syllables is not None and target_syllables is not None and syllables < target_syllables:
        return True
    return ends_with_hard_consonant(name)


def clean_component_text(text: Optional[str]) -> str:
    """Strip the hyphens lexicon data uses to mark prefix/suffix position."""
    if not text:
        return ''
    return text.replace('-', '')


def capitalize(text: Optional[str]) -> str:
    """Uppercase the first character only; the rest is left untouched."""
    if not text:
        return ''
    return text[0].upper() + text[1:]


def format_meaning(meaning: Optional[str]) -> str:
    """
    'light / star' -> 'Light, Star'

    Slash-separated alternatives become comma-separated, then every
    space-delimited word gets its first letter uppercased.
    """
    if not meaning:
        return ''

    meaning = _SLASH_RE.sub(', ', meaning)
    return ' '.join(capitalize(word) for word in meaning.split(' '))
