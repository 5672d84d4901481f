#!/usr/bin/env python3
"""
Elven Name Generator
====================
Builds Espruar names from interchangeable prefix/suffix components
("Lego System"), optionally bridged by a connector.

Each call runs a bounded search: candidates are built until one lands within
the acceptable syllable distance of the target, otherwise the closest
candidate seen is returned.

Subraces:
- high-elf: uniform selection (the unmarked default)
- sun-elf / moon-elf / wood-elf: weighted toward their tag
- drow: drow-female (feminine style) or drow-male, each with its own tag

Usage:
    gen = ElvenGenerator.from_lexicon()
    result = gen.generate(subrace='moon-elf', target_syllables=3)
    print(result.name, result.meaning)
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..settings import get_setting
from .base_generator import GeneratedName, SpeciesGenerator, join_meanings
from .entropy import RandomSource
from .lexicon import (
    Component, Connector, LexiconError, Lexicon,
    build_components, build_connectors, load_lexicon,
    validate_components, validate_connectors,
)
from . import phonetics

logger = logging.getLogger(__name__)


# subrace -> preferred tag (high-elf has none)
SUBRACE_TAGS = {
    'sun-elf': 'sun',
    'moon-elf': 'moon',
    'wood-elf': 'wood',
    'drow-female': 'drow-female',
    'drow-male': 'drow-male',
}

DROW_VARIANTS = ('drow-female', 'drow-male')

SOFT_CONNECTOR_SOUNDS = ('i', 'e', 'ella')
STRONG_CONNECTOR_SOUNDS = ('th', 'or', 'an')
LIQUID_CONNECTOR_SOUNDS = ('l', 'r', 'n')


def _as_components(items: Iterable[Union[Component, Dict[str, Any]]]) -> Tuple[Component, ...]:
    items = list(items or [])
    if items and all(isinstance(i, Component) for i in items):
        return tuple(items)
    return build_components(validate_components(items, name='elven.components'), source='components')


def _as_connectors(items: Iterable[Union[Connector, Dict[str, Any]]]) -> Tuple[Connector, ...]:
    items = list(items or [])
    if items and all(isinstance(i, Connector) for i in items):
        return tuple(items)
    return build_connectors(validate_connectors(items))


def resolve_subrace(subrace: str, style: str) -> str:
    """Drow splits by style; every other subrace is used as given."""
    if subrace == 'drow':
        return 'drow-female' if style == 'feminine' else 'drow-male'
    return subrace


def syllable_window(subrace: str, target: int) -> Tuple[int, int, int]:
    """
    Adjusted target and (min, max) syllables allowed for a subrace.

    A minimum of 0 means no lower bound.
    """
    if subrace in ('wood-elf', 'drow-male'):
        return max(2, target - 1), 2, 3
    if subrace == 'drow-female':
        return min(6, target + 1), 4, 6
    return target, 0, 5


class ElvenGenerator(SpeciesGenerator):
    """
    Espruar name generator.

    Prefix and suffix views of the lexicon are filtered once here and never
    change afterwards. Gender-modifier components only ever fill the suffix
    role.
    """

    species = 'elven'

    def __init__(self, components: Sequence, connectors: Sequence,
                 rng: RandomSource = None, seed: int = None):
        super().__init__(rng=rng, seed=seed)
        self.components = _as_components(components)
        self.connectors = _as_connectors(connectors)

        self.prefix_candidates = tuple(
            c for c in self.components
            if c.can_be_prefix and c.prefix_text and not c.is_gender_modifier
        )
        self.suffix_candidates = tuple(
            c for c in self.components if c.can_be_suffix and c.suffix_text
        )

        if not self.prefix_candidates:
            raise LexiconError("elven lexicon has no prefix-capable components")
        if not self.suffix_candidates:
            raise LexiconError("elven lexicon has no suffix-capable components")

        self._max_attempts = int(get_setting('generation.max_attempts', 50))
        self._tolerance = int(get_setting('generation.acceptable_syllable_difference', 1))
        self._recent_min = int(get_setting('elven.recent_min_remaining', 6))
        self._weights = get_setting('elven.subrace_weights', {}) or {}
        self._feminine_markers = tuple(get_setting('elven.feminine_markers', []))
        self._masculine_markers = tuple(get_setting('elven.masculine_markers', []))

    @classmethod
    def from_lexicon(cls, lexicon: Lexicon = None, lexicon_dir=None, **kwargs) -> 'ElvenGenerator':
        lexicon = lexicon or load_lexicon('elven', lexicon_dir)
        return cls(lexicon['components'], lexicon.connectors, **kwargs)

    # =========================================================================
    # Search loop
    # =========================================================================

    def _generate(self, options: Dict[str, Any]) -> GeneratedName:
        style = options['style']
        complexity = options['complexity']
        subrace = resolve_subrace(options['subrace'], style)
        target, min_syl, max_syl = syllable_window(subrace, options['target_syllables'])

        max_attempts = self._max_attempts * 2 if min_syl > 0 else self._max_attempts

        best: Optional[GeneratedName] = None
        best_diff = None
        fallback: Optional[GeneratedName] = None
        fallback_diff = None
        attempts = 0

        for attempts in range(1, max_attempts + 1):
            candidate = self._build_candidate(complexity, style, subrace)
            diff = abs(candidate.syllables - target)

            in_window = candidate.syllables <= max_syl and (min_syl == 0 or candidate.syllables >= min_syl)
            if not in_window:
                if fallback_diff is None or diff < fallback_diff:
                    fallback, fallback_diff = candidate, diff
                continue

            if best_diff is None or diff < best_diff:
                best, best_diff = candidate, diff
            if diff <= self._tolerance:
                break

        if best is None:
            logger.debug("elven %s: no candidate inside %d-%d syllables after %d attempts",
                         subrace, min_syl, max_syl, attempts)
            best = fallback
        else:
            logger.debug("elven %s: best difference %d after %d attempts", subrace, best_diff, attempts)

        best.subrace = options['subrace']
        best.style = style
        self._track_used(c.root for c in (best.prefix, best.suffix) if c is not None)
        return best

    # =========================================================================
    # Candidate construction
    # =========================================================================

    def _build_candidate(self, complexity: str, style: str, subrace: str) -> GeneratedName:
        prefix = self._select_prefix(subrace)

        if complexity == 'simple' and self._is_famous_complete(prefix):
            return self._complete_name(prefix)

        if not subrace.startswith('drow'):
            prefix = self._reroll_famous(prefix, subrace)
            if complexity == 'simple' and self._is_famous_complete(prefix):
                return self._complete_name(prefix)

        suffix = self._select_suffix(style, subrace, avoid_root=prefix.root)

        prefix_text = phonetics.clean_component_text(prefix.prefix_text)
        suffix_text = phonetics.clean_component_text(suffix.suffix_text)

        connector = None
        if self._wants_connector(complexity, subrace, prefix_text, suffix_text):
            connector = self._select_connector(style, subrace, suffix_text)

        connector_text = phonetics.clean_component_text(connector.text) if connector else ''
        name = phonetics.capitalize(prefix_text + connector_text + suffix_text)

        meaning = join_meanings(
            phonetics.format_meaning(prefix.prefix_gloss()),
            phonetics.format_meaning(connector.meaning) if connector else '',
            phonetics.format_meaning(suffix.suffix_gloss()),
        )
        pronunciation = '-'.join(p for p in (
            prefix.prefix_sound(),
            connector.phonetic if connector else None,
            suffix.suffix_sound(),
        ) if p)

        return GeneratedName(
            name=name,
            meaning=meaning,
            pronunciation=pronunciation,
            syllables=phonetics.count_syllables(name),
            breakdown={'prefix': prefix, 'connector': connector, 'suffix': suffix},
            name_type='full',
        )

    def _complete_name(self, component: Component) -> GeneratedName:
        name = phonetics.capitalize(phonetics.clean_component_text(component.prefix_text))
        return GeneratedName(
            name=name,
            meaning=phonetics.format_meaning(component.prefix_gloss()),
            pronunciation=component.prefix_sound(),
            syllables=phonetics.count_syllables(name),
            breakdown={'prefix': component, 'connector': None, 'suffix': None},
            name_type='full',
        )

    def _wants_connector(self, complexity: str, subrace: str, prefix_text: str, suffix_text: str) -> bool:
        if complexity == 'complex':
            return True
        if complexity != 'auto' or not phonetics.needs_connector(prefix_text, suffix_text):
            return False
        if subrace == 'wood-elf':
            return phonetics.has_harsh_cluster(prefix_text, suffix_text)
        if subrace == 'drow-male':
            return False
        return True

    @staticmethod
    def _is_famous(component: Optional[Component]) -> bool:
        return bool(component and component.has_tag('famous'))

    def _is_famous_complete(self, component: Component) -> bool:
        """A famous name usable only whole (no suffix form)."""
        return (
            self._is_famous(component)
            and bool(component.prefix_text)
            and (not component.can_be_suffix or not component.suffix_text)
        )

    def _reroll_famous(self, prefix: Component, subrace: str) -> Component:
        limit = int(get_setting('elven.famous_reroll_limit', 10))
        probability = float(get_setting('elven.famous_reroll_probability', 0.95))
        rerolls = 0
        while self._is_famous(prefix) and rerolls < limit and self.rng.random() < probability:
            prefix = self._select_prefix(subrace)
            rerolls += 1
        return prefix

    # =========================================================================
    # Selection
    # =========================================================================

    def _select_prefix(self, subrace: str) -> Component:
        return self._select_weighted(self.prefix_candidates, subrace, role='prefix')

    def _select_suffix(self, style: str, subrace: str, avoid_root: str = None) -> Component:
        candidates: Sequence[Component] = self.suffix_candidates

        if avoid_root:
            others = [c for c in candidates if c.root != avoid_root]
            if others:
                candidates = others

        markers = ()
        if style == 'feminine':
            markers = self._feminine_markers
        elif style == 'masculine':
            markers = self._masculine_markers

        if markers and self.rng.random() < float(get_setting('elven.style_suffix_bias', 0.5)):
            styled = [
                c for c in candidates
                if any(m in (c.suffix_text or '').lower() for m in markers)
            ]
            if styled:
                candidates = styled

        return self._select_weighted(candidates, subrace, role='suffix')

    def _select_connector(self, style: str, subrace: str, suffix_text: str = '') -> Connector:
        style_bias = float(get_setting('elven.style_connector_bias', 0.5))

        if subrace == 'moon-elf' and suffix_text:
            if self.rng.random() < float(get_setting('elven.moon_vowel_echo_probability', 0.33)):
                echoing = [c for c in self.connectors if phonetics.shares_vowel_sound(c.text, suffix_text)]
                if echoing:
                    return self._random_element(echoing, 'connector')

        if style == 'feminine' and self.rng.random() < style_bias:
            soft = [c for c in self.connectors if any(s in c.text for s in SOFT_CONNECTOR_SOUNDS)]
            if soft:
                return self._random_element(soft, 'connector')

        if style == 'masculine' and self.rng.random() < style_bias:
            strong = [c for c in self.connectors if any(s in c.text for s in STRONG_CONNECTOR_SOUNDS)]
            if strong:
                return self._random_element(strong, 'connector')

        liquid = [c for c in self.connectors if any(s in c.text for s in LIQUID_CONNECTOR_SOUNDS)]
        if liquid and self.rng.random() < float(get_setting('elven.liquid_connector_bias', 0.6)):
            return self._random_element(liquid, 'connector')

        return self._random_element(self.connectors, 'connector')

    def _select_weighted(self, candidates: Sequence[Component], subrace: str, role: str) -> Component:
        """
        Weighted subrace selection.

        Roll once: below the preferred threshold draw from the subrace's
        tag, below the neutral threshold from 'neutral' entries, otherwise
        from the rest. An empty bucket falls through to the next one.
        """
        available = self._avoid_recent(candidates, self._recent_min)

        if not subrace.startswith('drow'):
            available = [c for c in available if not any(t.startswith('drow') for t in c.tags)]

        tag = SUBRACE_TAGS.get(subrace)
        if tag is None:
            return self._random_element(available, role)

        preferred = [c for c in available if c.has_tag(tag)]
        neutral = [c for c in available if c.has_tag('neutral')]
        other = [c for c in available if not c.has_tag(tag) and not c.has_tag('neutral')]

        roll = self.rng.random()
        if roll < float(self._weights.get('preferred', 0.6)) and preferred:
            return self._random_element(preferred, role)
        if roll < float(self._weights.get('neutral', 0.9)) and neutral:
            return self._random_element(neutral, role)
        if other:
            return self._random_element(other, role)
        if subrace in DROW_VARIANTS:
            drow_any = [c for c in available if c.has_tag('drow')]
            if drow_any:
                return self._random_element(drow_any, role)
        return self._random_element(available, role)


__all__ = ['ElvenGenerator', 'resolve_subrace', 'syllable_window', 'SUBRACE_TAGS']
