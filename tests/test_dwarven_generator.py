"""
Tests for Dwarven Generator
===========================
First names, union-pool clan names, consonant smoothing and subrace
weighting in espruar/generators/dwarven_generator.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from espruar.generators import DwarvenGenerator, LexiconError, smooth_consonant_cluster


FIRST_NAMES = [
    {'root': 'thor', 'prefix_text': 'Thor', 'prefix_meaning': 'hammer', 'suffix_text': '-thor',
     'suffix_meaning': 'hammer', 'can_be_prefix': True, 'can_be_suffix': True,
     'gender': 'masculine', 'category': 'craft-forge'},
    {'root': 'dagn', 'prefix_text': 'Dagn', 'prefix_meaning': 'battle', 'suffix_text': '-dagn',
     'suffix_meaning': 'battle', 'can_be_prefix': True, 'can_be_suffix': True,
     'gender': 'neutral', 'category': 'war-battle'},
    {'root': 'hild', 'prefix_text': 'Hild', 'prefix_meaning': 'maiden', 'suffix_text': '-hild',
     'suffix_meaning': 'maiden', 'can_be_prefix': True, 'can_be_suffix': True,
     'gender': 'feminine', 'category': 'family'},
]

CLAN_NAMES = [
    {'root': 'stone', 'text': 'Stone', 'meaning': 'stone', 'can_be_prefix': True,
     'can_be_suffix': False, 'category': 'stone-earth'},
    {'root': 'hammer', 'text': 'Hammer', 'meaning': 'hammer', 'can_be_prefix': False,
     'can_be_suffix': True, 'category': 'craft-forge'},
]


@pytest.fixture
def gen():
    return DwarvenGenerator(FIRST_NAMES, CLAN_NAMES, seed=42)


class TestSmoothing:
    """Consonant cluster smoothing at the seam."""

    def test_triple_consonant_trimmed(self):
        assert smooth_consonant_cluster("thorr", "rin") == "thorrin"

    def test_double_before_other_consonant(self):
        assert smooth_consonant_cluster("dall", "grim") == "dalgrim"

    def test_double_n_kept(self):
        assert smooth_consonant_cluster("brann", "dor") == "branndor"

    def test_double_before_vowel_kept(self):
        assert smooth_consonant_cluster("dall", "in") == "dallin"

    def test_plain_join(self):
        assert smooth_consonant_cluster("bal", "dor") == "baldor"

    def test_empty_sides(self):
        assert smooth_consonant_cluster("", "dor") == "dor"
        assert smooth_consonant_cluster("bal", "") == "bal"


class TestFirstNames:

    def test_shape(self, gen):
        result = gen.generate(name_type='first')
        assert result.name_type == 'first'
        assert result.generator_type == 'dwarven'
        assert result.name[0].isupper()
        assert set(result.breakdown) == {'prefix', 'suffix'}
        assert result.meaning.count(' + ') == 1

    def test_suffix_hyphen_stripped(self, gen):
        for _ in range(20):
            assert '-' not in gen.generate(name_type='first').name

    def test_gender_filter(self, gen):
        for _ in range(50):
            result = gen.generate(name_type='first', gender='feminine')
            assert result.prefix.gender in ('feminine', 'neutral')
            assert result.suffix.gender in ('feminine', 'neutral')

    def test_gender_filter_without_fallback(self):
        only_male = [FIRST_NAMES[0]]
        gen = DwarvenGenerator(only_male, CLAN_NAMES, seed=1)
        with pytest.raises(LexiconError):
            gen.generate(name_type='first', gender='feminine')


class TestClanNames:

    def test_lowercased_parts(self, gen):
        for _ in range(20):
            result = gen.generate(name_type='clan')
            assert result.name[0].isupper()
            assert result.name[1:] == result.name[1:].lower()

    def test_cross_pool_sourcing_bundled(self):
        gen = DwarvenGenerator.from_lexicon(seed=7)
        from_first_names = 0
        for _ in range(100):
            result = gen.generate(name_type='clan')
            if result.prefix.source == 'first_names' or result.suffix.source == 'first_names':
                from_first_names += 1
        assert from_first_names > 0

    def test_clan_words_also_used(self):
        gen = DwarvenGenerator.from_lexicon(seed=8)
        sources = set()
        for _ in range(100):
            result = gen.generate(name_type='clan')
            sources.update((result.prefix.source, result.suffix.source))
        assert sources == {'first_names', 'clan_names'}


class TestFullNames:

    def test_full_name(self, gen):
        result = gen.generate(name_type='full')
        first = result.breakdown['first_name']
        clan = result.breakdown['clan_name']
        assert result.name == f"{first.name} {clan.name}"
        assert result.syllables == first.syllables + clan.syllables
        assert result.meaning == f"{first.meaning} + {clan.meaning}"
        assert result.pronunciation == ' '.join(
            p for p in (first.pronunciation, clan.pronunciation) if p
        )

    def test_to_dict_nests_parts(self, gen):
        data = gen.generate().to_dict()
        assert data['name_type'] == 'full'
        assert 'name' in data['breakdown']['first_name']
        assert 'prefix' in data['breakdown']['clan_name']['breakdown']


class TestSubraceWeighting:
    """Weighting by duplication."""

    def test_general_unchanged(self, gen):
        pool = gen.first_name_prefixes
        assert gen.weight_by_subrace(pool, 'general') == list(pool)

    def test_category_match_tripled(self, gen):
        weighted = gen.weight_by_subrace(gen.first_name_prefixes, 'shield-dwarf')
        counts = {c.root: weighted.count(c) for c in gen.first_name_prefixes}
        # shield dwarves prefer war-battle and craft-forge
        assert counts == {'thor': 3, 'dagn': 3, 'hild': 1}

    def test_preferred_category(self, gen):
        stone = gen.clan_name_prefixes[0]
        assert gen.component_weight(stone, 'duergar') == 3
        assert gen.component_weight(stone, 'general') == 1

    def test_keyword_match(self):
        gen = DwarvenGenerator(
            [{'root': 'gor', 'prefix_text': 'Gor', 'prefix_meaning': 'deep delver',
              'can_be_prefix': True, 'can_be_suffix': False}],
            CLAN_NAMES, seed=1,
        )
        gor = gen.first_name_prefixes[0]
        assert gen.component_weight(gor, 'duergar') == 3
        assert gen.component_weight(gor, 'gold-dwarf') == 1

    def test_clan_word_category(self, gen):
        hammer = gen.clan_name_suffixes[0]
        assert gen.component_weight(hammer, 'shield-dwarf') == 3

    def test_unweighted_component(self, gen):
        hild = gen.first_name_prefixes[2]
        assert gen.component_weight(hild, 'gold-dwarf') == 1


class TestOptions:

    def test_unknown_name_type(self, gen):
        with pytest.raises(ValueError):
            gen.generate(name_type='epithet')

    def test_subrace_recorded(self, gen):
        result = gen.generate(subrace='duergar')
        assert result.subrace == 'duergar'
