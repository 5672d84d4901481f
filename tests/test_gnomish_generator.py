"""
Tests for Gnomish Generator
===========================
Personal names, clan names, nicknames and provenance merging.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from espruar.generators import GnomishGenerator, LexiconError, merge_provenance


FR = "Gnome name from Forgotten Realms"
PHB = "Gnome name from Player's Handbook"

COMPLETE_NAMES = [
    {'root': 'alston', 'prefix_text': 'Alston', 'suffix_text': 'alston', 'meaning': FR,
     'can_be_prefix': True, 'can_be_suffix': True},
    {'root': 'boddynock', 'prefix_text': 'Boddynock', 'suffix_text': 'boddynock', 'meaning': PHB,
     'can_be_prefix': True, 'can_be_suffix': True},
]

SPLIT_NAMES = [
    {'root': 'bim', 'prefix_text': 'Bim', 'meaning': FR, 'can_be_prefix': True, 'can_be_suffix': False},
    {'root': 'pnottin', 'suffix_text': 'pnottin', 'meaning': FR, 'can_be_prefix': False, 'can_be_suffix': True},
]

CLANS = [
    {'root': 'beren', 'prefix_text': 'Beren', 'suffix_text': 'beren', 'meaning': 'Clan Beren',
     'phonetic': 'BEH-ren', 'can_be_prefix': True, 'can_be_suffix': True},
]

NICKNAMES = [
    {'root': 'badger', 'text': 'Badger', 'meaning': 'stubborn digger', 'phonetic': 'BADJ-er'},
]


class TestMergeProvenance:
    """Collapsing repeated "<Race> name from <Source>" notes."""

    def test_duplicate_dropped(self):
        assert merge_provenance([FR, FR]) == FR

    def test_two_sources(self):
        assert merge_provenance([FR, PHB]) == "Gnome name from Forgotten Realms and Player's Handbook"

    def test_three_sources(self):
        fragments = [FR, PHB, "Gnome name from Dragonlance"]
        assert merge_provenance(fragments) == (
            "Gnome name from Forgotten Realms, Player's Handbook, and Dragonlance"
        )

    def test_plain_meanings_joined(self):
        assert merge_provenance(["tinkerer", "bright spark"]) == "tinkerer, bright spark"

    def test_empty_fragments_ignored(self):
        assert merge_provenance(["", None, FR]) == FR

    def test_halfling_race_kept(self):
        assert merge_provenance(["Halfling name from Eberron"]) == "Halfling name from Eberron"


class TestPersonalNames:

    def test_complete_names_not_stacked(self):
        gen = GnomishGenerator(COMPLETE_NAMES, CLANS, seed=3)
        for _ in range(20):
            result = gen.generate(name_type='personal')
            assert result.name in ("Alston", "Boddynock")
            assert result.suffix is None
            assert result.meaning in (FR, PHB)

    def test_prefix_plus_suffix(self):
        gen = GnomishGenerator(SPLIT_NAMES, CLANS, seed=3)
        result = gen.generate(name_type='personal')
        assert result.name == "Bimpnottin"
        assert result.meaning == FR

    def test_no_suffix_forms_gives_prefix_alone(self):
        gen = GnomishGenerator(SPLIT_NAMES[:1], CLANS, seed=3)
        result = gen.generate(name_type='personal')
        assert result.name == "Bim"

    def test_subrace_filter_falls_back(self):
        forest_only = [dict(SPLIT_NAMES[0], subrace=['forest'])]
        gen = GnomishGenerator(forest_only, CLANS, seed=3)
        result = gen.generate(name_type='personal', subrace='deep')
        assert result.name == "Bim"

    def test_gender_filter_falls_back(self):
        masculine_only = [dict(SPLIT_NAMES[0], gender='masculine')]
        gen = GnomishGenerator(masculine_only, CLANS, seed=3)
        result = gen.generate(name_type='personal', gender='feminine')
        assert result.name == "Bim"


class TestClanNames:

    def test_clan_used_whole(self):
        gen = GnomishGenerator(SPLIT_NAMES, CLANS, seed=3)
        result = gen.generate(name_type='clan')
        assert result.name == "Beren"
        assert result.meaning == "Clan Beren"
        assert result.pronunciation == "BEH-ren"

    def test_meaning_and_phonetic_fallbacks(self):
        clans = [{'root': 'gear', 'text': 'gear', 'can_be_prefix': True, 'can_be_suffix': True}]
        gen = GnomishGenerator(SPLIT_NAMES, clans, seed=3)
        result = gen.generate(name_type='clan')
        assert result.name == "Gear"
        assert result.meaning == "Gear"
        assert result.pronunciation == "GEAR"


class TestNicknames:

    def test_full_with_nickname(self):
        gen = GnomishGenerator(SPLIT_NAMES, CLANS, NICKNAMES, seed=3)
        result = gen.generate()
        assert result.name == 'Bimpnottin "Badger" Beren'
        assert result.meaning == f'{FR} + "stubborn digger" + Clan Beren'
        assert result.pronunciation == "BADJ-er · BEH-ren"

    def test_full_without_nickname(self):
        gen = GnomishGenerator(SPLIT_NAMES, CLANS, NICKNAMES, seed=3)
        result = gen.generate(include_nickname=False)
        assert result.name == "Bimpnottin Beren"
        assert result.breakdown['nickname'] is None

    def test_empty_nickname_pool(self):
        gen = GnomishGenerator(SPLIT_NAMES, CLANS, [], seed=3)
        assert gen.generate().name == "Bimpnottin Beren"
        with pytest.raises(LexiconError):
            gen.generate(name_type='nickname')

    def test_nickname_only(self):
        gen = GnomishGenerator(SPLIT_NAMES, CLANS, NICKNAMES, seed=3)
        result = gen.generate(name_type='nickname')
        assert result.name == '"Badger"'
        assert result.meaning == "stubborn digger"


class TestBundledLexicon:

    @pytest.fixture(scope="class")
    def gen(self):
        return GnomishGenerator.from_lexicon(seed=5)

    @pytest.mark.parametrize("name_type", ['personal', 'clan', 'nickname', 'full'])
    def test_all_name_types(self, gen, name_type):
        result = gen.generate(name_type=name_type)
        assert result.name
        assert result.name_type == name_type
        assert result.generator_type == 'gnomish'

    @pytest.mark.parametrize("subrace", ['rock', 'forest', 'deep'])
    def test_all_subraces(self, gen, subrace):
        result = gen.generate(subrace=subrace, gender='feminine')
        assert result.subrace == subrace

    def test_history_bounded(self, gen):
        for _ in range(20):
            gen.generate()
        assert len(gen.recently_used) <= 5
