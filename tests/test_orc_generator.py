"""
Tests for Orc Generator
=======================
Personal names and epithets.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from espruar.generators import OrcGenerator, LexiconError, format_epithet


PERSONAL = [{'text': 'Grom', 'meaning': 'thunder'}]
EPITHETS = [{'text': 'Skull-Taker', 'meaning': 'claims skulls'}]


@pytest.fixture
def gen():
    return OrcGenerator(PERSONAL, epithets=EPITHETS, seed=1)


class TestFormatEpithet:

    def test_adds_article(self):
        assert format_epithet("Skull-Taker") == "the Skull-Taker"

    def test_keeps_existing_article(self):
        assert format_epithet("the Unbroken") == "the Unbroken"
        assert format_epithet("The Unbroken") == "The Unbroken"

    def test_empty(self):
        assert format_epithet("") == ""
        assert format_epithet(None) is None


class TestNameTypes:

    def test_full_name(self, gen):
        result = gen.generate(name_type='full')
        assert result.name == "Grom the Skull-Taker"
        assert result.meaning == "thunder + claims skulls"

    def test_full_with_epithet_alias(self, gen):
        assert gen.generate(name_type='full-with-epithet').name == "Grom the Skull-Taker"

    def test_full_no_epithet(self, gen):
        result = gen.generate(name_type='full-no-epithet')
        assert result.name == "Grom"
        assert 'epithet' not in result.breakdown

    def test_personal(self, gen):
        result = gen.generate(name_type='personal')
        assert result.name == "Grom"
        assert result.meaning == "thunder"
        assert result.pronunciation == "Grom"

    def test_epithet_only(self, gen):
        result = gen.generate(name_type='epithet')
        assert result.name == "the Skull-Taker"
        assert result.meaning == "claims skulls"

    def test_epithet_only_empty_pool(self):
        gen = OrcGenerator(PERSONAL, seed=1)
        with pytest.raises(LexiconError):
            gen.generate(name_type='epithet')

    def test_full_with_empty_epithet_pool(self):
        gen = OrcGenerator(PERSONAL, seed=1)
        assert gen.generate().name == "Grom"


class TestFallbacks:

    def test_root_only_entry(self):
        gen = OrcGenerator([{'root': 'thokk'}], seed=1)
        result = gen.generate(name_type='personal')
        assert result.name == "thokk"
        assert result.meaning == "thokk"

    def test_clan_names_accepted(self):
        gen = OrcGenerator(PERSONAL, clan_names=[{'text': 'Blackfang'}], epithets=EPITHETS, seed=1)
        assert len(gen.clan_names) == 1
        assert "Blackfang" not in gen.generate().name

    def test_gender_and_subrace_ignored(self, gen):
        result = gen.generate(gender='feminine', subrace='half-orc')
        assert result.name == "Grom the Skull-Taker"
        assert result.gender == 'feminine'


class TestBundledLexicon:

    def test_generates(self):
        gen = OrcGenerator.from_lexicon(seed=3)
        results = gen.generate_many(5)
        assert 1 <= len(results) <= 5
        for result in results:
            assert result.generator_type == 'orc'
            assert ' the ' in result.name or ' The ' in result.name
