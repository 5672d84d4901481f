"""
Tests for Phonetic Utilities
============================
Syllable counting, connector decisions and text helpers in
espruar/generators/phonetics.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from espruar.generators import phonetics


class TestCountSyllables:
    """Vowel-group syllable heuristic."""

    @pytest.mark.parametrize("word,expected", [
        ("Mair", 1),
        ("Maireel", 2),
        ("Galadriel", 3),
        ("Tel", 1),
        ("Amlaruil", 3),
        ("Aerith", 2),
    ])
    def test_known_words(self, word, expected):
        assert phonetics.count_syllables(word) == expected

    def test_empty_is_zero(self):
        assert phonetics.count_syllables("") == 0
        assert phonetics.count_syllables(None) == 0

    def test_silent_e(self):
        """A trailing 'e' drops a syllable only when more than one remains."""
        assert phonetics.count_syllables("Stone") == 1
        assert phonetics.count_syllables("Elvere") == 2
        assert phonetics.count_syllables("e") == 1

    def test_no_vowels_still_one(self):
        assert phonetics.count_syllables("Grr") == 1
        assert phonetics.count_syllables("xyz") == 1

    def test_case_insensitive(self):
        assert phonetics.count_syllables("MAIREEL") == phonetics.count_syllables("maireel")

    def test_deterministic(self):
        words = ["Ilphelkiir", "Drizzt", "Thalanil", "Quarion"]
        first = [phonetics.count_syllables(w) for w in words]
        second = [phonetics.count_syllables(w) for w in words]
        assert first == second


class TestNeedsConnector:
    """Consonant junction detection."""

    def test_consonant_consonant(self):
        assert phonetics.needs_connector("Mair", "tel") is True

    def test_prefix_ends_in_vowel(self):
        assert phonetics.needs_connector("Mai", "tel") is False

    def test_suffix_starts_with_vowel(self):
        assert phonetics.needs_connector("Tel", "ael") is False

    def test_liquid_pair_blends(self):
        assert phonetics.needs_connector("Mair", "lir") is False
        assert phonetics.needs_connector("Sil", "mar") is False

    def test_single_liquid_is_not_enough(self):
        assert phonetics.needs_connector("Mair", "dor") is True
        assert phonetics.needs_connector("Drak", "lir") is True

    def test_empty_input(self):
        assert phonetics.needs_connector("", "tel") is False
        assert phonetics.needs_connector("Mair", None) is False


class TestHarshCluster:
    """Harsh cluster detection at the seam."""

    def test_cluster_across_seam(self):
        assert phonetics.has_harsh_cluster("Dag", "ril") is True

    def test_cluster_inside_suffix_start(self):
        assert phonetics.has_harsh_cluster("Ae", "thron") is True

    def test_cluster_inside_prefix_end(self):
        assert phonetics.has_harsh_cluster("Istr", "el") is True

    def test_soft_join(self):
        assert phonetics.has_harsh_cluster("Mair", "lin") is False

    def test_empty(self):
        assert phonetics.has_harsh_cluster("", "") is False


class TestVowelHelpers:
    """Character class helpers."""

    def test_is_vowel(self):
        assert phonetics.is_vowel("a")
        assert phonetics.is_vowel("E")
        assert not phonetics.is_vowel("y")
        assert not phonetics.is_vowel("")
        assert not phonetics.is_vowel("ae")

    def test_is_liquid_consonant(self):
        for c in "lrnmwL":
            assert phonetics.is_liquid_consonant(c)
        assert not phonetics.is_liquid_consonant("t")

    def test_edges(self):
        assert phonetics.ends_with_vowel("Thala")
        assert not phonetics.ends_with_vowel("Thal")
        assert phonetics.starts_with_vowel("Ael")
        assert not phonetics.starts_with_vowel("")
        assert phonetics.ends_with_hard_consonant("Drak")
        assert not phonetics.ends_with_hard_consonant("Mair")

    def test_shares_vowel_sound(self):
        assert phonetics.shares_vowel_sound("-a-", "thala")
        assert not phonetics.shares_vowel_sound("-i-", "dor")
        assert not phonetics.shares_vowel_sound("", "dor")


class TestSuggestFinalVowel:

    def test_short_of_target(self):
        assert phonetics.should_suggest_final_vowel("Mairtel", 2, 4) is True

    def test_hard_ending(self):
        assert phonetics.should_suggest_final_vowel("Aerdrak", 4, 4) is True

    def test_neither(self):
        assert phonetics.should_suggest_final_vowel("Thalanil", 3, 3) is False


class TestTextHelpers:

    def test_clean_component_text(self):
        assert phonetics.clean_component_text("-bruen") == "bruen"
        assert phonetics.clean_component_text("-a-") == "a"
        assert phonetics.clean_component_text(None) == ""

    def test_capitalize_first_only(self):
        assert phonetics.capitalize("mairTel") == "MairTel"
        assert phonetics.capitalize("") == ""

    def test_format_meaning(self):
        assert phonetics.format_meaning("light / star") == "Light, Star"
        assert phonetics.format_meaning("child of the moon") == "Child Of The Moon"
        assert phonetics.format_meaning(None) == ""
