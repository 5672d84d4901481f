"""
Tests for Favorites Store
=========================
SQLite persistence of generated names in espruar/favorites.py.
"""

import json
import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from espruar.favorites import FavoritesDB
from espruar.generators import GeneratedName, OrcGenerator, apply_final_vowel


@pytest.fixture
def db(tmp_path):
    """Fresh store in a temp directory."""
    return FavoritesDB(tmp_path / 'nested' / 'favorites.db', max_favorites=3)


def make(name, species='elven', meaning='Light + Star'):
    return GeneratedName(name=name, meaning=meaning, pronunciation='MARE-tel',
                         syllables=2, generator_type=species)


class TestSchema:

    def test_creates_parent_directory(self, tmp_path):
        FavoritesDB(tmp_path / 'a' / 'b' / 'fav.db')
        assert (tmp_path / 'a' / 'b' / 'fav.db').exists()

    def test_reopen_keeps_data(self, tmp_path):
        path = tmp_path / 'fav.db'
        FavoritesDB(path).add(make("Mairtel"))
        assert FavoritesDB(path).count() == 1


class TestAdd:

    def test_add(self, db):
        ok, message = db.add(make("Mairtel"))
        assert ok
        assert message == "Name saved to favorites!"
        assert db.exists("Mairtel", 'elven')

    def test_none_rejected(self, db):
        assert db.add(None) == (False, "No name data provided")
        assert db.add({'meaning': 'no name'}) == (False, "No name data provided")

    def test_duplicate_rejected(self, db):
        db.add(make("Mairtel"))
        ok, message = db.add(make("Mairtel"))
        assert not ok
        assert message == "This name is already in your favorites!"

    def test_same_name_other_species(self, db):
        db.add(make("Tel"))
        ok, _ = db.add(make("Tel", species='orc'))
        assert ok
        assert db.count() == 2

    def test_capacity(self, db):
        for name in ("A", "B", "C"):
            assert db.add(make(name))[0]
        ok, message = db.add(make("D"))
        assert not ok
        assert message.startswith("Maximum 3 favorites reached")

    def test_dict_record(self, db):
        ok, _ = db.add({'name': 'Grom', 'meaning': 'thunder'}, generator_type='orc')
        assert ok
        assert db.get('Grom', 'orc').record['generator_type'] == 'orc'


class TestSnapshot:

    def test_later_mutation_not_stored(self, db):
        result = make("Mairtel")
        db.add(result)
        apply_final_vowel(result, "a")
        stored = db.get("Mairtel", 'elven')
        assert stored.record['name'] == "Mairtel"
        assert stored.record['final_vowel'] is None

    def test_breakdown_serialized(self, db):
        result = OrcGenerator([{'text': 'Grom', 'meaning': 'thunder'}],
                              epithets=[{'text': 'Skull-Taker'}], seed=1).generate()
        db.add(result)
        stored = db.get("Grom the Skull-Taker", 'orc')
        assert stored.record['breakdown']['personal']['text'] == 'Grom'
        assert stored.meaning == result.meaning


class TestQueries:

    def test_list_filters_by_species(self, db):
        db.add(make("Mairtel"))
        db.add(make("Grom", species='orc'))
        assert [f.name for f in db.list()] == ["Mairtel", "Grom"]
        assert [f.name for f in db.list('orc')] == ["Grom"]
        assert db.count('elven') == 1

    def test_remove(self, db):
        db.add(make("Mairtel"))
        assert db.remove("Mairtel", 'elven') is True
        assert db.remove("Mairtel", 'elven') is False
        assert db.get("Mairtel", 'elven') is None

    def test_clear(self, db):
        db.add(make("A"))
        db.add(make("B"))
        assert db.clear() == 2
        assert db.count() == 0

    def test_export_json(self, db, tmp_path):
        db.add(make("Mairtel"))
        out = tmp_path / 'export.json'
        json_str = db.export_json(str(out))
        data = json.loads(out.read_text(encoding='utf-8'))
        assert data == json.loads(json_str)
        assert data[0]['name'] == "Mairtel"
        assert data[0]['record']['meaning'] == "Light + Star"
