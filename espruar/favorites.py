#!/usr/bin/env python3
"""
Favorites Store
===============
Keeps accepted names across sessions.

Each favorite is an independent JSON snapshot of a GeneratedName, keyed by
(name, generator type). Later changes to the live result (e.g. a vowel
modifier) do not reach the stored copy.

Storage: SQLite database (~/.espruar/favorites.db by default)
"""

import json
import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .settings import get_setting, resolve_path

logger = logging.getLogger(__name__)


@dataclass
class Favorite:
    """A stored favorite"""
    id: int
    name: str
    generator_type: str
    meaning: str
    pronunciation: str
    syllables: int
    record: Dict[str, Any]
    created_at: str

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'generator_type': self.generator_type,
            'meaning': self.meaning,
            'pronunciation': self.pronunciation,
            'syllables': self.syllables,
            'record': self.record,
            'created_at': self.created_at,
        }


class FavoritesDB:
    """
    SQLite favorites store.

    Usage:
        db = FavoritesDB()
        ok, message = db.add(result)
        for fav in db.list('elven'):
            print(fav.name)
    """

    def __init__(self, db_path: Union[str, Path] = None, max_favorites: int = None):
        if db_path is None:
            db_path = resolve_path(get_setting('favorites.db_path', '~/.espruar/favorites.db'))
        if max_favorites is None:
            max_favorites = int(get_setting('favorites.max_favorites', 100))

        self.db_path = Path(db_path)
        self.max_favorites = max_favorites
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS favorites (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    generator_type TEXT NOT NULL,
                    meaning TEXT,
                    pronunciation TEXT,
                    syllables INTEGER,
                    record TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    UNIQUE (name, generator_type)
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_favorites_type
                ON favorites(generator_type)
            """)
            conn.commit()

    def _now(self) -> str:
        return datetime.now().isoformat()

    @staticmethod
    def _snapshot(result: Any) -> Dict[str, Any]:
        if hasattr(result, 'to_dict'):
            data = result.to_dict()
        else:
            data = dict(result)
        # round-trip through JSON so nothing in the stored copy is shared
        return json.loads(json.dumps(data, ensure_ascii=False))

    def _row_to_favorite(self, row) -> Favorite:
        return Favorite(
            id=row['id'],
            name=row['name'],
            generator_type=row['generator_type'],
            meaning=row['meaning'] or '',
            pronunciation=row['pronunciation'] or '',
            syllables=row['syllables'] or 0,
            record=json.loads(row['record']),
            created_at=row['created_at'],
        )

    # =========================================================================
    # Core operations
    # =========================================================================

    def add(self, result: Any, generator_type: str = None) -> Tuple[bool, str]:
        """
        Store a snapshot of a generated name.

        Returns:
            (success, message) -- duplicates and a full store are reported,
            not raised
        """
        if result is None:
            return False, "No name data provided"

        record = self._snapshot(result)
        name = record.get('name')
        if not name:
            return False, "No name data provided"
        generator_type = generator_type or record.get('generator_type') or 'elven'
        record['generator_type'] = generator_type

        if self.exists(name, generator_type):
            return False, "This name is already in your favorites!"

        if self.count() >= self.max_favorites:
            return False, (
                f"Maximum {self.max_favorites} favorites reached. "
                f"Please remove some before adding more."
            )

        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("""
                    INSERT INTO favorites (
                        name, generator_type, meaning, pronunciation,
                        syllables, record, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """, (
                    name, generator_type,
                    record.get('meaning'), record.get('pronunciation'),
                    record.get('syllables'),
                    json.dumps(record, ensure_ascii=False),
                    self._now(),
                ))
                conn.commit()
        except sqlite3.IntegrityError:
            return False, "This name is already in your favorites!"
        except sqlite3.Error as e:
            logger.warning("Could not save favorite %r: %s", name, e)
            return False, "Could not save favorite. Storage may be full or disabled."

        return True, "Name saved to favorites!"

    def exists(self, name: str, generator_type: str) -> bool:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                "SELECT 1 FROM favorites WHERE name = ? AND generator_type = ?",
                (name, generator_type)
            )
            return cursor.fetchone() is not None

    def list(self, generator_type: str = None) -> List[Favorite]:
        """All favorites, oldest first, optionally for one generator type."""
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            if generator_type:
                cursor = conn.execute(
                    "SELECT * FROM favorites WHERE generator_type = ? ORDER BY id",
                    (generator_type,)
                )
            else:
                cursor = conn.execute("SELECT * FROM favorites ORDER BY id")
            return [self._row_to_favorite(row) for row in cursor.fetchall()]

    def get(self, name: str, generator_type: str) -> Optional[Favorite]:
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(
                "SELECT * FROM favorites WHERE name = ? AND generator_type = ?",
                (name, generator_type)
            )
            row = cursor.fetchone()
            return self._row_to_favorite(row) if row else None

    def remove(self, name: str, generator_type: str) -> bool:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                "DELETE FROM favorites WHERE name = ? AND generator_type = ?",
                (name, generator_type)
            )
            conn.commit()
            return cursor.rowcount > 0

    def clear(self) -> int:
        """Delete every favorite; returns how many were removed."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM favorites")
            conn.commit()
            return cursor.rowcount

    def count(self, generator_type: str = None) -> int:
        with sqlite3.connect(self.db_path) as conn:
            if generator_type:
                cursor = conn.execute(
                    "SELECT COUNT(*) FROM favorites WHERE generator_type = ?",
                    (generator_type,)
                )
            else:
                cursor = conn.execute("SELECT COUNT(*) FROM favorites")
            return cursor.fetchone()[0]

    # =========================================================================
    # Export
    # =========================================================================

    def export(self, generator_type: str = None) -> List[dict]:
        return [fav.to_dict() for fav in self.list(generator_type)]

    def export_json(self, filepath: str = None, generator_type: str = None) -> str:
        """Export favorites to JSON (and to a file when a path is given)."""
        json_str = json.dumps(self.export(generator_type), indent=2, ensure_ascii=False)
        if filepath:
            Path(filepath).write_text(json_str, encoding='utf-8')
        return json_str


# Singleton
_default_db = None


def get_favorites_db() -> FavoritesDB:
    """Get default favorites store instance"""
    global _default_db
    if _default_db is None:
        from .config import get_config
        config = get_config()
        _default_db = FavoritesDB(config.favorites_db, max_favorites=config.max_favorites)
    return _default_db
