import datetime
import json
import logging
import pathlib
import sqlite3
import uuid
from contextlib import contextmanager


logger = logging.getLogger(__name__)

DATA_PATH = pathlib.Path("data")
DB_PATH = DATA_PATH / "moodflix.db"

THEMES = ("light", "dark")
DEFAULT_PREFERENCES = {"theme": "light", "reduced_motion": False}


def init_db(db_path=None):
    path = _resolve_db_path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with _get_conn(path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS favorites (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                profile TEXT NOT NULL,
                movie_id INTEGER NOT NULL,
                payload_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                UNIQUE(profile, movie_id)
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS preferences (
                profile TEXT NOT NULL,
                key TEXT NOT NULL,
                value_json TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                PRIMARY KEY(profile, key)
            )
            """
        )


def resolve_profile(query_params):
    """Return the profile id carried in the URL, minting one for a new browser.

    The id is written back into ``query_params`` so the browser keeps it on
    reload and bookmarks.
    """
    profile = query_params.get("profile")
    if not profile:
        profile = uuid.uuid4().hex
        query_params["profile"] = profile
    return profile


class FavoritesStore:
    """Liked movies of one profile, loaded once and written on every toggle."""

    def __init__(self, profile, db_path=None):
        self.profile = profile
        self.db_path = _resolve_db_path(db_path)
        init_db(self.db_path)
        self._movies = {}
        for movie in _load_favorites(self.profile, self.db_path):
            self._movies[movie["id"]] = movie

    def __len__(self):
        return len(self._movies)

    def __contains__(self, movie_id):
        return self.contains(movie_id)

    def contains(self, movie_id):
        return movie_id in self._movies

    def items(self):
        return list(self._movies.values())

    def toggle(self, movie):
        movie_id = movie["id"]
        with _get_conn(self.db_path) as conn:
            if movie_id in self._movies:
                conn.execute(
                    "DELETE FROM favorites WHERE profile = ? AND movie_id = ?",
                    (self.profile, movie_id),
                )
                del self._movies[movie_id]
            else:
                conn.execute(
                    """
                    INSERT INTO favorites (profile, movie_id, payload_json, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (self.profile, movie_id, json.dumps(movie), _now()),
                )
                self._movies[movie_id] = dict(movie)
        return self.items()


class PreferencesStore:
    """Theme and motion settings, falling back to system signals when unset."""

    def __init__(self, profile, system=None, db_path=None):
        self.profile = profile
        self.db_path = _resolve_db_path(db_path)
        init_db(self.db_path)
        self._values = dict(DEFAULT_PREFERENCES)
        for key, value in (system or {}).items():
            if key in self._values and value is not None:
                self._values[key] = _validate_preference(key, value)
        self._values.update(_load_preferences(self.profile, self.db_path))

    def get(self, key):
        return self._values[key]

    def as_dict(self):
        return dict(self._values)

    def set(self, key, value):
        value = _validate_preference(key, value)
        with _get_conn(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO preferences (profile, key, value_json, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(profile, key)
                DO UPDATE SET value_json = excluded.value_json, updated_at = excluded.updated_at
                """,
                (self.profile, key, json.dumps(value), _now()),
            )
        self._values[key] = value
        return self.as_dict()

    @property
    def dark(self):
        return self._values["theme"] == "dark"

    @property
    def reduced_motion(self):
        return self._values["reduced_motion"]


def _load_favorites(profile, db_path):
    with _get_conn(db_path) as conn:
        rows = conn.execute(
            "SELECT movie_id, payload_json FROM favorites WHERE profile = ? ORDER BY id",
            (profile,),
        ).fetchall()
    movies = []
    for row in rows:
        try:
            movie = json.loads(row["payload_json"])
        except json.JSONDecodeError:
            logger.warning("Skipping unreadable favorite %s", row["movie_id"])
            continue
        movie["id"] = row["movie_id"]
        movies.append(movie)
    return movies


def _load_preferences(profile, db_path):
    with _get_conn(db_path) as conn:
        rows = conn.execute(
            "SELECT key, value_json FROM preferences WHERE profile = ?",
            (profile,),
        ).fetchall()
    values = {}
    for row in rows:
        try:
            values[row["key"]] = _validate_preference(row["key"], json.loads(row["value_json"]))
        except ValueError:
            logger.warning("Ignoring stored preference %s", row["key"])
    return values


def _validate_preference(key, value):
    if key == "theme":
        if value not in THEMES:
            raise ValueError(f"Unknown theme: {value!r}")
        return value
    if key == "reduced_motion":
        if not isinstance(value, bool):
            raise ValueError("reduced_motion must be a boolean")
        return value
    raise ValueError(f"Unknown preference: {key!r}")


def _resolve_db_path(db_path):
    return pathlib.Path(db_path) if db_path else DB_PATH


def _connect(path):
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def _get_conn(path):
    conn = _connect(path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def _now():
    return datetime.datetime.now(datetime.UTC).isoformat(timespec="seconds")
