import random
import re
from collections import namedtuple


MOODS = ("happy", "sad", "excited", "relaxed")
DEFAULT_MOOD = MOODS[0]
KEYWORD_WEIGHT = 3

MOOD_PATTERNS = {
    "happy": re.compile(r"happy|joy|great|good|awesome|fun|smile"),
    "sad": re.compile(r"sad|down|lonely|depressed|cry|heartbroken|loss"),
    "excited": re.compile(r"action|thrill|hyped|energetic|adrenaline|intense"),
    "relaxed": re.compile(r"calm|relaxed|chill|peaceful|slow|quiet|tired"),
}


class MoodQuery(namedtuple("MoodQuery", ["genre_ids", "sort_by"])):
    __slots__ = ()

    @property
    def with_genres(self):
        # TMDB treats "|" as OR between genres.
        return "|".join(str(genre_id) for genre_id in self.genre_ids)

    def to_params(self):
        return {"with_genres": self.with_genres, "sort_by": self.sort_by}


MOOD_QUERIES = {
    "happy": MoodQuery((35,), "popularity.desc"),
    "sad": MoodQuery((18,), "vote_average.desc"),
    "excited": MoodQuery((28, 12), "popularity.desc"),
    "relaxed": MoodQuery((10749, 18), "vote_average.desc"),
}


def require_mood_text(text):
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValueError("Please describe your mood first.")
    return cleaned


def classify(text):
    """Return the mood label whose keywords appear in ``text``.

    Every label that matches scores the same fixed weight, so ties (and text
    without any keyword) resolve to the first label in ``MOODS``.
    """
    scores = _score(text)
    best = DEFAULT_MOOD
    for mood in MOODS:
        if scores[mood] > scores[best]:
            best = mood
    return best


def to_query(mood):
    return MOOD_QUERIES[mood]


def random_mood(rng=random):
    return rng.choice(MOODS)


def _score(text):
    lowered = (text or "").lower()
    scores = dict.fromkeys(MOODS, 0)
    for mood in MOODS:
        if MOOD_PATTERNS[mood].search(lowered):
            scores[mood] += KEYWORD_WEIGHT
    return scores
