import logging
from collections import namedtuple

import requests


logger = logging.getLogger(__name__)

BASE_URL = "https://api.themoviedb.org/3"
IMAGE_BASE = "https://image.tmdb.org/t/p/w500"
EMBED_BASE = "https://www.youtube-nocookie.com/embed"
REQUEST_TIMEOUT = 10
SIMILAR_LIMIT = 6

ResultPage = namedtuple("ResultPage", ["page", "titles", "query"])


class TMDBError(RuntimeError):
    pass


def _get(url, params):
    try:
        response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as exc:
        raise TMDBError(f"TMDB request failed: {exc}") from exc
    if response.status_code != 200:
        raise TMDBError(f"TMDB request failed: {response.status_code}")
    try:
        data = response.json()
    except ValueError as exc:
        raise TMDBError("TMDB returned an invalid JSON body") from exc
    if not isinstance(data, dict):
        raise TMDBError("TMDB returned an unexpected body")
    return data


def _params(api_key, language=None, **extra):
    params = {"api_key": api_key}
    if language:
        params["language"] = language
    params.update(extra)
    return params


def discover(api_key, query, page, language=None):
    url = f"{BASE_URL}/discover/movie"
    data = _get(url, _params(api_key, language, page=page, **query.to_params()))
    titles = _normalize_results(data.get("results") or [])
    return ResultPage(page=page, titles=titles, query=query)


def get_trailer_key(api_key, movie_id, language=None):
    url = f"{BASE_URL}/movie/{movie_id}/videos"
    try:
        data = _get(url, _params(api_key, language))
    except TMDBError:
        logger.warning("Trailer lookup failed for movie %s", movie_id, exc_info=True)
        return None

    results = data.get("results") or []
    if not isinstance(results, list):
        return None
    for video in results:
        if isinstance(video, dict) and video.get("site") == "YouTube" and video.get("key"):
            return video["key"]
    return None


def get_similar_movies(api_key, movie_id, language=None, limit=SIMILAR_LIMIT):
    url = f"{BASE_URL}/movie/{movie_id}/similar"
    try:
        data = _get(url, _params(api_key, language))
    except TMDBError:
        logger.warning("Similar lookup failed for movie %s", movie_id, exc_info=True)
        return []
    try:
        return _normalize_results(data.get("results") or [])[:limit]
    except TMDBError:
        logger.warning("Similar lookup returned bad results for movie %s", movie_id, exc_info=True)
        return []


def _normalize_results(results):
    if not isinstance(results, list):
        raise TMDBError("TMDB results are not a list")
    titles = []
    for movie in results:
        try:
            titles.append(normalize_movie(movie))
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed TMDB result: %r", movie)
    return titles


def normalize_movie(data):
    return {
        "id": int(data["id"]),
        "title": data.get("title") or data.get("name") or "",
        "poster_path": data.get("poster_path"),
        "vote_average": float(data.get("vote_average") or 0),
        "release_date": data.get("release_date") or "",
        "overview": data.get("overview") or "",
    }


def release_year(movie):
    return (movie.get("release_date") or "")[:4]


def get_poster_url(poster_path):
    if not poster_path:
        return None
    return f"{IMAGE_BASE}{poster_path}"


def get_trailer_embed_url(trailer_key):
    if not trailer_key:
        return None
    return f"{EMBED_BASE}/{trailer_key}"
