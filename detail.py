import tmdb_client


class DetailLoader:
    """Trailer and similar titles for the movie open in the detail view.

    Each ``select`` bumps ``token``; results fetched for an older token are
    not applied, so a slow response never shows up under another movie.
    """

    def __init__(self, trailer_lookup=None, similar_lookup=None):
        self.trailer_lookup = trailer_lookup or tmdb_client.get_trailer_key
        self.similar_lookup = similar_lookup or tmdb_client.get_similar_movies
        self.movie = None
        self.trailer_key = None
        self.similar = []
        self.loaded = False
        self.token = 0

    @property
    def is_open(self):
        return self.movie is not None

    def select(self, movie):
        self.token += 1
        self.movie = movie
        self.trailer_key = None
        self.similar = []
        self.loaded = False
        return self.token

    def close(self):
        self.token += 1
        self.movie = None
        self.trailer_key = None
        self.similar = []
        self.loaded = False

    def apply(self, token, trailer_key, similar):
        if token != self.token or self.movie is None:
            return False
        self.trailer_key = trailer_key
        self.similar = list(similar)
        self.loaded = True
        return True

    def load(self, api_key, language=None):
        if self.movie is None or self.loaded:
            return False
        token = self.token
        movie_id = self.movie["id"]
        trailer_key = self.trailer_lookup(api_key, movie_id, language)
        similar = self.similar_lookup(api_key, movie_id, language)
        return self.apply(token, trailer_key, similar)
