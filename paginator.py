import logging
import random
from collections import namedtuple

import mood


logger = logging.getLogger(__name__)

FIRST_PAGE_RANGE = 5

FetchTicket = namedtuple("FetchTicket", ["generation", "page", "upstream_page"])


def pick_start_page():
    return random.randint(1, FIRST_PAGE_RANGE)


class PaginationState:
    def __init__(self):
        self.mood = None
        self.page = 1
        self.start_page = 1
        self.titles = []
        self.exhausted = False
        self.loading = False
        self.failed = False
        self.generation = 0

    @property
    def title_ids(self):
        return {movie["id"] for movie in self.titles}


class Paginator:
    """Accumulates discover pages for the active mood session.

    A session starts on ``reset`` at a random upstream page so repeated
    searches for one mood show different titles; later pages follow on
    sequentially from that start. Responses carry the ticket handed out by
    ``begin`` and are dropped when the session changed while they were in
    flight.
    """

    def __init__(self, fetch_page, start_page_picker=pick_start_page):
        self.fetch_page = fetch_page
        self.start_page_picker = start_page_picker
        self.state = PaginationState()

    @property
    def can_load_more(self):
        state = self.state
        return state.mood is not None and not state.loading and not state.exhausted

    def reset(self, mood_label):
        mood.to_query(mood_label)  # KeyError for unknown labels
        generation = self.state.generation + 1
        self.state = PaginationState()
        self.state.mood = mood_label
        self.state.generation = generation
        self.state.start_page = self.start_page_picker()
        return self.state

    def clear(self):
        generation = self.state.generation + 1
        self.state = PaginationState()
        self.state.generation = generation
        return self.state

    def begin(self):
        if not self.can_load_more:
            return None
        state = self.state
        state.loading = True
        state.failed = False
        return FetchTicket(
            generation=state.generation,
            page=state.page,
            upstream_page=state.start_page + state.page - 1,
        )

    def complete(self, ticket, titles):
        state = self.state
        if not self._is_current(ticket):
            logger.debug("Dropping stale page %s for generation %s", ticket.page, ticket.generation)
            return state

        seen = state.title_ids
        fresh = []
        for movie in titles:
            if movie["id"] in seen:
                continue
            seen.add(movie["id"])
            fresh.append(movie)

        state.loading = False
        if not fresh:
            state.exhausted = True
            return state
        state.titles.extend(fresh)
        state.page += 1
        return state

    def fail(self, ticket):
        if self._is_current(ticket):
            self.state.loading = False
            self.state.failed = True
        return self.state

    def advance(self):
        ticket = self.begin()
        if ticket is None:
            return self.state

        query = mood.to_query(self.state.mood)
        try:
            result = self.fetch_page(query, ticket.upstream_page)
            titles = list(result.titles)
        except Exception:
            # clear loading whatever the fetch raised
            logger.warning(
                "Fetching page %s for %s failed", ticket.upstream_page, self.state.mood, exc_info=True
            )
            return self.fail(ticket)
        return self.complete(ticket, titles)

    def _is_current(self, ticket):
        return ticket.generation == self.state.generation and ticket.page == self.state.page
