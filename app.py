import functools
import logging
import os

import streamlit as st
import streamlit.components.v1 as components

import mood
import storage
import styles
import tmdb_client
from detail import DetailLoader
from paginator import Paginator


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="MoodFlix", page_icon="🎬", layout="wide")


def _setting(name, default=None):
    try:
        value = st.secrets.get(name)
    except FileNotFoundError:
        value = None
    if value is None:
        value = os.environ.get(name, default)
    return value


TMDB_API_KEY = _setting("TMDB_API_KEY")
TMDB_LANGUAGE = _setting("TMDB_LANGUAGE")
DB_PATH = _setting("MOODFLIX_DB_PATH")
REDUCED_MOTION_DEFAULT = str(_setting("MOODFLIX_REDUCED_MOTION", "false")).lower() == "true"

if not TMDB_API_KEY:
    st.error("TMDB API key is missing. Add TMDB_API_KEY to your Streamlit secrets or environment.")
    st.stop()

profile = storage.resolve_profile(st.query_params)

if "favorites" not in st.session_state:
    st.session_state.favorites = storage.FavoritesStore(profile, DB_PATH)
if "preferences" not in st.session_state:
    system = {
        "theme": st.context.theme.type,
        "reduced_motion": REDUCED_MOTION_DEFAULT,
    }
    st.session_state.preferences = storage.PreferencesStore(profile, system, DB_PATH)
if "paginator" not in st.session_state:
    fetch_page = functools.partial(tmdb_client.discover, TMDB_API_KEY, language=TMDB_LANGUAGE)
    st.session_state.paginator = Paginator(fetch_page)
if "detail" not in st.session_state:
    st.session_state.detail = DetailLoader()
st.session_state.setdefault("mood_error", None)

favorites = st.session_state.favorites
preferences = st.session_state.preferences
paginator = st.session_state.paginator
detail = st.session_state.detail


def start_session(mood_label):
    detail.close()
    paginator.reset(mood_label)
    paginator.advance()


def analyze_mood():
    try:
        text = mood.require_mood_text(st.session_state.mood_text)
    except ValueError as exc:
        st.session_state.mood_error = str(exc)
        return
    st.session_state.mood_error = None
    label = mood.classify(text)
    logger.info("Mood text classified as %s", label)
    start_session(label)


def surprise_me():
    st.session_state.mood_error = None
    start_session(mood.random_mood())


def back_to_moods():
    detail.close()
    paginator.clear()


def toggle_theme():
    preferences.set("theme", "light" if preferences.dark else "dark")


def toggle_reduced_motion():
    preferences.set("reduced_motion", st.session_state.reduced_motion_toggle)


def render_styles():
    css = styles.build_css(preferences.get("theme"), preferences.reduced_motion)
    st.markdown(css, unsafe_allow_html=True)


def render_card(movie, key_prefix):
    with st.container(border=True):
        render_card_body(movie, key_prefix)


def render_card_body(movie, key_prefix):
    poster_url = tmdb_client.get_poster_url(movie.get("poster_path"))
    if poster_url:
        st.image(poster_url, use_container_width=True)
    else:
        st.caption("No poster")
    st.caption(movie["title"])
    st.caption(f"⭐ {movie.get('vote_average', 0):.1f}")
    cols = st.columns(2)
    liked = favorites.contains(movie["id"])
    if cols[0].button("❤️" if liked else "🤍", key=f"{key_prefix}-like-{movie['id']}"):
        favorites.toggle(movie)
        st.rerun()
    if cols[1].button("Details", key=f"{key_prefix}-open-{movie['id']}"):
        detail.select(movie)
        st.rerun()


def render_grid(movies, key_prefix, columns=4):
    for start in range(0, len(movies), columns):
        cols = st.columns(columns)
        for col, movie in zip(cols, movies[start : start + columns]):
            with col:
                render_card(movie, key_prefix)


def render_detail():
    movie = detail.movie
    detail.load(TMDB_API_KEY, TMDB_LANGUAGE)
    with st.container(border=True):
        head = st.columns([6, 1])
        head[0].subheader(movie["title"])
        if head[1].button("Close", key="detail-close"):
            detail.close()
            st.rerun()
        embed_url = tmdb_client.get_trailer_embed_url(detail.trailer_key)
        if embed_url:
            components.iframe(embed_url, height=315)
        st.write(f"⭐ {movie.get('vote_average', 0):.1f} · {tmdb_client.release_year(movie)}")
        st.write(movie.get("overview", ""))
        if detail.similar:
            st.markdown("**Similar movies**")
            cols = st.columns(len(detail.similar))
            for col, similar in zip(cols, detail.similar):
                with col:
                    poster_url = tmdb_client.get_poster_url(similar.get("poster_path"))
                    if poster_url:
                        st.image(poster_url, use_container_width=True)
                    if st.button(similar["title"], key=f"similar-{similar['id']}"):
                        detail.select(similar)
                        st.rerun()


def render_mood_form():
    st.header("What’s your mood today?")
    st.text_input("Describe how you feel", key="mood_text")
    if st.session_state.mood_error:
        st.warning(st.session_state.mood_error)
    chips = st.columns(len(mood.MOODS))
    for col, label in zip(chips, mood.MOODS):
        col.button(label, key=f"chip-{label}", on_click=start_session, args=(label,))
    actions = st.columns([1, 1, 2])
    actions[0].button("Analyze mood", type="primary", on_click=analyze_mood)
    actions[1].button("Surprise me", on_click=surprise_me)
    actions[2].toggle(
        "Reduce motion",
        value=preferences.reduced_motion,
        key="reduced_motion_toggle",
        on_change=toggle_reduced_motion,
    )


def render_results():
    state = paginator.state
    st.button("← Back to moods", on_click=back_to_moods)
    st.subheader(f"Mood: {state.mood}")
    render_grid(state.titles, "discover")
    if state.failed:
        st.error("Could not reach TMDB. Please try again.")
    if state.exhausted:
        st.caption("No more movies for this mood.")
    elif paginator.can_load_more:
        # Reaching the end of the grid is the cue to fetch the next page.
        if st.button("Load more", key=f"more-{state.generation}-{state.page}"):
            paginator.advance()
            st.rerun()


render_styles()

title_cols = st.columns([8, 1])
title_cols[0].title("MoodFlix")
title_cols[1].button("☀️" if preferences.dark else "🌙", on_click=toggle_theme)

if detail.is_open:
    render_detail()

discover_tab, liked_tab = st.tabs(["Discover", f"Liked ({len(favorites)})"])

with discover_tab:
    if paginator.state.mood is None:
        render_mood_form()
    else:
        render_results()

with liked_tab:
    if len(favorites):
        render_grid(favorites.items(), "liked")
    else:
        st.info("No liked movies yet.")
