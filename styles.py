PALETTES = {
    "light": {"background": "#F5F5F7", "card": "#FFFFFF", "text": "#1D1D1F"},
    "dark": {"background": "#000000", "card": "rgba(28,28,30,0.85)", "text": "#FFFFFF"},
}

# Streamlit's own test ids; the page has no wrapper elements of its own.
CARD = '[data-testid="stVerticalBlockBorderWrapper"]'
IMAGE = '[data-testid="stImage"]'
BUTTON = ".stButton button"

MOTION_CSS = f"""
@keyframes moodflix-fade {{ from {{ opacity: 0; }} to {{ opacity: 1; }} }}
{IMAGE} {{ animation: moodflix-fade .5s ease; }}
{CARD} {{ transition: transform .2s ease, box-shadow .2s ease; }}
{CARD}:hover {{ transform: translateY(-2px); box-shadow: 0 6px 18px rgba(0,0,0,0.18); }}
{BUTTON} {{ transition: transform .2s ease; }}
{BUTTON}:active {{ transform: scale(0.96); }}
"""

STILL_CSS = f"""
{IMAGE}, {CARD}, {BUTTON} {{ animation: none !important; transition: none !important; }}
{CARD}:hover, {BUTTON}:active {{ transform: none !important; }}
"""


def build_css(theme, reduced_motion):
    palette = PALETTES[theme]
    base = f"""
.stApp {{ background-color: {palette["background"]}; color: {palette["text"]}; }}
{CARD} {{ background: {palette["card"]}; border-radius: 20px; }}
"""
    motion = STILL_CSS if reduced_motion else MOTION_CSS
    return f"<style>{base}{motion}</style>"
