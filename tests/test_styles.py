import unittest

import styles


class BuildCssTests(unittest.TestCase):
    def test_motion_targets_rendered_elements(self):
        css = styles.build_css("light", reduced_motion=False)
        self.assertIn("@keyframes moodflix-fade", css)
        self.assertIn('[data-testid="stImage"] { animation: moodflix-fade', css)
        self.assertIn(':hover { transform: translateY(-2px)', css)
        self.assertIn(".stButton button:active { transform: scale(0.96)", css)
        self.assertNotIn("movie-card", css)

    def test_reduced_motion_turns_effects_off(self):
        css = styles.build_css("light", reduced_motion=True)
        self.assertNotIn("@keyframes", css)
        self.assertNotIn("translateY", css)
        self.assertIn("animation: none !important; transition: none !important;", css)
        self.assertIn("transform: none !important;", css)

    def test_theme_sets_palette(self):
        dark = styles.build_css("dark", reduced_motion=False)
        light = styles.build_css("light", reduced_motion=False)
        self.assertIn("background-color: #000000", dark)
        self.assertIn("background-color: #F5F5F7", light)
        self.assertTrue(dark.startswith("<style>") and dark.endswith("</style>"))

    def test_unknown_theme_raises(self):
        with self.assertRaises(KeyError):
            styles.build_css("sepia", reduced_motion=False)


if __name__ == "__main__":
    unittest.main()
