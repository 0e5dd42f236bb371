import random
import unittest

import mood


class ClassifyTests(unittest.TestCase):
    def test_keywords_pick_their_mood(self):
        samples = {
            "happy": ["what a joy", "so much FUN", "all smiles today"],
            "sad": ["feeling lonely", "heartbroken again", "I just want to cry"],
            "excited": ["need some ACTION", "totally hyped", "pure adrenaline"],
            "relaxed": ["calm evening", "just chill", "so tired"],
        }
        for expected, texts in samples.items():
            for text in texts:
                with self.subTest(text=text):
                    self.assertEqual(mood.classify(text), expected)

    def test_keyword_free_text_returns_default(self):
        self.assertEqual(mood.classify("xyz"), mood.DEFAULT_MOOD)
        self.assertEqual(mood.classify(""), "happy")
        self.assertEqual(mood.classify("xyz"), mood.classify("xyz"))

    def test_ties_go_to_first_declared_mood(self):
        self.assertEqual(mood.classify("sad but calm"), "sad")
        self.assertEqual(mood.classify("calm and happy"), "happy")
        self.assertEqual(mood.classify("intense and tired"), "excited")

    def test_repeated_keywords_do_not_stack(self):
        self.assertEqual(mood.classify("happy happy happy but sad"), "happy")
        self.assertEqual(mood.classify("lonely, sad and crying but calm"), "sad")

    def test_happy_sentence_maps_to_comedy(self):
        label = mood.classify("I feel great and happy today")
        query = mood.to_query(label)
        self.assertEqual(label, "happy")
        self.assertEqual(query.with_genres, "35")
        self.assertEqual(query.sort_by, "popularity.desc")


class QueryTests(unittest.TestCase):
    def test_every_mood_has_a_query(self):
        self.assertEqual(set(mood.MOOD_QUERIES), set(mood.MOODS))

    def test_multi_genre_queries_use_or(self):
        self.assertEqual(
            mood.to_query("excited").to_params(),
            {"with_genres": "28|12", "sort_by": "popularity.desc"},
        )
        self.assertEqual(mood.to_query("relaxed").with_genres, "10749|18")

    def test_unknown_mood_raises(self):
        with self.assertRaises(KeyError):
            mood.to_query("angry")

    def test_random_mood_uses_given_rng(self):
        rng = random.Random(3)
        picks = {mood.random_mood(rng) for _ in range(50)}
        self.assertTrue(picks <= set(mood.MOODS))


class ValidationTests(unittest.TestCase):
    def test_blank_text_is_rejected(self):
        for text in ["", "   ", None]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    mood.require_mood_text(text)

    def test_text_is_stripped(self):
        self.assertEqual(mood.require_mood_text("  chill  "), "chill")


if __name__ == "__main__":
    unittest.main()
