"""Tests for history.append."""

import unittest

from recyclip.history import append


class TestAppend(unittest.TestCase):
    """Selections entering the history"""

    def test_first_selection(self):
        self.assertEqual(append("foo", (), 25), ("foo",))

    def test_selection_is_stripped(self):
        self.assertEqual(append("  foo \n", (), 25), ("foo",))

    def test_empty_and_blank_are_ignored(self):
        history = ("a", "b")
        self.assertIs(append("", history, 25), history)
        self.assertIs(append("   ", history, 25), history)
        self.assertIs(append("\n\t", history, 25), history)

    def test_repeat_of_head_is_ignored(self):
        history = ("foo", "bar")
        self.assertIs(append("foo", history, 25), history)
        self.assertIs(append(" foo ", history, 25), history)

    def test_older_entry_moves_to_front(self):
        self.assertEqual(append("a", ("c", "b", "a"), 25), ("a", "c", "b"))

    def test_dedup_happens_before_truncation(self):
        self.assertEqual(append("a", ("c", "b", "a"), 2), ("a", "c"))

    def test_truncates_to_max_len(self):
        history = ("c", "b", "a")
        self.assertEqual(append("d", history, 3), ("d", "c", "b"))
        self.assertEqual(append("d", history, 1), ("d",))

    def test_never_duplicates_nor_exceeds_max_len(self):
        """Feed a long run of repeating selections through a small history"""
        words = ["alpha", "beta", " gamma", "alpha", "delta ", "beta", "", "epsilon", "gamma"] * 5
        for max_len in (1, 2, 3, 5):
            history = ()
            for word in words:
                history = append(word, history, max_len)
                self.assertLessEqual(len(history), max_len)
                self.assertEqual(len(set(history)), len(history))
                self.assertNotIn("", history)

    def test_input_history_is_not_mutated(self):
        history = ("b", "a")
        append("a", history, 25)
        self.assertEqual(history, ("b", "a"))

    def test_max_len_must_be_positive(self):
        with self.assertRaises(ValueError):
            append("foo", (), 0)


if __name__ == "__main__":
    unittest.main()
