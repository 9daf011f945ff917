from __future__ import annotations

import unittest

from poleregistry import canonical_equal, canonicalize, display_identifier, display_identifiers
from poleregistry.canonical import to_fullwidth_katakana


SAMPLES = [
    "２４７エ７１４",
    "247ｴ714",
    "247 エ 714",
    "ｎｔｔ 2R2R",
    "ＮＴＴ２Ｒ２Ｒ",
    "06え3336",
    "中央線20-A",
    "ﾊﾟﾝﾀﾞ 12",
    "ｶﾞ ﾞ ﾟ",
    "12a-099",
    "　東電\t１２３\n",
    "",
]


class CanonicalizeTests(unittest.TestCase):
    def test_fullwidth_digits(self):
        self.assertEqual(canonicalize("２４７エ７１４"), "247エ714")

    def test_halfwidth_katakana(self):
        self.assertEqual(canonicalize("247ｴ714"), "247エ714")

    def test_whitespace_removed(self):
        self.assertEqual(canonicalize("247 エ 714"), "247エ714")
        self.assertEqual(canonicalize("　東電\t１２３\n"), "東電123")

    def test_latin_folded_to_upper_ascii(self):
        self.assertEqual(canonicalize("ｎｔｔ 2R2R"), "NTT2R2R")
        self.assertEqual(canonicalize("ＮＴＴ２Ｒ２Ｒ"), "NTT2R2R")
        self.assertEqual(canonicalize("ntt"), "NTT")

    def test_kanji_and_hiragana_untouched(self):
        self.assertEqual(canonicalize("06え3336"), "06え3336")
        self.assertEqual(canonicalize("中央線20-A"), "中央線20-A")

    def test_sonant_pairs_before_single_characters(self):
        self.assertEqual(canonicalize("ﾊﾟﾝﾀﾞ"), "パンダ")
        self.assertEqual(to_fullwidth_katakana("ｳﾞｧ"), "ヴァ")
        self.assertEqual(to_fullwidth_katakana("ﾜﾞｦﾞ"), "ヷヺ")

    def test_orphan_sonant_marks_do_not_survive(self):
        self.assertEqual(canonicalize("ﾞﾟ"), "゛゜")

    def test_halfwidth_punctuation(self):
        self.assertEqual(to_fullwidth_katakana("｢ｰ･｣｡､"), "「ー・」。、")

    def test_empty_and_none(self):
        self.assertEqual(canonicalize(""), "")
        self.assertEqual(canonicalize(None), "")

    def test_idempotent(self):
        for sample in SAMPLES:
            with self.subTest(sample=sample):
                once = canonicalize(sample)
                self.assertEqual(canonicalize(once), once)

    def test_no_variant_characters_remain(self):
        for sample in SAMPLES:
            result = canonicalize(sample)
            for ch in result:
                code = ord(ch)
                self.assertFalse(0xFF10 <= code <= 0xFF19, sample)
                self.assertFalse(0xFF61 <= code <= 0xFF9F, sample)
                self.assertFalse(0xFF21 <= code <= 0xFF3A or 0xFF41 <= code <= 0xFF5A, sample)
                self.assertFalse(ch.isspace(), sample)
                self.assertFalse("a" <= ch <= "z", sample)

    def test_canonical_equal(self):
        self.assertTrue(canonical_equal("２４７ｴ７１４", "247 エ 714"))
        self.assertFalse(canonical_equal("247エ714", "247エ715"))


class DisplayTests(unittest.TestCase):
    def test_placeholder_rendered_as_question_mark(self):
        self.assertEqual(display_identifier("?-pole123"), "?")
        self.assertEqual(display_identifier("247エ714"), "247エ714")
        self.assertEqual(display_identifiers(["?-pole9", "A1"]), ["?", "A1"])

    def test_display_survives_canonical_upper_casing(self):
        stored = canonicalize("?-pole12")
        self.assertEqual(stored, "?-POLE12")
        self.assertEqual(display_identifier(stored), "?")
        self.assertEqual(display_identifier("POLE12"), "POLE12")


if __name__ == "__main__":
    unittest.main()
