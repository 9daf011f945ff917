# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


# Author: Mohammad Saif Ul Haq
# Last Modified: 2026-10-19

"""Canonical form for hand-entered pole identifiers."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional


_FULLWIDTH_OFFSET = 0xFEE0

_FULLWIDTH_DIGITS = {code: code - _FULLWIDTH_OFFSET for code in range(ord("０"), ord("９") + 1)}

_FULLWIDTH_LATIN = {
    code: code - _FULLWIDTH_OFFSET
    for start, end in (("Ａ", "Ｚ"), ("ａ", "ｚ"))
    for code in range(ord(start), ord(end) + 1)
}

_ASCII_UPPER = {code: code - 0x20 for code in range(ord("a"), ord("z") + 1)}

# Voiced (ﾞ) and semi-voiced (ﾟ) pairs collapse to one full-width glyph.
_HALFWIDTH_SONANT_PAIRS: Dict[str, str] = {
    "ｶﾞ": "ガ", "ｷﾞ": "ギ", "ｸﾞ": "グ", "ｹﾞ": "ゲ", "ｺﾞ": "ゴ",
    "ｻﾞ": "ザ", "ｼﾞ": "ジ", "ｽﾞ": "ズ", "ｾﾞ": "ゼ", "ｿﾞ": "ゾ",
    "ﾀﾞ": "ダ", "ﾁﾞ": "ヂ", "ﾂﾞ": "ヅ", "ﾃﾞ": "デ", "ﾄﾞ": "ド",
    "ﾊﾞ": "バ", "ﾋﾞ": "ビ", "ﾌﾞ": "ブ", "ﾍﾞ": "ベ", "ﾎﾞ": "ボ",
    "ﾊﾟ": "パ", "ﾋﾟ": "ピ", "ﾌﾟ": "プ", "ﾍﾟ": "ペ", "ﾎﾟ": "ポ",
    "ｳﾞ": "ヴ", "ﾜﾞ": "ヷ", "ｦﾞ": "ヺ",
}

_HALFWIDTH_KANA: Dict[str, str] = {
    "ｱ": "ア", "ｲ": "イ", "ｳ": "ウ", "ｴ": "エ", "ｵ": "オ",
    "ｶ": "カ", "ｷ": "キ", "ｸ": "ク", "ｹ": "ケ", "ｺ": "コ",
    "ｻ": "サ", "ｼ": "シ", "ｽ": "ス", "ｾ": "セ", "ｿ": "ソ",
    "ﾀ": "タ", "ﾁ": "チ", "ﾂ": "ツ", "ﾃ": "テ", "ﾄ": "ト",
    "ﾅ": "ナ", "ﾆ": "ニ", "ﾇ": "ヌ", "ﾈ": "ネ", "ﾉ": "ノ",
    "ﾊ": "ハ", "ﾋ": "ヒ", "ﾌ": "フ", "ﾍ": "ヘ", "ﾎ": "ホ",
    "ﾏ": "マ", "ﾐ": "ミ", "ﾑ": "ム", "ﾒ": "メ", "ﾓ": "モ",
    "ﾔ": "ヤ", "ﾕ": "ユ", "ﾖ": "ヨ",
    "ﾗ": "ラ", "ﾘ": "リ", "ﾙ": "ル", "ﾚ": "レ", "ﾛ": "ロ",
    "ﾜ": "ワ", "ｦ": "ヲ", "ﾝ": "ン",
    "ｧ": "ァ", "ｨ": "ィ", "ｩ": "ゥ", "ｪ": "ェ", "ｫ": "ォ",
    "ｯ": "ッ", "ｬ": "ャ", "ｭ": "ュ", "ｮ": "ョ",
    "｡": "。", "､": "、", "ｰ": "ー", "｢": "「", "｣": "」", "･": "・",
    # Sonant marks left over once the pairs above have been consumed.
    "ﾞ": "゛", "ﾟ": "゜",
}

_SONANT_PATTERN = re.compile("|".join(re.escape(pair) for pair in _HALFWIDTH_SONANT_PAIRS))
_KANA_TABLE = str.maketrans(_HALFWIDTH_KANA)
_WHITESPACE = re.compile(r"\s+")

_PLACEHOLDER_PREFIX = "?-pole"


def to_fullwidth_katakana(text: str) -> str:
    """Map half-width katakana (and its punctuation) onto the full-width block."""

    combined = _SONANT_PATTERN.sub(lambda match: _HALFWIDTH_SONANT_PAIRS[match.group(0)], text)
    return combined.translate(_KANA_TABLE)


def canonicalize(raw: Optional[str]) -> str:
    """Return the canonical form of a transcribed identifier.

    Full-width digits and Latin letters become ASCII, half-width katakana
    becomes full-width, ASCII letters are upper-cased and every whitespace
    character is dropped. Kanji and hiragana are left alone, so
    ``canonicalize("２４７ ｴ ７１４")`` yields ``"247エ714"`` and
    ``canonicalize("ｎｔｔ 2R2R")`` yields ``"NTT2R2R"``.

    The function is total (``None`` gives ``""``) and idempotent.
    """

    if not raw:
        return ""
    text = raw.translate(_FULLWIDTH_DIGITS)
    text = to_fullwidth_katakana(text)
    text = text.translate(_FULLWIDTH_LATIN)
    text = text.translate(_ASCII_UPPER)
    return _WHITESPACE.sub("", text)


def canonical_equal(left: Optional[str], right: Optional[str]) -> bool:
    """``True`` when two transcriptions refer to the same printed identifier."""

    return canonicalize(left) == canonicalize(right)


def display_identifier(value: str) -> str:
    """Render the unknown-number placeholder (``?-pole123``, any case) as ``?``."""

    if value[: len(_PLACEHOLDER_PREFIX)].lower() == _PLACEHOLDER_PREFIX:
        return "?"
    return value


def display_identifiers(values: Iterable[str]) -> List[str]:
    return [display_identifier(value) for value in values]
