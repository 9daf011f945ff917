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

"""Structural decomposition of canonical identifiers into prefix and suffix."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class PrefixRule(str, Enum):
    """Leading-segment shapes recognised as an operator/area prefix."""

    DIGITS_KATAKANA = "digits+katakana"
    DIGITS_LATIN = "digits+latin"
    LATIN = "latin"


# Evaluated in order; the first rule that matches at the start wins.
PREFIX_RULES: Tuple[Tuple[PrefixRule, re.Pattern[str]], ...] = (
    (PrefixRule.DIGITS_KATAKANA, re.compile(r"[0-9]+[ァ-ヴ]+")),
    (PrefixRule.DIGITS_LATIN, re.compile(r"[0-9]+[A-Za-z]+")),
    (PrefixRule.LATIN, re.compile(r"[A-Za-z]+(?=-?[0-9])")),
)

_TRAILING_DIGITS = re.compile(r"[0-9]+$")


@dataclass(frozen=True)
class PrefixMatch:
    rule: PrefixRule
    prefix: str


@dataclass(frozen=True)
class ParsedIdentifier:
    """Identifier split into its prefix and zero-padded numeric suffix."""

    prefix: str
    suffix_value: int
    suffix_width: int

    def render(self, value: Optional[int] = None) -> str:
        """Rebuild ``prefix + suffix``; the suffix grows past ``suffix_width`` if needed."""

        number = self.suffix_value if value is None else value
        return f"{self.prefix}{str(number).zfill(self.suffix_width)}"


def match_prefix(canonical: Optional[str]) -> Optional[PrefixMatch]:
    """Return the first prefix rule that fires on ``canonical`` (or ``None``)."""

    if not canonical:
        return None
    for rule, pattern in PREFIX_RULES:
        match = pattern.match(canonical)
        if match:
            return PrefixMatch(rule=rule, prefix=match.group(0))
    return None


def parse_prefix(canonical: Optional[str]) -> Optional[str]:
    matched = match_prefix(canonical)
    return matched.prefix if matched else None


def _trailing_digits(canonical: Optional[str]) -> Optional[str]:
    if not canonical:
        return None
    match = _TRAILING_DIGITS.search(canonical)
    return match.group(0) if match else None


def parse_suffix(canonical: Optional[str]) -> Optional[int]:
    digits = _trailing_digits(canonical)
    return int(digits) if digits is not None else None


def parse_identifier(canonical: Optional[str]) -> Optional[ParsedIdentifier]:
    """Combine :func:`parse_prefix` and :func:`parse_suffix`.

    Returns ``None`` unless both a recognised prefix and a trailing digit run
    exist. Identifiers without structure are treated as opaque by callers.
    """

    prefix = parse_prefix(canonical)
    digits = _trailing_digits(canonical)
    if prefix is None or digits is None:
        return None
    return ParsedIdentifier(prefix=prefix, suffix_value=int(digits), suffix_width=len(digits))
