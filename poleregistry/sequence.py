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

"""Next-identifier prediction for contributors walking a line of poles."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .session import RegistrationSession


DEFAULT_SUGGESTION_DELTAS = (-1, 1, 2, 3)

_SEQUENCE_PATTERN = re.compile(r"(.*?)([0-9]+)", re.DOTALL)


class ContinuousModeError(ValueError):
    """Raised when continuous entry cannot be seeded from the previous registration."""


@dataclass(frozen=True)
class Suggestion:
    delta: int
    identifier: str


def next_identifier(previous: Optional[str], delta: int = 1) -> Optional[str]:
    """Shift the trailing number of ``previous`` by ``delta``.

    Everything before the last digit run is kept verbatim, whatever it
    contains. The new number keeps at least the original width
    (``12A-099`` -> ``12A-100``). A result below zero leaves ``previous``
    untouched, and ``None`` is returned when there is no digit run to anchor on.
    """

    if not previous:
        return None
    match = _SEQUENCE_PATTERN.fullmatch(previous)
    if match is None:
        return None
    prefix, digits = match.groups()
    value = int(digits) + int(delta)
    if value < 0:
        return previous
    return prefix + str(value).zfill(len(digits))


def suggest_identifiers(previous: Optional[str], deltas: Iterable[int] = DEFAULT_SUGGESTION_DELTAS) -> List[Suggestion]:
    """Return the offset buttons offered next to the number field.

    Offsets whose prediction clamps back to ``previous`` are omitted, as is
    every offset when ``previous`` has no trailing number.
    """

    suggestions: List[Suggestion] = []
    for delta in deltas:
        if delta == 0:
            continue
        candidate = next_identifier(previous, delta)
        if candidate is None or candidate == previous:
            continue
        suggestions.append(Suggestion(delta=int(delta), identifier=candidate))
    return suggestions


class ContinuousEntry:
    """Seed the number inputs from the last completed registration.

    The session is read once when the entry is created; callers own writing
    the new session back after a successful registration.
    """

    def __init__(
        self,
        session: Optional[RegistrationSession],
        pole_type_category: str,
        deltas: Sequence[int] = DEFAULT_SUGGESTION_DELTAS,
        step: int = 1,
    ) -> None:
        if session is None:
            raise ContinuousModeError("No previous registration to continue from")
        if session.pole_type_category != pole_type_category:
            raise ContinuousModeError(
                f"Previous registration was '{session.pole_type_category}'; "
                f"continuous entry only works for the same pole type ('{pole_type_category}' requested)"
            )
        self.session = session
        self.pole_type_category = pole_type_category
        self.deltas = tuple(deltas)
        self.step = int(step)

    @property
    def anchor(self) -> Optional[str]:
        identifiers = self.session.last_identifiers
        return identifiers[0] if identifiers else None

    def predicted(self) -> Optional[str]:
        return next_identifier(self.anchor, self.step)

    def initial_numbers(self, plate_count: int) -> List[str]:
        """Blank inputs for ``plate_count`` plates with the first one pre-filled."""

        numbers = [""] * max(0, int(plate_count))
        if numbers:
            numbers[0] = self.predicted() or self.anchor or ""
        return numbers

    def suggestions(self) -> List[Suggestion]:
        return suggest_identifiers(self.anchor, self.deltas)
