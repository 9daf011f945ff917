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

"""Device-local "last registration" slot used to seed continuous entry."""

from __future__ import annotations

import json
import logging
import os
import random
import re
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union


logger = logging.getLogger(__name__)

LAST_REGISTRATION_KEY = "lastRegistration"

_PLACEHOLDER_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
_PLACEHOLDER_LENGTH = 8
_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_-]")


@dataclass
class RegistrationSession:
    last_identifiers: List[str] = field(default_factory=list)
    pole_type_category: str = ""
    timestamp: int = 0  # epoch milliseconds

    @classmethod
    def record(
        cls,
        identifiers: Sequence[str],
        pole_type_category: str,
        now: Optional[float] = None,
    ) -> "RegistrationSession":
        moment = time.time() if now is None else now
        return cls(
            last_identifiers=list(identifiers),
            pole_type_category=pole_type_category,
            timestamp=int(moment * 1000),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "lastIdentifiers": list(self.last_identifiers),
            "poleTypeCategory": self.pole_type_category,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "RegistrationSession":
        identifiers = data.get("lastIdentifiers")
        if not isinstance(identifiers, list) or not all(isinstance(item, str) for item in identifiers):
            raise ValueError("lastIdentifiers must be a list of strings")
        category = data.get("poleTypeCategory")
        if not isinstance(category, str):
            raise ValueError("poleTypeCategory must be a string")
        timestamp = data.get("timestamp", 0)
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise ValueError("timestamp must be numeric")
        return cls(last_identifiers=list(identifiers), pole_type_category=category, timestamp=int(timestamp))


class SessionStore:
    """JSON-file backed single slot holding the last :class:`RegistrationSession`.

    The slot is read when a registration starts and overwritten when it
    completes. Flows that may run side by side on the same device (two browser
    tabs, say) should each pass their own ``session_key``; every key lives in
    its own file next to ``path`` (``session.json`` -> ``session.tab-1.json``).
    Writes go through a temporary file and :func:`os.replace`, so a reader
    sees either the previous record or the new one, never a partial file.
    """

    def __init__(self, path: Union[str, Path], session_key: Optional[str] = None) -> None:
        base = Path(path)
        self.key = LAST_REGISTRATION_KEY
        if session_key:
            safe_key = _UNSAFE_KEY_CHARS.sub("_", session_key)
            base = base.with_name(f"{base.stem}.{safe_key}{base.suffix}")
        self.path = base

    def _read_all(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session state %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring session state %s: expected an object", self.path)
            return {}
        return data

    def _write_all(self, data: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def load(self) -> Optional[RegistrationSession]:
        record = self._read_all().get(self.key)
        if record is None:
            return None
        if not isinstance(record, dict):
            logger.warning("Ignoring malformed %s entry in %s", self.key, self.path)
            return None
        try:
            return RegistrationSession.from_dict(record)
        except ValueError as exc:
            logger.warning("Ignoring malformed %s entry in %s: %s", self.key, self.path, exc)
            return None

    def save(self, session: RegistrationSession) -> None:
        self._write_all({self.key: session.to_dict()})
        logger.debug("Saved %s with %d identifier(s) to %s", self.key, len(session.last_identifiers), self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def generate_placeholder_number(rng: Optional[random.Random] = None) -> str:
    """Auto-number for a pole that carries no identifier plate (``#NoID-xxxxxxxx``)."""

    source = rng or random
    suffix = "".join(source.choice(_PLACEHOLDER_ALPHABET) for _ in range(_PLACEHOLDER_LENGTH))
    return f"#NoID-{suffix}"


def resolve_registered_numbers(
    numbers: Sequence[str],
    plate_count: int,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Turn the raw number inputs into the list stored with the registration."""

    if plate_count <= 0:
        return [generate_placeholder_number(rng)]
    trimmed = [number.strip() for number in numbers if number and number.strip()]
    if not trimmed:
        raise ValueError("At least one identifier must be filled in")
    return trimmed
