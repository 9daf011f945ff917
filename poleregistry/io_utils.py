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

"""Input/output helpers."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import List

from .routing import NearbyCandidate


_IMAGE_PATTERNS = ("*.jpg", "*.jpeg", "*.png", "*.webp", "*.tif", "*.tiff", "*.heic")


def collect_images(path: Path) -> List[Path]:
    """Return sorted image paths under ``path`` (supports individual files)."""

    if path.is_file():
        return [path]
    if not path.exists():
        raise FileNotFoundError(f"Input path does not exist: {path}")
    files: List[Path] = []
    for pattern in _IMAGE_PATTERNS:
        files.extend(sorted(path.glob(pattern)))
        files.extend(sorted(path.glob(pattern.upper())))
    files = sorted(set(files))
    files.sort(key=lambda p: (_extract_index(p.stem), p.stem))
    return files


def _extract_index(name: str) -> int:
    match = re.search(r"(\d+)", name)
    return int(match.group(1)) if match else 0


def read_image_bytes(path: Path) -> bytes:
    """Read a photo as raw bytes, raising a descriptive error when it is missing."""

    if not path.is_file():
        raise FileNotFoundError(f"Failed to load image: {path}")
    return path.read_bytes()


def load_candidates(path: Path) -> List[NearbyCandidate]:
    """Load pole records from a JSON list of ``{id, latitude, longitude, numbers}`` objects."""

    if not path.exists():
        raise FileNotFoundError(f"Candidate file not found: {path}")
    records = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"Expected a JSON list of poles in {path}")
    candidates: List[NearbyCandidate] = []
    for record in records:
        candidates.append(
            NearbyCandidate(
                pole_id=int(record["id"]),
                latitude=float(record["latitude"]),
                longitude=float(record["longitude"]),
                identifiers=tuple(str(number) for number in record.get("numbers", ())),
            )
        )
    return candidates


def save_text(path: Path, content: str) -> None:
    """Persist UTF-8 text to ``path`` with directory creation."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
