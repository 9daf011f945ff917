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

"""General-purpose utilities."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import numpy as np


EARTH_RADIUS_M = 6371e3


@dataclass(frozen=True)
class GeoCoordinate:
    """WGS84 position in decimal degrees."""

    latitude: float
    longitude: float

    def as_tuple(self) -> Tuple[float, float]:
        return self.latitude, self.longitude

    def as_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    def is_valid(self) -> bool:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            return False
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


def haversine_m(a: GeoCoordinate, b: GeoCoordinate) -> float:
    """Great-circle distance between two coordinates in metres."""

    return float(haversine_many_m(a, [b.as_tuple()])[0])


def haversine_many_m(origin: GeoCoordinate, points: Iterable[Tuple[float, float]]) -> np.ndarray:
    """Vectorised great-circle distance from ``origin`` to each ``(lat, lon)`` pair."""

    coords = np.asarray(list(points), dtype=np.float64).reshape(-1, 2)
    if coords.size == 0:
        return np.zeros(0, dtype=np.float64)
    lat1 = math.radians(origin.latitude)
    lon1 = math.radians(origin.longitude)
    lat2 = np.radians(coords[:, 0])
    lon2 = np.radians(coords[:, 1])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = np.sin(dlat / 2.0) ** 2 + math.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_M * np.arctan2(np.sqrt(h), np.sqrt(np.clip(1.0 - h, 0.0, None)))


def set_global_seed(seed: Optional[int]) -> None:
    """Seed the ``random`` module so placeholder numbers are reproducible."""

    if seed is None:
        return

    value = int(seed)
    random.seed(value)
