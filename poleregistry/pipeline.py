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

"""High-level registration front end."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .config import RegistryConfig
from .geo import ExifGeoExtractor, GeoExtractor
from .routing import NearbyCandidate, NearbyPoleFinder, RegistrationBranch, RouteDecision, route
from .utils import GeoCoordinate, haversine_many_m


logger = logging.getLogger(__name__)


@dataclass
class RegistrationOutcome:
    decision: RouteDecision
    candidates: List[NearbyCandidate] = field(default_factory=list)
    distances_m: List[float] = field(default_factory=list)

    @property
    def needs_confirmation(self) -> bool:
        """Ask "same pole or a different one?" only when something is within range."""

        return bool(self.candidates)

    @property
    def closest_distance_m(self) -> Optional[float]:
        return min(self.distances_m) if self.distances_m else None


class StaticPoleFinder:
    """:class:`NearbyPoleFinder` over a preloaded list of pole records.

    Used by the command-line tools and tests; deployments inject the
    registry's own radius query instead.
    """

    def __init__(self, candidates: Iterable[NearbyCandidate]) -> None:
        self.candidates = list(candidates)

    def find_nearby(self, coordinate: GeoCoordinate, radius_meters: float) -> Sequence[NearbyCandidate]:
        if not self.candidates:
            return []
        distances = haversine_many_m(coordinate, [(c.latitude, c.longitude) for c in self.candidates])
        return [candidate for candidate, distance in zip(self.candidates, distances) if distance <= radius_meters]


class RegistrationRouter:
    def __init__(
        self,
        config: RegistryConfig,
        finder: NearbyPoleFinder,
        extractor: Optional[GeoExtractor] = None,
    ) -> None:
        self.config = config
        self.finder = finder
        self.extractor = extractor or ExifGeoExtractor(config.geo)

    def check(self, coordinate: Optional[GeoCoordinate]) -> RegistrationOutcome:
        decision = route(coordinate)
        if decision.branch is RegistrationBranch.MANUAL_ENTRY:
            return RegistrationOutcome(decision=decision)
        radius = self.config.duplicate_check.nearby_check_radius_m
        candidates = list(self.finder.find_nearby(decision.coordinate, radius))
        distances = haversine_many_m(decision.coordinate, [(c.latitude, c.longitude) for c in candidates])
        logger.debug("%d existing pole(s) within %.1f m of %s", len(candidates), radius, decision.coordinate.as_tuple())
        return RegistrationOutcome(decision=decision, candidates=candidates, distances_m=[float(d) for d in distances])

    def run(self, image_bytes: bytes) -> RegistrationOutcome:
        """Extract the plate photo's GPS fix and route the registration accordingly."""

        return self.check(self.extractor(image_bytes))
