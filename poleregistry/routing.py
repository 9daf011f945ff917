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

"""Choose between the automatic duplicate check and manual location entry."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Protocol, Sequence, Tuple

from .utils import GeoCoordinate


class RegistrationBranch(str, Enum):
    PROXIMITY_CHECK = "proximity-check"
    MANUAL_ENTRY = "manual-entry"


@dataclass(frozen=True)
class RouteDecision:
    branch: RegistrationBranch
    coordinate: Optional[GeoCoordinate] = None

    @property
    def needs_manual_location(self) -> bool:
        return self.branch is RegistrationBranch.MANUAL_ENTRY

    def as_dict(self) -> Dict[str, object]:
        if self.coordinate is None:
            return {"branch": self.branch.value}
        return {"branch": self.branch.value, "coordinate": self.coordinate.as_dict()}


@dataclass(frozen=True)
class NearbyCandidate:
    """Existing pole record returned by the radius query."""

    pole_id: int
    latitude: float
    longitude: float
    identifiers: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def coordinate(self) -> GeoCoordinate:
        return GeoCoordinate(self.latitude, self.longitude)


class NearbyPoleFinder(Protocol):
    """Query-by-radius service over the stored pole records."""

    def find_nearby(self, coordinate: GeoCoordinate, radius_meters: float) -> Sequence[NearbyCandidate]:
        ...


def route(coordinate: Optional[GeoCoordinate]) -> RouteDecision:
    """A photo with a GPS fix goes to the proximity check, anything else to manual entry."""

    if coordinate is None:
        return RouteDecision(branch=RegistrationBranch.MANUAL_ENTRY)
    return RouteDecision(branch=RegistrationBranch.PROXIMITY_CHECK, coordinate=coordinate)
