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

"""Identifier and registration-routing core for the utility-pole registry."""

from .config import (
    DuplicateCheckConfig,
    GeoConfig,
    RegistryConfig,
    SequenceConfig,
    SessionConfig,
    load_config_overrides_from_file,
    load_registry_config,
)
from .canonical import canonical_equal, canonicalize, display_identifier, display_identifiers
from .structure import ParsedIdentifier, PrefixMatch, PrefixRule, match_prefix, parse_identifier, parse_prefix, parse_suffix
from .sequence import ContinuousEntry, ContinuousModeError, Suggestion, next_identifier, suggest_identifiers
from .session import RegistrationSession, SessionStore, generate_placeholder_number, resolve_registered_numbers
from .geo import (
    ExifGeoExtractor,
    GeoExtractor,
    PhotoMetadata,
    extract_coordinate,
    extract_first_coordinate,
    extract_photo_metadata,
)
from .routing import NearbyCandidate, NearbyPoleFinder, RegistrationBranch, RouteDecision, route
from .pipeline import RegistrationOutcome, RegistrationRouter, StaticPoleFinder
from .utils import GeoCoordinate, haversine_m

__all__ = [
    "DuplicateCheckConfig",
    "GeoConfig",
    "RegistryConfig",
    "SequenceConfig",
    "SessionConfig",
    "load_config_overrides_from_file",
    "load_registry_config",
    "canonical_equal",
    "canonicalize",
    "display_identifier",
    "display_identifiers",
    "ParsedIdentifier",
    "PrefixMatch",
    "PrefixRule",
    "match_prefix",
    "parse_identifier",
    "parse_prefix",
    "parse_suffix",
    "ContinuousEntry",
    "ContinuousModeError",
    "Suggestion",
    "next_identifier",
    "suggest_identifiers",
    "RegistrationSession",
    "SessionStore",
    "generate_placeholder_number",
    "resolve_registered_numbers",
    "ExifGeoExtractor",
    "GeoExtractor",
    "PhotoMetadata",
    "extract_coordinate",
    "extract_first_coordinate",
    "extract_photo_metadata",
    "NearbyCandidate",
    "NearbyPoleFinder",
    "RegistrationBranch",
    "RouteDecision",
    "route",
    "RegistrationOutcome",
    "RegistrationRouter",
    "StaticPoleFinder",
    "GeoCoordinate",
    "haversine_m",
]
