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

"""Read embedded GPS positions from photographed identifier plates.

Only unmodified camera originals reliably carry a GPS block. Screenshots,
re-encoded uploads and images passed through messaging apps usually do not,
so ``None`` is an ordinary result here and callers fall back to manual
location entry.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Any, Iterable, Mapping, Optional, Protocol

from PIL import ExifTags, Image

from .config import GeoConfig
from .utils import GeoCoordinate


logger = logging.getLogger(__name__)

_EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"
_DECODE_ERRORS = (
    OSError,
    EOFError,
    struct.error,
    ValueError,
    TypeError,
    KeyError,
    IndexError,
    ZeroDivisionError,
    SyntaxError,
    Image.DecompressionBombError,
)


class GeoExtractor(Protocol):
    """Capability: raw image bytes in, optional coordinate out."""

    def __call__(self, image_bytes: bytes) -> Optional[GeoCoordinate]:
        ...


@dataclass
class PhotoMetadata:
    gps: Optional[GeoCoordinate] = None
    timestamp: Optional[datetime] = None
    camera_make: Optional[str] = None
    camera_model: Optional[str] = None


def _dms_to_degrees(value: Any) -> float:
    parts = [float(part) for part in (value if isinstance(value, (tuple, list)) else (value,))]
    if not parts or len(parts) > 3:
        raise ValueError(f"Unexpected GPS component count: {len(parts)}")
    degrees = parts[0]
    minutes = parts[1] if len(parts) > 1 else 0.0
    seconds = parts[2] if len(parts) > 2 else 0.0
    return degrees + minutes / 60.0 + seconds / 3600.0


def _ref(value: Any) -> str:
    if isinstance(value, bytes):
        value = value.decode("ascii", "ignore")
    return str(value or "").strip("\x00 ").upper()


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", "ignore")
    text = str(value).strip("\x00 ")
    return text or None


def coordinate_from_gps_ifd(gps: Mapping[int, Any]) -> Optional[GeoCoordinate]:
    """Convert a decoded GPS IFD into decimal degrees (``None`` if incomplete)."""

    latitude_raw = gps.get(ExifTags.GPS.GPSLatitude)
    longitude_raw = gps.get(ExifTags.GPS.GPSLongitude)
    if latitude_raw is None or longitude_raw is None:
        return None
    latitude = _dms_to_degrees(latitude_raw)
    longitude = _dms_to_degrees(longitude_raw)
    if _ref(gps.get(ExifTags.GPS.GPSLatitudeRef)) == "S":
        latitude = -latitude
    if _ref(gps.get(ExifTags.GPS.GPSLongitudeRef)) == "W":
        longitude = -longitude
    return GeoCoordinate(latitude=latitude, longitude=longitude)


class ExifGeoExtractor:
    """Pillow-backed :class:`GeoExtractor` reading the EXIF GPSInfo block."""

    def __init__(self, config: Optional[GeoConfig] = None) -> None:
        self.config = config or GeoConfig()

    def _payload_ok(self, image_bytes: bytes) -> bool:
        if not image_bytes:
            logger.debug("No coordinate: empty image payload")
            return False
        if self.config.max_image_bytes and len(image_bytes) > self.config.max_image_bytes:
            logger.debug(
                "No coordinate: payload of %d bytes exceeds limit of %d",
                len(image_bytes),
                self.config.max_image_bytes,
            )
            return False
        return True

    def _accept(self, coordinate: Optional[GeoCoordinate]) -> Optional[GeoCoordinate]:
        if coordinate is None:
            logger.debug("No coordinate: GPS block lacks latitude/longitude")
            return None
        if not coordinate.is_valid():
            logger.debug("No coordinate: out-of-range fix %s", coordinate.as_tuple())
            return None
        if self.config.reject_zero_fix and coordinate.latitude == 0.0 and coordinate.longitude == 0.0:
            logger.debug("No coordinate: placeholder 0,0 fix")
            return None
        return coordinate

    def __call__(self, image_bytes: bytes) -> Optional[GeoCoordinate]:
        if not self._payload_ok(image_bytes):
            return None
        try:
            with Image.open(BytesIO(image_bytes)) as image:
                gps = image.getexif().get_ifd(ExifTags.IFD.GPSInfo)
                if not gps:
                    logger.debug("No coordinate: image carries no GPS metadata")
                    return None
                coordinate = coordinate_from_gps_ifd(gps)
        except _DECODE_ERRORS as exc:
            logger.debug("No coordinate: failed to decode image metadata: %s", exc)
            return None
        return self._accept(coordinate)

    def metadata(self, image_bytes: bytes) -> PhotoMetadata:
        """Collect GPS, capture time and camera make/model; missing fields stay ``None``."""

        result = PhotoMetadata(gps=self(image_bytes))
        if not self._payload_ok(image_bytes):
            return result
        try:
            with Image.open(BytesIO(image_bytes)) as image:
                exif = image.getexif()
                result.camera_make = _text(exif.get(ExifTags.Base.Make))
                result.camera_model = _text(exif.get(ExifTags.Base.Model))
                captured = _text(exif.get_ifd(ExifTags.IFD.Exif).get(ExifTags.Base.DateTimeOriginal))
            if captured:
                result.timestamp = datetime.strptime(captured, _EXIF_DATETIME_FORMAT)
        except _DECODE_ERRORS as exc:
            logger.debug("Partial photo metadata: %s", exc)
        return result


_DEFAULT_EXTRACTOR = ExifGeoExtractor()


def extract_coordinate(image_bytes: bytes) -> Optional[GeoCoordinate]:
    """Return the GPS fix embedded in ``image_bytes`` or ``None``; never raises."""

    return _DEFAULT_EXTRACTOR(image_bytes)


def extract_photo_metadata(image_bytes: bytes) -> PhotoMetadata:
    return _DEFAULT_EXTRACTOR.metadata(image_bytes)


def extract_first_coordinate(
    images: Iterable[bytes],
    extractor: Optional[GeoExtractor] = None,
) -> Optional[GeoCoordinate]:
    """Scan several photos of the same pole and return the first GPS fix found."""

    source = extractor or _DEFAULT_EXTRACTOR
    for image_bytes in images:
        coordinate = source(image_bytes)
        if coordinate is not None:
            return coordinate
    return None
