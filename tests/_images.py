from __future__ import annotations

from io import BytesIO
from typing import Optional, Tuple

from PIL import ExifTags, Image
from PIL.TiffImagePlugin import IFDRational


def _dms(value: float) -> Tuple[IFDRational, IFDRational, IFDRational]:
    value = abs(value)
    degrees = int(value)
    minutes_float = (value - degrees) * 60
    minutes = int(minutes_float)
    seconds = (minutes_float - minutes) * 60
    return IFDRational(degrees, 1), IFDRational(minutes, 1), IFDRational(int(round(seconds * 10000)), 10000)


def plate_photo(
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    *,
    make: Optional[str] = None,
    model: Optional[str] = None,
    taken: Optional[str] = None,
    image_format: str = "JPEG",
) -> bytes:
    """Build a tiny photo, optionally with an EXIF GPS block and camera tags."""

    exif = Image.Exif()
    if make:
        exif[ExifTags.Base.Make] = make
    if model:
        exif[ExifTags.Base.Model] = model
    if taken:
        exif[ExifTags.IFD.Exif] = {ExifTags.Base.DateTimeOriginal: taken}
    if latitude is not None and longitude is not None:
        exif[ExifTags.IFD.GPSInfo] = {
            ExifTags.GPS.GPSLatitudeRef: "N" if latitude >= 0 else "S",
            ExifTags.GPS.GPSLatitude: _dms(latitude),
            ExifTags.GPS.GPSLongitudeRef: "E" if longitude >= 0 else "W",
            ExifTags.GPS.GPSLongitude: _dms(longitude),
        }

    buffer = BytesIO()
    image = Image.new("RGB", (32, 24), (200, 200, 200))
    if len(exif):
        image.save(buffer, format=image_format, exif=exif)
    else:
        image.save(buffer, format=image_format)
    return buffer.getvalue()
