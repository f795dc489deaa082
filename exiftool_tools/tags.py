from __future__ import annotations

import dataclasses
import enum
import types
import typing as T
from fractions import Fraction


class TagType(enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    REAL = "real"
    BOOLEAN = "boolean"


class Format(enum.Enum):
    # exiftool -n: disable print conversion
    NUMERIC = "numeric"
    HUMAN_READABLE = "human"

    @property
    def flags(self) -> tuple[str, ...]:
        if self is Format.NUMERIC:
            return ("-n",)
        return ()


_TRUE_VALUES = ("1", "TRUE", "YES", "ON")
_FALSE_VALUES = ("0", "FALSE", "NO", "OFF")


@dataclasses.dataclass(frozen=True)
class Tag:
    # Stable registry key, e.g. "GPS_LATITUDE"
    key: str
    # Tag name as exiftool prints and accepts it, e.g. "GPSLatitude"
    name: str
    type: TagType = TagType.STRING

    def parse(self, value: str) -> T.Any:
        """
        Convert a raw value printed by exiftool into the tag's Python type

        >>> EXPOSURE_TIME.parse("1/125")
        0.008
        >>> ISO.parse("200")
        200
        """
        if self.type is TagType.STRING:
            return value
        value = value.strip()
        if self.type is TagType.INTEGER:
            return int(value)
        elif self.type is TagType.REAL:
            if "/" in value:
                try:
                    return float(Fraction(value.replace(" ", "")))
                except ZeroDivisionError:
                    raise ValueError(f"Invalid fraction for {self.name}: {value!r}")
            return float(value)
        elif self.type is TagType.BOOLEAN:
            upper = value.upper()
            if upper in _TRUE_VALUES:
                return True
            if upper in _FALSE_VALUES:
                return False
            raise ValueError(f"Invalid boolean value for {self.name}: {value!r}")
        raise ValueError(f"Unsupported tag type {self.type}")

    def __str__(self) -> str:
        return self.name


_REGISTRY: dict[str, Tag] = {}


def _register(key: str, name: str, type: TagType = TagType.STRING) -> Tag:
    if key in _REGISTRY:
        raise ValueError(f"Duplicate tag key {key}")
    tag = Tag(key, name, type)
    _REGISTRY[key] = tag
    return tag


APERTURE = _register("APERTURE", "ApertureValue", TagType.REAL)
ARTIST = _register("ARTIST", "Artist")
AUTHOR = _register("AUTHOR", "XPAuthor")
CAPTION_ABSTRACT = _register("CAPTION_ABSTRACT", "Caption-Abstract")
COLOR_SPACE = _register("COLOR_SPACE", "ColorSpace", TagType.INTEGER)
COMMENT = _register("COMMENT", "XPComment")
CONTRAST = _register("CONTRAST", "Contrast", TagType.INTEGER)
COPYRIGHT = _register("COPYRIGHT", "Copyright")
COPYRIGHT_NOTICE = _register("COPYRIGHT_NOTICE", "CopyrightNotice")
CREATE_DATE = _register("CREATE_DATE", "CreateDate")
CREATION_DATE = _register("CREATION_DATE", "CreationDate")
CREATOR = _register("CREATOR", "Creator")
DATE_TIME_ORIGINAL = _register("DATE_TIME_ORIGINAL", "DateTimeOriginal")
DEVICE_MANUFACTURER = _register("DEVICE_MANUFACTURER", "DeviceManufacturer")
DEVICE_MODEL = _register("DEVICE_MODEL", "DeviceModel")
DIGITAL_ZOOM_RATIO = _register("DIGITAL_ZOOM_RATIO", "DigitalZoomRatio", TagType.REAL)
EXIF_VERSION = _register("EXIF_VERSION", "ExifVersion")
EXPOSURE_COMPENSATION = _register(
    "EXPOSURE_COMPENSATION", "ExposureCompensation", TagType.REAL
)
EXPOSURE_PROGRAM = _register("EXPOSURE_PROGRAM", "ExposureProgram", TagType.INTEGER)
EXPOSURE_TIME = _register("EXPOSURE_TIME", "ExposureTime", TagType.REAL)
FILE_NAME = _register("FILE_NAME", "FileName")
FILE_TYPE = _register("FILE_TYPE", "FileType")
FLASH = _register("FLASH", "Flash", TagType.INTEGER)
FNUMBER = _register("FNUMBER", "FNumber", TagType.REAL)
FOCAL_LENGTH = _register("FOCAL_LENGTH", "FocalLength", TagType.REAL)
FOCAL_LENGTH_35MM = _register(
    "FOCAL_LENGTH_35MM", "FocalLengthIn35mmFormat", TagType.INTEGER
)
GPS_ALTITUDE = _register("GPS_ALTITUDE", "GPSAltitude", TagType.REAL)
GPS_ALTITUDE_REF = _register("GPS_ALTITUDE_REF", "GPSAltitudeRef", TagType.INTEGER)
GPS_BEARING = _register("GPS_BEARING", "GPSDestBearing", TagType.REAL)
GPS_BEARING_REF = _register("GPS_BEARING_REF", "GPSDestBearingRef")
GPS_DATESTAMP = _register("GPS_DATESTAMP", "GPSDateStamp")
GPS_LATITUDE = _register("GPS_LATITUDE", "GPSLatitude", TagType.REAL)
GPS_LATITUDE_REF = _register("GPS_LATITUDE_REF", "GPSLatitudeRef")
GPS_LONGITUDE = _register("GPS_LONGITUDE", "GPSLongitude", TagType.REAL)
GPS_LONGITUDE_REF = _register("GPS_LONGITUDE_REF", "GPSLongitudeRef")
GPS_PROCESS_METHOD = _register("GPS_PROCESS_METHOD", "GPSProcessingMethod")
GPS_SPEED = _register("GPS_SPEED", "GPSSpeed", TagType.REAL)
GPS_SPEED_REF = _register("GPS_SPEED_REF", "GPSSpeedRef")
GPS_TIMESTAMP = _register("GPS_TIMESTAMP", "GPSTimeStamp")
IMAGE_HEIGHT = _register("IMAGE_HEIGHT", "ImageHeight", TagType.INTEGER)
IMAGE_WIDTH = _register("IMAGE_WIDTH", "ImageWidth", TagType.INTEGER)
ISO = _register("ISO", "ISO", TagType.INTEGER)
KEYWORDS = _register("KEYWORDS", "XPKeywords")
LENS_MAKE = _register("LENS_MAKE", "LensMake")
LENS_MODEL = _register("LENS_MODEL", "LensModel")
MAKE = _register("MAKE", "Make")
METERING_MODE = _register("METERING_MODE", "MeteringMode", TagType.INTEGER)
MIME_TYPE = _register("MIME_TYPE", "MIMEType")
MODEL = _register("MODEL", "Model")
ORIENTATION = _register("ORIENTATION", "Orientation", TagType.INTEGER)
OWNER_NAME = _register("OWNER_NAME", "OwnerName")
RATING = _register("RATING", "Rating", TagType.INTEGER)
RATING_PERCENT = _register("RATING_PERCENT", "RatingPercent", TagType.INTEGER)
ROTATION = _register("ROTATION", "Rotation", TagType.INTEGER)
SATURATION = _register("SATURATION", "Saturation", TagType.INTEGER)
SENSING_METHOD = _register("SENSING_METHOD", "SensingMethod", TagType.INTEGER)
SHARPNESS = _register("SHARPNESS", "Sharpness", TagType.INTEGER)
SHUTTER_SPEED = _register("SHUTTER_SPEED", "ShutterSpeedValue", TagType.REAL)
SOFTWARE = _register("SOFTWARE", "Software")
SUBJECT = _register("SUBJECT", "XPSubject")
TITLE = _register("TITLE", "XPTitle")
WHITE_BALANCE = _register("WHITE_BALANCE", "WhiteBalance", TagType.INTEGER)
X_RESOLUTION = _register("X_RESOLUTION", "XResolution", TagType.REAL)
Y_RESOLUTION = _register("Y_RESOLUTION", "YResolution", TagType.REAL)


TAGS: T.Mapping[str, Tag] = types.MappingProxyType(_REGISTRY)
TAGS_BY_NAME: T.Mapping[str, Tag] = types.MappingProxyType(
    {tag.name: tag for tag in _REGISTRY.values()}
)


def values() -> list[Tag]:
    return list(TAGS.values())


def lookup(key_or_name: str) -> Tag | None:
    """
    Find a tag by its registry key ("GPS_LATITUDE") or exiftool name ("GPSLatitude")
    """
    tag = TAGS.get(key_or_name.upper())
    if tag is None:
        tag = TAGS_BY_NAME.get(key_or_name)
    return tag
