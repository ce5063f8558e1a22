"""
Copyright (C) 2012-2023, Leif Theden <leif.theden@gmail.com>

This file is part of tmxdecode.

tmxdecode is free software: you can redistribute it and/or modify
it under the terms of the GNU Lesser General Public License as
published by the Free Software Foundation, either version 3 of the
License, or (at your option) any later version.

tmxdecode is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Lesser General Public License for more details.

You should have received a copy of the GNU Lesser General Public
License along with tmxdecode.  If not, see <https://www.gnu.org/licenses/>.

"""
from __future__ import annotations

import logging
import re
from collections import namedtuple
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Optional

from .errors import InvalidPropertyValue, UnknownPropertyType
from .utils import is_hex, parse_i32, parse_u32

__all__ = (
    "Color",
    "PropertyValue",
    "StringValue",
    "IntValue",
    "FloatValue",
    "BoolValue",
    "ColorValue",
    "FileValue",
    "ObjectValue",
    "convert_to_bool",
    "decode_property_value",
    "parse_color",
    "parse_float",
    "property_parsers",
    "register_property_type",
)

logger = logging.getLogger(__name__)

Color = namedtuple("Color", ["alpha", "red", "green", "blue"])

_float_re = re.compile(
    r"[+-]?(inf|infinity|nan|([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?)",
    re.ASCII | re.IGNORECASE,
)


@dataclass(frozen=True)
class PropertyValue:
    """Base class of typed property values.

    ``type`` names the Tiled type tag that produced the value.

    """

    type: ClassVar[str] = ""
    value: Any


@dataclass(frozen=True)
class StringValue(PropertyValue):
    type: ClassVar[str] = "string"
    value: str


@dataclass(frozen=True)
class IntValue(PropertyValue):
    type: ClassVar[str] = "int"
    value: int


@dataclass(frozen=True)
class FloatValue(PropertyValue):
    type: ClassVar[str] = "float"
    value: float


@dataclass(frozen=True)
class BoolValue(PropertyValue):
    type: ClassVar[str] = "bool"
    value: bool


@dataclass(frozen=True)
class ColorValue(PropertyValue):
    type: ClassVar[str] = "color"
    value: Color


@dataclass(frozen=True)
class FileValue(PropertyValue):
    """Path relative to the document that declared the property."""

    type: ClassVar[str] = "file"
    value: str


@dataclass(frozen=True)
class ObjectValue(PropertyValue):
    """Id of another object in the map; 0 means no object."""

    type: ClassVar[str] = "object"
    value: int

    @property
    def is_empty(self) -> bool:
        return self.value == 0


def convert_to_bool(value: str) -> bool:
    """Convert the literals Tiled writes for booleans.

    Args:
        value (str): String to test.

    Raises:
        ValueError: If `value` is not exactly "true" or "false".

    Returns:
        bool: The converted boolean.

    """
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError('cannot parse "{}" as bool'.format(value))


def parse_float(value: str) -> float:
    if not _float_re.fullmatch(value):
        raise ValueError('cannot parse "{}" as float'.format(value))
    return float(value)


def parse_color(value: str) -> Color:
    """Parse a ``#AARRGGBB`` or ``#RRGGBB`` color; the ``#`` is optional.

    Missing alpha is fully opaque.

    Raises:
        ValueError: If `value` has the wrong length or is not hex.

    """
    text = value[1:] if value.startswith("#") else value
    if len(text) not in (6, 8) or not is_hex(text):
        raise ValueError('cannot parse "{}" as color'.format(value))
    channels = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
    if len(channels) == 3:
        channels.insert(0, 255)
    return Color(*channels)


def _string(value: str) -> StringValue:
    return StringValue(value)


def _int(value: str) -> IntValue:
    return IntValue(parse_i32(value))


def _float(value: str) -> FloatValue:
    return FloatValue(parse_float(value))


def _bool(value: str) -> BoolValue:
    return BoolValue(convert_to_bool(value))


def _color(value: str) -> ColorValue:
    return ColorValue(parse_color(value))


def _file(value: str) -> FileValue:
    return FileValue(value)


def _object(value: str) -> ObjectValue:
    return ObjectValue(parse_u32(value))


# casting for properties type
property_parsers: Dict[str, Callable[[str], PropertyValue]] = {
    "bool": _bool,
    "color": _color,
    "file": _file,
    "float": _float,
    "int": _int,
    "object": _object,
    "string": _string,
}


def register_property_type(
    name: str, parser: Callable[[str], PropertyValue]
) -> None:
    """Add a property type tag.

    ``parser`` receives the raw value text and returns a PropertyValue.
    It should raise ValueError for text it cannot read, which is reported
    as InvalidPropertyValue.

    """
    property_parsers[name] = parser


def decode_property_value(type_tag: Optional[str], raw_value: str) -> PropertyValue:
    """Convert the raw text of a property to a typed value.

    Args:
        type_tag (Optional[str]): ``type`` attribute; None means "string".
        raw_value (str): ``value`` attribute or element text.

    Raises:
        UnknownPropertyType: If `type_tag` is not a registered type.
        InvalidPropertyValue: If `raw_value` is not valid for `type_tag`.

    Returns:
        PropertyValue: The typed value.

    """
    if type_tag is None:
        type_tag = "string"
    try:
        parser = property_parsers[type_tag]
    except KeyError:
        logger.debug("property type %r is not supported", type_tag)
        raise UnknownPropertyType(type_tag) from None
    try:
        return parser(raw_value)
    except ValueError as error:
        logger.debug("invalid %s property value %r", type_tag, raw_value)
        raise InvalidPropertyValue(str(error)) from error
