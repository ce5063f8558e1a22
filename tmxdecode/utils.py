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
import re

U32_MAX = 0xFFFFFFFF
I32_MIN = -(1 << 31)
I32_MAX = (1 << 31) - 1

# int() also takes whitespace, "_" and non-ascii digits; Tiled never writes those
_unsigned_re = re.compile(r"\+?[0-9]+", re.ASCII)
_signed_re = re.compile(r"[+-]?[0-9]+", re.ASCII)
_hex_re = re.compile(r"[0-9a-fA-F]*", re.ASCII)


def parse_u32(text: str) -> int:
    """Parse base-10 text as an unsigned 32-bit integer.

    Raises:
        ValueError: If `text` is not a number or is out of range.

    """
    if not _unsigned_re.fullmatch(text):
        raise ValueError('cannot parse "{}" as an unsigned integer'.format(text))
    value = int(text)
    if value > U32_MAX:
        raise ValueError('"{}" does not fit in 32 bits'.format(text))
    return value


def parse_i32(text: str) -> int:
    """Parse base-10 text as a signed 32-bit integer.

    Raises:
        ValueError: If `text` is not a number or is out of range.

    """
    if not _signed_re.fullmatch(text):
        raise ValueError('cannot parse "{}" as an integer'.format(text))
    value = int(text)
    if not I32_MIN <= value <= I32_MAX:
        raise ValueError('"{}" does not fit in 32 bits'.format(text))
    return value


def is_hex(text: str) -> bool:
    return _hex_re.fullmatch(text) is not None
