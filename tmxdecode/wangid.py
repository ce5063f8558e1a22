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
from collections import namedtuple
from typing import Tuple

from .errors import InvalidWangIdEncoding
from .utils import is_hex

__all__ = ("WangId", "decode_wang_id")

logger = logging.getLogger(__name__)

slot_names = (
    "top",
    "top_right",
    "right",
    "bottom_right",
    "bottom",
    "bottom_left",
    "left",
    "top_left",
)


class WangId(namedtuple("WangId", slot_names)):
    """Wang color index for each edge and corner of a tile, clockwise from the top.

    Each slot indexes the colors of the owning wang set; 0 means unset.

    """

    __slots__ = ()

    def edges(self) -> Tuple[int, int, int, int]:
        return self.top, self.right, self.bottom, self.left

    def corners(self) -> Tuple[int, int, int, int]:
        return self.top_right, self.bottom_right, self.bottom_left, self.top_left


def decode_wang_id(raw: str) -> WangId:
    """Decode a WangId written as 8 hex digits, one per slot.

    Args:
        raw (str): wangid attribute, such as "01020304".

    Raises:
        InvalidWangIdEncoding: If `raw` is not exactly 8 hex digits.

    Returns:
        WangId: The decoded id.

    """
    if len(raw) != len(slot_names) or not is_hex(raw):
        logger.debug("invalid wangid %r", raw)
        raise InvalidWangIdEncoding(raw)
    return WangId(*(int(c, 16) for c in raw))
