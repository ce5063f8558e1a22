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

from collections import namedtuple
from enum import IntFlag
from typing import Iterator, List, Sequence, Tuple

from .errors import InvalidTileFound
from .utils import U32_MAX

__all__ = (
    "Flip",
    "GID_MASK",
    "TileFlags",
    "grid_rows",
    "split_gid",
    "strip_flags",
)


class Flip(IntFlag):
    """Transform bits Tiled stores in the top of a raw gid."""

    HORIZONTAL = 1 << 31
    VERTICAL = 1 << 30
    DIAGONAL = 1 << 29


# plain int: ~ on an IntFlag only inverts within its own members
GID_MASK = int(Flip.HORIZONTAL | Flip.VERTICAL | Flip.DIAGONAL)

TileFlags = namedtuple(
    "TileFlags", ("flipped_horizontally", "flipped_vertically", "flipped_diagonally")
)
no_flip = TileFlags(False, False, False)


def split_gid(raw_gid: int) -> Tuple[int, TileFlags]:
    """Separate a raw layer gid into the tileset gid and its flip flags.

    Args:
        raw_gid (int): Value read from layer data.

    Raises:
        InvalidTileFound: If `raw_gid` is not an unsigned 32-bit value.

    Returns:
        Tuple[int, TileFlags]: gid with the flags masked off, and the flags.

    """
    if not 0 <= raw_gid <= U32_MAX:
        raise InvalidTileFound("{0} is not a 32-bit gid".format(raw_gid))
    if raw_gid < Flip.DIAGONAL:
        return raw_gid, no_flip
    flags = Flip(raw_gid & GID_MASK)
    return (
        raw_gid & ~GID_MASK,
        TileFlags(
            Flip.HORIZONTAL in flags,
            Flip.VERTICAL in flags,
            Flip.DIAGONAL in flags,
        ),
    )


def strip_flags(gids: Sequence[int]) -> List[int]:
    """Return the gids of a decoded layer with every flip flag masked off."""
    return [split_gid(gid)[0] for gid in gids]


def grid_rows(gids: Sequence[int], width: int, height: int) -> List[List[int]]:
    """Arrange a flat, row-major layer as ``height`` rows of ``width`` gids.

    Raises:
        InvalidTileFound: If the layer does not hold exactly width * height gids.

    """
    if len(gids) != width * height:
        raise InvalidTileFound(
            "layer has {0} tiles, expected {1} ({2}x{3})".format(
                len(gids), width * height, width, height
            )
        )
    return list(_rows(gids, width, height))


def _rows(gids: Sequence[int], width: int, height: int) -> Iterator[List[int]]:
    for y in range(height):
        yield list(gids[y * width : (y + 1) * width])
