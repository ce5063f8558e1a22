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

import binascii
import gzip
import logging
import struct
import zlib
from base64 import b64decode
from collections import namedtuple
from typing import Callable, Dict, List, Optional, Sequence, Union

import zstandard

from .errors import (
    Base64DecodingError,
    DecompressingError,
    InvalidEncodingFormat,
    InvalidTileFound,
    MalformedAttributes,
)
from .gids import split_gid
from .utils import parse_u32

__all__ = (
    "EncodingFormat",
    "SUPPORTED_ENCODINGS",
    "SUPPORTED_COMPRESSIONS",
    "classify_encoding",
    "decode_layer_data",
    "unpack_gids",
)

logger = logging.getLogger(__name__)

Payload = Union[str, Sequence[int]]


def zlib_decompress(data: bytes) -> bytes:
    dobj = zlib.decompressobj()
    out = dobj.decompress(data)
    if not dobj.eof:
        raise zlib.error("incomplete or truncated zlib stream")
    if dobj.unused_data:
        raise zlib.error("unexpected data after the end of the zlib stream")
    return out


def zstd_decompress(data: bytes) -> bytes:
    # decompressobj copes with frames that omit the content size
    dobj = zstandard.ZstdDecompressor().decompressobj()
    out = dobj.decompress(data)
    if not dobj.eof:
        raise zstandard.ZstdError("truncated zstd frame")
    if dobj.unused_data:
        raise zstandard.ZstdError("unexpected data after the end of the zstd frame")
    return out


decompressors: Dict[str, Callable[[bytes], bytes]] = {
    "gzip": gzip.decompress,
    "zlib": zlib_decompress,
    "zstd": zstd_decompress,
}

# exceptions the decompression backends raise for corrupt streams
decompress_errors = (zlib.error, OSError, EOFError, zstandard.ZstdError)

SUPPORTED_ENCODINGS = frozenset(("csv", "base64"))
SUPPORTED_COMPRESSIONS = frozenset(decompressors)


class EncodingFormat(namedtuple("EncodingFormat", ["encoding", "compression"])):
    """A validated combination of layer data encoding and compression.

    Only build these with ``classify_encoding``.

    """

    __slots__ = ()

    @property
    def deprecated(self) -> bool:
        """True for the legacy format that stores every tile as an xml element."""
        return self.encoding is None and self.compression is None

    def deprecation(self) -> Optional[InvalidEncodingFormat]:
        """Return the error describing a deprecated format, for callers that warn."""
        if self.deprecated:
            return InvalidEncodingFormat(None, None)
        return None


def classify_encoding(
    encoding: Optional[str] = None,
    compression: Optional[str] = None,
) -> EncodingFormat:
    """Validate an encoding and compression pair.

    Args:
        encoding (Optional[str]): ``encoding`` attribute of the data element.
        compression (Optional[str]): ``compression`` attribute of the data element.

    Raises:
        InvalidEncodingFormat: If either value is unknown, or compression is
            used with anything but base64.

    Returns:
        EncodingFormat: The validated pair.

    """
    if encoding is None:
        valid = compression is None
    elif encoding == "csv":
        valid = compression is None
    elif encoding == "base64":
        valid = compression is None or compression in SUPPORTED_COMPRESSIONS
    else:
        valid = False

    if not valid:
        logger.debug(
            "invalid layer format: encoding=%r compression=%r", encoding, compression
        )
        raise InvalidEncodingFormat(encoding, compression)
    return EncodingFormat(encoding, compression)


def decode_base64(text: str) -> bytes:
    try:
        return b64decode(text.strip(), validate=True)
    # non-ascii text raises a plain ValueError rather than binascii.Error
    except (binascii.Error, ValueError) as error:
        logger.debug("cannot decode base64 layer data: %s", error)
        raise Base64DecodingError(error) from error


def decompress(data: bytes, compression: str) -> bytes:
    try:
        return decompressors[compression](data)
    except decompress_errors as error:
        logger.debug("cannot decompress %s layer data: %s", compression, error)
        raise DecompressingError(error) from error


def unpack_bytes(data: bytes) -> List[int]:
    """Read a byte buffer as little-endian unsigned 32-bit gids."""
    count, remainder = divmod(len(data), 4)
    if remainder:
        raise InvalidTileFound(
            "{0} bytes of layer data is not a whole number of tiles".format(len(data))
        )
    return list(struct.unpack("<%dL" % count, data))


def split_csv(text: str) -> List[int]:
    """Read comma separated gids; whitespace around each value is ignored."""
    if not text.strip():
        return []
    gids = list()
    for token in text.split(","):
        try:
            gids.append(parse_u32(token.strip()))
        except ValueError as error:
            logger.debug("invalid csv tile %r", token)
            raise InvalidTileFound(str(error)) from error
    return gids


def unpack_gids(
    text: str,
    encoding: Optional[str] = None,
    compression: Optional[str] = None,
) -> List[int]:
    """Return all gids from encoded/compressed layer data

    Args:
        text (str): Layer data in text format.
        encoding (Optional[str]): Encoding used.
        compression (Optional[str]): Compression used.

    Raises:
        InvalidEncodingFormat: If the pair is not a text format.
        Base64DecodingError: If base64 text is malformed.
        DecompressingError: If the compressed stream is corrupt.
        InvalidTileFound: If a tile value cannot be read.

    Returns:
        List[int]: List of all the GIDs in the layer.

    """
    fmt = classify_encoding(encoding, compression)
    if fmt.encoding == "base64":
        data = decode_base64(text)
        if fmt.compression:
            data = decompress(data, fmt.compression)
        return unpack_bytes(data)
    elif fmt.encoding == "csv":
        return split_csv(text)
    # per-tile elements are not text; the reader collects them
    raise fmt.deprecation()


def check_tiles(gids: Sequence[int]) -> List[int]:
    """Validate gids that were read one xml element at a time."""
    checked = list()
    for gid in gids:
        if isinstance(gid, bool) or not isinstance(gid, int):
            raise InvalidTileFound("{0!r} is not a valid gid".format(gid))
        split_gid(gid)
        checked.append(gid)
    return checked


def decode_layer_data(
    encoding: Optional[str],
    compression: Optional[str],
    payload: Payload,
    width: int,
    height: int,
    strict: bool = False,
) -> List[int]:
    """Decode the payload of a tile layer into a flat list of gids.

    ``payload`` is the text content of the data element for csv and base64
    data.  For the deprecated format, where both encoding and compression
    are None, it is the sequence of gids read from the ``<tile>`` elements.

    Args:
        encoding (Optional[str]): ``encoding`` attribute, if any.
        compression (Optional[str]): ``compression`` attribute, if any.
        payload (Union[str, Sequence[int]]): Text, or per-tile gids.
        width (int): Layer width in tiles.
        height (int): Layer height in tiles.
        strict (bool): Refuse the deprecated per-tile format.

    Raises:
        TmxError: One of its subclasses; nothing is returned on failure.

    Returns:
        List[int]: ``width * height`` raw gids, flip flags included.

    """
    if width < 0 or height < 0:
        raise MalformedAttributes(
            "layer size {0}x{1} is negative".format(width, height)
        )

    fmt = classify_encoding(encoding, compression)
    if fmt.deprecated:
        if strict:
            raise fmt.deprecation()
        if isinstance(payload, (str, bytes)):
            raise MalformedAttributes(
                "layer data without encoding must be read from tile elements"
            )
        logger.info("layer data uses deprecated xml tile elements")
        gids = check_tiles(payload)
    else:
        if not isinstance(payload, str):
            raise MalformedAttributes(
                "{0} layer data must be text, got {1}".format(
                    fmt.encoding, type(payload).__name__
                )
            )
        gids = unpack_gids(payload, fmt.encoding, fmt.compression)

    expected = width * height
    if len(gids) != expected:
        msg = "layer has {0} tiles, expected {1} ({2}x{3})".format(
            len(gids), expected, width, height
        )
        logger.debug(msg)
        raise InvalidTileFound(msg)
    return gids
