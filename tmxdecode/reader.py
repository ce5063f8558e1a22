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

Pulls attributes and payloads out of TMX/TSX xml and hands them to the
decoders.  Assembling a full map is left to the caller.

"""
from __future__ import annotations

import logging
import os
from collections import namedtuple
from typing import Dict, List, Optional, Tuple
from xml.etree import ElementTree
from xml.parsers.expat import errors as expat_errors

from .errors import (
    CouldNotOpenFile,
    InvalidTileFound,
    MalformedAttributes,
    OtherError,
    PathIsNotFile,
    PrematureEnd,
    XmlDecodingError,
)
from .layerdata import EncodingFormat, classify_encoding, decode_layer_data
from .properties import PropertyValue, decode_property_value
from .utils import parse_u32
from .wangid import WangId, decode_wang_id

__all__ = (
    "LayerData",
    "decode_data_node",
    "decode_layer_node",
    "load_xml",
    "parse_properties",
    "parse_wang_tiles",
    "parse_xml_string",
)

logger = logging.getLogger(__name__)

LayerData = namedtuple("LayerData", ["format", "gids"])

# expat errors that only happen when the document is cut short
_premature_end_codes = frozenset(
    expat_errors.codes[message]
    for message in (
        expat_errors.XML_ERROR_NO_ELEMENTS,
        expat_errors.XML_ERROR_UNCLOSED_TOKEN,
        expat_errors.XML_ERROR_PARTIAL_CHAR,
        expat_errors.XML_ERROR_UNCLOSED_CDATA_SECTION,
    )
)


def _xml_error(error: ElementTree.ParseError, source: str):
    if getattr(error, "code", None) in _premature_end_codes:
        return PrematureEnd("{0} ended early: {1}".format(source, error))
    return XmlDecodingError(error)


def parse_xml_string(text: str) -> ElementTree.Element:
    """Return the root element of a xml string.

    Raises:
        PrematureEnd: If the document is truncated.
        XmlDecodingError: If the document is not well formed.

    """
    try:
        return ElementTree.fromstring(text)
    except ElementTree.ParseError as error:
        logger.debug("cannot parse xml: %s", error)
        raise _xml_error(error, "document") from error


def load_xml(path) -> ElementTree.Element:
    """Return the root element of a TMX or TSX file.

    Args:
        path: Path to the file.

    Raises:
        PathIsNotFile: If `path` names a folder rather than a file.
        CouldNotOpenFile: If the file cannot be opened.
        PrematureEnd: If the document is truncated.
        XmlDecodingError: If the document is not well formed.

    """
    path = os.fspath(path)
    if not os.path.basename(path) or os.path.isdir(path):
        raise PathIsNotFile(path)
    try:
        fp = open(path, "rb")
    except OSError as error:
        msg = "Error loading {0}: {1}"
        logger.debug(msg.format(path, error))
        raise CouldNotOpenFile(path, error) from error
    with fp:
        try:
            return ElementTree.parse(fp).getroot()
        except ElementTree.ParseError as error:
            logger.debug("cannot parse %s: %s", path, error)
            raise _xml_error(error, path) from error


def _get_u32(node: ElementTree.Element, key: str) -> int:
    value = node.get(key)
    if value is None:
        raise MalformedAttributes(
            "<{0}> is missing the {1} attribute".format(node.tag, key)
        )
    try:
        return parse_u32(value)
    except ValueError as error:
        raise MalformedAttributes(
            "<{0}> has invalid {1}: {2}".format(node.tag, key, error)
        ) from error


def _read_tile_elements(node: ElementTree.Element) -> List[int]:
    gids = list()
    for child in node.findall("tile"):
        # an empty <tile/> is an empty cell
        value = child.get("gid", "0")
        try:
            gids.append(parse_u32(value))
        except ValueError as error:
            raise InvalidTileFound(str(error)) from error
    return gids


def decode_data_node(
    node: ElementTree.Element, width: int, height: int, strict: bool = False
) -> LayerData:
    """Decode a ``<data>`` element of a tile layer.

    Args:
        node (ElementTree.Element): The data element.
        width (int): Layer width in tiles.
        height (int): Layer height in tiles.
        strict (bool): Refuse the deprecated per-tile format.

    Returns:
        LayerData: The format that was read, and the raw gids.

    """
    if node.find("chunk") is not None:
        msg = "Tile layer chunks (infinite maps) are not supported."
        logger.debug(msg)
        raise OtherError(msg)

    fmt: EncodingFormat = classify_encoding(node.get("encoding"), node.get("compression"))
    if fmt.deprecated and not strict:
        payload = _read_tile_elements(node)
    else:
        payload = node.text or ""
    gids = decode_layer_data(
        fmt.encoding, fmt.compression, payload, width, height, strict=strict
    )
    return LayerData(fmt, gids)


def decode_layer_node(
    node: ElementTree.Element, strict: bool = False
) -> Tuple[Optional[str], int, int, LayerData]:
    """Read a ``<layer>`` element.

    Returns:
        Tuple[Optional[str], int, int, LayerData]: name, width, height and data.

    """
    width = _get_u32(node, "width")
    height = _get_u32(node, "height")
    data_node = node.find("data")
    if data_node is None:
        raise PrematureEnd(
            "layer {0!r} has no data element".format(node.get("name"))
        )
    return node.get("name"), width, height, decode_data_node(
        data_node, width, height, strict
    )


def parse_properties(node: ElementTree.Element) -> Dict[str, PropertyValue]:
    """Parse the ``<properties>`` of a Tiled xml node and return a dict.

    Args:
        node (ElementTree.Element): Etree element to inspect.

    Returns:
        Dict[str, PropertyValue]: Typed properties, as set in the Tiled editor.

    """
    d = dict()
    for child in node.findall("properties"):
        for subnode in child.findall("property"):
            name = subnode.get("name")
            if name is None:
                raise MalformedAttributes("<property> is missing the name attribute")
            # multi-line strings are stored as element text
            value = subnode.get("value")
            if value is None:
                value = subnode.text or ""
            d[name] = decode_property_value(subnode.get("type"), value)
    return d


def parse_wang_tiles(node: ElementTree.Element) -> Dict[int, WangId]:
    """Return the WangId of every ``<wangtile>`` in a wang set, by tile id."""
    tiles = dict()
    for child in node.iter("wangtile"):
        tileid = _get_u32(child, "tileid")
        raw = child.get("wangid")
        if raw is None:
            raise MalformedAttributes("<wangtile> is missing the wangid attribute")
        tiles[tileid] = decode_wang_id(raw)
    return tiles
