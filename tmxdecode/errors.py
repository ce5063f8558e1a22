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

Errors raised while decoding Tiled documents.

Every failure is a subclass of TmxError.  The set is not exhaustive:
new kinds may be added in later releases, so code that catches specific
kinds should finish with an ``except TmxError`` arm.  OtherError is
reserved for failures that have no dedicated kind.

"""
from __future__ import annotations

from typing import Iterator, Optional

__all__ = (
    "TmxError",
    "MalformedAttributes",
    "Base64DecodingError",
    "DecompressingError",
    "XmlDecodingError",
    "PrematureEnd",
    "PathIsNotFile",
    "CouldNotOpenFile",
    "InvalidTileFound",
    "InvalidEncodingFormat",
    "InvalidPropertyValue",
    "UnknownPropertyType",
    "InvalidWangIdEncoding",
    "OtherError",
)


def _next_cause(error: BaseException) -> Optional[BaseException]:
    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__


class TmxError(Exception):
    """Base class for all tmxdecode errors."""

    cause: Optional[BaseException] = None

    def causes(self) -> Iterator[BaseException]:
        """Yield the chain of underlying exceptions, nearest first.

        Follows ``__cause__`` (set by ``raise ... from``), then
        ``__context__`` when no explicit cause was given.

        """
        seen = {id(self)}
        error = _next_cause(self) or self.cause
        while error is not None and id(error) not in seen:
            seen.add(id(error))
            yield error
            error = _next_cause(error)

    def root_cause(self) -> Optional[BaseException]:
        """Return the innermost underlying exception, or None."""
        error = None
        for error in self.causes():
            pass
        return error


class _WrappedError(TmxError):
    """Error that wraps an exception raised by another library."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause))
        self.cause = cause


class MalformedAttributes(TmxError):
    """An attribute was missing, had the wrong type or wasn't formatted correctly."""

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description


class Base64DecodingError(_WrappedError):
    """A base64 encoded dataset could not be decoded."""


class DecompressingError(_WrappedError):
    """A zlib, gzip or zstd stream could not be decompressed."""


class XmlDecodingError(_WrappedError):
    """A TMX or TSX document is not well formed XML."""


class PrematureEnd(TmxError):
    """The document ended before it was fully parsed."""

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description


class PathIsNotFile(TmxError):
    def __init__(self, path=None) -> None:
        super().__init__(
            "The path given is invalid because it isn't contained in any folder."
        )
        self.path = path


class CouldNotOpenFile(TmxError):
    """A file could not be opened because of an I/O error."""

    def __init__(self, path, cause: OSError) -> None:
        super().__init__("Could not open '{0}'. Error: {1}".format(path, cause))
        self.path = path
        self.cause = cause


class InvalidTileFound(TmxError):
    """There was an invalid tile in the layer data."""

    def __init__(self, detail: Optional[str] = None) -> None:
        msg = "Invalid tile found in map being parsed"
        if detail:
            msg = "{0}: {1}".format(msg, detail)
        super().__init__(msg)
        self.detail = detail


class InvalidEncodingFormat(TmxError):
    """Unknown encoding or compression, or an invalid combination of both.

    When both ``encoding`` and ``compression`` are None the error denotes
    the deprecated per-tile XML format rather than an unknown one; see
    ``deprecated``.  Callers may choose to warn instead of failing.

    """

    def __init__(
        self, encoding: Optional[str] = None, compression: Optional[str] = None
    ) -> None:
        if encoding is None and compression is None:
            msg = "Deprecated combination of encoding and compression"
        else:
            msg = (
                "Unknown encoding or compression format or invalid combination "
                "of both (for tile layers): {0} encoding with {1} compression".format(
                    encoding or "no", compression or "no"
                )
            )
        super().__init__(msg)
        self.encoding = encoding
        self.compression = compression

    @property
    def deprecated(self) -> bool:
        return self.encoding is None and self.compression is None


class InvalidPropertyValue(TmxError):
    """A property value does not match the grammar of its declared type."""

    def __init__(self, description: str) -> None:
        super().__init__("Invalid property value: {0}".format(description))
        self.description = description


class UnknownPropertyType(TmxError):
    """A property declares a type that is not supported.

    Supported types are string, int, float, bool, color, file and object,
    plus any added with ``register_property_type``.

    """

    def __init__(self, type_name: str) -> None:
        super().__init__("Unknown property value type '{0}'".format(type_name))
        self.type_name = type_name


class InvalidWangIdEncoding(TmxError):
    def __init__(self, read_string: str) -> None:
        super().__init__('"{0}" is not a valid WangId format'.format(read_string))
        self.read_string = read_string


class OtherError(TmxError):
    """Reserved for failures that have no dedicated error kind."""

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description
