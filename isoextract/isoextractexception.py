# Copyright (C) 2026  The isoextract authors

# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation;
# version 2.1 of the License.

# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.

# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301  USA

"""Exceptions raised by isoextract."""


class IsoExtractException(Exception):
    """The base Exception class for isoextract."""
    def __init__(self, msg):
        # type: (str) -> None
        Exception.__init__(self, msg)


class IsoExtractInvalidISO(IsoExtractException):
    """
    The Exception class raised when the bytes on the image do not follow the
    ISO9660 encoding at the point being decoded.
    """
    def __init__(self, msg):
        # type: (str) -> None
        IsoExtractException.__init__(self, msg)


class IsoExtractIOError(IsoExtractException, IOError):
    """The Exception class raised when the image cannot supply the bytes asked for."""
    def __init__(self, msg):
        # type: (str) -> None
        IsoExtractException.__init__(self, msg)


class IsoExtractInvalidInput(IsoExtractException):
    """The Exception class raised for invalid input from the caller."""
    def __init__(self, msg):
        # type: (str) -> None
        IsoExtractException.__init__(self, msg)


class IsoExtractInternalError(IsoExtractException):
    """The Exception class raised when an object is used in the wrong state."""
    def __init__(self, msg):
        # type: (str) -> None
        IsoExtractException.__init__(self, msg)
