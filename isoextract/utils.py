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

"""Various utilities for isoextract."""

import struct

from isoextract import isoextractexception

# There are a number of specific ways that numerical data is stored in the
# ISO9660/Ecma-119 standard.  In the text these are reference by the section
# number they are stored in.  The two that matter for extraction:
#
# 7.2.3 - 16-bit number, stored first as little-endian then as big-endian (4 bytes total)
# 7.3.3 - 32-bit number, stored first as little-endian then as big-endian (8 bytes total)


def decode_both_endian_32(data):
    # type: (bytes) -> int
    """
    A function to decode a 32-bit number stored in both byte orders, as
    described in Ecma-119 7.3.3.

    Parameters:
     data - The bytes holding the field; only the first 8 are looked at.
    Returns:
     The decoded unsigned 32-bit number.
    """
    if len(data) < 8:
        raise isoextractexception.IsoExtractInvalidISO('insufficient data for both-endian 32-bit field (%d bytes)' % (len(data)))

    (le,) = struct.unpack_from('<L', data, 0)
    (be,) = struct.unpack_from('>L', data, 4)
    if le != be:
        raise isoextractexception.IsoExtractInvalidISO('endianness mismatch: little-endian (%d) and big-endian (%d) disagree' % (le, be))

    return le


def decode_both_endian_16(data):
    # type: (bytes) -> int
    """
    A function to decode a 16-bit number stored in both byte orders, as
    described in Ecma-119 7.2.3.

    Parameters:
     data - The bytes holding the field; only the first 4 are looked at.
    Returns:
     The decoded unsigned 16-bit number.
    """
    if len(data) < 4:
        raise isoextractexception.IsoExtractInvalidISO('insufficient data for both-endian 16-bit field (%d bytes)' % (len(data)))

    (le,) = struct.unpack_from('<H', data, 0)
    (be,) = struct.unpack_from('>H', data, 2)
    if le != be:
        raise isoextractexception.IsoExtractInvalidISO('endianness mismatch: little-endian (%d) and big-endian (%d) disagree' % (le, be))

    return le
