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

"""
The class to support ISO9660 Directory Records, and the parser that turns the
raw extent of a directory into a list of them.
"""

import logging
import struct

from isoextract import isoextractexception
from isoextract import sectorio
from isoextract import utils

# For mypy annotations
from typing import List  # NOQA pylint: disable=unused-import

_logger = logging.getLogger(__name__)


class DirectoryRecord:
    """A class that represents an ISO9660 directory record."""
    __slots__ = ('initialized', 'dr_len', 'xattr_len', 'orig_extent_loc',
                 'data_length', 'file_flags', 'len_fi', 'file_ident', 'name',
                 'isdir', 'is_root', 'children', '_children_tracked')

    FILE_FLAG_EXISTENCE_BIT = 0
    FILE_FLAG_DIRECTORY_BIT = 1
    FILE_FLAG_MULTI_EXTENT_BIT = 7

    # The part of the record before the file identifier, Ecma-119 9.1.
    FIXED_LENGTH = 33

    def __init__(self):
        # type: () -> None
        self.initialized = False
        self.is_root = False
        self.isdir = False
        self.children = []  # type: List[DirectoryRecord]
        self._children_tracked = False

    def parse(self, record, is_root=False):
        # type: (bytes, bool) -> None
        """
        Parse a directory record out of a string.

        Parameters:
         record - The string to parse for this record; the first byte is the
                  length of the record.
         is_root - Whether this is the root directory record embedded in the
                   Primary Volume Descriptor.
        Returns:
         Nothing.
        """
        if self.initialized:
            raise isoextractexception.IsoExtractInternalError('Directory Record already initialized')

        if len(record) > 255:
            # Since the length is supposed to be 8 bits, this should never
            # happen.
            raise isoextractexception.IsoExtractInvalidISO('Directory record longer than 255 bytes!')

        if len(record) < self.FIXED_LENGTH:
            raise isoextractexception.IsoExtractInvalidISO('Directory record too short (%d bytes)' % (len(record)))

        (self.dr_len, self.xattr_len) = struct.unpack_from('=BB', record, 0)
        if self.dr_len < self.FIXED_LENGTH:
            raise isoextractexception.IsoExtractInvalidISO('Directory record length %d is shorter than the fixed fields' % (self.dr_len))

        self.orig_extent_loc = utils.decode_both_endian_32(record[2:10])
        self.data_length = utils.decode_both_endian_32(record[10:18])
        self.file_flags = record[25]
        self.len_fi = record[32]

        end_of_ident = self.FIXED_LENGTH + self.len_fi
        if end_of_ident > self.dr_len:
            raise isoextractexception.IsoExtractInvalidISO('File identifier length %d runs past the record length %d' % (self.len_fi, self.dr_len))
        if end_of_ident > len(record):
            raise isoextractexception.IsoExtractInvalidISO('File identifier length %d runs past the end of the data' % (self.len_fi))

        if self.file_flags & (1 << self.FILE_FLAG_MULTI_EXTENT_BIT):
            _logger.warning('Multi-extent record found; only its first extent will be used')

        if is_root:
            self.is_root = True
            # A root directory entry should always have 0 as the identifier.
            # However, we have seen ISOs in the wild that don't have this set
            # properly to 0, so we override whatever was parsed.
            self.file_ident = b'\x00'
            self.isdir = True
            self.name = '/'
        else:
            self.file_ident = record[self.FIXED_LENGTH:end_of_ident]
            if self.file_flags & (1 << self.FILE_FLAG_DIRECTORY_BIT):
                self.isdir = True

            if self.file_ident in (b'\x00', b'\x01'):
                self.name = '.' if self.file_ident == b'\x00' else '..'
            else:
                # Bytes outside of ASCII are kept as surrogates so that they are
                # written back to the host unchanged.
                self.name = self.file_ident.split(b';')[0].decode('ascii', 'surrogateescape')
                _check_name(self.name)

        self.initialized = True

    def is_dir(self):
        # type: () -> bool
        """
        Determine whether this Directory Record is a directory.

        Parameters:
         None.
        Returns:
         True if this DirectoryRecord object is a directory, False otherwise.
        """
        if not self.initialized:
            raise isoextractexception.IsoExtractInternalError('Directory Record not initialized')
        return self.isdir

    def is_file(self):
        # type: () -> bool
        """Determine whether this Directory Record is a file."""
        return not self.is_dir()

    def is_dot(self):
        # type: () -> bool
        """
        Determine whether this Directory Record is a 'dot' entry, the record
        that points back at the directory it is in.

        Parameters:
         None.
        Returns:
         True if this DirectoryRecord object is a 'dot' entry, False otherwise.
        """
        if not self.initialized:
            raise isoextractexception.IsoExtractInternalError('Directory Record not initialized')
        return not self.is_root and self.file_ident == b'\x00'

    def is_dotdot(self):
        # type: () -> bool
        """
        Determine whether this Directory Record is a 'dotdot' entry, the record
        that points at the parent directory.

        Parameters:
         None.
        Returns:
         True if this DirectoryRecord object is a 'dotdot' entry, False otherwise.
        """
        if not self.initialized:
            raise isoextractexception.IsoExtractInternalError('Directory Record not initialized')
        return self.file_ident == b'\x01'

    def extent_location(self):
        # type: () -> int
        """
        Get the sector this Directory Record's data starts at.

        Parameters:
         None.
        Returns:
         Integer extent location.
        """
        if not self.initialized:
            raise isoextractexception.IsoExtractInternalError('Directory Record not initialized')
        return self.orig_extent_loc

    def get_data_length(self):
        # type: () -> int
        """
        Get the length of the data that this Directory Record points to.

        Parameters:
         None.
        Returns:
         The length of the data that this Directory Record points to.
        """
        if not self.initialized:
            raise isoextractexception.IsoExtractInternalError('Directory Record not initialized')
        return self.data_length

    def track_children(self, children):
        # type: (List[DirectoryRecord]) -> None
        """
        Attach the parsed contents of this directory.  This can only happen
        once per record.

        Parameters:
         children - The records parsed out of this directory's extent.
        Returns:
         Nothing.
        """
        if not self.initialized:
            raise isoextractexception.IsoExtractInternalError('Directory Record not initialized')
        if not self.isdir:
            raise isoextractexception.IsoExtractInternalError('Only directories can have children')
        if self._children_tracked:
            raise isoextractexception.IsoExtractInternalError('Children of %s already tracked' % (self.name))

        self.children = list(children)
        self._children_tracked = True

    def children_tracked(self):
        # type: () -> bool
        """Whether track_children has been called on this record."""
        return self._children_tracked

    def __repr__(self):
        if not self.initialized:
            return '<DirectoryRecord (uninitialized)>'
        return '<DirectoryRecord %s %s extent=%d length=%d>' % ('dir' if self.isdir else 'file',
                                                                 self.name,
                                                                 self.orig_extent_loc,
                                                                 self.data_length)


def _check_name(name):
    # type: (str) -> None
    """
    An internal function to make sure a decoded identifier is usable as a
    single component of a host path.

    Parameters:
     name - The identifier with the version stripped off.
    Returns:
     Nothing.
    """
    if name in ('', '.', '..'):
        raise isoextractexception.IsoExtractInvalidISO('Invalid file identifier %r' % (name))
    for forbidden in ('/', '\\', '\x00'):
        if forbidden in name:
            raise isoextractexception.IsoExtractInvalidISO('File identifier %r contains a path separator or NUL' % (name))


def parse_directory_block(data):
    # type: (bytes) -> List[DirectoryRecord]
    """
    Parse the raw extent of a directory into Directory Records.  The 'dot' and
    'dotdot' records are dropped; everything else is returned in the order it
    is recorded on the image.

    Parameters:
     data - The bytes of the directory's extent.
    Returns:
     A list of DirectoryRecord objects.
    """
    entries = []  # type: List[DirectoryRecord]
    length = len(data)
    offset = 0
    while offset < length:
        lenbyte = data[offset]
        if lenbyte == 0:
            # A zero length is the padding at the end of this sector; records
            # never cross a sector boundary, so continue at the next one.
            next_sector = (offset // sectorio.SECTOR_SIZE + 1) * sectorio.SECTOR_SIZE
            if next_sector <= offset:
                break
            offset = next_sector
            continue

        if offset + lenbyte > length:
            _logger.warning('Directory record at offset %d (length %d) runs past the end of the directory (%d bytes); ending the listing',
                            offset, lenbyte, length)
            break

        new_record = DirectoryRecord()
        new_record.parse(data[offset:offset + lenbyte])
        offset += lenbyte

        if new_record.is_dot() or new_record.is_dotdot():
            continue

        entries.append(new_record)

    return entries


def read_directory(reader, dir_record):
    # type: (sectorio.SectorReader, DirectoryRecord) -> List[DirectoryRecord]
    """
    Read the extent of a directory off of the image, parse it, and attach the
    result to the directory record as its children.

    Parameters:
     reader - The SectorReader for the image.
     dir_record - The directory to read.
    Returns:
     The list of child DirectoryRecord objects.
    """
    if not dir_record.is_dir():
        raise isoextractexception.IsoExtractInvalidInput('%s is not a directory' % (dir_record.name))

    data = reader.read_range(dir_record.extent_location(),
                             dir_record.get_data_length())
    children = parse_directory_block(data)
    _logger.debug('Directory %s at extent %d: %d entries', dir_record.name,
                  dir_record.extent_location(), len(children))
    dir_record.track_children(children)

    return dir_record.children
