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
Positioned, sector-granular reads from an ISO9660 image.
"""

import logging
import os

from isoextract import isoextractexception

# For mypy annotations
from typing import BinaryIO  # NOQA pylint: disable=unused-import

# Ecma-119, 6.1.2: logical sectors are 2048 bytes on every medium we handle.
SECTOR_SIZE = 2048

_logger = logging.getLogger(__name__)


class SectorReader:
    """
    A class that reads whole sectors, or byte ranges that start on a sector
    boundary, out of an image file object.  Every read starts with an absolute
    seek, so the position of the underlying file object is never relied on.
    """
    __slots__ = ('_fp',)

    def __init__(self, fp):
        # type: (BinaryIO) -> None
        if hasattr(fp, 'mode') and 'b' not in fp.mode:
            raise isoextractexception.IsoExtractInvalidInput("The file to open must be in binary mode (add 'b' to the open flags)")

        self._fp = fp

    def _seek_to_sector(self, index):
        # type: (int) -> None
        """
        An internal method to seek to a particular sector on the image.

        Parameters:
         index - The sector to seek to.
        Returns:
         Nothing.
        """
        if index < 0:
            raise isoextractexception.IsoExtractInvalidInput('Sector index must be non-negative, saw %d' % (index))
        self._fp.seek(index * SECTOR_SIZE)

    def read_range(self, index, length):
        # type: (int, int) -> bytes
        """
        Read exactly 'length' bytes starting at the beginning of a sector.

        Parameters:
         index - The sector the data starts at.
         length - The number of bytes to read.
        Returns:
         The bytes read from the image.
        """
        if length < 0:
            raise isoextractexception.IsoExtractInvalidInput('Read length must be non-negative, saw %d' % (length))

        self._seek_to_sector(index)
        data = self._fp.read(length)
        if len(data) != length:
            raise isoextractexception.IsoExtractIOError('Short read at sector %d: wanted %d bytes, got %d' % (index, length, len(data)))

        return data

    def read_sector(self, index):
        # type: (int) -> bytes
        """
        Read one full sector.

        Parameters:
         index - The sector to read.
        Returns:
         The SECTOR_SIZE bytes of that sector.
        """
        return self.read_range(index, SECTOR_SIZE)

    def copy_range(self, index, length, outfp, blocksize=8192):
        # type: (int, int, BinaryIO, int) -> None
        """
        Copy 'length' bytes starting at a sector out to another file object,
        'blocksize' bytes at a time.  Unlike read_range, the data is never held
        in memory all at once.

        Parameters:
         index - The sector the data starts at.
         length - The number of bytes to copy.
         outfp - The file object to write the data to.
         blocksize - How much data to copy per iteration.
        Returns:
         Nothing.
        """
        if length < 0:
            raise isoextractexception.IsoExtractInvalidInput('Copy length must be non-negative, saw %d' % (length))
        if blocksize <= 0:
            raise isoextractexception.IsoExtractInvalidInput('Block size must be positive, saw %d' % (blocksize))

        self._seek_to_sector(index)
        left = length
        readsize = blocksize
        while left > 0:
            if left < readsize:
                readsize = left
            data = self._fp.read(readsize)
            if len(data) != readsize:
                raise isoextractexception.IsoExtractIOError('Short read at sector %d: wanted %d bytes, got %d' % (index, length, length - left + len(data)))
            outfp.write(data)
            left -= readsize

    def image_size(self):
        # type: () -> int
        """
        Get the length of the image in bytes.  The position of the underlying
        file object is restored afterwards.

        Parameters:
         None.
        Returns:
         The size of the image in bytes.
        """
        old = self._fp.tell()
        self._fp.seek(0, os.SEEK_END)
        ret = self._fp.tell()
        self._fp.seek(old)
        _logger.debug('Image is %d bytes (%d sectors)', ret, ret // SECTOR_SIZE)
        return ret
