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

"""Main IsoExtract class, which walks an ISO and writes its files out."""

import logging
import os

from isoextract import dr
from isoextract import headervd
from isoextract import isoextractexception
from isoextract import sectorio

# For mypy annotations
from typing import BinaryIO, Callable, Generator, List, Optional, Tuple  # NOQA pylint: disable=unused-import

_logger = logging.getLogger(__name__)

# Directory nesting deeper than this is refused rather than recursed into.
DEFAULT_MAX_DEPTH = 64


class IsoExtract:
    """The main class for extracting the contents of ISOs."""
    __slots__ = ('_initialized', '_cdfp', '_managing_fp', '_reader', 'pvd',
                 '_iso_size', 'max_depth')

    def __init__(self, max_depth=DEFAULT_MAX_DEPTH):
        # type: (int) -> None
        if max_depth < 0:
            raise isoextractexception.IsoExtractInvalidInput('max_depth must be non-negative')
        self.max_depth = max_depth
        self._initialize()

    def _initialize(self):
        # type: () -> None
        """
        An internal method to re-initialize the object.  Called from
        both __init__ and close.

        Parameters:
         None.
        Returns:
         Nothing.
        """
        self._cdfp = None  # type: Optional[BinaryIO]
        self._reader = None  # type: Optional[sectorio.SectorReader]
        self.pvd = None  # type: Optional[headervd.PrimaryVolumeDescriptor]
        self._managing_fp = False
        self._iso_size = 0
        self._initialized = False

    def _open_fp(self, fp):
        # type: (BinaryIO) -> None
        """
        An internal method to open an existing ISO for extraction.

        Parameters:
         fp - The file object containing the ISO to open up.
        Returns:
         Nothing.
        """
        self._reader = sectorio.SectorReader(fp)
        self._cdfp = fp
        self._iso_size = self._reader.image_size()
        self.pvd = headervd.locate_pvd(self._reader)

        self._initialized = True

    def open(self, filename):
        # type: (str) -> None
        """
        Open up an existing ISO for extraction.

        Parameters:
         filename - The filename containing the ISO to open up.
        Returns:
         Nothing.
        """
        if self._initialized:
            raise isoextractexception.IsoExtractInvalidInput('This object already has an ISO; either close it or create a new object')

        fp = open(filename, 'rb')  # pylint: disable=consider-using-with
        try:
            self._open_fp(fp)
        except Exception:
            fp.close()
            self._initialize()
            raise
        self._managing_fp = True

    def open_fp(self, fp):
        # type: (BinaryIO) -> None
        """
        Open up an existing ISO for extraction.  Note that the file object
        passed in here must stay open for the lifetime of this object, and
        that close() will not close it.

        Parameters:
         fp - The file object containing the ISO to open up.
        Returns:
         Nothing.
        """
        if self._initialized:
            raise isoextractexception.IsoExtractInvalidInput('This object already has an ISO; either close it or create a new object')

        try:
            self._open_fp(fp)
        except Exception:
            self._initialize()
            raise

    def close(self):
        # type: () -> None
        """
        Close the IsoExtract object, and re-initialize the object to the
        defaults.  The object can then be re-used for another ISO.

        Parameters:
         None.
        Returns:
         Nothing.
        """
        if not self._initialized:
            raise isoextractexception.IsoExtractInvalidInput('This object is not initialized; call open() first')

        if self._managing_fp and self._cdfp is not None:
            self._cdfp.close()

        self._initialize()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        if self._initialized:
            self.close()

    def _check_initialized(self):
        # type: () -> None
        if not self._initialized:
            raise isoextractexception.IsoExtractInvalidInput('This object is not initialized; call open() first')

    def get_iso_size(self):
        # type: () -> int
        """
        Get the size of the opened image in bytes.

        Parameters:
         None.
        Returns:
         The size of the image in bytes.
        """
        self._check_initialized()
        return self._iso_size

    def _children(self, dir_record):
        # type: (dr.DirectoryRecord) -> List[dr.DirectoryRecord]
        """
        An internal method to get the contents of a directory, reading them
        off of the image the first time they are asked for.
        """
        if dir_record.children_tracked():
            return dir_record.children
        if self._reader is None:
            raise isoextractexception.IsoExtractInternalError('No image to read from')
        # The whole extent is read in one go, so it has to fit in the image.
        self._check_extent_bounds(dir_record)
        return dr.read_directory(self._reader, dir_record)

    def root_entries(self):
        # type: () -> List[dr.DirectoryRecord]
        """
        Get the entries of the root directory of the ISO.

        Parameters:
         None.
        Returns:
         A list of DirectoryRecord objects, in the order they are on the ISO.
        """
        self._check_initialized()
        return self._children(self.pvd.root_directory_record())

    def _check_extent_bounds(self, record):
        # type: (dr.DirectoryRecord) -> None
        """
        An internal method to make sure the data of a record lies within the
        image.

        Parameters:
         record - The record to check.
        Returns:
         Nothing.
        """
        end = record.extent_location() * sectorio.SECTOR_SIZE + record.get_data_length()
        if end > self._iso_size:
            raise isoextractexception.IsoExtractInvalidISO('%s (extent %d, %d bytes) ends at byte %d, past the end of the image (%d bytes)' % (record.name, record.extent_location(), record.get_data_length(), end, self._iso_size))

    def _extract_entries(self, entries, outdir, depth, blocksize, progress):
        # type: (List[dr.DirectoryRecord], str, int, int, Optional[Callable[[str, int], None]]) -> int
        if depth > self.max_depth:
            raise isoextractexception.IsoExtractInvalidISO('Directories nested deeper than %d levels' % (self.max_depth))

        total = 0
        for entry in entries:
            out_path = os.path.join(outdir, entry.name)
            if entry.is_dir():
                os.makedirs(out_path, exist_ok=True)
                total += self._extract_entries(self._children(entry), out_path,
                                               depth + 1, blocksize, progress)
                continue

            length = entry.get_data_length()
            # Zero-length files sometimes carry random extent locations, so
            # only real data is held to the bounds of the image.
            if length > 0:
                self._check_extent_bounds(entry)

            with open(out_path, 'wb') as outfp:
                self._reader.copy_range(entry.extent_location(), length, outfp,
                                        blocksize)
            _logger.debug('Wrote %s (%d bytes from extent %d)', out_path, length,
                          entry.extent_location())

            total += length
            if progress is not None:
                progress(out_path, length)

        return total

    def extract_entries(self, entries, outdir, blocksize=8192, progress=None):
        # type: (List[dr.DirectoryRecord], str, int, Optional[Callable[[str, int], None]]) -> int
        """
        Write a list of entries, and everything below the directories among
        them, into a directory on the host.

        Parameters:
         entries - The DirectoryRecord objects to extract.
         outdir - The host directory to write into; it must already exist.
         blocksize - The number of bytes in each transfer.
         progress - An optional callable that is passed the host path and the
                    length of every file after it is written.
        Returns:
         The total number of file bytes written.
        """
        self._check_initialized()
        return self._extract_entries(entries, outdir, 0, blocksize, progress)

    def extract(self, outdir, blocksize=8192, progress=None):
        # type: (str, int, Optional[Callable[[str, int], None]]) -> int
        """
        Extract the whole ISO into a directory on the host, creating it if
        necessary.

        Parameters:
         outdir - The host directory to write into.
         blocksize - The number of bytes in each transfer.
         progress - An optional callable that is passed the host path and the
                    length of every file after it is written.
        Returns:
         The total number of file bytes written.
        """
        self._check_initialized()
        os.makedirs(outdir, exist_ok=True)
        return self._extract_entries(self.root_entries(), outdir, 0, blocksize,
                                     progress)

    def walk(self):
        # type: () -> Generator[Tuple[str, dr.DirectoryRecord], None, None]
        """
        Walk the ISO depth first, in on-disk order, without writing anything.

        Parameters:
         None.
        Yields:
         Tuples of (ISO path, DirectoryRecord) for every file and directory.
        """
        self._check_initialized()

        stack = [('/' + entry.name, entry, 0) for entry in reversed(self.root_entries())]
        while stack:
            (path, record, depth) = stack.pop()
            yield (path, record)
            if not record.is_dir():
                continue
            if depth + 1 > self.max_depth:
                raise isoextractexception.IsoExtractInvalidISO('Directories nested deeper than %d levels' % (self.max_depth))
            # Pushed in reverse so that children come out in on-disk order.
            for child in reversed(self._children(record)):
                stack.append((path + '/' + child.name, child, depth + 1))
