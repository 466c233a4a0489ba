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

'''
Implementation of the Primary Volume Descriptor for Ecma-119/ISO9660.
'''

import logging
import struct

from isoextract import dr
from isoextract import isoextractexception
from isoextract import sectorio
from isoextract import utils

VOLUME_DESCRIPTOR_TYPE_PRIMARY = 1

# Ecma-119, 6.2.1: the System Area occupies logical sectors 0 to 15, so the
# volume descriptor set, and the PVD as its first member, starts at 16.
PVD_SECTOR = 16
ROOT_DIR_RECORD_OFFSET = 156
ROOT_DIR_RECORD_LENGTH = 34

_logger = logging.getLogger(__name__)


class PrimaryVolumeDescriptor:
    '''
    A class representing the Primary Volume Descriptor of an ISO.  This is the
    first thing on the ISO that is parsed, and it holds the location of the
    root directory.
    '''
    __slots__ = ('_initialized', 'volume_identifier', 'space_size',
                 'log_block_size', 'root_dir_record', 'orig_extent_loc')

    def __init__(self):
        # type: () -> None
        self._initialized = False
        self.root_dir_record = None

    def parse(self, vd, extent_loc):
        # type: (bytes, int) -> None
        '''
        Parse a Primary Volume Descriptor out of a string.

        Parameters:
         vd - The string containing the Volume Descriptor.
         extent_loc - The location on the ISO of this Volume Descriptor.
        Returns:
         Nothing.
        '''
        if self._initialized:
            raise isoextractexception.IsoExtractInternalError('This Primary Volume Descriptor is already initialized')

        if len(vd) != sectorio.SECTOR_SIZE:
            raise isoextractexception.IsoExtractInvalidISO('Volume descriptor must be %d bytes, saw %d' % (sectorio.SECTOR_SIZE, len(vd)))

        (descriptor_type, identifier, version_unused) = struct.unpack_from('=B5sB', vd, 0)

        # According to Ecma-119, 8.4.1, the primary volume descriptor type
        # should be 1.
        if descriptor_type != VOLUME_DESCRIPTOR_TYPE_PRIMARY:
            raise isoextractexception.IsoExtractInvalidISO('Invalid volume descriptor type %d' % (descriptor_type))
        # According to Ecma-119, 8.4.2, the identifier should be 'CD001'.
        if identifier != b'CD001':
            raise isoextractexception.IsoExtractInvalidISO('invalid CD isoIdentification')

        self.volume_identifier = vd[40:72].rstrip(b' \x00').decode('ascii', 'replace')
        self.space_size = utils.decode_both_endian_32(vd[80:88])
        self.log_block_size = utils.decode_both_endian_16(vd[128:132])

        # ISO9660 technically supports logical block sizes other than 2048,
        # but every extent location on the media we read is in 2048-byte
        # sectors, so note the oddity and carry on.
        if self.log_block_size != sectorio.SECTOR_SIZE:
            _logger.warning('Logical block size is %d, using %d', self.log_block_size,
                            sectorio.SECTOR_SIZE)

        self.root_dir_record = dr.DirectoryRecord()
        self.root_dir_record.parse(vd[ROOT_DIR_RECORD_OFFSET:ROOT_DIR_RECORD_OFFSET + ROOT_DIR_RECORD_LENGTH],
                                   is_root=True)

        self.orig_extent_loc = extent_loc

        self._initialized = True

    def root_directory_record(self):
        # type: () -> dr.DirectoryRecord
        '''
        A method to get a handle to this Primary Volume Descriptor's root
        directory record.

        Parameters:
         None.
        Returns:
         A DirectoryRecord object representing this Primary Volume
         Descriptor's root directory record.
        '''
        if not self._initialized:
            raise isoextractexception.IsoExtractInternalError('This Primary Volume Descriptor is not initialized')

        return self.root_dir_record

    def logical_block_size(self):
        # type: () -> int
        '''
        A method to get this Primary Volume Descriptor's logical block size.

        Parameters:
         None.
        Returns:
         Size of this Primary Volume Descriptor's logical block size in bytes.
        '''
        if not self._initialized:
            raise isoextractexception.IsoExtractInternalError('This Primary Volume Descriptor is not initialized')

        return self.log_block_size


def locate_pvd(reader):
    # type: (sectorio.SectorReader) -> PrimaryVolumeDescriptor
    '''
    Read and parse the Primary Volume Descriptor.  Only the fixed location is
    consulted; any further descriptors in the set are ignored.

    Parameters:
     reader - The SectorReader for the image.
    Returns:
     The parsed PrimaryVolumeDescriptor.
    '''
    pvd = PrimaryVolumeDescriptor()
    pvd.parse(reader.read_sector(PVD_SECTOR), PVD_SECTOR)
    _logger.debug('Volume %r: %d sectors, root directory at extent %d (%d bytes)',
                  pvd.volume_identifier, pvd.space_size,
                  pvd.root_dir_record.extent_location(),
                  pvd.root_dir_record.get_data_length())
    return pvd


def locate_root(reader):
    # type: (sectorio.SectorReader) -> dr.DirectoryRecord
    '''
    Find the root directory record of the image.

    Parameters:
     reader - The SectorReader for the image.
    Returns:
     The root DirectoryRecord.
    '''
    return locate_pvd(reader).root_directory_record()
