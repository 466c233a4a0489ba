import pytest
import os
import sys
from io import BytesIO
import struct

prefix = '.'
for i in range(0, 3):
    if os.path.isdir(os.path.join(prefix, 'isoextract')):
        sys.path.insert(0, prefix)
        break
    else:
        prefix = '../' + prefix

import isoextract.headervd
import isoextract.isoextractexception
import isoextract.sectorio
def _both_32(value):
    return struct.pack('<L', value) + struct.pack('>L', value)

def _both_16(value):
    return struct.pack('<H', value) + struct.pack('>H', value)

def _root_record(extent, length):
    return (b'\x22\x00' + _both_32(extent) +
            _both_32(length) + b'\x00' * 7 +
            b'\x02\x00\x00' + _both_16(1) +
            b'\x01\x00')

def _pvd(root_extent=18, root_length=2048, block_size=2048, space_size=20):
    vd = bytearray(2048)
    vd[0:7] = b'\x01CD001\x01'
    vd[40:72] = b'MYVOLUME'.ljust(32, b' ')
    vd[80:88] = _both_32(space_size)
    vd[128:132] = _both_16(block_size)
    vd[156:190] = _root_record(root_extent, root_length)
    return bytes(vd)

# PrimaryVolumeDescriptor
def test_pvd_parse():
    pvd = isoextract.headervd.PrimaryVolumeDescriptor()
    pvd.parse(_pvd(), 16)
    assert(pvd.volume_identifier == 'MYVOLUME')
    assert(pvd.space_size == 20)
    assert(pvd.logical_block_size() == 2048)
    assert(pvd.orig_extent_loc == 16)
    root = pvd.root_directory_record()
    assert(root.is_root)
    assert(root.is_dir())
    assert(root.extent_location() == 18)
    assert(root.get_data_length() == 2048)

def test_pvd_parse_initialized_twice():
    pvd = isoextract.headervd.PrimaryVolumeDescriptor()
    pvd.parse(_pvd(), 16)
    with pytest.raises(isoextract.isoextractexception.IsoExtractInternalError) as excinfo:
        pvd.parse(_pvd(), 16)
    assert(str(excinfo.value) == 'This Primary Volume Descriptor is already initialized')

def test_pvd_not_initialized():
    pvd = isoextract.headervd.PrimaryVolumeDescriptor()
    with pytest.raises(isoextract.isoextractexception.IsoExtractInternalError) as excinfo:
        pvd.root_directory_record()
    assert(str(excinfo.value) == 'This Primary Volume Descriptor is not initialized')

def test_pvd_parse_invalid_vd_type():
    pvd = isoextract.headervd.PrimaryVolumeDescriptor()
    with pytest.raises(isoextract.isoextractexception.IsoExtractInvalidISO) as excinfo:
        pvd.parse(b'\x00' * 2048, 16)
    assert(str(excinfo.value) == 'Invalid volume descriptor type 0')

def test_pvd_parse_invalid_identifier():
    pvd = isoextract.headervd.PrimaryVolumeDescriptor()
    with pytest.raises(isoextract.isoextractexception.IsoExtractInvalidISO) as excinfo:
        pvd.parse(b'\x01CD002' + b'\x00' * 2042, 16)
    assert(str(excinfo.value) == 'invalid CD isoIdentification')

def test_pvd_parse_short():
    pvd = isoextract.headervd.PrimaryVolumeDescriptor()
    with pytest.raises(isoextract.isoextractexception.IsoExtractInvalidISO) as excinfo:
        pvd.parse(_pvd()[:1024], 16)
    assert(str(excinfo.value) == 'Volume descriptor must be 2048 bytes, saw 1024')

def test_pvd_parse_bad_root_extent():
    vd = bytearray(_pvd())
    vd[156 + 2] = 0x99
    pvd = isoextract.headervd.PrimaryVolumeDescriptor()
    with pytest.raises(isoextract.isoextractexception.IsoExtractInvalidISO) as excinfo:
        pvd.parse(bytes(vd), 16)
    assert(str(excinfo.value) == 'endianness mismatch: little-endian (153) and big-endian (18) disagree')

def test_pvd_odd_block_size_warns(caplog):
    pvd = isoextract.headervd.PrimaryVolumeDescriptor()
    pvd.parse(_pvd(block_size=512), 16)
    assert(pvd.logical_block_size() == 512)
    assert('Logical block size is 512, using 2048' in caplog.text)

def test_locate_root():
    image = b'\x00' * (16 * 2048) + _pvd(root_extent=17, root_length=4096)
    reader = isoextract.sectorio.SectorReader(BytesIO(image))
    root = isoextract.headervd.locate_root(reader)
    assert(root.extent_location() == 17)
    assert(root.get_data_length() == 4096)

def test_locate_root_ignores_later_descriptors():
    svd = bytearray(_pvd(root_extent=40))
    svd[0] = 2
    image = b'\x00' * (16 * 2048) + _pvd(root_extent=19) + bytes(svd)
    reader = isoextract.sectorio.SectorReader(BytesIO(image))
    assert(isoextract.headervd.locate_root(reader).extent_location() == 19)

def test_locate_root_truncated_image():
    reader = isoextract.sectorio.SectorReader(BytesIO(b'\x00' * (16 * 2048 + 100)))
    with pytest.raises(isoextract.isoextractexception.IsoExtractIOError) as excinfo:
        isoextract.headervd.locate_root(reader)
    assert(str(excinfo.value) == 'Short read at sector 16: wanted 2048 bytes, got 100')
