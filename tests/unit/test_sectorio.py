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

import isoextract.sectorio
import isoextract.isoextractexception

def _image(num_sectors):
    # Each sector is filled with its own index, so reads are easy to check.
    return BytesIO(b''.join(bytes([i]) * 2048 for i in range(num_sectors)))

def test_read_sector():
    reader = isoextract.sectorio.SectorReader(_image(4))
    assert(reader.read_sector(2) == b'\x02' * 2048)

def test_read_sector_ignores_position():
    fp = _image(4)
    reader = isoextract.sectorio.SectorReader(fp)
    fp.seek(100)
    assert(reader.read_sector(0) == b'\x00' * 2048)
    assert(reader.read_sector(3) == b'\x03' * 2048)

def test_read_range_partial_sector():
    reader = isoextract.sectorio.SectorReader(_image(4))
    assert(reader.read_range(1, 10) == b'\x01' * 10)

def test_read_range_spans_sectors():
    reader = isoextract.sectorio.SectorReader(_image(4))
    assert(reader.read_range(1, 2050) == b'\x01' * 2048 + b'\x02' * 2)

def test_read_range_zero():
    reader = isoextract.sectorio.SectorReader(_image(1))
    assert(reader.read_range(0, 0) == b'')

def test_read_sector_past_end():
    reader = isoextract.sectorio.SectorReader(_image(2))
    with pytest.raises(isoextract.isoextractexception.IsoExtractIOError) as excinfo:
        reader.read_sector(2)
    assert(str(excinfo.value) == 'Short read at sector 2: wanted 2048 bytes, got 0')

def test_read_range_truncated():
    reader = isoextract.sectorio.SectorReader(_image(2))
    with pytest.raises(IOError) as excinfo:
        reader.read_range(1, 4096)
    assert(str(excinfo.value) == 'Short read at sector 1: wanted 4096 bytes, got 2048')

def test_read_range_negative_index():
    reader = isoextract.sectorio.SectorReader(_image(1))
    with pytest.raises(isoextract.isoextractexception.IsoExtractInvalidInput) as excinfo:
        reader.read_range(-1, 1)
    assert(str(excinfo.value) == 'Sector index must be non-negative, saw -1')

def test_read_range_negative_length():
    reader = isoextract.sectorio.SectorReader(_image(1))
    with pytest.raises(isoextract.isoextractexception.IsoExtractInvalidInput) as excinfo:
        reader.read_range(0, -1)
    assert(str(excinfo.value) == 'Read length must be non-negative, saw -1')

def test_copy_range():
    reader = isoextract.sectorio.SectorReader(_image(4))
    outfp = BytesIO()
    reader.copy_range(1, 5000, outfp, 1000)
    assert(outfp.getvalue() == b'\x01' * 2048 + b'\x02' * 2048 + b'\x03' * 904)

def test_copy_range_truncated():
    reader = isoextract.sectorio.SectorReader(_image(2))
    outfp = BytesIO()
    with pytest.raises(isoextract.isoextractexception.IsoExtractIOError) as excinfo:
        reader.copy_range(1, 3000, outfp, 1024)
    assert(str(excinfo.value) == 'Short read at sector 1: wanted 3000 bytes, got 2048')

def test_copy_range_bad_blocksize():
    reader = isoextract.sectorio.SectorReader(_image(1))
    with pytest.raises(isoextract.isoextractexception.IsoExtractInvalidInput) as excinfo:
        reader.copy_range(0, 1, BytesIO(), 0)
    assert(str(excinfo.value) == 'Block size must be positive, saw 0')

def test_image_size_keeps_position():
    fp = _image(3)
    reader = isoextract.sectorio.SectorReader(fp)
    fp.seek(5)
    assert(reader.image_size() == 3 * 2048)
    assert(fp.tell() == 5)

def test_text_mode_rejected(tmpdir):
    path = tmpdir.join('text.iso')
    path.write('x')
    with open(str(path), 'r') as fp:
        with pytest.raises(isoextract.isoextractexception.IsoExtractInvalidInput) as excinfo:
            isoextract.sectorio.SectorReader(fp)
    assert(str(excinfo.value) == "The file to open must be in binary mode (add 'b' to the open flags)")
