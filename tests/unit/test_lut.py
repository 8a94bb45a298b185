import numpy as np
from pydicom.dataset import Dataset

from dcmdisplay.lut import LookupTable, create_lut, first_mapped_value
from dcmdisplay.tags import TagMap

#
# Helper functions
#

def lut_item(descriptor, data, VR='OW', descriptor_VR='US'):
    item = Dataset()
    item.add_new(0x00283002, descriptor_VR, descriptor)
    item.add_new(0x00283006, VR, data)
    return item

def words(values, dtype='<u2'):
    return np.array(values, dtype=dtype).tobytes()

#
# Tests
#

def test_first_mapped_value():

    assert first_mapped_value(0xFFFF, 256) == -1
    assert first_mapped_value(0xFFFF, 4096) == -1
    assert first_mapped_value(200, 256) == -56
    assert first_mapped_value(100, 256) == 100
    assert first_mapped_value(1000, 4096) == 1000
    assert first_mapped_value(-1024, 4096) == -1024


def test_entry_count_zero():

    item = lut_item([0, 0, 16], words(np.arange(65536)))
    lut = create_lut(item)
    assert lut.entry_count == 65536
    assert len(lut) == 65536
    assert lut.bits == 16


def test_entry_count_above_32767():

    # An SS descriptor holds the entry count as a negative value
    data = words(np.arange(40000) % 4096)
    lut = create_lut(lut_item([-25536, 0, 16], data, descriptor_VR='SS'))
    assert lut.entry_count == 40000
    assert len(lut) == 40000
    assert lut.lookup(39999) == 39999 % 4096

    lut = create_lut(lut_item([40000, 0, 16], data))
    assert lut.entry_count == 40000


def test_padded_8bit_entries():

    item = lut_item([4, 0, 8], words([1, 2, 3, 4]))
    lut = create_lut(item)
    assert lut.samples.tolist() == [1, 2, 3, 4]
    assert lut.samples.dtype == np.uint8

    # In big endian data the significant byte comes second
    item = lut_item([4, 0, 8], words([1, 2, 3, 4], '>u2'))
    lut = create_lut(item, little_endian=False)
    assert lut.samples.tolist() == [1, 2, 3, 4]


def test_padded_16bit_entries():

    # Up to 256 entries in 16-bit words are read as padded bytes
    item = lut_item([4, 0, 16], words([1, 2, 3, 4]))
    lut = create_lut(item)
    assert lut.samples.tolist() == [1, 2, 3, 4]


def test_unpadded_8bit_entries():

    item = lut_item([4, 0, 8], bytes([10, 20, 30, 40]), VR='OB')
    lut = create_lut(item)
    assert lut.samples.tolist() == [10, 20, 30, 40]


def test_native_16bit_entries():

    data = [-100] + list(range(1, 512))
    item = lut_item([512, 0, 16], data, VR='SS')
    lut = create_lut(item, signed=True)
    assert lut.samples[0] == -100
    assert lut.samples[511] == 511
    assert lut.signed

    item = lut_item([512, 0, 16], words(data, '>i2'))
    lut = create_lut(item, little_endian=False)
    assert lut.samples[0] == -100
    assert lut.samples[1] == 1


def test_signed_offset():

    item = lut_item([4096, -1024, 12], list(range(4096)), VR='US', descriptor_VR='SS')
    lut = create_lut(item, signed=True)
    assert lut.offset == -1024
    assert lut.domain == (-1024, 3071)
    assert lut.lookup(-1024) == 0
    assert lut.lookup(3071) == 4095


def test_invalid_descriptor():

    assert create_lut(None) is None

    item = Dataset()
    item.add_new(0x00283006, 'OW', words([1, 2]))
    assert create_lut(item) is None

    item = lut_item([256, 0], words(range(256)))
    assert create_lut(item) is None

    item = lut_item([256, 0, 24], words(range(256)))
    assert create_lut(item) is None


def test_length_mismatch():

    tags = TagMap()
    item = lut_item([512, 0, 16], words(range(300)))
    lut = create_lut(item, tags=tags)
    assert len(lut) == 300
    assert lut.entry_count == 512
    assert len(tags.diagnostics) == 1


def test_short_unpadded_16bit_entries():

    # Up to 256 entries of more than 8 bits must be padded words
    tags = TagMap()
    item = lut_item([10, 0, 16], words([1, 2, 3]))
    assert create_lut(item, tags=tags) is None
    assert len(tags.diagnostics) == 1

    item = lut_item([4, 0, 12], bytes([1, 2, 3, 4]), VR='OB')
    assert create_lut(item) is None


def test_samples_exceeding_bits():

    tags = TagMap()
    item = lut_item([300, 0, 8], bytes([255] * 300), VR='OB')
    lut = create_lut(item, tags=tags)
    assert len(lut) == 300
    assert tags.diagnostics == []

    item = lut_item([512, 0, 10], words([2000] * 512))
    create_lut(item, tags=tags)
    assert len(tags.diagnostics) == 1


def test_lookup():

    lut = LookupTable([5, 6, 7], offset=-2, bits=8)
    assert lut.lookup(-10) == 5
    assert lut.lookup(-1) == 6
    assert lut.lookup(100) == 7
    assert lut.apply(np.array([[-3, -2], [0, 1]])).tolist() == [[5, 5], [7, 7]]
    assert LookupTable([]).lookup(0) is None


if __name__ == "__main__":

    test_first_mapped_value()
    test_entry_count_zero()
    test_entry_count_above_32767()
    test_padded_8bit_entries()
    test_padded_16bit_entries()
    test_unpadded_8bit_entries()
    test_native_16bit_entries()
    test_signed_offset()
    test_invalid_descriptor()
    test_length_mismatch()
    test_short_unpadded_16bit_entries()
    test_samples_exceeding_bits()
    test_lookup()

    print('--------------------')
    print('lut passed all tests!')
    print('--------------------')
