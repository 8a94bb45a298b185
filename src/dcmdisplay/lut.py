"""Lookup tables decoded from a LUT Descriptor and LUT Data.

The same decoding serves the Modality LUT, VOI LUT and Presentation LUT
sequences. The descriptor holds three values: the number of entries (0
meaning 65536), the first input value mapped, and the number of bits per
entry.
"""

import logging

import numpy as np

import dcmdisplay.ds.dataset as dataset

logger = logging.getLogger(__name__)

LUT_ATTRIBUTES = ['LUTDescriptor', 'LUTData']


class LookupTable():
    """A table mapping input values offset, offset+1, ... to samples.

    Inputs below the first mapped value give the first sample and inputs
    beyond the last one give the last sample.
    """

    def __init__(self, samples, offset=0, entry_count=None, bits=16, signed=False):
        self.samples = np.asarray(samples)
        self.offset = int(offset)
        self.entry_count = len(self.samples) if entry_count is None else int(entry_count)
        self.bits = int(bits)
        self.signed = signed

    def __len__(self):
        return len(self.samples)

    def __repr__(self):
        return 'LookupTable(entries={}, offset={}, bits={})'.format(
            len(self.samples), self.offset, self.bits)

    @property
    def domain(self):
        """First and last input value mapped."""
        return self.offset, self.offset + len(self.samples) - 1

    def lookup(self, value):
        if len(self.samples) == 0:
            return None
        index = min(max(int(value) - self.offset, 0), len(self.samples) - 1)
        return int(self.samples[index])

    def apply(self, array):
        """Map an array of input values."""
        if len(self.samples) == 0:
            raise ValueError('Cannot apply an empty lookup table')
        index = np.asarray(array, dtype=np.int64) - self.offset
        index = np.clip(index, 0, len(self.samples) - 1)
        return self.samples[index]


def contains_lut_attributes(item):
    return dataset.contains_required_attributes(item, *LUT_ATTRIBUTES)


def first_mapped_value(value, entry_count):
    """Descriptor offset as a signed value.

    Tables of up to 256 entries read it as a signed byte, larger tables as a
    signed 16-bit integer, so 0xFFFF decodes to -1 either way.
    """
    if entry_count <= 256:
        value &= 0xFF
        return value - 0x100 if value & 0x80 else value
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _report(tags, message, *args):
    if tags is None:
        logger.debug(message, *args)
    else:
        tags.report(logger, message, *args)


def _unpad(data, entry_count, little_endian):
    # 8-bit entries stored in 16-bit words: keep the significant byte
    data = np.frombuffer(data, dtype=np.uint8)
    start = 0 if little_endian else 1
    return data[start::2][:entry_count].copy()


def _native(data, little_endian):
    dtype = np.dtype('<i2' if little_endian else '>i2')
    n = len(data) // 2
    return np.frombuffer(data[:2*n], dtype=dtype).astype(np.int16)


def create_lut(item, signed=False, little_endian=True, tags=None):
    """Decode a lookup table from a sequence item.

    Arguments
    ---------
    item : a sequence item with LUTDescriptor and LUTData
    signed : whether the descriptor values are signed (SS), which follows
        the pixel representation of the data it applies to
    little_endian : byte order of the dataset holding the item
    tags : optional TagMap collecting diagnostics

    Returns
    -------
    LookupTable or None when the descriptor or data cannot be used
    """
    if item is None:
        return None

    descriptor = dataset.get_ints(item, 'LUTDescriptor')
    if descriptor is None:
        _report(tags, "Missing LUT Descriptor")
        return None
    if len(descriptor) != 3:
        _report(tags, "Illegal number of LUT Descriptor values %s", len(descriptor))
        return None

    entry_count = (descriptor[0] & 0xFFFF) or 65536
    offset = first_mapped_value(descriptor[1], entry_count)
    bits = descriptor[2]

    if bits < 1 or bits > 16:
        _report(tags, "Illegal number of bits for each entry in the LUT Data %s", bits)
        return None

    data = dataset.get_bytes(item, 'LUTData', little_endian=little_endian)
    if data is None:
        _report(tags, "Cannot read LUT Data")
        return None

    padded = entry_count <= 256 and len(data) == 2 * entry_count
    if padded:
        samples = _unpad(data, entry_count, little_endian)
    elif bits <= 8:
        samples = np.frombuffer(data, dtype=np.uint8).copy()
    elif entry_count <= 256:
        # Short tables of more than 8 bits are only read in the padded form
        _report(tags, "Cannot read %s bytes of LUT Data for %s entries of %s bits", len(data), entry_count, bits)
        return None
    else:
        samples = _native(data, little_endian)

    if len(samples) != entry_count:
        _report(tags, "LUT Data length %s does not match the number of entries %s", len(samples), entry_count)
    if len(samples) > 0 and int(np.max(np.abs(samples.astype(np.int64)))) > (1 << bits):
        _report(tags, "LUT Data values exceed the %s bits per entry", bits)

    return LookupTable(samples, offset=offset, entry_count=entry_count, bits=bits, signed=signed)
