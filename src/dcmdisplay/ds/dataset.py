"""Tolerant typed accessors over pydicom datasets.

Every getter takes a dataset (or a sequence item), a tag given as keyword or
integer, and a default. Missing or empty attributes return the default, and
values that cannot be parsed are logged and also return the default, so a
malformed header never interrupts the rendering pipeline.
"""

import struct
import logging
import datetime

import pydicom
from pydicom.dataset import Dataset
from pydicom.datadict import keyword_for_tag
from pydicom.errors import InvalidDicomError
from pydicom.multival import MultiValue
from pydicom.tag import Tag
from pydicom.uid import UID
from pydicom.valuerep import DA, TM, DT

logger = logging.getLogger(__name__)

# Value representations, grouped by the way their values are decoded
TEXT_VR = ['AE', 'AS', 'CS', 'DA', 'DT', 'LO', 'LT', 'PN', 'SH', 'ST', 'TM', 'UC', 'UI', 'UR', 'UT']
NUMBER_STRING_VR = ['IS', 'DS']
INTEGER_VR = ['US', 'SS', 'UL', 'SL', 'UV', 'SV', 'AT']
FLOAT_VR = ['FL', 'FD']
BYTES_VR = ['OB', 'OW', 'OD', 'OF', 'OL', 'OV', 'UN']
SEQUENCE_VR = ['SQ']

PARSE_ERRORS = (ValueError, TypeError, KeyError, IndexError, AttributeError, OverflowError, struct.error)


class DisplayDataset(Dataset):

    def __init__(self, dataset=None):
        super().__init__()

        if dataset is not None:
            self.__dict__ = dataset.__dict__

    def contains_value(self, tag):
        return contains_value(self, tag)

    def get_string(self, tag, default=None):
        return get_string(self, tag, default)

    def get_strings(self, tag, default=None):
        return get_strings(self, tag, default)

    def get_int(self, tag, default=None):
        return get_int(self, tag, default)

    def get_ints(self, tag, default=None):
        return get_ints(self, tag, default)

    def get_float(self, tag, default=None):
        return get_float(self, tag, default)

    def get_floats(self, tag, default=None):
        return get_floats(self, tag, default)

    def get_date(self, tag, default=None):
        return get_date(self, tag, default)

    def get_time(self, tag, default=None):
        return get_time(self, tag, default)

    def get_datetime(self, tag, default=None):
        return get_datetime(self, tag, default)

    def get_item(self, tag, index=0):
        return get_item(self, tag, index)

    def little_endian(self):
        return is_little_endian(self)

    def frame_tags(self, index=None, presentation_state=None):
        from dcmdisplay import pipeline
        return pipeline.frame_tags(self, index=index, presentation_state=presentation_state)


def read(file):
    try:
        ds = pydicom.dcmread(file)
    except (OSError, InvalidDicomError) as e:
        raise FileNotFoundError("Failed to read " + str(file)) from e
    return DisplayDataset(ds)


def tag_name(tag):
    """Keyword of a tag, or its (gggg,eeee) notation when it has none."""
    try:
        tag = Tag(tag)
    except PARSE_ERRORS:
        return str(tag)
    keyword = keyword_for_tag(tag)
    return keyword if keyword else str(tag)


def _element(ds, tag):
    if ds is None:
        return None
    try:
        if tag not in ds:
            return None
        return ds[tag]
    except PARSE_ERRORS as e:
        logger.error("Cannot read %s: %s", tag_name(tag), e)
        return None


def _vr(elem):
    # Ambiguous VRs such as 'US or SS' or 'OB or OW' are resolved by the value
    VR = elem.VR
    if ' or ' not in VR:
        return VR
    if isinstance(elem.value, (bytes, bytearray)):
        return 'OW'
    return VR.split(' or ')[0]


def _values(value):
    if value is None:
        return []
    if isinstance(value, (list, tuple, MultiValue)):
        return list(value)
    return [value]


def _text(value):
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode('latin-1')
    return str(value).strip('\x00 ')


def _words(data, little_endian=True):
    data = bytes(data)
    n = len(data) // 2
    return list(struct.unpack(('<' if little_endian else '>') + str(n) + 'H', data[:2*n]))


def _parse_int(value):
    try:
        return int(value)
    except ValueError:
        return int(float(value))


def _numbers(elem, cast):
    VR = _vr(elem)
    value = elem.value
    if VR in SEQUENCE_VR:
        raise TypeError('a sequence has no numeric value')
    if VR in BYTES_VR:
        # Private elements read without a dictionary carry their text as bytes
        if VR == 'UN':
            try:
                return [cast(_parse_int(v) if cast is int else float(v)) for v in _text(value).split('\\')]
            except ValueError:
                pass
        return [cast(v) for v in _words(value)]
    if VR in INTEGER_VR or VR in FLOAT_VR:
        return [cast(v) for v in _values(value)]
    if VR in NUMBER_STRING_VR or VR in TEXT_VR:
        if cast is int:
            return [_parse_int(_text(v)) for v in _values(value)]
        return [cast(_text(v)) for v in _values(value)]
    raise TypeError('unsupported VR ' + str(VR))


def contains_value(ds, tag):
    """True if the attribute is present and has a non-empty value."""
    elem = _element(ds, tag)
    if elem is None:
        return False
    return not elem.is_empty


def contains_required_attributes(ds, *tags):
    if ds is None:
        return False
    for tag in tags:
        if not contains_value(ds, tag):
            return False
    return True


def get_strings(ds, tag, default=None):
    elem = _element(ds, tag)
    if elem is None or elem.is_empty:
        return default
    if _vr(elem) in SEQUENCE_VR:
        return default
    value = elem.value
    if isinstance(value, (bytes, bytearray)):
        return _text(value).split('\\')
    return [str(v).strip() for v in _values(value)]


def get_string(ds, tag, default=None):
    """All values of the attribute joined by a backslash."""
    values = get_strings(ds, tag)
    if not values:
        return default
    return '\\'.join(values)


def get_ints(ds, tag, default=None):
    elem = _element(ds, tag)
    if elem is None or elem.is_empty:
        return default
    try:
        return _numbers(elem, int)
    except PARSE_ERRORS as e:
        logger.error("Cannot parse integer of %s: %s", tag_name(tag), e)
        return default


def get_int(ds, tag, default=None):
    values = get_ints(ds, tag)
    if not values:
        return default
    return values[0]


def get_floats(ds, tag, default=None):
    elem = _element(ds, tag)
    if elem is None or elem.is_empty:
        return default
    try:
        return _numbers(elem, float)
    except PARSE_ERRORS as e:
        logger.error("Cannot parse float of %s: %s", tag_name(tag), e)
        return default


def get_float(ds, tag, default=None):
    values = get_floats(ds, tag)
    if not values:
        return default
    return values[0]


def _first_value(ds, tag):
    elem = _element(ds, tag)
    if elem is None or elem.is_empty:
        return None
    values = _values(elem.value)
    return values[0] if values else None


def get_date(ds, tag, default=None):
    value = _first_value(ds, tag)
    if value is None:
        return default
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        date = DA(_text(value))
    except PARSE_ERRORS as e:
        logger.error("Cannot parse date of %s: %s", tag_name(tag), e)
        return default
    if date is None:
        return default
    return datetime.date(date.year, date.month, date.day)


def get_time(ds, tag, default=None):
    value = _first_value(ds, tag)
    if value is None:
        return default
    if isinstance(value, datetime.time):
        return value
    try:
        time = TM(_text(value))
    except PARSE_ERRORS as e:
        logger.error("Cannot parse time of %s: %s", tag_name(tag), e)
        return default
    if time is None:
        return default
    return datetime.time(time.hour, time.minute, time.second, time.microsecond)


def get_datetime(ds, tag, default=None):
    """Date and time of a DT attribute, without time zone."""
    value = _first_value(ds, tag)
    if value is None:
        return default
    if not isinstance(value, datetime.datetime):
        try:
            value = DT(_text(value))
        except PARSE_ERRORS as e:
            logger.error("Cannot parse date time of %s: %s", tag_name(tag), e)
            return default
        if value is None:
            return default
    return datetime.datetime(
        value.year, value.month, value.day,
        value.hour, value.minute, value.second, value.microsecond)


def get_bytes(ds, tag, little_endian=True, default=None):
    """Raw bytes of an attribute.

    Values held as integers (US or SS) are packed as 16-bit words in the
    byte order of the dataset.
    """
    elem = _element(ds, tag)
    if elem is None or elem.is_empty:
        return default
    value = elem.value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if _vr(elem) not in INTEGER_VR:
        return default
    order = '<' if little_endian else '>'
    try:
        return b''.join(struct.pack(order + 'H', int(v) & 0xFFFF) for v in _values(value))
    except PARSE_ERRORS as e:
        logger.error("Cannot pack %s: %s", tag_name(tag), e)
        return default


def get_sequence(ds, tag, default=None):
    elem = _element(ds, tag)
    if elem is None or elem.is_empty or elem.VR != 'SQ':
        return default
    return elem.value


def get_item(ds, tag, index=0):
    """Item at index in a sequence attribute, or None."""
    sequence = get_sequence(ds, tag)
    if sequence is None:
        return None
    if index < 0 or index >= len(sequence):
        return None
    return sequence[index]


def is_little_endian(ds):
    """Byte order of the dataset, little endian unless known otherwise."""
    file_meta = getattr(ds, 'file_meta', None)
    if file_meta is not None and 'TransferSyntaxUID' in file_meta:
        try:
            return UID(file_meta.TransferSyntaxUID).is_little_endian
        except ValueError:
            logger.debug("Unknown transfer syntax %s", file_meta.TransferSyntaxUID)
    encoding = getattr(ds, 'original_encoding', None)
    if encoding is not None and encoding[1] is not None:
        return encoding[1]
    return True


def get_int_pixel_value(ds, tag, signed, bits_stored):
    """Integer pixel value of an attribute, clamped to the stored bit range.

    Values encoded as bytes are read as little endian 16-bit words and sign
    extended at bits_stored. US and SS values are reinterpreted when their
    VR does not agree with the pixel representation. Returns None when
    bits_stored is outside 1 to 32.
    """
    elem = _element(ds, tag)
    if elem is None or elem.is_empty:
        return None
    if bits_stored is None or bits_stored < 1 or bits_stored > 32:
        logger.error("Cannot read pixel value of %s with %s bits stored", tag_name(tag), bits_stored)
        return None
    VR = elem.VR
    try:
        if isinstance(elem.value, (bytes, bytearray)):
            data = bytes(elem.value)
            if len(data) < 2:
                return None
            result = struct.unpack('<H', data[:2])[0]
            if signed and result & (1 << (bits_stored - 1)):
                result |= -(1 << bits_stored)
        else:
            result = int(_values(elem.value)[0])
            if (signed and VR == 'US') or (not signed and VR == 'SS'):
                result &= 0xFFFF
                if signed and result & 0x8000:
                    result -= 0x10000
    except PARSE_ERRORS as e:
        logger.error("Cannot parse pixel value of %s: %s", tag_name(tag), e)
        return None

    if signed:
        minimum = -(1 << (bits_stored - 1))
        maximum = (1 << (bits_stored - 1)) - 1
    else:
        minimum = 0
        maximum = (1 << bits_stored) - 1
    return min(max(result, minimum), maximum)
