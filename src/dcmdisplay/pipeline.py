"""Resolve the tags a renderer needs to display one frame.

frame_tags() runs the stages in a fixed order, later stages overriding
earlier ones:

1. attributes of the image itself
2. shared functional groups
3. functional groups of the frame
4. an optional presentation state
5. decoding of the Modality, VOI and Presentation LUTs
6. SUV factor and slice position
"""

import logging

import pandas as pd

import dcmdisplay.ds.dataset as dataset
import dcmdisplay.utils.image as image
from dcmdisplay.tags import TagMap, NO_VALUE
from dcmdisplay import transforms
from dcmdisplay import functional_groups
from dcmdisplay import shutter
from dcmdisplay import suv

logger = logging.getLogger(__name__)

# Overlay planes are stored in the even groups 6000 to 601E
OVERLAY_GROUPS = [0x6000 + 2*i for i in range(16)]


def has_overlay(ds):
    for group in OVERLAY_GROUPS:
        if dataset.contains_value(ds, (group << 16) | 0x0010):
            return True
    return False


def number_of_frames(ds):
    return dataset.get_int(ds, 'NumberOfFrames', 1)


def is_multiframe(ds):
    return dataset.get_sequence(ds, 'PerFrameFunctionalGroupsSequence') is not None


def write_instance_tags(ds, tags=None):
    """Attributes of the image that apply to all of its frames."""
    if tags is None:
        tags = TagMap()

    tags.set('Modality', dataset.get_string(ds, 'Modality', NO_VALUE))
    tags.set_no_null('SOPClassUID', dataset.get_string(ds, 'SOPClassUID'))
    tags.set_no_null('PhotometricInterpretation', dataset.get_string(ds, 'PhotometricInterpretation'))

    signed = dataset.get_int(ds, 'PixelRepresentation', 0) != 0
    bits_stored = dataset.get_int(ds, 'BitsStored')
    tags.set('PixelRepresentation', 1 if signed else 0)
    tags.set_no_null('BitsStored', bits_stored)
    if bits_stored is None or bits_stored < 1:
        bits_stored = dataset.get_int(ds, 'BitsAllocated', 16)
    tags.set_no_null('SmallestImagePixelValue', dataset.get_int_pixel_value(ds, 'SmallestImagePixelValue', signed, bits_stored))
    tags.set_no_null('LargestImagePixelValue', dataset.get_int_pixel_value(ds, 'LargestImagePixelValue', signed, bits_stored))

    tags.set_no_null('PixelIntensityRelationship', dataset.get_string(ds, 'PixelIntensityRelationship'))
    tags.set_no_null('AcquisitionDate', dataset.get_date(ds, 'AcquisitionDate'))
    tags.set_no_null('AcquisitionTime', dataset.get_time(ds, 'AcquisitionTime'))
    tags.set_no_null('InstanceNumber', dataset.get_int(ds, 'InstanceNumber'))
    tags.set_no_null('PixelSpacing', dataset.get_floats(ds, 'PixelSpacing'))
    tags.set_no_null('SliceThickness', dataset.get_float(ds, 'SliceThickness'))
    tags.set_no_null('ImagePositionPatient', dataset.get_floats(ds, 'ImagePositionPatient'))
    orientation = dataset.get_floats(ds, 'ImageOrientationPatient')
    if orientation is not None:
        tags.set('ImageOrientationPatient', orientation)
        tags.set_no_null('ImageOrientationPlane', image.orientation_label(orientation))
    tags.set_no_null('ImageLaterality', dataset.get_string(ds, 'ImageLaterality'))

    transforms.apply_modality_lut_module(ds, tags)
    transforms.apply_voi_lut_module(ds, tags)
    transforms.apply_pr_lut_module(ds, tags)
    shutter.write_display_shutter(ds, tags)
    return tags


def compute_slice_position_vector(tags):
    position = image.slice_position(tags.get('ImageOrientationPatient'), tags.get('ImagePositionPatient'))
    tags.set_no_null('SlicePosition', position)


def frame_tags(ds, index=None, presentation_state=None):
    """Resolve the tags of a frame.

    Arguments
    ---------
    ds : the image dataset
    index : frame number (from 0) in a multi-frame image with per-frame
        functional groups, or None for a single image
    presentation_state : an optional Grayscale Softcopy Presentation State
        whose Modality, VOI and Presentation LUTs override those of ds

    Returns
    -------
    TagMap
    """
    tags = write_instance_tags(ds)
    functional_groups.write_shared_functional_groups(ds, tags)
    if index is not None:
        if not functional_groups.write_per_frame_functional_groups(ds, tags, index):
            tags.report(logger, "No functional groups for frame %s", index, level=logging.INFO)
    if presentation_state is not None:
        transforms.read_pr_luts_module(presentation_state, tags)

    transforms.build_luts(tags, little_endian=dataset.is_little_endian(ds))
    suv.compute_suv_factor(ds, tags)
    compute_slice_position_vector(tags)
    return tags


def read_dataframe(ds, keys, presentation_state=None):
    """Resolved tags of every frame in a DataFrame with one row per frame."""
    frames = range(number_of_frames(ds))
    multiframe = is_multiframe(ds)
    data = []
    for i in frames:
        tags = frame_tags(ds, i if multiframe else None, presentation_state)
        data.append([tags.get(key) for key in keys])
    return pd.DataFrame(data, index=list(frames), columns=keys)
