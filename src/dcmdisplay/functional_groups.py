"""Shared and per-frame functional groups of enhanced multi-frame images.

Each functional group item may hold any of the macros handled here. They are
applied in a fixed order, and the per-frame item is applied after the shared
one so that frame values override shared values.
"""

import logging

import dcmdisplay.ds.dataset as dataset
import dcmdisplay.utils.image as image
from dcmdisplay import transforms
from dcmdisplay import shutter

logger = logging.getLogger(__name__)

# Sequences that may carry the FrameType of a frame, the first one present wins
FRAME_TYPE_SEQUENCES = [
    'MRImageFrameTypeSequence',
    'CTImageFrameTypeSequence',
    'MRSpectroscopyFrameTypeSequence',
    'PETFrameTypeSequence',
]


def write_pixel_measures(item, tags):
    macro = dataset.get_item(item, 'PixelMeasuresSequence')
    if macro is None:
        return
    tags.set_no_null('PixelSpacing', dataset.get_floats(macro, 'PixelSpacing'))
    tags.set_no_null('SliceThickness', dataset.get_float(macro, 'SliceThickness'))


def write_frame_content(item, tags):
    macro = dataset.get_item(item, 'FrameContentSequence')
    if macro is None:
        return
    tags.set_no_null('FrameAcquisitionNumber', dataset.get_int(macro, 'FrameAcquisitionNumber'))
    tags.set_no_null('StackID', dataset.get_string(macro, 'StackID'))
    tags.set_no_null('InstanceNumber', dataset.get_int(macro, 'InStackPositionNumber'))


def write_plane_position(item, tags):
    macro = dataset.get_item(item, 'PlanePositionSequence')
    if macro is None:
        return
    tags.set_no_null('ImagePositionPatient', dataset.get_floats(macro, 'ImagePositionPatient'))


def write_plane_orientation(item, tags):
    macro = dataset.get_item(item, 'PlaneOrientationSequence')
    if macro is None:
        return
    orientation = dataset.get_floats(macro, 'ImageOrientationPatient')
    if orientation is None:
        return
    tags.set('ImageOrientationPatient', orientation)
    tags.set_no_null('ImageOrientationPlane', image.orientation_label(orientation))


def write_frame_anatomy(item, tags):
    macro = dataset.get_item(item, 'FrameAnatomySequence')
    if macro is None:
        return
    tags.set_no_null('ImageLaterality', dataset.get_string(macro, 'FrameLaterality'))


def write_frame_type(item, tags):
    for keyword in FRAME_TYPE_SEQUENCES:
        macro = dataset.get_item(item, keyword)
        if macro is not None:
            tags.set_no_null('FrameType', dataset.get_string(macro, 'FrameType'))
            return


def write_functional_groups(item, tags):
    """Apply the macros of one functional group item to tags."""
    if item is None or tags is None:
        return

    write_pixel_measures(item, tags)
    write_frame_content(item, tags)
    write_plane_position(item, tags)
    write_plane_orientation(item, tags)
    write_frame_anatomy(item, tags)

    transforms.apply_modality_lut_module(
        dataset.get_item(item, 'PixelValueTransformationSequence'), tags,
        parent='PixelValueTransformationSequence')
    transforms.apply_voi_lut_module(dataset.get_item(item, 'FrameVOILUTSequence'), tags)

    macro = dataset.get_item(item, 'FrameDisplayShutterSequence')
    if macro is not None:
        shutter.write_display_shutter(macro, tags)

    write_frame_type(item, tags)


def write_shared_functional_groups(ds, tags):
    item = dataset.get_item(ds, 'SharedFunctionalGroupsSequence')
    if item is None:
        return False
    write_functional_groups(item, tags)
    return True


def write_per_frame_functional_groups(ds, tags, index):
    """Apply the functional groups of frame index, return False if there are none."""
    item = dataset.get_item(ds, 'PerFrameFunctionalGroupsSequence', index)
    if item is None:
        return False
    write_functional_groups(item, tags)
    return True
