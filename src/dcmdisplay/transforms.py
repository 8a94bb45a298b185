"""Modality, VOI and Presentation LUT stages of the grayscale pipeline.

The apply_* functions copy the attributes of one module (from a dataset or
a functional group item) into a TagMap. The build_* functions run once all
sources have been applied, and decode the lookup tables the map points to.
"""

import logging

import dcmdisplay.ds.dataset as dataset
from dcmdisplay.lut import create_lut, contains_lut_attributes

logger = logging.getLogger(__name__)

# Modalities whose Modality LUT is not applied to log-transformed or
# display-ready pixel data (PS 3.3 C.8.7.1.1.2)
XRAY_MODALITIES = ['XA', 'XRF']
NON_LINEAR_RELATIONSHIPS = ['LOG', 'DISP']


def contains_rescale_attributes(items):
    return dataset.contains_required_attributes(items, 'RescaleIntercept', 'RescaleSlope')


def contains_modality_lut_attributes(item):
    return dataset.contains_value(item, 'ModalityLUTType') and contains_lut_attributes(item)


def contains_window_attributes(items):
    return dataset.contains_required_attributes(items, 'WindowCenter', 'WindowWidth')


def apply_modality_lut_module(items, tags, parent=None):
    """Copy rescale parameters and the Modality LUT Sequence item into tags.

    parent names the functional group the items come from, if any. A
    functional group without a complete rescale pair is reported.
    """
    if items is None or tags is None:
        return

    if contains_rescale_attributes(items):
        tags.set_no_null('RescaleSlope', dataset.get_float(items, 'RescaleSlope'))
        tags.set_no_null('RescaleIntercept', dataset.get_float(items, 'RescaleIntercept'))
        tags.set_no_null('RescaleType', dataset.get_string(items, 'RescaleType'))
    elif parent is not None:
        tags.report(logger, "Cannot apply Modality LUT from %s with inconsistent attributes", parent, level=logging.INFO)

    item = dataset.get_item(items, 'ModalityLUTSequence')
    if contains_modality_lut_attributes(item):
        tags.set('ModalityLUTSequence', item)


def apply_voi_lut_module(items, tags):
    """Copy the window and the VOI LUT Sequence into tags.

    The window is only copied when both center and width are present.
    """
    if items is None or tags is None:
        return

    if contains_window_attributes(items):
        tags.set_no_null('WindowWidth', dataset.get_floats(items, 'WindowWidth'))
        tags.set_no_null('WindowCenter', dataset.get_floats(items, 'WindowCenter'))
        tags.set_no_null('WindowCenterWidthExplanation', dataset.get_strings(items, 'WindowCenterWidthExplanation'))
        tags.set_no_null('VOILUTFunction', dataset.get_string(items, 'VOILUTFunction'))

    sequence = dataset.get_sequence(items, 'VOILUTSequence')
    if sequence:
        tags.set('VOILUTSequence', sequence)


def apply_pr_lut_module(ds, tags):
    """Copy the Presentation LUT Sequence item, or else the Presentation LUT Shape."""
    if ds is None or tags is None:
        return
    item = dataset.get_item(ds, 'PresentationLUTSequence')
    if item is not None:
        tags.set('PresentationLUTSequence', item)
    else:
        tags.set_no_null('PresentationLUTShape', dataset.get_string(ds, 'PresentationLUTShape'))


def read_pr_luts_module(ds, tags):
    """Apply the LUT modules of a Grayscale Softcopy Presentation State."""
    if ds is None or tags is None:
        return
    apply_modality_lut_module(ds, tags)
    apply_voi_lut_module(dataset.get_item(ds, 'SoftcopyVOILUTSequence'), tags)
    apply_pr_lut_module(ds, tags)


def is_modality_lut_applicable(tags):
    if tags.get('Modality') not in XRAY_MODALITIES:
        return True
    relationship = tags.get('PixelIntensityRelationship')
    if relationship is None:
        return True
    return relationship.strip().upper() not in NON_LINEAR_RELATIONSHIPS


def build_modality_lut(tags, little_endian=True):
    item = tags.get('ModalityLUTSequence')
    if contains_modality_lut_attributes(item):
        if is_modality_lut_applicable(tags):
            signed = bool(tags.get('PixelRepresentation'))
            tags.set_no_null('ModalityLUTData', create_lut(item, signed, little_endian, tags))
            tags.set_no_null('ModalityLUTType', dataset.get_string(item, 'ModalityLUTType'))
            tags.set_no_null('ModalityLUTExplanation', dataset.get_string(item, 'LUTExplanation'))
        else:
            tags.report(logger, "Modality LUT Sequence shall not be applied according to PixelIntensityRelationship")
    check_modality_lut(tags)


def check_modality_lut(tags):
    if tags.get('ModalityLUTData') is not None:
        if tags.get('RescaleIntercept') is not None:
            tags.report(logger, "Modality LUT Sequence shall not be present if Rescale Intercept is present")
        if tags.get('ModalityLUTType') is None:
            tags.report(logger, "Modality Type is required if Modality LUT Sequence is present")
    elif tags.get('RescaleIntercept') is not None:
        if tags.get('RescaleSlope') is None:
            tags.report(logger, "Modality Rescale Slope is required if Rescale Intercept is present")
        elif tags.get('RescaleType') is None:
            tags.report(logger, "Modality Rescale Type is required if Rescale Intercept is present")
    else:
        tags.report(logger, "Modality Rescale Intercept is required if Modality LUT Sequence is not present")


def is_modality_output_signed(tags):
    """True if the modality transform of the smallest pixel value is negative."""
    smallest = tags.get('SmallestImagePixelValue')
    smallest = 0 if smallest is None else smallest
    lut = tags.get('ModalityLUTData')
    if lut is None:
        slope = tags.get('RescaleSlope')
        intercept = tags.get('RescaleIntercept')
        slope = 1.0 if slope is None else slope
        intercept = 0.0 if intercept is None else intercept
        return smallest * slope + intercept < 0
    value = lut.lookup(smallest)
    return value is not None and value < 0


def build_voi_luts(tags, little_endian=True):
    sequence = tags.get('VOILUTSequence')
    if sequence:
        signed = is_modality_output_signed(tags)
        luts = []
        explanations = []
        for i, item in enumerate(sequence):
            if contains_lut_attributes(item):
                luts.append(create_lut(item, signed, little_endian, tags))
                explanations.append(dataset.get_string(item, 'LUTExplanation'))
            else:
                tags.report(logger, "Cannot read VOI LUT Data [%s]", i, level=logging.INFO)
                luts.append(None)
                explanations.append(None)
        tags.set('VOILUTsData', luts)
        tags.set('VOILUTsExplanation', explanations)
    check_window(tags)


def check_window(tags):
    center = tags.get('WindowCenter')
    width = tags.get('WindowWidth')
    if center is not None and width is None:
        tags.report(logger, "VOI Window Width is required if Window Center is present")
    elif center is None and width is not None:
        tags.report(logger, "VOI Window Center is required if Window Width is present")
    elif center is not None and len(center) != len(width):
        tags.report(logger, "VOI Window Center and Width attributes have different number of values")


def build_presentation_lut(tags, little_endian=True):
    item = tags.get('PresentationLUTSequence')
    if item is None:
        return
    tags.set_no_null('PRLUTsData', create_lut(item, False, little_endian, tags))
    tags.set_no_null('PRLUTsExplanation', dataset.get_string(item, 'LUTExplanation'))


def build_luts(tags, little_endian=True):
    """Decode the Modality, VOI and Presentation LUTs referenced in tags."""
    build_modality_lut(tags, little_endian)
    build_voi_luts(tags, little_endian)
    build_presentation_lut(tags, little_endian)
