"""Standardized uptake value factor of PET images.

The factor converts stored PET values (after the modality transform) to
body weight SUV. It is computed from the decay corrected injected dose for
BQML units, read from a Philips private attribute for CNTS units, and is 1
for images already in GML.
"""

import logging

import dcmdisplay.ds.dataset as dataset
import dcmdisplay.utils.variables as variables

logger = logging.getLogger(__name__)

PET = 'PT'

GE_PRIVATE_CREATOR = (0x00090010, 'GEMS_PETD_01')
GE_SCAN_DATETIME = 0x0009100D

PHILIPS_PRIVATE_CREATOR = (0x70530010, 'Philips PET Private Group')
PHILIPS_SUV_FACTOR = 0x70531000


def is_suv_applicable(ds, tags):
    modality = tags.get('Modality') or dataset.get_string(ds, 'Modality')
    if modality != PET:
        return False
    corrections = dataset.get_strings(ds, 'CorrectedImage', [])
    return 'ATTN' in corrections and 'DECY' in corrections


def decay_corrected_dose(total_dose, half_life, time):
    """Injected dose decayed over time (ms), with half_life in s."""
    return total_dose * 2 ** (-time / (1000.0 * half_life))


def _has_private_creator(ds, creator):
    return dataset.get_string(ds, creator[0]) == creator[1]


def _ge_scan_datetime(ds, item):
    if not _has_private_creator(ds, GE_PRIVATE_CREATOR):
        return None
    value = dataset.get_datetime(ds, GE_SCAN_DATETIME)
    if value is None:
        value = dataset.get_datetime(item, GE_SCAN_DATETIME)
    return value


def bqml_suv_factor(ds, tags, index=0):
    weight = dataset.get_float(ds, 'PatientWeight', 0.0)
    if not weight:
        tags.report(logger, "Cannot compute SUV without patient weight")
        return None

    item = dataset.get_item(ds, 'RadiopharmaceuticalInformationSequence', index)
    if item is None:
        tags.report(logger, "Cannot compute SUV without radiopharmaceutical information")
        return None

    total_dose = dataset.get_float(item, 'RadionuclideTotalDose')
    half_life = dataset.get_float(item, 'RadionuclideHalfLife')
    inject_time = dataset.get_time(item, 'RadiopharmaceuticalStartTime')
    inject_datetime = dataset.get_datetime(item, 'RadiopharmaceuticalStartDateTime')
    acquisition = variables.date_time(tags.get('AcquisitionDate'), tags.get('AcquisitionTime'))
    scan_date = dataset.get_date(ds, 'SeriesDate')

    if dataset.get_string(ds, 'DecayCorrection') != 'START':
        tags.report(logger, "Cannot compute SUV when decay correction is not START")
        return None
    if total_dose is None or half_life is None or acquisition is None:
        tags.report(logger, "Cannot compute SUV without dose, half life and acquisition time")
        return None
    if inject_datetime is None and (scan_date is None or inject_time is None):
        tags.report(logger, "Cannot compute SUV without injection time")
        return None
    if total_dose <= 0 or half_life <= 0:
        tags.report(logger, "Cannot compute SUV with dose %s and half life %s", total_dose, half_life)
        return None

    scan_datetime = variables.date_time(scan_date, dataset.get_time(ds, 'SeriesTime'))
    if scan_datetime is None:
        return None

    if inject_datetime is None:
        # Series time after the acquisition: the series time has been
        # overwritten and the scan date is only found in a private GE attribute
        if scan_datetime > acquisition:
            private = _ge_scan_datetime(ds, item)
            scan_date = None if private is None else private.date()
        if scan_date is None:
            tags.report(logger, "Cannot compute SUV without a reliable scan date")
            return None
        inject_datetime = variables.date_time(scan_date, inject_time)

    time = variables.milliseconds(scan_datetime - inject_datetime)
    if time <= 0:
        tags.report(logger, "Cannot compute SUV with injection after the scan")
        return None
    corrected = decay_corrected_dose(total_dose, half_life, time)
    return weight * 1000.0 / corrected


def cnts_suv_factor(ds):
    if not _has_private_creator(ds, PHILIPS_PRIVATE_CREATOR):
        return None
    factor = dataset.get_float(ds, PHILIPS_SUV_FACTOR, 0.0)
    if not factor:
        return None
    return factor


def suv_factor(ds, tags, index=0):
    """SUV factor of a PET image, or None if it does not apply.

    index selects the item of the Radiopharmaceutical Information Sequence.
    """
    if not is_suv_applicable(ds, tags):
        return None
    units = dataset.get_string(ds, 'Units')
    if units == 'BQML':
        return bqml_suv_factor(ds, tags, index)
    elif units == 'CNTS':
        return cnts_suv_factor(ds)
    elif units == 'GML':
        return 1.0
    return None


def compute_suv_factor(ds, tags, index=0):
    """Set SUVFactor in tags when a nonzero factor applies."""
    factor = suv_factor(ds, tags, index)
    if factor:
        tags.set('SUVFactor', factor)
    return factor
