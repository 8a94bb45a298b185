"""The map of resolved tags handed to a renderer.

A TagMap only accepts the keys registered in KEYS, each with the types its
value may take. Resolvers write into it in a fixed order so that later,
more specific sources override earlier ones. Inconsistencies met on the way
are logged and kept in TagMap.diagnostics.
"""

import logging
import datetime
from collections import namedtuple

from pydicom.dataset import Dataset
from pydicom.sequence import Sequence

from dcmdisplay.lut import LookupTable
from dcmdisplay.shutter import ShutterRegion

# Placeholder for mandatory text values that are missing
NO_VALUE = 'UNKNOWN'

Diagnostic = namedtuple('Diagnostic', ['source', 'message'])

_number = (float, int)
_list = (list, tuple)
_items = (Sequence, list)

KEYS = {
    # Image pixel module
    'Modality': str,
    'SOPClassUID': str,
    'PhotometricInterpretation': str,
    'PixelRepresentation': int,
    'BitsStored': int,
    'SmallestImagePixelValue': int,
    'LargestImagePixelValue': int,
    'PixelIntensityRelationship': str,
    'AcquisitionDate': datetime.date,
    'AcquisitionTime': datetime.time,
    'InstanceNumber': int,
    # Modality LUT
    'RescaleSlope': _number,
    'RescaleIntercept': _number,
    'RescaleType': str,
    'ModalityLUTSequence': Dataset,
    'ModalityLUTData': LookupTable,
    'ModalityLUTType': str,
    'ModalityLUTExplanation': str,
    # VOI LUT
    'WindowCenter': _list,
    'WindowWidth': _list,
    'WindowCenterWidthExplanation': _list,
    'VOILUTFunction': str,
    'VOILUTSequence': _items,
    'VOILUTsData': _list,
    'VOILUTsExplanation': _list,
    # Presentation LUT
    'PresentationLUTSequence': Dataset,
    'PresentationLUTShape': str,
    'PRLUTsData': LookupTable,
    'PRLUTsExplanation': str,
    # Frame geometry
    'PixelSpacing': _list,
    'SliceThickness': _number,
    'FrameAcquisitionNumber': int,
    'StackID': str,
    'ImagePositionPatient': _list,
    'ImageOrientationPatient': _list,
    'ImageOrientationPlane': str,
    'ImageLaterality': str,
    'FrameType': str,
    'SlicePosition': _list,
    # Display shutter
    'ShutterFinalShape': ShutterRegion,
    'ShutterPSValue': int,
    'ShutterRGBColor': tuple,
    # PET
    'SUVFactor': _number,
    # Patient
    'PatientPseudoUID': str,
    'PatientID': str,
    'PatientName': str,
    'PatientBirthDate': datetime.date,
    'PatientBirthTime': datetime.time,
    'PatientSex': str,
    'IssuerOfPatientID': str,
    'PatientWeight': _number,
    'PatientComments': str,
    # Study
    'StudyInstanceUID': str,
    'StudyID': str,
    'StudyDate': datetime.date,
    'StudyTime': datetime.time,
    'StudyDescription': str,
    'StudyComments': str,
    'AccessionNumber': str,
    'ModalitiesInStudy': _list,
    'NumberOfStudyRelatedInstances': int,
    'NumberOfStudyRelatedSeries': int,
    'ProcedureCodeSequence': _items,
    # Series
    'SeriesInstanceUID': str,
    'SeriesDate': datetime.date,
    'SeriesDescription': str,
    'SeriesNumber': int,
    'RetrieveAETitle': _list,
    'ReferringPhysicianName': str,
    'InstitutionName': str,
    'InstitutionalDepartmentName': str,
    'StationName': str,
    'Manufacturer': str,
    'ManufacturerModelName': str,
    'ReferencedPerformedProcedureStepSequence': _items,
    'RequestAttributesSequence': _items,
    'PerformedProcedureStepStartDate': datetime.date,
    'PerformedProcedureStepStartTime': datetime.time,
    'PreferredPlaybackSequencing': int,
    'CineRate': int,
    'KVP': _number,
    'Laterality': str,
    'BodyPartExamined': str,
    'FrameOfReferenceUID': str,
    'NumberOfSeriesRelatedInstances': int,
}


class TagMap(dict):
    """Tags resolved for one frame, keyed by DICOM keyword."""

    def __init__(self, *args, **kwargs):
        super().__init__()
        self.diagnostics = []
        self.update(*args, **kwargs)

    def __setitem__(self, key, value):
        self.set(key, value)

    def update(self, *args, **kwargs):
        for key, value in dict(*args, **kwargs).items():
            self.set(key, value)

    def copy(self):
        tags = TagMap(self)
        tags.diagnostics = list(self.diagnostics)
        return tags

    def set(self, key, value):
        if key not in KEYS:
            raise KeyError(str(key) + ' is not a known tag')
        if value is not None and not isinstance(value, KEYS[key]):
            msg = 'Cannot set ' + key + ' to a value of type ' + type(value).__name__
            raise TypeError(msg)
        dict.__setitem__(self, key, value)

    def set_no_null(self, key, value):
        """Set a value, leaving the map unchanged when it is None."""
        if value is not None:
            self.set(key, value)

    def report(self, source, message, *args, level=logging.DEBUG):
        """Log a diagnostic on the logger of its source and keep a record of it."""
        source.log(level, message, *args)
        if args:
            message = message % args
        self.diagnostics.append(Diagnostic(source.name, message))
