"""Patient, study and series attributes shown alongside the image."""

import datetime

from pydicom.datadict import dictionary_VR

import dcmdisplay.ds.dataset as dataset
import dcmdisplay.utils.variables as variables
from dcmdisplay.tags import TagMap, KEYS, NO_VALUE


def module_patient():

    return [
        'IssuerOfPatientID',
        'PatientBirthDate',
        'PatientBirthTime',
        'PatientWeight',
        'PatientComments',
    ]


def module_study():

    return [
        'StudyInstanceUID',
        'StudyID',
        'StudyTime',
        'StudyDescription',
        'StudyComments',
        'AccessionNumber',
        'ModalitiesInStudy',
        'NumberOfStudyRelatedInstances',
        'NumberOfStudyRelatedSeries',
        'ProcedureCodeSequence',
    ]


def module_series():

    return [
        'SeriesDescription',
        'RetrieveAETitle',
        'ReferringPhysicianName',
        'InstitutionName',
        'InstitutionalDepartmentName',
        'StationName',
        'Manufacturer',
        'ManufacturerModelName',
        'ReferencedPerformedProcedureStepSequence',
        'SeriesNumber',
        'PreferredPlaybackSequencing',
        'KVP',
        'Laterality',
        'BodyPartExamined',
        'FrameOfReferenceUID',
        'NumberOfSeriesRelatedInstances',
        'PerformedProcedureStepStartDate',
        'PerformedProcedureStepStartTime',
        'RequestAttributesSequence',
    ]


def read_value(ds, keyword):
    """Read an attribute with the getter that matches its type in KEYS."""
    types = KEYS[keyword]
    if not isinstance(types, tuple):
        types = (types,)
    if float in types:
        return dataset.get_float(ds, keyword)
    if int in types:
        return dataset.get_int(ds, keyword)
    if str in types:
        value = dataset.get_string(ds, keyword)
        if value is not None and dictionary_VR(keyword) == 'PN':
            return build_person_name(value)
        return value
    if datetime.date in types:
        return dataset.get_date(ds, keyword)
    if datetime.time in types:
        return dataset.get_time(ds, keyword)
    if list in types and tuple in types:
        return dataset.get_strings(ds, keyword)
    return dataset.get_sequence(ds, keyword)


def copy_values(ds, tags, keywords):
    for keyword in keywords:
        tags.set_no_null(keyword, read_value(ds, keyword))


def build_person_name(name):
    """Readable form of a DICOM person name.

    Components separated by '^' are joined with spaces, except prefix and
    suffix which follow a comma. Representations separated by '=' are kept.
    """
    if name is None:
        return None
    representations = name.split('=')
    while representations and representations[-1] == '':
        representations.pop()
    groups = []
    for group in representations:
        text = ''
        for i, component in enumerate(group.split('^')):
            if component != '':
                text += ', ' if i >= 3 else ' '
            text += component
        groups.append(text)
    return '='.join(groups).strip()


def build_patient_name(name):
    if name is None or name.strip() == '':
        name = NO_VALUE
    return build_person_name(name)


def build_patient_sex(sex):
    if sex is None:
        sex = 'O'
    sex = sex.upper()
    if sex.startswith('F'):
        return 'Female'
    if sex.startswith('M'):
        return 'Male'
    return 'Other'


def build_patient_pseudo_uid(patient_id, issuer, name=None, birth_date=None):
    """Identifier of a patient that stays unique across issuers.

    Without an issuer the birth date and the first letters of the name are
    appended instead.
    """
    uid = NO_VALUE if patient_id is None else patient_id
    if issuer is not None and issuer.strip() != '':
        return uid + issuer
    if birth_date is not None:
        uid += variables.date_to_str(birth_date)
    if name is not None:
        uid += name[:5]
    return uid


def write_patient(ds, tags):
    patient_id = dataset.get_string(ds, 'PatientID', NO_VALUE)
    name = build_patient_name(dataset.get_string(ds, 'PatientName'))
    tags.set('PatientID', patient_id)
    tags.set('PatientName', name)
    tags.set('PatientSex', build_patient_sex(dataset.get_string(ds, 'PatientSex')))
    copy_values(ds, tags, module_patient())
    tags.set('PatientPseudoUID', build_patient_pseudo_uid(
        patient_id, tags.get('IssuerOfPatientID'), name, tags.get('PatientBirthDate')))


def write_study(ds, tags):
    copy_values(ds, tags, module_study())
    tags.set_no_null('StudyDate', variables.date_time(
        dataset.get_date(ds, 'StudyDate'), tags.get('StudyTime')))


def write_series(ds, tags):
    tags.set('SeriesInstanceUID', dataset.get_string(ds, 'SeriesInstanceUID', NO_VALUE))
    tags.set('Modality', dataset.get_string(ds, 'Modality', NO_VALUE))
    copy_values(ds, tags, module_series())
    tags.set_no_null('SeriesDate', variables.date_time(
        dataset.get_date(ds, 'SeriesDate'), dataset.get_time(ds, 'SeriesTime')))
    rate = dataset.get_int(ds, 'CineRate')
    if rate is None:
        rate = dataset.get_int(ds, 'RecommendedDisplayFrameRate')
    tags.set_no_null('CineRate', rate)


def patient_tags(ds):
    tags = TagMap()
    write_patient(ds, tags)
    return tags


def study_tags(ds):
    tags = TagMap()
    write_study(ds, tags)
    return tags


def series_tags(ds):
    tags = TagMap()
    write_series(ds, tags)
    return tags


def write_metadata(ds, tags=None):
    """Patient, study and series attributes of ds in one TagMap."""
    if tags is None:
        tags = TagMap()
    write_patient(ds, tags)
    write_study(ds, tags)
    write_series(ds, tags)
    return tags
