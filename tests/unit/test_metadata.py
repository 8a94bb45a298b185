import datetime

import dcmdisplay.metadata as metadata
from dcmdisplay.ds import new_dataset


def test_build_person_name():

    assert metadata.build_person_name('Doe^John') == 'Doe John'
    assert metadata.build_person_name('Doe^John^^Dr') == 'Doe John, Dr'
    assert metadata.build_person_name('Doe^John^^Dr^PhD') == 'Doe John, Dr, PhD'
    assert metadata.build_person_name('Doe^John=') == 'Doe John'
    assert metadata.build_person_name('Eve') == 'Eve'
    assert metadata.build_person_name(None) is None


def test_build_patient_name():

    assert metadata.build_patient_name(None) == 'UNKNOWN'
    assert metadata.build_patient_name('  ') == 'UNKNOWN'
    assert metadata.build_patient_name('Doe^Jane') == 'Doe Jane'


def test_build_patient_sex():

    assert metadata.build_patient_sex('F') == 'Female'
    assert metadata.build_patient_sex('m') == 'Male'
    assert metadata.build_patient_sex('O') == 'Other'
    assert metadata.build_patient_sex(None) == 'Other'


def test_build_patient_pseudo_uid():

    assert metadata.build_patient_pseudo_uid('1234', 'HOSP') == '1234HOSP'
    assert metadata.build_patient_pseudo_uid('1234', None, 'Eve', datetime.date(1970, 1, 1)) == '123419700101Eve'
    assert metadata.build_patient_pseudo_uid(None, ' ', 'Smithson') == 'UNKNOWNSmith'


def test_write_metadata():

    ds = new_dataset('CTImage')
    tags = metadata.write_metadata(ds)

    assert tags['PatientID'] == '1234'
    assert tags['PatientName'] == 'Eve'
    assert tags['PatientSex'] == 'Female'
    assert tags['PatientBirthDate'] == datetime.date(1970, 1, 1)
    assert tags['PatientWeight'] == 60.0
    assert tags['PatientPseudoUID'] == '123419700101Eve'

    assert tags['StudyDate'] == datetime.datetime(2005, 1, 1, 1, 1, 0)
    assert tags['StudyTime'] == datetime.time(1, 1, 0)
    assert tags['StudyDescription'] == 'Visible Human Female'
    assert tags['AccessionNumber'] == '1'

    assert tags['Modality'] == 'CT'
    assert tags['SeriesInstanceUID'] == ds.SeriesInstanceUID
    assert tags['SeriesDate'] == datetime.datetime(2005, 1, 1, 1, 5, 0)
    assert tags['SeriesNumber'] == 1
    assert tags['ReferringPhysicianName'] == 'Doe John, Dr'
    assert tags['InstitutionName'] == 'National Library of Medicine'
    assert tags['KVP'] == 120.0
    assert 'CineRate' not in tags


def test_series_defaults():

    ds = new_dataset('XrayAngiographicImage')
    del ds.SeriesInstanceUID
    tags = metadata.series_tags(ds)
    assert tags['SeriesInstanceUID'] == 'UNKNOWN'
    assert tags['CineRate'] == 15

    ds.CineRate = 30
    assert metadata.series_tags(ds)['CineRate'] == 30


def test_levels():

    ds = new_dataset('PETImage')
    assert metadata.patient_tags(ds)['PatientName'] == 'Doe John'
    assert 'PatientName' not in metadata.study_tags(ds)
    assert metadata.study_tags(ds)['StudyDate'] == datetime.datetime(2023, 3, 1, 8, 30)
    assert metadata.series_tags(ds)['Modality'] == 'PT'


if __name__ == "__main__":

    test_build_person_name()
    test_build_patient_name()
    test_build_patient_sex()
    test_build_patient_pseudo_uid()
    test_write_metadata()
    test_series_defaults()
    test_levels()

    print('--------------------------')
    print('metadata passed all tests!')
    print('--------------------------')
