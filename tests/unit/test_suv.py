import pytest

import dcmdisplay.suv as suv
from dcmdisplay.ds import new_dataset
from dcmdisplay.pipeline import write_instance_tags, frame_tags

#
# Helper functions
#

def expected_factor(weight, dose, half_life, seconds):
    corrected = dose * 2 ** (-seconds / half_life)
    return weight * 1000.0 / corrected

def factor(ds):
    tags = write_instance_tags(ds)
    return suv.compute_suv_factor(ds, tags), tags

#
# Tests
#

def test_bqml_injection_datetime():

    ds = new_dataset('PETImage')
    value, tags = factor(ds)
    assert value == pytest.approx(expected_factor(70, 370000000, 6588, 3600))
    assert tags['SUVFactor'] == value


def test_bqml_injection_time():

    ds = new_dataset('PETImage')
    del ds.RadiopharmaceuticalInformationSequence[0].RadiopharmaceuticalStartDateTime
    ds.RadiopharmaceuticalInformationSequence[0].RadiopharmaceuticalStartTime = '093000'
    value, _ = factor(ds)
    assert value == pytest.approx(expected_factor(70, 370000000, 6588, 1800))


def test_series_time_after_acquisition():

    ds = new_dataset('PETImage')
    del ds.RadiopharmaceuticalInformationSequence[0].RadiopharmaceuticalStartDateTime
    ds.RadiopharmaceuticalInformationSequence[0].RadiopharmaceuticalStartTime = '090000'
    ds.SeriesTime = '110000'
    value, tags = factor(ds)
    assert value is None
    assert 'SUVFactor' not in tags

    # The scan date is then read from the GE private attribute
    ds.add_new(0x00090010, 'LO', 'GEMS_PETD_01')
    ds.add_new(0x0009100D, 'DT', '20230301080000')
    value, tags = factor(ds)
    assert value == pytest.approx(expected_factor(70, 370000000, 6588, 7200))


def test_cnts():

    ds = new_dataset('PETImage')
    ds.Units = 'CNTS'
    value, _ = factor(ds)
    assert value is None

    ds.add_new(0x70530010, 'LO', 'Philips PET Private Group')
    ds.add_new(0x70531000, 'DS', '0.000551')
    value, tags = factor(ds)
    assert value == pytest.approx(0.000551)
    assert tags['SUVFactor'] == pytest.approx(0.000551)


def test_gml():

    ds = new_dataset('PETImage')
    ds.Units = 'GML'
    value, _ = factor(ds)
    assert value == 1.0


def test_not_applicable():

    ds = new_dataset('PETImage')
    ds.CorrectedImage = ['DECY', 'SCAT']
    assert factor(ds)[0] is None

    ds = new_dataset('CTImage')
    assert factor(ds)[0] is None


def test_missing_attributes():

    ds = new_dataset('PETImage')
    ds.PatientWeight = '0'
    assert factor(ds)[0] is None

    ds = new_dataset('PETImage')
    ds.DecayCorrection = 'ADMIN'
    assert factor(ds)[0] is None

    ds = new_dataset('PETImage')
    del ds.AcquisitionTime
    del ds.AcquisitionDate
    assert factor(ds)[0] is None

    ds = new_dataset('PETImage')
    del ds.RadiopharmaceuticalInformationSequence[0].RadionuclideHalfLife
    value, tags = factor(ds)
    assert value is None
    assert tags.diagnostics != []


def test_injection_after_scan():

    ds = new_dataset('PETImage')
    ds.RadiopharmaceuticalInformationSequence[0].RadiopharmaceuticalStartDateTime = '20230301103000'
    assert factor(ds)[0] is None


def test_frame_tags():

    ds = new_dataset('PETImage')
    tags = frame_tags(ds)
    assert tags['SUVFactor'] == pytest.approx(expected_factor(70, 370000000, 6588, 3600))
    assert tags['RescaleSlope'] == 2.5


if __name__ == "__main__":

    test_bqml_injection_datetime()
    test_bqml_injection_time()
    test_series_time_after_acquisition()
    test_cnts()
    test_gml()
    test_not_applicable()
    test_missing_attributes()
    test_injection_after_scan()
    test_frame_tags()

    print('---------------------')
    print('suv passed all tests!')
    print('---------------------')
