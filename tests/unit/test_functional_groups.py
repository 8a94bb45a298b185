from pydicom.dataset import Dataset
from pydicom.sequence import Sequence

import dcmdisplay.functional_groups as functional_groups
from dcmdisplay.ds import new_dataset
from dcmdisplay.pipeline import frame_tags
from dcmdisplay.tags import TagMap


def test_shared_functional_groups():

    ds = new_dataset('EnhancedCTImage')
    tags = frame_tags(ds, 0)
    assert tags['PixelSpacing'] == [0.7, 0.7]
    assert tags['SliceThickness'] == 2.0
    assert tags['RescaleIntercept'] == -1024.0
    assert tags['RescaleSlope'] == 1.0
    assert tags['RescaleType'] == 'HU'
    assert tags['WindowCenter'] == [40.0]
    assert tags['WindowWidth'] == [400.0]
    assert tags['ImageOrientationPatient'] == [1.0, 0.0, 0.0, 0.0, 1.0, 0.0]
    assert tags['ImageOrientationPlane'] == 'AXIAL'
    assert tags['ImageLaterality'] == 'U'
    assert 'ShutterFinalShape' not in tags


def test_per_frame_functional_groups():

    ds = new_dataset('EnhancedCTImage')

    tags = frame_tags(ds, 0)
    assert tags['FrameAcquisitionNumber'] == 0
    assert tags['StackID'] == '1'
    assert tags['InstanceNumber'] == 1
    assert tags['ImagePositionPatient'] == [-90.0, -90.0, 0.0]
    assert tags['FrameType'] == 'ORIGINAL\\PRIMARY\\AXIAL\\NONE'

    tags = frame_tags(ds, 1)
    assert tags['InstanceNumber'] == 2
    assert tags['ImagePositionPatient'] == [-90.0, -90.0, 2.0]
    assert tags['SlicePosition'][2] == 2.0


def test_per_frame_overrides_shared():

    ds = new_dataset('EnhancedCTImage')
    tags = frame_tags(ds, 1)
    assert tags['WindowCenter'] == [300.0]
    assert tags['WindowWidth'] == [1500.0]
    assert tags['WindowCenterWidthExplanation'] == ['BONE']

    tags = frame_tags(ds, 2)
    assert tags['ImageOrientationPlane'] == 'SAGITTAL'
    assert tags['FrameType'] == 'ORIGINAL\\PRIMARY\\SAGITTAL\\NONE'


def test_frame_display_shutter():

    ds = new_dataset('EnhancedCTImage')
    tags = frame_tags(ds, 2)
    region = tags['ShutterFinalShape']
    assert region.contains(128, 128)
    assert region.contains(28, 128)
    assert not region.contains(1, 1)
    assert tags['ShutterPSValue'] == 0
    assert all(abs(c - 255) <= 1 for c in tags['ShutterRGBColor'])


def test_missing_frame():

    ds = new_dataset('EnhancedCTImage')
    tags = TagMap()
    assert not functional_groups.write_per_frame_functional_groups(ds, tags, 10)
    assert functional_groups.write_per_frame_functional_groups(ds, tags, 2)

    tags = frame_tags(ds, 10)
    assert tags.diagnostics[0].message == 'No functional groups for frame 10'
    assert tags['WindowCenter'] == [40.0]


def test_frame_type_precedence():

    item = Dataset()
    item.CTImageFrameTypeSequence = Sequence([Dataset()])
    item.CTImageFrameTypeSequence[0].FrameType = ['DERIVED', 'PRIMARY', 'AXIAL', 'NONE']
    item.MRImageFrameTypeSequence = Sequence([Dataset()])
    item.MRImageFrameTypeSequence[0].FrameType = ['ORIGINAL', 'PRIMARY', 'M_SE', 'NONE']
    tags = TagMap()
    functional_groups.write_functional_groups(item, tags)
    assert tags['FrameType'] == 'ORIGINAL\\PRIMARY\\M_SE\\NONE'


def test_inconsistent_pixel_value_transformation():

    item = Dataset()
    item.PixelValueTransformationSequence = Sequence([Dataset()])
    item.PixelValueTransformationSequence[0].RescaleSlope = '1'
    tags = TagMap()
    functional_groups.write_functional_groups(item, tags)
    assert 'RescaleSlope' not in tags
    assert tags.diagnostics[0].message == 'Cannot apply Modality LUT from PixelValueTransformationSequence with inconsistent attributes'


if __name__ == "__main__":

    test_shared_functional_groups()
    test_per_frame_functional_groups()
    test_per_frame_overrides_shared()
    test_frame_display_shutter()
    test_missing_frame()
    test_frame_type_precedence()
    test_inconsistent_pixel_value_transformation()

    print('-----------------------------------')
    print('functional groups passed all tests!')
    print('-----------------------------------')
