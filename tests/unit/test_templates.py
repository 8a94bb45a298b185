from pydicom.dataset import Dataset

from dcmdisplay.ds import new_dataset, SOPClass, DisplayDataset
from dcmdisplay.ds.types.ct_image import CTImage
from dcmdisplay.ds.types.enhanced_ct_image import EnhancedCTImage, stack
import dcmdisplay.ds.types.xray_angiographic_image as xray_angiographic_image


def test_new_dataset():

    for type in ['CTImage', 'EnhancedCTImage', 'XrayAngiographicImage', 'PETImage', 'GrayscalePresentationState']:
        ds = new_dataset(type)
        assert isinstance(ds, DisplayDataset)
        assert SOPClass(ds.SOPClassUID) == type
        assert ds.file_meta.MediaStorageSOPClassUID == ds.SOPClassUID

    ds = new_dataset('Instance')
    assert isinstance(ds, Dataset)
    assert 'SOPClassUID' not in ds


def test_CTImage():

    ds = CTImage()
    assert ds.Modality == 'CT'
    assert ds.VOILUTSequence[0].LUTDescriptor[1] == -1024
    assert len(ds.VOILUTSequence[0].LUTData) == 4096

    # Wrapping an existing dataset keeps its attributes
    ds = CTImage(Dataset())
    assert 'Modality' not in ds


def test_EnhancedCTImage():

    ds = EnhancedCTImage()
    assert ds.NumberOfFrames == 3
    assert len(ds.PerFrameFunctionalGroupsSequence) == 3
    assert ds.PerFrameFunctionalGroupsSequence[2].FrameDisplayShutterSequence[0].ShutterShape == 'CIRCULAR'

    ds = stack(Dataset(), frames=5)
    assert len(ds.PerFrameFunctionalGroupsSequence) == 5
    assert ds.PerFrameFunctionalGroupsSequence[4].FrameContentSequence[0].InStackPositionNumber == 5


def test_XrayAngiographicImage():

    ds = xray_angiographic_image.shuttered(Dataset())
    assert ds.ShutterShape == ['RECTANGULAR', 'CIRCULAR']
    assert len(ds.ModalityLUTSequence[0].LUTData) == 512


if __name__ == "__main__":

    test_new_dataset()
    test_CTImage()
    test_EnhancedCTImage()
    test_XrayAngiographicImage()

    print('---------------------------')
    print('templates passed all tests!')
    print('---------------------------')
