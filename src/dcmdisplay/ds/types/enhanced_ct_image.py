import pydicom
from pydicom.dataset import Dataset, FileMetaDataset
from pydicom.sequence import Sequence

from dcmdisplay.ds.dataset import DisplayDataset

class EnhancedCTImage(DisplayDataset):
    def __init__(self, dataset=None, template=None):
        super().__init__()

        if (dataset is None) and (template is None):
            template = 'STACK'

        if dataset is not None:
            self.__dict__ = dataset.__dict__

        if template == 'STACK':
            stack(self)

def stack(ds, frames=3):
    """Multi-frame CT stack with shared rescale and window and per-frame overrides.

    Frame 1 has its own window, frame 2 has a circular shutter and sagittal 
    orientation.
    """

    # File meta info data elements
    ds.file_meta = FileMetaDataset()
    ds.file_meta.MediaStorageSOPClassUID = '1.2.840.10008.5.1.4.1.1.2.1'
    ds.file_meta.MediaStorageSOPInstanceUID = pydicom.uid.generate_uid()
    ds.file_meta.TransferSyntaxUID = '1.2.840.10008.1.2.1'

    # Main data elements
    ds.ImageType = ['ORIGINAL', 'PRIMARY', 'AXIAL', 'NONE']
    ds.SOPClassUID = '1.2.840.10008.5.1.4.1.1.2.1'
    ds.SOPInstanceUID = ds.file_meta.MediaStorageSOPInstanceUID
    ds.StudyDate = '20230301'
    ds.StudyTime = '120000'
    ds.Modality = 'CT'
    ds.PatientName = 'Doe^John'
    ds.PatientID = 'CT-2'
    ds.StudyInstanceUID = pydicom.uid.generate_uid()
    ds.SeriesInstanceUID = pydicom.uid.generate_uid()
    ds.SeriesNumber = '4'
    ds.InstanceNumber = '1'
    ds.NumberOfFrames = frames
    ds.SamplesPerPixel = 1
    ds.PhotometricInterpretation = 'MONOCHROME2'
    ds.Rows = 256
    ds.Columns = 256
    ds.BitsAllocated = 16
    ds.BitsStored = 16
    ds.HighBit = 15
    ds.PixelRepresentation = 1

    ds.SharedFunctionalGroupsSequence = Sequence([Dataset()])
    shared = ds.SharedFunctionalGroupsSequence[0]
    shared.PixelMeasuresSequence = Sequence([Dataset()])
    shared.PixelMeasuresSequence[0].PixelSpacing = [0.7, 0.7]
    shared.PixelMeasuresSequence[0].SliceThickness = '2.0'
    shared.PlaneOrientationSequence = Sequence([Dataset()])
    shared.PlaneOrientationSequence[0].ImageOrientationPatient = [1, 0, 0, 0, 1, 0]
    shared.PixelValueTransformationSequence = Sequence([Dataset()])
    shared.PixelValueTransformationSequence[0].RescaleIntercept = '-1024'
    shared.PixelValueTransformationSequence[0].RescaleSlope = '1'
    shared.PixelValueTransformationSequence[0].RescaleType = 'HU'
    shared.FrameVOILUTSequence = Sequence([Dataset()])
    shared.FrameVOILUTSequence[0].WindowCenter = '40'
    shared.FrameVOILUTSequence[0].WindowWidth = '400'
    shared.FrameAnatomySequence = Sequence([Dataset()])
    shared.FrameAnatomySequence[0].FrameLaterality = 'U'

    ds.PerFrameFunctionalGroupsSequence = Sequence([Dataset() for _ in range(frames)])
    for i, item in enumerate(ds.PerFrameFunctionalGroupsSequence):
        item.FrameContentSequence = Sequence([Dataset()])
        item.FrameContentSequence[0].FrameAcquisitionNumber = i
        item.FrameContentSequence[0].StackID = '1'
        item.FrameContentSequence[0].InStackPositionNumber = i + 1
        item.PlanePositionSequence = Sequence([Dataset()])
        item.PlanePositionSequence[0].ImagePositionPatient = [-90, -90, 2.0*i]
        item.CTImageFrameTypeSequence = Sequence([Dataset()])
        item.CTImageFrameTypeSequence[0].FrameType = ['ORIGINAL', 'PRIMARY', 'AXIAL', 'NONE']

    frame = ds.PerFrameFunctionalGroupsSequence[1]
    frame.FrameVOILUTSequence = Sequence([Dataset()])
    frame.FrameVOILUTSequence[0].WindowCenter = '300'
    frame.FrameVOILUTSequence[0].WindowWidth = '1500'
    frame.FrameVOILUTSequence[0].WindowCenterWidthExplanation = 'BONE'

    if frames > 2:
        frame = ds.PerFrameFunctionalGroupsSequence[2]
        frame.PlaneOrientationSequence = Sequence([Dataset()])
        frame.PlaneOrientationSequence[0].ImageOrientationPatient = [0, 1, 0, 0, 0, -1]
        frame.FrameDisplayShutterSequence = Sequence([Dataset()])
        frame.FrameDisplayShutterSequence[0].ShutterShape = 'CIRCULAR'
        frame.FrameDisplayShutterSequence[0].CenterOfCircularShutter = [128, 128]
        frame.FrameDisplayShutterSequence[0].RadiusOfCircularShutter = 100
        frame.FrameDisplayShutterSequence[0].ShutterPresentationValue = 0
        frame.FrameDisplayShutterSequence[0].ShutterPresentationColorCIELabValue = [65535, 32896, 32896]
        frame.CTImageFrameTypeSequence[0].FrameType = ['ORIGINAL', 'PRIMARY', 'SAGITTAL', 'NONE']

    return ds
