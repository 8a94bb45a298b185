import numpy as np
import pydicom
from pydicom.dataset import Dataset, FileMetaDataset
from pydicom.sequence import Sequence

from dcmdisplay.ds.dataset import DisplayDataset

class XrayAngiographicImage(DisplayDataset):
    def __init__(self, dataset=None, template=None):
        super().__init__()

        if (dataset is None) and (template is None):
            template = 'SHUTTERED'

        if dataset is not None:
            self.__dict__ = dataset.__dict__

        if template == 'SHUTTERED':
            shuttered(self)

def shuttered(ds):
    """8-bit angiogram with a Modality LUT and a rectangular and circular shutter"""

    # File meta info data elements
    ds.file_meta = FileMetaDataset()
    ds.file_meta.MediaStorageSOPClassUID = '1.2.840.10008.5.1.4.1.1.12.1'
    ds.file_meta.MediaStorageSOPInstanceUID = pydicom.uid.generate_uid()
    ds.file_meta.TransferSyntaxUID = '1.2.840.10008.1.2.1'

    # Main data elements
    ds.ImageType = ['ORIGINAL', 'PRIMARY', 'SINGLE PLANE']
    ds.SOPClassUID = '1.2.840.10008.5.1.4.1.1.12.1'
    ds.SOPInstanceUID = ds.file_meta.MediaStorageSOPInstanceUID
    ds.StudyDate = '20230301'
    ds.StudyTime = '090000'
    ds.Modality = 'XA'
    ds.Manufacturer = 'Acme'
    ds.PatientName = 'Doe^Jane'
    ds.PatientID = 'XA-1'
    ds.PatientSex = 'F'
    ds.StudyInstanceUID = pydicom.uid.generate_uid()
    ds.SeriesInstanceUID = pydicom.uid.generate_uid()
    ds.SeriesNumber = '2'
    ds.InstanceNumber = '1'
    ds.RecommendedDisplayFrameRate = '15'
    ds.SamplesPerPixel = 1
    ds.PhotometricInterpretation = 'MONOCHROME2'
    ds.Rows = 512
    ds.Columns = 512
    ds.BitsAllocated = 8
    ds.BitsStored = 8
    ds.HighBit = 7
    ds.PixelRepresentation = 0
    ds.PixelIntensityRelationship = 'LIN'

    # Inverting Modality LUT, 8-bit entries padded to 16-bit words
    ds.ModalityLUTSequence = Sequence([Dataset()])
    ds.ModalityLUTSequence[0].add_new(0x00283002, 'US', [256, 0, 8])
    ds.ModalityLUTSequence[0].ModalityLUTType = 'US'
    ds.ModalityLUTSequence[0].LUTExplanation = 'INVERSE'
    ds.ModalityLUTSequence[0].add_new(0x00283006, 'OW', np.arange(255, -1, -1, dtype='<u2').tobytes())

    ds.ShutterShape = ['RECTANGULAR', 'CIRCULAR']
    ds.ShutterLeftVerticalEdge = 50
    ds.ShutterRightVerticalEdge = 450
    ds.ShutterUpperHorizontalEdge = 40
    ds.ShutterLowerHorizontalEdge = 460
    ds.CenterOfCircularShutter = [256, 256]
    ds.RadiusOfCircularShutter = 200
    ds.ShutterPresentationValue = 0

    return ds
