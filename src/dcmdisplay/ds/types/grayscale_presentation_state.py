import pydicom
from pydicom.dataset import Dataset, FileMetaDataset
from pydicom.sequence import Sequence

from dcmdisplay.ds.dataset import DisplayDataset

class GrayscalePresentationState(DisplayDataset):
    def __init__(self, dataset=None, template=None):
        super().__init__()

        if (dataset is None) and (template is None):
            template = 'INVERSE'

        if dataset is not None:
            self.__dict__ = dataset.__dict__

        if template == 'INVERSE':
            inverse(self)

def inverse(ds):
    """Presentation state with its own rescale, a soft tissue window and an inverted display"""

    # File meta info data elements
    ds.file_meta = FileMetaDataset()
    ds.file_meta.MediaStorageSOPClassUID = '1.2.840.10008.5.1.4.1.1.11.1'
    ds.file_meta.MediaStorageSOPInstanceUID = pydicom.uid.generate_uid()
    ds.file_meta.TransferSyntaxUID = '1.2.840.10008.1.2.1'

    # Main data elements
    ds.SOPClassUID = '1.2.840.10008.5.1.4.1.1.11.1'
    ds.SOPInstanceUID = ds.file_meta.MediaStorageSOPInstanceUID
    ds.Modality = 'PR'
    ds.ContentLabel = 'SOFT TISSUE'
    ds.PresentationCreationDate = '20230301'
    ds.PresentationCreationTime = '120000'
    ds.RescaleIntercept = '-1000'
    ds.RescaleSlope = '1'
    ds.RescaleType = 'HU'
    ds.SoftcopyVOILUTSequence = Sequence([Dataset()])
    ds.SoftcopyVOILUTSequence[0].WindowCenter = '50'
    ds.SoftcopyVOILUTSequence[0].WindowWidth = '350'
    ds.SoftcopyVOILUTSequence[0].WindowCenterWidthExplanation = 'SOFT TISSUE'
    ds.PresentationLUTShape = 'INVERSE'

    return ds
