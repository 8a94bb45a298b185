import pydicom
from pydicom.dataset import Dataset, FileMetaDataset
from pydicom.sequence import Sequence

from dcmdisplay.ds.dataset import DisplayDataset

class PETImage(DisplayDataset):
    def __init__(self, dataset=None, template=None):
        super().__init__()

        if (dataset is None) and (template is None):
            template = 'FDG'

        if dataset is not None:
            self.__dict__ = dataset.__dict__

        if template == 'FDG':
            fdg(self)

def fdg(ds):
    """Attenuation and decay corrected FDG scan in Bq/ml, injected one hour before the series"""

    # File meta info data elements
    ds.file_meta = FileMetaDataset()
    ds.file_meta.MediaStorageSOPClassUID = '1.2.840.10008.5.1.4.1.1.128'
    ds.file_meta.MediaStorageSOPInstanceUID = pydicom.uid.generate_uid()
    ds.file_meta.TransferSyntaxUID = '1.2.840.10008.1.2.1'

    # Main data elements
    ds.ImageType = ['ORIGINAL', 'PRIMARY']
    ds.SOPClassUID = '1.2.840.10008.5.1.4.1.1.128'
    ds.SOPInstanceUID = ds.file_meta.MediaStorageSOPInstanceUID
    ds.StudyDate = '20230301'
    ds.StudyTime = '083000'
    ds.SeriesDate = '20230301'
    ds.SeriesTime = '100000'
    ds.AcquisitionDate = '20230301'
    ds.AcquisitionTime = '100500'
    ds.Modality = 'PT'
    ds.Manufacturer = 'Acme'
    ds.PatientName = 'Doe^John'
    ds.PatientID = 'PT-1'
    ds.PatientSex = 'M'
    ds.PatientWeight = '70'
    ds.StudyInstanceUID = pydicom.uid.generate_uid()
    ds.SeriesInstanceUID = pydicom.uid.generate_uid()
    ds.SeriesNumber = '3'
    ds.InstanceNumber = '12'
    ds.ImagePositionPatient = [-300, -300, -120]
    ds.ImageOrientationPatient = [1, 0, 0, 0, 1, 0]
    ds.PixelSpacing = [4.0, 4.0]
    ds.SliceThickness = '3.27'
    ds.SamplesPerPixel = 1
    ds.PhotometricInterpretation = 'MONOCHROME2'
    ds.Rows = 128
    ds.Columns = 128
    ds.BitsAllocated = 16
    ds.BitsStored = 16
    ds.HighBit = 15
    ds.PixelRepresentation = 0
    ds.RescaleIntercept = '0'
    ds.RescaleSlope = '2.5'
    ds.RescaleType = 'BQML'
    ds.CorrectedImage = ['DECY', 'ATTN', 'SCAT', 'DTIM']
    ds.Units = 'BQML'
    ds.DecayCorrection = 'START'
    ds.RadiopharmaceuticalInformationSequence = Sequence([Dataset()])
    ds.RadiopharmaceuticalInformationSequence[0].Radiopharmaceutical = 'Fluorodeoxyglucose'
    ds.RadiopharmaceuticalInformationSequence[0].RadionuclideTotalDose = '370000000'
    ds.RadiopharmaceuticalInformationSequence[0].RadionuclideHalfLife = '6588.0'
    ds.RadiopharmaceuticalInformationSequence[0].RadiopharmaceuticalStartDateTime = '20230301090000'

    return ds
