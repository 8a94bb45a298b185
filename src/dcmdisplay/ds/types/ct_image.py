import pydicom
from pydicom.dataset import Dataset, FileMetaDataset
from pydicom.sequence import Sequence

from dcmdisplay.ds.dataset import DisplayDataset

class CTImage(DisplayDataset):
    def __init__(self, dataset=None, template=None):
        super().__init__()

        if (dataset is None) and (template is None):
            template = 'HEAD'

        if dataset is not None:
            self.__dict__ = dataset.__dict__

        if template == 'HEAD': 
            head(self)

def head(ds):
    """Axial head CT with two windows and a VOI LUT"""

    # File meta info data elements
    ds.file_meta = FileMetaDataset()
    ds.file_meta.MediaStorageSOPClassUID = '1.2.840.10008.5.1.4.1.1.2'
    ds.file_meta.MediaStorageSOPInstanceUID = pydicom.uid.generate_uid()
    ds.file_meta.TransferSyntaxUID = '1.2.840.10008.1.2.1'

    # Main data elements
    ds.ImageType = ['ORIGINAL', 'PRIMARY', 'AXIAL']
    ds.SOPClassUID = '1.2.840.10008.5.1.4.1.1.2'
    ds.SOPInstanceUID = ds.file_meta.MediaStorageSOPInstanceUID
    ds.StudyDate = '20050101'
    ds.StudyTime = '010100.000000'
    ds.SeriesDate = '20050101'
    ds.SeriesTime = '010500'
    ds.AcquisitionDate = '20050101'
    ds.AcquisitionTime = '010510'
    ds.AccessionNumber = '1'
    ds.Modality = 'CT'
    ds.Manufacturer = 'GDCM'
    ds.InstitutionName = 'National Library of Medicine'
    ds.ReferringPhysicianName = 'Doe^John^^Dr'
    ds.StudyDescription = 'Visible Human Female'
    ds.SeriesDescription = 'Resampled to 1mm voxels'
    ds.PatientName = 'Eve'
    ds.PatientID = '1234'
    ds.PatientBirthDate = '19700101'
    ds.PatientSex = 'F'
    ds.PatientWeight = '60'
    ds.KVP = '120'
    ds.SliceThickness = '1.0'
    ds.PatientPosition = 'HFS'
    ds.StudyInstanceUID = pydicom.uid.generate_uid()
    ds.SeriesInstanceUID = pydicom.uid.generate_uid()
    ds.StudyID = '1'
    ds.SeriesNumber = '1'
    ds.InstanceNumber = '1000'
    ds.ImagePositionPatient = [0, 0, 999]
    ds.ImageOrientationPatient = [1.000000, 0.000000, 0.000000, 0.000000, 1.000000, 0.000000]
    ds.FrameOfReferenceUID = pydicom.uid.generate_uid()
    ds.SamplesPerPixel = 1
    ds.PhotometricInterpretation = 'MONOCHROME2'
    ds.Rows = 512
    ds.Columns = 512
    ds.PixelSpacing = [0.5, 0.5]
    ds.BitsAllocated = 16
    ds.BitsStored = 12
    ds.HighBit = 11
    ds.PixelRepresentation = 1
    ds.add_new(0x00280106, 'SS', 0)      # SmallestImagePixelValue
    ds.add_new(0x00280107, 'SS', 2047)   # LargestImagePixelValue
    ds.RescaleIntercept = '-1024.0'
    ds.RescaleSlope = '1.0'
    ds.RescaleType = 'HU'
    ds.WindowCenter = ['40', '400']
    ds.WindowWidth = ['80', '1500']
    ds.WindowCenterWidthExplanation = ['BRAIN', 'BONE']
    ds.VOILUTFunction = 'LINEAR'

    # 12-bit VOI LUT mapping -1024..3071 HU onto 0..4095
    ds.VOILUTSequence = Sequence([Dataset()])
    ds.VOILUTSequence[0].add_new(0x00283002, 'SS', [4096, -1024, 12])
    ds.VOILUTSequence[0].LUTExplanation = 'FULL RANGE'
    ds.VOILUTSequence[0].add_new(0x00283006, 'US', list(range(4096)))

    return ds
