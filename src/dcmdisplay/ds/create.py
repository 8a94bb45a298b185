import pydicom

from pydicom.dataset import Dataset
from pydicom.errors import InvalidDicomError
from dcmdisplay.ds.dataset import DisplayDataset
from dcmdisplay.ds.types.ct_image import CTImage
from dcmdisplay.ds.types.enhanced_ct_image import EnhancedCTImage
from dcmdisplay.ds.types.xray_angiographic_image import XrayAngiographicImage
from dcmdisplay.ds.types.pet_image import PETImage
from dcmdisplay.ds.types.grayscale_presentation_state import GrayscalePresentationState

def SOPClass(SOPClassUID):

    if SOPClassUID == '1.2.840.10008.5.1.4.1.1.2':
        return 'CTImage'
    elif SOPClassUID == '1.2.840.10008.5.1.4.1.1.2.1':
        return 'EnhancedCTImage'
    elif SOPClassUID == '1.2.840.10008.5.1.4.1.1.12.1':
        return 'XrayAngiographicImage'
    elif SOPClassUID == '1.2.840.10008.5.1.4.1.1.128':
        return 'PETImage'
    elif SOPClassUID == '1.2.840.10008.5.1.4.1.1.11.1':
        return 'GrayscalePresentationState'
    else:
        return 'Instance'

def read_dataset(file):

    try:
        ds = pydicom.dcmread(file)
    except (OSError, InvalidDicomError) as message:
        raise FileNotFoundError(message)
    
    type = SOPClass(ds.get('SOPClassUID'))
    if type == 'CTImage':
        return CTImage(ds)
    elif type == 'EnhancedCTImage':
        return EnhancedCTImage(ds)
    elif type == 'XrayAngiographicImage':
        return XrayAngiographicImage(ds)
    elif type == 'PETImage':
        return PETImage(ds)
    elif type == 'GrayscalePresentationState':
        return GrayscalePresentationState(ds)
    else:
        return DisplayDataset(ds)

def new_dataset(type):

    if type == 'CTImage':
        return CTImage()
    elif type == 'EnhancedCTImage':
        return EnhancedCTImage()
    elif type == 'XrayAngiographicImage':
        return XrayAngiographicImage()
    elif type == 'PETImage':
        return PETImage()
    elif type == 'GrayscalePresentationState':
        return GrayscalePresentationState()
    else:
        return Dataset()
