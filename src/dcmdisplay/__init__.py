"""Resolve the display attributes of DICOM grayscale images.

For each frame, dcmdisplay gathers the attributes a renderer needs (modality
rescale or LUT, VOI windows and LUTs, presentation LUT, display shutter,
SUV factor and frame geometry) into a TagMap.
"""

import logging

from dcmdisplay.tags import TagMap, KEYS, NO_VALUE
from dcmdisplay.lut import LookupTable, create_lut
from dcmdisplay.shutter import ShutterRegion, build_shutter_region
from dcmdisplay.suv import compute_suv_factor
from dcmdisplay.metadata import write_metadata
from dcmdisplay.pipeline import frame_tags, write_instance_tags, read_dataframe
from dcmdisplay.ds import DisplayDataset, read, read_dataset, new_dataset

logging.getLogger(__name__).addHandler(logging.NullHandler())
