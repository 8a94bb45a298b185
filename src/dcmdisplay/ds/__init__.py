"""Typed access to pydicom datasets and template datasets of each supported image type."""

from dcmdisplay.ds.dataset import DisplayDataset, read
from dcmdisplay.ds.create import read_dataset, new_dataset, SOPClass
