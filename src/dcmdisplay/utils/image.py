import numpy as np

AXIAL = 'AXIAL'
CORONAL = 'CORONAL'
SAGITTAL = 'SAGITTAL'
OBLIQUE = 'OBLIQUE'

# A direction cosine is aligned with a patient axis above this value
OBLIQUITY_THRESHOLD = 0.8

# Pairs of patient axes (x: LR, y: AP, z: HF) spanned by the image plane
PLANES = {
    frozenset('xy'): AXIAL,
    frozenset('xz'): CORONAL,
    frozenset('yz'): SAGITTAL,
}


def slice_cosine(image_orientation):     # ImageOrientationPatient
    """Normal to the image plane, or None for an invalid orientation."""
    if image_orientation is None or len(image_orientation) != 6:
        return None
    row_cosine = np.array(image_orientation[:3], dtype=float)
    column_cosine = np.array(image_orientation[3:], dtype=float)
    return np.cross(row_cosine, column_cosine)


def major_axis(cosine, threshold=OBLIQUITY_THRESHOLD):
    """Patient axis ('x', 'y' or 'z') closest to a direction cosine.

    Returns None when no component is strictly dominant and above threshold.
    """
    absolute = np.abs(np.array(cosine, dtype=float))
    i = int(np.argmax(absolute))
    if absolute[i] <= threshold:
        return None
    if np.count_nonzero(absolute == absolute[i]) > 1:
        return None
    return 'xyz'[i]


def orientation_label(image_orientation):    # ImageOrientationPatient
    """AXIAL, CORONAL, SAGITTAL or OBLIQUE plane of an image orientation."""
    if image_orientation is None or len(image_orientation) != 6:
        return None
    row = major_axis(image_orientation[:3])
    column = major_axis(image_orientation[3:])
    if row is None or column is None:
        return OBLIQUE
    return PLANES.get(frozenset(row + column))


def slice_position(
    image_orientation,  # ImageOrientationPatient
    image_position):    # ImagePositionPatient
    """Image position weighted by the slice normal, per patient axis."""
    normal = slice_cosine(image_orientation)
    if normal is None or image_position is None or len(image_position) != 3:
        return None
    return (normal * np.array(image_position, dtype=float)).tolist()
