import dcmdisplay.utils.image as image


def test_orientation_label():

    assert image.orientation_label([1, 0, 0, 0, 1, 0]) == 'AXIAL'
    assert image.orientation_label([0, 1, 0, 1, 0, 0]) == 'AXIAL'
    assert image.orientation_label([1, 0, 0, 0, 0, -1]) == 'CORONAL'
    assert image.orientation_label([0, 1, 0, 0, 0, -1]) == 'SAGITTAL'
    assert image.orientation_label([0.9, 0.1, 0, 0, 0.1, -0.9]) == 'CORONAL'
    assert image.orientation_label([0.707, 0.707, 0, -0.707, 0.707, 0]) == 'OBLIQUE'
    assert image.orientation_label([1, 0, 0]) is None
    assert image.orientation_label(None) is None


def test_major_axis():

    assert image.major_axis([0, 0, -1]) == 'z'
    assert image.major_axis([0.81, 0.2, 0.1]) == 'x'
    assert image.major_axis([0.8, 0.6, 0]) is None


def test_slice_position():

    assert image.slice_position([1, 0, 0, 0, 1, 0], [-90, -90, 12.5]) == [-0.0, -0.0, 12.5]
    assert image.slice_position([0, 1, 0, 0, 0, -1], [30, -90, 12.5]) == [-30.0, 0.0, 0.0]
    assert image.slice_position(None, [0, 0, 0]) is None
    assert image.slice_position([1, 0, 0, 0, 1, 0], None) is None


if __name__ == "__main__":

    test_orientation_label()
    test_major_axis()
    test_slice_position()

    print('-----------------------')
    print('image passed all tests!')
    print('-----------------------')
