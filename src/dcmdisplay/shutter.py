"""Display shutter regions.

A shutter is the intersection of up to three primitives, rectangular,
circular and polygonal. Pixels outside the region are occluded with the
shutter presentation value or color. Coordinates are x for the column and
y for the row, both starting at 1.
"""

import logging

import numpy as np
from matplotlib.path import Path
from skimage.color import lab2rgb

import dcmdisplay.ds.dataset as dataset

logger = logging.getLogger(__name__)


class Rectangle():

    def __init__(self, x0, y0, x1, y1):
        self.x0, self.x1 = min(x0, x1), max(x0, x1)
        self.y0, self.y1 = min(y0, y1), max(y0, y1)

    def __repr__(self):
        return 'Rectangle({}, {}, {}, {})'.format(self.x0, self.y0, self.x1, self.y1)

    @property
    def bounds(self):
        return (self.x0, self.y0, self.x1, self.y1)

    def contains_points(self, points):
        x, y = points[:, 0], points[:, 1]
        return (x >= self.x0) & (x <= self.x1) & (y >= self.y0) & (y <= self.y1)

    def path(self):
        return Path([
            (self.x0, self.y0), (self.x1, self.y0),
            (self.x1, self.y1), (self.x0, self.y1), (self.x0, self.y0)],
            closed=True)


class Ellipse():
    """Circle in pixel coordinates."""

    def __init__(self, x, y, radius):
        self.x = x
        self.y = y
        self.radius = radius

    def __repr__(self):
        return 'Ellipse({}, {}, {})'.format(self.x, self.y, self.radius)

    @property
    def bounds(self):
        r = self.radius
        return (self.x - r, self.y - r, self.x + r, self.y + r)

    def contains_points(self, points):
        dx = points[:, 0] - self.x
        dy = points[:, 1] - self.y
        return dx**2 + dy**2 <= self.radius**2

    def path(self):
        return Path.circle(center=(self.x, self.y), radius=self.radius)


class Polygon():

    def __init__(self, vertices):
        self.vertices = [tuple(v) for v in vertices]

    def __repr__(self):
        return 'Polygon({})'.format(self.vertices)

    @property
    def bounds(self):
        v = np.array(self.vertices, dtype=float)
        return (v[:, 0].min(), v[:, 1].min(), v[:, 0].max(), v[:, 1].max())

    def contains_points(self, points):
        if len(self.vertices) < 3:
            return np.zeros(len(points), dtype=bool)
        return self.path().contains_points(points)

    def path(self):
        return Path(self.vertices + self.vertices[:1], closed=True)


class ShutterRegion():
    """Intersection of shutter primitives."""

    def __init__(self, shapes=None):
        self.shapes = [] if shapes is None else list(shapes)

    def __repr__(self):
        return 'ShutterRegion({})'.format(self.shapes)

    def intersect(self, shape):
        self.shapes.append(shape)

    def contains_points(self, points):
        points = np.atleast_2d(np.asarray(points, dtype=float))
        inside = np.ones(len(points), dtype=bool)
        for shape in self.shapes:
            inside &= shape.contains_points(points)
        return inside

    def contains(self, x, y):
        return bool(self.contains_points([[x, y]])[0])

    @property
    def bounds(self):
        """Bounding box (xmin, ymin, xmax, ymax), None if it is empty."""
        if not self.shapes:
            return None
        boxes = np.array([shape.bounds for shape in self.shapes], dtype=float)
        x0, y0 = boxes[:, 0].max(), boxes[:, 1].max()
        x1, y1 = boxes[:, 2].min(), boxes[:, 3].min()
        if x0 > x1 or y0 > y1:
            return None
        return (x0, y0, x1, y1)

    def mask(self, rows, columns):
        """Boolean array of shape (rows, columns), True where pixels stay visible."""
        x, y = np.meshgrid(np.arange(1, columns + 1), np.arange(1, rows + 1))
        points = np.column_stack([x.ravel(), y.ravel()])
        return self.contains_points(points).reshape(rows, columns)

    def paths(self):
        return [shape.path() for shape in self.shapes]


def rectangular_shutter(ds):
    return Rectangle(
        dataset.get_int(ds, 'ShutterLeftVerticalEdge', 0),
        dataset.get_int(ds, 'ShutterUpperHorizontalEdge', 0),
        dataset.get_int(ds, 'ShutterRightVerticalEdge', 0),
        dataset.get_int(ds, 'ShutterLowerHorizontalEdge', 0),
    )


def circular_shutter(ds):
    center = dataset.get_ints(ds, 'CenterOfCircularShutter')
    if center is None or len(center) < 2:
        return None
    radius = dataset.get_int(ds, 'RadiusOfCircularShutter', 0)
    # center is given as (row, column)
    return Ellipse(center[1], center[0], radius)


def polygonal_shutter(ds):
    points = dataset.get_ints(ds, 'VerticesOfThePolygonalShutter')
    if points is None:
        return None
    # vertices are given as (row, column) pairs
    vertices = [(points[2*i+1], points[2*i]) for i in range(len(points) // 2)]
    if len(vertices) < 3:
        return None
    return Polygon(vertices)


# Primitives in the order they are intersected, with the ShutterShape
# values that select them
SHUTTER_SHAPES = [
    (('RECTANGULAR', 'RECTANGLE'), rectangular_shutter),
    (('CIRCULAR',), circular_shutter),
    (('POLYGONAL',), polygonal_shutter),
]


def build_shutter_region(ds):
    """Shutter region of a dataset or functional group item, or None."""
    shape = dataset.get_string(ds, 'ShutterShape')
    if shape is None:
        return None
    shape = shape.upper()
    region = None
    for names, build in SHUTTER_SHAPES:
        if not any(name in shape for name in names):
            continue
        primitive = build(ds)
        if primitive is None:
            logger.debug("Incomplete %s shutter", names[0].lower())
            continue
        if region is None:
            region = ShutterRegion([primitive])
        else:
            region.intersect(primitive)
    return region


def cielab_to_rgb(lab):
    """Convert a DICOM encoded CIELab triplet to 8-bit RGB.

    DICOM scales L* from 0..100 and a*, b* from -128..127 to 0..65535.
    """
    L = lab[0] * 100.0 / 65535.0
    a = lab[1] * 255.0 / 65535.0 - 128.0
    b = lab[2] * 255.0 / 65535.0 - 128.0
    rgb = lab2rgb(np.array([[[L, a, b]]], dtype=float))[0, 0]
    return tuple(int(round(c * 255)) for c in np.clip(rgb, 0, 1))


def shutter_color(ds):
    lab = dataset.get_ints(ds, 'ShutterPresentationColorCIELabValue')
    if lab is None or len(lab) < 3:
        return None
    return cielab_to_rgb(lab)


def write_display_shutter(ds, tags):
    """Add the shutter region, gray value and color of ds to tags."""
    region = build_shutter_region(ds)
    if region is None:
        return
    tags.set('ShutterFinalShape', region)
    tags.set_no_null('ShutterPSValue', dataset.get_int(ds, 'ShutterPresentationValue'))
    tags.set_no_null('ShutterRGBColor', shutter_color(ds))
