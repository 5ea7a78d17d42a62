"""
Tests for motif generators and geometry primitives.
"""

import pytest
import numpy as np

from kolam.core.exceptions import EmptyStrokeError, ValidationError
from kolam.geometry.primitives import Point, angle_samples, as_index, unit_samples
from kolam.geometry.stroke import Stroke, StrokeKind, make_stroke
from kolam.geometry import motifs
from kolam.geometry.motifs import (
    border,
    dot_grid,
    flower,
    leaf,
    peacock,
    vine,
)


class TestPrimitives:
    """Test point type and sampling helpers."""

    def test_unit_samples_endpoints(self):
        """Test unit samples include both ends exactly."""
        t = unit_samples(0.05)

        assert len(t) == 21
        assert t[0] == 0.0
        assert t[-1] == 1.0

    def test_angle_samples_stay_within_turn(self):
        """Test angle samples never pass a full turn."""
        theta = angle_samples(0.1)

        assert theta[0] == 0.0
        assert theta[-1] <= 2 * np.pi
        assert len(theta) == 63

    def test_point_distance_and_lerp(self):
        """Test point helpers."""
        a = Point(0.0, 0.0)
        b = Point(3.0, 4.0)

        assert a.distance_to(b) == pytest.approx(5.0)
        assert a.lerp(b, 0.5) == Point(1.5, 2.0)

    def test_as_index(self):
        """Test integer-like coercion accepts ints and rejects bools and floats."""
        assert as_index(3) == 3
        assert type(as_index(np.int32(2))) is int
        for value in [True, 2.0, "2", None]:
            with pytest.raises(TypeError):
                as_index(value)


class TestStroke:
    """Test stroke invariants."""

    def test_single_point_dot_is_valid(self):
        """Test a one-point dot stroke passes validation."""
        stroke = make_stroke([Point(1, 1)], '#FFFFFF', 2, 0, StrokeKind.DOT)
        assert stroke.validate() is stroke

    def test_single_point_curve_rejected(self):
        """Test a one-point curve stroke is rejected."""
        stroke = make_stroke([Point(1, 1)], '#FFFFFF', 2, 0, StrokeKind.CURVE)
        with pytest.raises(EmptyStrokeError):
            stroke.validate()

    def test_empty_stroke_rejected(self):
        """Test a stroke without points is rejected."""
        stroke = Stroke(points=(), color='#FFFFFF', thickness=1, delay=0, kind=StrokeKind.DOT)
        with pytest.raises(EmptyStrokeError):
            stroke.validate()

    def test_negative_delay_rejected(self):
        """Test negative delays are invalid."""
        stroke = make_stroke([Point(0, 0), Point(1, 1)], '#000000', 1, -5)
        with pytest.raises(ValidationError):
            stroke.validate()

    def test_fill_kind_accepted(self):
        """Test fill strokes are accepted by the model."""
        stroke = make_stroke([Point(0, 0), Point(1, 0), Point(0, 1)], '#000000', 1, 0, StrokeKind.FILL)
        assert stroke.validate().to_dict()['type'] == 'fill'


class TestDotGrid:
    """Test dot lattice generator."""

    def test_grid_size(self):
        """Test n x n points are produced."""
        for n in [1, 4, 17]:
            assert len(dot_grid(n, 18, 225, 225)) == n * n

    def test_grid_symmetric_about_center(self):
        """Test every dot has a mirror image through the center."""
        cx, cy = 225.0, 200.0
        points = np.array(dot_grid(6, 14, cx, cy))
        mirrored = np.column_stack([2 * cx - points[:, 0], 2 * cy - points[:, 1]])

        assert np.allclose(points.mean(axis=0), [cx, cy])
        assert np.allclose(np.sort(points, axis=0), np.sort(mirrored, axis=0))

    def test_grid_row_major(self):
        """Test dots run along x first, then y."""
        points = dot_grid(3, 10, 0, 0)

        assert points[0] == Point(-10.0, -10.0)
        assert points[1] == Point(0.0, -10.0)
        assert points[3] == Point(-10.0, 0.0)
        assert points[-1] == Point(10.0, 10.0)

    def test_invalid_parameters(self):
        """Test non-positive size or spacing is rejected."""
        with pytest.raises(ValidationError):
            dot_grid(0, 10, 0, 0)
        with pytest.raises(ValidationError):
            dot_grid(3, 0, 0, 0)
        with pytest.raises(ValidationError):
            dot_grid(2.5, 10, 0, 0)

    def test_bool_size_rejected(self):
        """Test a bool is not accepted as a grid size."""
        with pytest.raises(ValidationError):
            dot_grid(True, 10, 0, 0)

    def test_numpy_integer_size(self):
        """Test numpy integers are accepted like plain ints."""
        assert dot_grid(np.int64(3), 10, 0, 0) == dot_grid(3, 10, 0, 0)

    def test_nan_spacing_rejected(self):
        """Test NaN spacing and scale are rejected."""
        with pytest.raises(ValidationError):
            dot_grid(3, float('nan'), 0, 0)
        with pytest.raises(ValidationError):
            flower(0, 0, float('nan'))


class TestFlower:
    """Test lotus flower generator."""

    @pytest.fixture
    def strokes(self):
        return flower(225, 225, 1.0)

    def test_stroke_layout(self, strokes):
        """Test 8 outer petals, 4 inner petals and a center circle."""
        assert len(strokes) == 13
        assert [s.color for s in strokes[:8]] == ['#FF69B4', '#FF1493'] * 4
        assert all(s.color == '#FFD700' for s in strokes[8:12])
        assert strokes[12].color == '#FF4500'
        assert all(s.kind is StrokeKind.CURVE for s in strokes)

    def test_petal_loops_closed(self, strokes):
        """Test each petal starts and ends at the flower center."""
        center = Point(225, 225)
        for petal in strokes[:12]:
            assert petal.points[0].distance_to(center) < 1e-9
            assert petal.points[-1].distance_to(center) < 1e-9

    def test_delays_follow_drawing_order(self, strokes):
        """Test delays increase petal by petal, center last."""
        delays = [s.delay for s in strokes]
        assert delays == sorted(delays)
        assert delays[-1] == 3200

    def test_scale_is_linear(self):
        """Test doubling scale doubles every offset from the center."""
        small = flower(0, 0, 0.5)
        large = flower(0, 0, 1.0)

        for s, l in zip(small, large):
            assert np.allclose(np.array(s.points) * 2, np.array(l.points))

    def test_deterministic(self):
        """Test repeated calls give identical points."""
        assert flower(100, 120, 0.6) == flower(100, 120, 0.6)


class TestLeafAndVine:
    """Test leaf and vine generators."""

    def test_leaf_closed(self):
        """Test the leaf outline returns to its base point."""
        points = leaf(50, 60, np.pi / 3, 0.8)

        assert points[0] == pytest.approx(Point(50, 60))
        assert points[-1] == pytest.approx(Point(50, 60))
        assert len(points) == 42

    def test_leaf_sides_are_opposite(self):
        """Test forward and return passes lie on opposite sides of the axis."""
        points = leaf(0, 0, 0.0, 1.0)
        # Axis is the x axis; forward pass above it, return pass below
        assert points[10].y > 0
        assert points[31].y < 0

    def test_vine_sample_count(self):
        """Test vines always have 51 samples."""
        assert len(vine(0, 0, 100, 0, 3)) == 51
        assert len(vine(10, 10, 10, 80, 7)) == 51

    def test_vine_endpoints(self):
        """Test vine ends sit on the start/end plus the wobble offset."""
        points = vine(100, 100, 150, 150, 4)
        # t=0: sin term vanishes, cos term gives +10 on y
        assert points[0] == pytest.approx(Point(100, 110))

    def test_vine_complexity_changes_wobble(self):
        """Test complexity changes the lateral wave."""
        assert vine(0, 0, 100, 0, 3) != vine(0, 0, 100, 0, 5)

    def test_deterministic(self):
        """Test repeated calls give identical points."""
        assert vine(1, 2, 3, 4, 5) == vine(1, 2, 3, 4, 5)
        assert leaf(1, 2, 0.5, 1.2) == leaf(1, 2, 0.5, 1.2)


class TestPeacock:
    """Test peacock generator."""

    @pytest.fixture
    def strokes(self):
        return peacock(225, 240)

    def test_stroke_count(self, strokes):
        """Test body, neck, 5 crown feathers and 15 stem/eye pairs."""
        assert len(strokes) == 2 + 5 + 15 * 2

    def test_tail_feathers(self, strokes):
        """Test stems are lines that lengthen with index and eyes cycle color."""
        tail = strokes[7:]
        stems = tail[0::2]
        eyes = tail[1::2]

        lengths = [s.points[0].distance_to(s.points[-1]) for s in stems]
        assert lengths == pytest.approx([70 + 2 * i for i in range(15)])
        assert all(s.kind is StrokeKind.LINE for s in stems)
        assert [e.color for e in eyes[:3]] == list(motifs.FEATHER_EYE_COLORS)
        assert eyes[3].color == eyes[0].color

    def test_eye_centered_on_stem_tip(self, strokes):
        """Test every eye circle surrounds its stem tip."""
        tail = strokes[7:]
        for stem, eye in zip(tail[0::2], tail[1::2]):
            center = np.array(eye.points).mean(axis=0)
            assert Point(*center).distance_to(stem.points[-1]) < 1.0


class TestBorder:
    """Test scalloped border generator."""

    def test_layout(self):
        """Test one scalloped ring plus 12 rosettes."""
        strokes = border(225, 225, 130)

        assert len(strokes) == 13
        assert all(len(s.points) == 7 for s in strokes[1:])

    def test_scallop_radius(self):
        """Test the ring radius stays within the scallop amplitude."""
        ring = border(0, 0, 130)[0]
        radii = [Point(0, 0).distance_to(p) for p in ring.points]

        assert min(radii) >= 110 - 1e-9
        assert max(radii) <= 150 + 1e-9

    def test_rosette_hub(self):
        """Test each rosette returns through its hub after the first petal."""
        strokes = border(0, 0, 100)
        hub = strokes[1].points[1]
        assert hub == pytest.approx(Point(90, 0))

    def test_invalid_radius(self):
        """Test non-positive radius is rejected."""
        with pytest.raises(ValidationError):
            border(0, 0, 0)


class TestSupplementaryMotifs:
    """Test star rays, ripple rings and leaf rings."""

    def test_star_rays(self):
        """Test star rays radiate from the center."""
        strokes = motifs.star_rays(225, 225, 8)

        assert len(strokes) == 8
        assert all(len(s.points) == 3 and s.kind is StrokeKind.LINE for s in strokes)
        assert strokes[0].points[-1] == pytest.approx(Point(285, 225))

    def test_ripple_rings_grow(self):
        """Test ripple rings grow outward."""
        strokes = motifs.ripple_rings(0, 0, 4)
        mean_radius = [
            np.mean([Point(0, 0).distance_to(p) for p in s.points]) for s in strokes
        ]
        assert mean_radius == sorted(mean_radius)

    def test_leaf_ring(self):
        """Test leaves are placed around a ring."""
        strokes = motifs.leaf_ring(225, 225, 85, count=16)
        assert len(strokes) == 16
        assert strokes[1].delay - strokes[0].delay == 50

    def test_catalog(self):
        """Test the motif catalogue lists every generator."""
        ids = {m['id'] for m in motifs.get_available_motifs()}
        assert {'dot_grid', 'flower', 'leaf', 'vine', 'peacock', 'border'} <= ids
