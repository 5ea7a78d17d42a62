"""
Tests for the pattern assembler and catalogue.
"""

import pytest

from kolam.core.exceptions import EmptyStrokeError, InvalidPatternIndexError
from kolam.geometry.primitives import Point
from kolam.geometry.stroke import StrokeKind, make_stroke
from kolam.patterns.assembler import (
    PATTERNS,
    build_pattern,
    build_pattern_table,
    get_pattern,
    list_patterns,
    pattern_count,
)


class TestPatternTable:
    """Test the shared pattern table."""

    def test_catalogue(self):
        """Test the three designs are present in selection order."""
        assert pattern_count() == 3
        assert [p.id for p in PATTERNS] == [
            'complete-lotus-mandala',
            'detailed-peacock-kolam',
            'traditional-rangoli',
        ]

    def test_stroke_counts(self):
        """Test each design composes the expected number of strokes."""
        # lattice + flower + 4 satellites + 4 vines + 16 leaves + border
        assert PATTERNS[0].stroke_count == 1 + 13 + 4 * 13 + 4 + 16 + 13
        # lattice + peacock + 4 flowers + 4 corner vines
        assert PATTERNS[1].stroke_count == 1 + 37 + 4 * 13 + 4
        # lattice + rays + rings + 4 flowers + 4 connectors
        assert PATTERNS[2].stroke_count == 1 + 8 + 4 + 4 * 13 + 4

    def test_lattice_first(self):
        """Test every pattern starts with its dot lattice at delay 0."""
        for pattern in PATTERNS:
            first = pattern.strokes[0]
            assert first.kind is StrokeKind.DOT
            assert first.delay == 0
            assert len(first.points) == pattern.grid_size ** 2

    def test_only_first_stroke_is_dots(self):
        """Test motif strokes are never dot strokes."""
        for pattern in PATTERNS:
            assert all(s.kind is not StrokeKind.DOT for s in pattern.strokes[1:])

    def test_table_is_immutable(self):
        """Test the table and its strokes are tuples."""
        assert isinstance(PATTERNS, tuple)
        for pattern in PATTERNS:
            assert isinstance(pattern.strokes, tuple)
            with pytest.raises(AttributeError):
                pattern.name = 'changed'

    def test_rebuild_is_identical(self):
        """Test rebuilding the table reproduces it exactly."""
        assert build_pattern_table() == PATTERNS

    def test_all_strokes_valid(self):
        """Test every stroke satisfies its invariants."""
        for pattern in PATTERNS:
            for stroke in pattern.strokes:
                stroke.validate()


class TestLookup:
    """Test pattern lookup helpers."""

    def test_get_pattern(self):
        """Test looking up a pattern by index."""
        assert get_pattern(1) is PATTERNS[1]

    @pytest.mark.parametrize("index", [-1, 3, 100, True, 1.5])
    def test_get_pattern_out_of_range(self, index):
        """Test out-of-range lookups raise."""
        with pytest.raises(InvalidPatternIndexError) as exc_info:
            get_pattern(index)
        assert exc_info.value.code == "INVALID_PATTERN_INDEX"

    def test_list_patterns(self):
        """Test pattern metadata listing."""
        listing = list_patterns()

        assert [entry['index'] for entry in listing] == [0, 1, 2]
        assert listing[0]['grid_size'] == 17
        assert listing[2]['background'] == '#3D2914'
        assert 'strokes' not in listing[0]

    def test_to_dict_with_strokes(self):
        """Test serialisation with strokes."""
        data = PATTERNS[0].to_dict(include_strokes=True)

        assert len(data['strokes']) == PATTERNS[0].stroke_count
        assert data['strokes'][0]['type'] == 'dot'


class TestBuildPattern:
    """Test build-time validation."""

    def test_malformed_stroke_fails_fast(self):
        """Test a one-point line stroke aborts pattern construction."""
        strokes = [
            make_stroke([Point(0, 0)], '#FFFFFF', 1, 0, StrokeKind.DOT),
            make_stroke([Point(1, 1)], '#FF0000', 1, 10, StrokeKind.LINE),
        ]
        with pytest.raises(EmptyStrokeError):
            build_pattern('bad', 'Bad', '', 1, 1, '#000000', strokes)

    def test_valid_pattern(self):
        """Test a valid pattern is built."""
        strokes = [
            make_stroke([Point(0, 0)], '#FFFFFF', 1, 0, StrokeKind.DOT),
            make_stroke([Point(0, 0), Point(5, 5)], '#FF0000', 1, 10, StrokeKind.LINE),
        ]
        pattern = build_pattern('ok', 'Ok', 'test', 1, 1, '#000000', strokes)

        assert pattern.stroke_count == 2
        assert pattern.metadata()['stroke_count'] == 2
