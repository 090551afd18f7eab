"""
Unit tests for the line model, distance metric and regression fitter.
"""

import pytest
import numpy as np
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ransac_line_extraction.geometry import (
    NODE_DTYPE,
    Node,
    Line,
    FitStatus,
    make_nodes,
    compute_raw_node,
    nodes_from_raw,
    squared_distance,
    fit_line,
    segment_endpoints,
)


class TestLine:
    """Tests for the slope-intercept line model."""

    def test_get_y(self):
        line = Line(slope=2.0, intercept=3.0)
        assert line.get_y(1.5) == pytest.approx(6.0)

    def test_get_x(self):
        line = Line(slope=2.0, intercept=3.0)
        assert line.get_x(7.0) == pytest.approx(2.0)

    def test_get_x_horizontal_returns_zero(self):
        """Test the horizontal case keeps its literal 0.0 result."""
        line = Line(slope=0.0, intercept=3.0)
        assert line.get_x(3.0) == 0.0
        assert line.get_x(10.0) == 0.0


class TestSquaredDistance:
    """Tests for the perpendicular distance metric."""

    def test_point_off_diagonal(self):
        line = Line(slope=1.0, intercept=0.0)
        # Distance from (0, 1) to y = x is 1 / sqrt(2)
        assert squared_distance(line, 0.0, 1.0) == pytest.approx(0.5)

    def test_point_on_line(self):
        line = Line(slope=-3.0, intercept=2.0)
        assert squared_distance(line, 1.0, -1.0) == pytest.approx(0.0)

    def test_steep_line(self):
        """Test steep lines measure perpendicular, not vertical, distance."""
        line = Line(slope=1000.0, intercept=0.0)
        # Nearly vertical through the origin, point one unit to the right
        assert squared_distance(line, 1.0, 0.0) == pytest.approx(1.0, rel=1e-5)

    def test_vectorized(self):
        line = Line(slope=0.0, intercept=1.0)
        x = np.array([0.0, 5.0, -2.0])
        y = np.array([1.0, 3.0, -1.0])

        np.testing.assert_allclose(squared_distance(line, x, y), [0.0, 4.0, 4.0])


class TestFitLine:
    """Tests for the least-squares regression fitter."""

    def test_exact_line(self):
        """Test fitting points exactly on y = 2x + 3."""
        x = np.linspace(-5, 5, 11)
        nodes = make_nodes(zip(x, 2 * x + 3, np.zeros(11)))

        result = fit_line(0, len(nodes), nodes)

        assert result.ok
        assert result.line.slope == pytest.approx(2.0, abs=1e-4)
        assert result.line.intercept == pytest.approx(3.0, abs=1e-4)

    def test_noisy_line(self):
        """Test fitting noisy points recovers the line."""
        rng = np.random.default_rng(42)
        x = rng.uniform(-5, 5, 200)
        y = -0.5 * x + 1 + rng.normal(0, 0.01, 200)
        nodes = make_nodes(zip(x, y, np.zeros(200)))

        result = fit_line(0, 200, nodes)

        assert result.ok
        assert result.line.slope == pytest.approx(-0.5, abs=0.01)
        assert result.line.intercept == pytest.approx(1.0, abs=0.01)

    def test_sub_range(self):
        """Test only nodes inside [start, end) are used."""
        nodes = make_nodes([
            (0.0, 100.0, 0.0),
            (0.0, 1.0, 0.1),
            (1.0, 2.0, 0.2),
            (2.0, 3.0, 0.3),
            (5.0, -100.0, 0.4),
        ])

        result = fit_line(1, 4, nodes)

        assert result.ok
        assert result.line.slope == pytest.approx(1.0)
        assert result.line.intercept == pytest.approx(1.0)

    def test_horizontal_line(self):
        x = np.arange(5, dtype=float)
        nodes = make_nodes(zip(x, np.full(5, 3.0), np.zeros(5)))

        result = fit_line(0, 5, nodes)

        assert result.ok
        assert result.line.slope == pytest.approx(0.0)
        assert result.line.intercept == pytest.approx(3.0)

    def test_no_points(self):
        nodes = make_nodes([(1.0, 1.0, 0.0)])

        result = fit_line(0, 0, nodes)

        assert not result.ok
        assert result.status is FitStatus.INSUFFICIENT_POINTS
        assert result.line is None

    def test_single_point(self):
        nodes = make_nodes([(1.0, 1.0, 0.0)])

        result = fit_line(0, 1, nodes)

        assert result.status is FitStatus.DEGENERATE
        assert result.line is None

    @pytest.mark.parametrize('x_value', [2.0, 1.1, -0.3])
    def test_vertical_points(self, x_value):
        """Test a vertical point set fails instead of producing inf/NaN."""
        y = np.arange(4, dtype=float)
        nodes = make_nodes(zip(np.full(4, x_value), y, np.zeros(4)))

        result = fit_line(0, 4, nodes)

        assert result.status is FitStatus.DEGENERATE
        assert result.line is None


class TestNodes:
    """Tests for node construction helpers."""

    def test_make_nodes(self):
        nodes = make_nodes([Node(1.0, 2.0, 0.5), (3.0, 4.0, 0.7)])

        assert nodes.dtype == NODE_DTYPE
        assert len(nodes) == 2
        assert nodes[1]['y'] == 4.0

    def test_compute_raw_node(self):
        raw = {'range': 2.0, 'bearing': np.pi / 2}

        node = compute_raw_node(
            raw,
            lambda r: (r['range'] * np.cos(r['bearing']), r['range'] * np.sin(r['bearing'])),
            lambda r: r['bearing']
        )

        assert node.x == pytest.approx(0.0, abs=1e-12)
        assert node.y == pytest.approx(2.0)
        assert node.angle == pytest.approx(np.pi / 2)

    def test_nodes_from_raw_sorted(self):
        """Test converted readings come back in ascending angle order."""
        readings = [(1.0, 0.3), (1.0, -0.2), (1.0, 0.1)]

        nodes = nodes_from_raw(
            readings,
            lambda r: (r[0] * np.cos(r[1]), r[0] * np.sin(r[1])),
            lambda r: r[1]
        )

        np.testing.assert_allclose(nodes['angle'], [-0.2, 0.1, 0.3])

    def test_nodes_from_raw_empty(self):
        nodes = nodes_from_raw([], lambda r: (0.0, 0.0), lambda r: 0.0)

        assert len(nodes) == 0
        assert nodes.dtype == NODE_DTYPE


class TestSegmentEndpoints:
    """Tests for projecting line members onto the line."""

    def test_diagonal_segment(self):
        line = Line(slope=1.0, intercept=0.0)
        nodes = make_nodes([(1.0, 1.0, 0.0), (0.0, 0.0, 0.1), (3.0, 3.0, 0.2)])

        start, end = segment_endpoints(line, nodes)

        np.testing.assert_allclose(start, (0.0, 0.0), atol=1e-12)
        np.testing.assert_allclose(end, (3.0, 3.0), atol=1e-12)

    def test_offset_members_projected(self):
        """Test endpoints lie on the line even for off-line members."""
        line = Line(slope=0.0, intercept=2.0)
        nodes = make_nodes([(-1.0, 2.1, 0.0), (4.0, 1.9, 0.1)])

        start, end = segment_endpoints(line, nodes)

        np.testing.assert_allclose(start, (-1.0, 2.0))
        np.testing.assert_allclose(end, (4.0, 2.0))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
