"""
Unit tests for build_frames in NUMERIC mode.

Tests local frame properties:
- e3 parallel to the moment
- Orthonormality and right-handedness
- Moments parallel to x
- Zero and empty moment sets
"""

import numpy as np
import pytest
from magframe.core.frames import LocalFrame, build_frames
from magframe.core.arithmetic import FrameMode


def random_moments(num: int, seed: int = 42) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.normal(size=(3, num)) * 2.5


class TestFrameProperties:
    """Test the invariants of the local frames."""

    def test_e3_is_normalized_moment(self):
        """Test e3 = m / |m|."""
        moments = random_moments(20)
        frame = build_frames(moments)

        expected = moments / np.linalg.norm(moments, axis=0)
        assert np.allclose(frame.e3, expected)

    def test_orthonormal(self):
        """Test that e1, e2, e3 are orthonormal for every moment."""
        frame = build_frames(random_moments(20))

        for e in (frame.e1, frame.e2, frame.e3):
            assert np.allclose(np.linalg.norm(e, axis=0), 1.0)

        assert np.allclose(np.sum(frame.e1 * frame.e2, axis=0), 0.0, atol=1e-12)
        assert np.allclose(np.sum(frame.e1 * frame.e3, axis=0), 0.0, atol=1e-12)
        assert np.allclose(np.sum(frame.e2 * frame.e3, axis=0), 0.0, atol=1e-12)

    def test_right_handed(self):
        """Test e1 × e2 = e3."""
        frame = build_frames(random_moments(20))

        assert np.allclose(np.cross(frame.e1, frame.e2, axis=0), frame.e3)

    def test_moment_along_z(self):
        """Test m = (0, 0, 3) → e1 = x̂, e2 = ŷ, e3 = ẑ."""
        frame = build_frames(np.array([[0.0], [0.0], [3.0]]))

        assert np.allclose(frame.e3[:, 0], [0, 0, 1])
        assert np.allclose(frame.e2[:, 0], [0, 1, 0])
        assert np.allclose(frame.e1[:, 0], [1, 0, 0])

    def test_columns_are_independent(self):
        """Test that each column only depends on its own moment."""
        moments = random_moments(6)
        frame = build_frames(moments)

        for i in range(moments.shape[1]):
            single = build_frames(moments[:, i:i + 1])
            assert np.allclose(single.e1[:, 0], frame.e1[:, i])
            assert np.allclose(single.e2[:, 0], frame.e2[:, i])

    def test_list_input(self):
        """Test that nested lists are accepted."""
        frame = build_frames([[0, 1], [0, 0], [1, 0]])

        assert frame.num_moments == 2
        assert frame.mode is FrameMode.NUMERIC


class TestDegenerateMoments:
    """Test moments parallel to x̂, where e3 × x̂ vanishes."""

    def test_moment_along_x(self):
        """Test m = (5, 0, 0) → e2 = ẑ."""
        frame = build_frames(np.array([[5.0], [0.0], [0.0]]))

        assert np.array_equal(frame.e2[:, 0], [0.0, 0.0, 1.0])
        assert np.allclose(frame.e3[:, 0], [1, 0, 0])
        assert np.allclose(frame.e1[:, 0], [0, 1, 0])
        assert not np.any(np.isnan(frame.e1))

    def test_moment_along_negative_x(self):
        """Test m = (-2, 0, 0) keeps a right-handed frame."""
        frame = build_frames(np.array([[-2.0], [0.0], [0.0]]))

        assert np.allclose(frame.e2[:, 0], [0, 0, 1])
        assert np.allclose(frame.e1[:, 0], [0, -1, 0])
        assert np.allclose(np.cross(frame.e1, frame.e2, axis=0), frame.e3)

    def test_nearly_parallel_within_tolerance(self):
        """Test that components below 1e-10 count as zero."""
        frame = build_frames(np.array([[1.0], [1e-12], [0.0]]))

        assert np.array_equal(frame.e2[:, 0], [0.0, 0.0, 1.0])

    def test_nearly_parallel_outside_tolerance(self):
        """Test that components above 1e-10 are kept."""
        frame = build_frames(np.array([[1.0], [0.0], [1e-6]]))

        assert np.allclose(frame.e2[:, 0], [0, 1, 0])

    def test_mixed_columns(self):
        """Test degenerate and regular moments side by side."""
        moments = np.array([
            [5.0, 0.0, -1.0],
            [0.0, 0.0, 0.0],
            [0.0, 3.0, 0.0]
        ])
        frame = build_frames(moments)

        assert np.allclose(frame.e2, [[0, 0, 0], [0, 1, 0], [1, 0, 1]])
        assert np.allclose(np.cross(frame.e1, frame.e2, axis=0), frame.e3)


class TestEdgeCases:
    """Test empty input, zero moments and bad shapes."""

    def test_empty_moments(self):
        """Test N = 0 gives three (3, 0) arrays."""
        frame = build_frames(np.zeros((3, 0)))

        assert frame.e1.shape == (3, 0)
        assert frame.e2.shape == (3, 0)
        assert frame.e3.shape == (3, 0)
        assert frame.num_moments == 0

    def test_zero_moment_raises(self):
        """Test that a zero moment raises ZeroDivisionError."""
        moments = np.array([[1.0, 0.0], [0.0, 0.0], [0.0, 0.0]])

        with pytest.raises(ZeroDivisionError, match=r"column\(s\) \[1\]"):
            build_frames(moments)

    def test_huge_moment(self):
        """Test that a moment beyond sqrt(float max) is still normalized."""
        frame = build_frames(np.array([[1e200, 3e200], [1e200, 0.0], [0.0, 4e200]]))

        assert np.all(np.isfinite(frame.e3))
        assert np.allclose(frame.e3[:, 0], [1 / np.sqrt(2), 1 / np.sqrt(2), 0])
        assert np.allclose(frame.e3[:, 1], [0.6, 0.0, 0.8])
        assert np.allclose(np.linalg.norm(frame.e1, axis=0), 1.0)

    def test_tiny_moment(self):
        """Test that a nonzero moment whose square underflows does not raise."""
        frame = build_frames(np.array([[1e-170, 0.0], [0.0, 0.0], [0.0, 2e-170]]))

        assert np.allclose(frame.e3, [[1, 0], [0, 0], [0, 1]])
        assert np.allclose(frame.e2[:, 0], [0, 0, 1])
        assert np.allclose(frame.e1[:, 1], [1, 0, 0])

    def test_wrong_shape_raises(self):
        """Test that moments must be (3, N)."""
        with pytest.raises(ValueError, match="shape"):
            build_frames(np.zeros((2, 4)))

    def test_idempotent(self):
        """Test two calls give bit-identical results."""
        moments = random_moments(10, seed=7)
        frame1 = build_frames(moments)
        frame2 = build_frames(moments)

        assert np.array_equal(frame1.e1, frame2.e1)
        assert np.array_equal(frame1.e2, frame2.e2)
        assert np.array_equal(frame1.e3, frame2.e3)

    def test_input_not_modified(self):
        """Test that the moments are only read."""
        moments = np.array([[5.0], [0.0], [0.0]])
        build_frames(moments)

        assert np.array_equal(moments, [[5.0], [0.0], [0.0]])


class TestRotationMatrices:
    """Test LocalFrame.rotation_matrices."""

    def test_rotates_z_onto_moment(self):
        """Test R_i ẑ = e3_i."""
        moments = random_moments(5)
        frame = build_frames(moments)
        rotations = frame.rotation_matrices()

        assert rotations.shape == (5, 3, 3)
        for i in range(5):
            assert np.allclose(rotations[i] @ [0, 0, 1], frame.e3[:, i])

    def test_proper_rotations(self):
        """Test R_i is orthogonal with determinant 1."""
        frame = build_frames(random_moments(5))

        for rotation in frame.rotation_matrices():
            assert np.allclose(rotation.T @ rotation, np.eye(3))
            assert np.isclose(np.linalg.det(rotation), 1.0)

    def test_empty(self):
        """Test rotation matrices of an empty frame."""
        frame = LocalFrame(np.zeros((3, 0)), np.zeros((3, 0)), np.zeros((3, 0)))

        assert frame.rotation_matrices().shape == (0, 3, 3)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
