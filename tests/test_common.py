"""
Tests for the batching and reference utilities.
"""

import numpy as np
import pytest

from running_stats.utils import iter_batches, two_pass_covariance


class TestIterBatches:
    """Row-contiguous batching."""

    def test_batches_cover_rows_in_order(self):
        data = np.arange(20.0).reshape(10, 2)
        batches = list(iter_batches(data, 3))
        assert [len(b) for b in batches] == [3, 3, 3, 1]
        np.testing.assert_array_equal(np.concatenate(batches), data)

    @pytest.mark.parametrize('batch_size', [0, -1])
    def test_non_positive_size_yields_everything(self, batch_size):
        data = np.ones((4, 2))
        batches = list(iter_batches(data, batch_size))
        assert len(batches) == 1
        assert batches[0].shape == (4, 2)


class TestTwoPassCovariance:
    """Full-materialization reference."""

    def test_matches_numpy(self):
        rng = np.random.default_rng(0)
        data = rng.standard_normal((200, 3))
        np.testing.assert_allclose(two_pass_covariance(data), np.cov(data, rowvar=False), rtol=1e-12)
        np.testing.assert_allclose(two_pass_covariance(data, corrected=False), np.cov(data, rowvar=False, bias=True), rtol=1e-12)

    def test_too_few_samples(self):
        assert two_pass_covariance(np.empty((0, 2))).shape == (0, 0)
        assert np.all(np.isnan(two_pass_covariance(np.ones((1, 2)))))

    def test_integer_input_is_promoted(self):
        empty = two_pass_covariance(np.empty((0, 2), dtype=np.int64))
        assert empty.shape == (0, 0)
        assert empty.dtype == np.float64

        single = two_pass_covariance(np.array([[1, 2]]))
        assert single.dtype == np.float64
        assert np.all(np.isnan(single))

        np.testing.assert_allclose(two_pass_covariance(np.array([[1, 2], [3, 4]])), [[2.0, 2.0], [2.0, 2.0]])
