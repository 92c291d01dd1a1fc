""" Functional interface to the estimators.

Every function takes the estimate as first argument, so estimates can be
handled as plain values by callers that prefer functions to methods.
"""
import numpy as np

from typing import Iterable, List

from .estimate import StatsSnapshot, WelfordEstimate



def initialize(estimate: WelfordEstimate, feature_count: int) -> WelfordEstimate:
    """Reset `estimate` for observations with `feature_count` features."""
    return estimate.initialize(feature_count)


def update_single(estimate: WelfordEstimate, x: np.ndarray) -> None:
    """Update `estimate` with a single observation."""
    estimate.update_single(x)
    return


def update_batch(estimate: WelfordEstimate, data: np.ndarray) -> StatsSnapshot:
    """Update `estimate` with a batch of observations and return the new statistics."""
    return estimate.update_batch(data)


def get_covariance(estimate: WelfordEstimate, corrected: bool = True) -> np.ndarray:
    """Covariance matrix of `estimate`."""
    return estimate.get_covariance(corrected)


def get_correlation(estimate: WelfordEstimate) -> np.ndarray:
    """Correlation matrix of `estimate`."""
    return estimate.get_correlation()


def get_statistics(estimate: WelfordEstimate) -> StatsSnapshot:
    """All the statistics of `estimate`."""
    return estimate.get_statistics()


def merge_estimate(target: WelfordEstimate, source: WelfordEstimate) -> WelfordEstimate:
    """Merge `source` into `target` in place and return `target`."""
    return target.merge(source)


def merge_estimates(first: WelfordEstimate, second: WelfordEstimate) -> WelfordEstimate:
    """Return a new estimate combining `first` and `second`, leaving both untouched."""
    return first.merged(second)


def reduce_estimates(estimates: Iterable[WelfordEstimate]) -> WelfordEstimate:
    """
    Combine any number of estimates into a new one.

    Estimates are merged pairwise along a balanced tree, which keeps
    the magnitude of the merged counts similar at each level.
    The input estimates are not modified.

    Parameters
    ----------
    estimates : iterable of WelfordEstimate
        Estimates to combine, e.g. one per worker.
        Their order is the order of the underlying streams.

    Returns
    -------
    : WelfordEstimate
        Estimate of the concatenated streams.
        If `estimates` is empty, an empty estimate is returned.

    Raises
    ------
    DimensionMismatch
        If two non-empty estimates have a different number of features.
    """
    level: List[WelfordEstimate] = [estimate.copy() for estimate in estimates]

    if len(level) == 0:
        return WelfordEstimate()

    while len(level) > 1:
        pairs = [level[i].merge(level[i + 1]) for i in range(0, len(level) - 1, 2)]
        if len(level) % 2 == 1:
            pairs.append(level[-1])
        level = pairs
    return level[0]
