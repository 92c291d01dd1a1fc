""" Common utilities.
"""
import numpy as np

from typing import Iterator



def iter_batches(data: np.ndarray, batch_size: int) -> Iterator[np.ndarray]:
    """
    Split a matrix into row-contiguous batches.

    If `batch_size` is non-positive, the whole matrix is yielded as a single batch.
    This is useful, for example, to feed an estimate with the same code path
    when no actual splitting is performed.

    Parameters
    ----------
    data : np.ndarray
        Matrix of shape (n_samples, n_features).
    batch_size : int
        Number of rows of each batch.
        The last batch is shorter if `batch_size` does not divide `n_samples`.

    Yields
    ------
    : np.ndarray
        Views of shape (batch_size, n_features) over consecutive rows of `data`.
    """
    if batch_size <= 0:
        yield data
        return

    for start in range(0, len(data), batch_size):
        yield data[start:start + batch_size]


def two_pass_covariance(data: np.ndarray, corrected: bool = True) -> np.ndarray:
    """
    Compute the covariance of fully materialized data with the two-pass algorithm.

    The mean is computed first, then the covariance of the centered data.
    It serves as a reference for the streaming estimates.

    Parameters
    ----------
    data : np.ndarray
        Matrix of shape (n_samples, n_features).
    corrected : bool, default=True
        If True, return the sample covariance (dividing by n-1).
        If False, return the population covariance (dividing by n).

    Returns
    -------
    : np.ndarray
        Covariance of shape (n_features, n_features), with the same conventions
        as `WelfordEstimate.get_covariance` when there are too few samples.
    """
    data = np.asarray(data)
    if not np.issubdtype(data.dtype, np.floating):
        data = data.astype(np.float64)
    if data.ndim == 1:
        data = data[None, :]
    n_samples, n_features = data.shape

    if n_samples == 0:
        return np.empty((0, 0), dtype=data.dtype)

    ddof = 1 if corrected else 0
    if n_samples <= ddof:
        return np.full((n_features, n_features), np.nan, dtype=data.dtype)

    centered = data - data.mean(axis=0)
    return centered.T @ centered / (n_samples - ddof)
