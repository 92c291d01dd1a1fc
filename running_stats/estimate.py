""" Streaming estimation of mean, covariance and correlation.
"""
import logging
import numpy as np

from typing import NamedTuple

from .enums import Precision
from .errors import DimensionMismatch


logger = logging.getLogger(__name__)



class StatsSnapshot(NamedTuple):
    """
    Statistics extracted from an estimate at a given point of the stream.

    All the arrays are independent copies of the estimate state.
    """

    count: int
    """Number of observations processed."""
    mean: np.ndarray
    """Mean of shape (n_features,)."""
    covariance: np.ndarray
    """Sample covariance of shape (n_features, n_features)."""
    correlation: np.ndarray
    """Correlation of shape (n_features, n_features)."""
    variance: np.ndarray
    """Sample variance of shape (n_features,)."""



class WelfordEstimate:
    """
    Tracks the running mean and covariance of multi-dimensional observations
    using Welford's online algorithm, without storing any observation.

    Independent estimates can be combined exactly with `merge`, which gives the
    same statistics as processing the concatenation of their streams.

    Attributes
    ----------
    feature_count : int
        Number of features of each observation.
        Fixed by the first update unless the estimate is initialized explicitly.
    count : int
        Number of observations processed so far.
    precision : Precision
        Floating-point precision used for storage and arithmetic.

    References
    ----------
    - Welford, B. P. (1962). Note on a method for calculating
    corrected sums of squares and products. Technometrics, 4(3), 419-420.
    - Chan, T. F., Golub, G. H., & LeVeque, R. J. (1979). Updating formulae and
    a pairwise algorithm for computing sample variances. Technical Report STAN-CS-79-773,
    Stanford University.
    """

    def __init__(self, feature_count: int = 0, precision: Precision|str = Precision.FLOAT64):
        """
        Parameters
        ----------
        feature_count : int, default=0
            Expected number of features.
            It is overridden by the first update if the estimate is still empty.
        precision : Precision or str, default=Precision.FLOAT64
            Floating-point precision used for storage and arithmetic.

        Raises
        ------
        ValueError
            If `feature_count` is negative or `precision` is not supported.
        """
        if feature_count < 0:
            raise ValueError(f'feature_count must be non-negative, got {feature_count}')

        self.precision = Precision.from_value(precision)
        """Floating-point precision."""
        self.feature_count = feature_count
        """Number of features."""

        self._n = 0
        """Number of observations processed so far."""
        self._mean = np.empty(0, dtype=self.dtype)
        """Running mean."""
        self._scatter = np.empty((0, 0), dtype=self.dtype)
        """Running sum of outer products of the deviations from the mean (M2)."""
        return


    @property
    def count(self) -> int:
        """Number of observations processed."""
        return self._n


    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype of the stored statistics."""
        return self.precision.dtype


    @property
    def mean(self) -> np.ndarray:
        """Copy of the running mean."""
        return self._mean.copy()


    @property
    def scatter(self) -> np.ndarray:
        """Copy of the running scatter matrix (unnormalized covariance)."""
        return self._scatter.copy()


    def initialize(self, feature_count: int) -> 'WelfordEstimate':
        """
        Reset the estimate for observations with `feature_count` features.

        The mean is set to a zero vector and the scatter matrix to a zero matrix,
        the count is reset to zero.

        Parameters
        ----------
        feature_count : int
            Number of features.

        Returns
        -------
        : WelfordEstimate
            The estimate itself.

        Raises
        ------
        ValueError
            If `feature_count` is negative.
        """
        if feature_count < 0:
            raise ValueError(f'feature_count must be non-negative, got {feature_count}')

        self.feature_count = feature_count
        self._n = 0
        self._mean = np.zeros(feature_count, dtype=self.dtype)
        self._scatter = np.zeros((feature_count, feature_count), dtype=self.dtype)

        logger.debug('initialized estimate with %d features (%s)', feature_count, self.precision.value)
        return self


    def update_single(self, x: np.ndarray) -> None:
        """
        Update the running statistics with a single observation.

        Parameters
        ----------
        x : np.ndarray
            Observation of shape (n_features,).
            If the estimate is empty, its length fixes the number of features.

        Raises
        ------
        ValueError
            If `x` is not one-dimensional or is empty.
        DimensionMismatch
            If the length of `x` differs from the number of features.
        """
        x = np.asarray(x, dtype=self.dtype)

        if x.ndim != 1:
            raise ValueError(f'Expected a vector, got an array of shape {x.shape}')
        if len(x) == 0:
            raise ValueError('Expected at least one feature, got an empty vector')

        if self._n == 0:
            self.initialize(len(x))
        elif len(x) != self.feature_count:
            raise DimensionMismatch(self.feature_count, len(x))

        self._n += 1
        delta = x - self._mean
        self._mean += delta / self._n
        # the second deviation is taken from the updated mean
        delta2 = x - self._mean
        self._scatter += np.outer(delta, delta2)
        return


    def update_batch(self, data: np.ndarray) -> StatsSnapshot:
        """
        Update the running statistics with a batch of observations.

        The result is equivalent, up to floating-point rounding, to calling
        `update_single` on each row in order. The batch is summarized in two passes
        and then combined with the running state, so the state is either fully
        updated or left untouched.

        Parameters
        ----------
        data : np.ndarray
            Observations of shape (n_samples, n_features),
            or a single observation of shape (n_features,).

        Returns
        -------
        : StatsSnapshot
            Statistics after the update.

        Raises
        ------
        ValueError
            If `data` has more than two dimensions, or holds observations without features.
        DimensionMismatch
            If the number of columns differs from the number of features.
        """
        data = np.asarray(data, dtype=self.dtype)

        if data.ndim == 1:
            data = data[None, :]
        if data.ndim != 2:
            raise ValueError(f'Expected a matrix or a vector, got an array of shape {data.shape}')

        n_samples, n_features = data.shape
        if n_samples > 0 and n_features == 0:
            raise ValueError('Expected at least one feature, got observations without features')

        if self._n == 0:
            self.initialize(n_features)
        elif n_features != self.feature_count:
            raise DimensionMismatch(self.feature_count, n_features)

        if n_samples > 0:
            batch_mean = data.mean(axis=0)
            centered = data - batch_mean
            self._combine(n_samples, batch_mean, centered.T @ centered)
        return self.get_statistics()


    def get_mean(self) -> np.ndarray:
        """
        Get the current running mean.

        Returns
        -------
        : np.ndarray
            Copy of the mean of shape (n_features,), empty if no observation has been processed.
        """
        if self._n == 0:
            return np.empty(0, dtype=self.dtype)
        return self._mean.copy()


    def get_covariance(self, corrected: bool = True) -> np.ndarray:
        """
        Get the current covariance matrix.

        Parameters
        ----------
        corrected : bool, default=True
            If True, return the sample covariance (dividing by n-1).
            If False, return the population covariance (dividing by n).

        Returns
        -------
        : np.ndarray
            Covariance of shape (n_features, n_features).
            It is empty if no observation has been processed, and filled with NaN
            if there are too few observations for the requested correction.
        """
        if self._n == 0:
            return np.empty((0, 0), dtype=self.dtype)

        ddof = 1 if corrected else 0
        if self._n <= ddof:
            return np.full((self.feature_count, self.feature_count), np.nan, dtype=self.dtype)
        return self._scatter / (self._n - ddof)


    def get_correlation(self) -> np.ndarray:
        """
        Get the current correlation matrix.

        Returns
        -------
        : np.ndarray
            Correlation of shape (n_features, n_features).

        Notes
        -----
        Standard deviations equal to zero are replaced by one before dividing,
        so a constant feature has correlation zero with every feature (itself included)
        instead of NaN or infinity.
        """
        cov = self.get_covariance()
        std = np.sqrt(np.diag(cov))
        std[std == 0] = 1
        return cov / np.outer(std, std)


    def get_variance(self, corrected: bool = True) -> np.ndarray:
        """
        Get the current variance of each feature.

        Parameters
        ----------
        corrected : bool, default=True
            If True, return the sample variance (dividing by n-1).
            If False, return the population variance (dividing by n).

        Returns
        -------
        : np.ndarray
            Variance of shape (n_features,).
        """
        return np.diag(self.get_covariance(corrected)).copy()


    def get_std(self, corrected: bool = True) -> np.ndarray:
        """
        Get the current standard deviation of each feature.

        Parameters
        ----------
        corrected : bool, default=True
            If True, use the sample variance (dividing by n-1).
            If False, use the population variance (dividing by n).

        Returns
        -------
        : np.ndarray
            Standard deviation of shape (n_features,).
        """
        return np.sqrt(self.get_variance(corrected))


    def get_statistics(self) -> StatsSnapshot:
        """
        Get all the current statistics.

        Returns
        -------
        : StatsSnapshot
            Count, mean, sample covariance, correlation and sample variance.
            All arrays are empty if no observation has been processed.
        """
        if self._n == 0:
            return StatsSnapshot(
                count = 0,
                mean = np.empty(0, dtype=self.dtype),
                covariance = np.empty((0, 0), dtype=self.dtype),
                correlation = np.empty((0, 0), dtype=self.dtype),
                variance = np.empty(0, dtype=self.dtype)
            )

        cov = self.get_covariance()
        return StatsSnapshot(
            count = self._n,
            mean = self._mean.copy(),
            covariance = cov,
            correlation = self.get_correlation(),
            variance = np.diag(cov).copy()
        )


    def merge(self, other: 'WelfordEstimate') -> 'WelfordEstimate':
        """
        Merge the statistics of another estimate into this one.

        After the merge, this estimate describes the concatenation of both streams.
        The other estimate is left untouched.

        Parameters
        ----------
        other : WelfordEstimate
            Estimate to merge into this one.

        Returns
        -------
        : WelfordEstimate
            The estimate itself.

        Raises
        ------
        DimensionMismatch
            If both estimates are not empty and have a different number of features.
        """
        if other._n == 0:
            return self

        if other.dtype != self.dtype:
            logger.warning('merging a %s estimate into a %s one, casting', other.precision.value, self.precision.value)

        if self._n == 0:
            self.feature_count = other.feature_count
            self._n = other._n
            self._mean = other._mean.astype(self.dtype)
            self._scatter = other._scatter.astype(self.dtype)
            return self

        if self.feature_count != other.feature_count:
            raise DimensionMismatch(
                self.feature_count,
                other.feature_count,
                f'Cannot merge estimates with a different number of features: {self.feature_count} vs {other.feature_count}'
            )

        self._combine(other._n, other._mean.astype(self.dtype), other._scatter.astype(self.dtype))
        logger.debug('merged %d observations, total %d', other._n, self._n)
        return self


    def merged(self, other: 'WelfordEstimate') -> 'WelfordEstimate':
        """
        Create a new estimate combining this one and another one.

        Parameters
        ----------
        other : WelfordEstimate
            Estimate to combine with this one.

        Returns
        -------
        : WelfordEstimate
            A new estimate, neither input is modified.
        """
        return self.copy().merge(other)


    def copy(self) -> 'WelfordEstimate':
        """
        Create an independent copy of this estimate.

        Returns
        -------
        : WelfordEstimate
            Copy of the estimate.
        """
        new = WelfordEstimate(self.feature_count, self.precision)
        new._n = self._n
        new._mean = self._mean.copy()
        new._scatter = self._scatter.copy()
        return new


    def _combine(self, n_other: int, mean_other: np.ndarray, scatter_other: np.ndarray) -> None:
        """
        Combine the running state with the summary of other observations (Chan et al.).

        Parameters
        ----------
        n_other : int
            Number of other observations.
        mean_other : np.ndarray
            Mean of the other observations.
        scatter_other : np.ndarray
            Scatter matrix of the other observations around their own mean.
        """
        n_self = self._n
        n = n_self + n_other

        delta = mean_other - self._mean
        mean = self._mean + delta * (n_other / n)
        scatter = self._scatter + scatter_other + np.outer(delta, delta) * (n_self * n_other / n)

        self._n = n
        self._mean = mean
        self._scatter = scatter
        return
