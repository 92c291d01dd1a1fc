""" Streaming mean, covariance and correlation estimates with exact merging.
"""
from .enums import Precision
from .errors import DimensionMismatch
from .estimate import StatsSnapshot, WelfordEstimate
from .functional import (
    get_correlation,
    get_covariance,
    get_statistics,
    initialize,
    merge_estimate,
    merge_estimates,
    reduce_estimates,
    update_batch,
    update_single,
)
