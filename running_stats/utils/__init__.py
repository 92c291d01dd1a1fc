from .common import iter_batches, two_pass_covariance
