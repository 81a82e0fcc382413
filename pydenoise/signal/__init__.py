"""
Signal Processing tools for one dimensional series

Contains
- running mean, Gaussian and median filters
- normalized smoothing kernels
- polynomial detrending with BIC order selection
- outlier removal (despiking)
- Teager-Kaiser energy

Submodules
----------
.. autosummary::
    :toctree: _autosummary

"""

from .signal_utilities import InvalidParameterError, InsufficientDataError, NumericDegeneracyError
from .signal_kernel import uniform_kernel, gaussian_kernel, kernel_axis
from .signal_window import windowed_reduce, running_mean, running_median, gaussian_smooth, \
    sliding_window_reduce, SignalWindowing
from .signal_trend import PolynomialTrend, fit_polynomial, select_best, select_polynomial_order, \
    polynomial_detrend, linear_detrend, bic_score
from .signal_clean import despike, find_spikes
from .signal_energy import teager_kaiser_energy


__all__ = ['InvalidParameterError', 'InsufficientDataError', 'NumericDegeneracyError',
           'uniform_kernel', 'gaussian_kernel', 'kernel_axis',
           'windowed_reduce', 'running_mean', 'running_median', 'gaussian_smooth', 'sliding_window_reduce',
           'SignalWindowing',
           'PolynomialTrend', 'fit_polynomial', 'select_best', 'select_polynomial_order',
           'polynomial_detrend', 'linear_detrend', 'bic_score',
           'despike', 'find_spikes', 'teager_kaiser_energy']
