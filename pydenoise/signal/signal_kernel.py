"""
signal_kernel part of signal package of pydenoise

Normalized weighting kernels for windowed smoothing.
"""
import warnings

import numpy as np

from .signal_utilities import check_half_width, check_positive


def kernel_axis(half_width, sample_rate=None):
    """
    Symmetric axis of a kernel with 2 * half_width + 1 points

    Parameters
    ----------
    half_width: int
        number of points on each side of the center
    sample_rate: float, optional
        samples per second; if given the axis is in milliseconds, otherwise in samples

    Returns
    -------
    numpy.ndarray
    """
    half_width = check_half_width(half_width)
    axis = np.arange(-half_width, half_width + 1, dtype=float)
    if sample_rate is not None:
        axis = axis * 1000. / check_positive(sample_rate, 'sample_rate')
    return axis


def uniform_kernel(half_width):
    """Kernel of 2 * half_width + 1 equal weights"""
    half_width = check_half_width(half_width)
    size = 2 * half_width + 1
    return np.full(size, 1. / size)


def gaussian_kernel(half_width, fwhm, sample_rate=None, verbose=False):
    """
    Gaussian kernel of unit sum parametrized by its full width at half maximum

    The curve exp(-4 ln(2) t^2 / fwhm^2) drops to exactly half of its peak at t = +/- fwhm/2.
    Because the kernel is sampled on a discrete axis, the width actually achieved is measured
    as the distance between the axis points closest to half maximum on either side of the center.

    Parameters
    ----------
    half_width: int
        number of points on each side of the center
    fwhm: float
        requested full width at half maximum in units of the kernel axis
        (milliseconds if sample_rate is given, samples otherwise)
    sample_rate: float, optional
        samples per second
    verbose: bool, optional
        print requested and empirical width

    Returns
    -------
    weights: numpy.ndarray
        2 * half_width + 1 non-negative weights summing to one
    empirical_fwhm: float
        width of the sampled curve at half maximum, in units of the kernel axis

    Example
    -------
    >> weights, width = gaussian_kernel(20, 25, sample_rate=1000)
    """
    fwhm = check_positive(fwhm, 'fwhm')
    axis = kernel_axis(half_width, sample_rate)
    center = len(axis) // 2

    curve = np.exp(-(4 * np.log(2) * axis ** 2) / fwhm ** 2)
    weights = curve / curve.sum()

    if center == 0:
        empirical_fwhm = 0.
    else:
        pre_peak = np.argmin(np.abs(curve[:center + 1] - .5))
        post_peak = center + np.argmin(np.abs(curve[center:] - .5))
        empirical_fwhm = float(axis[post_peak] - axis[pre_peak])

        spacing = axis[1] - axis[0]
        if abs(empirical_fwhm - fwhm) > spacing:
            warnings.warn('Empirical FWHM of {:.4g} differs from the requested {:.4g} by more than one '
                          'sample; change half_width or fwhm'.format(empirical_fwhm, fwhm), UserWarning)

    if verbose:
        print('Gaussian kernel of {} points: requested FWHM {:.4g}, empirical FWHM {:.4g}'
              ''.format(len(weights), fwhm, empirical_fwhm))
    return weights, empirical_fwhm
