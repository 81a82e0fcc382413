"""
signal_window part of signal package of pydenoise

Sliding window reduction over a series (running mean, Gaussian weighted sum, running median)
with a selectable policy for the samples at both ends of the series.
"""
from itertools import chain

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .signal_kernel import gaussian_kernel
from .signal_utilities import to_dataset, get_values, get_sample_rate, check_half_width, make_result, \
    InvalidParameterError

EDGE_MODES = ['passthrough', 'shrink', 'reflect']
REDUCTION_MODES = ['mean', 'weighted', 'median']


class MeanReducer:
    """Arithmetic mean of each window"""
    name = 'mean'

    def __call__(self, windows):
        return windows.mean(axis=-1)

    def clip(self, left, right):
        return self


class MedianReducer:
    """Median of each window, exact for odd windows"""
    name = 'median'

    def __call__(self, windows):
        return np.median(windows, axis=-1)

    def clip(self, left, right):
        return self


class WeightedReducer:
    """
    Dot product of each window with a fixed kernel

    Parameters
    ----------
    kernel: array-like
        non-negative weights with a positive sum, one per sample of the window
    """
    name = 'weighted'

    def __init__(self, kernel):
        kernel = np.array(kernel, dtype=float)
        if kernel.ndim != 1 or kernel.size < 1:
            raise InvalidParameterError('kernel must be a non-empty one dimensional array')
        if not np.all(np.isfinite(kernel)) or np.any(kernel < 0) or kernel.sum() <= 0:
            raise InvalidParameterError('kernel weights must be finite, non-negative and not all zero')
        kernel.flags.writeable = False
        self.kernel = kernel
        self.size = kernel.size

    def __call__(self, windows):
        return windows @ self.kernel

    def clip(self, left, right):
        """Reducer for a window truncated to left and right samples around the center, renormalized"""
        center = self.size // 2
        part = self.kernel[center - left:center + right + 1]
        return WeightedReducer(part / part.sum())


def get_reducer(mode, kernel=None):
    """
    Reduction strategy for a mode name

    Parameters
    ----------
    mode: str
        one of 'mean', 'weighted', 'median'
    kernel: array-like, optional
        weights, required for and only allowed with mode 'weighted'
    """
    if mode not in REDUCTION_MODES:
        raise InvalidParameterError("mode must be one of {} but got '{}'".format(REDUCTION_MODES, mode))
    if mode == 'weighted':
        if kernel is None:
            raise InvalidParameterError("mode 'weighted' requires a kernel")
        return WeightedReducer(kernel)
    if kernel is not None:
        raise InvalidParameterError("A kernel can only be used with mode 'weighted'")
    if mode == 'mean':
        return MeanReducer()
    return MedianReducer()


def sliding_window_reduce(values, half_width, reducer, edge_mode='passthrough'):
    """
    Applies a reduction over a window of 2 * half_width + 1 samples centered on every sample

    Parameters
    ----------
    values: numpy.ndarray
        one dimensional series, not modified
    half_width: int
        number of samples on each side of the center
    reducer: callable
        maps a 2D array of windows (one per row) to one value per row.
        For edge_mode 'shrink' a reducer may provide clip(left, right) returning the
        reducer to use for a window truncated at the ends of the series.
    edge_mode: str
        'passthrough': the first and last half_width samples are copied from the input
        'shrink': the window is truncated at the ends of the series
        'reflect': the series is mirrored at its ends so every sample gets a full window

    Returns
    -------
    numpy.ndarray
        new series with the same length as values
    """
    values = np.asarray(values, dtype=float)
    num_samples = len(values)
    half_width = check_half_width(half_width, num_samples)
    if edge_mode not in EDGE_MODES:
        raise InvalidParameterError("edge_mode must be one of {} but got '{}'".format(EDGE_MODES, edge_mode))
    size = 2 * half_width + 1
    if getattr(reducer, 'size', size) != size:
        raise InvalidParameterError('kernel of {} weights does not match the window size of {}'
                                    ''.format(reducer.size, size))

    if edge_mode == 'reflect':
        padded = np.pad(values, half_width, mode='reflect')
        return np.asarray(reducer(sliding_window_view(padded, size)), dtype=float)

    filtered = values.copy()
    filtered[half_width:num_samples - half_width] = reducer(sliding_window_view(values, size))

    if edge_mode == 'shrink':
        for ind in chain(range(half_width), range(num_samples - half_width, num_samples)):
            left = min(half_width, ind)
            right = min(half_width, num_samples - 1 - ind)
            clipped = reducer.clip(left, right) if hasattr(reducer, 'clip') else reducer
            filtered[ind] = clipped(values[np.newaxis, ind - left:ind + right + 1])[0]
    return filtered


def windowed_reduce(dataset, half_width, mode='mean', kernel=None, edge_mode='passthrough', verbose=False):
    """
    Sliding window filter of a one dimensional dataset

    Parameters
    ----------
    dataset: sidpy.Dataset or array-like
        one dimensional series
    half_width: int
        number of samples on each side of the center, the window spans 2 * half_width + 1 samples
    mode: str
        'mean', 'weighted' or 'median'
    kernel: array-like, optional
        2 * half_width + 1 weights for mode 'weighted'
    edge_mode: str
        'passthrough' (default), 'shrink' or 'reflect', see sliding_window_reduce
    verbose: bool

    Returns
    -------
    sidpy.Dataset
        filtered series with the diagnostics in its metadata
    """
    dataset = to_dataset(dataset)
    values = get_values(dataset)
    half_width = check_half_width(half_width, len(values))
    reducer = get_reducer(mode, kernel)

    filtered = sliding_window_reduce(values, half_width, reducer, edge_mode)
    if verbose:
        print('Running {} over windows of {} samples, edge mode {}'.format(mode, 2 * half_width + 1, edge_mode))

    metadata = {'mode': mode, 'half_width': half_width, 'window_size': 2 * half_width + 1,
                'edge_mode': edge_mode}
    return make_result(dataset, filtered, 'running_' + mode, metadata)


def running_mean(dataset, half_width, edge_mode='passthrough', verbose=False):
    """Running mean filter, see windowed_reduce"""
    return windowed_reduce(dataset, half_width, mode='mean', edge_mode=edge_mode, verbose=verbose)


def running_median(dataset, half_width, edge_mode='passthrough', verbose=False):
    """Running median filter, see windowed_reduce"""
    return windowed_reduce(dataset, half_width, mode='median', edge_mode=edge_mode, verbose=verbose)


def gaussian_smooth(dataset, half_width, fwhm, sample_rate=None, edge_mode='passthrough', verbose=False):
    """
    Gaussian weighted running average

    Parameters
    ----------
    dataset: sidpy.Dataset or array-like
        one dimensional series
    half_width: int
        number of samples on each side of the center
    fwhm: float
        full width at half maximum of the kernel, in milliseconds if a sample rate
        is known and in samples otherwise
    sample_rate: float, optional
        samples per second. Taken from the time axis (units 's' or 'ms') of a
        sidpy.Dataset when not given.
    edge_mode: str
        'passthrough' (default), 'shrink' or 'reflect'
    verbose: bool

    Returns
    -------
    sidpy.Dataset
        smoothed series, metadata holds requested and empirical FWHM
    """
    dataset = to_dataset(dataset)
    if sample_rate is None:
        sample_rate = get_sample_rate(dataset)
    values = get_values(dataset)
    half_width = check_half_width(half_width, len(values))
    kernel, empirical_fwhm = gaussian_kernel(half_width, fwhm, sample_rate=sample_rate, verbose=verbose)

    smoothed = sliding_window_reduce(values, half_width, WeightedReducer(kernel), edge_mode)

    metadata = {'mode': 'weighted', 'half_width': half_width, 'window_size': 2 * half_width + 1,
                'edge_mode': edge_mode, 'fwhm': float(fwhm), 'empirical_fwhm': empirical_fwhm,
                'sample_rate': sample_rate, 'fwhm_units': 'samples' if sample_rate is None else 'ms'}
    return make_result(dataset, smoothed, 'gaussian_smooth', metadata)


class SignalWindowing:
    """
    Sliding window filter configured through a parameter dictionary
    """
    def __init__(self, parms_dict, verbose=False):
        """
        Parameters
        ----------
        - parms_dict : dictionary
            Dictionary with parameters of the filter, see below.

            Keys:
            - 'half_width' (integer) (required): number of samples on each side of the window center
            - 'mode' (string) (Optional, default is 'mean'): One of 'mean', 'weighted' or 'median'.
            - 'edge_mode' (string) (Optional, default is 'passthrough'): One of 'passthrough', 'shrink', 'reflect'.
            - 'fwhm' (float) (required for mode 'weighted'): full width at half maximum of the Gaussian kernel
            - 'sample_rate' (float) (Optional, default is None): samples per second. If given, 'fwhm' is in
                milliseconds, otherwise in samples. Only used for mode 'weighted'.
        - verbose : (Optional) Boolean
            Verbose flag. Default is False.
        """
        if 'half_width' not in parms_dict:
            raise InvalidParameterError("Parameters dictionary field 'half_width' is required")
        self.half_width = check_half_width(parms_dict['half_width'])

        if 'mode' in parms_dict.keys():
            if parms_dict['mode'] not in REDUCTION_MODES:
                raise InvalidParameterError("Parameters dictionary field 'mode' must be one of {}"
                                            "".format(REDUCTION_MODES))
            self.mode = parms_dict['mode']
        else:
            self.mode = 'mean'
            parms_dict['mode'] = 'mean'

        if 'edge_mode' in parms_dict.keys():
            if parms_dict['edge_mode'] not in EDGE_MODES:
                raise InvalidParameterError("Parameters dictionary field 'edge_mode' must be one of {}"
                                            "".format(EDGE_MODES))
            self.edge_mode = parms_dict['edge_mode']
        else:
            self.edge_mode = 'passthrough'
            parms_dict['edge_mode'] = 'passthrough'

        self.kernel = None
        self.empirical_fwhm = None
        if self.mode == 'weighted':
            if 'fwhm' not in parms_dict.keys():
                raise InvalidParameterError("Parameters dictionary field 'fwhm' is required for mode 'weighted'")
            if 'sample_rate' not in parms_dict.keys():
                parms_dict['sample_rate'] = None
            self.kernel, self.empirical_fwhm = gaussian_kernel(self.half_width, parms_dict['fwhm'],
                                                               sample_rate=parms_dict['sample_rate'],
                                                               verbose=verbose)
        self.verbose = verbose
        if self.verbose:
            print('SignalWindowing object created with parameters {}'.format(parms_dict))
        self.window_parms = parms_dict

    def filter(self, dataset):
        """
        Filters a one dimensional series with the configured window

        Parameters
        ----------
        dataset: sidpy.Dataset or array-like

        Returns
        -------
        sidpy.Dataset
            filtered series, its metadata holds the diagnostics and the parameters
        """
        result = windowed_reduce(dataset, self.half_width, mode=self.mode, kernel=self.kernel,
                                 edge_mode=self.edge_mode, verbose=self.verbose)
        metadata = dict(result.metadata)
        metadata['window_parms'] = dict(self.window_parms)
        if self.empirical_fwhm is not None:
            metadata['empirical_fwhm'] = self.empirical_fwhm
        result.metadata = metadata
        return result
