"""
signal_utilities part of signal package of pydenoise

Input conversion, parameter validation and the error types shared by all
1-D signal conditioning tools.
"""
import numbers

import numpy as np
import sidpy
from sidpy.base.num_utils import get_slope


class InvalidParameterError(ValueError):
    """A parameter is outside of its allowed domain"""


class InsufficientDataError(ValueError):
    """The series is too short for the requested operation"""


class NumericDegeneracyError(ArithmeticError):
    """A least-squares problem is singular for the given axis"""


# conversion factor to milliseconds for time axes recognized in sidpy datasets
TIME_UNITS = {'s': 1000., 'sec': 1000., 'seconds': 1000., 'ms': 1., 'msec': 1., 'milliseconds': 1.}


def to_dataset(series):
    """
    Returns a one dimensional sidpy.Dataset for the provided series

    Parameters
    ----------
    series: sidpy.Dataset, numpy.ndarray or list
        ordered real valued samples

    Returns
    -------
    sidpy.Dataset
        the input itself when it already is a dataset, a new dataset otherwise

    Raises
    ------
    TypeError
        If series cannot be interpreted as a numeric array
    InvalidParameterError
        If series is not one dimensional or empty
    """
    if isinstance(series, sidpy.Dataset):
        dataset = series
    else:
        if isinstance(series, (str, bytes, dict)) or not hasattr(series, '__len__'):
            raise TypeError('Expected a sidpy.Dataset or an array-like of numbers, '
                            'got {}'.format(type(series)))
        values = np.asarray(series)
        if values.dtype.kind not in 'biuf':
            raise TypeError('Expected a numeric series but got dtype {}'.format(values.dtype))
        if values.ndim != 1 or values.size < 1:
            raise InvalidParameterError('Expected a non-empty one dimensional series, '
                                        'got shape {}'.format(values.shape))
        dataset = sidpy.Dataset.from_array(values.astype(float))
        dataset.title = 'series'
        dataset.quantity = 'amplitude'
        dataset.units = 'a.u.'

    if dataset.ndim != 1:
        raise InvalidParameterError('Only one dimensional series are supported, '
                                    'got {} dimensions'.format(dataset.ndim))
    if dataset.shape[0] < 1:
        raise InvalidParameterError('Series must contain at least one sample')
    return dataset


def get_values(dataset):
    """Returns a float copy of the samples, rejects NaN and infinity"""
    values = np.array(dataset, dtype=float)
    if not np.all(np.isfinite(values)):
        raise InvalidParameterError('Series contains non-finite values')
    return values


def get_axis(dataset):
    """Values of the single dimension of a dataset"""
    return np.array(dataset._axes[0].values, dtype=float)


def get_sample_rate(dataset):
    """
    Sample rate in samples per second from the time axis of a dataset

    Returns None if the axis has no time units or is not equidistant.
    """
    axis = dataset._axes[0]
    units = str(axis.units).strip().lower()
    if units not in TIME_UNITS or len(axis) < 2:
        return None
    try:
        slope = get_slope(axis.values)
    except ValueError:
        return None
    if slope <= 0:
        return None
    return 1000. / (slope * TIME_UNITS[units])


def check_half_width(half_width, num_samples=None):
    """
    Validates a window half-width and, if provided, that the window fits in the series

    Raises
    ------
    InvalidParameterError
        If half_width is not a non-negative integer
    InsufficientDataError
        If 2 * half_width + 1 is larger than the number of samples
    """
    if isinstance(half_width, bool) or not isinstance(half_width, numbers.Integral):
        raise InvalidParameterError('half_width must be an integer, got {}'.format(half_width))
    if half_width < 0:
        raise InvalidParameterError('half_width must be non-negative, got {}'.format(half_width))
    half_width = int(half_width)
    if num_samples is not None and 2 * half_width + 1 > num_samples:
        raise InsufficientDataError('Window of {} samples does not fit into a series of {} samples'
                                    ''.format(2 * half_width + 1, num_samples))
    return half_width


def check_positive(value, name):
    """Validates a strictly positive, finite real number"""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError('{} must be a real number, got {}'.format(name, value))
    if not np.isfinite(value) or value <= 0:
        raise InvalidParameterError('{} must be positive, got {}'.format(name, value))
    return float(value)


def make_result(dataset, values, title, metadata, quantity=None):
    """
    Wraps processed values into a new dataset with the axes of the input

    Parameters
    ----------
    dataset: sidpy.Dataset
        the input dataset, never modified
    values: numpy.ndarray
        processed samples, same length as dataset
    title: str
        prefix for the title of the new dataset
    metadata: dict
        diagnostics of the operation
    quantity: str, optional
        quantity of the result, defaults to the quantity of the input

    Returns
    -------
    sidpy.Dataset
    """
    result = dataset.like_data(values)
    result.title = title + '_' + dataset.title
    result.source = dataset.title
    if quantity is not None:
        result.quantity = quantity
    result.metadata = dict(metadata)
    return result
