"""
signal_clean part of signal package of pydenoise

Removal of isolated outliers (spikes) by local median replacement.
"""
import numbers

import numpy as np

from .signal_window import MedianReducer
from .signal_utilities import to_dataset, get_values, check_half_width, make_result, InvalidParameterError

THRESHOLD_POLICIES = ['absolute', 'positive']


def find_spikes(values, threshold, policy='absolute'):
    """
    Indices of the samples exceeding an amplitude threshold

    Parameters
    ----------
    values: numpy.ndarray
        one dimensional series
    threshold: float
        amplitude above which a sample is a spike
    policy: str
        'absolute': |x| > threshold, catches positive and negative spikes
        'positive': x > threshold, only positive excursions

    Returns
    -------
    numpy.ndarray of int
    """
    if policy not in THRESHOLD_POLICIES:
        raise InvalidParameterError("policy must be one of {} but got '{}'".format(THRESHOLD_POLICIES, policy))
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real) or np.isnan(threshold):
        raise InvalidParameterError('threshold must be a real number, got {}'.format(threshold))
    values = np.asarray(values, dtype=float)
    if policy == 'absolute':
        return np.flatnonzero(np.abs(values) > threshold)
    return np.flatnonzero(values > threshold)


def despike(dataset, threshold, half_width, policy='absolute', verbose=False):
    """
    Replaces every sample above threshold by the median of its neighborhood

    The neighborhood of sample i spans [max(0, i - half_width), min(n - 1, i + half_width)],
    so windows are truncated at the ends of the series. A truncated window can hold an even
    number of samples; its median is then the mean of the two middle values rather than one
    of the samples. Medians are always computed on the original series; a replacement never
    sees another replaced value.

    Like every windowed operation, the full window of 2 * half_width + 1 samples must fit into
    the series, even though windows are truncated at the ends.

    Parameters
    ----------
    dataset: sidpy.Dataset or array-like
        one dimensional series
    threshold: float
        amplitude above which a sample is a spike
    half_width: int
        number of samples on each side of a spike used for its median
    policy: str
        'absolute' (default) flags |x| > threshold, 'positive' flags x > threshold
    verbose: bool

    Returns
    -------
    sidpy.Dataset
        despiked series, metadata holds threshold, policy, spike_indices and num_replaced

    Raises
    ------
    InsufficientDataError
        if 2 * half_width + 1 is larger than the number of samples

    Example
    -------
    >> clean = despike([0, 0, 0, 100, 0, 0, 0], threshold=5, half_width=1)
    >> clean.metadata['spike_indices']
    [3]
    """
    dataset = to_dataset(dataset)
    values = get_values(dataset)
    num_samples = len(values)
    half_width = check_half_width(half_width, num_samples)
    spikes = find_spikes(values, threshold, policy=policy)

    median = MedianReducer()
    despiked = values.copy()
    for ind in spikes:
        start = max(0, ind - half_width)
        stop = min(num_samples - 1, ind + half_width)
        despiked[ind] = median(values[np.newaxis, start:stop + 1])[0]

    if verbose:
        print('Replaced {} of {} samples exceeding {} ({} policy)'.format(len(spikes), num_samples,
                                                                         threshold, policy))
    metadata = {'threshold': float(threshold), 'policy': policy, 'half_width': half_width,
                'spike_indices': spikes.tolist(), 'num_replaced': int(len(spikes))}
    return make_result(dataset, despiked, 'despiked', metadata)
