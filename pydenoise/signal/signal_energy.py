"""
signal_energy part of signal package of pydenoise
"""
import numpy as np

from .signal_utilities import to_dataset, get_values, make_result, InsufficientDataError


def teager_kaiser_energy(dataset, verbose=False):
    """
    Teager-Kaiser energy operator x[i]**2 - x[i-1] * x[i+1]

    The operator emphasizes samples where amplitude and frequency are high at the same time.
    It needs a neighbor on each side, so the first and last sample are copied from the input.

    Parameters
    ----------
    dataset: sidpy.Dataset or array-like
        one dimensional series with at least three samples
    verbose: bool

    Returns
    -------
    sidpy.Dataset
        energy series of the same length
    """
    dataset = to_dataset(dataset)
    values = get_values(dataset)
    if len(values) < 3:
        raise InsufficientDataError('The energy operator needs at least 3 samples, got {}'.format(len(values)))

    energy = values.copy()
    energy[1:-1] = values[1:-1] ** 2 - values[:-2] * values[2:]
    peak_index = int(np.argmax(energy[1:-1])) + 1

    if verbose:
        print('Teager-Kaiser energy peaks at sample {} with {:.4g}'.format(peak_index, energy[peak_index]))
    metadata = {'operator': 'teager_kaiser', 'peak_index': peak_index}
    return make_result(dataset, energy, 'tkeo', metadata, quantity='energy')
