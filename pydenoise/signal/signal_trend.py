"""
signal_trend part of signal package of pydenoise

Polynomial trend estimation and removal. The polynomial order can be fixed or selected
from a range of candidates with the Bayes information criterion (BIC).
"""
import numbers
import warnings

import numpy as np
import dask
import scipy.linalg
import sidpy
from tqdm import tqdm

from .signal_utilities import to_dataset, get_values, get_axis, make_result, \
    InvalidParameterError, InsufficientDataError, NumericDegeneracyError


class PolynomialTrend:
    """
    Least squares polynomial of a series

    The coefficients are stored in ascending powers of the normalized axis
    u = (t - center) / scale, which maps the fitted axis onto [-1, 1].

    Parameters
    ----------
    coefficients: array-like
        a_0 ... a_p
    center: float
        midpoint of the fitted axis
    scale: float
        half range of the fitted axis
    """
    def __init__(self, coefficients, center=0., scale=1.):
        self.coefficients = np.array(coefficients, dtype=float)
        self.center = float(center)
        self.scale = float(scale)

    @property
    def order(self):
        return len(self.coefficients) - 1

    def evaluate(self, axis):
        """Values of the polynomial at the provided axis positions"""
        normalized = (np.asarray(axis, dtype=float) - self.center) / self.scale
        return np.polynomial.polynomial.polyval(normalized, self.coefficients)

    def __repr__(self):
        return 'PolynomialTrend(order={}, coefficients={})'.format(self.order, self.coefficients.tolist())


def check_order(order):
    if isinstance(order, bool) or not isinstance(order, numbers.Integral):
        raise InvalidParameterError('Polynomial order must be an integer, got {}'.format(order))
    if order < 0:
        raise InvalidParameterError('Polynomial order must be non-negative, got {}'.format(order))
    return int(order)


def _get_axis(axis, num_samples):
    if axis is None:
        return np.arange(num_samples, dtype=float)
    axis = np.asarray(axis, dtype=float)
    if axis.shape != (num_samples,):
        raise InvalidParameterError('axis must have one value per sample ({}), got shape {}'
                                    ''.format(num_samples, axis.shape))
    if not np.all(np.isfinite(axis)):
        raise InvalidParameterError('axis contains non-finite values')
    return axis


def fit_polynomial(values, order, axis=None):
    """
    Least squares polynomial fit of a series

    Parameters
    ----------
    values: numpy.ndarray
        one dimensional series
    order: int
        polynomial order, 0 fits the mean and 1 a straight line
    axis: array-like, optional
        position of every sample, default is 0 ... n-1

    Returns
    -------
    PolynomialTrend

    Raises
    ------
    InsufficientDataError
        if there are not more samples than the order
    NumericDegeneracyError
        if the design matrix is rank deficient, e.g. for repeated axis values
    """
    values = np.asarray(values, dtype=float)
    order = check_order(order)
    num_samples = len(values)
    if order >= num_samples:
        raise InsufficientDataError('A polynomial of order {} needs at least {} samples, got {}'
                                    ''.format(order, order + 1, num_samples))
    axis = _get_axis(axis, num_samples)

    center = (axis.max() + axis.min()) / 2.
    scale = (axis.max() - axis.min()) / 2.
    if scale == 0:
        if order > 0:
            raise NumericDegeneracyError('All axis values are identical, cannot fit order {}'.format(order))
        scale = 1.

    design = np.vander((axis - center) / scale, order + 1, increasing=True)
    # singular values below max(n, p + 1) * eps count as zero, as in numpy.linalg.matrix_rank
    cond = max(design.shape) * np.finfo(float).eps
    coefficients, _, rank, _ = scipy.linalg.lstsq(design, values, cond=cond)
    if rank < order + 1:
        raise NumericDegeneracyError('Polynomial fit of order {} is singular: design matrix has rank {}'
                                     ''.format(order, rank))
    return PolynomialTrend(coefficients, center=center, scale=scale)


def mean_squared_residual(values, trend):
    """Mean of the squared differences between a series and its trend"""
    residual = np.asarray(values, dtype=float) - np.asarray(trend, dtype=float)
    return float(np.mean(residual ** 2))


def bic_score(mse, num_samples, order, scale=1.):
    """
    Bayes information criterion n ln(mse) + p ln(n)

    A mean squared residual at or below the rounding floor (n * eps * scale)**2 is a perfect fit;
    it receives the smallest finite score instead of minus infinity.

    Parameters
    ----------
    mse: float
        mean squared residual of the fit
    num_samples: int
        number of samples n
    order: int
        polynomial order p
    scale: float
        magnitude of the series, usually its largest absolute value
    """
    floor = (num_samples * np.finfo(float).eps * abs(scale)) ** 2
    if mse <= floor:
        return -np.finfo(float).max
    return num_samples * np.log(mse) + order * np.log(num_samples)


def select_best(candidates, score_func, parallel=False, verbose=False):
    """
    Candidate with the lowest score

    Parameters
    ----------
    candidates: iterable
        models to evaluate, in order of preference for ties
    score_func: callable
        maps one candidate to a real score
    parallel: bool, optional
        evaluate the scores as dask tasks
    verbose: bool, optional
        show a progress bar while scoring serially

    Returns
    -------
    best: object
        first candidate with the minimal score
    scores: numpy.ndarray
        score of every candidate
    """
    candidates = list(candidates)
    if len(candidates) == 0:
        raise InvalidParameterError('No candidates to select from')
    if parallel:
        lazy_scores = [dask.delayed(score_func)(candidate) for candidate in candidates]
        scores = dask.compute(*lazy_scores)
    else:
        scores = [score_func(candidate) for candidate in tqdm(candidates, disable=not verbose)]
    scores = np.array(scores, dtype=float)
    return candidates[int(np.argmin(scores))], scores


def get_order_range(order_range):
    """Validates an inclusive (p_min, p_max) range and returns its orders"""
    try:
        p_min, p_max = order_range
    except (TypeError, ValueError):
        raise InvalidParameterError('order_range must be a pair (p_min, p_max), got {}'.format(order_range))
    p_min = check_order(p_min)
    p_max = check_order(p_max)
    if p_min > p_max:
        raise InvalidParameterError('order_range minimum {} is larger than its maximum {}'.format(p_min, p_max))
    return list(range(p_min, p_max + 1))


def select_polynomial_order(values, order_range, axis=None, parallel=False, verbose=False):
    """
    Polynomial order minimizing the Bayes information criterion

    Parameters
    ----------
    values: numpy.ndarray
        one dimensional series
    order_range: tuple of int
        smallest and largest candidate order, inclusive
    axis: array-like, optional
        position of every sample, default is 0 ... n-1
    parallel: bool, optional
        fit the candidate orders as dask tasks
    verbose: bool, optional
        show progress over the candidate orders

    Returns
    -------
    order: int
        selected order, the smallest one in case of ties
    orders: list of int
        evaluated orders
    scores: numpy.ndarray
        BIC of every evaluated order
    """
    values = np.asarray(values, dtype=float)
    num_samples = len(values)
    orders = get_order_range(order_range)
    axis = _get_axis(axis, num_samples)

    valid_orders = [order for order in orders if order < num_samples]
    if len(valid_orders) == 0:
        raise InsufficientDataError('All candidate orders {} need more than the {} available samples'
                                    ''.format(orders, num_samples))
    if len(valid_orders) < len(orders):
        warnings.warn('Orders {} are not well-posed for {} samples and were skipped'
                      ''.format(orders[len(valid_orders):], num_samples), UserWarning)

    scale = np.max(np.abs(values))

    def score(order):
        trend = fit_polynomial(values, order, axis=axis).evaluate(axis)
        return bic_score(mean_squared_residual(values, trend), num_samples, order, scale=scale)

    best, scores = select_best(valid_orders, score, parallel=parallel, verbose=verbose)
    if verbose:
        print('Selected polynomial order {} from {} to {}'.format(best, valid_orders[0], valid_orders[-1]))
    return best, valid_orders, scores


def polynomial_detrend(dataset, order=None, order_range=None, axis=None, parallel=False, verbose=False):
    """
    Removes a polynomial trend from a one dimensional dataset

    Either a fixed order or a range of candidate orders for a BIC based selection is used.

    Parameters
    ----------
    dataset: sidpy.Dataset or array-like
        one dimensional series
    order: int, optional
        fixed polynomial order
    order_range: tuple of int, optional
        smallest and largest candidate order, inclusive
    axis: array-like, optional
        position of every sample. Default is the dimension of a sidpy.Dataset, 0 ... n-1 otherwise
    parallel: bool, optional
        fit candidate orders as dask tasks
    verbose: bool

    Returns
    -------
    residual: sidpy.Dataset
        series minus its trend
    trend: sidpy.Dataset
        fitted trend
    Both carry the diagnostics of the fit in their metadata.

    Example
    -------
    >> residual, trend = polynomial_detrend(dataset, order_range=(0, 10))
    >> residual.metadata['order']
    """
    if (order is None) == (order_range is None):
        raise InvalidParameterError('Provide exactly one of order or order_range')
    if axis is None and isinstance(dataset, sidpy.Dataset):
        axis = get_axis(dataset)
    dataset = to_dataset(dataset)
    values = get_values(dataset)
    axis = _get_axis(axis, len(values))

    metadata = {}
    if order_range is not None:
        order, orders, scores = select_polynomial_order(values, order_range, axis=axis,
                                                        parallel=parallel, verbose=verbose)
        metadata.update({'order_range': tuple(order_range), 'bic_orders': orders,
                         'bic_scores': scores.tolist()})

    model = fit_polynomial(values, order, axis=axis)
    trend = model.evaluate(axis)
    residual = values - trend
    metadata.update({'order': model.order, 'coefficients': model.coefficients.tolist(),
                     'axis_center': model.center, 'axis_scale': model.scale,
                     'mse': mean_squared_residual(values, trend)})
    if verbose:
        print('Removed polynomial trend of order {}, mean squared residual {:.4g}'.format(model.order,
                                                                                         metadata['mse']))

    return (make_result(dataset, residual, 'detrended', metadata),
            make_result(dataset, trend, 'trend', metadata))


def linear_detrend(dataset, axis=None, verbose=False):
    """Removes the least squares straight line, see polynomial_detrend"""
    return polynomial_detrend(dataset, order=1, axis=axis, verbose=verbose)
