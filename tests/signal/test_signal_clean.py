# -*- coding: utf-8 -*-
import unittest
import numpy as np
from numpy.testing import assert_array_equal, assert_allclose

import sidpy

from pydenoise.signal import signal_clean
from pydenoise.signal import InvalidParameterError, InsufficientDataError


def make_spiky_signal(num_samples=1000, seed=7):
    rng = np.random.default_rng(seed)
    signal = np.cumsum(rng.standard_normal(num_samples)) * .05
    spike_positions = rng.choice(np.arange(5, num_samples - 5), size=20, replace=False)
    signal[spike_positions] += rng.choice([-1., 1.], size=20) * rng.uniform(50, 100, size=20)
    return signal, np.sort(spike_positions)


class TestDespike(unittest.TestCase):

    def test_despike_scenario(self):
        despiked = signal_clean.despike([0, 0, 0, 100, 0, 0, 0], 5, 1)
        assert_array_equal(np.array(despiked), np.zeros(7))
        self.assertEqual(despiked.metadata['spike_indices'], [3])
        self.assertEqual(despiked.metadata['num_replaced'], 1)
        self.assertEqual(despiked.metadata['policy'], 'absolute')
        self.assertEqual(despiked.metadata['threshold'], 5.)

    def test_no_spikes(self):
        values = np.array([1., -2., 3., 0.5])
        despiked = signal_clean.despike(values, 10., 1)
        assert_array_equal(np.array(despiked), values)
        self.assertEqual(despiked.metadata['num_replaced'], 0)
        self.assertEqual(despiked.metadata['spike_indices'], [])

    def test_replacements_read_original(self):
        # adjacent spikes: with half_width 2 the second median differs if it saw the patched first one
        values = np.array([1., 2., 50., 60., 3., 4., 5.])
        despiked = signal_clean.despike(values, 10., 1)
        assert_array_equal(np.array(despiked), [1., 2., 50., 50., 3., 4., 5.])
        despiked = signal_clean.despike(values, 10., 2)
        assert_array_equal(np.array(despiked), [1., 2., 3., 4., 3., 4., 5.])

    def test_clipped_window_at_edges(self):
        values = np.array([100., 1., 2., 3., 4., 5., -90.])
        despiked = signal_clean.despike(values, 10., 2)
        # median of [100, 1, 2] and of [4, 5, -90]
        assert_array_equal(np.array(despiked), [2., 1., 2., 3., 4., 5., 4.])
        self.assertEqual(despiked.metadata['spike_indices'], [0, 6])

    def test_even_clipped_window(self):
        values = np.array([1., 100., 2., 3., 4., 5., 6.])
        despiked = signal_clean.despike(values, 10., 2)
        # window [1, 100, 2, 3] averages its two middle values
        assert_array_equal(np.array(despiked), [1., 2.5, 2., 3., 4., 5., 6.])

    def test_full_window_must_fit(self):
        # the clipped window of every sample would fit, the full window of 5 does not
        with self.assertRaises(InsufficientDataError):
            signal_clean.despike(np.array([0., 50., 0., 0.]), 10., 2)
        despiked = signal_clean.despike(np.array([0., 50., 0., 0., 0.]), 10., 2)
        assert_array_equal(np.array(despiked), np.zeros(5))

    def test_policies(self):
        values = np.array([0., 0., -40., 0., 30., 0., 0.])
        absolute = signal_clean.despike(values, 10., 1, policy='absolute')
        positive = signal_clean.despike(values, 10., 1, policy='positive')
        assert_array_equal(np.array(absolute), np.zeros(7))
        assert_array_equal(np.array(positive), [0., 0., -40., 0., 0., 0., 0.])
        self.assertEqual(positive.metadata['spike_indices'], [4])
        self.assertEqual(positive.metadata['policy'], 'positive')

    def test_idempotence(self):
        signal, spike_positions = make_spiky_signal()
        first = signal_clean.despike(signal, 10., 5)
        assert_array_equal(first.metadata['spike_indices'], spike_positions)
        self.assertTrue(np.all(np.abs(np.array(first)) <= 10.))
        second = signal_clean.despike(first, 10., 5)
        self.assertEqual(second.metadata['num_replaced'], 0)
        assert_array_equal(np.array(second), np.array(first))

    def test_dataset_input(self):
        signal, _ = make_spiky_signal()
        dataset = sidpy.Dataset.from_array(signal)
        dataset.title = 'drift'
        despiked = signal_clean.despike(dataset, 10., 3)
        self.assertIsInstance(despiked, sidpy.Dataset)
        self.assertEqual(despiked.source, 'drift')
        assert_allclose(np.array(dataset), signal)

    def test_invalid_parameters(self):
        with self.assertRaises(InvalidParameterError):
            signal_clean.despike(np.zeros(7), 5., 1, policy='negative')
        with self.assertRaises(InvalidParameterError):
            signal_clean.despike(np.zeros(7), 'five', 1)
        with self.assertRaises(InvalidParameterError):
            signal_clean.despike(np.zeros(7), 5., -1)
        with self.assertRaises(InsufficientDataError):
            signal_clean.despike(np.zeros(7), 5., 4)

    def test_find_spikes(self):
        assert_array_equal(signal_clean.find_spikes([1., -7., 7., 2.], 5.), [1, 2])
        assert_array_equal(signal_clean.find_spikes([1., -7., 7., 2.], 5., policy='positive'), [2])


if __name__ == '__main__':
    unittest.main()
