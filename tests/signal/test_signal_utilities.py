# -*- coding: utf-8 -*-
import unittest
import numpy as np
from numpy.testing import assert_array_equal

import sidpy

from pydenoise.signal import signal_utilities
from pydenoise.signal.signal_utilities import InvalidParameterError, InsufficientDataError


class TestConversion(unittest.TestCase):

    def test_array_to_dataset(self):
        dataset = signal_utilities.to_dataset([1, 2, 3])
        self.assertIsInstance(dataset, sidpy.Dataset)
        assert_array_equal(np.array(dataset), [1., 2., 3.])
        self.assertEqual(dataset.title, 'series')

    def test_dataset_is_kept(self):
        dataset = sidpy.Dataset.from_array(np.arange(5.))
        self.assertIs(signal_utilities.to_dataset(dataset), dataset)

    def test_invalid_series(self):
        with self.assertRaises(InvalidParameterError):
            signal_utilities.to_dataset(np.zeros((3, 3)))
        with self.assertRaises(InvalidParameterError):
            signal_utilities.to_dataset([])
        with self.assertRaises(InvalidParameterError):
            signal_utilities.to_dataset(sidpy.Dataset.from_array(np.zeros((2, 4))))
        with self.assertRaises(TypeError):
            signal_utilities.to_dataset(5.)
        with self.assertRaises(TypeError):
            signal_utilities.to_dataset(['a', 'b'])

    def test_sample_rate(self):
        dataset = sidpy.Dataset.from_array(np.zeros(100))
        self.assertIsNone(signal_utilities.get_sample_rate(dataset))
        dataset.set_dimension(0, sidpy.Dimension(np.arange(100) * 2., name='time', units='ms',
                                                 quantity='time', dimension_type='temporal'))
        self.assertAlmostEqual(signal_utilities.get_sample_rate(dataset), 500.)

    def test_check_half_width(self):
        self.assertEqual(signal_utilities.check_half_width(np.int64(3), 7), 3)
        with self.assertRaises(InvalidParameterError):
            signal_utilities.check_half_width(True)
        with self.assertRaises(InvalidParameterError):
            signal_utilities.check_half_width(2.)
        with self.assertRaises(InsufficientDataError):
            signal_utilities.check_half_width(4, 8)

    def test_make_result(self):
        dataset = sidpy.Dataset.from_array(np.arange(4.))
        dataset.title = 'raw'
        result = signal_utilities.make_result(dataset, np.ones(4), 'processed', {'key': 1}, quantity='energy')
        self.assertEqual(result.title, 'processed_raw')
        self.assertEqual(result.quantity, 'energy')
        self.assertEqual(result.metadata['key'], 1)
        assert_array_equal(np.array(dataset), np.arange(4.))


if __name__ == '__main__':
    unittest.main()
