from codecs import open
import os
from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))
readme_file = os.path.join(here, 'README.md')

if os.path.exists(readme_file):
    with open(readme_file, encoding='utf-8') as f:
        long_description = f.read()
else:
    long_description = ""

with open(os.path.join(here, 'pydenoise/__version__.py')) as f:
    __version__ = f.read().split("'")[1]

requirements = ['numpy>=1.20.0',
                'scipy>=1.0',
                'sidpy>=0.12.1',
                'dask',
                'tqdm',
                ]

setup(
    name='pydenoise',
    version=__version__,
    description='Python library for detrending, smoothing, despiking and energy tracking of 1D time series',
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Scientific/Engineering :: Physics',
        'Topic :: Scientific/Engineering :: Information Analysis'],
    keywords=['signal processing', 'time series', 'denoising', 'smoothing', 'running mean', 'median filter',
              'gaussian filter', 'despiking', 'outlier removal', 'detrending', 'polynomial fit',
              'bayesian information criterion', 'BIC', 'teager-kaiser energy', 'TKEO'],
    packages=find_packages(exclude=["*.tests", "*.tests.*", "tests.*", "tests"]),
    license='MIT',
    author='pydenoise contributors',
    install_requires=requirements,
    tests_require=['pytest'],
    platforms=['Linux', 'Mac OSX', 'Windows 10/8.1/8/7'],
    test_suite='pytest',
    extras_require={'tests': ['pytest']},
    include_package_data=True,
)
