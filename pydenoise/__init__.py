"""
The pydenoise package.

Conditioning of one dimensional time series: removal of slow trends and isolated
outliers, smoothing of high frequency noise and highlighting of transient bursts.
Every tool accepts a sidpy.Dataset or a plain array and returns a new sidpy.Dataset
whose metadata describe what was done.

Submodules
----------
.. autosummary::
    :toctree: _autosummary
"""

from . import signal

from .__version__ import version as __version__
from .__version__ import time as __time__
