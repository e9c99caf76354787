# -*- coding: utf-8 -*-
from importlib.metadata import PackageNotFoundError, version as _version

try:
    version = _version("pandas_ta_trendflex")
except PackageNotFoundError:
    version = "0.0.0"

from pandas_ta_trendflex.stateful import *
from pandas_ta_trendflex.stateful import __all__ as stateful_all

__all__ = [
    "version",
]

__all__ += stateful_all
