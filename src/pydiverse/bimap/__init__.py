# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from ._internal.bimap import BiMap
from ._internal.sources import iter_pairs
from .errors import *
from .errors import __all__ as __errors
from .targets import *
from .targets import __all__ as __targets
from .version import __version__

__all__ = ["__version__", "BiMap", "iter_pairs"] + __errors + __targets
