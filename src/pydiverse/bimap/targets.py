# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from ._internal.targets import Dict, DictOfLists, ListOfDicts, Pandas, Polars, Target

__all__ = ["Target", "Polars", "Pandas", "Dict", "DictOfLists", "ListOfDicts"]
