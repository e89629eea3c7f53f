# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from .operations import ReferenceBiMap, random_operation

__all__ = ["ReferenceBiMap", "random_operation"]
