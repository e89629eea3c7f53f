# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from .assertion import assert_bijection, assert_pairs

__all__ = [
    "assert_bijection",
    "assert_pairs",
]
