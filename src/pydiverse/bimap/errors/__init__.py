# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from .._internal.errors import (
    BiMapError,
    ColumnNotFoundError,
    ConflictError,
    KeyConflictError,
    NoSuchKeyError,
    NoSuchValueError,
    ValueConflictError,
)

__all__ = [
    "BiMapError",
    "NoSuchKeyError",
    "NoSuchValueError",
    "ConflictError",
    "KeyConflictError",
    "ValueConflictError",
    "ColumnNotFoundError",
]
