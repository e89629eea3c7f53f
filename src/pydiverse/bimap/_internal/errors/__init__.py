# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import typing
from typing import Any


class BiMapError(Exception):
    """
    Base class of all errors raised by a BiMap.
    """


class NoSuchKeyError(BiMapError, KeyError):
    """
    Raised by explicit assertions when a key is not present.
    """

    def __init__(self, key: Any):
        super().__init__(f"no such key: {key!r}")
        self.key = key

    # KeyError.__str__ would wrap the message in quotes
    __str__ = Exception.__str__


class NoSuchValueError(BiMapError, KeyError):
    """
    Raised by explicit assertions when a value is not present.
    """

    def __init__(self, value: Any):
        super().__init__(f"no such value: {value!r}")
        self.value = value

    __str__ = Exception.__str__


class ColumnNotFoundError(BiMapError, KeyError):
    def __init__(self, column: str, available: typing.Iterable[str]):
        super().__init__(
            f"column `{column}` does not exist in the data frame\n"
            "hint: available columns are "
            + ", ".join(f"`{name}`" for name in available)
        )
        self.column = column

    __str__ = Exception.__str__


class ConflictError(BiMapError):
    """
    Signals that a strict insertion collides with a stored pair.
    """


class KeyConflictError(ConflictError):
    def __init__(self, key: Any):
        super().__init__(
            f"key conflict: {key!r} is already present\n"
            "hint: use `set` to replace the existing pair instead"
        )
        self.key = key


class ValueConflictError(ConflictError):
    def __init__(self, value: Any):
        super().__init__(
            f"value conflict: {value!r} is already present\n"
            "hint: use `set` to replace the existing pair instead"
        )
        self.value = value


# Our error message format: The first line is in lowercase letters, without a dot at
# the end. More detail is given in the following lines in normal english sentences.
# To give advice to to the user, we write `hint: ...`.


def check_arg_type(
    expected_type: type,
    fn: str,
    param_name: str,
    arg: Any,
):
    if not isinstance(arg, expected_type):
        type_args = typing.get_args(expected_type)
        expected_type_str = (
            expected_type.__name__
            if not type_args
            else " | ".join(t.__name__ for t in type_args)
        )
        raise TypeError(
            f"argument for parameter `{param_name}` of `{fn}` must have type "
            f"`{expected_type_str}`, found `{type(arg).__name__}` instead"
        )

