# SPDX-License-Identifier: MIT
# SPDX-FileCopyrightText: 2026 Mikkel Schubert <mikkelsch@gmail.com>
from __future__ import annotations


class Immutable:
    """Mixin for value types whose attributes are fixed at construction.

    Subclasses pass their attributes as keyword arguments to `Immutable.__init__`;
    any later assignment or deletion raises NotImplementedError.
    """

    def __init__(self, **kwargs: object) -> None:
        if hasattr(self, "__slots__"):
            raise AssertionError("Immutable does not support slots")

        for key, value in kwargs.items():
            object.__setattr__(self, key, value)

    def __setattr__(self, _name: str, _value: object) -> None:
        raise NotImplementedError("Object is immutable")

    def __delattr__(self, _name: str) -> None:
        raise NotImplementedError("Object is immutable")


class TotallyOrdered:
    """Mixin that derives all comparison operators from `__lt__`.

    Subclasses implement `__lt__`, returning NotImplemented for objects of other
    types, and should implement `__hash__` to match.
    """

    def __lt__(self, other: object) -> bool:
        raise NotImplementedError("__lt__ must be implemented!")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented

        return not (self < other or other < self)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result

        return not result

    def __le__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented

        return not other < self

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented

        return other < self

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented

        return not self < other
