"""Indeterminate boolean variables and the registry that issues them.

A variable is nothing more than a small integer handle. The handle doubles
as the variable's bit position inside a Product mask, so handles are issued
in creation order, never reused, and bounded by MAX_VARIABLES.

The registry owns the id counter (there is no process-wide state) and keeps
the human readable name and the opaque user id of every variable it issued:

    registry = VariableRegistry()
    A = registry.create_variable("A")
    B = registry.create_variable("B", user_id=42)
    registry.lookup(B)          # VariableData(name='B', user_id=42)
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NewType

if TYPE_CHECKING:
    from .product import Product

VariableId = NewType("VariableId", int)

# One bit of the 64-bit mask is reserved so that the "every slot present"
# pattern stays free to encode Zero.
MASK_SIZE = 64
MAX_VARIABLES = MASK_SIZE - 1


@dataclass(frozen=True)
class VariableData:
    """Metadata of a variable; the name does not have to be unique."""

    name: str
    user_id: int = 0

    def __str__(self) -> str:
        return f"{{{self.user_id}, {self.name}}}"


@dataclass(frozen=True, order=True)
class Variable:
    """Handle of an indeterminate boolean variable.

    Ordering follows creation order and only serves as a tie-break for
    canonical term ordering.
    """

    id: VariableId

    def __invert__(self) -> Product:
        from .product import Product

        return Product.from_variable(self, negated=True)

    def __mul__(self, other: object) -> Product:
        from .product import Product

        return Product.from_variable(self) * other

    def __rmul__(self, other: object) -> Product:
        return self.__mul__(other)


@dataclass
class VariableRegistry:
    """Issues variable handles and stores their metadata.

    Creation is guarded by a lock so handles stay unique when variables are
    created from several threads.
    """

    _variables: dict[VariableId, VariableData] = field(default_factory=dict)
    _next_id: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def create_variable(self, name: str, user_id: int = 0) -> Variable:
        with self._lock:
            if self._next_id >= MAX_VARIABLES:
                raise ValueError(
                    f"Cannot create variable {name!r}: at most {MAX_VARIABLES} variables are supported"
                )
            vid = VariableId(self._next_id)
            self._next_id += 1
            self._variables[vid] = VariableData(name=name, user_id=user_id)
        return Variable(vid)

    def lookup(self, handle: Variable | int) -> VariableData:
        vid = handle.id if isinstance(handle, Variable) else handle
        try:
            return self._variables[VariableId(vid)]
        except KeyError:
            raise KeyError(f"Variable id {vid} was not created by this registry") from None

    def name(self, handle: Variable | int) -> str:
        return self.lookup(handle).name

    def __contains__(self, handle: object) -> bool:
        if isinstance(handle, Variable):
            return handle.id in self._variables
        return handle in self._variables

    def __len__(self) -> int:
        return len(self._variables)

    def __iter__(self) -> Iterator[Variable]:
        return (Variable(vid) for vid in sorted(self._variables))
