"""Compound filters: several clauses combined under one boolean operator."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator

from .errors import PreconditionError


class BoolClause(str, Enum):
    """Operators a compound filter can combine its clauses with."""

    and_ = "and"
    or_ = "or"


def is_operator_marker(item: Any) -> bool:
    return isinstance(item, str) and item in {c.value for c in BoolClause}


class FilterGroup:
    """Ordered, heterogeneous clause list under one operator.

    Items may be ``FilterNode`` values, other groups or any JSON-ready value.
    With one item the group renders as that item; with two or more it
    renders as ``{operator: [items...]}``.
    """

    kind = "filter_group"

    def __init__(self, operator: BoolClause | str = BoolClause.and_) -> None:
        try:
            self.operator = BoolClause(operator)
        except ValueError:
            raise PreconditionError(
                f"Unsupported boolean operator {operator!r}; expected one of "
                f"{[c.value for c in BoolClause]}"
            ) from None
        self.items: list[Any] = []

    def add(self, *items: Any) -> FilterGroup:
        """Append ``items``; a leading operator marker sets the operator.

        The marker is only recognised when more items follow it.
        """
        pending = list(items)
        if len(pending) > 1 and is_operator_marker(pending[0]):
            self.operator = BoolClause(pending.pop(0))
        self.items.extend(pending)
        return self

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __repr__(self) -> str:
        return f"FilterGroup({self.operator.value!r}, {self.items!r})"


def compound_filter(*items: Any) -> FilterGroup:
    """Build a FilterGroup.

        compound_filter("or", FilterNode().term("user", "kimchy"), range_filter()...)
    """
    return FilterGroup().add(*items)
