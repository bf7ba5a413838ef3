"""Filters assembled at runtime from (field, operator, value, logic) conditions."""

from collections.abc import Callable, Iterable, Sequence
from enum import StrEnum
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import ColumnElement, Select, and_, literal_column, or_

from .query_builder import DEFAULT_SORT, BaseFilter

__all__ = [
    "DynamicFilter",
    "FieldDescriptor",
    "FilterCondition",
    "FilterLogic",
    "FilterOperator",
    "build_condition",
    "resolve_operator",
]


class FilterOperator(StrEnum):
    """Comparison applied by a filter condition."""

    EQ = "="
    NE = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    LIKE = "LIKE"
    ILIKE = "ILIKE"
    IN = "IN"
    NOT_IN = "NOT_IN"
    IS_NULL = "IS_NULL"
    IS_NOT_NULL = "IS_NOT_NULL"


class FilterLogic(StrEnum):
    """How a condition joins the ones before it."""

    AND = "AND"
    OR = "OR"


_OPERATOR_ALIASES: dict[str, FilterOperator] = {
    "=": FilterOperator.EQ,
    "EQ": FilterOperator.EQ,
    "EQUALS": FilterOperator.EQ,
    "!=": FilterOperator.NE,
    "NE": FilterOperator.NE,
    "NOT_EQUALS": FilterOperator.NE,
    ">": FilterOperator.GT,
    "GT": FilterOperator.GT,
    "GREATER_THAN": FilterOperator.GT,
    ">=": FilterOperator.GTE,
    "GTE": FilterOperator.GTE,
    "GREATER_THAN_EQUALS": FilterOperator.GTE,
    "<": FilterOperator.LT,
    "LT": FilterOperator.LT,
    "LESS_THAN": FilterOperator.LT,
    "<=": FilterOperator.LTE,
    "LTE": FilterOperator.LTE,
    "LESS_THAN_EQUALS": FilterOperator.LTE,
    "LIKE": FilterOperator.LIKE,
    "CONTAINS": FilterOperator.LIKE,
    "ILIKE": FilterOperator.ILIKE,
    "ICONTAINS": FilterOperator.ILIKE,
    "IN": FilterOperator.IN,
    "NOT_IN": FilterOperator.NOT_IN,
    "IS_NULL": FilterOperator.IS_NULL,
    "IS_NOT_NULL": FilterOperator.IS_NOT_NULL,
}

_NULL_CHECKS = frozenset({FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL})

type _Compiler = Callable[[ColumnElement[Any], Any], ColumnElement[bool]]

_COMPILERS: dict[FilterOperator, _Compiler] = {
    FilterOperator.EQ: lambda col, value: col == value,
    FilterOperator.NE: lambda col, value: col != value,
    FilterOperator.GT: lambda col, value: col > value,
    FilterOperator.GTE: lambda col, value: col >= value,
    FilterOperator.LT: lambda col, value: col < value,
    FilterOperator.LTE: lambda col, value: col <= value,
    FilterOperator.LIKE: lambda col, value: col.like(value),
    FilterOperator.ILIKE: lambda col, value: col.ilike(value),
    FilterOperator.IN: lambda col, value: col.in_(_as_list(value)),
    FilterOperator.NOT_IN: lambda col, value: col.not_in(_as_list(value)),
    FilterOperator.IS_NULL: lambda col, _: col.is_(None),
    FilterOperator.IS_NOT_NULL: lambda col, _: col.is_not(None),
}


def resolve_operator(operator: str) -> FilterOperator:
    """Map an operator or one of its aliases to a :class:`FilterOperator`.

    Matching is case-insensitive; unknown operators fall back to equality.
    """
    return _OPERATOR_ALIASES.get(operator.strip().upper(), FilterOperator.EQ)


class FieldDescriptor(BaseModel):
    """A filterable field of a model.

    Attributes:
        name: Attribute name on the model.
        column: Storage column name, defaults to ``name``.
        external: Name used by API clients, for example the JSON key.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    column: str | None = None
    external: str | None = None

    @property
    def column_name(self) -> str:
        return self.column or self.name

    def matches(self, field: str) -> bool:
        """Match by exact name, case-insensitive name, column or external alias."""
        return (
            field == self.name
            or field.lower() == self.name.lower()
            or field == self.column
            or field == self.external
        )


class FilterCondition(BaseModel):
    """A single ``field operator value`` condition."""

    field: str = ""
    operator: str = FilterOperator.EQ
    value: Any = None
    logic: str = FilterLogic.AND

    @property
    def is_or(self) -> bool:
        return self.logic.strip().upper() == FilterLogic.OR


def build_condition(column: str, condition: FilterCondition) -> ColumnElement[bool]:
    """Compile a condition against a storage column.

    Args:
        column: Already validated column name.
        condition: The condition providing operator and value.

    Returns:
        SQLAlchemy boolean expression with the value bound as a parameter.
    """
    operator = resolve_operator(condition.operator)
    return _COMPILERS[operator](literal_column(column), condition.value)


class DynamicFilter(BaseFilter):
    """Filter whose WHERE clause is built from a list of conditions.

    Condition fields are checked against ``field_descriptors`` before anything
    reaches SQL; unknown fields are skipped. The first applied condition is
    always combined with AND so the clause never starts with OR, later ones use
    OR only when explicitly tagged.
    """

    filters: list[FilterCondition] = Field(default_factory=list)
    table_name: str = Field(default="", exclude=True)
    field_descriptors: Sequence[FieldDescriptor] = Field(
        default_factory=tuple, exclude=True
    )
    search_fields: list[str] = Field(default_factory=list, exclude=True)
    default_sort: str = Field(default=DEFAULT_SORT, exclude=True)
    allowed_includes: frozenset[str] | None = Field(default=None, exclude=True)

    def apply_filters(self, stmt: Select[Any]) -> Select[Any]:
        """Narrow ``stmt`` with all applicable conditions as one WHERE group.

        Conditions between two OR-tagged ones form an AND run, so
        ``A, OR B, AND C`` reads ``A OR (B AND C)`` as in plain SQL.
        """
        runs: list[list[ColumnElement[bool]]] = []

        for condition in self.filters:
            predicate = self._compile(condition)
            if predicate is None:
                continue
            if runs and not condition.is_or:
                runs[-1].append(predicate)
            else:
                runs.append([predicate])

        if not runs:
            return stmt

        groups = [run[0] if len(run) == 1 else and_(*run) for run in runs]
        return stmt.where(groups[0] if len(groups) == 1 else or_(*groups))

    def _compile(self, condition: FilterCondition) -> ColumnElement[bool] | None:
        if not condition.field:
            return None
        operator = resolve_operator(condition.operator)
        if condition.value is None and operator not in _NULL_CHECKS:
            return None

        descriptor = self.find_field(condition.field)
        if descriptor is None:
            logger.debug("Filter field rejected", field=condition.field)
            return None

        return build_condition(descriptor.column_name, condition)

    def find_field(self, field: str) -> FieldDescriptor | None:
        """Return the descriptor a client-supplied field name refers to."""
        return next((d for d in self.field_descriptors if d.matches(field)), None)

    def is_valid_field(self, field: str) -> bool:
        return self.find_field(field) is not None

    def get_table_name(self) -> str:
        return self.table_name

    def get_search_fields(self) -> list[str]:
        return self.search_fields

    def get_default_sort(self) -> str:
        return self.default_sort or DEFAULT_SORT

    def get_allowed_includes(self) -> frozenset[str] | None:
        return self.allowed_includes


def _as_list(value: Any) -> list[Any]:  # noqa: ANN401
    if isinstance(value, str | bytes) or not isinstance(value, Iterable):
        return [value]
    return list(value)
