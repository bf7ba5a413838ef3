"""Pagination module for paginated, searchable and sortable listings.

Key Components:
- Schemas: Pagination request binding and the paginated response envelope
- Validators: Identifier checks for sort columns and include paths
- Query builders: Simple, chainable and dynamic filters scoping a listing
- Executor: Count and page queries with search, sort and eager loading
- Dialect: Backend specific search operators
"""

from .dialect import DatabaseDialect, get_search_operator
from .dynamic_filter import (
    DynamicFilter,
    FieldDescriptor,
    FilterCondition,
    FilterLogic,
    FilterOperator,
    build_condition,
    resolve_operator,
)
from .exceptions import (
    CountQueryError,
    FetchQueryError,
    QueryConfigurationError,
    QueryExecutionError,
)
from .query import (
    PaginatedQueryOptions,
    apply_auto_search,
    build_count_query,
    build_data_query,
    paginated_query,
    paginated_query_with_includable,
    paginated_query_with_includable_and_options,
    paginated_query_with_options,
)
from .query_builder import (
    DEFAULT_SORT,
    AllowedIncludesProvider,
    BaseFilter,
    ChainableQueryBuilder,
    FilterFunc,
    IncludableQueryBuilder,
    QueryBuilder,
    QueryLayerBuilder,
    SessionProvider,
    SimpleQueryBuilder,
    parse_includes,
)
from .schemas import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    PaginatedResponse,
    PaginationParams,
    PaginationRequest,
    PaginationResponse,
    bind_pagination,
    calculate_pagination,
    pagination_params,
)
from .validators import (
    is_valid_identifier,
    is_valid_include,
    is_valid_sort_field,
    validate_includes,
)

__all__ = [
    "DEFAULT_PER_PAGE",
    "DEFAULT_SORT",
    "MAX_PER_PAGE",
    "AllowedIncludesProvider",
    "BaseFilter",
    "ChainableQueryBuilder",
    "CountQueryError",
    "DatabaseDialect",
    "DynamicFilter",
    "FetchQueryError",
    "FieldDescriptor",
    "FilterCondition",
    "FilterFunc",
    "FilterLogic",
    "FilterOperator",
    "IncludableQueryBuilder",
    "PaginatedQueryOptions",
    "PaginatedResponse",
    "PaginationParams",
    "PaginationRequest",
    "PaginationResponse",
    "QueryBuilder",
    "QueryConfigurationError",
    "QueryExecutionError",
    "QueryLayerBuilder",
    "SessionProvider",
    "SimpleQueryBuilder",
    "apply_auto_search",
    "build_condition",
    "build_count_query",
    "build_data_query",
    "bind_pagination",
    "calculate_pagination",
    "get_search_operator",
    "is_valid_identifier",
    "is_valid_include",
    "is_valid_sort_field",
    "paginated_query",
    "paginated_query_with_includable",
    "paginated_query_with_includable_and_options",
    "paginated_query_with_options",
    "pagination_params",
    "parse_includes",
    "resolve_operator",
    "validate_includes",
]
