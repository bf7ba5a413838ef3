"""Dynamic filter for post listings."""

from collections.abc import Mapping

from blog.pagination import DynamicFilter, FieldDescriptor, FilterCondition

from .post_status import PostStatus

__all__ = ["POST_FIELDS", "build_post_filter"]


POST_FIELDS: tuple[FieldDescriptor, ...] = (
    FieldDescriptor(name="id", column="posts.id"),
    FieldDescriptor(name="title", column="posts.title"),
    FieldDescriptor(name="status", column="posts.status"),
    FieldDescriptor(name="author_id", column="posts.author_id", external="authorId"),
    FieldDescriptor(name="created_at", column="posts.created_at", external="createdAt"),
)

_SEARCH_FIELDS = ["posts.title", "posts.body"]
_DEFAULT_SORT = "posts.id asc"
_ALLOWED_INCLUDES = frozenset({"author"})


def build_post_filter(
    params: Mapping[str, str],
    *,
    status: PostStatus | None = None,
    author_id: int | None = None,
) -> DynamicFilter:
    """Bind a post listing filter to the request's query parameters.

    Args:
        params: Raw query string, read for pagination and ``includes``.
        status: Only list posts in this state.
        author_id: Only list posts written by this user.

    Returns:
        DynamicFilter: Filter scoped to the ``posts`` table.
    """
    post_filter = DynamicFilter(
        table_name="posts",
        field_descriptors=POST_FIELDS,
        search_fields=_SEARCH_FIELDS,
        default_sort=_DEFAULT_SORT,
        allowed_includes=_ALLOWED_INCLUDES,
    ).bind(params)

    if status is not None:
        post_filter.filters.append(FilterCondition(field="status", value=status.value))
    if author_id is not None:
        post_filter.filters.append(FilterCondition(field="author_id", value=author_id))

    return post_filter
