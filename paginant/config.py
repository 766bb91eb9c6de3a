from dataclasses import dataclass

DEFAULT_PER_PAGE = 20


@dataclass(frozen=True)
class PaginationConfig:
    """
    Immutable options of a pagination resolver.
    Created once and shared by every call the resolver serves.

    Attributes:
        find_operation_name: Registry name of the operation returning records
        count_operation_name: Registry name of the operation returning the total
        default_per_page: Page size used when the caller does not pass perPage
        name: Name under which the pagination resolver is exposed
        cursor_page_info: Whether pageInfo is computed when the cursor-style
            `first` argument replaces page/perPage
    """

    find_operation_name: str = ""
    count_operation_name: str = ""
    default_per_page: int = DEFAULT_PER_PAGE
    name: str = "pagination"
    cursor_page_info: bool = False
