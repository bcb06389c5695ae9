from .columns import ColumnDef, ColumnSet, attribute_accessor, mapping_accessor
from .config import ConfigError, EngineConfig, load_config
from .engine import DataTable
from .exceptions import (
    ApiError,
    DataTableError,
    DuplicateColumnError,
    InvalidPageSizeError,
    TableConfigError,
    UnknownSearchKeyError,
)
from .filtering import filter_records
from .pagination import PageWindow, paginate
from .query_state import QueryState
from .sorting import SortDirection, compare_values, sort_records
from .sources import HttpRecordSource, RecordLoader, RecordSource
from .table_printer import print_table, render_table
from .view_state import (
    DerivedView,
    EmptyState,
    ErrorState,
    LoadingState,
    PopulatedState,
    RenderState,
    RenderStatus,
    resolve_render_status,
)

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "ColumnDef",
    "ColumnSet",
    "ConfigError",
    "DataTable",
    "DataTableError",
    "DerivedView",
    "DuplicateColumnError",
    "EmptyState",
    "EngineConfig",
    "ErrorState",
    "HttpRecordSource",
    "InvalidPageSizeError",
    "LoadingState",
    "PageWindow",
    "PopulatedState",
    "QueryState",
    "RecordLoader",
    "RecordSource",
    "RenderState",
    "RenderStatus",
    "SortDirection",
    "TableConfigError",
    "UnknownSearchKeyError",
    "attribute_accessor",
    "compare_values",
    "filter_records",
    "load_config",
    "mapping_accessor",
    "paginate",
    "print_table",
    "render_table",
    "resolve_render_status",
    "sort_records",
]
