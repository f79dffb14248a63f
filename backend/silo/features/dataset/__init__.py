"""Dataset feature module — loaded rows, application context and storage."""

from .rows import Dataset, UnknownColumnError, collect_columns
from .context import AppContext, DatasetSummary
from .xlsx_reader import WorkbookData, WorkbookError, read_workbook, find_sheet_name

__all__ = [
    "Dataset",
    "UnknownColumnError",
    "collect_columns",
    "AppContext",
    "DatasetSummary",
    "WorkbookData",
    "WorkbookError",
    "read_workbook",
    "find_sheet_name",
]
