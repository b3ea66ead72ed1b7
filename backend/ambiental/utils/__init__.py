"""
Núcleo de ingestão e reformatação das amostras.
"""
from ambiental.utils.normalizers import normalize_number, normalize_co2, normalize_date
from ambiental.utils.data_loader import (
    CAMPOS,
    LoadError,
    UnreadableFileError,
    FileReadError,
    EmptyWorkbookError,
    NoValidRowsError,
    LoadReport,
    validate_row,
    load_report,
    load_samples,
)
from ambiental.utils.pivot import (
    filter_samples,
    category_set,
    pivot_by_day,
    filter_and_pivot,
    samples_to_frame,
)
from ambiental.utils.export import pivot_to_frame, export_pivot_to_excel, export_filename

__all__ = [
    "normalize_number",
    "normalize_co2",
    "normalize_date",
    "CAMPOS",
    "LoadError",
    "UnreadableFileError",
    "FileReadError",
    "EmptyWorkbookError",
    "NoValidRowsError",
    "LoadReport",
    "validate_row",
    "load_report",
    "load_samples",
    "filter_samples",
    "category_set",
    "pivot_by_day",
    "filter_and_pivot",
    "samples_to_frame",
    "pivot_to_frame",
    "export_pivot_to_excel",
    "export_filename",
]
