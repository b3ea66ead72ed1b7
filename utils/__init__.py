"""
Módulo de utilitários para o Dashboard Ambiental.
"""
from utils.data_loader import (
    get_dataset_session,
    handle_upload,
    load_cached,
    describe_error,
    upload_key,
)
from utils.chart_helpers import (
    PALETTES,
    THEMES,
    CHART_TYPES,
    ASPECT_RATIOS,
    UNITS,
    assign_colors,
    build_chart,
    image_export_config,
)

__all__ = [
    "get_dataset_session",
    "handle_upload",
    "load_cached",
    "describe_error",
    "upload_key",
    "PALETTES",
    "THEMES",
    "CHART_TYPES",
    "ASPECT_RATIOS",
    "UNITS",
    "assign_colors",
    "build_chart",
    "image_export_config",
]
