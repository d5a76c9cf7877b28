"""Application export – CSV/JSON search exports and the performance report."""
from logscope.application.export.columns import LOG_COLUMNS, ColumnDef
from logscope.application.export.csv_export import CsvExporter
from logscope.application.export.report import render_performance_report
from logscope.application.export.service import LogExportService

__all__ = [
    "LOG_COLUMNS",
    "ColumnDef",
    "CsvExporter",
    "LogExportService",
    "render_performance_report",
]
