"""Application export – CsvExporter."""
from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from logscope.application.export.columns import LOG_COLUMNS, ColumnDef
from logscope.application.search.result import LogRecordView

__all__ = ["CsvExporter"]


class CsvExporter:
    """Writes record views into CSV (in-memory)."""

    def __init__(
        self,
        columns: Sequence[ColumnDef] = LOG_COLUMNS,
        delimiter: str = ",",
        quoting: int = csv.QUOTE_MINIMAL,
        *,
        bom: bool = False,
    ) -> None:
        self._columns = tuple(columns)
        self._delimiter = delimiter
        self._quoting = quoting
        self._bom = bom

    def export(self, views: Iterable[LogRecordView]) -> bytes:
        """Return the complete CSV content as bytes (UTF-8, optional BOM)."""
        buf = io.StringIO()
        if self._bom:
            buf.write("\ufeff")

        writer = csv.writer(buf, delimiter=self._delimiter, quoting=self._quoting, lineterminator="\n")
        writer.writerow([col.header for col in self._columns])
        for view in views:
            writer.writerow([col.read(view) for col in self._columns])

        return buf.getvalue().encode("utf-8")
