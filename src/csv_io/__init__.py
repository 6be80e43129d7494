"""CSV import, export and template generation for trades."""

from .exporter import TradeExporter, export_filename, export_trades_csv
from .importer import (
    ImportFailure,
    ImportResult,
    ImportSummary,
    TradeImporter,
    TradeImportError,
    describe_import_error,
    import_trades,
    process_csv_row,
    process_field,
    read_csv_rows,
    summarize_import,
)
from .settings import CsvSettings
from .template import TEMPLATE_HEADERS, build_template_csv

__all__ = [
    "CsvSettings",
    "ImportFailure",
    "ImportResult",
    "ImportSummary",
    "TEMPLATE_HEADERS",
    "TradeExporter",
    "TradeImportError",
    "TradeImporter",
    "build_template_csv",
    "describe_import_error",
    "export_filename",
    "export_trades_csv",
    "import_trades",
    "process_csv_row",
    "process_field",
    "read_csv_rows",
    "summarize_import",
]
