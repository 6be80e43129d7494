# src/csv_io/settings.py
"""Settings for CSV import and export."""
import codecs

from pydantic import BaseModel, field_validator


class CsvSettings(BaseModel):
    """Configuration for CSV import/export.

    Attributes:
        export_dir: Directory for exported CSV files.
        template_filename: File name of the downloadable import template.
        encoding: Text encoding for reading and writing CSV files.
    """

    export_dir: str = "data/exports"
    template_filename: str = "trade_import_template.csv"
    encoding: str = "utf-8"

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that encoding names a known codec."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v
