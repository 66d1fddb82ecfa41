# ==============================================
# DatasetLoader
# ==============================================
#
# PURPOSE:
#   Turn a CSV file (header row + data rows) into the list of
#   records the analysis topic works on.
#
# RULES:
# ------
#   1. The header row defines the column names.
#   2. Every cell is kept as text; numbers are recognised later
#      by ValueParser, never at load time.
#   3. Blank lines are skipped.
#   4. Rows without any non-empty column name are dropped.
#   5. Cells missing at the end of a short row become None.
#   6. A leading UTF-8 BOM is removed from the header.
#
# ==============================================

import csv
import io
from pathlib import Path
from typing import Dict, List, Optional, Union

from retention_advisor.errors import DatasetLoadError


class DatasetLoader:
    """Loads CSV datasets into lists of records."""

    def __init__(self, encoding: str = "utf-8-sig"):
        """
        Args:
            encoding: File encoding. The default strips a UTF-8 BOM.
        """
        self.encoding = encoding

    def load_csv(self, path: Union[str, Path]) -> List[Dict[str, Optional[str]]]:
        """
        Read a CSV file from disk.

        Args:
            path: Path of the CSV file

        Returns:
            List of records (column name -> text value)

        Raises:
            DatasetLoadError: If the file cannot be read or has no header
        """
        try:
            text = Path(path).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise DatasetLoadError(f"Unable to read dataset {path}: {e}") from e

        return self.parse_csv(text)

    def parse_csv(self, text: str) -> List[Dict[str, Optional[str]]]:
        """
        Parse CSV text into records.

        Args:
            text: Full CSV content including the header row

        Returns:
            List of records (column name -> text value)
        """
        if text.startswith("\ufeff"):
            text = text[1:]

        reader = csv.reader(io.StringIO(text))
        header = None
        for row in reader:
            if self._is_blank(row):
                continue
            header = row
            break

        if header is None:
            raise DatasetLoadError("Dataset has no header row.")

        records = []
        for row in reader:
            if self._is_blank(row):
                continue
            record = self._build_record(header, row)
            if record:
                records.append(record)

        return records

    def _build_record(self, header: List[str], row: List[str]) -> Dict[str, Optional[str]]:
        record: Dict[str, Optional[str]] = {}
        for position, column in enumerate(header):
            if not column:
                continue
            record[column] = row[position] if position < len(row) else None
        return record

    @staticmethod
    def _is_blank(row: List[str]) -> bool:
        return not row or all(cell == "" for cell in row)
