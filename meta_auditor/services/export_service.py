"""
Export Service

Serializes the audit report to CSV and to the JSON payload embedded in the
report page.

CSV contract:
    - header row then one row per record, rows separated by CRLF
    - every field wrapped in double quotes, inner quotes doubled
    - HTML entities decoded, each CR/LF sequence replaced by one space,
      so no quoted field ever contains a raw line break
"""

import csv
import html
import json
import logging
import re
from collections.abc import Iterable
from io import StringIO

from meta_auditor.schemas.audit import ContentRecord

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "seo-meta-audit.csv"

CSV_HEADER = ["ID", "Title", "Type", "Meta Title", "Meta Description", "Keyphrase", "Modified"]

ROW_SEPARATOR = "\r\n"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def csv_field(value: object) -> str:
    """
    Prepare a value for a CSV cell.

    Quoting is left to the CSV writer; this only decodes entities and
    flattens line breaks.

    Example:
        >>> csv_field('He said "hi"\\nthere')
        'He said "hi" there'
    """
    text = html.unescape(str(value) if value is not None else "")
    return _LINE_BREAK.sub(" ", text)


def record_row(record: ContentRecord) -> list[str]:
    return [
        csv_field(record.id),
        csv_field(record.title),
        csv_field(record.type),
        csv_field(record.meta_title),
        csv_field(record.meta_desc),
        csv_field(record.focus_kw),
        csv_field(record.modified),
    ]


class ExportService:
    """Service for exporting audit reports"""

    @staticmethod
    def build_csv(records: Iterable[ContentRecord]) -> str:
        """
        Export records as CSV.

        Args:
            records: Filtered and sorted records (never a single page)

        Returns:
            CSV text without a trailing line break
        """
        output = StringIO()
        writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator=ROW_SEPARATOR)

        writer.writerow(CSV_HEADER)
        count = 0
        for record in records:
            writer.writerow(record_row(record))
            count += 1

        logger.info(f"CSV export built with {count} rows")
        return output.getvalue().removesuffix(ROW_SEPARATOR)

    @staticmethod
    def build_json_payload(records: Iterable[ContentRecord]) -> str:
        """JSON array of records for embedding in the report page."""
        payload = json.dumps([r.model_dump() for r in records], ensure_ascii=False)
        # Keep the payload inert inside a <script> element
        return payload.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


# Singleton instance
export_service = ExportService()
