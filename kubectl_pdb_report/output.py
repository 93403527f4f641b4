import csv
from collections.abc import Iterable
from typing import Any, TextIO

from kubectl_pdb_report.errors import OutputWriteError
from kubectl_pdb_report.model import ReportRow

NOT_AVAILABLE = "N/A"

HEADER = (
    "POD_NAME",
    "NAMESPACE",
    "REPLICASET",
    "PRIORITY_CLASS",
    "PRIORITY_VALUE",
    "PDB_NAME",
    "MIN_AVAILABLE",
    "MAX_UNAVAILABLE",
)

# ----------------------------
# Output formatting
# ----------------------------


def format_value(value: Any) -> str:
    if value is None:
        return NOT_AVAILABLE
    return str(value)


def format_row(row: ReportRow) -> list[str]:
    return [format_value(v) for v in row.values()]


def render_tsv(rows: Iterable[ReportRow], stream: TextIO) -> None:
    stream.write("\t".join(HEADER) + "\n")
    for row in rows:
        stream.write("\t".join(format_row(row)) + "\n")


def write_csv(rows: Iterable[ReportRow], path: str) -> None:
    """
    Create or truncate path and write the report with minimal CSV quoting.
    """
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
            writer.writerow(HEADER)
            for row in rows:
                writer.writerow(format_row(row))
    except OSError as exc:
        raise OutputWriteError(f"cannot write CSV to {path}: {exc.strerror}") from exc
