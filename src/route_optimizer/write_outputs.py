"""
Write route reports to an Excel workbook.
"""
from pathlib import Path

import pandas as pd

from .utils import setup_logging

logger = setup_logging()

SHEET_ORDER = ["summary", "distances", "window_warnings", "locations"]
MAX_COLUMN_WIDTH = 50


def _column_width(df: pd.DataFrame, col: str) -> int:
    longest = df[col].astype(str).map(len).max() if len(df) > 0 else 0
    return min(max(longest, len(col)) + 2, MAX_COLUMN_WIDTH)


def write_outputs(reports: dict[str, pd.DataFrame], output_path: str) -> None:
    """
    Write reports as sheets, known sheets first in SHEET_ORDER.

    Distances are written with two decimals; unreachable rows keep an
    empty distance cell.
    """
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    ordered = [name for name in SHEET_ORDER if name in reports]
    ordered += [name for name in reports if name not in SHEET_ORDER]

    with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
        distance_format = writer.book.add_format({"num_format": "#,##0.00"})

        for sheet_name in ordered:
            df = reports[sheet_name]
            df.to_excel(writer, sheet_name=sheet_name, index=False)

            worksheet = writer.sheets[sheet_name]
            worksheet.freeze_panes(1, 0)
            for i, col in enumerate(df.columns):
                cell_format = distance_format if "distance" in col else None
                worksheet.set_column(i, i, _column_width(df, col), cell_format)

    logger.info(f"Wrote {len(ordered)} sheet(s) to {output_path}")
