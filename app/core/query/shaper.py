from typing import List

from app.core.schemas import ResultGrid, ResultRecord


def shape(grid: ResultGrid) -> List[ResultRecord]:
    """
    Turn the engine's row grid into one dict per row.

    The first row repeats the column names, so it is skipped.
    Missing cells (short rows) and NULLs become "".

    Example:
        column_names: ["title", "date"]
        rows: [["title", "date"], ["A", "2021-01-01"], ["B", None]]

        Output:
            [
                {"title": "A", "date": "2021-01-01"},
                {"title": "B", "date": ""}
            ]
    """
    records = []
    for row in grid.rows[1:]:
        record = {}
        # Keys come only from column_names; cells past the last column are dropped
        for index, name in enumerate(grid.column_names):
            value = row[index] if index < len(row) else None
            record[name] = value if value is not None else ""
        records.append(record)

    return records
