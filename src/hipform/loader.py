import pathlib

import pandas as pd

# Columns that need renaming → target column names
RENAME_MAP = {
    "rechts": "right",
    "r": "right",
    "links": "left",
    "l": "left",
    "param": "parameter",
    "name": "parameter",
}

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def _normalize_headers(df: pd.DataFrame) -> pd.DataFrame:
    # CLEAN & NORMALIZE headers:
    df.columns = (
        df.columns.astype(str)
        .str.strip()
        .str.replace(r"\s*\(.*?\)", "", regex=True)  # drop any "(…)"
        .str.replace(r"\s+", "_", regex=True)  # spaces → underscore
        .str.replace(":", "", regex=False)  # drop colons
        .str.lower()
    )

    # apply specific renames (e.g. "rechts" → "right")
    return df.rename(
        columns={
            orig: target
            for orig, target in RENAME_MAP.items()
            if orig in df.columns
        }
    )


def load_sheets_as_tables(workbook_path: str) -> dict[str, pd.DataFrame]:
    """
    Read each worksheet (or a single CSV file) into a DataFrame:
      - first row = header
      - every cell read as text, blanks stay empty strings
      - normalize all headers to snake_case lowercase
      - apply renames from RENAME_MAP
    """
    path = pathlib.Path(workbook_path)
    tables: dict[str, pd.DataFrame] = {}

    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path, header=0, dtype=str, keep_default_na=False)
        tables[path.stem] = _normalize_headers(df)
        return tables

    if path.suffix.lower() not in EXCEL_SUFFIXES:
        raise ValueError(f"Unsupported workbook type {path.suffix!r}; use .xlsx or .csv")

    excel = pd.ExcelFile(path, engine="openpyxl")
    for sheet_name in excel.sheet_names:
        df = pd.read_excel(
            excel, sheet_name=sheet_name, header=0, dtype=str, keep_default_na=False, engine="openpyxl"
        )
        tables[sheet_name] = _normalize_headers(df)

    return tables
