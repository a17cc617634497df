import json
import os
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

TEXT_SUFFIXES = (".txt", ".bin", ".binero")
TABLE_SUFFIXES = (".csv", ".parquet")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles plain text grids, .json, .jsonl,
    .csv and .parquet formats.
    Returns a list of records shaped like {"id": ..., "puzzle": ...}, where
    "puzzle" is grid text or a list of rows.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = Path(file_path).stem

    def _normalize_record(record: Dict[str, Any], index: int) -> Dict[str, Any]:
        if "puzzle" not in record:
            for key in ("grid", "rows", "text"):
                if key in record:
                    record["puzzle"] = record.pop(key)
                    break
        puzzle = record.get("puzzle")
        if hasattr(puzzle, "tolist"):
            puzzle = puzzle.tolist()
        if isinstance(puzzle, list):
            # Rows may arrive as strings ("1 1 - 0") or as lists of cells.
            puzzle = "\n".join(
                row if isinstance(row, str) else " ".join("-" if v is None else str(v) for v in row)
                for row in puzzle
            )
        elif isinstance(puzzle, str) and "\n" not in puzzle:
            # Single-line form used in CSV cells: rows separated by "/".
            puzzle = puzzle.replace("/", "\n")
        record["puzzle"] = puzzle
        pid = record.get("id")
        if pid is None or pid == "" or (isinstance(pid, float) and pd.isna(pid)):
            record["id"] = f"{stem}-{index}"
        return record

    # Case 1: plain text grid, one puzzle per file
    if file_path.endswith(TEXT_SUFFIXES):
        with open(file_path, "r", encoding="utf-8") as f:
            return [{"id": stem, "puzzle": f.read()}]

    # Case 2: tabular files (one puzzle per row)
    if file_path.endswith(TABLE_SUFFIXES):
        if file_path.endswith(".parquet"):
            df = pd.read_parquet(file_path)
        else:
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        records = df.to_dict(orient="records")
        return [_normalize_record(r, i) for i, r in enumerate(records)]

    # Case 3: JSON file (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return [_normalize_record(p, i) for i, p in enumerate(payload) if isinstance(p, dict)]
            if isinstance(payload, dict):
                return [_normalize_record(payload, 0)]
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            pass

    # Case 4: JSONL file
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(_normalize_record(obj, len(data)))
    return data
