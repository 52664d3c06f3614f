import json
import os
from typing import Any, Dict, List, Optional

import pandas as pd

GRID_KEYS = ("grid", "board", "rows", "solution")


def load_boards(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads stored boards from a file. Handles .parquet, .csv, .json and .jsonl.
    Returns a list of records shaped like {"id": str, "grid": [row, ...]}.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _split_grid(value: Any) -> Optional[List[str]]:
        if isinstance(value, str):
            sep = "\n" if "\n" in value else "/"
            return value.split(sep)
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        if hasattr(value, "tolist"):
            return [str(v) for v in value.tolist()]
        return None

    def _normalize_record(record: Dict[str, Any], position: int) -> Dict[str, Any]:
        grid = None
        for key in GRID_KEYS:
            if key in record and record[key] is not None:
                grid = _split_grid(record[key])
                if grid is not None:
                    break
        record_id = record.get("id")
        if record_id is None or (isinstance(record_id, float) and pd.isna(record_id)):
            record_id = f"board-{position}"
        return {"id": str(record_id), "grid": grid}

    def _from_payload(payload: Any) -> List[Dict[str, Any]]:
        if isinstance(payload, list):
            # A bare list of row strings is a single board.
            if payload and all(isinstance(p, str) for p in payload):
                return [_normalize_record({"grid": payload}, 0)]
            return [_normalize_record(p, i) for i, p in enumerate(payload) if isinstance(p, dict)]
        if isinstance(payload, dict):
            return [_normalize_record(payload, 0)]
        return []

    def _read_lines(f) -> List[Dict[str, Any]]:
        data = []
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

    # Case 1: Parquet / CSV (tabular)
    if file_path.endswith(".parquet") or file_path.endswith(".csv"):
        try:
            if file_path.endswith(".parquet"):
                df = pd.read_parquet(file_path)
            else:
                # Keep spaces: a blank cell is a space glyph.
                df = pd.read_csv(file_path, dtype=str, keep_default_na=False, skipinitialspace=False)
        except Exception as e:
            print(f"Error reading {file_path}: {e}")
            return []
        records = df.to_dict(orient="records")
        return [_normalize_record(r, i) for i, r in enumerate(records)]

    # Case 2: JSON File (array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            return _from_payload(payload)
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            with open(file_path, "r", encoding="utf-8") as f:
                return _read_lines(f)

    # Case 3: JSONL File
    with open(file_path, "r", encoding="utf-8") as f:
        return _read_lines(f)
