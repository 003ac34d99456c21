import json
import os
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from src.utils.io import load_json, read_text

TEXT_SUFFIXES = (".grid", ".lg")
# Picked up when scanning a directory; any other file must be named explicitly.
PUZZLE_SUFFIXES = (".json", ".jsonl", ".parquet") + TEXT_SUFFIXES


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzle records from a file. Handles plain puzzle text, .json, .jsonl
    and .parquet. Returns a list of dictionaries with `id` and `puzzle` keys.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = Path(file_path).stem

    def _is_nonempty_str(value: Any) -> bool:
        return isinstance(value, str) and value.strip() != ""

    def _normalize_record(record: Dict[str, Any], position: int) -> Dict[str, Any]:
        if not _is_nonempty_str(record.get("puzzle")):
            for key in ("puzzle_text", "text", "input"):
                if _is_nonempty_str(record.get(key)):
                    record["puzzle"] = record[key]
                    break
        if record.get("id") is None:
            record["id"] = f"{stem}-{position}"
        return record

    # Case 1: Parquet File (Binary)
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        records = df.to_dict(orient="records")
        return [_normalize_record(r, i) for i, r in enumerate(records)]

    # Case 2: JSON File (array or object)
    if file_path.endswith(".json"):
        try:
            payload = load_json(Path(file_path))
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL.
            pass
        else:
            if isinstance(payload, list):
                return [_normalize_record(p, i) for i, p in enumerate(payload) if isinstance(p, dict)]
            if isinstance(payload, dict):
                return [_normalize_record(payload, 0)]
            return []

    # Case 3: JSONL File (one record per line)
    if file_path.endswith((".json", ".jsonl")):
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

    # Case 4: Plain puzzle text
    return [{"id": stem, "puzzle": read_text(Path(file_path))}]
