from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from ph_geo.gazetteer import build_index, load_gazetteer


def _write_jsonl(path: Path, rows: list[dict]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row, ensure_ascii=False) + "\n")


def flatten(source: Path, out_file: Path) -> int:
    units = load_gazetteer(source)
    # Fail here rather than at service startup
    build_index(units)
    rows = [{k: v for k, v in asdict(u).items() if v is not None} for u in units]
    _write_jsonl(out_file, rows)
    return len(rows)


def main() -> None:
    parser = argparse.ArgumentParser(description="Flatten the nested gazetteer into JSONL rows.")
    parser.add_argument("--source", default="data/ph_admin_divisions.json")
    parser.add_argument("--out", default="data/ph_admin_divisions.jsonl")
    args = parser.parse_args()

    count = flatten(Path(args.source), Path(args.out))
    print(f"Wrote {count} rows to {args.out}")


if __name__ == "__main__":
    main()
