# tools/generate_demo_workbook.py
from __future__ import annotations

import random
from datetime import date
from pathlib import Path
from typing import Any, List

from openpyxl import Workbook


def month_multiplier(m: int) -> float:
    """
    Simple seasonality curve.
    - Q4 stronger
    - summer a bit softer
    """
    if m in (11, 12):
        return 1.25
    if m in (1, 2):
        return 0.95
    if m in (6, 7):
        return 0.90
    return 1.00


def month_cell(rng: random.Random, year: int, m: int) -> Any:
    """
    Mix the month formats real exports use: names, abbreviations, numbers,
    date cells and date strings.
    """
    style = rng.choice(["name", "abbr", "number", "date", "date_text"])
    d = date(year, m, 1)
    if style == "name":
        return d.strftime("%B")
    if style == "abbr":
        return d.strftime("%b")
    if style == "number":
        return m
    if style == "date":
        return d
    return d.isoformat()


def amount_cell(rng: random.Random, m: int) -> Any:
    amt = round(rng.uniform(1800, 6500) * month_multiplier(m), 2)
    if rng.random() < 0.5:
        return f"${amt:,.2f}"
    return amt


def generate(year: int, seed: int = 7) -> List[List[Any]]:
    rng = random.Random(seed)

    rows: List[List[Any]] = [
        ["Monthly statement export"],
        [f"Generated {date.today().isoformat()}"],
        [],
        ["#", "Month", "Category", "Amount"],
    ]
    for m in range(1, 13):
        rows.append([m, month_cell(rng, year, m), "Revenue", amount_cell(rng, m)])
        if m == 6:
            # a row the importer must skip
            rows.append(["", "subtotal", "", "N/A"])
    return rows


def write_workbook(path: Path, rows: List[List[Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    wb = Workbook()
    ws = wb.active
    ws.title = "Statement"
    for r in rows:
        ws.append(r)
    wb.save(path)


if __name__ == "__main__":
    out = Path("backend/.artifacts/demo_statement.xlsx")
    rows = generate(year=2025, seed=42)
    write_workbook(out, rows)
    print(f"Wrote {len(rows)} rows to {out}")
