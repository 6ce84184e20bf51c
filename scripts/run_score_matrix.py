from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from logic import CATEGORIES, DEFAULT_QUESTIONS, answers_from_indices, recognized_answer_count, score_answers, top_stream


def scenario_inputs() -> list[dict[str, Any]]:
    # One option index per default question; None means skipped.
    return [
        {"name": "All science", "indices": [0, 0, 0, 0, 0]},
        {"name": "All commerce", "indices": [1, 1, 1, 1, 1]},
        {"name": "All arts", "indices": [2, 2, 2, 2, 2]},
        {"name": "All technical", "indices": [3, 3, 3, 3, 3]},
        {"name": "Science vs technical tie", "indices": [0, 3, 0, 3, None]},
        {"name": "Mixed leaning commerce", "indices": [1, 1, 2, 3, 1]},
        {"name": "Arts with skips", "indices": [2, None, 2, None, 0]},
        {"name": "Nothing answered", "indices": [None, None, None, None, None]},
    ]


def build_matrix() -> pd.DataFrame:
    rows = []
    for scenario in scenario_inputs():
        answers = answers_from_indices(scenario["indices"], DEFAULT_QUESTIONS)
        results = score_answers(answers, DEFAULT_QUESTIONS)
        row: dict[str, Any] = {
            "scenario": scenario["name"],
            "answered": recognized_answer_count(answers, DEFAULT_QUESTIONS),
            "top": top_stream(results),
            "ranking": " > ".join(item.category for item in results),
        }
        for item in results:
            row[item.category] = round(item.percentage, 1)
        rows.append(row)
    return pd.DataFrame(rows, columns=["scenario", "answered", "top", *CATEGORIES, "ranking"])


def main() -> None:
    print(build_matrix().to_string(index=False))


if __name__ == "__main__":
    main()
