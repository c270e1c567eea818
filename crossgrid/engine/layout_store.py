"""Persistent layout document store.

Every search run (complete or stopped early) can be saved as a JSON document
under ``local_db/collections/layouts/``. Documents carry the problem, the run
settings, all layouts found and a few statistics about them.
"""

from __future__ import annotations

import json
import uuid
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, List, Sequence

from ..core.constants import MINIMUM_WORD_LENGTH, Field
from ..core.exceptions import LayoutStoreError
from ..core.models import Problem
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from .cp_solver import CpSatResult
    from .search import SearchConfig, SearchResult


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/layouts")


class LayoutStore:
    """Save layout search runs as structured JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def save_search(
        self,
        problem: Problem,
        config: "SearchConfig",
        result: "SearchResult",
    ) -> str:
        """Persist a backtracking search run and return its document ID."""
        doc = self._new_document(problem, "backtrack", result.solutions)
        doc.update({
            "status": "stopped" if result.stopped else "complete",
            "stop_reason": result.stop_reason,
            "config": {
                "progress_interval": config.progress_interval,
                "max_solutions": config.max_solutions,
                "timeout_seconds": config.timeout_seconds,
                "verify_solutions": config.verify_solutions,
            },
            "solution_count": result.solution_count,
            "error_count": result.error_count,
            "elapsed_seconds": round(result.elapsed, 3),
            "violations": {
                violation.value: count for violation, count in result.violations.most_common()
            },
        })
        return self._write(doc)

    def save_cp_sat(self, problem: Problem, result: "CpSatResult") -> str:
        """Persist a CP-SAT enumeration and return its document ID."""
        doc = self._new_document(problem, "cp-sat", result.solutions)
        doc.update({
            "status": result.status,
            "solution_count": result.solution_count,
            "elapsed_seconds": round(result.wall_time, 3),
        })
        return self._write(doc)

    def load(self, doc_id: str) -> dict:
        path = self.store_dir / f"{doc_id}.json"
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise LayoutStoreError(f"No stored layout run {doc_id!r}") from None
        except json.JSONDecodeError as exc:
            raise LayoutStoreError(f"Stored layout run {doc_id!r} is corrupt: {exc}") from exc

    def list_ids(self) -> List[str]:
        return sorted(path.stem for path in self.store_dir.glob("*.json"))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _new_document(self, problem: Problem, backend: str, solutions: Sequence[str]) -> dict:
        return {
            "id": self._new_id(),
            "created_at": datetime.now(timezone.utc).isoformat(),
            "backend": backend,
            "problem": problem.to_jsonable(),
            "solutions": list(solutions),
            "stats": self._compute_stats(problem, solutions),
        }

    def _write(self, doc: dict) -> str:
        path = self.store_dir / f"{doc['id']}.json"
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.info("Layout run saved: %s", doc["id"])
        return doc["id"]

    def _compute_stats(self, problem: Problem, solutions: Sequence[str]) -> dict:
        """Black-cell counts and word-length distribution over all layouts."""
        width, height = problem.size
        black_counts = [pattern.count(Field.BLACK.value) for pattern in solutions]
        lengths: Counter = Counter()
        for pattern in solutions:
            rows = [pattern[y * width:(y + 1) * width] for y in range(height)]
            columns = ["".join(row[x] for row in rows) for x in range(width)]
            for line in rows + columns:
                for run in line.split(Field.BLACK.value):
                    if len(run) >= MINIMUM_WORD_LENGTH:
                        lengths[len(run)] += 1

        return {
            "grid": {
                "width": width,
                "height": height,
                "total_cells": problem.field_count,
                "across_clues": len(problem.across),
                "down_clues": len(problem.down),
            },
            "layouts": {
                "count": len(solutions),
                "black_min": min(black_counts) if black_counts else 0,
                "black_max": max(black_counts) if black_counts else 0,
                "black_avg": (
                    round(sum(black_counts) / len(black_counts), 1) if black_counts else 0.0
                ),
                "length_distribution": {str(k): v for k, v in sorted(lengths.items())},
            },
        }

    @staticmethod
    def _new_id() -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{ts}_{short_uuid}"
