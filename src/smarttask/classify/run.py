"""
Classification orchestrator for SmartTask.

Handles batch classification of task entries and CSV/JSON export.
"""

import os
import csv
import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Iterable, List, Optional

from ..tasks.draft import TaskDraft, prepare_task


CSV_COLUMNS = [
    "title",
    "category",
    "priority",
    "people",
    "dates",
    "suggested_actions",
    "auto_category",
    "auto_priority",
]


class TaskClassifier:
    """
    Orchestrates classification of task batches and export of the results.

    Features:
    - Batch classification with per-entry error isolation
    - Optional category/priority overrides from the batch entries
    - CSV export with formula injection mitigation
    - JSON export of full drafts
    """

    def __init__(self):
        self.drafts: List[TaskDraft] = []
        self.results = self._empty_results()

    @staticmethod
    def _empty_results() -> Dict[str, Any]:
        return {
            "processed": 0,
            "errors": 0,
            "by_category": {},
            "by_priority": {},
        }

    def classify_batch(
        self,
        entries: Iterable[Dict[str, Any]],
        apply_overrides: bool = True,
    ) -> Dict[str, Any]:
        """
        Classify a batch of task entries.

        Args:
            entries: Task dictionaries (title, description, assigned_to,
                due_date, category, priority)
            apply_overrides: Honour category/priority given in the entries

        Returns:
            Dict with processing results
        """
        self.drafts = []
        self.results = self._empty_results()
        by_category: Counter = Counter()
        by_priority: Counter = Counter()

        entries = list(entries)
        print(f"\n[INFO] Processing {len(entries)} task(s)")

        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                print(f"   [WARN] Task {idx} is not a dictionary, skipping")
                self.results["errors"] += 1
                continue

            try:
                draft = prepare_task(
                    entry.get("title"),
                    description=entry.get("description"),
                    assigned_to=entry.get("assigned_to"),
                    due_date=entry.get("due_date"),
                    category=entry.get("category") if apply_overrides else None,
                    priority=entry.get("priority") if apply_overrides else None,
                )
            except ValueError as e:
                print(f"   [WARN] Error processing task {idx}: {e}")
                self.results["errors"] += 1
                continue

            self.drafts.append(draft)
            self.results["processed"] += 1
            by_category[draft.category.value] += 1
            by_priority[draft.priority.value] += 1

        self.results["by_category"] = dict(by_category)
        self.results["by_priority"] = dict(by_priority)
        return self.results

    def export_to_csv(self, export_dir: str) -> Optional[str]:
        """
        Export classified drafts to CSV.

        Args:
            export_dir: Directory to write CSV file

        Returns:
            Path to CSV file or None if there is nothing to export
        """
        if not self.drafts:
            print("\n[INFO] No classified tasks to export")
            return None

        Path(export_dir).mkdir(parents=True, exist_ok=True)

        csv_path = _export_path(export_dir, "csv")

        with open(csv_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL)
            writer.writerow(CSV_COLUMNS)

            for draft in self.drafts:
                title = draft.title.replace("\n", " ").replace("\r", " ")
                writer.writerow([
                    mitigate_formula_injection(title),
                    draft.category.value,
                    draft.priority.value,
                    mitigate_formula_injection(", ".join(draft.extracted_entities.people)),
                    mitigate_formula_injection(", ".join(draft.extracted_entities.dates)),
                    "; ".join(draft.suggested_actions),
                    draft.auto_classification.category.value,
                    draft.auto_classification.priority.value,
                ])

        print(f"\n[EXPORT] Exported {len(self.drafts)} task(s) to: {csv_path}")
        return csv_path

    def export_to_json(self, export_dir: str) -> Optional[str]:
        """
        Export classified drafts to JSON.

        Args:
            export_dir: Directory to write JSON file

        Returns:
            Path to JSON file or None if there is nothing to export
        """
        if not self.drafts:
            print("\n[INFO] No classified tasks to export")
            return None

        Path(export_dir).mkdir(parents=True, exist_ok=True)

        json_path = _export_path(export_dir, "json")

        payload = {
            "generated_at": datetime.now().isoformat(),
            "results": self.results,
            "tasks": [draft.to_dict() for draft in self.drafts],
        }
        # Serialize before opening so a failure never leaves a partial file
        content = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
        with open(json_path, "w", encoding="utf-8") as f:
            f.write(content)

        print(f"\n[EXPORT] Exported {len(self.drafts)} task(s) to: {json_path}")
        return json_path


def _export_path(export_dir: str, extension: str) -> str:
    """
    Build a timestamped export path that does not overwrite an existing file.

    Args:
        export_dir: Export directory
        extension: File extension without the dot

    Returns:
        classified_<timestamp>.<ext>, with a _<n> suffix if that name is taken
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = os.path.join(export_dir, f"classified_{timestamp}.{extension}")
    counter = 1
    while os.path.exists(path):
        path = os.path.join(export_dir, f"classified_{timestamp}_{counter}.{extension}")
        counter += 1
    return path


def mitigate_formula_injection(value: str) -> str:
    """
    Mitigate CSV formula injection by prefixing dangerous cells.

    Excel treats cells starting with =, +, -, @ as formulas.
    Prefix with single quote to treat as text.

    Args:
        value: Cell value

    Returns:
        Safe value
    """
    if not value:
        return value

    if value[0] in "=+-@":
        return f"'{value}"

    return value
