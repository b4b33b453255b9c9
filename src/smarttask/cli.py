"""
CLI entrypoint for SmartTask.

Provides command-line interface for ad hoc and batch task classification.
"""

import sys
import os
import json
import logging
import argparse
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from smarttask.classify import classify, get_keyword_tables, TaskClassifier
from smarttask.tasks import load_tasks, prepare_task


DEFAULT_TASKS_FILE = "config/tasks.yaml"
DEFAULT_EXPORT_DIR = "data/review"


def print_classification(title: str, result) -> None:
    """Print a classification result to console."""
    print("\n" + "=" * 60)
    print("CLASSIFICATION")
    print("=" * 60)

    print(f"\nTask: {title}")
    print(f"   Category: {result.category.value}")
    print(f"   Priority: {result.priority.value}")

    people = ", ".join(result.extracted_entities.people) or "-"
    dates = ", ".join(result.extracted_entities.dates) or "-"
    print(f"   People: {people}")
    print(f"   Dates: {dates}")

    print("\nSuggested actions:")
    for action in result.suggested_actions:
        print(f"   - {action}")


def classify_command(args) -> int:
    """
    Execute the classify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    result = classify(args.title, args.description)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_classification(args.title, result)

    return 0


def create_command(args) -> int:
    """
    Execute the create command: build the draft a new task would be stored as.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        draft = prepare_task(
            args.title,
            description=args.description,
            assigned_to=args.assigned_to,
            due_date=args.due_date,
            category=args.category,
            priority=args.priority,
        )
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1

    print(json.dumps(draft.to_dict(), indent=2))
    return 0


def classify_batch_command(args) -> int:
    """
    Execute the classify-batch command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        data = load_tasks(args.tasks)
        print(f"[OK] Loaded tasks from: {args.tasks}")
    except Exception as e:
        print(f"[ERROR] Failed to load tasks: {e}")
        return 1

    classifier = TaskClassifier()

    try:
        print(f"\n[INFO] Starting classification (dry-run={args.dry_run})")

        results = classifier.classify_batch(
            data["tasks"],
            apply_overrides=not args.no_overrides,
        )

        print("\n" + "=" * 60)
        print("CLASSIFICATION SUMMARY")
        print("=" * 60)

        print(f"\nProcessed: {results['processed']}")
        print(f"[FAIL] Errors: {results['errors']}")

        print("\nBy category:")
        for category, count in results["by_category"].items():
            print(f"   {category}: {count}")

        print("\nBy priority:")
        for priority, count in results["by_priority"].items():
            print(f"   {priority}: {count}")

        if not args.dry_run and results["processed"] > 0:
            print("\n[INFO] Exporting classified tasks...")
            if args.format in ("csv", "both"):
                csv_path = classifier.export_to_csv(args.export_dir)
                if csv_path:
                    print(f"[OK] Exported to: {csv_path}")
            if args.format in ("json", "both"):
                json_path = classifier.export_to_json(args.export_dir)
                if json_path:
                    print(f"[OK] Exported to: {json_path}")

        return 0

    except KeyboardInterrupt:
        print("\n\n[INTERRUPTED] Classification cancelled by user")
        return 130

    except OSError as e:
        print(f"\n[ERROR] Export failed: {e}")
        return 1


def keywords_command(args) -> int:
    """Print the fixed keyword and action tables."""
    tables = get_keyword_tables()

    print("\nCATEGORIES (checked in order):")
    for category, keywords in tables["categories"].items():
        print(f"   {category}: {', '.join(keywords)}")

    print("\nPRIORITIES (checked in order, default low):")
    for priority, keywords in tables["priorities"].items():
        print(f"   {priority}: {', '.join(keywords)}")

    print("\nSUGGESTED ACTIONS:")
    for category, actions in tables["actions"].items():
        print(f"   {category}: {', '.join(actions)}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smarttask",
        description="SmartTask - Rule-based Task Classification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify a single task
  smarttask classify "Urgent team meeting today" --description "about budget"

  # Build the record for a new task, overriding the priority
  smarttask create "Fix login bug" --priority high --due-date 2026-03-15

  # Classify a batch file and export CSV + JSON
  smarttask classify-batch --tasks config/tasks.yaml --format both

Environment Variables:
  SMARTTASK_TASKS_FILE   Default batch file (default: config/tasks.yaml)
  SMARTTASK_EXPORT_DIR   Default export directory (default: data/review)
        """,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show which keywords triggered each classification",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # classify command
    classify_parser = subparsers.add_parser(
        "classify",
        help="Classify a single task",
    )

    classify_parser.add_argument("title", type=str, help="Task title")

    classify_parser.add_argument(
        "--description",
        type=str,
        default="",
        help="Task description",
    )

    classify_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    # create command
    create_parser = subparsers.add_parser(
        "create",
        help="Build the draft record for a new task",
    )

    create_parser.add_argument("title", type=str, help="Task title")

    create_parser.add_argument("--description", type=str, help="Task description")

    create_parser.add_argument("--assigned-to", type=str, help="Assignee")

    create_parser.add_argument(
        "--due-date",
        type=str,
        help="Due date (YYYY-MM-DD, YYYY-MM-DD HH:MM or MM/DD/YYYY)",
    )

    create_parser.add_argument(
        "--category",
        type=str,
        help="Override the automatic category",
    )

    create_parser.add_argument(
        "--priority",
        type=str,
        help="Override the automatic priority",
    )

    # classify-batch command
    batch_parser = subparsers.add_parser(
        "classify-batch",
        help="Classify all tasks in a YAML batch file",
    )

    batch_parser.add_argument(
        "--tasks",
        type=str,
        default=os.getenv("SMARTTASK_TASKS_FILE", DEFAULT_TASKS_FILE),
        help=f"Path to tasks.yaml (default: {DEFAULT_TASKS_FILE})",
    )

    batch_parser.add_argument(
        "--export-dir",
        type=str,
        default=os.getenv("SMARTTASK_EXPORT_DIR", DEFAULT_EXPORT_DIR),
        help=f"Export directory (default: {DEFAULT_EXPORT_DIR})",
    )

    batch_parser.add_argument(
        "--format",
        choices=["csv", "json", "both"],
        default="csv",
        help="Export format (default: csv)",
    )

    batch_parser.add_argument(
        "--no-overrides",
        action="store_true",
        help="Ignore category/priority given in the batch file",
    )

    batch_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Classify without exporting",
    )

    # keywords command
    subparsers.add_parser(
        "keywords",
        help="Show the keyword and action tables",
    )

    return parser


def main(argv=None):
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG] %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "classify":
        return classify_command(args)
    elif args.command == "create":
        return create_command(args)
    elif args.command == "classify-batch":
        return classify_batch_command(args)
    elif args.command == "keywords":
        return keywords_command(args)
    else:
        print(f"[ERROR] Unknown command: {args.command}")
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
