"""
Classification module for SmartTask.

Handles rule-based classification of tasks into category, priority,
entities and suggested actions.
"""

from .rules import (
    classify,
    ClassificationResult,
    ExtractedEntities,
    Category,
    Priority,
    CATEGORY_KEYWORDS,
    PRIORITY_KEYWORDS,
    SUGGESTED_ACTIONS,
    get_keyword_tables,
)
from .run import TaskClassifier

__all__ = [
    "classify",
    "ClassificationResult",
    "ExtractedEntities",
    "Category",
    "Priority",
    "CATEGORY_KEYWORDS",
    "PRIORITY_KEYWORDS",
    "SUGGESTED_ACTIONS",
    "get_keyword_tables",
    "TaskClassifier",
]
