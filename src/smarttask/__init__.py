"""
SmartTask - rule-based task classification.
"""

from .classify import classify, ClassificationResult, Category, Priority

__version__ = "0.1.0"

__all__ = ["classify", "ClassificationResult", "Category", "Priority", "__version__"]
