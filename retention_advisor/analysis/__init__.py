# ==============================================
# TOPIC 2: ANALYSIS & SIMILARITY
# ==============================================
#
# This package turns a dataset plus one selected employee into
# attrition statistics and a ranked list of similar employees.
#
# Two-step process:
#   Step 1 (Classification): Decide which columns are numeric features
#   Step 2 (Similarity):     Aggregate, z-score normalize, rank by distance
#
# Modules:
# --------
# - column_classifier.py  → Pick numeric feature columns (first-row schema)
# - similarity_engine.py  → Statistics, normalization, nearest neighbours
# - results.py            → Data classes for the analysis output
# - employee_directory.py → Labels and search for picking a target employee
#
# ==============================================

from .column_classifier import ColumnClassifier
from .similarity_engine import SimilarityEngine
from .results import AnalysisResult, DatasetSummary, DepartmentSummary, SimilarEmployee
from .employee_directory import EmployeeOption, build_employee_label, search_employees

__all__ = [
    "ColumnClassifier",
    "SimilarityEngine",
    "AnalysisResult",
    "DatasetSummary",
    "DepartmentSummary",
    "SimilarEmployee",
    "EmployeeOption",
    "build_employee_label",
    "search_employees",
]
