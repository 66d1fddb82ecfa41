# ==============================================
# SimilarityEngine
# ==============================================
#
# PURPOSE:
#   Given a dataset and a target index, compute:
#     - total record count and overall attrition rate
#     - the top departments by attrition rate
#     - the numeric feature columns (via ColumnClassifier)
#     - the nearest neighbours of the target record
#
# CLASS: SimilarityEngine
# -----------------------
#   Stateless — every call works on local values only.
#
#   Methods:
#   --------
#   - analyze(dataset, index) -> AnalysisResult
#       Full pipeline for one request. Assumes validated input
#       (non-empty dataset, 0 <= index < len(dataset)).
#
#   - attrition_rate(dataset) -> float
#   - department_breakdown(dataset) -> list[DepartmentSummary]
#   - build_matrix(dataset, numeric_cols) -> list[list[float]]
#   - column_means(matrix, width) -> list[float]
#   - column_std_devs(matrix, means) -> list[float]
#   - normalize(matrix) -> list[list[float]]
#   - distance(a, b) -> float
#   - nearest_neighbors(dataset, normalized, index) -> list[SimilarEmployee]
#
# NORMALIZATION:
# --------------
#   z = (raw - mean) / std, with the population std (divide by n).
#   A column with std == 0 uses std = 1, so every z is 0.
#
#   Sums are plain left-to-right folds. Python's built-in sum() of
#   floats is compensated on 3.12+, which would change the last bits.
#
# ==============================================

import math
from functools import reduce
from typing import Any, Dict, List, Sequence

from retention_advisor.normalization import ValueParser
from .column_classifier import ColumnClassifier
from .results import AnalysisResult, DatasetSummary, DepartmentSummary, SimilarEmployee


Record = Dict[str, Any]
Vector = List[float]


def _fold_sum(values) -> float:
    return reduce(lambda acc, value: acc + value, values, 0.0)


class SimilarityEngine:
    """
    Computes attrition statistics and nearest neighbours for one employee.
    """

    ATTRITION_FIELD = "Attrition"
    DEPARTMENT_FIELD = "Department"
    UNKNOWN_DEPARTMENT = "Unknown Department"

    def __init__(
        self,
        classifier: ColumnClassifier = None,
        max_departments: int = 5,
        max_neighbors: int = 10,
        value_parser: ValueParser = None
    ):
        """
        Args:
            classifier: Optional ColumnClassifier (default threshold 0.7)
            max_departments: How many department summaries to keep
            max_neighbors: How many neighbours to return
            value_parser: Optional ValueParser shared with the classifier
        """
        self.value_parser = value_parser or ValueParser()
        self.classifier = classifier or ColumnClassifier(value_parser=self.value_parser)
        self.max_departments = max_departments
        self.max_neighbors = max_neighbors

    # ======================================
    # Full request
    # ======================================
    def analyze(self, dataset: Sequence[Record], index: int) -> AnalysisResult:
        """
        Run statistics and similarity ranking for the record at ``index``.

        Args:
            dataset: Non-empty list of records
            index: Target position, already validated to be in range

        Returns:
            AnalysisResult with summary, target record and neighbours
        """
        numeric_cols = self.classifier.classify(dataset)
        matrix = self.build_matrix(dataset, numeric_cols)
        normalized = self.normalize(matrix, len(numeric_cols))

        summary = DatasetSummary(
            total=len(dataset),
            attrition_rate=self.attrition_rate(dataset),
            top_departments=self.department_breakdown(dataset),
            numeric_cols=numeric_cols,
        )

        return AnalysisResult(
            summary=summary,
            employee=dataset[index],
            similar=self.nearest_neighbors(dataset, normalized, index),
        )

    # ======================================
    # Attrition statistics
    # ======================================
    def is_attrited(self, record: Record) -> bool:
        return self.value_parser.is_attrited(record.get(self.ATTRITION_FIELD))

    def attrition_rate(self, dataset: Sequence[Record]) -> float:
        attrition_count = sum(1 for record in dataset if self.is_attrited(record))
        return self.value_parser.round_percentage(attrition_count, len(dataset))

    def department_breakdown(self, dataset: Sequence[Record]) -> List[DepartmentSummary]:
        """
        Attrition rate per department, highest first.

        Departments with equal rates keep the order in which they were
        first seen (sorted() is stable). Only the first max_departments
        entries are returned.
        """
        counts: Dict[str, List[int]] = {}  # department -> [count, attrited]
        for record in dataset:
            department = self._department_of(record)
            if department not in counts:
                counts[department] = [0, 0]
            counts[department][0] += 1
            if self.is_attrited(record):
                counts[department][1] += 1

        summaries = [
            DepartmentSummary(
                department=department,
                count=count,
                attrition_rate=self.value_parser.round_percentage(attrited, count),
            )
            for department, (count, attrited) in counts.items()
        ]
        summaries = sorted(summaries, key=lambda summary: -summary.attrition_rate)
        return summaries[:self.max_departments]

    def _department_of(self, record: Record) -> str:
        value = record.get(self.DEPARTMENT_FIELD)
        if value is None:
            return self.UNKNOWN_DEPARTMENT
        return self.value_parser.to_text(value)

    # ======================================
    # Normalization
    # ======================================
    def build_matrix(self, dataset: Sequence[Record], numeric_cols: List[str]) -> List[Vector]:
        return [
            [self.value_parser.to_number(record.get(column)) for column in numeric_cols]
            for record in dataset
        ]

    def column_means(self, matrix: List[Vector], width: int) -> Vector:
        rows = len(matrix)
        return [
            _fold_sum(row[column] for row in matrix) / rows
            for column in range(width)
        ]

    def column_std_devs(self, matrix: List[Vector], means: Vector) -> Vector:
        rows = len(matrix)
        std_devs = []
        for column, mean in enumerate(means):
            variance = _fold_sum((row[column] - mean) ** 2 for row in matrix) / rows
            std = math.sqrt(variance)
            std_devs.append(std if std > 0 else 1.0)
        return std_devs

    def normalize(self, matrix: List[Vector], width: int) -> List[Vector]:
        """
        Z-score every column of the matrix.

        Args:
            matrix: One raw numeric vector per record
            width: Number of numeric columns (0 gives empty vectors)

        Returns:
            One normalized vector per record, same shape as matrix
        """
        if not matrix:
            return []

        means = self.column_means(matrix, width)
        std_devs = self.column_std_devs(matrix, means)
        return [
            [(value - means[column]) / std_devs[column] for column, value in enumerate(row)]
            for row in matrix
        ]

    # ======================================
    # Ranking
    # ======================================
    @staticmethod
    def distance(a: Vector, b: Vector) -> float:
        return math.sqrt(_fold_sum((x - y) * (x - y) for x, y in zip(a, b)))

    def nearest_neighbors(
        self,
        dataset: Sequence[Record],
        normalized: List[Vector],
        index: int
    ) -> List[SimilarEmployee]:
        """
        Rank every other record by distance to the target.

        Candidates are built in index order and sorted() is stable, so
        equal distances stay in ascending index order.
        """
        target = normalized[index]
        candidates = [
            SimilarEmployee(index=row_index, distance=self.distance(vector, target), row=dataset[row_index])
            for row_index, vector in enumerate(normalized)
        ]
        ranked = sorted(candidates, key=lambda entry: entry.distance)
        return [entry for entry in ranked if entry.index != index][:self.max_neighbors]
