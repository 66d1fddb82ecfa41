# ==============================================
# Results (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of one analysis request.
#   The similarity engine produces them; the prompt builder and the
#   request handlers consume them.
#
# CLASSES:
# --------
# - DepartmentSummary (dataclass)
#     department: str        → Department label ("Unknown Department" if missing)
#     count: int             → Number of records in the department
#     attrition_rate: float  → Percentage of those records that left (2 decimals)
#
# - SimilarEmployee (dataclass)
#     index: int             → Positional index of the record in the dataset
#     distance: float        → Euclidean distance to the target (normalized space)
#     row: dict              → The original record
#
# - DatasetSummary (dataclass)
#     total, attrition_rate, top_departments, numeric_cols
#
# - AnalysisResult (dataclass)
#     summary: DatasetSummary
#     employee: dict         → The full target record
#     similar: list[SimilarEmployee]
#
#   Every class has:
#     - to_dict() -> dict          → Serialize with the JSON wire keys
#                                    (attritionRate, topDepartments, numericCols)
#     - from_dict(data) -> cls     → Deserialize (classmethod)
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class DepartmentSummary:
    """Attrition breakdown for one department."""

    department: str
    count: int
    attrition_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "department": self.department,
            "count": self.count,
            "attritionRate": self.attrition_rate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DepartmentSummary":
        return cls(
            department=data["department"],
            count=data.get("count", 0),
            attrition_rate=data.get("attritionRate", 0.0),
        )


@dataclass
class SimilarEmployee:
    """One nearest-neighbour entry, relative to the target employee."""

    index: int
    distance: float
    row: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "distance": self.distance,
            "row": self.row,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimilarEmployee":
        return cls(
            index=data["index"],
            distance=data.get("distance", 0.0),
            row=data.get("row") or {},
        )


@dataclass
class DatasetSummary:
    """
    Dataset-wide statistics.

    Fields that are missing in a deserialized payload stay None so the
    prompt builder can render them as "unknown".
    """

    total: Optional[int] = None
    attrition_rate: Optional[float] = None
    top_departments: List[DepartmentSummary] = field(default_factory=list)
    numeric_cols: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "attritionRate": self.attrition_rate,
            "topDepartments": [summary.to_dict() for summary in self.top_departments],
            "numericCols": list(self.numeric_cols),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DatasetSummary":
        return cls(
            total=data.get("total"),
            attrition_rate=data.get("attritionRate"),
            top_departments=[
                DepartmentSummary.from_dict(entry)
                for entry in data.get("topDepartments") or []
            ],
            numeric_cols=list(data.get("numericCols") or []),
        )


@dataclass
class AnalysisResult:
    """Everything one analysis request returns."""

    summary: DatasetSummary
    employee: Dict[str, Any]
    similar: List[SimilarEmployee] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "employee": self.employee,
            "similar": [entry.to_dict() for entry in self.similar],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        return cls(
            summary=DatasetSummary.from_dict(data.get("summary") or {}),
            employee=data.get("employee") or {},
            similar=[SimilarEmployee.from_dict(entry) for entry in data.get("similar") or []],
        )
