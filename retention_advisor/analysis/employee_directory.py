from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from retention_advisor.normalization import ValueParser


DEFAULT_LISTING_LIMIT = 25
SEARCH_RESULT_LIMIT = 50


@dataclass
class EmployeeOption:
    """A selectable employee: position in the dataset plus a display label."""
    index: int
    label: str
    row: Dict[str, Any]

    @property
    def label_lower(self) -> str:
        return self.label.lower()


def _first_present(row: Dict[str, Any], *keys: str) -> Any:
    # First key whose value is not None
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def build_employee_label(row: Dict[str, Any], index: int) -> str:
    """
    Human-readable label, e.g. "Employee 1 — Sales Executive (Sales) [#0]".
    """
    employee_number = _first_present(row, "EmployeeNumber", "employeeNumber")
    department = _first_present(row, "Department", "department")
    role = _first_present(row, "JobRole", "jobRole")
    name = _first_present(row, "EmployeeName", "employeeName")

    if employee_number is None:
        employee_number = index
    if department is None:
        department = "Department N/A"
    if role is None:
        role = "Role N/A"

    to_text = ValueParser.to_text
    display_name = to_text(name) if name else f"Employee {to_text(employee_number)}"
    return f"{display_name} — {to_text(role)} ({to_text(department)}) [#{index}]"


def build_employee_options(dataset: Sequence[Dict[str, Any]]) -> List[EmployeeOption]:
    return [
        EmployeeOption(index=index, label=build_employee_label(row, index), row=row)
        for index, row in enumerate(dataset)
    ]


def search_employees(dataset: Sequence[Dict[str, Any]], term: Optional[str] = None) -> List[EmployeeOption]:
    """
    Filter employees by label text or exact index.

    Args:
        dataset: Records to search
        term: Case-insensitive substring of the label, or an index. Empty
              or None lists the first employees instead.

    Returns:
        Up to 25 options without a term, up to 50 matches with one
    """
    options = build_employee_options(dataset)
    if not term:
        return options[:DEFAULT_LISTING_LIMIT]

    term = term.lower()
    matches = [
        option for option in options
        if term in option.label_lower or str(option.index) == term
    ]
    return matches[:SEARCH_RESULT_LIMIT]
