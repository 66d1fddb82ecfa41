# ==============================================
# PromptBuilder
# ==============================================
#
# PURPOSE:
#   Render the analysis output and the target employee into the
#   text prompt sent to the generation service.
#
# SECTIONS:
# ---------
#   1. Dataset summary (totals, top departments, numeric columns)
#   2. Target employee attributes, one "- key: value" line each
#   3. Up to 5 most similar employees (index, distance, attrition,
#      first 6 attributes)
#   4. Fixed instructions: 3 numbered strategies, owner, next step,
#      timeline, one KPI each
#
#   Missing summary values render as "unknown"; empty lists render
#   as "not available" / "none".
#
# ==============================================

from typing import Any, Dict, List

from retention_advisor.analysis.results import AnalysisResult, SimilarEmployee
from retention_advisor.normalization import ValueParser


SYSTEM_INSTRUCTION = (
    "You are an expert HR business partner. You focus on retention outcomes, "
    "quantify impact, and keep answers pragmatic."
)

INSTRUCTIONS = """The target employee is considered valuable to retain.

Produce 3 concise, high-leverage retention strategies. Each strategy must:
- be personalized to the employee attributes,
- reference one or more signals from the dataset,
- include an action owner, next step, and expected timeline,
- provide one KPI with an initial benchmark and desired outcome.

Return the response as a numbered list (1., 2., 3.). Limit each strategy to at most 6 lines."""

ROW_PREVIEW_FIELDS = 6


def render_value(value: Any) -> str:
    """Scalar as it reads in the JSON payload (None -> "null", True -> "true")."""
    if value is None:
        return "null"
    return ValueParser.to_text(value)


class PromptBuilder:
    """Builds the retention-strategy prompt for one employee."""

    def __init__(self, max_similar: int = 5):
        self.max_similar = max_similar

    def build(self, employee: Dict[str, Any], analysis: AnalysisResult) -> str:
        """
        Args:
            employee: Target employee record
            analysis: Analysis produced for that employee

        Returns:
            The full prompt text
        """
        similar_lines = self._similar_lines(analysis.similar)

        return (
            "You are an HR analytics assistant.\n"
            "\n"
            f"{self._summary_lines(analysis)}\n"
            "\n"
            "We have a target employee with the following attributes:\n"
            f"{self._employee_lines(employee)}\n"
            "\n"
            "Here are the top 5 most similar employees from historical data:\n"
            f"{similar_lines or 'Not available'}\n"
            "\n"
            f"{INSTRUCTIONS}"
        )

    def _summary_lines(self, analysis: AnalysisResult) -> str:
        summary = analysis.summary

        total = "unknown" if summary.total is None else render_value(summary.total)
        rate = "unknown" if summary.attrition_rate is None else render_value(summary.attrition_rate)

        if summary.top_departments:
            departments = ", ".join(
                f"{entry.department} ({render_value(entry.attrition_rate)}% over {entry.count} employees)"
                for entry in summary.top_departments
            )
        else:
            departments = "not available"

        columns = ", ".join(summary.numeric_cols) if summary.numeric_cols else "none"

        return "\n".join([
            f"Dataset summary: total rows = {total}, overall attrition rate = {rate}%",
            f"Top departments by attrition: {departments}",
            f"Numeric columns used for similarity: {columns}",
        ])

    def _employee_lines(self, employee: Dict[str, Any]) -> str:
        return "\n".join(f"- {key}: {render_value(value)}" for key, value in employee.items())

    def _similar_lines(self, similar: List[SimilarEmployee]) -> str:
        lines = []
        for entry in similar[:self.max_similar]:
            parts = [f"idx {entry.index}", f"distance {entry.distance:.3f}"]

            attrition = entry.row.get("Attrition")
            if attrition is None:
                attrition = entry.row.get("attrition")
            if attrition is not None:
                parts.append(f"attrition: {render_value(attrition)}")

            preview = ", ".join(
                f"{key}: {render_value(value)}"
                for key, value in list(entry.row.items())[:ROW_PREVIEW_FIELDS]
            )
            lines.append(f"{' | '.join(parts)} -> {preview}")

        return "\n".join(lines)


def build_prompt(employee: Dict[str, Any], analysis: AnalysisResult, max_similar: int = 5) -> str:
    return PromptBuilder(max_similar=max_similar).build(employee, analysis)
