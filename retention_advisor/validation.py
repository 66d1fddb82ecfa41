# ==============================================
# Request Validation
# ==============================================
#
# PURPOSE:
#   Check request payloads at the boundary, BEFORE any statistics
#   are computed. The analysis engine assumes its input passed here.
#
# FUNCTIONS:
# ----------
# - validate_analyze_request(body) -> (dataset, index)
#     body must be {"dataset": [ {...}, ... ], "index": <int>}
#     Fails on: wrong shape, empty dataset, non-object rows,
#               index outside [0, len(dataset)).
#
# - validate_generate_request(body) -> (employee, AnalysisResult)
#     body must be {"employee": {...}, "analysis": {...}}
#
#   All failures raise InvalidRequestError; nothing is clamped or guessed.
#
# ==============================================

from typing import Any, Dict, List, Tuple

from retention_advisor.analysis.results import AnalysisResult
from retention_advisor.errors import InvalidRequestError


PAYLOAD_SHAPE_MESSAGE = "Payload must include dataset[] and numeric index."
EMPTY_DATASET_MESSAGE = "Dataset is empty."
ROW_SHAPE_MESSAGE = "Every dataset row must be an object."
INDEX_OUT_OF_BOUNDS_MESSAGE = "Selected employee index is out of bounds."
GENERATE_SHAPE_MESSAGE = "Request must include employee and analysis payloads."


def _as_index(value: Any) -> int:
    # bool is an int subclass but never a valid index
    if isinstance(value, bool):
        raise InvalidRequestError(PAYLOAD_SHAPE_MESSAGE)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, float):
        raise InvalidRequestError(INDEX_OUT_OF_BOUNDS_MESSAGE)
    raise InvalidRequestError(PAYLOAD_SHAPE_MESSAGE)


def validate_analyze_request(body: Any) -> Tuple[List[Dict[str, Any]], int]:
    """
    Validate an analyze payload.

    Args:
        body: Decoded JSON request body

    Returns:
        (dataset, index) ready for SimilarityEngine.analyze()

    Raises:
        InvalidRequestError: If the payload breaks the request contract
    """
    if not isinstance(body, dict) or not isinstance(body.get("dataset"), list):
        raise InvalidRequestError(PAYLOAD_SHAPE_MESSAGE)

    index = _as_index(body.get("index"))
    dataset = body["dataset"]

    if not dataset:
        raise InvalidRequestError(EMPTY_DATASET_MESSAGE)

    if index < 0 or index >= len(dataset):
        raise InvalidRequestError(INDEX_OUT_OF_BOUNDS_MESSAGE)

    if not all(isinstance(row, dict) for row in dataset):
        raise InvalidRequestError(ROW_SHAPE_MESSAGE)

    return dataset, index


def validate_generate_request(body: Any) -> Tuple[Dict[str, Any], AnalysisResult]:
    """
    Validate a generate payload.

    Returns:
        (employee, analysis) with the analysis rebuilt from its dict form
    """
    if not isinstance(body, dict):
        raise InvalidRequestError(GENERATE_SHAPE_MESSAGE)

    employee = body.get("employee")
    analysis = body.get("analysis")
    if not isinstance(employee, dict) or not isinstance(analysis, dict):
        raise InvalidRequestError(GENERATE_SHAPE_MESSAGE)

    try:
        return employee, AnalysisResult.from_dict(analysis)
    except (KeyError, TypeError, AttributeError) as e:
        raise InvalidRequestError(f"Malformed analysis payload: {e}") from e
