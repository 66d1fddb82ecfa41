# ==============================================
# AnalyzeAndAdvise — Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties the 3 topics together.
#   Users (CLI, request handlers) interact with this class only.
#
# HOW IT CONNECTS THE 3 TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                   RetentionAdvisor                       │
#   │                                                          │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 1: NORMALIZATION                       │        │
#   │  │  DatasetLoader → records, ValueParser        │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ dataset + index                        │
#   │                 ▼                                        │
#   │          [ VALIDATION ]  (boundary checks)               │
#   │                 │                                        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 2: ANALYSIS & SIMILARITY               │        │
#   │  │  ColumnClassifier → SimilarityEngine →       │        │
#   │  │  AnalysisResult                              │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ analysis                               │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 3: RETENTION ADVICE                    │        │
#   │  │  PromptBuilder → GeminiClient →              │        │
#   │  │  StrategyResult                              │        │
#   │  └──────────────────────────────────────────────┘        │
#   └──────────────────────────────────────────────────────────┘
#
#
# CLASS: RetentionAdvisor
# -----------------------
#   - __init__(config: AppConfig | None = None, session = None)
#   - load_dataset(path) -> list[dict]
#   - analyze(dataset, index) -> AnalysisResult
#   - generate_strategies(employee, analysis) -> StrategyResult
#
# REQUEST HANDLERS:
# -----------------
#   - handle_analyze(body, advisor=None) -> (payload, status)
#       200 analysis | 400 contract violation | 500 unexpected failure
#
#   - handle_generate(body, advisor=None) -> (payload, status)
#       200 {strategy, model} | 400 missing payloads |
#       500 missing API key   | 502 generation failure (with attempts)
#
# ==============================================

import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import requests

from retention_advisor.config import AppConfig, get_config
from retention_advisor.errors import ConfigurationError, GenerationError, InvalidRequestError
from retention_advisor.normalization import DatasetLoader, ValueParser
from retention_advisor.analysis import AnalysisResult, ColumnClassifier, SimilarityEngine
from retention_advisor.advisor import GeminiClient, PromptBuilder, StrategyResult
from retention_advisor.validation import validate_analyze_request, validate_generate_request


ANALYZE_FAILURE_MESSAGE = "Unable to analyze dataset."


class RetentionAdvisor:
    """
    Main orchestrator:
    1. Normalization (loading, value parsing)
    2. Analysis & Similarity
    3. Retention advice
    """

    def __init__(self, config: Optional[AppConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize all components.

        Args:
            config: Application configuration. If None, loads from environment.
            session: Optional requests.Session handed to the Gemini client.
        """
        self._config = config or get_config()

        # TOPIC 1: Normalization
        self._value_parser = ValueParser()
        self._dataset_loader = DatasetLoader()

        # TOPIC 2: Analysis & Similarity
        analysis_config = self._config.analysis
        self._classifier = ColumnClassifier(
            numeric_threshold=analysis_config.numeric_threshold,
            value_parser=self._value_parser
        )
        self._engine = SimilarityEngine(
            classifier=self._classifier,
            max_departments=analysis_config.max_departments,
            max_neighbors=analysis_config.max_neighbors,
            value_parser=self._value_parser
        )

        # TOPIC 3: Retention advice
        self._prompt_builder = PromptBuilder(max_similar=analysis_config.prompt_neighbors)
        self._gemini_client = GeminiClient(self._config.gemini, session=session)

    def load_dataset(self, path: Union[str, Path]) -> List[Dict[str, Any]]:
        """
        Load a CSV dataset.

        Raises:
            DatasetLoadError: If the file cannot be read
        """
        dataset = self._dataset_loader.load_csv(path)
        print(f"✓ Loaded {len(dataset):,} rows from {path}")
        return dataset

    def analyze(self, dataset: List[Dict[str, Any]], index: int) -> AnalysisResult:
        """
        Validate the request, then compute statistics and neighbours.

        Args:
            dataset: Records to analyze
            index: Position of the target employee

        Returns:
            AnalysisResult for the target employee

        Raises:
            InvalidRequestError: Empty dataset or out-of-range index
        """
        dataset, index = validate_analyze_request({"dataset": dataset, "index": index})
        return self._engine.analyze(dataset, index)

    def generate_strategies(self, employee: Dict[str, Any], analysis: AnalysisResult) -> StrategyResult:
        """
        Ask Gemini for retention strategies for one employee.

        Raises:
            ConfigurationError: If GOOGLE_API_KEY is not set
            GenerationError: If the service fails
        """
        self._gemini_client.ensure_configured()
        prompt = self._prompt_builder.build(employee, analysis)
        result = self._gemini_client.generate(prompt)
        print(f"✓ Strategies generated with {result.model}")
        return result


# ==============================================
# Request handlers
# ==============================================

def handle_analyze(body: Any, advisor: Optional[RetentionAdvisor] = None) -> Tuple[Dict[str, Any], int]:
    """
    Handle an analyze request.

    Args:
        body: Decoded JSON body {"dataset": [...], "index": n}
        advisor: Optional RetentionAdvisor (a default one is built otherwise)

    Returns:
        (response payload, HTTP-style status code)
    """
    try:
        dataset, index = validate_analyze_request(body)
    except InvalidRequestError as e:
        return {"error": str(e)}, 400

    try:
        advisor = advisor or RetentionAdvisor()
        return advisor.analyze(dataset, index).to_dict(), 200
    except Exception:
        print("✗ [analyze] error")
        traceback.print_exc()
        return {"error": ANALYZE_FAILURE_MESSAGE}, 500


def handle_generate(body: Any, advisor: Optional[RetentionAdvisor] = None) -> Tuple[Dict[str, Any], int]:
    """
    Handle a generate request.

    Args:
        body: Decoded JSON body {"employee": {...}, "analysis": {...}}
        advisor: Optional RetentionAdvisor (a default one is built otherwise)

    Returns:
        (response payload, HTTP-style status code)
    """
    try:
        employee, analysis = validate_generate_request(body)
    except InvalidRequestError as e:
        return {"error": str(e)}, 400

    try:
        advisor = advisor or RetentionAdvisor()
        return advisor.generate_strategies(employee, analysis).to_dict(), 200
    except ConfigurationError as e:
        return {"error": str(e)}, 500
    except GenerationError as e:
        print(f"✗ [generate] {e.message}")
        return e.to_dict(), 502
    except Exception as e:
        print("✗ [generate] error")
        traceback.print_exc()
        return {"error": str(e) or "Unexpected error occurred while contacting Gemini."}, 500
