# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - GeminiConfig (dataclass)
#     api_key: str | None        (default None)
#     preferred_model: str | None (default None)
#     base_url: str              (default Generative Language v1beta endpoint)
#     timeout_seconds: float     (default 60.0)
#     temperature: float         (default 0.25)
#     top_p: float               (default 0.8)
#     max_output_tokens: int     (default 768)
#
# - AnalysisConfig (dataclass)
#     numeric_threshold: float   (default 0.7)
#     max_departments: int       (default 5)
#     max_neighbors: int         (default 10)
#     prompt_neighbors: int      (default 5)
#
# - AppConfig (dataclass)
#     gemini: GeminiConfig
#     analysis: AnalysisConfig
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from retention_advisor.config import get_config
#   config = get_config()
#   print(config.gemini.preferred_model)
#   print(config.analysis.max_neighbors)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar
from pathlib import Path

from dotenv import load_dotenv

from retention_advisor.errors import ConfigurationError


DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass
class GeminiConfig:
    """Gemini text-generation service configuration."""
    api_key: Optional[str] = None
    preferred_model: Optional[str] = None
    base_url: str = DEFAULT_GEMINI_BASE_URL
    timeout_seconds: float = 60.0
    temperature: float = 0.25
    top_p: float = 0.8
    max_output_tokens: int = 768


@dataclass
class AnalysisConfig:
    """Limits and thresholds for the statistics & similarity engine."""
    numeric_threshold: float = 0.7
    max_departments: int = 5
    max_neighbors: int = 10
    prompt_neighbors: int = 5


@dataclass
class AppConfig:
    """Main application configuration."""
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None

Number = TypeVar("Number", int, float)


def _env_number(name: str, default: str, parse: Callable[[str], Number]) -> Number:
    raw = os.getenv(name, default)
    try:
        return parse(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from e


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env.local then .env from project root; the first value set wins
    project_root = Path(__file__).parent.parent
    load_dotenv(dotenv_path=project_root / ".env.local")
    load_dotenv(dotenv_path=project_root / ".env")

    # Build Gemini configuration
    gemini_config = GeminiConfig(
        api_key=os.getenv("GOOGLE_API_KEY") or None,
        preferred_model=(os.getenv("GEMINI_MODEL") or "").strip() or None,
        base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL).rstrip("/"),
        timeout_seconds=_env_number("GEMINI_TIMEOUT_SECONDS", "60.0", float)
    )

    # Build analysis configuration
    analysis_config = AnalysisConfig(
        numeric_threshold=_env_number("NUMERIC_THRESHOLD", "0.7", float),
        max_departments=_env_number("MAX_DEPARTMENTS", "5", int),
        max_neighbors=_env_number("MAX_NEIGHBORS", "10", int)
    )

    # Build main application configuration
    _config_instance = AppConfig(
        gemini=gemini_config,
        analysis=analysis_config
    )

    return _config_instance
