# ==============================================
# TOPIC 3: RETENTION ADVICE (Gemini)
# ==============================================
#
# This package turns an analysis into a prompt and asks the
# Gemini text-generation service for retention strategies.
#
# Modules:
# --------
# - prompt_builder.py → Render summary, employee and neighbours into a prompt
# - gemini_client.py  → REST call with an ordered model fallback chain
# - result.py         → StrategyResult / GenerationAttempt data classes
#
# ==============================================

from .prompt_builder import PromptBuilder, build_prompt
from .gemini_client import GeminiClient, MODEL_FALLBACK_CHAIN, is_model_not_found
from .result import StrategyResult, GenerationAttempt

__all__ = [
    "PromptBuilder",
    "build_prompt",
    "GeminiClient",
    "MODEL_FALLBACK_CHAIN",
    "is_model_not_found",
    "StrategyResult",
    "GenerationAttempt",
]
