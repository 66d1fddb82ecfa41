# ==============================================
# GeminiClient
# ==============================================
#
# PURPOSE:
#   Send one prompt to the Gemini generateContent REST endpoint and
#   return the generated text.
#
# MODEL FALLBACK:
# ---------------
#   Candidates = [GEMINI_MODEL (if set)] + MODEL_FALLBACK_CHAIN,
#   de-duplicated, order kept.
#
#   For each candidate:
#     - success                       → StrategyResult(text, model)
#     - "model not found" (404+model) → record attempt, try the next one
#     - anything else                 → GenerationError, stop immediately
#
#   If every candidate is "not found" → GenerationError listing all
#   attempts. There is no other retry or backoff.
#
# HTTP:
# -----
#   POST {base_url}/models/{model}:generateContent
#   Header x-goog-api-key: <GOOGLE_API_KEY>
#   Uses requests (a Session can be injected for tests).
#
# ==============================================

import re
from typing import Any, Dict, List, Optional

import requests

from retention_advisor.config import GeminiConfig
from retention_advisor.errors import ConfigurationError, GenerationError, RetentionAdvisorError
from .prompt_builder import SYSTEM_INSTRUCTION
from .result import GenerationAttempt, StrategyResult


MODEL_FALLBACK_CHAIN = [
    "gemini-2.0-flash",
    "gemini-2.0-flash-exp",
    "gemini-1.5-flash-latest",
    "gemini-1.5-flash",
    "gemini-1.5-flash-8b",
    "gemini-1.5-pro",
    "gemini-pro",
    "gemini-1.0-pro-latest",
]

MISSING_API_KEY_MESSAGE = "Missing GOOGLE_API_KEY. Set it in your environment or .env.local file."


class GeminiRequestError(RetentionAdvisorError):
    """A single generateContent call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def is_model_not_found(message: str) -> bool:
    return "404" in message and re.search(r"model", message, re.IGNORECASE) is not None


class GeminiClient:
    """
    Thin REST client for Gemini with an ordered model fallback chain.
    """

    def __init__(self, config: GeminiConfig, session: Optional[requests.Session] = None):
        """
        Args:
            config: Gemini settings (key, preferred model, endpoint, sampling)
            session: Optional requests.Session; a new one is created otherwise
        """
        self._config = config
        self._session = session or requests.Session()

    # ======================================
    # Public API
    # ======================================
    def ensure_configured(self) -> None:
        if not self._config.api_key:
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)

    def model_candidates(self) -> List[str]:
        """
        Preferred model first, then the fallback chain, without duplicates.
        """
        preferred = (self._config.preferred_model or "").strip()
        candidates = [preferred] + MODEL_FALLBACK_CHAIN
        return list(dict.fromkeys(model for model in candidates if model))

    def generate(self, prompt: str) -> StrategyResult:
        """
        Generate text for a prompt, walking the model candidates.

        Args:
            prompt: Full prompt text

        Returns:
            StrategyResult with the generated text and the model used

        Raises:
            ConfigurationError: If no API key is configured
            GenerationError: On any failure other than "model not found",
                             or when no candidate model is available
        """
        self.ensure_configured()

        attempts: List[GenerationAttempt] = []
        last_error: Optional[GeminiRequestError] = None

        for model in self.model_candidates():
            try:
                text = self._generate_with_model(model, prompt)
                return StrategyResult(strategy=text, model=model)
            except GeminiRequestError as e:
                last_error = e
                attempts.append(GenerationAttempt(model=model, message=e.message))
                if is_model_not_found(e.message):
                    print(f"⚠ Model '{model}' not found, trying next candidate")
                    continue

                raise GenerationError(e.message, attempts) from e

        message = (
            'Gemini model unavailable. Set GEMINI_MODEL to a supported value '
            '(e.g. "gemini-1.5-flash-latest") or verify access in Google AI Studio. '
        )
        if last_error is not None:
            message += f"Last error: {last_error.message}"
        raise GenerationError(message.strip(), attempts)

    # ======================================
    # HTTP
    # ======================================
    def _generate_with_model(self, model: str, prompt: str) -> str:
        url = f"{self._config.base_url}/models/{model}:generateContent"

        try:
            response = self._session.post(
                url,
                json=self._build_payload(prompt),
                headers={"x-goog-api-key": self._config.api_key},
                timeout=self._config.timeout_seconds
            )
        except requests.exceptions.RequestException as e:
            raise GeminiRequestError(f"Error fetching from {url}: {e}") from e

        if not response.ok:
            raise GeminiRequestError(
                f"Error fetching from {url}: [{response.status_code} {response.reason}] "
                f"{self._error_detail(response)}",
                status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise GeminiRequestError(f"Invalid response from {url}: {e}") from e

        return self._extract_text(body)

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ],
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "safetySettings": [],
            "generationConfig": {
                "temperature": self._config.temperature,
                "topP": self._config.top_p,
                "maxOutputTokens": self._config.max_output_tokens,
                "responseMimeType": "text/plain",
            },
        }

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return response.text

    @staticmethod
    def _extract_text(body: Dict[str, Any]) -> str:
        candidates = body.get("candidates") or []
        if not candidates:
            feedback = body.get("promptFeedback") or {}
            reason = feedback.get("blockReason")
            if reason:
                raise GeminiRequestError(f"Text not available. Response was blocked due to {reason}")
            return ""

        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)
