from __future__ import annotations

import json
import logging
from typing import Protocol

import requests

from .model import InsightReport

logger = logging.getLogger(__name__)

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

_PROMPT = """
Analyze the following campus attendance data:
{data}

Provide:
1. A high-level summary of attendance trends.
2. Identify specific "at-risk" students (attendance below {threshold}%).
3. Strategic recommendations for faculty to improve engagement.
4. Any patterns in date/subject-wise absences.
"""

_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "atRiskStudents": {"type": "ARRAY", "items": {"type": "STRING"}},
        "recommendations": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["summary", "atRiskStudents", "recommendations"],
}


class InsightGeneratorError(Exception):
    """The external generator failed or returned something unusable."""


class InsightGenerator(Protocol):
    def generate(self, stats: dict) -> InsightReport:
        raise NotImplementedError


class GeminiInsightGenerator(InsightGenerator):
    """Calls the Gemini REST API and parses its JSON answer."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-2.0-flash",
        threshold_percent: int = 75,
        timeout: float = 15,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.threshold_percent = threshold_percent
        self.timeout = timeout
        self._http = session or requests.Session()

    def generate(self, stats: dict) -> InsightReport:
        body = {
            "contents": [
                {
                    "parts": [
                        {"text": _PROMPT.format(data=json.dumps(stats), threshold=self.threshold_percent)}
                    ]
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": _RESPONSE_SCHEMA,
            },
        }

        try:
            response = self._http.post(
                GEMINI_ENDPOINT.format(model=self.model),
                headers={"x-goog-api-key": self.api_key},
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise InsightGeneratorError(f"Gemini request failed: {e}") from e

        if response.status_code != 200:
            raise InsightGeneratorError(f"Gemini HTTP {response.status_code}: {response.text[:200]}")

        try:
            text = response.json()["candidates"][0]["content"]["parts"][0]["text"]
            data = json.loads(text or "{}")
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise InsightGeneratorError(f"Unexpected Gemini response: {e}") from e

        return InsightReport(
            summary=str(data.get("summary", "")),
            at_risk_participants=[str(s) for s in data.get("atRiskStudents", [])],
            recommendations=[str(s) for s in data.get("recommendations", [])],
        )
