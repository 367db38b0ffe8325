"""Tests for the Gemini strategist with a fake Gemini client."""
import json
import unittest

import httpx
from google.genai import errors

from hotelintel.gemini.schema import AnalysisRequest
from hotelintel.gemini.strategist import GeminiStrategist
from hotelintel.utils.exceptions import LLMError, RetryableLLMError

from sample_analysis import sample_analysis


class FakeWeb:
    def __init__(self, title, uri):
        self.title = title
        self.uri = uri


class FakeChunk:
    def __init__(self, title, uri):
        self.web = FakeWeb(title, uri)


class FakeMetadata:
    def __init__(self, chunks):
        self.grounding_chunks = chunks


class FakeCandidate:
    def __init__(self, chunks=None):
        self.grounding_metadata = FakeMetadata(chunks or [])


class FakeResponse:
    def __init__(self, text, chunks=None):
        self.text = text
        self.candidates = [FakeCandidate(chunks)]


class FakeModels:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def generate_content(self, model, contents, config=None):
        self.calls.append((model, contents, config))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeGenaiClient:
    def __init__(self, *outcomes):
        self.models = FakeModels(outcomes)


def make_request(location="San Francisco"):
    return AnalysisRequest.model_validate({
        "transactions": [{
            "id": "mar-1", "date": "2025-03-05", "serviceType": "MICE",
            "revenue": 45000, "cost": 20000, "location": location
        }],
        "location": location,
        "budgetINR": 5000000,
        "targetMonthlyProfit": 15000,
        "targetROI": 20,
    })


def unavailable():
    return errors.ServerError(503, {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}})


class TestGeminiStrategist(unittest.TestCase):

    def _strategist(self, *outcomes, max_retries=3):
        client = FakeGenaiClient(*outcomes)
        strategist = GeminiStrategist(api_key="test_key", client=client, max_retries=max_retries, initial_delay=0)
        return strategist, client

    def test_analyze_returns_validated_result(self):
        strategist, client = self._strategist(FakeResponse(json.dumps(sample_analysis())))

        analysis = strategist.analyze(make_request())

        self.assertEqual(analysis.simulation.recommendation_stability, "Moderate")
        self.assertEqual(len(client.models.calls), 1)
        model, prompt, _ = client.models.calls[0]
        self.assertEqual(model, "gemini-2.5-flash")
        self.assertIn("San Francisco", prompt)
        self.assertIn("INR 5,000,000", prompt)
        self.assertIn("INR 1,252,500", prompt)
        self.assertIn('"serviceType": "MICE"', prompt)

    def test_grounding_chunks_replace_sources(self):
        chunks = [
            FakeChunk("Visit SF", "https://visit.example/sf"),
            FakeChunk("Visit SF", "https://visit.example/sf"),
            FakeChunk(None, "https://news.example/hotels"),
        ]
        strategist, _ = self._strategist(FakeResponse(json.dumps(sample_analysis()), chunks))

        analysis = strategist.analyze(make_request())

        self.assertEqual(
            [(s.title, s.uri) for s in analysis.sources],
            [("Visit SF", "https://visit.example/sf"), ("https://news.example/hotels", "https://news.example/hotels")]
        )

    def test_missing_sources_default_to_empty(self):
        body = sample_analysis()
        del body["sources"]
        strategist, _ = self._strategist(FakeResponse(json.dumps(body)))

        self.assertEqual(strategist.analyze(make_request()).sources, [])

    def test_code_fence_and_trailing_commas(self):
        text = json.dumps(sample_analysis(), indent=2)
        text = text.replace('"impact": "positive"', '"impact": "positive",')
        strategist, _ = self._strategist(FakeResponse(f"```json\n{text}\n```"))

        analysis = strategist.analyze(make_request())
        self.assertEqual(analysis.market_trends[0].impact, "positive")

    def test_empty_response(self):
        strategist, _ = self._strategist(FakeResponse(""))
        with self.assertRaises(LLMError):
            strategist.analyze(make_request())

    def test_invalid_json(self):
        strategist, _ = self._strategist(FakeResponse("Here is your strategy: great!"))
        with self.assertRaises(LLMError):
            strategist.analyze(make_request())

    def test_schema_violation(self):
        body = sample_analysis()
        body["recommendations"][0]["actionPriority"] = "Urgent"
        strategist, _ = self._strategist(FakeResponse(json.dumps(body)))
        with self.assertRaises(LLMError):
            strategist.analyze(make_request())

    def test_retries_when_unavailable(self):
        strategist, client = self._strategist(unavailable(), FakeResponse(json.dumps(sample_analysis())))

        analysis = strategist.analyze(make_request())

        self.assertIsNotNone(analysis)
        self.assertEqual(len(client.models.calls), 2)

    def test_connection_failure_is_retried(self):
        strategist, client = self._strategist(
            httpx.ConnectError("connection refused"), FakeResponse(json.dumps(sample_analysis()))
        )

        analysis = strategist.analyze(make_request())

        self.assertEqual(analysis.simulation.roi_percentage, 22.5)
        self.assertEqual(len(client.models.calls), 2)

    def test_connection_failure_exhausts_retries(self):
        strategist, client = self._strategist(
            httpx.ConnectError("connection refused"), httpx.ReadTimeout("timed out"), max_retries=2
        )

        with self.assertRaises(RetryableLLMError):
            strategist.analyze(make_request())
        self.assertEqual(len(client.models.calls), 2)

    def test_gives_up_after_max_retries(self):
        strategist, client = self._strategist(unavailable(), unavailable(), max_retries=2)

        with self.assertRaises(RetryableLLMError):
            strategist.analyze(make_request())
        self.assertEqual(len(client.models.calls), 2)


if __name__ == "__main__":
    unittest.main()
