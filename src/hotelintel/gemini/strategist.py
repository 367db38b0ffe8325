"""Gemini-backed strategy analysis for the /api/analyze backend."""
import json
import re
from typing import List

import httpx
from google import genai
from google.genai import errors, types
from pydantic import ValidationError

from hotelintel.analytics.currency import CurrencyConverter
from hotelintel.gemini.schema import AnalysisRequest, BusinessAnalysis
from hotelintel.utils.logger import get_logger, set_location_context
from hotelintel.utils.retry import retry_with_backoff
from hotelintel.utils.exceptions import LLMError, RetryableLLMError

logger = get_logger()

RETRYABLE_STATUS = (429, 500, 502, 503, 504)

OUTPUT_SCHEMA = """{
  "historicalSummary": "string",
  "marketTrends": [{"title": "string", "description": "string", "impact": "positive|neutral|negative"}],
  "usageVsDemand": [{"service": "string", "actualUsage": 0, "marketDemand": 0}],
  "recommendations": [{"type": "Renovation|NewService|Optimization", "service": "string", "rationale": "string", "estimatedROI": "string", "actionPriority": "High|Medium|Low"}],
  "simulation": {
    "judgment": "string",
    "forecastedRevenueImpact": "string",
    "forecastedProfitImpact": "string",
    "breakEvenMonths": 0,
    "roiPercentage": 0,
    "confidenceScore": 0,
    "dataIntegrity": 0,
    "recommendationStability": "High|Moderate|Volatile",
    "categoryJudgments": [{"category": "string", "verdict": "Aggressive Expansion|Strategic Maintain|Optimization Required|Phased Pivot", "rationale": "string", "priorityScore": 0}],
    "investmentPlan": [{"subCategory": "string", "serviceType": "string", "allocationAmount": 0, "rationale": "string", "expectedAnnualYield": "string"}],
    "breakEvenData": [{"month": 0, "cumulativeProfit": 0, "label": "string"}]
  },
  "whatIfActions": [{"action": "string", "expectedOutcome": "string", "feasibilityScore": 0}]
}"""


class GeminiStrategist:
    """Builds the strategy prompt and validates Gemini's answer."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        max_retries: int = 3,
        initial_delay: float = 2,
        backoff_factor: float = 2,
        converter: CurrencyConverter = None,
        client=None
    ):
        self.client = client or genai.Client(api_key=api_key)
        self.model_name = model_name
        self.converter = converter or CurrencyConverter()
        self._generate = retry_with_backoff(
            max_retries=max_retries,
            initial_delay=initial_delay,
            backoff_factor=backoff_factor
        )(self._generate_once)

        logger.info(f"Gemini Strategist initialized with {self.model_name}")

    def analyze(self, request: AnalysisRequest) -> BusinessAnalysis:
        """
        Produce a strategy analysis for the request.

        Raises:
            LLMError: empty, unparseable or schema-violating model output
            RetryableLLMError: Gemini stayed unavailable after all retries
        """
        set_location_context(request.location)
        try:
            prompt = self._build_prompt(request)
            response = self._generate(prompt)

            if not response.text:
                raise LLMError("Gemini returned empty response")

            data = self._parse_response(response.text)
            sources = self._extract_sources(response)
            if sources or "sources" not in data:
                data["sources"] = sources

            try:
                analysis = BusinessAnalysis.model_validate(data)
            except ValidationError as e:
                logger.error(f"Response validation failed: {e}")
                raise LLMError(f"Gemini response does not match expected schema: {e}")

            logger.info(
                f"Strategy generated: {len(analysis.market_trends)} trends, "
                f"{len(analysis.sources)} grounding sources"
            )
            return analysis
        finally:
            set_location_context(None)

    def _generate_once(self, prompt: str):
        try:
            return self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                    temperature=0.4
                )
            )
        except errors.APIError as e:
            if e.code in RETRYABLE_STATUS:
                raise RetryableLLMError(f"Gemini unavailable ({e.code}): {e}")
            raise LLMError(f"Gemini request failed ({e.code}): {e}")
        except (httpx.HTTPError, OSError) as e:
            logger.warning(f"Gemini transport failure: {e}")
            raise RetryableLLMError(f"Could not reach Gemini: {e}")

    def _build_prompt(self, request: AnalysisRequest) -> str:
        """Build strategy prompt."""
        transactions = [txn.model_dump(by_alias=True) for txn in request.transactions]
        target_profit_inr = self.converter.target_profit_inr(request.target_monthly_profit)

        return f"""You are a hospitality revenue strategist for a hotel's non-room services
(Spa, Dining, MICE, Parking, Retail, Wellness) in {request.location}.

Historical transactions (amounts in USD):
{json.dumps(transactions, indent=2)}

Planning parameters:
- Investment budget: INR {request.budget_inr:,.0f}
- Target monthly net profit: USD {request.target_monthly_profit:,.0f} (INR {target_profit_inr:,})
- Target ROI: {request.target_roi:g}%

Use current market intelligence for {request.location} to:
1. Summarize historical performance per service.
2. Describe local market trends and their impact.
3. Compare actual usage against market demand per service.
4. Allocate the full budget across concrete sub-categories (allocationAmount in INR).
5. Simulate break-even and ROI against the targets and judge each service category.
6. Propose what-if actions with a feasibility score from 0 to 100.

Return ONLY a valid JSON object in this format:
{OUTPUT_SCHEMA}

Do not include any explanations or markdown formatting, just the JSON object."""

    def _parse_response(self, text: str) -> dict:
        """Parse JSON response with cleanup for common LLM formatting errors."""
        clean_text = text.strip()

        # Strip markdown code blocks
        if clean_text.startswith("```"):
            clean_text = re.sub(r'^(```json|```)', '', clean_text).strip()
        if clean_text.endswith("```"):
            clean_text = clean_text[:-3].strip()

        # Trailing commas before a closing bracket or brace
        clean_text = re.sub(r',\s*([\]}])', r'\1', clean_text)

        try:
            data = json.loads(clean_text, strict=False)
        except json.JSONDecodeError as e:
            logger.error(f"Raw response (first 100 chars): {text[:100]}...")
            raise LLMError(f"Invalid JSON response from Gemini: {e}")

        if not isinstance(data, dict):
            raise LLMError("Gemini response is not a JSON object")
        return data

    @staticmethod
    def _extract_sources(response) -> List[dict]:
        """Collect web grounding chunks as {title, uri}."""
        sources = []
        seen = set()
        for candidate in response.candidates or []:
            metadata = getattr(candidate, "grounding_metadata", None)
            for chunk in getattr(metadata, "grounding_chunks", None) or []:
                web = getattr(chunk, "web", None)
                if not web or not web.uri or web.uri in seen:
                    continue
                seen.add(web.uri)
                sources.append({"title": web.title or web.uri, "uri": web.uri})
        return sources
