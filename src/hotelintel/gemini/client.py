"""HTTP client for the strategy analysis backend."""
from typing import Iterable, Optional

import requests
from pydantic import ValidationError

from hotelintel.analytics.models import Transaction
from hotelintel.gemini.schema import BusinessAnalysis
from hotelintel.utils.logger import get_logger
from hotelintel.utils.exceptions import AnalysisRequestFailed

logger = get_logger()


class AnalysisClient:
    """Posts transactions and planning targets to /api/analyze."""

    def __init__(self, endpoint: str, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def build_payload(
        transactions: Iterable[Transaction],
        location: str,
        budget_inr: float,
        target_monthly_profit: float,
        target_roi: float
    ) -> dict:
        return {
            "transactions": [txn.to_dict() for txn in transactions],
            "location": location,
            "budgetINR": budget_inr,
            "targetMonthlyProfit": target_monthly_profit,
            "targetROI": target_roi,
        }

    def analyze(
        self,
        transactions: Iterable[Transaction],
        location: str,
        budget_inr: float,
        target_monthly_profit: float,
        target_roi: float
    ) -> BusinessAnalysis:
        """
        Request a strategy analysis. Exactly one attempt, no retry.

        Returns:
            Validated BusinessAnalysis

        Raises:
            AnalysisRequestFailed: network error, non-200 status or a body
                that does not match the analysis schema
        """
        payload = self.build_payload(transactions, location, budget_inr, target_monthly_profit, target_roi)
        logger.info(f"Requesting analysis for {location} with {len(payload['transactions'])} transactions")

        try:
            response = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Analysis backend request failed: {e}")
            raise AnalysisRequestFailed(f"Backend request failed: {e}") from e

        if response.status_code != 200:
            message = self._error_message(response)
            logger.error(f"Analysis backend returned {response.status_code}: {message}")
            raise AnalysisRequestFailed(message, status_code=response.status_code)

        try:
            analysis = BusinessAnalysis.model_validate(response.json())
        except ValueError as e:
            # json decode errors and pydantic ValidationError are both ValueError subclasses
            kind = "schema mismatch" if isinstance(e, ValidationError) else "invalid JSON"
            logger.error(f"Analysis response rejected ({kind}): {e}")
            raise AnalysisRequestFailed(f"Analysis response rejected ({kind})", status_code=200) from e

        logger.info(
            f"Analysis received: {len(analysis.market_trends)} trends, {len(analysis.sources)} sources"
        )
        return analysis

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"Server responded with status {response.status_code}"
