"""Strategy analysis: schema, backend client and Gemini strategist."""
from .schema import BusinessAnalysis, AnalysisRequest
from .client import AnalysisClient

__all__ = ["BusinessAnalysis", "AnalysisRequest", "AnalysisClient"]
