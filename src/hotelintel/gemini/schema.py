"""Pydantic schemas for the strategy analysis exchanged with the backend."""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits the camelCase keys used on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MarketInsight(CamelModel):
    title: str
    description: str
    impact: Literal["positive", "neutral", "negative"]
    source_url: Optional[str] = None


class StrategicRecommendation(CamelModel):
    type: Literal["Renovation", "NewService", "Optimization"]
    service: str
    rationale: str
    estimated_roi: str = Field(alias="estimatedROI")
    action_priority: Literal["High", "Medium", "Low"]


class BreakEvenPoint(CamelModel):
    month: float
    cumulative_profit: float
    label: str


class ServiceUsageDemand(CamelModel):
    service: str
    actual_usage: float
    market_demand: float


class CategoryJudgment(CamelModel):
    category: str
    verdict: Literal["Aggressive Expansion", "Strategic Maintain", "Optimization Required", "Phased Pivot"]
    rationale: str
    priority_score: float


class InvestmentItem(CamelModel):
    sub_category: str
    service_type: str
    allocation_amount: float
    rationale: str
    expected_annual_yield: str


class SimulationResult(CamelModel):
    judgment: str
    forecasted_revenue_impact: Optional[str] = None
    forecasted_profit_impact: Optional[str] = None
    break_even_months: float
    roi_percentage: float
    break_even_data: List[BreakEvenPoint] = Field(default_factory=list)
    confidence_score: float
    data_integrity: float
    recommendation_stability: Literal["High", "Moderate", "Volatile"]
    category_judgments: List[CategoryJudgment] = Field(default_factory=list)
    investment_plan: List[InvestmentItem] = Field(default_factory=list)


class WhatIfRecommendation(CamelModel):
    action: str
    expected_outcome: str
    feasibility_score: float


class Source(CamelModel):
    title: str
    uri: str


class BusinessAnalysis(CamelModel):
    """Strategy returned by the analysis backend."""
    historical_summary: str
    market_trends: List[MarketInsight]
    recommendations: List[StrategicRecommendation]
    sources: List[Source]
    simulation: Optional[SimulationResult] = None
    what_if_actions: Optional[List[WhatIfRecommendation]] = None
    usage_vs_demand: Optional[List[ServiceUsageDemand]] = None


class TransactionPayload(CamelModel):
    id: str
    date: str
    service_type: str
    revenue: float
    cost: float
    location: str


class AnalysisRequest(BaseModel):
    """Body of POST /api/analyze."""
    model_config = ConfigDict(populate_by_name=True)

    transactions: List[TransactionPayload]
    location: str
    budget_inr: float = Field(alias="budgetINR")
    target_monthly_profit: float = Field(alias="targetMonthlyProfit")
    target_roi: float = Field(alias="targetROI")
