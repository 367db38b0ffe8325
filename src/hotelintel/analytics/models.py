"""Data models for service revenue analytics."""
from dataclasses import dataclass
from typing import Dict, Optional

SERVICE_TYPES = ("Spa", "Dining", "MICE", "Parking", "Retail", "Wellness")


@dataclass(frozen=True)
class Transaction:
    """A single ancillary-service sale."""
    id: str
    date: str  # YYYY-MM-DD
    service_type: str
    revenue: float
    cost: float
    location: str

    @property
    def month_key(self) -> str:
        return self.date[:7]

    @property
    def profit(self) -> float:
        return self.revenue - self.cost

    @classmethod
    def from_dict(cls, data: Dict) -> "Transaction":
        """Build from the camelCase wire/resource format."""
        return cls(
            id=str(data["id"]),
            date=data["date"],
            service_type=data["serviceType"],
            revenue=float(data["revenue"]),
            cost=float(data["cost"]),
            location=data["location"]
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "date": self.date,
            "serviceType": self.service_type,
            "revenue": self.revenue,
            "cost": self.cost,
            "location": self.location,
        }


@dataclass(frozen=True)
class Aggregate:
    """Summed revenue and cost over a subset of transactions."""
    revenue: float = 0.0
    cost: float = 0.0

    @property
    def profit(self) -> float:
        return self.revenue - self.cost

    def metric(self, name: str) -> float:
        if name not in ("revenue", "cost", "profit"):
            raise KeyError(name)
        return getattr(self, name)


@dataclass(frozen=True)
class ServiceStat:
    """Per-service totals for the distribution charts."""
    name: str
    revenue: float
    cost: float

    @property
    def profit(self) -> float:
        return self.revenue - self.cost


@dataclass(frozen=True)
class ServicePerformance:
    name: str
    value: float


@dataclass(frozen=True)
class AggregatedPeriod:
    """One row of the fixed timeline."""
    month_key: str
    label: str
    revenue: float
    cost: float
    top_service: Optional[ServicePerformance] = None
    bottom_service: Optional[ServicePerformance] = None

    @property
    def profit(self) -> float:
        return self.revenue - self.cost

    @property
    def yield_pct(self) -> Optional[float]:
        """Net contribution as a share of revenue, None for an empty month."""
        if self.revenue == 0:
            return None
        return self.profit / self.revenue * 100
