"""FuelLog class and fuel summary helpers."""

from dataclasses import dataclass
from typing import Iterable, Optional


class FuelLog:
    """A fueling event. Historical fact, never derived or updated."""

    def __init__(
            self,
            vehicle_id: str,
            date: str,
            gallons: float,
            cost: Optional[float] = None,
            driver_id: Optional[str] = None,
            notes: Optional[str] = None,
    ):
        self.vehicle_id = vehicle_id
        self.driver_id = driver_id
        self.date = date
        self.gallons = gallons
        self.cost = cost
        self.notes = notes

    @property
    def price_per_gallon(self) -> Optional[float]:
        if self.cost is None or not self.gallons:
            return None
        return self.cost / self.gallons


@dataclass
class FuelSummary:
    """Totals over a set of fuel logs."""

    count: int
    total_gallons: float
    total_cost: float
    average_price: Optional[float]


def fuel_summary(logs: Iterable[FuelLog]) -> FuelSummary:
    """Total gallons and cost; average price only counts logs that carry a cost."""
    logs = list(logs)
    total_gallons = sum(log.gallons for log in logs)
    total_cost = sum(log.cost for log in logs if log.cost is not None)
    priced_gallons = sum(log.gallons for log in logs if log.cost is not None)
    average = total_cost / priced_gallons if priced_gallons else None
    return FuelSummary(
        count=len(logs),
        total_gallons=total_gallons,
        total_cost=total_cost,
        average_price=average,
    )
