"""Request objects for the DPD calculator."""
from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass
class Delivery:
    """Price quote input. Terminal flags mean self pickup / self delivery."""

    derival_city_id: int
    arrival_city_id: int
    parcel_total_weight: float
    derival_terminal: bool = False
    arrival_terminal: bool = False
    parcel_total_volume: float | None = None
    parcel_total_value: float | None = None
    pickup_date: str | None = None
    max_delivery_days: int | None = None
    max_delivery_price: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Delivery:
        known = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_request(self) -> dict:
        """Return the calculator fields of getServiceCost2 (without auth)."""
        return {
            "pickup": {"cityId": self.derival_city_id},
            "delivery": {"cityId": self.arrival_city_id},
            "selfPickup": self.derival_terminal,
            "selfDelivery": self.arrival_terminal,
            "weight": self.parcel_total_weight,
            "volume": self.parcel_total_volume,
            "declaredValue": self.parcel_total_value,
            "pickupDate": self.pickup_date,
            "maxDays": self.max_delivery_days,
            "maxPrice": self.max_delivery_price,
        }
