"""Truck and charger data models."""
import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict

from fleet_charging.models.energy import remaining_energy_kwh, time_to_full_hours
from fleet_charging.models.errors import InvalidArgumentError


def _require_identifier(value: Any, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{label} id must be a non-empty string, got {value!r}")


def _require_number(value: Any, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{label} must be a number, got {value!r}")
    try:
        float(value)
    except OverflowError as e:
        raise InvalidArgumentError(f"{label} is out of range, got {value!r}") from e


@dataclass(frozen=True)
class Truck:
    """Represents an electric truck in the fleet."""

    truck_id: str
    battery_capacity_kwh: float
    current_charge_percent: float

    def __post_init__(self):
        _require_identifier(self.truck_id, 'Truck')
        _require_number(self.battery_capacity_kwh, 'Battery capacity')
        _require_number(self.current_charge_percent, 'Current charge percent')

        if not (math.isfinite(self.battery_capacity_kwh) and self.battery_capacity_kwh > 0):
            raise InvalidArgumentError(
                f"Battery capacity must be positive, got {self.battery_capacity_kwh} "
                f"for truck {self.truck_id}"
            )
        if not (0.0 <= self.current_charge_percent <= 100.0):
            raise InvalidArgumentError(
                f"Current charge percent must be between 0 and 100, got "
                f"{self.current_charge_percent} for truck {self.truck_id}"
            )

    @property
    def remaining_energy_kwh(self) -> float:
        """Energy needed to reach 100% SOC."""
        return remaining_energy_kwh(self)

    def is_fully_charged(self) -> bool:
        """Check if the truck needs no charging."""
        return self.current_charge_percent >= 100.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Truck':
        """
        Build a truck from a provider record.

        Args:
            data: Mapping with 'id', 'battery_capacity_kwh' and 'current_charge_percent'

        Returns:
            Validated Truck
        """
        return cls(
            truck_id=data['id'],
            battery_capacity_kwh=data['battery_capacity_kwh'],
            current_charge_percent=data['current_charge_percent']
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'id': self.truck_id,
            'battery_capacity_kwh': self.battery_capacity_kwh,
            'current_charge_percent': self.current_charge_percent
        }

    def __repr__(self):
        return f"Truck(id={self.truck_id}, capacity={self.battery_capacity_kwh}kWh, soc={self.current_charge_percent}%)"


@dataclass(frozen=True)
class Charger:
    """Represents a charging station delivering a constant rate."""

    charger_id: str
    rate_kw: float

    def __post_init__(self):
        _require_identifier(self.charger_id, 'Charger')
        _require_number(self.rate_kw, 'Charging rate')

        if not (math.isfinite(self.rate_kw) and self.rate_kw > 0):
            raise InvalidArgumentError(
                f"Charging rate must be positive, got {self.rate_kw} for charger {self.charger_id}"
            )

    def time_to_full_charge_hours(self, truck: Truck) -> float:
        """
        Calculate the time required to fully charge a truck.

        Args:
            truck: The truck to charge

        Returns:
            Charging time in hours
        """
        return time_to_full_hours(truck, self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Charger':
        """Build a charger from a provider record with 'id' and 'rate_kw'."""
        return cls(charger_id=data['id'], rate_kw=data['rate_kw'])

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {'id': self.charger_id, 'rate_kw': self.rate_kw}

    def __repr__(self):
        return f"Charger(id={self.charger_id}, rate={self.rate_kw}kW)"
