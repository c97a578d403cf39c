"""Energy model: remaining energy and time-to-full calculations."""
from typing import Sequence, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from fleet_charging.models.fleet import Truck, Charger


def remaining_energy_kwh(truck: 'Truck') -> float:
    """
    Energy needed to bring a truck to 100% state of charge.

    Args:
        truck: Truck to evaluate

    Returns:
        Remaining energy in kWh (0.0 for a fully charged truck)
    """
    remaining_fraction = 1.0 - (truck.current_charge_percent / 100.0)
    return max(0.0, truck.battery_capacity_kwh * remaining_fraction)


def time_to_full_hours(truck: 'Truck', charger: 'Charger') -> float:
    """
    Hours needed to fully charge a truck on a charger.

    Args:
        truck: Truck to charge
        charger: Charger delivering a constant rate

    Returns:
        Charging time in hours (0.0 for a fully charged truck)
    """
    return remaining_energy_kwh(truck) / charger.rate_kw


def time_to_full_matrix(trucks: Sequence['Truck'], chargers: Sequence['Charger']) -> np.ndarray:
    """
    Build the truck x charger time-to-full matrix.

    Row i, column j holds the hours truck i needs on charger j. Each entry is
    computed with the same operations as time_to_full_hours, so values are
    identical to the scalar calculation.

    Args:
        trucks: Trucks (rows)
        chargers: Chargers (columns)

    Returns:
        2D numpy array of shape (len(trucks), len(chargers))
    """
    capacities = np.array([t.battery_capacity_kwh for t in trucks], dtype=np.float64)
    charge_percents = np.array([t.current_charge_percent for t in trucks], dtype=np.float64)
    rates = np.array([c.rate_kw for c in chargers], dtype=np.float64)

    remaining = np.maximum(0.0, capacities * (1.0 - (charge_percents / 100.0)))
    return remaining.reshape(-1, 1) / rates.reshape(1, -1)


def best_charge_times(matrix: np.ndarray) -> np.ndarray:
    """Fastest uncontended charge time per truck (row-wise minimum)."""
    if matrix.size == 0:
        return np.zeros(matrix.shape[0], dtype=np.float64)
    return matrix.min(axis=1)
