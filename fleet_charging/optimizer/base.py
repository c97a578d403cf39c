"""Base class for charging schedulers."""
from abc import ABC, abstractmethod
from typing import Sequence

from fleet_charging.models.fleet import Truck, Charger
from fleet_charging.models.schedule import ScheduleResult


class ChargingScheduler(ABC):
    """Abstract scheduling strategy; alternative algorithms plug in here."""

    @abstractmethod
    def schedule(
        self,
        trucks: Sequence[Truck],
        chargers: Sequence[Charger],
        time_horizon_hours: float
    ) -> ScheduleResult:
        """
        Generate a charging schedule.

        Args:
            trucks: Trucks to schedule, in caller order
            chargers: Available chargers, in caller order
            time_horizon_hours: Scheduling window in hours

        Returns:
            ScheduleResult covering every truck and charger

        Raises:
            InvalidArgumentError: If inputs are invalid
        """
        pass

    def get_name(self) -> str:
        """Get scheduler name."""
        return self.__class__.__name__

    def __repr__(self):
        return f"{self.get_name()}()"
