"""Controllers package initialization."""

from fleet_charging.controllers.schedule_controller import ChargingScheduleController

__all__ = ['ChargingScheduleController']
