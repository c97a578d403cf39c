"""Optimizer package initialization."""
from fleet_charging.optimizer.base import ChargingScheduler
from fleet_charging.optimizer.greedy_scheduler import GreedyShortestJobFirstScheduler

__all__ = [
    'ChargingScheduler',
    'GreedyShortestJobFirstScheduler',
]
