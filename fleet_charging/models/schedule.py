"""Schedule data models produced by the charging schedulers."""
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from fleet_charging.models.errors import AppError, SchedulingError
from fleet_charging.models.fleet import Truck


@dataclass(frozen=True)
class ScheduleAssignment:
    """A single truck charging slot on a charger, in hours from schedule start."""

    truck: Truck
    start_time: float
    end_time: float
    charge_time_hours: float

    def __post_init__(self):
        if self.start_time < 0:
            raise SchedulingError(f"Start time must be non-negative, got {self.start_time}")
        if not self.end_time > self.start_time:
            raise SchedulingError(
                f"End time must be after start time ({self.start_time} -> {self.end_time})"
            )
        if self.charge_time_hours <= 0:
            raise SchedulingError(f"Charge time must be positive, got {self.charge_time_hours}")
        if not math.isclose(self.end_time - self.start_time, self.charge_time_hours,
                            rel_tol=1e-9, abs_tol=1e-9):
            raise SchedulingError(
                f"Charge time {self.charge_time_hours} does not match slot "
                f"{self.start_time} -> {self.end_time}"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'truck_id': self.truck.truck_id,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'charge_time_hours': self.charge_time_hours
        }

    def __repr__(self):
        return (f"ScheduleAssignment(truck={self.truck.truck_id}, "
                f"{self.start_time:.2f}h -> {self.end_time:.2f}h)")


@dataclass(frozen=True)
class ChargerSchedule:
    """Back-to-back assignments for one charger."""

    charger_id: str
    assignments: Tuple[ScheduleAssignment, ...] = ()
    total_scheduled_time: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'assignments', tuple(self.assignments))

        if self.total_scheduled_time < 0:
            raise SchedulingError(
                f"Total scheduled time must be non-negative, got {self.total_scheduled_time}"
            )

        # Contiguous from time zero: no gaps, no overlap
        expected_start = 0.0
        for assignment in self.assignments:
            if assignment.start_time != expected_start:
                raise SchedulingError(
                    f"Charger {self.charger_id}: assignment for {assignment.truck.truck_id} "
                    f"starts at {assignment.start_time}, expected {expected_start}"
                )
            expected_start = assignment.end_time

        if self.total_scheduled_time != expected_start:
            raise SchedulingError(
                f"Charger {self.charger_id}: total scheduled time {self.total_scheduled_time} "
                f"does not match last assignment end {expected_start}"
            )

    def utilization_percent(self, time_horizon_hours: float) -> float:
        """
        Share of the time horizon this charger is occupied.

        Args:
            time_horizon_hours: Scheduling window in hours

        Returns:
            Utilization percentage (0-100)
        """
        if time_horizon_hours > 0:
            return (self.total_scheduled_time / time_horizon_hours) * 100.0
        return 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'charger_id': self.charger_id,
            'total_scheduled_time': self.total_scheduled_time,
            'assignments': [a.to_dict() for a in self.assignments]
        }


@dataclass(frozen=True)
class ScheduleResult:
    """Complete charging schedule for one scheduling run."""

    charger_schedules: Mapping[str, ChargerSchedule]
    fully_charged_count: int
    total_trucks: int
    time_horizon_hours: float
    unassigned_trucks: Tuple[Truck, ...] = ()
    # Trucks given a charger, in the order the greedy pass assigned them
    assigned_trucks: Tuple[Truck, ...] = ()
    already_charged_trucks: Tuple[Truck, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'charger_schedules', MappingProxyType(dict(self.charger_schedules)))
        object.__setattr__(self, 'unassigned_trucks', tuple(self.unassigned_trucks))
        object.__setattr__(self, 'assigned_trucks', tuple(self.assigned_trucks))
        object.__setattr__(self, 'already_charged_trucks', tuple(self.already_charged_trucks))

        errors = self.validate()
        if errors:
            raise SchedulingError('; '.join(errors))

    def validate(self):
        """
        Check the result invariants.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.fully_charged_count < 0:
            errors.append(f"fully_charged_count must be non-negative, got {self.fully_charged_count}")
        if self.total_trucks < 0:
            errors.append(f"total_trucks must be non-negative, got {self.total_trucks}")
        if not self.time_horizon_hours > 0:
            errors.append(f"time_horizon_hours must be positive, got {self.time_horizon_hours}")

        if self.fully_charged_count + len(self.unassigned_trucks) != self.total_trucks:
            errors.append(
                f"fully charged ({self.fully_charged_count}) + unassigned "
                f"({len(self.unassigned_trucks)}) must equal total trucks ({self.total_trucks})"
            )
        if self.fully_charged_count != len(self.assigned_trucks) + len(self.already_charged_trucks):
            errors.append(
                f"fully charged ({self.fully_charged_count}) must equal assigned "
                f"({len(self.assigned_trucks)}) + already charged ({len(self.already_charged_trucks)})"
            )

        scheduled_ids = []
        for charger_id, schedule in self.charger_schedules.items():
            if schedule.charger_id != charger_id:
                errors.append(f"schedule for {schedule.charger_id} stored under key {charger_id}")
            if schedule.total_scheduled_time > self.time_horizon_hours:
                errors.append(
                    f"charger {charger_id} scheduled for {schedule.total_scheduled_time}h, "
                    f"beyond the {self.time_horizon_hours}h horizon"
                )
            scheduled_ids.extend(a.truck.truck_id for a in schedule.assignments)

        if sorted(scheduled_ids) != sorted(t.truck_id for t in self.assigned_trucks):
            errors.append("assigned trucks do not match charger assignments")

        return errors

    def utilization_percent(self) -> float:
        """Percentage of trucks that will be fully charged (0-100)."""
        if self.total_trucks > 0:
            return (self.fully_charged_count / self.total_trucks) * 100.0
        return 0.0

    def get_charger_for_truck(self, truck_id: str) -> Optional[str]:
        """Charger a truck was assigned to, or None."""
        for charger_id, schedule in self.charger_schedules.items():
            if any(a.truck.truck_id == truck_id for a in schedule.assignments):
                return charger_id
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'time_horizon_hours': self.time_horizon_hours,
            'total_trucks': self.total_trucks,
            'fully_charged_count': self.fully_charged_count,
            'utilization_percent': self.utilization_percent(),
            'charger_schedules': [
                dict(schedule.to_dict(),
                     utilization_percent=schedule.utilization_percent(self.time_horizon_hours))
                for schedule in self.charger_schedules.values()
            ],
            'unassigned_trucks': [t.truck_id for t in self.unassigned_trucks],
            'already_charged_trucks': [t.truck_id for t in self.already_charged_trucks]
        }

    def __repr__(self):
        return (f"ScheduleResult(charged={self.fully_charged_count}/{self.total_trucks}, "
                f"chargers={len(self.charger_schedules)}, horizon={self.time_horizon_hours}h)")


@dataclass(frozen=True)
class ScheduleOutcome:
    """Either a schedule or the error that prevented it, never both."""

    schedule: Optional[ScheduleResult] = None
    error: Optional[AppError] = field(default=None)

    def __post_init__(self):
        if (self.schedule is None) == (self.error is None):
            raise SchedulingError("ScheduleOutcome requires exactly one of schedule or error")

    @classmethod
    def success(cls, schedule: ScheduleResult) -> 'ScheduleOutcome':
        return cls(schedule=schedule)

    @classmethod
    def failure(cls, error: AppError) -> 'ScheduleOutcome':
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.schedule is not None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def get_or_none(self) -> Optional[ScheduleResult]:
        return self.schedule

    def error_or_none(self) -> Optional[AppError]:
        return self.error
