"""Greedy shortest-job-first charging scheduler."""
import numbers
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from fleet_charging.models.energy import time_to_full_matrix, best_charge_times
from fleet_charging.models.errors import InvalidArgumentError
from fleet_charging.models.fleet import Truck, Charger
from fleet_charging.models.schedule import ScheduleAssignment, ChargerSchedule, ScheduleResult
from fleet_charging.optimizer.base import ChargingScheduler


@dataclass(frozen=True)
class _PendingTruck:
    """Truck awaiting assignment, with its row in the time-to-full matrix."""

    truck: Truck
    row: int
    best_time: float


class GreedyShortestJobFirstScheduler(ChargingScheduler):
    """
    Greedy list scheduler maximizing the number of fully charged trucks.

    Algorithm:
    1. Set aside trucks that are already fully charged
    2. Compute each truck's best (uncontended) time to full across all chargers
    3. Reject trucks whose best time exceeds the time horizon
    4. Sort the rest by best time, shortest first (stable for ties)
    5. Give each truck, in order, the charger where it would finish earliest
       given the load already committed, if that finish is within the horizon

    Chargers are scanned in caller order and only a strictly earlier finish
    replaces the current candidate, so ties go to the first charger listed.
    """

    def schedule(
        self,
        trucks: Sequence[Truck],
        chargers: Sequence[Charger],
        time_horizon_hours: float
    ) -> ScheduleResult:
        trucks = list(trucks)
        chargers = list(chargers)
        self._validate_inputs(trucks, chargers, time_horizon_hours)

        already_charged = [t for t in trucks if t.is_fully_charged()]
        to_charge = [t for t in trucks if not t.is_fully_charged()]

        matrix = time_to_full_matrix(to_charge, chargers)
        best_times = best_charge_times(matrix)

        eligible: List[_PendingTruck] = []
        rejected_by_horizon: List[Truck] = []
        for row, truck in enumerate(to_charge):
            best_time = float(best_times[row])
            if best_time <= time_horizon_hours:
                eligible.append(_PendingTruck(truck, row, best_time))
            else:
                rejected_by_horizon.append(truck)

        # sorted() is stable: equal best times keep input order
        eligible = sorted(eligible, key=lambda p: p.best_time)

        assignments, usage, assigned, rejected_by_load = self._assign(
            eligible, matrix, chargers, time_horizon_hours
        )

        return self._build_result(
            chargers, assignments, usage, time_horizon_hours,
            total_trucks=len(trucks),
            assigned=assigned,
            already_charged=already_charged,
            unassigned=rejected_by_horizon + rejected_by_load
        )

    def reapply(self, result: ScheduleResult, chargers: Sequence[Charger]) -> ScheduleResult:
        """
        Re-run the assignment phase over a produced schedule.

        The assigned trucks are replayed in their recorded assignment order
        against fresh charger usage. For a result produced by schedule() with
        the same chargers, the rebuilt charger schedules are identical.

        Args:
            result: Previously produced schedule
            chargers: Chargers the schedule was built for, in the same order

        Returns:
            Rebuilt ScheduleResult with the original unassigned and
            already-charged trucks carried over
        """
        chargers = list(chargers)
        self._validate_inputs(list(result.assigned_trucks), chargers, result.time_horizon_hours)

        frozen_order = list(result.assigned_trucks)
        matrix = time_to_full_matrix(frozen_order, chargers)
        pending = [
            _PendingTruck(truck, row, float(matrix[row].min()))
            for row, truck in enumerate(frozen_order)
        ]

        assignments, usage, assigned, rejected = self._assign(
            pending, matrix, chargers, result.time_horizon_hours
        )

        return self._build_result(
            chargers, assignments, usage, result.time_horizon_hours,
            total_trucks=result.total_trucks,
            assigned=assigned,
            already_charged=list(result.already_charged_trucks),
            unassigned=list(result.unassigned_trucks) + rejected
        )

    @staticmethod
    def _validate_inputs(trucks: List[Truck], chargers: List[Charger], time_horizon_hours) -> None:
        """Fail fast on preconditions before any scheduling work."""
        if isinstance(time_horizon_hours, bool) or not isinstance(time_horizon_hours, numbers.Real) \
                or not time_horizon_hours > 0:
            raise InvalidArgumentError("time horizon must be positive")
        if not chargers:
            raise InvalidArgumentError("at least one charger required")

        charger_ids = [c.charger_id for c in chargers]
        if len(set(charger_ids)) != len(charger_ids):
            raise InvalidArgumentError(f"charger ids must be unique, got {charger_ids}")

        truck_ids = [t.truck_id for t in trucks]
        if len(set(truck_ids)) != len(truck_ids):
            duplicates = sorted({tid for tid in truck_ids if truck_ids.count(tid) > 1})
            raise InvalidArgumentError(f"truck ids must be unique, duplicated: {duplicates}")

    @staticmethod
    def _assign(
        pending: List[_PendingTruck],
        matrix: np.ndarray,
        chargers: List[Charger],
        time_horizon_hours: float
    ) -> Tuple[Dict[str, List[ScheduleAssignment]], Dict[str, float], List[Truck], List[Truck]]:
        """
        Sequential greedy pass; each assignment shifts the load seen by the next truck.

        Returns:
            Tuple of (assignments per charger, usage per charger,
            assigned trucks in order, trucks that found no room)
        """
        usage = {c.charger_id: 0.0 for c in chargers}
        assignments: Dict[str, List[ScheduleAssignment]] = {c.charger_id: [] for c in chargers}
        assigned: List[Truck] = []
        rejected: List[Truck] = []

        for item in pending:
            best_col: Optional[int] = None
            best_end = float('inf')

            for col, charger in enumerate(chargers):
                candidate_end = usage[charger.charger_id] + float(matrix[item.row, col])
                if candidate_end <= time_horizon_hours and candidate_end < best_end:
                    best_col = col
                    best_end = candidate_end

            if best_col is None:
                rejected.append(item.truck)
                continue

            charger_id = chargers[best_col].charger_id
            assignments[charger_id].append(ScheduleAssignment(
                truck=item.truck,
                start_time=usage[charger_id],
                end_time=best_end,
                charge_time_hours=float(matrix[item.row, best_col])
            ))
            usage[charger_id] = best_end
            assigned.append(item.truck)

        return assignments, usage, assigned, rejected

    @staticmethod
    def _build_result(
        chargers: List[Charger],
        assignments: Dict[str, List[ScheduleAssignment]],
        usage: Dict[str, float],
        time_horizon_hours: float,
        total_trucks: int,
        assigned: List[Truck],
        already_charged: List[Truck],
        unassigned: List[Truck]
    ) -> ScheduleResult:
        charger_schedules = {
            c.charger_id: ChargerSchedule(
                charger_id=c.charger_id,
                assignments=tuple(assignments[c.charger_id]),
                total_scheduled_time=usage[c.charger_id]
            )
            for c in chargers
        }

        return ScheduleResult(
            charger_schedules=charger_schedules,
            fully_charged_count=len(assigned) + len(already_charged),
            total_trucks=total_trucks,
            time_horizon_hours=time_horizon_hours,
            unassigned_trucks=tuple(unassigned),
            assigned_trucks=tuple(assigned),
            already_charged_trucks=tuple(already_charged)
        )
