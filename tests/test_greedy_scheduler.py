"""Test the greedy shortest-job-first charging scheduler."""
import sys
import unittest
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fleet_charging.models.errors import InvalidArgumentError
from fleet_charging.models.fleet import Truck, Charger
from fleet_charging.optimizer import GreedyShortestJobFirstScheduler
from fleet_charging.sources.fleet_sources import SAMPLE_TRUCKS, SAMPLE_CHARGERS


def empty_truck(truck_id, capacity_kwh):
    """Truck at 0% so hours on a 50 kW charger are capacity / 50."""
    return Truck(truck_id=truck_id, battery_capacity_kwh=capacity_kwh, current_charge_percent=0.0)


class TestGreedyShortestJobFirstScheduler(unittest.TestCase):
    """Test cases for the greedy scheduler scenarios and invariants."""

    def setUp(self):
        self.scheduler = GreedyShortestJobFirstScheduler()
        self.charger_50 = Charger(charger_id='C50', rate_kw=50.0)

    def assert_schedule_invariants(self, result, trucks, chargers):
        """Check the properties every produced schedule must hold."""
        self.assertEqual(result.fully_charged_count + len(result.unassigned_trucks), result.total_trucks)
        self.assertEqual(result.total_trucks, len(trucks))
        self.assertEqual(list(result.charger_schedules), [c.charger_id for c in chargers])

        placed = []
        for schedule in result.charger_schedules.values():
            expected_start = 0.0
            for assignment in schedule.assignments:
                self.assertEqual(assignment.start_time, expected_start)
                self.assertGreater(assignment.end_time, assignment.start_time)
                expected_start = assignment.end_time
                placed.append(assignment.truck.truck_id)
            self.assertEqual(schedule.total_scheduled_time, expected_start)
            self.assertLessEqual(schedule.total_scheduled_time, result.time_horizon_hours)

        groups = (placed
                  + [t.truck_id for t in result.already_charged_trucks]
                  + [t.truck_id for t in result.unassigned_trucks])
        self.assertEqual(sorted(groups), sorted(t.truck_id for t in trucks))

    def test_empty_trucks_list_returns_empty_schedule(self):
        chargers = [self.charger_50, Charger(charger_id='C100', rate_kw=100.0)]
        result = self.scheduler.schedule([], chargers, 8)

        self.assertEqual(result.total_trucks, 0)
        self.assertEqual(result.fully_charged_count, 0)
        self.assertEqual(result.unassigned_trucks, ())
        for schedule in result.charger_schedules.values():
            self.assertEqual(schedule.assignments, ())
            self.assertEqual(schedule.total_scheduled_time, 0.0)

    def test_single_truck_single_charger(self):
        truck = Truck(truck_id='T1', battery_capacity_kwh=100.0, current_charge_percent=50.0)
        result = self.scheduler.schedule([truck], [self.charger_50], 8)

        assignments = result.charger_schedules['C50'].assignments
        self.assertEqual(len(assignments), 1)
        self.assertEqual(assignments[0].truck, truck)
        self.assertEqual(assignments[0].start_time, 0.0)
        self.assertEqual(assignments[0].end_time, 1.0)
        self.assertEqual(assignments[0].charge_time_hours, 1.0)
        self.assertEqual(result.fully_charged_count, 1)

    def test_prioritizes_shortest_charge_time(self):
        trucks = [empty_truck('T2H', 100.0), empty_truck('T1H', 50.0), empty_truck('T1_5H', 75.0)]
        result = self.scheduler.schedule(trucks, [self.charger_50], 8)

        assignments = result.charger_schedules['C50'].assignments
        self.assertEqual([a.truck.truck_id for a in assignments], ['T1H', 'T1_5H', 'T2H'])
        self.assertEqual([(a.start_time, a.end_time) for a in assignments],
                         [(0.0, 1.0), (1.0, 2.5), (2.5, 4.5)])
        self.assertEqual(result.fully_charged_count, 3)
        self.assertEqual(result.charger_schedules['C50'].total_scheduled_time, 4.5)

    def test_distributes_trucks_across_chargers(self):
        chargers = [Charger(charger_id='A', rate_kw=50.0), Charger(charger_id='B', rate_kw=50.0)]
        trucks = [empty_truck('T1', 200.0), empty_truck('T2', 200.0)]
        result = self.scheduler.schedule(trucks, chargers, 8)

        self.assertEqual([a.truck.truck_id for a in result.charger_schedules['A'].assignments], ['T1'])
        self.assertEqual([a.truck.truck_id for a in result.charger_schedules['B'].assignments], ['T2'])
        self.assertEqual(result.charger_schedules['A'].total_scheduled_time, 4.0)
        self.assertEqual(result.charger_schedules['B'].total_scheduled_time, 4.0)
        self.assertEqual(result.fully_charged_count, 2)

    def test_excludes_truck_beyond_horizon(self):
        long_truck = empty_truck('T10H', 500.0)
        short_truck = empty_truck('T4H', 200.0)
        result = self.scheduler.schedule([long_truck, short_truck], [self.charger_50], 8)

        self.assertEqual(result.unassigned_trucks, (long_truck,))
        self.assertEqual(result.charger_schedules['C50'].assignments[0].truck, short_truck)
        self.assertEqual(result.fully_charged_count, 1)

    def test_assigns_truck_to_faster_charger(self):
        chargers = [self.charger_50, Charger(charger_id='C100', rate_kw=100.0)]
        truck = empty_truck('T1', 200.0)
        result = self.scheduler.schedule([truck], chargers, 8)

        self.assertEqual(result.charger_schedules['C50'].assignments, ())
        assignment = result.charger_schedules['C100'].assignments[0]
        self.assertEqual(assignment.end_time, 2.0)
        self.assertEqual(result.get_charger_for_truck('T1'), 'C100')

    def test_already_fully_charged_trucks(self):
        trucks = [
            Truck(truck_id='F1', battery_capacity_kwh=200.0, current_charge_percent=100.0),
            Truck(truck_id='F2', battery_capacity_kwh=150.0, current_charge_percent=100.0),
        ]
        result = self.scheduler.schedule(trucks, [self.charger_50], 8)

        self.assertEqual(result.fully_charged_count, 2)
        self.assertEqual(result.total_trucks, 2)
        self.assertEqual(result.unassigned_trucks, ())
        self.assertEqual(result.already_charged_trucks, tuple(trucks))
        self.assertEqual(result.charger_schedules['C50'].assignments, ())

    def test_load_shifts_trucks_to_slower_charger(self):
        chargers = [Charger(charger_id='FAST', rate_kw=100.0), Charger(charger_id='SLOW', rate_kw=50.0)]
        trucks = [empty_truck('T1', 200.0), empty_truck('T2', 200.0), empty_truck('T3', 200.0)]
        result = self.scheduler.schedule(trucks, chargers, 8)

        fast = result.charger_schedules['FAST'].assignments
        slow = result.charger_schedules['SLOW'].assignments
        # T2 ties at 4.0 on both chargers and takes the first listed
        self.assertEqual([(a.truck.truck_id, a.start_time, a.end_time) for a in fast],
                         [('T1', 0.0, 2.0), ('T2', 2.0, 4.0)])
        self.assertEqual([(a.truck.truck_id, a.start_time, a.end_time) for a in slow],
                         [('T3', 0.0, 4.0)])
        self.assertEqual(result.fully_charged_count, 3)

    def test_truck_rejected_when_charger_is_occupied(self):
        needs_5h = empty_truck('T5H', 250.0)
        needs_4h = empty_truck('T4H', 200.0)
        needs_10h = empty_truck('T10H', 500.0)
        result = self.scheduler.schedule([needs_5h, needs_4h, needs_10h], [self.charger_50], 8)

        self.assertEqual([a.truck.truck_id for a in result.charger_schedules['C50'].assignments], ['T4H'])
        # Horizon rejects come first, then trucks that found no room
        self.assertEqual([t.truck_id for t in result.unassigned_trucks], ['T10H', 'T5H'])
        self.assertEqual(result.fully_charged_count, 1)

    def test_equal_charge_times_keep_input_order(self):
        trucks = [empty_truck('B', 100.0), empty_truck('A', 100.0), empty_truck('C', 100.0)]
        result = self.scheduler.schedule(trucks, [self.charger_50], 8)

        self.assertEqual([a.truck.truck_id for a in result.charger_schedules['C50'].assignments],
                         ['B', 'A', 'C'])

    def test_truck_ending_exactly_at_horizon_is_assigned(self):
        result = self.scheduler.schedule([empty_truck('T8H', 400.0)], [self.charger_50], 8)
        self.assertEqual(result.charger_schedules['C50'].total_scheduled_time, 8.0)
        self.assertEqual(result.fully_charged_count, 1)

    def test_invalid_time_horizon(self):
        truck = empty_truck('T1', 100.0)
        for horizon in (0, -1, -0.5, True, None, '8'):
            with self.subTest(horizon=horizon):
                with self.assertRaises(InvalidArgumentError) as ctx:
                    self.scheduler.schedule([truck], [self.charger_50], horizon)
                self.assertIn('time horizon must be positive', str(ctx.exception))

    def test_empty_chargers_list(self):
        with self.assertRaises(InvalidArgumentError) as ctx:
            self.scheduler.schedule([empty_truck('T1', 100.0)], [], 8)
        self.assertIn('at least one charger required', str(ctx.exception))

    def test_horizon_checked_before_chargers(self):
        with self.assertRaises(InvalidArgumentError) as ctx:
            self.scheduler.schedule([], [], 0)
        self.assertIn('time horizon', str(ctx.exception))

    def test_duplicate_identifiers_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            self.scheduler.schedule([], [self.charger_50, Charger(charger_id='C50', rate_kw=75.0)], 8)
        with self.assertRaises(InvalidArgumentError):
            self.scheduler.schedule([empty_truck('T1', 100.0), empty_truck('T1', 50.0)],
                                    [self.charger_50], 8)

    def test_sample_fleet_invariants(self):
        result = self.scheduler.schedule(SAMPLE_TRUCKS, SAMPLE_CHARGERS, 8)
        self.assert_schedule_invariants(result, SAMPLE_TRUCKS, SAMPLE_CHARGERS)
        self.assertGreater(result.fully_charged_count, 0)

    def test_mixed_fleet_invariants(self):
        trucks = [
            Truck(truck_id='FULL', battery_capacity_kwh=200.0, current_charge_percent=100.0),
            empty_truck('HUGE', 2000.0),
            Truck(truck_id='T3', battery_capacity_kwh=180.0, current_charge_percent=30.0),
            Truck(truck_id='T4', battery_capacity_kwh=220.0, current_charge_percent=40.0),
            empty_truck('T5', 300.0),
            Truck(truck_id='T6', battery_capacity_kwh=190.0, current_charge_percent=95.0),
        ]
        chargers = [Charger(charger_id='A', rate_kw=60.0), Charger(charger_id='B', rate_kw=22.0)]
        result = self.scheduler.schedule(trucks, chargers, 6)
        self.assert_schedule_invariants(result, trucks, chargers)
        self.assertIn('HUGE', [t.truck_id for t in result.unassigned_trucks])

    def test_schedule_is_deterministic(self):
        first = self.scheduler.schedule(SAMPLE_TRUCKS, SAMPLE_CHARGERS, 8)
        second = GreedyShortestJobFirstScheduler().schedule(SAMPLE_TRUCKS, SAMPLE_CHARGERS, 8)

        self.assertEqual(dict(first.charger_schedules), dict(second.charger_schedules))
        self.assertEqual(first.unassigned_trucks, second.unassigned_trucks)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_longer_horizon_keeps_assigned_trucks(self):
        trucks = [empty_truck('T1H', 50.0), empty_truck('T2H', 100.0), empty_truck('T3H', 150.0)]

        short = self.scheduler.schedule(trucks, [self.charger_50], 3)
        long = self.scheduler.schedule(trucks, [self.charger_50], 6)

        short_assigned = {t.truck_id for t in short.assigned_trucks}
        long_assigned = {t.truck_id for t in long.assigned_trucks}
        self.assertEqual(short_assigned, {'T1H', 'T2H'})
        self.assertTrue(short_assigned.issubset(long_assigned))
        self.assertEqual(long.fully_charged_count, 3)

    def test_longer_horizon_keeps_assigned_trucks_across_chargers(self):
        short = self.scheduler.schedule(SAMPLE_TRUCKS, SAMPLE_CHARGERS, 6)
        long = self.scheduler.schedule(SAMPLE_TRUCKS, SAMPLE_CHARGERS, 10)
        self.assert_schedule_invariants(short, SAMPLE_TRUCKS, SAMPLE_CHARGERS)
        self.assert_schedule_invariants(long, SAMPLE_TRUCKS, SAMPLE_CHARGERS)

        # Load spills onto every charger at both horizons
        for result in (short, long):
            for schedule in result.charger_schedules.values():
                self.assertTrue(schedule.assignments)

        short_assigned = {t.truck_id for t in short.assigned_trucks}
        long_assigned = {t.truck_id for t in long.assigned_trucks}
        self.assertEqual([t.truck_id for t in short.unassigned_trucks], ['TRUCK-003', 'TRUCK-010'])
        self.assertTrue(short_assigned.issubset(long_assigned))
        self.assertEqual(long.fully_charged_count, 10)
        self.assertEqual(long.assigned_trucks[:len(short.assigned_trucks)], short.assigned_trucks)

    def test_reapply_reproduces_schedule(self):
        result = self.scheduler.schedule(SAMPLE_TRUCKS, SAMPLE_CHARGERS, 8)
        replayed = self.scheduler.reapply(result, SAMPLE_CHARGERS)

        self.assertEqual(dict(replayed.charger_schedules), dict(result.charger_schedules))
        self.assertEqual(replayed.assigned_trucks, result.assigned_trucks)
        self.assertEqual(replayed.unassigned_trucks, result.unassigned_trucks)
        self.assertEqual(replayed.fully_charged_count, result.fully_charged_count)

    def test_input_sequences_are_not_modified(self):
        trucks = [empty_truck('T2H', 100.0), empty_truck('T1H', 50.0)]
        chargers = [self.charger_50]
        self.scheduler.schedule(trucks, chargers, 8)
        self.assertEqual([t.truck_id for t in trucks], ['T2H', 'T1H'])
        self.assertEqual(chargers, [self.charger_50])


if __name__ == '__main__':
    unittest.main()
