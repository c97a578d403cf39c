"""Text and JSON rendering of charging schedules."""
import json
from pathlib import Path

from fleet_charging.models.errors import AppError
from fleet_charging.models.schedule import ScheduleResult
from fleet_charging.utils.logging_config import logger


def format_schedule_report(result: ScheduleResult) -> str:
    """
    Render a schedule as a plain-text report.

    Args:
        result: Schedule to render (read only)

    Returns:
        Multi-line report string
    """
    horizon = result.time_horizon_hours
    lines = [
        "=" * 60,
        "FLEET CHARGING SCHEDULE",
        "=" * 60,
        f"Time Horizon:       {horizon}h",
        f"Total Trucks:       {result.total_trucks}",
        f"Fully Charged:      {result.fully_charged_count} ({result.utilization_percent():.1f}%)",
        f"Already Charged:    {len(result.already_charged_trucks)}",
        f"Unassigned:         {len(result.unassigned_trucks)}",
    ]

    for charger_id, schedule in result.charger_schedules.items():
        lines.append("")
        lines.append(f"{charger_id}: {len(schedule.assignments)} truck(s), "
                     f"{schedule.total_scheduled_time:.2f}h scheduled "
                     f"({schedule.utilization_percent(horizon):.1f}% utilization)")
        if not schedule.assignments:
            lines.append("  (idle)")
        for assignment in schedule.assignments:
            lines.append(f"  {assignment.truck.truck_id:<12} "
                         f"{assignment.start_time:6.2f}h -> {assignment.end_time:6.2f}h "
                         f"({assignment.charge_time_hours:.2f}h)")

    if result.unassigned_trucks:
        lines.append("")
        lines.append("Unassigned Trucks:")
        for truck in result.unassigned_trucks:
            lines.append(f"  {truck.truck_id:<12} {truck.current_charge_percent:.1f}% of "
                         f"{truck.battery_capacity_kwh:.1f} kWh")

    lines.append("=" * 60)
    return "\n".join(lines)


def format_error_report(error: AppError) -> str:
    """Render a scheduling error for display."""
    return "\n".join([
        "=" * 60,
        "SCHEDULING FAILED",
        "=" * 60,
        f"Error Kind:  {error.kind.value}",
        f"Message:     {error.display_message()}",
        "=" * 60,
    ])


def write_schedule_json(result: ScheduleResult, path) -> Path:
    """
    Export a schedule to a JSON file.

    Args:
        result: Schedule to export
        path: Destination file

    Returns:
        Path written
    """
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, indent=2)
    logger.info(f"Schedule written: {path}")
    return path
