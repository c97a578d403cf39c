"""Schedule controller - orchestrates data retrieval and charge scheduling."""
import asyncio
from typing import Optional

from fleet_charging.models.errors import AppError, ErrorKind, FleetChargingError
from fleet_charging.models.schedule import ScheduleOutcome
from fleet_charging.optimizer import ChargingScheduler, GreedyShortestJobFirstScheduler
from fleet_charging.sources.fleet_sources import FleetDataSource
from fleet_charging.utils.logging_config import logger


class ChargingScheduleController:
    """Main controller for the fleet charging schedule workflow."""

    def __init__(
        self,
        data_source: FleetDataSource,
        scheduler: Optional[ChargingScheduler] = None,
        time_horizon_hours: Optional[float] = None
    ):
        """
        Initialize schedule controller.

        Args:
            data_source: Provider of trucks, chargers and the time horizon
            scheduler: Scheduling strategy (defaults to greedy shortest-job-first)
            time_horizon_hours: Overrides the data source's horizon when given
        """
        self.data_source = data_source
        self.scheduler = scheduler or GreedyShortestJobFirstScheduler()
        self.time_horizon_hours = time_horizon_hours

    def run(self) -> ScheduleOutcome:
        """
        Execute the complete scheduling workflow once.

        Returns:
            ScheduleOutcome holding either the schedule or the error
        """
        logger.info(f"Starting charge scheduling with {self.scheduler} from {self.data_source}")

        try:
            trucks = self.data_source.get_trucks()
            chargers = self.data_source.get_chargers()
            if self.time_horizon_hours is not None:
                time_horizon_hours = self.time_horizon_hours
            else:
                time_horizon_hours = self.data_source.get_time_horizon_hours()

            logger.info(f"Loaded {len(trucks)} trucks, {len(chargers)} chargers, "
                        f"horizon {time_horizon_hours}h")

            schedule = self.scheduler.schedule(trucks, chargers, time_horizon_hours)

        except FleetChargingError as e:
            error = AppError.from_exception(e)
            logger.error(f"Charge scheduling failed: {error.display_message()}")
            return ScheduleOutcome.failure(error)

        except Exception as e:
            logger.error(f"Charge scheduling failed unexpectedly: {e}", exc_info=True)
            return ScheduleOutcome.failure(AppError(ErrorKind.UNKNOWN, str(e)))

        logger.info(f"Charge scheduling complete: {schedule.fully_charged_count}/"
                    f"{schedule.total_trucks} trucks fully charged, "
                    f"{len(schedule.unassigned_trucks)} unassigned")
        return ScheduleOutcome.success(schedule)

    async def run_async(self) -> ScheduleOutcome:
        """Run the workflow on the default executor as one unit of work."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.run)

    def run_with_retries(self, max_retries: int = 0) -> ScheduleOutcome:
        """
        Run the workflow, re-invoking it from data retrieval while data is unavailable.

        Args:
            max_retries: Additional attempts after the first

        Returns:
            Outcome of the last attempt
        """
        outcome = self.run()
        attempt = 0
        while (outcome.is_error and outcome.error.kind == ErrorKind.DATA_UNAVAILABLE
               and attempt < max_retries):
            attempt += 1
            logger.warning(f"Retrying charge scheduling ({attempt}/{max_retries})")
            outcome = self.run()
        return outcome
