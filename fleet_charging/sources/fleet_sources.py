"""Fleet data sources supplying trucks, chargers and the time horizon."""
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import psycopg2

from fleet_charging.config import DEFAULT_TIME_HORIZON_HOURS, DATA_SOURCE_KINDS
from fleet_charging.database.connection import DatabaseConnection, db
from fleet_charging.database.queries import Queries
from fleet_charging.models.errors import DataUnavailableError, InvalidArgumentError
from fleet_charging.models.fleet import Truck, Charger
from fleet_charging.utils.logging_config import logger


SAMPLE_TRUCKS = (
    Truck(truck_id='TRUCK-001', battery_capacity_kwh=200.0, current_charge_percent=20.0),
    Truck(truck_id='TRUCK-002', battery_capacity_kwh=200.0, current_charge_percent=50.0),
    Truck(truck_id='TRUCK-003', battery_capacity_kwh=200.0, current_charge_percent=10.0),
    Truck(truck_id='TRUCK-004', battery_capacity_kwh=180.0, current_charge_percent=30.0),
    Truck(truck_id='TRUCK-005', battery_capacity_kwh=220.0, current_charge_percent=40.0),
    Truck(truck_id='TRUCK-006', battery_capacity_kwh=200.0, current_charge_percent=15.0),
    Truck(truck_id='TRUCK-007', battery_capacity_kwh=190.0, current_charge_percent=25.0),
    Truck(truck_id='TRUCK-008', battery_capacity_kwh=210.0, current_charge_percent=35.0),
    Truck(truck_id='TRUCK-009', battery_capacity_kwh=200.0, current_charge_percent=45.0),
    Truck(truck_id='TRUCK-010', battery_capacity_kwh=200.0, current_charge_percent=5.0),
)

SAMPLE_CHARGERS = (
    Charger(charger_id='CHARGER-A', rate_kw=50.0),
    Charger(charger_id='CHARGER-B', rate_kw=75.0),
    Charger(charger_id='CHARGER-C', rate_kw=100.0),
)

# Overnight window
SAMPLE_TIME_HORIZON_HOURS = 8


class FleetDataSource(ABC):
    """Abstract provider of scheduling inputs."""

    @abstractmethod
    def get_trucks(self) -> List[Truck]:
        """
        Retrieve the trucks in the fleet.

        Raises:
            DataUnavailableError: If the trucks cannot be retrieved
        """
        pass

    @abstractmethod
    def get_chargers(self) -> List[Charger]:
        """
        Retrieve the available chargers.

        Raises:
            DataUnavailableError: If the chargers cannot be retrieved
        """
        pass

    @abstractmethod
    def get_time_horizon_hours(self) -> float:
        """
        Retrieve the scheduling time horizon in hours.

        Raises:
            DataUnavailableError: If the horizon cannot be retrieved
        """
        pass

    def get_name(self) -> str:
        """Get data source name."""
        return self.__class__.__name__

    def __repr__(self):
        return f"{self.get_name()}()"


class InMemoryFleetDataSource(FleetDataSource):
    """Fleet held in memory; defaults to the sample depot."""

    def __init__(
        self,
        trucks: Optional[Sequence[Truck]] = None,
        chargers: Optional[Sequence[Charger]] = None,
        time_horizon_hours: Optional[float] = None
    ):
        self._trucks = list(SAMPLE_TRUCKS if trucks is None else trucks)
        self._chargers = list(SAMPLE_CHARGERS if chargers is None else chargers)
        self._time_horizon_hours = (
            SAMPLE_TIME_HORIZON_HOURS if time_horizon_hours is None else time_horizon_hours
        )

    def get_trucks(self) -> List[Truck]:
        return list(self._trucks)

    def get_chargers(self) -> List[Charger]:
        return list(self._chargers)

    def get_time_horizon_hours(self) -> float:
        return self._time_horizon_hours


class JsonFleetDataSource(FleetDataSource):
    """
    Fleet read from a JSON file.

    Expected layout:
        {
            "time_horizon_hours": 8,
            "trucks": [{"id": "T1", "battery_capacity_kwh": 200, "current_charge_percent": 20}],
            "chargers": [{"id": "C1", "rate_kw": 50}]
        }
    """

    def __init__(self, path):
        self.path = Path(path)
        self._data: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._data is None:
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except OSError as e:
                raise DataUnavailableError(f"Failed to read fleet file {self.path}: {e}") from e
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise DataUnavailableError(f"Fleet file {self.path} is not valid JSON: {e}") from e

            if not isinstance(data, dict):
                raise DataUnavailableError(f"Fleet file {self.path} must contain a JSON object")

            self._data = data
            logger.info(f"Loaded fleet file {self.path}")
        return self._data

    def _get_records(self, key: str) -> List[Dict[str, Any]]:
        records = self._load().get(key)
        if not isinstance(records, list):
            raise DataUnavailableError(f"Fleet file {self.path} has no '{key}' list")
        return records

    def get_trucks(self) -> List[Truck]:
        try:
            return [Truck.from_dict(record) for record in self._get_records('trucks')]
        except (KeyError, TypeError) as e:
            raise DataUnavailableError(f"Malformed truck record in {self.path}: {e}") from e

    def get_chargers(self) -> List[Charger]:
        try:
            return [Charger.from_dict(record) for record in self._get_records('chargers')]
        except (KeyError, TypeError) as e:
            raise DataUnavailableError(f"Malformed charger record in {self.path}: {e}") from e

    def get_time_horizon_hours(self) -> float:
        data = self._load()
        if 'time_horizon_hours' not in data:
            raise DataUnavailableError(f"Fleet file {self.path} has no 'time_horizon_hours'")
        return data['time_horizon_hours']

    def __repr__(self):
        return f"{self.get_name()}(path={self.path})"


class DatabaseFleetDataSource(FleetDataSource):
    """Fleet read from the site tables in PostgreSQL."""

    def __init__(self, site_id: int, connection: Optional[DatabaseConnection] = None):
        """
        Initialize database data source.

        Args:
            site_id: Depot whose trucks and chargers are scheduled
            connection: Database connection (defaults to the shared instance)
        """
        self.site_id = site_id
        self.connection = connection or db

    def _query(self, query: str, what: str) -> List[Dict[str, Any]]:
        try:
            return self.connection.execute_query(query, (self.site_id,)) or []
        except psycopg2.Error as e:
            raise DataUnavailableError(f"Failed to retrieve {what} for site {self.site_id}: {e}") from e

    def get_trucks(self) -> List[Truck]:
        rows = self._query(Queries.GET_SITE_TRUCKS, 'trucks')
        try:
            trucks = [
                Truck(
                    truck_id=str(row['truck_id']),
                    battery_capacity_kwh=float(row['battery_capacity_kwh']),
                    current_charge_percent=float(row['current_charge_percent'])
                )
                for row in rows
            ]
        except (KeyError, TypeError) as e:
            raise DataUnavailableError(f"Malformed truck row for site {self.site_id}: {e}") from e
        logger.info(f"Loaded {len(trucks)} trucks for site {self.site_id}")
        return trucks

    def get_chargers(self) -> List[Charger]:
        rows = self._query(Queries.GET_SITE_CHARGERS, 'chargers')
        try:
            chargers = [
                Charger(charger_id=str(row['charger_id']), rate_kw=float(row['rate_kw']))
                for row in rows
            ]
        except (KeyError, TypeError) as e:
            raise DataUnavailableError(f"Malformed charger row for site {self.site_id}: {e}") from e
        logger.info(f"Loaded {len(chargers)} chargers for site {self.site_id}")
        return chargers

    def get_time_horizon_hours(self) -> float:
        rows = self._query(Queries.GET_SITE_TIME_HORIZON, 'time horizon')
        if not rows or rows[0]['time_horizon_hours'] is None:
            logger.warning(f"No time horizon configured for site {self.site_id}, "
                           f"using default {DEFAULT_TIME_HORIZON_HOURS}h")
            return DEFAULT_TIME_HORIZON_HOURS
        return float(rows[0]['time_horizon_hours'])

    def __repr__(self):
        return f"{self.get_name()}(site_id={self.site_id})"


def create_data_source(kind: str, data_file=None, site_id: Optional[int] = None) -> FleetDataSource:
    """
    Build a data source by kind.

    Args:
        kind: One of 'memory', 'json', 'database'
        data_file: Fleet JSON path (required for 'json')
        site_id: Site identifier (required for 'database')

    Returns:
        FleetDataSource instance
    """
    if kind == 'memory':
        return InMemoryFleetDataSource()
    if kind == 'json':
        if not data_file:
            raise InvalidArgumentError("a data file is required for the json source")
        return JsonFleetDataSource(data_file)
    if kind == 'database':
        if site_id is None:
            raise InvalidArgumentError("a site id is required for the database source")
        return DatabaseFleetDataSource(site_id)
    raise InvalidArgumentError(f"unknown data source '{kind}', expected one of {DATA_SOURCE_KINDS}")
