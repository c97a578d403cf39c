"""Main entry point for the fleet charging scheduler."""
import argparse
import sys
from fleet_charging.config import (
    DEFAULT_DATA_SOURCE, DEFAULT_DATA_FILE, DEFAULT_SITE_ID,
    DEFAULT_MAX_RETRIES, DATA_SOURCE_KINDS
)
from fleet_charging.controllers import ChargingScheduleController
from fleet_charging.models.errors import InvalidArgumentError
from fleet_charging.reporting.schedule_report import (
    format_schedule_report, format_error_report, write_schedule_json
)
from fleet_charging.sources.fleet_sources import create_data_source
from fleet_charging.utils.logging_config import logger


def build_parser():
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description='Fleet Charging Scheduler',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Schedule the built-in sample fleet
  python scheduler_main.py

  # Schedule a fleet described in a JSON file
  python scheduler_main.py --source json --data-file fleet.json

  # Schedule site 10 from the database with a 10 hour window
  python scheduler_main.py --source database --site-id 10 --time-horizon 10

  # Export the schedule and retry twice if data is unavailable
  python scheduler_main.py --output schedule.json --retries 2
        """
    )

    parser.add_argument(
        '--source',
        type=str,
        default=DEFAULT_DATA_SOURCE,
        choices=list(DATA_SOURCE_KINDS),
        help=f'Fleet data source (default: {DEFAULT_DATA_SOURCE})'
    )

    parser.add_argument(
        '--data-file',
        type=str,
        default=DEFAULT_DATA_FILE,
        help='Fleet JSON file for the json source'
    )

    parser.add_argument(
        '--site-id',
        type=int,
        default=DEFAULT_SITE_ID,
        help=f'Site ID for the database source (default: {DEFAULT_SITE_ID})'
    )

    parser.add_argument(
        '--time-horizon',
        type=float,
        help='Override the time horizon in hours'
    )

    parser.add_argument(
        '--output',
        type=str,
        help='Write the schedule as JSON to this file'
    )

    parser.add_argument(
        '--retries',
        type=int,
        default=DEFAULT_MAX_RETRIES,
        help=f'Retries when fleet data is unavailable (default: {DEFAULT_MAX_RETRIES})'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


def main(argv=None):
    """Main execution function."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logger.setLevel('DEBUG')

    logger.info("="*60)
    logger.info("FLEET CHARGING SCHEDULER")
    logger.info("="*60)
    logger.info(f"Source:        {args.source}")
    logger.info(f"Time Horizon:  {args.time_horizon if args.time_horizon is not None else 'from source'}")
    logger.info("="*60)

    try:
        data_source = create_data_source(args.source, data_file=args.data_file, site_id=args.site_id)
    except InvalidArgumentError as e:
        logger.error(f"Invalid arguments: {e}")
        sys.exit(1)

    try:
        controller = ChargingScheduleController(
            data_source,
            time_horizon_hours=args.time_horizon
        )
        outcome = controller.run_with_retries(max_retries=args.retries)

        if outcome.is_error:
            print("\n" + format_error_report(outcome.error) + "\n")
            sys.exit(1)

        print("\n" + format_schedule_report(outcome.schedule) + "\n")

        if args.output:
            write_schedule_json(outcome.schedule, args.output)

        sys.exit(0)

    except KeyboardInterrupt:
        logger.info("\nScheduling interrupted by user")
        sys.exit(130)


if __name__ == '__main__':
    main()
