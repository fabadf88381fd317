"""Command-line interface for Route POI Finder."""

import sys
import argparse


def build_parser():
    """Build the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="route-poi-finder",
        description="Find POIs along a GPX route and export them to Garmin"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Extract subcommand
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract POIs along route via the Overpass API"
    )
    extract_parser.add_argument(
        "--gpx",
        required=True,
        help="Input GPX route file (one track, one segment)"
    )
    extract_parser.add_argument(
        "--output",
        default="data/pois_along_route.csv",
        help="Output CSV or JSON file (default: data/pois_along_route.csv)"
    )
    extract_parser.add_argument(
        "--config",
        help="Path to YAML config file (default: use built-in rules)"
    )
    extract_parser.add_argument(
        "--cache-dir",
        help="Directory for cached Overpass responses (default: data/query_cache)"
    )
    extract_parser.add_argument(
        "--split",
        type=int,
        help="Number of route chunks to query separately (default: 10)"
    )
    extract_parser.add_argument(
        "--radius",
        type=int,
        help="Search radius in meters for rules without their own (default: 80)"
    )

    # Export subcommand
    export_parser = subparsers.add_parser(
        "export",
        help="Export POIs to Garmin GPX format"
    )
    export_parser.add_argument(
        "--input",
        default="data/pois_along_route.csv",
        help="Input CSV or JSON file with POIs (default: data/pois_along_route.csv)"
    )
    export_parser.add_argument(
        "--output",
        default="data/pois.gpx",
        help="Output GPX file (default: data/pois.gpx)"
    )
    export_parser.add_argument(
        "--split",
        action="store_true",
        help="Export separate files per symbol"
    )
    export_parser.add_argument(
        "--output-dir",
        default="data/gpx",
        help="Output directory for split files (default: data/gpx)"
    )
    export_parser.add_argument(
        "--symbols",
        nargs="+",
        help="Only export specific symbols"
    )
    export_parser.add_argument(
        "--max-name-length",
        type=int,
        help="Truncate waypoint names to this many characters"
    )

    return parser


def main(argv=None):
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Route to appropriate subcommand
    if args.command == "extract":
        from .extract import run_extract
        run_extract(args)
    elif args.command == "export":
        from .export import run_export
        run_export(args)


if __name__ == "__main__":
    main()
