"""Export subcommand implementation."""

import sys
from pathlib import Path

from ..exporters import GarminExporter


def run_export(args):
    """
    Run the POI export to Garmin GPX format.

    Args:
        args: Parsed command-line arguments
    """
    print("=" * 60)
    print("Garmin GPX Exporter")
    print("=" * 60)
    print(f"\nInput: {args.input}")

    # Validate input file exists
    if not Path(args.input).exists():
        print(f"\n❌ Error: POI file not found: {args.input}")
        print("\nRun extraction first:")
        print("  route-poi-finder extract --gpx <route.gpx>")
        sys.exit(1)

    exporter = GarminExporter(args.input)

    try:
        exporter.load_pois()
        exporter.print_statistics()

        if args.split:
            print(f"\nOutput directory: {args.output_dir}")
            print(f"Mode: Split by symbol")
            exporter.export_by_symbol(args.output_dir, max_name_length=args.max_name_length)
        else:
            print(f"\nOutput file: {args.output}")
            if args.symbols:
                print(f"Symbols filter: {', '.join(args.symbols)}")
            print(f"Mode: Single file")
            exporter.export_gpx(
                args.output,
                symbols=args.symbols,
                max_name_length=args.max_name_length,
            )

        print("\n" + "=" * 60)
        print("✅ EXPORT COMPLETE!")
        print("=" * 60)

        print("\nTo load onto Garmin device:")
        print("  Copy GPX files to your device's /Garmin/NewFiles/ folder")

    except KeyboardInterrupt:
        print("\n\n⚠ Export interrupted by user")
        sys.exit(130)
    except (ValueError, OSError) as e:
        print(f"\n❌ Error during export: {e}")
        sys.exit(1)
