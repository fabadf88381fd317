"""Extract subcommand implementation."""

import sys
from pathlib import Path

from ..core import Config, RoutePOIError
from ..extractors import RouteExtractor


def run_extract(args):
    """
    Run the POI extraction.

    Args:
        args: Parsed command-line arguments
    """
    print("=" * 60)
    print("Route POI Finder")
    print("=" * 60)
    print(f"\nGPX file: {args.gpx}")
    print(f"Output: {args.output}")

    # Validate GPX file exists
    if not Path(args.gpx).exists():
        print(f"\n❌ Error: GPX file not found: {args.gpx}")
        sys.exit(1)

    # Load configuration
    if args.config:
        print(f"Config: {args.config}")
        if not Path(args.config).exists():
            print(f"\n❌ Error: Config file not found: {args.config}")
            sys.exit(1)
    try:
        config = Config(args.config)
        config.override(radius=args.radius, split=args.split, cache_dir=args.cache_dir)
    except (ValueError, OSError) as e:
        print(f"\n❌ Error loading config: {e}")
        sys.exit(1)

    print(f"Rules: {len(config.get_rules())}")
    print(f"Default radius: {config.radius}m")
    print(f"Route chunks: {config.split}")
    print(f"Cache: {config.cache_dir}")

    print("\n" + "-" * 60)

    extractor = RouteExtractor(config=config)

    # Run extraction
    try:
        pois = extractor.extract(args.gpx)

        if not pois:
            print("\n⚠ Warning: No POIs found!")

        extractor.save(args.output)

        print("\n" + "=" * 60)
        print("✅ POI EXTRACTION COMPLETE!")
        print("=" * 60)
        print(f"\nResults saved to: {args.output}")
        print("\nNext step: Export to Garmin GPX format")
        print(f"  route-poi-finder export --input {args.output}")

    except KeyboardInterrupt:
        print("\n\n⚠ Extraction interrupted by user")
        sys.exit(130)
    except RoutePOIError as e:
        print(f"\n❌ Error during extraction: {e}")
        sys.exit(1)
