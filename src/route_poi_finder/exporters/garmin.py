"""Garmin GPX exporter for POIs."""

import re
import pandas as pd
import gpxpy.gpx
from pathlib import Path
from datetime import datetime
from typing import Optional, List


SORT_COLUMNS = ["name", "desc", "sym", "lat", "lon"]
TEXT_COLUMNS = {"name": str, "desc": str, "sym": str}


class GarminExporter:
    """Export POIs to Garmin-compatible GPX format."""

    def __init__(self, input_file: str):
        """
        Initialize Garmin Exporter.

        Args:
            input_file: Path to CSV or JSON file written by the extractor
        """
        self.input_file = Path(input_file)
        self.pois = None

    def load_pois(self) -> pd.DataFrame:
        """
        Load POIs and put them in output order.

        Returns:
            DataFrame of POIs sorted by name, desc, sym, lat, lon
        """
        print(f"Loading POIs from {self.input_file}...")
        if self.input_file.suffix.lower() == ".json":
            df = pd.read_json(self.input_file, dtype=TEXT_COLUMNS)
        else:
            df = pd.read_csv(self.input_file, dtype=TEXT_COLUMNS, keep_default_na=False)
        if df.columns.empty:
            df = pd.DataFrame(columns=SORT_COLUMNS)

        missing = [c for c in SORT_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"POI file {self.input_file} is missing columns: {missing}")

        for col in TEXT_COLUMNS:
            df[col] = df[col].fillna("").astype(str)
        self.pois = df.sort_values(SORT_COLUMNS, kind="mergesort").reset_index(drop=True)
        print(f"✓ Loaded {len(self.pois)} POIs")
        return self.pois

    def export_gpx(self, output_file: str, symbols: Optional[List[str]] = None,
                   max_name_length: Optional[int] = None) -> str:
        """
        Export POIs to GPX format.

        Args:
            output_file: Output GPX file path
            symbols: List of symbols to include (default: all)
            max_name_length: Truncate waypoint names for older devices

        Returns:
            Path to output file
        """
        print(f"\nExporting to GPX: {output_file}")

        df = self.pois
        if symbols:
            df = df[df["sym"].isin(symbols)]
            print(f"Filtering to symbols: {symbols}")

        gpx = gpxpy.gpx.GPX()
        gpx.name = "Route POIs"
        gpx.description = (
            f"Points of Interest along route - "
            f"Generated {datetime.now().strftime('%Y-%m-%d')}"
        )

        for _, row in df.iterrows():
            name = row["name"]
            if max_name_length:
                name = name[:max_name_length]

            wpt = gpxpy.gpx.GPXWaypoint(
                latitude=float(row["lat"]),
                longitude=float(row["lon"]),
                name=name,
            )
            wpt.description = row["desc"]
            if row["sym"]:
                wpt.symbol = row["sym"]

            gpx.waypoints.append(wpt)

        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(gpx.to_xml())

        print(f"✓ Exported {len(gpx.waypoints)} waypoints to {output_file}")
        return str(output_file)

    def export_by_symbol(self, output_dir: str,
                         max_name_length: Optional[int] = None) -> List[str]:
        """
        Export separate GPX files for each symbol.

        Args:
            output_dir: Output directory for GPX files
            max_name_length: Truncate waypoint names for older devices

        Returns:
            List of output file paths
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        print(f"\nExporting separate files by symbol to {output_dir}")

        files = []
        used = set()
        for symbol in sorted(self.pois["sym"].unique()):
            base = re.sub(r"[^a-z0-9]+", "-", symbol.lower()).strip("-") or "none"
            # Symbols differing only in case or punctuation share a slug
            slug, n = base, 2
            while slug in used:
                slug, n = f"{base}-{n}", n + 1
            used.add(slug)
            output_file = output_dir / f"poi-{slug}.gpx"
            self.export_gpx(
                str(output_file),
                symbols=[symbol],
                max_name_length=max_name_length,
            )
            files.append(str(output_file))

        print(f"\n✓ Exported {len(files)} symbol files")
        return files

    def print_statistics(self):
        """Print statistics about POIs."""
        print("\n=== POI Statistics ===")
        print(f"Total POIs: {len(self.pois)}")
        print("\nBy Symbol:")
        for symbol, count in self.pois["sym"].replace("", "(none)").value_counts().items():
            print(f"  {symbol:20s}: {count:4d}")
