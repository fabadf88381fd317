"""Route POI extractor using cached Overpass API queries."""

import csv
import json
from pathlib import Path
from typing import List, Optional, Sequence

from ..core import (
    load_gpx_route,
    split_route,
    calculate_route_length,
    compile_query,
    decode_response,
    node_elements,
    resolve,
    sort_pois,
    Classifier,
    ClassificationStats,
    Config,
    QueryCache,
)
from ..core.classify import symbol_counts
from ..core.models import POI, Coordinate, Rule


CSV_FIELDS = ['name', 'lat', 'lon', 'desc', 'sym']


class RouteExtractor:
    """Extract POIs along a route by querying each route chunk for each rule."""

    def __init__(self, config: Optional[Config] = None, cache: Optional[QueryCache] = None):
        """
        Initialize RouteExtractor.

        Args:
            config: Configuration object (uses defaults if None)
            cache: Query cache (built from config if None)
        """
        self.config = config or Config()
        self.cache = cache or QueryCache(
            self.config.cache_dir,
            overpass_url=self.config.overpass_url,
            timeout=self.config.timeout,
        )
        self.classifier = Classifier(self.config.get_name_keys(), self.config.get_symbol_rules())
        self.stats = ClassificationStats()
        self.pois: List[POI] = []

    def extract(self, gpx_file: str) -> List[POI]:
        """
        Extract POIs along a GPX route.

        Args:
            gpx_file: Path to GPX route file

        Returns:
            POIs sorted by name, description, symbol, latitude, longitude
        """
        print(f"📂 Loading route from: {gpx_file}")
        route_points = load_gpx_route(gpx_file)
        print(f"✓ Loaded {len(route_points)} points "
              f"({calculate_route_length(route_points):.1f} km)")

        return self.extract_points(route_points)

    def extract_points(self, route_points: Sequence[Coordinate]) -> List[POI]:
        """Extract POIs along a route given as coordinates."""
        self.stats = ClassificationStats()
        self.cache.hits = 0
        self.cache.misses = 0
        chunks = split_route(route_points, self.config.split)
        print(f"Split route into {len(chunks)} chunks "
              f"({sum(len(c) for c in chunks)} points)")

        rules = self.config.get_rules()
        pois = []
        for i, chunk in enumerate(chunks, start=1):
            print(f"\n🔍 Chunk {i}/{len(chunks)}")
            for rule in rules:
                pois.extend(self._node_pois(rule, chunk))
                pois.extend(self._way_pois(rule, chunk))

        self.pois = sort_pois(pois)
        self._print_summary()
        return self.pois

    def _node_pois(self, rule: Rule, chunk: Sequence[Coordinate]) -> List[POI]:
        """Query nodes matching a rule; each node becomes a POI."""
        body = self.cache.fetch(compile_query("node", rule, chunk))
        nodes = node_elements(decode_response(body))
        return [
            self.classifier.make_poi(node.tags, node.coordinate, self.stats)
            for node in nodes
        ]

    def _way_pois(self, rule: Rule, chunk: Sequence[Coordinate]) -> List[POI]:
        """Query ways matching a rule; each way's centre becomes a POI."""
        body = self.cache.fetch(compile_query("way", rule, chunk))
        _, centres = resolve(decode_response(body))
        return [
            self.classifier.make_poi(centre.tags, centre.centre, self.stats)
            for centre in centres
        ]

    def _print_summary(self):
        """Print extraction summary."""
        print(f"\n📊 Summary:")
        print(f"  Total POIs found: {len(self.pois)}")
        print(f"  Queries: {self.cache.hits} cached, {self.cache.misses} fetched")
        print(f"\n📈 POIs by symbol:")
        for symbol, count in symbol_counts(self.stats).items():
            print(f"  {symbol:20s}: {count:4d}")
        print(f"\n🏷  Names taken from:")
        for key, count in self.stats.name_keys.most_common():
            print(f"  {key:20s}: {count:4d}")

    def save_to_csv(self, output_file: str):
        """
        Save POIs to CSV file.

        Args:
            output_file: Path to output CSV file
        """
        print(f"\nSaving to CSV: {output_file}")

        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
            writer.writeheader()
            for poi in self.pois:
                writer.writerow(poi.to_dict())

        print(f"✓ Saved {len(self.pois)} POIs to {output_file}")

    def save_to_json(self, output_file: str):
        """
        Save POIs to JSON file.

        Args:
            output_file: Path to output JSON file
        """
        print(f"\nSaving to JSON: {output_file}")

        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump([poi.to_dict() for poi in self.pois], f, indent=2, ensure_ascii=False)
            f.write("\n")

        print(f"✓ Saved {len(self.pois)} POIs to {output_file}")

    def save(self, output_file: str):
        """Save POIs as JSON for a .json path, CSV otherwise."""
        if Path(output_file).suffix.lower() == ".json":
            self.save_to_json(output_file)
        else:
            self.save_to_csv(output_file)
