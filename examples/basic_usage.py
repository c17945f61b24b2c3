#!/usr/bin/env python3
"""
Basic usage example for Pathchart.

This example shows how a dashboard pane turns a nested API response into
chart data. The pane record names the graph type, the parameter paths to
plot, and the root keys that decide what one row is.

TIP: If you don't know which paths to pick for a new API, use
     pathchart's discover package to list root and parameter candidates
     first. See examples/discover_example.py for details.

Run from the pathchart directory:
    python examples/basic_usage.py
"""
import sys
import os
import logging

# Add parent directory to path for local development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from unfurl import PaneProcessor


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # Stored pane record, as saved by the dashboard
    pane = {
        "graphType": "bar",
        "parameters": ["data.stations.name", "data.stations.reading.pm25"],
        "rootKeys": [{"key": "stations", "path": "data.stations"}],
    }

    # Response fetched from the pane's API
    response = {
        "meta": {"source": "air-quality", "updated": "2024-01-15T12:00:00Z"},
        "data": {
            "stations": [
                {"name": "Harbour", "reading": {"pm25": 12.5, "o3": 31}},
                {"name": "Old Town", "reading": {"pm25": 22.0, "o3": 27}},
                {"name": "Airport", "reading": {"pm25": 8.1, "o3": 40}},
            ]
        },
    }

    processor = PaneProcessor(pane)
    result = processor.process(response)

    print("=" * 60)
    print("PATHCHART - Pane Processing Example")
    print("=" * 60)

    print("\nFlattened rows:")
    print("-" * 40)
    print(processor.to_dataframe(result.rows).to_string(index=False))

    if result.ok:
        print("\nBar chart data:")
        print("-" * 40)
        print(result.frame.to_string(index=False))
    else:
        print(f"\nCannot render chart: {result.error}")

    # A pane with too few parameters reports why instead of rendering
    broken = PaneProcessor({**pane, "parameters": pane["parameters"][:1]})
    print(f"\nOne-parameter pane: {broken.process(response).error}")

    # Example: Save to Parquet
    # processor.to_dataframe(result.rows).to_parquet("stations.parquet")


if __name__ == "__main__":
    main()
