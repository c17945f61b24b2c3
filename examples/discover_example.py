#!/usr/bin/env python3
"""
Discover Example - Choosing Roots and Parameters

This example demonstrates how to use pathchart's discover package to
explore an unfamiliar API response and pick the root keys and parameters
for a chart pane.

The Problem:
    A chart needs one row per record, but API responses bury their records
    in arrays at arbitrary depths, next to metadata you may also want.

The Solution:
    StructureAnalyzer lists the arrays that could serve as roots (largest
    first in its summary) and the leaf paths under each root that could be
    plotted. PaneProcessor then turns the chosen paths into chart data.

Run from the pathchart directory:
    python examples/discover_example.py
"""
import sys
import os
import json

# Add parent directory to path for local development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from discover import StructureAnalyzer
from unfurl import PaneProcessor


def print_section(title):
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f" {title}")
    print("=" * 70)


def main():
    # =========================================================================
    # STEP 1: THE RAW RESPONSE
    # =========================================================================

    response = {
        "status": "ok",
        "meta": {"region": "north", "unit": "kWh"},
        "result": {
            "sites": [
                {
                    "site": "North Farm",
                    "capacity": 120,
                    "hourly": [
                        {"hour": "2024-06-01T10:00:00Z", "output": 61.2},
                        {"hour": "2024-06-01T11:00:00Z", "output": 74.9},
                    ],
                },
                {
                    "site": "Ridge",
                    "capacity": 80,
                    "hourly": [
                        {"hour": "2024-06-01T10:00:00Z", "output": 40.3},
                    ],
                },
            ],
            "forecast": [
                {"hour": "2024-06-01T13:00:00Z", "expected": 150.0},
                {"hour": "2024-06-01T12:00:00Z", "expected": 142.5},
                {"hour": "2024-06-01T14:00:00Z", "expected": 131.0},
            ],
        },
    }

    print_section("STEP 1: RAW API RESPONSE")
    print(json.dumps(response, indent=2)[:600] + "\n  ...")

    # =========================================================================
    # STEP 2: ANALYZE THE STRUCTURE
    # =========================================================================

    print_section("STEP 2: ANALYZE WITH DISCOVER")

    analyzer = StructureAnalyzer()

    print("\nShape only (arrays collapsed to their first element):")
    print("-" * 50)
    print(json.dumps(analyzer.skeleton(response), indent=2))

    print("\nCandidate Roots Found:")
    print("-" * 50)
    for candidate in analyzer.root_candidates(response):
        print(f"  {candidate.path}: {candidate.length} x {candidate.element_type}")

    print("\nParameters under result.forecast:")
    print("-" * 50)
    for param in analyzer.parameter_candidates(response, "result.forecast"):
        print(f"  {param}")

    print("\nHuman-Readable Summary:")
    print("-" * 50)
    print(analyzer.describe(response))

    # =========================================================================
    # STEP 3: BUILD PANES FROM THE CHOICES
    # =========================================================================

    print_section("STEP 3: PROCESS WITH PANEPROCESSOR")

    forecast = PaneProcessor({
        "graphType": "line",
        "parameters": ["result.forecast.hour", "result.forecast.expected"],
        "rootKeys": [{"key": "forecast", "path": "result.forecast"}],
    })
    result = forecast.process(response)
    print("\nLine chart (sorted by time):")
    print("-" * 50)
    print(result.frame.to_string(index=False))

    capacity = PaneProcessor({
        "graphType": "pie",
        "parameters": ["result.sites.site", "result.sites.capacity", "meta.unit"],
        "rootKeys": ["result.sites"],
    })
    result = capacity.process(response)
    print("\nRows, with meta.unit repeated from the document:")
    print("-" * 50)
    print(capacity.to_dataframe(result.rows).to_string(index=False))
    print("\nPie chart:")
    print("-" * 50)
    print(result.frame.to_string(index=False))

    # Two roots of different lengths line up by index
    combined = PaneProcessor({
        "graphType": "bar",
        "parameters": ["sites.site", "forecast.expected"],
        "rootKeys": [
            {"key": "sites", "path": "result.sites"},
            {"key": "forecast", "path": "result.forecast"},
        ],
    })
    print("\nTwo roots merged by position:")
    print("-" * 50)
    print(combined.to_dataframe(combined.transform(response)).to_string(index=False))


if __name__ == "__main__":
    main()
