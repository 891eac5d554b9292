#!/usr/bin/env python3
"""Run the default city to completion and log a summary."""

import sys
import os
import logging
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("citylife")


def main():
    from citylife.core.engine import build_city, run_simulation
    from citylife.scenarios.default_city import build_default_city_config

    try:
        days = int(sys.argv[1]) if len(sys.argv) > 1 else 7
        people = int(sys.argv[2]) if len(sys.argv) > 2 else 200
    except ValueError:
        print("Usage: python run_simulation.py [days] [people]")
        sys.exit(1)

    config = build_default_city_config(num_people=people, total_days=days)
    logger.info(f"Running default city: {people} people for {days} days")

    start = time.time()
    city = build_city(config)
    datasets = run_simulation(
        city=city,
        progress_callback=lambda day, total: logger.info(f"Day {day}/{total} complete"),
    )
    elapsed = time.time() - start
    logger.info(f"Simulation completed in {elapsed:.1f}s ({len(datasets)} samples)")

    if datasets.empty:
        return

    first = datasets.iloc[0]
    last = datasets.iloc[-1]
    logger.info("=== Summary (first sample → last sample) ===")
    for key in ("at_home", "moving", "working", "employed", "unemployed", "mean_money"):
        logger.info(f"  {key}: {first[key]:.0f} → {last[key]:.0f}")

    line_columns = [c for c in datasets.columns if c.startswith("line:")]
    peak = datasets[line_columns].max().sort_values(ascending=False)
    logger.info("=== Peak line congestion (%) ===")
    for column, value in peak.head(5).items():
        logger.info(f"  {column[5:]}: {value:.0f}%")
    logger.info(f"People still in transit at the end: {city.in_transit_count()}")


if __name__ == "__main__":
    main()
