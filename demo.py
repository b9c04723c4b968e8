#!/usr/bin/env python3
"""
FPL Wrapped Demo

Demonstrates the complete pipeline:
1. Load a season export
2. Analyze transfers, captaincy, bench and chips
3. Calculate persona metrics and behavioral signals
4. Detect persona
5. Print the season summary

Usage:
    python demo.py [export_file]
    python demo.py  # Uses sample season export
"""

import json
import sys
from pathlib import Path

from fpl_wrapped.parsers.season_loader import SeasonLoader
from fpl_wrapped.scoring.summary_builder import build_season_summary


def main(export_path: str = None):
    """Run the demo pipeline."""
    print("=" * 50)
    print("FPL Wrapped Demo")
    print("=" * 50)
    print()

    # Use sample file if none provided
    if export_path is None:
        export_path = Path(__file__).parent / "tests" / "fixtures" / "sample_season.json"
        print(f"Using sample file: {export_path.name}")
    else:
        export_path = Path(export_path)

    if not export_path.exists():
        print(f"Error: File not found: {export_path}")
        return 1

    # =========================================================================
    # Step 1: Load season export
    # =========================================================================
    print()
    print("[1] Loading season export...")

    loader = SeasonLoader()
    try:
        context = loader.load(export_path)
    except ValueError as e:
        print(f"    Error loading export: {e}")
        return 1

    print(f"    -> Manager: {context.manager.full_name} ({context.manager.name})")
    print(f"    -> Finished gameweeks: {len(context.finished_gameweeks)}")
    print(f"    -> Transfers logged: {len(context.transfers)}")
    if loader.warnings:
        print(f"    -> Warnings: {len(loader.warnings)}")

    summary = build_season_summary(context)

    # =========================================================================
    # Step 2: Decisions
    # =========================================================================
    print()
    print("[2] Analyzing decisions...")

    print(f"    -> Transfers: {summary.total_transfers} "
          f"(net {summary.net_transfer_points:+d}, hits -{summary.total_transfers_cost})")
    if summary.best_transfer:
        best = summary.best_transfer
        print(f"       Best: {best.player_in.web_name} for {best.player_out.web_name} "
              f"({best.points_gained:+d})")
    print(f"    -> Captaincy: {summary.captaincy_success_rate:.1f}% optimal, "
          f"{summary.captaincy_points_lost} points left on the table")
    print(f"    -> Bench: {summary.total_bench_points} points, {summary.bench_regrets} regrets")
    for chip in summary.chips:
        status = f"GW{chip.event} {chip.points_gained:+d} ({chip.verdict})" if chip.used else chip.verdict
        print(f"    -> {chip.display_name}: {status}")

    # =========================================================================
    # Step 3: Metrics and signals
    # =========================================================================
    print()
    print("[3] Calculating persona metrics...")

    for name, value in summary.metrics.to_dict().items():
        print(f"    -> {name}: {value:.2f}")
    print(f"    -> Signals: {', '.join(summary.signals) or 'none'}")

    # =========================================================================
    # Step 4: Persona
    # =========================================================================
    print()
    print("[4] Detecting persona...")

    persona = summary.persona
    print(f"    -> {persona.name}: {persona.title} ({persona.personality_code})")
    for trait in persona.trait_spectrum:
        print(f"       {trait.trait}: {trait.score}")
    for moment in persona.memorable_moments:
        print(f"       * {moment}")

    # =========================================================================
    # Summary
    # =========================================================================
    print()
    print("=" * 50)
    print(f"Grades: transfers {summary.grades.transfers}, captaincy {summary.grades.captaincy}, "
          f"bench {summary.grades.bench}, overall {summary.grades.overall}")
    print("=" * 50)

    print()
    print("Season Summary (JSON):")
    print("-" * 30)
    headline = {
        "manager": summary.manager_name,
        "total_points": summary.total_points,
        "overall_rank": summary.overall_rank,
        "persona": persona.to_dict(),
        "template_overlap": summary.template_overlap,
        "squad_value": summary.model_dump(mode='json')["squad_value"],
    }
    print(json.dumps(headline, indent=2))

    return 0


if __name__ == "__main__":
    export_file = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(main(export_file))
