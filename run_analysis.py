"""
Flight Elapsed-Time Analysis - Report Runner
=============================================
Loads every BTS file in the data directory, keeps completed flights between
the 20 busiest origin airports, explores baseline residuals and compares four
elapsed-time models by 5-fold cross-validated squared correlation.

Usage:
  python run_analysis.py [data_dir] [output_dir]
"""

import sys
from pathlib import Path

from config.data_config import RAW_DATA_DIR, REPORTS_DIR
from flight_analysis.pipeline import run_analysis


def banner(text):
    print(f"\n{'=' * 60}\n{text}\n{'=' * 60}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    data_dir = Path(argv[0]) if len(argv) > 0 else RAW_DATA_DIR
    output_dir = Path(argv[1]) if len(argv) > 1 else REPORTS_DIR

    banner("FLIGHT ELAPSED-TIME ANALYSIS")
    print(f"  Data   : {data_dir}")
    print(f"  Report : {output_dir}")

    results = run_analysis(data_dir=data_dir, output_dir=output_dir)

    stats = results["filter_stats"]
    banner("DONE")
    print(f"  Flights analyzed : {stats['final_records']:,} of {stats['original_records']:,}")
    print(f"  Airports         : {', '.join(results['airports'])}")
    print(f"\n  {'Model':<30} {'CV r^2':>8} {'Pooled':>8}")
    print(f"  {'-' * 30} {'-' * 8} {'-' * 8}")
    for _, row in results["comparison"].iterrows():
        print(
            f"  {row['description']:<30} {row['cv_r_squared']:>8.4f} {row['pooled_r_squared']:>8.4f}"
        )
    print(f"\n  Files written    : {len(results['written'])} in {output_dir}/")


if __name__ == "__main__":
    main()
