"""
import_ratios.py — Load industry codes and industry-average ratios from CSV.

Either upserts the rows into the configured database (DATABASE_URL) or, with
--sql-out, writes `INSERT OR IGNORE` statements to a file instead.

Example:
    python scripts/import_ratios.py \
        --industries-csv data/industry_codes.csv \
        --ratios-csv data/sinbo_ratios_sample.csv

    python scripts/import_ratios.py \
        --ratios-csv data/sinbo_ratios_sample.csv \
        --sql-out data/seed_ratios.sql
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from findiag.core.config import settings
from findiag.core.database import SessionLocal, init_db
from findiag.core.logging import configure_logging
from findiag.models.industry_code import IndustryCode
from findiag.services.benchmarks import (
    load_benchmark_csv,
    load_industry_csv,
    render_insert_sql,
    upsert_benchmarks,
    upsert_industries,
)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Import industry codes and industry-average ratios from CSV"
    )
    parser.add_argument(
        "--ratios-csv",
        type=str,
        default=None,
        help="CSV with year,industry_code,firm_size_type,<12 ratios>,valid_yn",
    )
    parser.add_argument(
        "--industries-csv",
        type=str,
        default=None,
        help="CSV with code,name,category[,description]",
    )
    parser.add_argument(
        "--sql-out",
        type=str,
        default=None,
        help="Write SQL INSERT statements to this file instead of touching the database",
    )

    args = parser.parse_args()

    if not args.ratios_csv and not args.industries_csv:
        parser.error("at least one of --ratios-csv / --industries-csv is required")

    configure_logging(settings.LOG_LEVEL)

    try:
        industries = load_industry_csv(args.industries_csv) if args.industries_csv else []
        ratios = load_benchmark_csv(args.ratios_csv) if args.ratios_csv else []

        if args.sql_out:
            output_path = Path(args.sql_out)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            chunks = []
            if industries:
                chunks.append(render_insert_sql(industries, table=IndustryCode.__tablename__))
            if ratios:
                chunks.append(render_insert_sql(ratios))
            output_path.write_text("\n".join(chunks) + "\n", encoding="utf-8")
            print(f"✓ Generated {len(industries) + len(ratios)} INSERT statements")
            print(f"  Output file: {output_path}")
            return

        init_db()
        with SessionLocal() as db:
            if industries:
                upsert_industries(db, industries)
            if ratios:
                upsert_benchmarks(db, ratios)

        print(f"✓ Imported {len(industries)} industry codes and {len(ratios)} benchmark rows")

    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"ERROR: Unexpected error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
