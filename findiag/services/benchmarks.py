"""
benchmarks.py — Industry Reference Data Access & Import

Purpose:
- Look up industry codes and the valid industry-average ratio row for a
  (industry_code, year, firm_size_type) key.
- Convert ORM rows into the engine's BenchmarkRow dataclass.
- Load reference data from CSV (pandas) and either upsert it into the
  database or render it as SQL INSERT statements.

This module does NOT:
- Compute or compare ratios (see services/diagnosis/).
- Validate request payloads (API layer).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd
from sqlalchemy.orm import Session

from findiag.core.logging import get_logger
from findiag.models.benchmark_ratio import BenchmarkRatio
from findiag.models.industry_code import IndustryCode
from findiag.services.diagnosis.types import RATIO_ORDER, BenchmarkRow

logger = get_logger(__name__)

VALID_FLAG = "Y"

BENCHMARK_KEY_COLUMNS = ["year", "industry_code", "firm_size_type"]
BENCHMARK_TEXT_COLUMNS = {"industry_code", "firm_size_type", "valid_yn"}
BENCHMARK_COLUMNS = BENCHMARK_KEY_COLUMNS + RATIO_ORDER + ["valid_yn"]

INDUSTRY_COLUMNS = ["code", "name", "category", "description"]
INDUSTRY_REQUIRED_COLUMNS = ["code", "name", "category"]

Record = Dict[str, Any]


# -----------------------------------------------------------------------------
# Lookups
# -----------------------------------------------------------------------------

def list_industries(db: Session) -> List[IndustryCode]:
    return db.query(IndustryCode).order_by(IndustryCode.code).all()


def get_industry(db: Session, code: str) -> Optional[IndustryCode]:
    return db.query(IndustryCode).filter(IndustryCode.code == code).first()


def find_benchmark(
    db: Session,
    industry_code: str,
    year: int,
    firm_size_type: Optional[str],
) -> Optional[BenchmarkRatio]:
    """
    Return the valid benchmark row for the key, or None.

    At most one valid row is expected per key; if several exist the most
    recently loaded one wins.
    """
    return (
        db.query(BenchmarkRatio)
        .filter(
            BenchmarkRatio.industry_code == industry_code,
            BenchmarkRatio.year == year,
            BenchmarkRatio.firm_size_type == firm_size_type,
            BenchmarkRatio.valid_yn == VALID_FLAG,
        )
        .order_by(BenchmarkRatio.id.desc())
        .first()
    )


def to_benchmark_row(row: BenchmarkRatio) -> BenchmarkRow:
    return BenchmarkRow(
        industry_code=row.industry_code,
        year=row.year,
        firm_size_type=row.firm_size_type,
        valid_yn=row.valid_yn or VALID_FLAG,
        **{name: getattr(row, name) for name in RATIO_ORDER},
    )


# -----------------------------------------------------------------------------
# CSV Loading
# -----------------------------------------------------------------------------

def _read_csv(path: Union[str, Path], text_columns: Sequence[str]) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise ValueError(f"CSV file not found: {path}")
    # utf-8-sig strips the BOM spreadsheet exports tend to add
    df = pd.read_csv(path, encoding="utf-8-sig", dtype={c: str for c in text_columns})
    df.columns = [str(c).strip() for c in df.columns]
    return df


def _require_columns(df: pd.DataFrame, required: Sequence[str], path: Union[str, Path]) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing required column(s): {', '.join(missing)}")


def _records(df: pd.DataFrame) -> List[Record]:
    # NaN → None so blanks become SQL NULL
    return df.astype(object).where(df.notna(), None).to_dict(orient="records")


def load_benchmark_csv(path: Union[str, Path]) -> List[Record]:
    """
    Read an industry-average ratio CSV.

    Expected header (ratio columns optional, extra columns ignored):
        year,industry_code,firm_size_type,current_ratio,...,interest_coverage,valid_yn

    Every column except industry_code, firm_size_type and valid_yn is numeric;
    blank cells load as None.

    Raises:
        ValueError: missing file, missing key columns, non-numeric ratio cells
    """
    df = _read_csv(path, BENCHMARK_TEXT_COLUMNS)
    _require_columns(df, BENCHMARK_KEY_COLUMNS, path)

    ignored = [c for c in df.columns if c not in BENCHMARK_COLUMNS]
    if ignored:
        logger.warning("%s: ignoring unknown column(s): %s", path, ", ".join(ignored))
    df = df[[c for c in BENCHMARK_COLUMNS if c in df.columns]].copy()

    for column in df.columns:
        if column in BENCHMARK_TEXT_COLUMNS:
            df[column] = df[column].str.strip()
            continue
        try:
            df[column] = pd.to_numeric(df[column], errors="raise")
        except (ValueError, TypeError) as e:
            raise ValueError(f"{path}: column '{column}' contains non-numeric values: {e}") from e

    if df["year"].isna().any() or df["industry_code"].isna().any() or df["firm_size_type"].isna().any():
        raise ValueError(f"{path}: every row needs year, industry_code and firm_size_type")

    if "valid_yn" not in df.columns:
        df["valid_yn"] = VALID_FLAG
    df["valid_yn"] = df["valid_yn"].fillna(VALID_FLAG)

    records = _records(df)
    for record in records:
        record["year"] = int(record["year"])
        for name in RATIO_ORDER:
            if record.get(name) is not None:
                record[name] = float(record[name])

    logger.info("Loaded %d benchmark rows from %s", len(records), path)
    return records


def load_industry_csv(path: Union[str, Path]) -> List[Record]:
    """
    Read an industry code CSV: code,name,category[,description].
    """
    df = _read_csv(path, INDUSTRY_COLUMNS)
    _require_columns(df, INDUSTRY_REQUIRED_COLUMNS, path)
    df = df[[c for c in INDUSTRY_COLUMNS if c in df.columns]].copy()
    for column in df.columns:
        df[column] = df[column].str.strip()

    if df[INDUSTRY_REQUIRED_COLUMNS].isna().any().any():
        raise ValueError(f"{path}: every row needs code, name and category")

    records = _records(df)
    logger.info("Loaded %d industry codes from %s", len(records), path)
    return records


# -----------------------------------------------------------------------------
# SQL Rendering
# -----------------------------------------------------------------------------

def _sql_literal(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, str):
        escaped = value.replace("'", "''")
        return f"'{escaped}'"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_insert_sql(records: Sequence[Record], table: str = BenchmarkRatio.__tablename__) -> str:
    """
    Render records as one `INSERT OR IGNORE` statement per line.

    Example line:
        INSERT OR IGNORE INTO sinbo_ratios (year, industry_code) VALUES (2023, 'C10');
    """
    statements = []
    for record in records:
        columns = list(record.keys())
        values = [_sql_literal(record[c]) for c in columns]
        statements.append(
            f"INSERT OR IGNORE INTO {table} ({', '.join(columns)}) VALUES ({', '.join(values)});"
        )
    return "\n".join(statements)


# -----------------------------------------------------------------------------
# Database Upserts
# -----------------------------------------------------------------------------

def upsert_industries(db: Session, records: Sequence[Record]) -> int:
    written = 0
    for record in records:
        industry = db.get(IndustryCode, record["code"])
        if industry is None:
            industry = IndustryCode(code=record["code"])
            db.add(industry)
        industry.name = record["name"]
        industry.category = record["category"]
        industry.description = record.get("description")
        written += 1
    db.commit()
    logger.info("Upserted %d industry codes", written)
    return written


def upsert_benchmarks(db: Session, records: Sequence[Record]) -> int:
    """
    Insert or update benchmark rows keyed on (industry_code, year, firm_size_type).
    """
    written = 0
    for record in records:
        row = (
            db.query(BenchmarkRatio)
            .filter(
                BenchmarkRatio.industry_code == record["industry_code"],
                BenchmarkRatio.year == record["year"],
                BenchmarkRatio.firm_size_type == record["firm_size_type"],
            )
            .first()
        )
        if row is None:
            row = BenchmarkRatio(
                industry_code=record["industry_code"],
                year=record["year"],
                firm_size_type=record["firm_size_type"],
            )
            db.add(row)
        for name in RATIO_ORDER:
            setattr(row, name, record.get(name))
        row.valid_yn = record.get("valid_yn") or VALID_FLAG
        written += 1
    db.commit()
    logger.info("Upserted %d benchmark rows", written)
    return written
