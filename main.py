"""Main entry point for Datalens"""

import asyncio
import argparse
import logging
from pathlib import Path

from orchestrator import Orchestrator
from core.models import UploadedFile
from core.enums import JSONSchemaPolicy
from core.exceptions import PipelineError
from ui.progress import ConsoleProgress
from config import settings


def print_summary(ctx) -> None:
    table = ctx.table
    print(f"\n{table.source_name}: {table.row_count} rows x {table.column_count} columns")
    for column, column_type in zip(table.columns, table.types):
        print(f"  {column:<24} {column_type.value}")

    print(f"\nFirst {settings.MAX_PREVIEW_ROWS} rows:")
    for row in table.rows[:settings.MAX_PREVIEW_ROWS]:
        print(f"  {row}")

    print("\nStatistics:")
    for stats in ctx.profile.statistics.column_stats:
        line = f"  {stats.column}: {stats.count} values, {stats.null_count} empty, {stats.unique_count} unique"
        if stats.mean is not None:
            line += f", min={stats.min:g} max={stats.max:g} mean={stats.mean:g} median={stats.median:g}"
        elif stats.top_values:
            top = ", ".join(f"{t.value} ({t.count})" for t in stats.top_values)
            line += f", top: {top}"
        print(line)

    for column, anomalies in ctx.profile.anomalies.items():
        print(f"\nAnomalies in {column}:")
        for anomaly in anomalies:
            print(f"  row {anomaly.index}: {anomaly.value:g} (z={anomaly.z_score:.2f}, {anomaly.severity.value})")

    if ctx.profile.correlations and ctx.profile.correlations.significant_pairs:
        print("\nCorrelations:")
        for pair in ctx.profile.correlations.significant_pairs:
            print(
                f"  {pair.column_a} ~ {pair.column_b}: {pair.correlation:.2f} "
                f"({pair.strength.value} {pair.direction.value})"
            )

    quality = ctx.profile.quality
    if quality:
        print(f"\nData quality: {quality.overall_score:.0f}/100")
        for recommendation in quality.recommendations:
            print(f"  {recommendation}")


def main():
    parser = argparse.ArgumentParser(
        description="Datalens - Tabular file ingestion and profiling"
    )
    parser.add_argument("file", type=Path, help="Input file path (csv, tsv, xlsx, xls, json)")
    parser.add_argument(
        "--json-schema-policy",
        choices=[p.value for p in JSONSchemaPolicy],
        default=settings.JSON_SCHEMA_POLICY,
        help="How JSON columns are derived"
    )
    parser.add_argument(
        "--anomaly-threshold",
        type=float,
        default=settings.ANOMALY_Z_THRESHOLD,
        help="Z-score above which a value is reported"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if not args.file.exists():
        print(f"Error: File not found: {args.file}")
        return 1

    orchestrator = Orchestrator(
        progress=ConsoleProgress(),
        json_schema_policy=args.json_schema_policy,
        anomaly_threshold=args.anomaly_threshold,
    )

    try:
        ctx = asyncio.run(orchestrator.run(UploadedFile.from_path(args.file)))
    except PipelineError as e:
        print(f"\n✗ {e}")
        return 1

    print_summary(ctx)
    return 0


if __name__ == "__main__":
    exit(main())
