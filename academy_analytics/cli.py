#!/usr/bin/env python3
"""
Academy Analytics CLI — summaries, forecasts and questions over a monthly records workbook.

USAGE:
  python -m academy_analytics.cli summary records.xlsx
  python -m academy_analytics.cli forecast records.xlsx                      # ensemble, students, 3 months
  python -m academy_analytics.cli forecast records.xlsx --field total_paid --horizon 6
  python -m academy_analytics.cli forecast records.xlsx --model linear
  python -m academy_analytics.cli ask records.xlsx "predict placements for the next 4 months"

  python -m academy_analytics.cli serve                                      # Start API server
  python -m academy_analytics.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from academy_analytics.config import DEFAULT_HORIZON, MAX_HORIZON
from academy_analytics.data.errors import IngestError
from academy_analytics.data.schemas import Field
from academy_analytics.data.store import DataStore
from academy_analytics.analytics.forecast import MODELS, run_model
from academy_analytics.analytics.summary import summarize
from academy_analytics.reports import narrative
from academy_analytics.reports.router import forecast_report, route


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  ACADEMY ANALYTICS — {title}")
    print("=" * 70)


def _load(path: str) -> DataStore:
    """Load the workbook or exit with status 1 on an ingestion failure."""
    try:
        return DataStore().load_path(Path(path))
    except IngestError as exc:
        print(f"  Error: {exc}")
        sys.exit(1)


def _field(name: str) -> Field:
    try:
        return Field.parse(name)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def _horizon(value: str) -> int:
    months = int(value)
    if not 1 <= months <= MAX_HORIZON:
        raise argparse.ArgumentTypeError(f"horizon must be between 1 and {MAX_HORIZON}")
    return months


def cmd_summary(args):
    _banner("SUMMARY")
    store = _load(args.file)
    print()
    print(narrative.render_summary(summarize(store.series)))
    print()


def cmd_forecast(args):
    _banner("FORECAST")
    store = _load(args.file)
    print()
    if args.model == "ensemble":
        print(forecast_report(store.series, args.field, args.horizon))
    else:
        result = run_model(args.model, store.series, args.field, args.horizon)
        if result.ok:
            shown = ", ".join(narrative.fmt_value(v, args.field) for v in result.values)
            print(f"  {args.field.label} ({result.model}, next {args.horizon}): {shown}")
        else:
            print(f"  {args.field.label} ({result.model}): {result.status.value.replace('_', ' ')}")
    print()


def cmd_ask(args):
    store = _load(args.file)
    print()
    print(route(args.question, store.series))
    print()


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Academy Analytics API on port {args.port}...")
    uvicorn.run("academy_analytics.main:app", host=args.host, port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Academy Analytics — enrollment, placement and revenue forecasting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # summary subcommand
    summary_parser = subparsers.add_parser("summary", help="Totals, rates and per-year rollups")
    summary_parser.add_argument("file", help="Workbook (.xlsx/.xlsm) or .csv")
    summary_parser.set_defaults(func=cmd_summary)

    # forecast subcommand
    forecast_parser = subparsers.add_parser("forecast", help="Forecast one field")
    forecast_parser.add_argument("file", help="Workbook (.xlsx/.xlsm) or .csv")
    forecast_parser.add_argument("--field", type=_field, default=Field.TOTAL_STUDENTS,
                                 help=f"One of: {', '.join(f.value for f in Field)}")
    forecast_parser.add_argument("--horizon", type=_horizon, default=DEFAULT_HORIZON,
                                 help=f"Months ahead (default {DEFAULT_HORIZON})")
    forecast_parser.add_argument("--model", choices=list(MODELS), default="ensemble", help="Model")
    forecast_parser.set_defaults(func=cmd_forecast)

    # ask subcommand
    ask_parser = subparsers.add_parser("ask", help="Ask a free-text question")
    ask_parser.add_argument("file", help="Workbook (.xlsx/.xlsm) or .csv")
    ask_parser.add_argument("question", help='e.g. "predict revenue for 6 months"')
    ask_parser.set_defaults(func=cmd_ask)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address (default 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
