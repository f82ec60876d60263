"""Price a European option under Merton jump diffusion and write a report."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import os
import sys
from datetime import date, timedelta
from typing import Optional, Sequence

if __package__ is None and __name__ == "__main__":
    sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from jump_engine.api import PricingResult, PricingSettings, default_engine, price
from jump_engine.market_data.curves import FlatForward
from jump_engine.market_data.surfaces import BlackConstantVol
from jump_engine.models.merton import Merton76Process
from jump_engine.numerics.base import EngineSettings
from jump_engine.products.vanilla import EuropeanExercise, EuropeanOption, PlainVanillaPayoff
from jump_engine.reporting import (
    SCHEMA_VERSION,
    build_report_meta,
    serialize_engine,
    serialize_option,
    serialize_process,
)
from jump_engine.utils.errors import PricingError
from jump_engine.utils.types import OptionType, Quote

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Price a European option under Merton (1976) jump diffusion."
    )
    parser.add_argument("--asof", type=date.fromisoformat, default=date(2024, 1, 2))
    parser.add_argument("--spot", type=float, default=100.0)
    parser.add_argument("--strike", type=float, default=100.0)
    parser.add_argument("--option-type", choices=[t.value for t in OptionType], default="call")
    parser.add_argument("--maturity-days", type=int, default=365)
    parser.add_argument("--rate", type=float, default=0.05)
    parser.add_argument("--dividend-yield", type=float, default=0.0)
    parser.add_argument("--vol", type=float, default=0.2)
    parser.add_argument("--jump-intensity", type=float, default=1.0)
    parser.add_argument("--jump-mean", type=float, default=-0.1, help="Mean of the log jump size.")
    parser.add_argument("--jump-vol", type=float, default=0.2, help="Volatility of the log jump size.")
    parser.add_argument("--relative-accuracy", type=float, default=1e-4)
    parser.add_argument("--max-iterations", type=int, default=100)
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to write JSON/CSV reports; nothing is written when omitted.",
    )
    parser.add_argument("--log-level", default="WARNING")
    return parser


def build_sample_process(args: argparse.Namespace) -> Merton76Process:
    return Merton76Process(
        spot=Quote(args.spot, "spot"),
        dividend_curve=FlatForward(args.dividend_yield, args.asof),
        risk_free_curve=FlatForward(args.rate, args.asof),
        vol_surface=BlackConstantVol(args.vol, args.asof),
        jump_intensity=Quote(args.jump_intensity, "jump_intensity"),
        log_jump_mean=Quote(args.jump_mean, "log_jump_mean"),
        log_jump_vol=Quote(args.jump_vol, "log_jump_vol"),
    )


def build_sample_option(args: argparse.Namespace) -> EuropeanOption:
    return EuropeanOption(
        payoff=PlainVanillaPayoff(OptionType(args.option_type), args.strike),
        exercise=EuropeanExercise(args.asof + timedelta(days=args.maturity_days)),
    )


def build_report(
    args: argparse.Namespace,
    option: EuropeanOption,
    process: Merton76Process,
    engine,
    result: PricingResult,
) -> dict:
    meta = build_report_meta(
        report_type="pricing.jump_diffusion",
        run_id=result.run_id,
        asof=args.asof,
        inputs={
            "relative_accuracy": args.relative_accuracy,
            "max_iterations": args.max_iterations,
        },
        generator="jump_engine/run_pricing_report.py",
        assumptions=(
            "Flat risk-free, dividend and volatility term structures.",
            "Each jump-count scenario is priced under frozen constant rate and volatility.",
        ),
    )
    return {
        "meta": meta,
        "option": serialize_option(option),
        "process": serialize_process(process),
        "engine": serialize_engine(engine),
        "result": {
            "price": result.price,
            "greeks": result.greeks,
            "metrics": result.metrics,
            "diagnostics": result.diagnostics,
        },
    }


def write_report_files(output_dir: str, asof: date, payload: dict) -> tuple[str, str]:
    os.makedirs(output_dir, exist_ok=True)
    stamp = asof.strftime("%Y%m%d")
    json_path = os.path.join(output_dir, f"jump_diffusion_report_{stamp}.json")
    csv_path = os.path.join(output_dir, f"jump_diffusion_report_{stamp}.csv")

    with open(json_path, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)

    result = payload["result"]
    greeks = result["greeks"]
    with open(csv_path, "w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(
            [
                "run_id",
                "option_type",
                "strike",
                "maturity",
                "price",
                "delta",
                "gamma",
                "theta",
                "vega",
                "rho",
                "dividend_rho",
                "iterations",
                "engine",
            ]
        )
        writer.writerow(
            [
                payload["meta"]["run_id"],
                payload["option"].get("option_type", ""),
                payload["option"].get("strike", ""),
                payload["option"]["maturity"],
                result["price"],
                greeks.get("delta", ""),
                greeks.get("gamma", ""),
                greeks.get("theta", ""),
                greeks.get("vega", ""),
                greeks.get("rho", ""),
                greeks.get("dividend_rho", ""),
                result["metrics"].get("iterations", ""),
                payload["engine"]["name"],
            ]
        )
    return json_path, csv_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine_settings = EngineSettings(
        relative_accuracy=args.relative_accuracy,
        max_iterations=args.max_iterations,
    )
    engine = default_engine(engine_settings)
    process = build_sample_process(args)
    option = build_sample_option(args)

    try:
        result = price(option, process, engine, PricingSettings(engine_settings=engine_settings))
    except PricingError as exc:
        logger.error("pricing failed: %s", exc)
        print(f"Pricing failed: {exc}", file=sys.stderr)
        return 1

    payload = build_report(args, option, process, engine, result)

    print("=== Jump Diffusion Pricing ===")
    print(f"Asof: {args.asof}")
    print(f"Price: {result.price:.6f}")
    for name, value in result.greeks.items():
        print(f"{name}: {value:.6f}")
    print(f"Iterations: {int(result.metrics.get('iterations', 0))}")

    if args.output_dir:
        json_path, csv_path = write_report_files(args.output_dir, args.asof, payload)
        print(f"JSON report: {json_path}")
        print(f"CSV report: {csv_path}")
        print(f"Schema version: {SCHEMA_VERSION}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
