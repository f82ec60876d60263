"""Reporting helpers for pricing runs."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Sequence

from jump_engine.market_data.curves import FlatForward, ZeroCurve
from jump_engine.market_data.surfaces import BlackConstantVol, SmileVolSurface
from jump_engine.models.black_scholes import BlackScholesProcess
from jump_engine.numerics.base import Engine
from jump_engine.numerics.jump_diffusion import JumpDiffusionEngine
from jump_engine.products.vanilla import EuropeanOption


SCHEMA_VERSION = "1.0"


def build_report_meta(
    report_type: str,
    run_id: str,
    asof: date,
    inputs: Mapping[str, Any],
    generator: str,
    assumptions: Sequence[str] = (),
) -> Dict[str, Any]:
    meta = {
        "schema_version": SCHEMA_VERSION,
        "report_type": report_type,
        "run_id": run_id,
        "asof": asof.isoformat(),
        "created_at": _utc_now().isoformat(),
        "generator": generator,
        "inputs": _safe_json(inputs),
    }
    if assumptions:
        meta["assumptions"] = list(assumptions)
    return meta


def serialize_option(option: EuropeanOption) -> Dict[str, Any]:
    payoff = option.payoff
    payload: Dict[str, Any] = {
        "product_type": option.product_type,
        "payoff_type": payoff.payoff_type,
        "maturity": option.maturity.isoformat(),
    }
    if is_dataclass(payoff):
        payload.update(_safe_json(asdict(payoff)))
    return payload


def serialize_process(process: BlackScholesProcess) -> Dict[str, Any]:
    return {
        "name": process.name,
        "params": _safe_json(process.params()),
        "risk_free_curve": _serialize_curve(process.risk_free_curve),
        "dividend_curve": _serialize_curve(process.dividend_curve),
        "vol_surface": _serialize_surface(process.vol_surface),
    }


def serialize_engine(engine: Engine) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"name": engine.name}
    if isinstance(engine, JumpDiffusionEngine):
        payload["params"] = {
            "relative_accuracy": engine.relative_accuracy,
            "max_iterations": engine.max_iterations,
            "base_engine": engine.base_engine.name,
        }
    return payload


def _serialize_curve(curve) -> Dict[str, Any]:
    if isinstance(curve, FlatForward):
        return {"type": "flat", "rate": curve.rate, "reference_date": curve.reference_date.isoformat()}
    if isinstance(curve, ZeroCurve):
        return {
            "type": "zero",
            "times": list(curve.times),
            "zero_rates": list(curve.zero_rates),
            "reference_date": curve.reference_date.isoformat(),
        }
    return {"type": curve.__class__.__name__}


def _serialize_surface(surface) -> Dict[str, Any]:
    if isinstance(surface, BlackConstantVol):
        return {"type": "flat", "vol": surface.vol, "reference_date": surface.reference_date.isoformat()}
    if isinstance(surface, SmileVolSurface):
        return {
            "type": "smile",
            "expiries": list(surface.expiries),
            "atm_vols": list(surface.atm_vols),
            "skew": list(surface.skew),
            "curvature": list(surface.curvature),
            "spot_ref": surface.spot_ref,
        }
    return {"type": surface.__class__.__name__}


def _safe_json(payload: Mapping[str, Any]) -> Dict[str, Any]:
    def _convert(obj: Any) -> Any:
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, (str, int, float, bool)) or obj is None:
            return obj
        if isinstance(obj, date):
            return obj.isoformat()
        if is_dataclass(obj):
            return _convert(asdict(obj))
        if isinstance(obj, Mapping):
            return {str(k): _convert(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [_convert(v) for v in obj]
        return str(obj)

    return {str(k): _convert(v) for k, v in payload.items()}


def _utc_now() -> datetime:
    tz = getattr(datetime, "UTC", timezone.utc)
    return datetime.now(tz)
