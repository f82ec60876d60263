import csv
import json

from jump_engine import run_pricing_report
from jump_engine.numerics import AnalyticEuropeanEngine, JumpDiffusionEngine
from jump_engine.reporting import SCHEMA_VERSION, serialize_engine, serialize_option, serialize_process
from market_scenarios import european, market_scenarios, merton_process


def test_cli_writes_json_and_csv(tmp_path, capsys):
    code = run_pricing_report.main(
        ["--asof", "2024-01-02", "--strike", "95", "--option-type", "put", "--output-dir", str(tmp_path)]
    )

    assert code == 0
    json_path = tmp_path / "jump_diffusion_report_20240102.json"
    csv_path = tmp_path / "jump_diffusion_report_20240102.csv"
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["meta"]["schema_version"] == SCHEMA_VERSION
    assert payload["meta"]["report_type"] == "pricing.jump_diffusion"
    assert payload["option"]["option_type"] == "put"
    assert payload["option"]["strike"] == 95.0
    assert payload["engine"]["params"]["base_engine"] == "analytic_european"
    assert payload["result"]["diagnostics"]["state"] == "converged"

    with csv_path.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 1
    assert float(rows[0]["price"]) == payload["result"]["price"]
    assert "Price:" in capsys.readouterr().out


def test_cli_reports_non_convergence(capsys):
    code = run_pricing_report.main(["--relative-accuracy", "1e-30", "--max-iterations", "3"])

    assert code == 1
    assert "Pricing failed" in capsys.readouterr().err


def test_serialize_engine_params():
    engine = JumpDiffusionEngine(AnalyticEuropeanEngine(), relative_accuracy=1e-6, max_iterations=25)
    payload = serialize_engine(engine)

    assert payload == {
        "name": "jump_diffusion(analytic_european)",
        "params": {
            "relative_accuracy": 1e-6,
            "max_iterations": 25,
            "base_engine": "analytic_european",
        },
    }
    assert serialize_engine(AnalyticEuropeanEngine()) == {"name": "analytic_european"}


def test_serialize_option_and_process():
    option = serialize_option(european(110.0))
    assert option["payoff_type"] == "vanilla"
    assert option["option_type"] == "call"
    assert option["maturity"] == "2025-01-01"

    flat = serialize_process(merton_process())
    assert flat["name"] == "merton_jump"
    assert flat["params"]["jump_intensity"] == 1.0
    assert flat["risk_free_curve"] == {"type": "flat", "rate": 0.05, "reference_date": "2024-01-02"}

    zero = serialize_process(market_scenarios()["crash"])
    assert zero["risk_free_curve"]["type"] == "zero"
    assert zero["vol_surface"]["type"] == "flat"
