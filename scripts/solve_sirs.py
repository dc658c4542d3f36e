# file: scripts/solve_sirs.py
from __future__ import annotations

"""
SIRS epidemic model solver using Euler's method.

Examples
--------
# All parameters on the command line (t-start defaults to 0, t-delta to 0.01)
python -m scripts.solve_sirs --t-end 50 --t-delta 0.1 \
    --s-zero 990 --i-zero 10 --r-zero 0 --s-rate 0.05 --i-rate 0.3 --r-rate 0.1

# Preset scenario, true simulated time column, outputs + plots
python -m scripts.solve_sirs --scenario default --with-time --outdir outputs/run --plots

# Parameters from a JSON file; command-line flags win
python -m scripts.solve_sirs --params-file params.json --t-end 100

Outputs
-------
stdout                  # table: t,S,I,R (t is the step index)
<outdir>/
  series.csv            # same table, plain CSV
  config.json           # the run configuration
  plots/                # optional diagnostic pngs
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import orjson
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from benchmarks.scenarios import build_model, build_time_range
from orchestration.simulator import Simulator, render_csv
from solver import EvaluatorError, __version__


app = typer.Typer(add_completion=False, no_args_is_help=True)
err = Console(stderr=True)

TIME_KEYS = ("t_start", "t_end", "t_delta")


def _mk_outdir(path: str | Path) -> Path:
    p = Path(path).expanduser().resolve()
    p.mkdir(parents=True, exist_ok=True)
    (p / "plots").mkdir(exist_ok=True)
    return p


def _load_params_file(path: Path) -> Dict[str, Any]:
    data = orjson.loads(path.read_bytes())
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of parameters")
    return data


def _report_invalid(e: ValidationError, what: str) -> None:
    err.print(f"[red]Invalid {what}:[/red]")
    for item in e.errors():
        loc = ".".join(str(x) for x in item.get("loc", ())) or what
        err.print(f"  {escape(loc)}: {escape(str(item.get('msg')))}")


def _preview(df, name: str, n: int = 5) -> None:
    tbl = Table(title=f"{name} (head {n})")
    if df.empty:
        err.print(f"[yellow]{name} is empty[/yellow]")
        return
    for c in df.columns:
        tbl.add_column(str(c))
    for _, row in df.head(n).iterrows():
        tbl.add_row(*[str(row[c]) for c in df.columns])
    err.print(tbl)


@app.command()
def main(
    t_start: Optional[float] = typer.Option(None, help="Begin of time [default: 0]."),
    t_end: Optional[float] = typer.Option(None, help="End of time."),
    t_delta: Optional[float] = typer.Option(None, help="Delta time [default: 0.01]."),
    s_zero: Optional[float] = typer.Option(None, help="Number of susceptible at the beginning."),
    i_zero: Optional[float] = typer.Option(None, help="Number of infected at the beginning."),
    r_zero: Optional[float] = typer.Option(None, help="Number of recovered at the beginning."),
    s_rate: Optional[float] = typer.Option(None, help="Immunity loss rate (recovered -> susceptible)."),
    i_rate: Optional[float] = typer.Option(None, help="Infection rate of the disease."),
    r_rate: Optional[float] = typer.Option(None, help="Recovery rate of the disease."),
    scenario: str = typer.Option("custom", help="Preset scenario: default|sir|custom."),
    params_file: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="JSON file with parameters."),
    with_time: bool = typer.Option(False, "--with-time", help="Add the simulated time column."),
    outdir: Optional[str] = typer.Option(None, help="Directory for series.csv/config.json."),
    plots: bool = typer.Option(False, "--plots/--no-plots", help="Render quick plots into <outdir>/plots."),
    version: bool = typer.Option(False, "--version", help="Show version."),
):
    """
    Solve the SIRS model and print the time series as a table.
    """
    if version:
        typer.echo(f"sirs_solver v {__version__}")
        raise typer.Exit()

    values: Dict[str, Any] = {}
    if params_file is not None:
        try:
            values.update(_load_params_file(params_file))
        except (orjson.JSONDecodeError, ValueError) as e:
            err.print(f"[red]Cannot read parameters:[/red] {escape(str(e))}")
            raise typer.Exit(code=2)

    cli_values = dict(t_start=t_start, t_end=t_end, t_delta=t_delta,
                      s_zero=s_zero, i_zero=i_zero, r_zero=r_zero,
                      s_rate=s_rate, i_rate=i_rate, r_rate=r_rate)
    values.update({k: v for k, v in cli_values.items() if v is not None})
    time_overrides = {k: v for k, v in values.items() if k in TIME_KEYS}
    param_overrides = {k: v for k, v in values.items() if k not in TIME_KEYS}

    # Setup errors are fatal before any stepping
    try:
        model = build_model(scenario=scenario, overrides=param_overrides)
    except ValidationError as e:
        _report_invalid(e, "model parameters")
        raise typer.Exit(code=2)
    except ValueError as e:
        err.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=2)
    try:
        time_range = build_time_range(scenario=scenario, overrides=time_overrides)
    except ValidationError as e:
        _report_invalid(e, "time range")
        raise typer.Exit(code=2)

    sim = Simulator(model=model, time_range=time_range)
    err.print(f"[cyan]Integrating t in [{time_range.t_start}, {time_range.t_end}] "
              f"with dt={time_range.t_delta}...[/cyan]")
    try:
        sim.run()
    except EvaluatorError as e:
        err.print(f"[red]Integration failed after {sim.evaluator.step_count} steps:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    df = sim.to_dataframe(with_time=with_time)
    typer.echo(render_csv(df), nl=False)

    if outdir is None:
        return

    outp = _mk_outdir(outdir)
    df.to_csv(outp / "series.csv", index=False)
    cfg = dict(
        scenario=scenario,
        model=model.name,
        params=model.params.model_dump(),
        time=time_range.model_dump(),
        with_time=with_time,
        steps=sim.evaluator.step_count,
        outdir=str(outp),
    )
    with open(outp / "config.json", "w", encoding="utf-8") as f:
        json.dump(cfg, f, indent=2)

    _preview(df, "Series")

    if plots:
        try:
            from eval.metrics import compute_basic_metrics
            from eval.plots import quick_diagnostics

            metrics = compute_basic_metrics(df, population=model.population)
            err.print("[magenta]Metrics (basic):[/magenta]")
            for k, v in metrics.items():
                err.print(f"  {k}: {v}")

            quick_diagnostics(df, outdir=outp / "plots")
            err.print(f"[green]Plots written to {outp / 'plots'}[/green]")
        except Exception as e:
            err.print(f"[yellow]Plot/metrics generation failed: {e}[/yellow]")

    err.print(f"[bold green]Done. Outputs in {outp}[/bold green]")


if __name__ == "__main__":
    app()
