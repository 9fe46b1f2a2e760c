"""Console script for evoswarm."""

import logging
from pathlib import Path
from typing import Optional

import numpy as np
import typer
from rich.console import Console
from rich.table import Table

from evoswarm.exceptions import NumericFailure
from evoswarm.logging import setup_logger_from_config
from evoswarm.optimisation.config import OptimizationConfigManager
from evoswarm.optimisation.objectives import BENCHMARKS
from evoswarm.reporting import FileSink

app = typer.Typer(help="Population-based metaheuristic optimization.")
console = Console()
logger = logging.getLogger("evoswarm.cli")


def _load(config_path: Path) -> OptimizationConfigManager:
    config_manager = OptimizationConfigManager(config_path=str(config_path))
    setup_logger_from_config(config_manager.get_full_config().get("logging"))
    return config_manager


@app.command()
def run(
    config_path: Path = typer.Argument(..., help="YAML configuration file"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for the random generator"),
):
    """Perform a single optimization run and print the best solution."""
    config_manager = _load(config_path)
    logger.info("🚀 Starting %s run", config_manager.get_algorithm_type())

    optimizer = config_manager.create_optimizer(rng=np.random.default_rng(seed))
    try:
        result = optimizer.run()
    except NumericFailure as e:
        console.print(f"[red]❌ Run {optimizer.state.value} at iteration {optimizer.iteration}: {e}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title=f"{config_manager.get_algorithm_type()} result")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("State", result.state.value)
    table.add_row("Best fitness", f"{result.best_fitness:.10g}")
    table.add_row("Iterations", str(result.iterations))
    table.add_row("Evaluations", str(result.evaluation_count))
    table.add_row("Elapsed", f"{result.elapsed_seconds:.2f}s")
    console.print(table)
    console.print(f"Best solution: {np.array2string(result.best_solution, precision=6)}")


@app.command()
def stats(
    config_path: Path = typer.Argument(..., help="YAML configuration file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="CSV report path (overrides output.report_path)"),
):
    """Run the statistics collector and print a summary."""
    config_manager = _load(config_path)
    output_config = config_manager.get_full_config().get("output") or {}
    report_path = output or output_config.get("report_path")

    collector = config_manager.create_statistics_collector()
    sink = FileSink(report_path) if report_path else None
    statistics = collector.collect(sink=sink, precision=output_config.get("precision"))

    table = Table(title=f"Statistics over {statistics.run_count} runs")
    table.add_column("Statistic")
    table.add_column("Value", justify="right")
    for name, value in statistics.summary().items():
        table.add_row(name, "-" if value is None else f"{value:.6g}")
    console.print(table)
    if statistics.completed_runs:
        console.print(f"Solution mean: {np.array2string(statistics.solution_mean(), precision=6)}")
        console.print(f"Solution std:  {np.array2string(statistics.solution_std(), precision=6)}")
    if report_path:
        console.print(f"💾 Report written to {report_path}")
    if not statistics.completed_runs:
        console.print(f"[red]❌ All {statistics.run_count} runs failed[/red]")
        raise typer.Exit(code=1)


@app.command()
def benchmarks():
    """List the available benchmark objectives."""
    table = Table(title="Benchmark objectives")
    table.add_column("Name")
    table.add_column("Default bounds")
    for name, benchmark in sorted(BENCHMARKS.items()):
        table.add_row(name, f"[{benchmark.bounds[0]}, {benchmark.bounds[1]}]")
    console.print(table)


if __name__ == "__main__":
    app()
