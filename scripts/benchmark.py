#!/usr/bin/env python3
"""
Transform Benchmark

Times full transform calls per size for:
  1. The generic engine (TransformEngine)
  2. The unrolled kernels (sizes 2, 4, 8 only)
  3. numpy.fft with norm="ortho" as an external reference

Every measurement is an end-to-end transform call (validation, copies,
cache lookups and all), never an isolated butterfly.

Usage:
    python scripts/benchmark.py [--config CONFIG_PATH] [--output OUTPUT_DIR]
"""

import sys
import json
import argparse
import time
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, asdict

import numpy as np

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / 'src'))

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.panel import Panel
from rich import box

from radixfft import TransformEngine, TransformRegistry, ValidationHarness
from radixfft.config import RadixFFTConfig, load_config
from radixfft.utils import log_cache_stats, setup_logging_from_config

console = Console()


@dataclass
class TimingResult:
    """Timings for one size (microseconds per call)."""
    size: int
    engine_us: float
    engine_std_us: float
    kernel_us: Optional[float]
    kernel_std_us: Optional[float]
    numpy_us: float
    max_error_vs_numpy: float
    kernel_passed: Optional[bool]

    def to_dict(self) -> Dict:
        return asdict(self)


def time_call(fn, warmup: int, iterations: int) -> Tuple[float, float]:
    """Mean and std of fn() in microseconds."""
    for _ in range(warmup):
        fn()
    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        fn()
        times.append((time.perf_counter() - start) * 1e6)
    return float(np.mean(times)), float(np.std(times))


def measure_size(
    size: int,
    engine: TransformEngine,
    registry: TransformRegistry,
    harness: ValidationHarness,
    config: RadixFFTConfig,
) -> TimingResult:
    rng = np.random.default_rng(config.benchmark.seed)
    real = rng.standard_normal(size)
    imag = rng.standard_normal(size)
    bench = config.benchmark

    engine_us, engine_std = time_call(
        lambda: engine.transform(real, imag, True), bench.warmup, bench.iterations)

    kernel_us = kernel_std = kernel_passed = None
    candidate = registry.create(size)
    if not isinstance(candidate, TransformEngine):
        kernel_us, kernel_std = time_call(
            lambda: candidate.transform(real, imag, True), bench.warmup, bench.iterations)
        kernel_passed = harness.compare(candidate, real, imag, True).passed

    x = real + 1j * imag
    numpy_us, _ = time_call(lambda: np.fft.fft(x, norm="ortho"), bench.warmup, bench.iterations)

    ours = engine.transform(real, imag, True)
    ref = np.fft.fft(x, norm="ortho")
    max_error = float(max(np.abs(ours[0::2] - ref.real).max(), np.abs(ours[1::2] - ref.imag).max()))

    return TimingResult(
        size=size,
        engine_us=engine_us,
        engine_std_us=engine_std,
        kernel_us=kernel_us,
        kernel_std_us=kernel_std,
        numpy_us=numpy_us,
        max_error_vs_numpy=max_error,
        kernel_passed=kernel_passed,
    )


def display_results_table(results: List[TimingResult]):
    table = Table(title="Transform Benchmark (us per call)", box=box.ROUNDED)
    table.add_column("N", justify="right", style="bold")
    table.add_column("Engine", justify="right")
    table.add_column("Unrolled", justify="right")
    table.add_column("Speedup", justify="right")
    table.add_column("numpy", justify="right")
    table.add_column("Max err", justify="right")

    for r in results:
        if r.kernel_us is not None:
            status = "[green]✓[/green]" if r.kernel_passed else "[red]✗[/red]"
            unrolled = f"{r.kernel_us:.2f}±{r.kernel_std_us:.2f} {status}"
            speedup = f"{r.engine_us / r.kernel_us:.2f}x"
        else:
            unrolled = "-"
            speedup = "-"
        table.add_row(
            str(r.size),
            f"{r.engine_us:.2f}±{r.engine_std_us:.2f}",
            unrolled,
            speedup,
            f"{r.numpy_us:.2f}",
            f"{r.max_error_vs_numpy:.1e}",
        )

    console.print(table)


def run_benchmark(config: RadixFFTConfig, output_dir: Path) -> List[TimingResult]:
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging_from_config(
        config, log_file=config.log_file or str(output_dir / 'benchmark.log'))

    trig_cache, bitrev_cache = config.create_caches()
    engine = TransformEngine(trig_cache, bitrev_cache)
    registry = TransformRegistry(trig_cache, bitrev_cache)
    harness = ValidationHarness(engine, atol=config.tolerance)

    console.print(Panel.fit(
        "[bold blue]Transform Benchmark[/bold blue]\n"
        f"Sizes: {config.benchmark.sizes}  Iterations: {config.benchmark.iterations}",
        border_style="blue"
    ))
    logger.info("Benchmark started: %s", config.benchmark)

    results = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=30),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("[cyan]Benchmarking", total=len(config.benchmark.sizes))
        for size in config.benchmark.sizes:
            progress.update(task, description=f"[cyan]N={size}")
            result = measure_size(size, engine, registry, harness, config)
            results.append(result)
            logger.info("N=%d: engine=%.2fus kernel=%s numpy=%.2fus",
                        size, result.engine_us, result.kernel_us, result.numpy_us)
            progress.update(task, advance=1)

    console.print("\n")
    display_results_table(results)
    log_cache_stats(logger, trig_cache.stats())
    log_cache_stats(logger, bitrev_cache.stats())

    report = {
        'timestamp': datetime.now().isoformat(),
        'iterations': config.benchmark.iterations,
        'trig_cache': trig_cache.stats(),
        'bitrev_cache': bitrev_cache.stats(),
        'results': [r.to_dict() for r in results],
    }
    with open(output_dir / 'timing.json', 'w') as f:
        json.dump(report, f, indent=2)

    console.print(f"\n[green]✓[/green] Results saved to {output_dir}")
    return results


def main():
    parser = argparse.ArgumentParser(description="Transform Benchmark")
    parser.add_argument(
        '--config',
        type=str,
        default=str(PROJECT_ROOT / 'configs' / 'default.yaml'),
        help='Path to configuration file'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=str(PROJECT_ROOT / 'results' / 'benchmark'),
        help='Output directory'
    )
    parser.add_argument(
        '--sizes',
        type=int,
        nargs='+',
        default=None,
        help='Override benchmark sizes'
    )
    args = parser.parse_args()

    config = load_config(args.config)
    if args.sizes:
        config.benchmark.sizes = args.sizes

    run_benchmark(config, Path(args.output))


if __name__ == "__main__":
    main()
