"""
Benchmark palette fitting, sampling and seed encoding.

Fitting is the only non-trivial cost: 3 channels x 23 candidate frequencies
x N key colors (plus 21 refinement candidates when refine=True).
"""

import logging
import time

import numpy as np

from cosgrad import (
    CosineCoeffs,
    GlobalModifiers,
    deserialize,
    fingerprint,
    fit_cosine_palette,
    gradient_hexes,
    serialize,
)

# Suppress logging for cleaner output
logging.getLogger("cosgrad").setLevel(logging.WARNING)


def generate_palettes(n: int):
    """Generate random palettes inside the fitter's output bounds."""
    rng = np.random.default_rng(42)

    return [
        CosineCoeffs(
            rng.uniform(0.3, 0.7, 3),
            rng.uniform(-0.3, 0.3, 3),
            rng.uniform(0.5, 2.0, 3),
            rng.uniform(0.0, 1.0, 3),
        )
        for _ in range(n)
    ]


def time_ms(func, iterations: int) -> tuple[float, float]:
    """Run func repeatedly and return (mean, std) in ms."""
    # Warmup (also triggers Numba compilation)
    for _ in range(5):
        func()

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func()
        end = time.perf_counter()
        times.append((end - start) * 1000)  # Convert to ms

    return float(np.mean(times)), float(np.std(times))


def benchmark_fit(steps: int = 7, iterations: int = 200):
    """Benchmark fit_cosine_palette with and without refinement."""
    print("\n" + "=" * 80)
    print(f"FIT ({steps} key colors, {iterations} iterations)")
    print("=" * 80)

    hexes = gradient_hexes(steps, generate_palettes(1)[0])

    for refine in (False, True):
        avg_time, std_time = time_ms(lambda: fit_cosine_palette(hexes, refine=refine), iterations)
        print(f"refine={refine!s:<5}  Time: {avg_time:.3f} ms +/- {std_time:.3f} ms")

    avg_time, std_time = time_ms(lambda: fit_cosine_palette(hexes, dense_samples=64), iterations)
    print(f"dense=64      Time: {avg_time:.3f} ms +/- {std_time:.3f} ms")


def benchmark_sampling(n: int = 1_000, steps: int = 50):
    """Benchmark gradient_hexes over many palettes."""
    print("\n" + "=" * 80)
    print(f"SAMPLING ({n:,} palettes, {steps} stops)")
    print("=" * 80)

    palettes = generate_palettes(n)
    globals_ = GlobalModifiers(0.1, 1.2, 0.9, 0.25)

    avg_time, std_time = time_ms(lambda: [gradient_hexes(steps, p, globals_) for p in palettes], 10)
    print(f"Time:       {avg_time:.3f} ms +/- {std_time:.3f} ms")
    print(f"Throughput: {n / (avg_time / 1000):,.0f} palettes/sec")


def benchmark_codec(n: int = 1_000):
    """Benchmark seed encode/decode and fingerprints."""
    print("\n" + "=" * 80)
    print(f"SEEDS / FINGERPRINTS ({n:,} palettes)")
    print("=" * 80)

    palettes = generate_palettes(n)
    globals_ = GlobalModifiers(0.2, 1.5, 1.2, 0.5)
    seeds = [serialize(p, globals_) for p in palettes]

    for name, func in [
        ("serialize", lambda: [serialize(p, globals_) for p in palettes]),
        ("deserialize", lambda: [deserialize(s) for s in seeds]),
        ("fingerprint", lambda: [fingerprint(p) for p in palettes]),
    ]:
        avg_time, std_time = time_ms(func, 10)
        print(f"{name:<12} {avg_time:.3f} ms +/- {std_time:.3f} ms  ({n / (avg_time / 1000):,.0f}/sec)")


def main():
    """Run all benchmarks."""
    print("=" * 80)
    print("COSGRAD PERFORMANCE BENCHMARKS")
    print("=" * 80)

    benchmark_fit(steps=5)
    benchmark_fit(steps=20)
    benchmark_sampling()
    benchmark_codec()


if __name__ == "__main__":
    main()
