"""
Example: cosine palette usage.

Demonstrates how to use cosgrad for:
- Sampling a palette into hex stops
- Global modifiers and taring
- Seed round-trips
- Fitting coefficients to key colors
- Similarity fingerprints
"""

import logging

from cosgrad import (
    CosineCoeffs,
    GlobalModifiers,
    apply_globals,
    deserialize,
    fingerprint,
    fit_cosine_palette,
    gradient_hexes,
    serialize,
    tare_all,
    validate_fit,
)

# Configure logging to see fitting details
logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

RAINBOW = CosineCoeffs.from_rows(
    [
        [0.5, 0.5, 0.5, 1],
        [0.5, 0.5, 0.5, 1],
        [1.0, 1.0, 1.0, 1],
        [0.0, 0.333, 0.667, 1],
    ]
)


def example_1_sampling():
    """Example 1: Sample a palette into hex stops."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Sampling")
    print("=" * 70)

    for steps in (3, 7):
        print(f"  {steps} stops: {' '.join(gradient_hexes(steps, RAINBOW))}")


def example_2_globals():
    """Example 2: Global modifiers and taring."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Global Modifiers")
    print("=" * 70)

    globals_ = GlobalModifiers(exposure=0.1, contrast=0.8, frequency_scale=1.2, phase_shift=0.25)
    print(f"  With globals: {' '.join(gradient_hexes(7, RAINBOW, globals_))}")

    # Taring bakes the globals into the coefficients without changing the output
    tared_coeffs, tared_globals = tare_all(RAINBOW, globals_)
    print(f"  After tare:   {' '.join(gradient_hexes(7, tared_coeffs, tared_globals))}")
    print(f"  Globals now:  {tared_globals.as_tuple()}")
    print(f"  Same as apply_globals: {tared_coeffs == apply_globals(RAINBOW, globals_)}")


def example_3_seeds():
    """Example 3: Seed round-trip."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Seeds")
    print("=" * 70)

    plain = serialize(RAINBOW)
    modified = serialize(RAINBOW, GlobalModifiers(0.2, 1.5, 1.2, 0.5))
    print(f"  Without globals: {plain}")
    print(f"  With globals:    {modified}")

    coeffs, globals_ = deserialize(modified)
    print(f"  Decoded phase:   {coeffs.phase}")
    print(f"  Decoded globals: {globals_.as_tuple()}")


def example_4_fitting():
    """Example 4: Fit coefficients to key colors."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Fitting")
    print("=" * 70)

    key_colors = ["#2d1b4e", "#6b2d7b", "#b8336a", "#f4a259", "#f9e07f"]

    for refine in (False, True):
        result = fit_cosine_palette(key_colors, refine=refine)
        report = validate_fit(key_colors, result)

        print(f"\n  refine={refine}  error={result.error:.6f}  max_error={report.max_error}/255")
        for comparison in report.color_comparisons:
            print(f"    {comparison.original} -> {comparison.fitted}  ({comparison.error})")


def example_5_fingerprints():
    """Example 5: Near-duplicate detection."""
    print("\n" + "=" * 70)
    print("EXAMPLE 5: Fingerprints")
    print("=" * 70)

    tweaked = RAINBOW.with_channel(3, 1, 0.334)
    print(f"  Original: {fingerprint(RAINBOW)}")
    print(f"  Tweaked:  {fingerprint(tweaked)}")
    print(f"  Same key: {fingerprint(RAINBOW) == fingerprint(tweaked)}")
    print(f"  Same seed: {serialize(RAINBOW) == serialize(tweaked)}")


def main():
    """Run all examples."""
    print("\n" + "=" * 70)
    print("COSGRAD PALETTE EXAMPLES")
    print("=" * 70)

    example_1_sampling()
    example_2_globals()
    example_3_seeds()
    example_4_fitting()
    example_5_fingerprints()

    print("\n" + "=" * 70)
    print("ALL EXAMPLES COMPLETED")
    print("=" * 70)


if __name__ == "__main__":
    main()
