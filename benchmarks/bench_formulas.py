#!/usr/bin/env python3
"""
Benchmark script comparing molecular formula speed between RDKit and chemexpr.

RDKit computes the formula of an already parsed molecule; chemexpr parses
and evaluates the ``$`` formula text against a session dictionary.

Usage:
    python benchmarks/bench_formulas.py [--extended]

Options:
    --extended    Run extended benchmark with multiple molecules and a
                  parse/evaluate breakdown
"""

import sys
import os
import time
from dataclasses import dataclass
from typing import Optional

# Ensure local chemexpr is used (not installed version)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# name -> (formula text, SMILES)
TEST_MOLECULES = {
    "water": ("$H2O", "O"),
    "ethanol": ("$C2H6O", "CCO"),
    "ibuprofen": ("$C13H18O2", "CC(C)Cc1ccc(cc1)C(C)C(=O)O"),
    "imatinib": ("$C29H31N7O", "Cc1ccc(cc1Nc2nccc(n2)c3cccnc3)NC(=O)c4ccc(cc4)CN5CCN(CC5)C"),
}

DEFAULT_MOLECULE = "imatinib"

ITERATIONS = 10000
EXTENDED_ITERATIONS = 5000


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    source: str
    time_seconds: float
    iterations: int
    formula: str
    num_tokens: int

    @property
    def time_per_call_us(self) -> float:
        return (self.time_seconds / self.iterations) * 1_000_000

    @property
    def time_per_token_us(self) -> float:
        """Microseconds per input token per call."""
        return self.time_per_call_us / self.num_tokens


def benchmark_rdkit(smiles: str, iterations: int) -> BenchmarkResult:
    """Benchmark RDKit formula calculation."""
    from rdkit import Chem
    from rdkit.Chem import rdMolDescriptors

    mol = Chem.MolFromSmiles(smiles)
    if mol is None:
        raise ValueError(f"RDKit failed to parse SMILES: {smiles}")

    # Warmup
    formula = rdMolDescriptors.CalcMolFormula(mol)

    start = time.perf_counter()
    for _ in range(iterations):
        formula = rdMolDescriptors.CalcMolFormula(mol)
    end = time.perf_counter()

    return BenchmarkResult(
        source=smiles,
        time_seconds=end - start,
        iterations=iterations,
        formula=formula,
        num_tokens=mol.GetNumAtoms(),
    )


def benchmark_chemexpr(source: str, iterations: int) -> BenchmarkResult:
    """Benchmark chemexpr parse + evaluate."""
    from chemexpr import PeriodicTable, Session, tokenize

    session = Session(PeriodicTable.standard())
    num_tokens = sum(1 for _ in tokenize(source))

    # Warmup
    value = session.evaluate(source)

    start = time.perf_counter()
    for _ in range(iterations):
        value = session.evaluate(source)
    end = time.perf_counter()

    return BenchmarkResult(
        source=source,
        time_seconds=end - start,
        iterations=iterations,
        formula=str(value.payload),
        num_tokens=num_tokens,
    )


def benchmark_chemexpr_parse(source: str, iterations: int) -> BenchmarkResult:
    """Benchmark chemexpr parsing alone."""
    from chemexpr import parse, tokenize

    num_tokens = sum(1 for _ in tokenize(source))
    parse(source)

    start = time.perf_counter()
    for _ in range(iterations):
        parse(source)
    end = time.perf_counter()

    return BenchmarkResult(
        source=source,
        time_seconds=end - start,
        iterations=iterations,
        formula="",
        num_tokens=num_tokens,
    )


def run_single_benchmark():
    """Run basic single-molecule benchmark."""
    source, smiles = TEST_MOLECULES[DEFAULT_MOLECULE]
    print("=" * 70)
    print("Molecular Formula Benchmark: RDKit vs chemexpr")
    print("=" * 70)
    print(f"\nTest molecule: {DEFAULT_MOLECULE} ({source})")
    print(f"\nIterations: {ITERATIONS}")
    print("-" * 70)

    rdkit_result: Optional[BenchmarkResult] = None
    chemexpr_result: Optional[BenchmarkResult] = None

    print("\nRunning RDKit benchmark...", end=" ", flush=True)
    try:
        rdkit_result = benchmark_rdkit(smiles, ITERATIONS)
        print("done")
        print(f"  Time: {rdkit_result.time_seconds:.3f}s ({rdkit_result.time_per_call_us:.2f}us per call)")
        print(f"  Formula: {rdkit_result.formula}")
    except ImportError:
        print("SKIPPED (rdkit not installed)")
    except Exception as e:
        print(f"ERROR: {e}")

    print("\nRunning chemexpr benchmark...", end=" ", flush=True)
    try:
        chemexpr_result = benchmark_chemexpr(source, ITERATIONS)
        print("done")
        print(f"  Time: {chemexpr_result.time_seconds:.3f}s ({chemexpr_result.time_per_call_us:.2f}us per call)")
        print(f"  Formula: {chemexpr_result.formula}")
    except Exception as e:
        print(f"ERROR: {e}")

    print("\n" + "=" * 70)
    print("Summary")
    print("=" * 70)

    if rdkit_result and chemexpr_result:
        ratio = chemexpr_result.time_seconds / rdkit_result.time_seconds
        if ratio < 1:
            print(f"chemexpr is {1/ratio:.2f}x FASTER than RDKit")
        else:
            print(f"chemexpr is {ratio:.2f}x SLOWER than RDKit")
    else:
        print("Could not compare (one or both libraries failed)")


def run_extended_benchmark():
    """Run extended benchmark with multiple molecules and a parse/evaluate breakdown."""
    print("=" * 90)
    print("EXTENDED Molecular Formula Benchmark: RDKit vs chemexpr")
    print("=" * 90)
    print(f"\nIterations per molecule: {EXTENDED_ITERATIONS}")
    print("-" * 90)

    header = f"{'Molecule':<12} {'Tokens':>6} {'RDKit us':>10} {'parse us':>10} {'total us':>10} {'Ratio':>8} {'us/token':>10}"
    print(header)
    print("-" * 90)

    ratios = []
    for name, (source, smiles) in TEST_MOLECULES.items():
        chemexpr_res = benchmark_chemexpr(source, EXTENDED_ITERATIONS)
        parse_res = benchmark_chemexpr_parse(source, EXTENDED_ITERATIONS)
        try:
            rdkit_res = benchmark_rdkit(smiles, EXTENDED_ITERATIONS)
        except ImportError:
            rdkit_res = None

        if rdkit_res:
            if rdkit_res.formula != chemexpr_res.formula:
                print(f"  WARNING: {name} formulas differ: {rdkit_res.formula} vs {chemexpr_res.formula}")
            ratio = chemexpr_res.time_seconds / rdkit_res.time_seconds
            ratios.append(ratio)
            rdkit_str = f"{rdkit_res.time_per_call_us:.2f}"
            ratio_str = f"{ratio:.2f}x"
        else:
            rdkit_str = "N/A"
            ratio_str = "N/A"

        print(f"{name:<12} "
              f"{chemexpr_res.num_tokens:>6} "
              f"{rdkit_str:>10} "
              f"{parse_res.time_per_call_us:>10.2f} "
              f"{chemexpr_res.time_per_call_us:>10.2f} "
              f"{ratio_str:>8} "
              f"{chemexpr_res.time_per_token_us:>10.3f}")

    print("\n" + "=" * 90)
    print("Summary Statistics")
    print("=" * 90)

    if ratios:
        avg_ratio = sum(ratios) / len(ratios)
        print(f"Average slowdown: {avg_ratio:.2f}x")
        print(f"Best case:        {min(ratios):.2f}x")
        print(f"Worst case:       {max(ratios):.2f}x")
    else:
        print("Could not compute summary (rdkit not installed)")


def main():
    if "--extended" in sys.argv or "-e" in sys.argv:
        run_extended_benchmark()
    else:
        run_single_benchmark()
        print("\n" + "-" * 70)
        print("TIP: Run with --extended for detailed multi-molecule analysis")


if __name__ == "__main__":
    main()
