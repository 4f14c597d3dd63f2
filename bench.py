"""Benchmark merge-trajectory computation across model variants."""

import logging
import time

from datasets import load_dataset

import bpesim

# Configure logging to show INFO level and above.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def benchmark_compute() -> None:
    """Time ``compute`` for every built-in variant on a corpus slice."""

    print("=" * 70)
    print("BPE SIMULATOR BENCHMARK")
    print("=" * 70)

    print("\nLoading dataset...")
    ds = load_dataset("stevez80/Sci-Fi-Books-gutenberg", split="train")
    text = " ".join(ds[:200]["text"])
    print(f"   Text size: {len(text):,} chars")

    for name in bpesim.list_variants():
        variant = bpesim.get_variant(name)
        start = time.perf_counter()
        trajectory = bpesim.compute(text, variant.vocab_size_default, variant)
        elapsed = time.perf_counter() - start

        stats = trajectory.statistics
        # vocabulary grows by exactly one symbol per merge
        assert len(trajectory.final_vocabulary) == trajectory.seed_size + stats.total_merges

        print(f"\n{variant.name}")
        print(f"   Time: {elapsed * 1000:.2f}ms")
        print(f"   Merges: {stats.total_merges}")
        print(f"   Symbols: {len(trajectory[0].sequence):,} -> {len(trajectory.final_sequence):,}")
        print(f"   Compression ratio: {stats.final_compression_ratio:.2f}x")
        print(f"   Size reduction: {bpesim.size_reduction(stats.final_compression_ratio) * 100:.1f}%")

    print("\n" + "=" * 70)
    print("BENCHMARK COMPLETE")
    print("=" * 70)


if __name__ == "__main__":
    benchmark_compute()
