"""
Binary Search Tree Demo — deletion cases, traversal orders, and shape benchmarks.

Generates:
- viz/*.png — Individual benchmark charts
- report.pdf — All charts in one PDF
"""

import logging
import sys
import time
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))
from binary_search_tree import BinarySearchTree

SEED = 42
SIZES = [100, 250, 500, 1000, 2000]

VIZ_DIR = Path(__file__).parent / "viz"

logger = logging.getLogger("demo")


def build_tree(keys, check_invariants=False):
    bst = BinarySearchTree(check_invariants=check_invariants)
    for key in keys:
        bst.put(key, f"v{key}")
    return bst


def example_1_traversal_orders():
    """Inorder, postorder and level-order on the reference tree."""
    print("=" * 60)
    print("Example 1: Traversal Orders")
    print("=" * 60)

    bst = build_tree([4, 2, 5, 1, 3], check_invariants=True)
    for name, traverse in [
        ("inorder", bst.traverse_inorder),
        ("postorder", bst.traverse_postorder),
        ("level-order", bst.traverse_levelorder),
    ]:
        visited = []
        traverse(lambda key, value: visited.append(key))
        print(f"{name:<12} {visited}")


def example_2_deletion_cases():
    """Walk through leaf, one-child, and both two-children cases."""
    print("\n" + "=" * 60)
    print("Example 2: Deletion Cases")
    print("=" * 60)

    cases = [
        ("leaf", [4, 2, 5, 1, 3], 3),
        ("one child", [50, 30, 20, 70], 30),
        ("successor is right child", [4, 2, 5, 1, 3], 2),
        ("deeper successor", [4, 2, 8, 6, 9, 7], 4),
        ("missing key", [4, 2, 5, 1, 3], 99),
    ]
    for name, keys, target in cases:
        bst = build_tree(keys, check_invariants=True)
        before = bst.level_order()
        removed = bst.remove(target)
        print(f"{name:<26} remove({target}) -> {removed!r:<6} "
              f"{before} -> {bst.level_order()} (size {bst.size()})")


def _time_tree(keys, removal_order):
    bst = build_tree(keys)
    height = bst.height()

    start = time.perf_counter()
    for traverse in (bst.traverse_inorder, bst.traverse_postorder, bst.traverse_levelorder):
        traverse(lambda key, value: None)
    traversal_time = time.perf_counter() - start

    start = time.perf_counter()
    for key in removal_order:
        bst.remove(key)
    removal_time = time.perf_counter() - start

    return height, traversal_time, removal_time


def example_3_shape_benchmark():
    """Random insertion order vs sorted (degenerate) insertion order."""
    print("\n" + "=" * 60)
    print("Example 3: Random vs Degenerate Shape")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    results = {"random": [], "sorted": []}
    heights = {"random": [], "sorted": []}

    print(f"{'n':<8} {'shape':<8} {'height':<8} {'traverse (ms)':<15} {'remove all (ms)':<15}")
    print("-" * 58)
    for n in SIZES:
        random_keys = rng.permutation(n).tolist()
        sorted_keys = list(range(n))
        removal_order = rng.permutation(n).tolist()
        for shape, keys in (("random", random_keys), ("sorted", sorted_keys)):
            height, traversal_time, removal_time = _time_tree(keys, removal_order)
            results[shape].append((traversal_time * 1000, removal_time * 1000))
            heights[shape].append(height)
            print(f"{n:<8} {shape:<8} {height:<8} {traversal_time * 1000:<15.3f} {removal_time * 1000:<15.3f}")

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    colors = {"random": "steelblue", "sorted": "coral"}
    for shape, timings in results.items():
        timings = np.array(timings)
        axes[0].plot(SIZES, timings[:, 1], "o-", color=colors[shape], linewidth=2, label=shape)
        axes[1].plot(SIZES, heights[shape], "o-", color=colors[shape], linewidth=2, label=shape)

    axes[0].set_xlabel("Number of keys")
    axes[0].set_ylabel("Remove all keys (ms)")
    axes[0].set_title("Deletion Cost by Insertion Order")
    axes[0].legend()
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(SIZES, np.log2(SIZES), "g--", linewidth=1, label="log2(n)")
    axes[1].set_xlabel("Number of keys")
    axes[1].set_ylabel("Height")
    axes[1].set_title("Tree Height by Insertion Order")
    axes[1].set_yscale("log")
    axes[1].legend()
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_shape_benchmark.png", dpi=150)
    return fig


def example_4_traversal_cost():
    """Traversal time grows linearly regardless of shape."""
    print("\n" + "=" * 60)
    print("Example 4: Traversal Cost")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    timings = {"inorder": [], "postorder": [], "level-order": []}
    for n in SIZES:
        bst = build_tree(rng.permutation(n).tolist())
        for name, traverse in (
            ("inorder", bst.traverse_inorder),
            ("postorder", bst.traverse_postorder),
            ("level-order", bst.traverse_levelorder),
        ):
            start = time.perf_counter()
            traverse(lambda key, value: None)
            timings[name].append((time.perf_counter() - start) * 1000)
        print(f"n={n:<6} " + "  ".join(f"{name}={values[-1]:.3f}ms" for name, values in timings.items()))

    fig, ax = plt.subplots(figsize=(8, 6))
    for (name, values), color in zip(timings.items(), ["#3498db", "#e74c3c", "#27ae60"]):
        ax.plot(SIZES, values, "o-", linewidth=2, color=color, label=name)
    ax.set_xlabel("Number of keys")
    ax.set_ylabel("Time (ms)")
    ax.set_title("Traversal Time vs Tree Size")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_traversal_cost.png", dpi=150)
    return fig


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    VIZ_DIR.mkdir(exist_ok=True)

    example_1_traversal_orders()
    example_2_deletion_cases()
    figures = [example_3_shape_benchmark(), example_4_traversal_cost()]

    report_path = Path(__file__).parent / "report.pdf"
    with PdfPages(report_path) as pdf:
        for fig in figures:
            pdf.savefig(fig)
            plt.close(fig)
    logger.info("wrote %s and %d charts to %s", report_path.name, len(figures), VIZ_DIR)


if __name__ == "__main__":
    main()
