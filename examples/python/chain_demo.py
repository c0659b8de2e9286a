# =============================================================================
# examples/python/chain_demo.py
"""
Example: Operand-collecting matrix chain multiplication

Builds two chains with the ``*`` operator, lets matchain pick the cheapest
multiplication order and compares it with serial evaluation.
"""

import sys

import numpy as np
import matchain as mc

def example_chain():
    """Textbook six-matrix chain."""
    print("⛓️  Matrix Chain Multiplication")
    print("=" * 55)

    a = mc.Matrix(30, 35, "A")
    b = mc.Matrix(35, 15, "B")
    c = mc.Matrix(15, 5, "C")
    d = mc.Matrix(5, 10, "D")
    e = mc.Matrix(10, 20, "E")
    f = mc.Matrix(20, 25, "F")

    result = (a * b * c * d * e * f).finalize().unwrap()
    product = result.product

    print(f"Final result is {product.rows} x {product.cols}")
    print(f"Result name: {product.name}")
    print(f"Simple mult cost: {result.naive_cost:,}")
    print(f"Optimized mult cost: {result.optimized_cost:,}")
    return result

def transform_comparison():
    """Point transformed by translate / rotate / translate-back 4x4 matrices."""
    print("\n🧭 4x4 Transform Chain")
    print("=" * 55)

    angle = np.pi / 4
    pt_in = mc.Matrix.from_array(np.array([[1.0], [0.0], [0.0], [1.0]], dtype=np.float32), "P")
    to = mc.Matrix.from_array(np.eye(4, dtype=np.float32), "TO")
    to[0, 3] = -1.0
    rz = mc.Matrix.from_array(np.eye(4, dtype=np.float32), "RZ")
    rz[0, 0], rz[0, 1] = np.cos(angle), -np.sin(angle)
    rz[1, 0], rz[1, 1] = np.sin(angle), np.cos(angle)
    tb = mc.Matrix.from_array(np.eye(4, dtype=np.float32), "TB")
    tb[0, 3] = 1.0

    # Order of application is right to left
    result = (tb * rz * to * pt_in).finalize().unwrap()
    pt_out = result.product

    print(f"Final result is {pt_out.rows} x {pt_out.cols}")
    print(f"Result name: {pt_out.name}")
    print(f"Transformed point: {pt_out.to_array().ravel()}")
    print(f"Simple mult cost: {result.naive_cost:,}")
    print(f"Optimized mult cost: {result.optimized_cost:,}")
    return result

def benchmark():
    print("\n📈 Planned vs serial NumPy evaluation")
    print("=" * 55)
    with mc.ChainEngine(kernel="numpy") as engine:
        print(f"Using: {engine}")
        stats = engine.benchmark_chain([400, 20, 300, 10, 500, 5], iterations=20, seed=42)

    print(f"   Chain: {stats['chain']}")
    print(f"   Order: {stats['order']}")
    print(f"   Naive cost: {stats['naive_cost']:,}")
    print(f"   Optimized cost: {stats['optimized_cost']:,}")
    print(f"   Planned time: {stats['planned_time_ms']:.2f} ms")
    print(f"   Serial time: {stats['serial_time_ms']:.2f} ms")
    print(f"   Speedup: {stats['speedup']:.2f}x")
    print(f"   Max error: {stats['max_error']:.2e}")
    print(f"   Results match: {'✅ YES' if stats['results_match'] else '❌ NO'}")

def plot_cost_table(plan, title="Chain Cost Table"):
    import matplotlib.pyplot as plt

    n = plan.length
    plt.figure(figsize=(8, 6))
    plt.imshow(plan.cost[1:, 1:], cmap='hot', interpolation='nearest')
    plt.colorbar(label='Scalar multiplications')
    plt.title(title)
    plt.xlabel('Last matrix j')
    plt.ylabel('First matrix i')
    plt.xticks(range(n), range(1, n + 1))
    plt.yticks(range(n), range(1, n + 1))
    plt.tight_layout()
    plt.show()

if __name__ == "__main__":
    result = example_chain()
    transform_comparison()
    benchmark()
    if "--plot" in sys.argv:
        plot_cost_table(result.plan)
