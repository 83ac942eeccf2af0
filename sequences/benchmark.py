"""
Sequence container benchmark.

Times the common operations of DynamicArray, SinglyChain and DoublyChain
over exponentially growing input sizes and writes the results to CSV.

Usage examples:
    python -m sequences.benchmark
    python -m sequences.benchmark --output seq.csv --base-input 50 --rounds 6
"""

import argparse
import csv
import logging
import random
import statistics
import sys
import time

from .doubly_chain import DoublyChain
from .dynamic_array import DynamicArray
from .singly_chain import SinglyChain

logger = logging.getLogger(__name__)

CONTAINERS = {
    "DynamicArray": DynamicArray,
    "SinglyChain": SinglyChain,
    "DoublyChain": DoublyChain,
}


# ----------------------------
# Helper Functions
# ----------------------------

def generate_random_list(size: int):
    """Generate a list of random integers of given size."""
    return [random.randint(0, 1000000) for _ in range(size)]


def measure_true_space(c) -> int:
    """Estimate memory held by a container: the object, its storage and its values."""
    total = sys.getsizeof(c)
    if isinstance(c, DynamicArray):
        if c._buf is not None:
            total += sys.getsizeof(c._buf)  # ctypes array
    else:
        node = c._head
        while node is not None:
            total += sys.getsizeof(node)
            node = node.next
    for v in c:
        total += sys.getsizeof(v)
    return total


def measure_operation_time(cls, operation, input_size: int, iterations: int = 5):
    """Run the operation several times; return avg/std time (ms) and avg/std space."""
    times = []
    space_used = []
    for _ in range(iterations):
        data = generate_random_list(input_size)
        start = time.perf_counter()
        c = operation(cls, data)
        end = time.perf_counter()
        times.append((end - start) * 1000)
        space_used.append(measure_true_space(c))

    avg_time = statistics.mean(times)
    std_time = statistics.stdev(times) if len(times) > 1 else 0.0
    avg_space = statistics.mean(space_used)
    std_space = statistics.stdev(space_used) if len(space_used) > 1 else 0.0
    return avg_time, std_time, avg_space, std_space


# ----------------------------
# Operations to Benchmark
# ----------------------------

def bench_push_back(cls, data):
    c = cls()
    for item in data:
        c.push_back(item)
    return c


def bench_insert_front(cls, data):
    c = cls()
    for item in data:
        c.insert(item, 0)
    return c


def bench_erase_front(cls, data):
    c = cls(data)
    while c.size() > 0:
        c.erase(0)
    return c


def bench_get(cls, data):
    c = cls(data)
    n = c.size()
    for i in range(max(0, n - 3), n):
        _ = c[i]
    return c


OPERATIONS = {
    "push_back": bench_push_back,
    "insert_front": bench_insert_front,
    "erase_front": bench_erase_front,
    "get": bench_get,
}


# ----------------------------
# Benchmark Runner
# ----------------------------

def run_benchmarks(output_file: str, base_input: int = 100, rounds: int = 8, iterations: int = 5):
    """Run exponential performance tests for every container and operation."""
    input_sizes = [base_input * (2 ** i) for i in range(rounds)]

    with open(output_file, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow([
            "Input Size",
            "Container",
            "Operation",
            "Average Time (ms)",
            "Std Dev Time (ms)",
            "Average Space (bytes)",
            "Std Dev Space (bytes)",
        ])

        for cls_name, cls in CONTAINERS.items():
            for op_name, op_func in OPERATIONS.items():
                for size in input_sizes:
                    logger.debug("benchmark %s.%s size=%d", cls_name, op_name, size)
                    avg_time, std_time, avg_space, std_space = measure_operation_time(
                        cls, op_func, size, iterations
                    )
                    writer.writerow([
                        size,
                        cls_name,
                        op_name,
                        f"{avg_time:.3f}",
                        f"{std_time:.3f}",
                        f"{avg_space:.0f}",
                        f"{std_space:.0f}",
                    ])
                    print(f"{cls_name:<13} {op_name:<13} | Size: {size:<8} | Avg Time: {avg_time:.3f} ms | "
                          f"Std Time: {std_time:.3f} ms | Avg Space: {avg_space:.0f} B | Std Space: {std_space:.0f} B")

    print(f"\nBenchmark completed. Results saved to {output_file}")


# -------------------------------------------------------------------
# Argument parser
# -------------------------------------------------------------------
def build_parser():
    p = argparse.ArgumentParser(description="Sequence container benchmark")
    p.add_argument("--output", default="sequence_performance.csv", help="CSV file to write")
    p.add_argument("--base-input", type=int, default=100, help="Smallest input size")
    p.add_argument("--rounds", type=int, default=8, help="Number of doublings of the input size")
    p.add_argument("--iterations", type=int, default=5, help="Repetitions per measurement")
    p.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    run_benchmarks(args.output, base_input=args.base_input, rounds=args.rounds, iterations=args.iterations)


if __name__ == "__main__":
    main()
