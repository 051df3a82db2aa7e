"""
Benchmark harness public API.

    from hoaresort.bench import time_sort_call, count_operations
"""

from .measure import count_operations, time_sort_call

__all__ = ["time_sort_call", "count_operations"]
