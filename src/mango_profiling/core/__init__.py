"""Benchmark events, the collecting profiler and result rendering."""
