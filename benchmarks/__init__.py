"""
Benchmark suite for jsongen JSON generation performance.

Compares jsongen against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures generation speed and memory usage across different data types.
"""
