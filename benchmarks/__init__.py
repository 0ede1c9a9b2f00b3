"""
Benchmark suite for rdjson decoding performance.

Compares rdjson against established JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures decoding speed and memory usage across different data types.
"""
