"""
Test data generators for JSON decoding benchmarks.

Creates JSON documents that stress different productions of the decoder:
- Small and large objects (member parsing, key strings)
- Mixed arrays (value dispatch, numbers, literals)
- Deep nesting (structural recursion)
- Escape-heavy strings (escape table, unicode escapes, surrogate pairs)

Documents are produced with the standard library encoder from a seeded
random generator, so every run decodes the same text.
"""

import json
import random
import string
from typing import Any

_SEED = 8259
_ESCAPE_PROBABILITY = 0.3
_ESCAPABLE = ['"', "\\", "/", "\b", "\f", "\n", "\r", "\t", "ß", "✭", "😀"]


def generate_test_data(data_type: str) -> str:
    """Generates JSON test data based on specified type."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type](random.Random(_SEED))


def _generate_small_object(rng: random.Random) -> str:
    """Generates a small JSON object (< 1KB) with basic key-value pairs."""
    data = {
        "id": rng.randint(1, 99999),
        "name": _random_string(rng, 12),
        "active": True,
        "score": round(rng.uniform(0, 100), 3),
        "tags": [_random_string(rng, 5) for _ in range(4)],
        "parent": None,
    }
    return json.dumps(data)


def _generate_large_object(rng: random.Random) -> str:
    """Generates a large JSON object (> 10KB) with many members."""
    data = {
        f"field_{i:04d}": {
            "label": _random_string(rng, 16),
            "count": rng.randint(-(10**6), 10**6),
            "ratio": rng.random(),
            "exponent": rng.uniform(1, 9) * 10 ** rng.randint(-30, 30),
            "enabled": rng.choice([True, False]),
            "missing": None,
        }
        for i in range(150)
    }
    return json.dumps(data)


def _generate_mixed_array(rng: random.Random) -> str:
    """Generates a large array mixing every value kind."""
    makers = [
        lambda: rng.randint(-1000, 1000),
        lambda: round(rng.uniform(-100.0, 100.0), 4),
        lambda: _random_string(rng, rng.randint(5, 30)),
        lambda: rng.choice([True, False]),
        lambda: None,
        lambda: {"value": _random_string(rng, 8), "weight": rng.random()},
        lambda: [rng.randint(0, 9) for _ in range(5)],
    ]
    array: list[Any] = [rng.choice(makers)() for _ in range(1000)]
    return json.dumps(array)


def _generate_nested_structure(rng: random.Random) -> str:
    """Generates a deeply nested JSON structure."""

    def nest(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"leaf": _random_string(rng, 10)}
        return {
            "depth": depth,
            "children": [nest(depth - 1) for _ in range(2)],
            "chain": [[[nest(depth - 2)]]] if depth > 1 else [],
        }

    return json.dumps(nest(8))


def _generate_string_heavy(rng: random.Random) -> str:
    """Generates JSON with many escapes, including surrogate pairs."""

    def escaped_text() -> str:
        chars = [
            rng.choice(_ESCAPABLE)
            if rng.random() < _ESCAPE_PROBABILITY
            else rng.choice(string.ascii_letters + " ")
            for _ in range(60)
        ]
        return "".join(chars)

    data = {
        "lines": [escaped_text() for _ in range(200)],
        "by_key": {escaped_text()[:12]: escaped_text() for _ in range(50)},
    }
    # ensure_ascii turns non-ASCII characters into unicode escapes
    return json.dumps(data)


def _random_string(rng: random.Random, length: int) -> str:
    """Generates a random ASCII string of the given length."""
    return "".join(rng.choices(string.ascii_letters, k=length))
