"""
Pytest configuration and shared fixtures for rdjson tests.

Provides immutable test data fixtures built from the json.org JSON_checker
suite, split into documents the decoder rejects and documents it accepts.
"""

from dataclasses import dataclass
from typing import Any

import pytest

import rdjson


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    expected_error: type[rdjson.JSONDecodeError] | None = None
    expected_output: Any = None


def nested_list(leaf: Any, depth: int) -> Any:
    """Wraps ``leaf`` in ``depth`` single-element lists."""
    for _ in range(depth):
        leaf = [leaf]
    return leaf


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides JSON_checker documents the decoder must reject.

    Each case names the error kind raised for the first violation.
    """
    token = rdjson.UnexpectedTokenError
    end = rdjson.UnexpectedEndOfBufferError
    fail_docs = [
        # https://json.org/JSON_checker/test/fail2.json
        ("fail2.json", '["Unclosed array"', end),
        # https://json.org/JSON_checker/test/fail3.json
        ("fail3.json", '{unquoted_key: "keys must be quoted"}', token),
        # https://json.org/JSON_checker/test/fail4.json
        ("fail4.json", '["extra comma",]', token),
        # https://json.org/JSON_checker/test/fail5.json
        ("fail5.json", '["double extra comma",,]', token),
        # https://json.org/JSON_checker/test/fail6.json
        ("fail6.json", '[   , "<-- missing value"]', token),
        # https://json.org/JSON_checker/test/fail7.json
        ("fail7.json", '["Comma after the close"],', token),
        # https://json.org/JSON_checker/test/fail8.json
        ("fail8.json", '["Extra close"]]', token),
        # https://json.org/JSON_checker/test/fail9.json
        ("fail9.json", '{"Extra comma": true,}', token),
        # https://json.org/JSON_checker/test/fail10.json
        (
            "fail10.json",
            '{"Extra value after close": true} "misplaced quoted value"',
            token,
        ),
        # https://json.org/JSON_checker/test/fail11.json
        ("fail11.json", '{"Illegal expression": 1 + 2}', token),
        # https://json.org/JSON_checker/test/fail12.json
        ("fail12.json", '{"Illegal invocation": alert()}', token),
        # https://json.org/JSON_checker/test/fail13.json
        ("fail13.json", '{"Numbers cannot have leading zeroes": 013}', token),
        # https://json.org/JSON_checker/test/fail14.json
        ("fail14.json", '{"Numbers cannot be hex": 0x14}', token),
        # https://json.org/JSON_checker/test/fail16.json
        ("fail16.json", "[\\naked]", token),
        # https://json.org/JSON_checker/test/fail19.json
        ("fail19.json", '{"Missing colon" null}', token),
        # https://json.org/JSON_checker/test/fail20.json
        ("fail20.json", '{"Double colon":: null}', token),
        # https://json.org/JSON_checker/test/fail21.json
        ("fail21.json", '{"Comma instead of colon", null}', token),
        # https://json.org/JSON_checker/test/fail22.json
        ("fail22.json", '["Colon instead of comma": false]', token),
        # https://json.org/JSON_checker/test/fail23.json
        ("fail23.json", '["Bad value", truth]', token),
        # https://json.org/JSON_checker/test/fail24.json
        ("fail24.json", "['single quote']", token),
        # https://json.org/JSON_checker/test/fail29.json
        ("fail29.json", "[0e]", token),
        # https://json.org/JSON_checker/test/fail30.json
        ("fail30.json", "[0e+]", token),
        # https://json.org/JSON_checker/test/fail31.json
        ("fail31.json", "[0e+-1]", token),
        # https://json.org/JSON_checker/test/fail32.json
        ("fail32.json", '{"Comma instead if closing brace": true,', end),
        # https://json.org/JSON_checker/test/fail33.json
        ("fail33.json", '["mismatch"}', token),
    ]

    return [
        JsonTestCase(description, doc, expected_error=error)
        for description, doc, error in fail_docs
    ]


@pytest.fixture
def json_permissive_cases() -> list[JsonTestCase]:
    """
    Provides JSON_checker failure documents the decoder accepts on purpose.

    Unknown escapes are kept verbatim and raw control characters are copied
    into strings, string roots are allowed and nesting is unbounded.
    """
    return [
        JsonTestCase(
            "fail1.json - string root",
            '"A JSON payload should be an object or array, not a string."',
            expected_output=(
                "A JSON payload should be an object or array, not a string."
            ),
        ),
        JsonTestCase(
            "fail15.json - unknown escape",
            '["Illegal backslash escape: \\x15"]',
            expected_output=["Illegal backslash escape: \\x15"],
        ),
        JsonTestCase(
            "fail17.json - octal escape",
            '["Illegal backslash escape: \\017"]',
            expected_output=["Illegal backslash escape: \\017"],
        ),
        JsonTestCase(
            "fail18.json - deep nesting",
            "[" * 20 + '"Too deep"' + "]" * 20,
            expected_output=nested_list("Too deep", 20),
        ),
        JsonTestCase(
            "fail25.json - raw tabs",
            '["\ttab\tcharacter\tin\tstring\t"]',
            expected_output=["\ttab\tcharacter\tin\tstring\t"],
        ),
        JsonTestCase(
            "fail26.json - escaped spaces",
            '["tab\\   character\\   in\\  string\\  "]',
            expected_output=["tab\\   character\\   in\\  string\\  "],
        ),
        JsonTestCase(
            "fail27.json - raw line break",
            '["line\nbreak"]',
            expected_output=["line\nbreak"],
        ),
        JsonTestCase(
            "fail28.json - escaped line break",
            '["line\\\nbreak"]',
            expected_output=["line\\\nbreak"],
        ),
        JsonTestCase(
            "simplejson issue 3 - control character",
            '["A\u001fZ control characters in string"]',
            expected_output=["A\u001fZ control characters in string"],
        ),
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must decode successfully.

    These test cases validate standards compliance for valid JSON structures.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}",
        "quotes": "&#34; \\u0022 %22 0x22 034 &#x22;",
        "\\/\\\\\\"\\uCAFE\\uBABE\\uAB98\\uFCDE\\ubcda\\uef4A\\b\\f\\n\\r\\t`1~!@#$%^&*()_+-=[]{}|;:',./<>?"
: "A key can be any string"
    },
    0.5 ,98.6
,
99.44
,

1066,
1e1,
0.1e1,
1e-1,
1e00,2e+00,2e-00
,"rosebud"]""",
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic JSON value test cases for fundamental decoding.

    Covers every value kind inside a container plus the empty containers.
    """
    return [
        JsonTestCase("null value", "[null]", expected_output=[None]),
        JsonTestCase("true boolean", "[true]", expected_output=[True]),
        JsonTestCase("false boolean", "[false]", expected_output=[False]),
        JsonTestCase("integer", "[42]", expected_output=[42]),
        JsonTestCase("negative integer", "[-17]", expected_output=[-17]),
        JsonTestCase("float", "[3.14]", expected_output=[3.14]),
        JsonTestCase("empty string", '[""]', expected_output=[""]),
        JsonTestCase("simple string", '["hello"]', expected_output=["hello"]),
        JsonTestCase("empty array", "[]", expected_output=[]),
        JsonTestCase("empty object", "{}", expected_output={}),
        JsonTestCase("simple array", "[1, 2, 3]", expected_output=[1, 2, 3]),
        JsonTestCase(
            "simple object",
            '{"key": "value"}',
            expected_output={"key": "value"},
        ),
        JsonTestCase(
            "nested containers",
            '{"a": [1, {"b": null}], "c": {}}',
            expected_output={"a": [1, {"b": None}], "c": {}},
        ),
    ]
