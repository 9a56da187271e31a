"""
Pytest configuration and shared fixtures for jsongen tests.

Provides immutable test case fixtures and the Hypothesis profiles used by the
property tests.

Hypothesis profiles:
- dev: local development, 200 examples
- ci: CI runs, 50 derandomized examples

CI=true selects "ci"; HYPOTHESIS_PROFILE overrides the choice.
"""

import os
from dataclasses import dataclass
from typing import Any

import pytest
from hypothesis import Phase
from hypothesis import settings

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=50,
    derandomize=True,
    print_blob=True,
)


def _detect_profile() -> str:
    if "HYPOTHESIS_PROFILE" in os.environ:
        return os.environ["HYPOTHESIS_PROFILE"]
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


@dataclass(frozen=True)
class GenerateCase:
    """
    Immutable container for a generation test case.

    Holds an input value and the exact JSON text expected for it.
    """

    description: str
    value: Any
    expected: str


@pytest.fixture
def scalar_cases() -> list[GenerateCase]:
    """
    Provides scalar values with their compact JSON text.
    """
    return [
        GenerateCase("null", None, "null"),
        GenerateCase("true", True, "true"),
        GenerateCase("false", False, "false"),
        GenerateCase("zero", 0, "0"),
        GenerateCase("negative integer", -17, "-17"),
        GenerateCase("beyond int64", 2**70, "1180591620717411303424"),
        GenerateCase("float", 3.14, "3.14"),
        GenerateCase("negative zero", -0.0, "-0.0"),
        GenerateCase("large float", 1e20, "1e+20"),
        GenerateCase("tiny float", 5e-324, "5e-324"),
        GenerateCase("empty string", "", '""'),
        GenerateCase("simple string", "hello", '"hello"'),
        GenerateCase("escaped string", 'say "hi"\n', '"say \\"hi\\"\\n"'),
        GenerateCase("non-ascii string", "café", '"café"'),
    ]


@pytest.fixture
def container_cases() -> list[GenerateCase]:
    """
    Provides containers with their compact JSON text.

    Covers empty and nested containers and insertion-ordered objects.
    """
    return [
        GenerateCase("empty array", [], "[]"),
        GenerateCase("empty object", {}, "{}"),
        GenerateCase("simple array", [1, 2, 3], "[1,2,3]"),
        GenerateCase("tuple as array", (1, "a"), '[1,"a"]'),
        GenerateCase(
            "insertion order kept", {"b": 1, "a": 2}, '{"b":1,"a":2}'
        ),
        GenerateCase(
            "nested structure",
            {"list": [None, True, {"x": []}]},
            '{"list":[null,true,{"x":[]}]}',
        ),
        GenerateCase(
            "non-string keys",
            {2: "a", None: "c", False: "b"},
            '{"2":"a","null":"c","false":"b"}',
        ),
    ]
