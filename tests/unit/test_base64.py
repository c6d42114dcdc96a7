from __future__ import annotations

import base64 as stdlib_base64
import secrets

import pytest

from tweetbot.oauth import base64


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Sally sells sea shells by the sea shore", "U2FsbHkgc2VsbHMgc2VhIHNoZWxscyBieSB0aGUgc2VhIHNob3Jl"),
        ("KNTOBTUT, the unification of KNTO and BTUT", "S05UT0JUVVQsIHRoZSB1bmlmaWNhdGlvbiBvZiBLTlRPIGFuZCBCVFVU"),
        ("r", "cg=="),
        (
            "how did i get here i am not good with computer",
            "aG93IGRpZCBpIGdldCBoZXJlIGkgYW0gbm90IGdvb2Qgd2l0aCBjb21wdXRlcg==",
        ),
    ],
)
def test_encode_known_vectors(text: str, expected: str) -> None:
    assert base64.encode(text.encode("utf-8")) == expected


def test_encode_empty_input() -> None:
    assert base64.encode(b"") == ""


def test_encode_without_padding_when_length_multiple_of_three() -> None:
    assert base64.encode(b"abc") == "YWJj"
    assert not base64.encode(b"abcdef").endswith("=")


@pytest.mark.parametrize("length", range(0, 40))
def test_encode_matches_canonical_base64(length: int) -> None:
    data = secrets.token_bytes(length)

    assert base64.encode(data) == stdlib_base64.b64encode(data).decode("ascii")


def test_encode_handles_high_bytes() -> None:
    data = b"\xff\xfe\xfd\x00\x01"

    assert base64.encode(data) == "//79AAE="
