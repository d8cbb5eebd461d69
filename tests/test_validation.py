"""Pure validator and interactive reader tests."""

from __future__ import annotations

import pytest
import typer

from network.validation import validate_amount, validate_int, validate_name
from ui.input_reader import InputReader


def scripted(answers: list[str]):
    remaining = iter(answers)

    def prompt(text: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise typer.Abort() from None

    return prompt


def test_validate_int_range() -> None:
    assert validate_int(" 7 ", 1, 12).value == 7
    assert validate_int("abc").error == "Invalid input. Please enter a valid number."
    assert validate_int("1.5").ok is False
    assert validate_int("13", 1, 12).error == "Please enter a number between 1 and 12."
    assert validate_int("0", 1).error == "Please enter a number of at least 1."
    assert validate_int("-4").value == -4


def test_validate_amount() -> None:
    assert validate_amount("12").value == 12.0
    assert validate_amount("0").value == 0.0
    assert validate_amount("3.14159").value == 3.14
    assert validate_amount("-1").error == "Budget cannot be negative."
    assert not validate_amount("nan").ok
    assert not validate_amount("inf").ok
    assert not validate_amount("ten").ok


@pytest.mark.parametrize(
    ("raw", "error"),
    [
        ("", "Input cannot be empty."),
        ("   ", "Input cannot be empty."),
        ("Huye,South", "Input cannot contain commas."),
    ],
)
def test_validate_name_rejects(raw: str, error: str) -> None:
    assert validate_name(raw).error == error


def test_validate_name_trims() -> None:
    result = validate_name("  Nyanza ")
    assert result.ok
    assert result.value == "Nyanza"


def test_reader_retries_until_valid() -> None:
    messages: list[str] = []
    reader = InputReader(prompt=scripted(["x", "99", "4"]), echo=messages.append)

    assert reader.read_int("Choose: ", 1, 12) == 4
    assert messages == [
        "Invalid input. Please enter a valid number.",
        "Please enter a number between 1 and 12.",
    ]


def test_reader_reads_names_and_amounts() -> None:
    messages: list[str] = []
    reader = InputReader(prompt=scripted(["", "a,b", "Gisenyi", "-3", "2.5"]), echo=messages.append)

    assert reader.read_name("City name: ") == "Gisenyi"
    assert reader.read_amount("Budget: ") == 2.5
    assert messages == [
        "Input cannot be empty.",
        "Input cannot contain commas.",
        "Budget cannot be negative.",
    ]


def test_reader_propagates_abort() -> None:
    reader = InputReader(prompt=scripted([]), echo=lambda _: None)
    with pytest.raises(typer.Abort):
        reader.read_int("Choose: ")
