"""
tests/test_errors.py - Error taxonomy and CLI exception handling
"""
from decimal import Decimal

import pytest
import typer
from typer.testing import CliRunner

from pricetracker.errors import (
    InvalidPriceError,
    ItemExistsError,
    ItemNotFoundError,
    PriceTrackerError,
    apply_error_handling,
)

runner = CliRunner()


def test_each_failure_kind_has_a_stable_code():
    errors = [
        ItemNotFoundError("shoes"),
        ItemExistsError("shoes", Decimal("50")),
        InvalidPriceError("abc"),
    ]

    assert [e.error_code for e in errors] == [
        "PRCTRK-NF-ERR",
        "PRCTRK-DUP-ERR",
        "PRCTRK-VAL-ERR",
    ]
    assert all(isinstance(e, PriceTrackerError) for e in errors)
    assert PriceTrackerError("boom").error_code == "PRCTRK-GEN-ERR"


def test_errors_carry_their_subject():
    assert ItemNotFoundError("hats").name == "hats"
    conflict = ItemExistsError("hats", Decimal("3"))
    assert (conflict.name, conflict.existing_price) == ("hats", Decimal("3"))
    assert InvalidPriceError("x1").text == "x1"


@pytest.fixture
def failing_app():
    app = typer.Typer()

    @app.command()
    def known():
        raise ItemNotFoundError("shoes")

    @app.command()
    def unknown():
        raise RuntimeError("kaboom")

    @app.command()
    def interrupted():
        raise KeyboardInterrupt

    @app.command()
    def ok():
        typer.echo("fine")

    return apply_error_handling(app)


def test_known_error_prints_message(failing_app):
    result = runner.invoke(failing_app, ["known"])

    assert result.exit_code == 1
    assert "No such item: 'shoes'" in result.output


def test_unexpected_error_gets_an_error_id(failing_app):
    result = runner.invoke(failing_app, ["unknown"])

    assert result.exit_code == 1
    assert "An unexpected error occurred [ID:" in result.output


def test_keyboard_interrupt_exits_130(failing_app):
    result = runner.invoke(failing_app, ["interrupted"])

    assert result.exit_code == 130


def test_successful_command_is_untouched(failing_app):
    result = runner.invoke(failing_app, ["ok"])

    assert result.exit_code == 0
    assert result.output == "fine\n"
