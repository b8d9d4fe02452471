#!/usr/bin/env python3
"""
Error handling for the Price Tracker application.

This module provides:
1. Custom exception classes, one per failure kind, each with a stable error code
2. Global exception handling for the Typer app
3. User-friendly error messages for the command line
"""
import functools
import logging
import sys
import traceback
import uuid
from decimal import Decimal
from typing import Callable, Optional

import typer


logger = logging.getLogger(__name__)


class PriceTrackerError(Exception):
    """Base class for all Price Tracker exceptions."""
    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code or "PRCTRK-GEN-ERR"
        super().__init__(message)


class ConfigError(PriceTrackerError):
    """Error related to configuration issues."""
    def __init__(self, message: str):
        super().__init__(message, "PRCTRK-CFG-ERR")


class ItemNotFoundError(PriceTrackerError):
    """Error when an item is not in the store."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No such item: {name!r}", "PRCTRK-NF-ERR")


class ItemExistsError(PriceTrackerError):
    """Error when creating an item that is already in the store."""
    def __init__(self, name: str, existing_price: Decimal):
        self.name = name
        self.existing_price = existing_price
        super().__init__(
            f"Item {name!r} already exists with price {existing_price}",
            "PRCTRK-DUP-ERR",
        )


class InvalidPriceError(PriceTrackerError):
    """Error when supplied price text is not a decimal number."""
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Provided price is invalid: {text!r}", "PRCTRK-VAL-ERR")


def generate_error_id() -> str:
    """
    Generate a unique error ID for tracking purposes.

    Returns:
        String error ID (truncated UUID)
    """
    return str(uuid.uuid4())[:8]


def exception_handler(func: Callable) -> Callable:
    """
    Decorator that turns exceptions raised by a command into a clean exit.

    Known errors print their message; anything else is logged with a
    traceback under a short error ID that is shown to the user.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort, KeyboardInterrupt):
            raise
        except PriceTrackerError as e:
            logger.debug(f"Command failed [Code: {e.error_code}]: {e.message}")
            typer.secho("Error: ", fg=typer.colors.RED, bold=True, nl=False, err=True)
            typer.secho(e.message, fg=typer.colors.RED, err=True)
            sys.exit(1)
        except Exception as e:
            error_id = generate_error_id()
            tb_text = "".join(traceback.format_exception(type(e), e, e.__traceback__))
            logger.error(
                f"Exception occurred [ID: {error_id}] [Code: PRCTRK-UNK-ERR]\n"
                f"Error: {str(e)}\n"
                f"Args: {sys.argv}\n\n"
                f"Traceback:\n{tb_text}"
            )
            typer.secho("Error: ", fg=typer.colors.RED, bold=True, nl=False, err=True)
            typer.secho(
                f"An unexpected error occurred [ID: {error_id}].\n"
                f"Please check the log for details.",
                fg=typer.colors.RED,
                err=True,
            )
            sys.exit(1)

    return wrapper


def handle_keyboard_interrupt(func: Callable) -> Callable:
    """
    Decorator to handle keyboard interrupts gracefully.

    Args:
        func: Function to decorate

    Returns:
        Decorated function
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            typer.echo("\nOperation cancelled by user.")
            sys.exit(130)  # Standard exit code for SIGINT

    return wrapper


def patch_typer_commands(app: typer.Typer, decorator: Callable) -> None:
    """
    Patch all Typer commands with a decorator.

    This recursively processes the app and all subcommands.

    Args:
        app: Typer app to patch
        decorator: Decorator to apply to all commands
    """
    for command in app.registered_commands:
        if callable(command.callback):
            command.callback = decorator(command.callback)

    for group in app.registered_groups:
        if group.typer_instance is not None:
            patch_typer_commands(group.typer_instance, decorator)


def apply_error_handling(app: typer.Typer) -> typer.Typer:
    """
    Apply error handling to a Typer app.

    Must be called after every command has been registered.

    Args:
        app: Typer app to configure

    Returns:
        Configured Typer app
    """
    patch_typer_commands(
        app, lambda func: handle_keyboard_interrupt(exception_handler(func))
    )
    return app
