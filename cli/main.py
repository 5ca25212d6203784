# cli/main.py

"""
Start Menu for the Gradebook CLI.

Provides functions for creating or loading a Gradebook.
"""

import logging
import os
from textwrap import dedent
from typing import cast

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import course_menu
from cli.path_utils import dir_is_empty, resolve_save_dir
from models.gradebook import Gradebook

LOG_LEVEL_ENV = "GRADEBOOK_LOG_LEVEL"


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_cli() -> None:
    """
    Top-level loop with dispatch for the Start menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    configure_logging()

    title = formatters.format_banner_text("CULINARY GRADEBOOK")
    options = [
        ("Create a new Gradebook", create_gradebook),
        ("Load an existing Gradebook", load_gradebook),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            gradebook = menu_response()

            if gradebook is not None:
                course_menu.run(gradebook)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def create_gradebook() -> Gradebook | None:
    """
    Prompts the user to create a new `Gradebook` by collecting course name, academic year, and optional save directory.

    Returns:
        Gradebook: A new `Gradebook` instance if successfully created.
        None: If the user cancels during input or if `Gradebook` creation fails.

    Notes:
        - If the save directory input is left blank, the `Gradebook` will be stored in `~/Documents/Gradebooks/<year>/<course>`.
        - If the resolved directory exists and is not empty, the user must explicitly confirm before continuing.
        - New gradebooks start with the default instruments, learning outcomes and criteria.
    """
    while True:
        name = helpers.prompt_user_input_or_cancel(
            "Enter the course name (e.g. Cocina y Gastronomía, leave blank to cancel):"
        )

        if name is MenuSignal.CANCEL:
            return None
        name = cast(str, name)

        academic_year = helpers.prompt_user_input_or_cancel(
            "Enter the academic year (e.g. 2025-2026, leave blank to cancel):"
        )

        if academic_year is MenuSignal.CANCEL:
            return None
        academic_year = cast(str, academic_year)

        dir_input = helpers.prompt_user_input_or_none(
            "Enter directory to save the Gradebook (leave blank to use default):"
        )

        dir_path = resolve_save_dir(name, academic_year, dir_input)

        if os.path.exists(dir_path) and not dir_is_empty(dir_path):
            warning_banner = formatters.format_banner_text("WARNING!")
            print(f"\n{warning_banner}")
            print(
                dedent(
                    """\
                    The selected directory is not empty and may contain existing data.
                    Writing to this directory may result in the loss of existing data."""
                )
            )

            if not helpers.confirm_action("\nDo you wish to continue?"):
                continue

        print("\nCreating Gradebook ...")

        gradebook_response = Gradebook.create(name, academic_year, dir_path)

        if not gradebook_response.success:
            helpers.display_response_failure(gradebook_response)
            continue

        print("... Gradebook created successfully.")

        return gradebook_response.data["gradebook"]


def load_gradebook() -> Gradebook | None:
    """
    Prompts the user to load a `Gradebook` from a specified directory path.

    Returns:
        Gradebook: A `Gradebook` instance if loading succeeds.
        None: If the user cancels.

    Notes:
        - Relative paths and `~` are expanded to absolute paths.
        - The target path must be an existing directory; otherwise, the user will be prompted again.
    """
    while True:
        dir_path = helpers.prompt_user_input_or_cancel(
            "Enter path to Gradebook directory (leave blank to cancel):"
        )

        if dir_path is MenuSignal.CANCEL:
            return None
        dir_path = cast(str, dir_path)

        dir_path = os.path.abspath(os.path.expanduser(dir_path))

        if not os.path.isdir(dir_path):
            print(f"\nDirectory not found: {dir_path}. Please try again.")
            continue

        print("\nLoading Gradebook ...")

        gradebook_response = Gradebook.load(dir_path)

        if not gradebook_response.success:
            helpers.display_response_failure(gradebook_response)
            continue

        print("... Gradebook loaded successfully.")

        return gradebook_response.data["gradebook"]


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
