# cli/menus/course_menu.py

"""
Course Manager menu for the Gradebook CLI.

Provides calls to the grade and learning outcome views, plus an option to save the gradebook.
"""

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import grades_menu, outcomes_menu
from models.gradebook import Gradebook


def run(gradebook: Gradebook) -> None:
    """
    Top-level loop with dispatch for the Course Manager menu.

    Args:
        gradebook (Gradebook): The active `Gradebook`.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text(f"{gradebook.name} - {gradebook.academic_year}")
    options = [
        ("View Grades", lambda: grades_menu.run(gradebook)),
        ("View Learning Outcomes", lambda: outcomes_menu.run(gradebook)),
        ("Save Gradebook", lambda: save_gradebook(gradebook)),
    ]
    zero_option = "Return to Start Menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break

            elif callable(menu_response):
                menu_response()

            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        helpers.prompt_if_dirty(gradebook)

    helpers.returning_to("Start Menu")


def save_gradebook(gradebook: Gradebook) -> None:
    save_response = gradebook.save()

    if not save_response.success:
        helpers.display_response_failure(save_response)
        return

    print(f"\n{save_response.detail}")
