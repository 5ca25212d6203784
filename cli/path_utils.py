# cli/path_utils.py

import os


def sanitize_name(name: str) -> str:
    """
    Sanitizes a course name or academic year string for use in file paths.

    Returns:
        A string with leading and trailing whitespace removed and internal spaces and slashes replaced with underscores.
    """
    return name.strip().replace(" ", "_").replace("/", "_")


def get_save_dir(course_name: str, academic_year: str, user_input: str | None) -> str:
    """
    Resolves a save directory path for a new `Gradebook` based on user input or default location.

    Returns:
        The expanded user input if given, otherwise `~/Documents/Gradebooks/<academic_year>/<course_name>`.
    """
    if user_input is not None:
        return os.path.abspath(os.path.expanduser(user_input.strip()))
    else:
        documents = os.path.join(os.path.expanduser("~"), "Documents")
        return os.path.join(documents, "Gradebooks", academic_year, course_name)


def resolve_save_dir(course_name: str, academic_year: str, dir_input: str | None) -> str:
    course = sanitize_name(course_name)
    year = sanitize_name(academic_year)

    return get_save_dir(course, year, dir_input)


def dir_is_empty(dir_path: str) -> bool:
    return os.path.isdir(dir_path) and not os.listdir(dir_path)
