"""Source location of an error, for log lines."""

import traceback


def get_error_path(err: BaseException) -> str:
    """Format where an exception was raised as ``blog/<file>:<line> (fn:<name>)``.

    Paths outside the ``blog`` package are kept as they are.
    """
    frames = traceback.extract_tb(err.__traceback__)
    if not frames:
        return "<unknown>"

    filename, line, func, _ = frames[-1]
    marker = "/blog/"
    if marker in filename:
        filename = "blog/" + filename.rsplit(marker, 1)[-1]
    return f"{filename}:{line} (fn:{func})"
