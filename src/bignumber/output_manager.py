# output_manager.py

import os

from bignumber.fmt import format_result, strip_ansi
from bignumber.workspace import workspace_dir


def resolve_output_path(path: str, workspace_root: str) -> str:
    """
    Resolve user-provided output path.

    Rules:
    - '~' expanded to user home
    - Absolute paths unchanged
    - Relative paths are relative to workspace_root
    """
    if not path:
        raise ValueError("Output path is empty")

    path = os.path.expanduser(path)
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(workspace_root, path))


def validate_output_setting(output_file: str | None) -> str | None:
    """
    Validate output setting.
    - None / "" => ok (screen only)
    - path/to/file => must be a file name, not a directory or source file
    Returns output_file, or raises ValueError.
    """
    if not output_file:
        return output_file
    if output_file in (".", "./") or output_file.endswith(("/", "\\")):
        raise ValueError("Output must be a file, not a directory")
    ext = os.path.splitext(output_file)[1].lower()
    if ext in {".py", ".toml", ".md"}:
        raise ValueError(f"Forbidden output file extension: {ext}")
    return output_file


class OutputManager:
    """
    Handles all printing/output, to screen and/or file.

    Usage:
        om = OutputManager(output_file="results.txt")
        om.result("2^64", "18446744073709551616")  # screen (abbreviated) + file (full)
        om.close()
    """

    def __init__(self, output_file: str | None = None, quiet: bool = False):
        """
        Parameters:
            output_file:
                None or ""       => screen only
                path/to/file.txt => append all runs to this file
            quiet: if True, no output to screen (only to file)
        """
        self.quiet = quiet
        self.output_file = validate_output_setting(output_file) or ""
        self._buffer: list[str] = []
        self._path: str | None = None

        if self.output_file:
            path = resolve_output_path(self.output_file, str(workspace_dir()))
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._path = path

    @property
    def path(self) -> str | None:
        return self._path

    def write(self, *args, sep: str = " ", end: str = "\n") -> None:
        """Write to screen and file (if configured)."""
        text = sep.join(str(a) for a in args) + end
        self._buffer.append(text)
        if not self.quiet:
            print(text, end="")
        self._append(strip_ansi(text))

    def result(self, label: str, value: str) -> None:
        """Abbreviated on screen, full in the file."""
        self._buffer.append(f"{label} = {value}\n")
        if not self.quiet:
            print(format_result(label, value))
        self._append(f"{label} = {value}\n")

    def _append(self, text: str) -> None:
        if self._path is None:
            return
        with open(self._path, "a", encoding="utf-8") as fh:
            fh.write(text)

    def getvalue(self) -> str:
        """Returns everything written (full numbers, with color codes)."""
        return "".join(self._buffer)

    def close(self) -> None:
        """Add a separator line between runs in the output file."""
        if self._path and self._buffer:
            self._append("\n")
        self._buffer.clear()
