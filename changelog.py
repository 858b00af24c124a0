#!/usr/bin/env python
"""
Thin wrapper script to invoke the conventional_changelog CLI.

Running ``python changelog.py`` is equivalent to running the
``changelog`` console script installed via ``pyproject.toml``.
"""

from conventional_changelog.cli import main


if __name__ == "__main__":
    main(prog_name="changelog")
