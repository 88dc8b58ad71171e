# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/__init__.py

"""git-tfs: two-way bridge between git and Team Foundation Server."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gittfs")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"
