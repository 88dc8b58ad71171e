# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/__init__.py

"""Command Line Interface package for git-tfs."""

from .main import app, main, run_cli

__all__ = ['main', 'app', 'run_cli']
