# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/system/__init__.py

"""Process-level plumbing: exceptions, subprocess execution, logging."""
