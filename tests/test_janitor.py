# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/test_janitor.py

from contextlib import contextmanager

from gittfs.core.janitor import Janitor


def test_cleanups_run_in_reverse_order():
    calls = []
    janitor = Janitor()
    janitor.add_cleanup(calls.append, "first")
    janitor.add_cleanup(calls.append, "second")

    janitor.dispose()

    assert calls == ["second", "first"]


def test_dispose_is_idempotent():
    calls = []
    janitor = Janitor()
    janitor.add_cleanup(calls.append, "once")

    janitor.dispose()
    janitor.dispose()

    assert calls == ["once"]


def test_enter_keeps_resource_open_until_dispose():
    events = []

    @contextmanager
    def resource():
        events.append("open")
        yield "handle"
        events.append("close")

    janitor = Janitor()
    assert janitor.enter(resource()) == "handle"
    assert events == ["open"]

    janitor.dispose()
    assert events == ["open", "close"]


def test_context_manager():
    calls = []
    with Janitor() as janitor:
        janitor.add_cleanup(calls.append, "done")
    assert calls == ["done"]
