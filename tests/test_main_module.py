"""Tests for `python -m tissuebox` entrypoint."""

from __future__ import annotations

import runpy
import sys
from unittest.mock import patch

import pytest

from tissuebox.models import CLIPBOARD_OWNER_ENV


def test_main_module_calls_sys_exit_with_main_return_value():
    with (
        patch("tissuebox.app.main", return_value=7) as main_mock,
        patch("sys.exit", side_effect=SystemExit) as exit_mock,
        pytest.raises(SystemExit),
    ):
        runpy.run_module("tissuebox.__main__", run_name="__main__")

    main_mock.assert_called_once_with()
    exit_mock.assert_called_once_with(7)


def test_clipboard_owner_claims_payload_without_parsing_flags(monkeypatch):
    monkeypatch.setenv(CLIPBOARD_OWNER_ENV, "1")
    monkeypatch.setattr(sys, "argv", ["tissuebox", "--title like a flag"])
    with (
        patch("tissuebox.clipboard.claim_clipboard", return_value=True) as claim_mock,
        patch("sys.exit", side_effect=SystemExit) as exit_mock,
        pytest.raises(SystemExit),
    ):
        runpy.run_module("tissuebox.__main__", run_name="__main__")

    claim_mock.assert_called_once_with("--title like a flag")
    exit_mock.assert_called_once_with(0)
