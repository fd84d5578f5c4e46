"""Pilot tests for the interactive session screen."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from tissuebox.app import BoxScreen, TissueboxApp
from tissuebox.clipboard import ClipboardUnavailable
from tissuebox.modals import ConfirmModal
from tissuebox.models import TissueBox, UserConfig
from tissuebox.modes import IDLE, Capture, CaptureKind, Failure
from tissuebox.services import HelperError
from tissuebox.store import StoreError
from tissuebox.widgets import ErrorLine

STORE = Path(".tissuebox")


def _make_app(box: TissueBox, services, **kwargs) -> tuple[TissueboxApp, MagicMock]:
    save = MagicMock()
    app = TissueboxApp(box, STORE, config=UserConfig(), services=services, save_fn=save, **kwargs)
    return app, save


@pytest.mark.asyncio
async def test_box_screen_is_shown(sample_box, fake_services):
    app, _ = _make_app(sample_box, fake_services())
    async with app.run_test() as pilot:
        await pilot.pause()
        assert isinstance(app.screen, BoxScreen)
        assert app.theme == "monokai"


@pytest.mark.asyncio
async def test_add_flow_saves_once(sample_box, fake_services):
    app, save = _make_app(sample_box, fake_services())
    async with app.run_test() as pilot:
        await pilot.press("a")
        assert app.session.mode == Capture(CaptureKind.ADD)
        await pilot.press("b", "a", "z")
        assert app.session.mode == Capture(CaptureKind.ADD, "baz")
        save.assert_not_called()

        await pilot.press("enter")
        assert app.session.mode == IDLE
        assert [t.title for t in sample_box.tissues] == ["Foo", "Bar", "baz"]
        save.assert_called_once_with(sample_box, STORE)


@pytest.mark.asyncio
async def test_navigation_moves_highlight(sample_box, fake_services):
    app, save = _make_app(sample_box, fake_services())
    async with app.run_test() as pilot:
        await pilot.press("j")
        assert app.session.highlight == 1
        await pilot.press("j", "j")
        assert app.session.highlight == 1
        await pilot.press("k")
        assert app.session.highlight == 0
        save.assert_not_called()


@pytest.mark.asyncio
async def test_save_failure_shows_error(sample_box, fake_services):
    app, save = _make_app(sample_box, fake_services())
    save.side_effect = StoreError("failed to write .tissuebox: disk full")
    async with app.run_test() as pilot:
        await pilot.pause()
        error_line = app.screen.query_one(ErrorLine)
        with patch.object(error_line, "show_error", wraps=error_line.show_error) as shown:
            await pilot.press("asterisk")
        assert app.session.error == "failed to write .tissuebox: disk full"
        shown.assert_called_with("failed to write .tissuebox: disk full")

        await pilot.press("x")
        assert app.session.mode == IDLE


@pytest.mark.asyncio
async def test_copy_failure_reports_clipboard(sample_box, fake_services):
    services = fake_services(clipboard_error=ClipboardUnavailable())
    app, _ = _make_app(sample_box, services)
    async with app.run_test() as pilot:
        await pilot.press("c", "t")
        assert app.session.mode == Failure("clipboard unavailable")


@pytest.mark.asyncio
async def test_commit_gate(sample_box, fake_services):
    services = fake_services()
    app, save = _make_app(sample_box, services)
    async with app.run_test() as pilot:
        await pilot.press("C", "y")
        assert services.vcs.committed == ["Foo"]
        assert [t.title for t in sample_box.tissues] == ["Bar"]
        save.assert_called_once()


@pytest.mark.asyncio
async def test_quit_exits_app(sample_box, fake_services):
    app, _ = _make_app(sample_box, fake_services())
    async with app.run_test() as pilot:
        with patch.object(app, "exit") as exit_mock:
            await pilot.press("q")
        exit_mock.assert_called_once_with()


@pytest.mark.asyncio
@pytest.mark.parametrize("quit_key", ["ctrl+q", "ctrl+c"])
async def test_quit_keys_do_not_leave_capture(sample_box, fake_services, quit_key):
    app, save = _make_app(sample_box, fake_services())
    async with app.run_test() as pilot:
        await pilot.press("a", "x", quit_key)
        await pilot.pause()
        assert app.is_running
        assert app.session.mode == Capture(CaptureKind.ADD, "x")
        save.assert_not_called()


@pytest.mark.asyncio
async def test_first_run_in_repo_asks_to_exclude(fake_services, tmp_path):
    services = fake_services(has_repo=True)
    app, _ = _make_app(TissueBox(), services, first_run=True, base_dir=tmp_path)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert isinstance(app.screen, ConfirmModal)
        await pilot.press("y")
        await pilot.pause()
        assert services.vcs.excluded == [(STORE, tmp_path)]
        assert isinstance(app.screen, BoxScreen)


@pytest.mark.asyncio
async def test_first_run_decline_leaves_exclude_alone(fake_services, tmp_path):
    services = fake_services(has_repo=True)
    app, _ = _make_app(TissueBox(), services, first_run=True, base_dir=tmp_path)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("n")
        await pilot.pause()
        assert services.vcs.excluded == []


@pytest.mark.asyncio
async def test_first_run_outside_repo_skips_prompt(fake_services, tmp_path):
    app, _ = _make_app(TissueBox(), fake_services(), first_run=True, base_dir=tmp_path)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert isinstance(app.screen, BoxScreen)


@pytest.mark.asyncio
async def test_exclude_failure_becomes_error(fake_services, tmp_path):
    services = fake_services(has_repo=True, vcs_error=HelperError("read-only"))
    app, _ = _make_app(TissueBox(), services, first_run=True, base_dir=tmp_path)
    async with app.run_test() as pilot:
        await pilot.pause()
        await pilot.press("y")
        await pilot.pause()
        assert app.session.error == "read-only"


@pytest.mark.asyncio
async def test_defaulted_config_warns(sample_box, fake_services):
    app = TissueboxApp(
        sample_box,
        STORE,
        config=UserConfig(config_defaulted=True),
        services=fake_services(),
        save_fn=MagicMock(),
    )
    with patch.object(app, "notify") as notify:
        async with app.run_test() as pilot:
            await pilot.pause()
    assert "unreadable" in notify.call_args[0][0]
