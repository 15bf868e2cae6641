"""Tests for slash commands."""

import pytest

from hookloop import UnknownCommandError


class TestSlashCommands:
    def test_routes_args(self, rt):
        calls = []
        name = rt.use_slash_cmd(lambda *args: calls.append(args), ["tracker", "trk"])
        assert name == "TRACKER"
        rt.commands.execute("/trk add  boss   3")
        assert calls == [("add", "boss", "3")]

    def test_all_aliases(self, rt):
        calls = []
        rt.use_slash_cmd(lambda *args: calls.append(args), ["tracker", "trk"])
        rt.commands.execute("/tracker")
        rt.commands.execute("/TRK on")
        assert calls == [(), ("on",)]
        assert sorted(rt.commands.aliases("tracker")) == ["/tracker", "/trk"]

    def test_returns_handler_result(self, rt):
        rt.use_slash_cmd(lambda a, b: int(a) + int(b), ["add"])
        assert rt.commands.execute("/add 2 3") == 5

    def test_drives_state(self, host, rt):
        level = rt.use_state(0)
        log = []
        rt.use_effect(lambda: log.append(level.get()), [level])
        rt.use_slash_cmd(lambda value: level.set(int(value)), ["level"])
        rt.commands.execute("/level 4")
        host.run_pending()
        assert log == [4]

    def test_unknown_command(self, rt):
        with pytest.raises(UnknownCommandError):
            rt.commands.execute("/missing")
        with pytest.raises(LookupError):
            rt.commands.execute("   ")

    def test_needs_alias(self, rt):
        with pytest.raises(ValueError):
            rt.use_slash_cmd(lambda: None, [])
