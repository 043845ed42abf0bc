import importlib

import pytest

from focus_route.models import Location

cli = importlib.import_module("focus_route.main")


def test_suggest_prints_stopovers(monkeypatch, capsys):
    async def fake_suggest(origin, destination, api_key, max_stopovers):
        assert origin == Location(51.0, -1.0)
        assert max_stopovers == 2
        return [Location(51.2, -1.0, "Services")]

    monkeypatch.setattr(cli, "suggest_stopovers", fake_suggest)

    code = cli.main(
        ["--api-key", "k", "suggest", "--origin", "51.0,-1.0", "--destination", "51.4,-1.0", "--max-stopovers", "2"]
    )

    assert code == 0
    assert "Services (51.20000, -1.00000)" in capsys.readouterr().out


def test_plan_reports_route_failure(monkeypatch):
    async def fake_suggest(*args):
        return []

    async def fake_route(*args, **kwargs):
        return None

    monkeypatch.setattr(cli, "suggest_stopovers", fake_suggest)
    monkeypatch.setattr(cli, "compute_route_data", fake_route)

    assert cli.main(["--api-key", "k", "plan", "--origin", "1,2", "--destination", "3,4"]) == 1


def test_missing_api_key_is_an_error():
    assert cli.main(["--api-key", "", "suggest", "--origin", "1,2", "--destination", "3,4"]) == 2


def test_bad_coordinates_exit():
    with pytest.raises(SystemExit):
        cli.main(["--api-key", "k", "suggest", "--origin", "nowhere", "--destination", "3,4"])
