from __future__ import annotations

import json

import pytest

from conftest import make_transport
from doctor import cli
from doctor.client import AssetChainClient
from doctor.diagnostics import suite
from doctor.diagnostics.catalog import default_catalog


@pytest.fixture
def fake_api(monkeypatch):
    def install(routes):
        async def _diagnose(url, sink=None, timeout_s=30.0):
            async with AssetChainClient(url, timeout_s=timeout_s, transport=make_transport(routes)) as c:
                return await suite.diagnose(url, sink=sink, client=c)

        monkeypatch.setattr(cli, "diagnose", _diagnose)

    return install


def test_cli_success_exit_code(fake_api, routes, capsys):
    fake_api(routes)
    assert cli.main(["http://nft-api.test", "--quiet"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert list(report) == [c.name for c in default_catalog()]


def test_cli_prints_progress(fake_api, routes, capsys):
    fake_api(routes)
    cli.main(["http://nft-api.test"])
    out = capsys.readouterr().out
    assert out.startswith("success: confirms change#mint > send#asset > receive#asset\n")


def test_cli_failure_exit_code(fake_api, capsys):
    fake_api({})
    assert cli.main(["http://nft-api.test", "--quiet"]) == 1
    report = json.loads(capsys.readouterr().out)
    assert not any(v["success"] for v in report.values())


def test_cli_invalid_url(capsys):
    assert cli.main(["not-a-url"]) == 2
    assert "invalid base address" in capsys.readouterr().err
