"""Tests for the ``bitflyer`` command line entry point."""

import json

import pytest  # type: ignore

from bitflyer_client import cli
from bitflyer_client.endpoints import GetChildOrders, GetExecutions, GetMarkets, GetPositions
from bitflyer_client.errors import HttpError
from bitflyer_client.models import OrderState, ProductCode


def test_parser_builds_descriptors():
    parser = cli.build_parser()

    args = parser.parse_args(["executions", "--product-code", "FX_BTC_JPY", "--count", "5"])
    assert cli.BUILDERS[args.command](args) == GetExecutions(product_code=ProductCode.FX_BTC_JPY, count=5)

    args = parser.parse_args(["child-orders", "--state", "ACTIVE"])
    assert cli.BUILDERS[args.command](args) == GetChildOrders(child_order_state=OrderState.ACTIVE)

    args = parser.parse_args(["--timeout", "2", "positions"])
    assert args.timeout == 2.0
    assert cli.BUILDERS[args.command](args) == GetPositions()


def test_parser_requires_subcommand():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_main_prints_json(monkeypatch, capsys):
    sent = []

    async def fake_run(args, config=None):
        sent.append(cli.BUILDERS[args.command](args))
        return [{"product_code": "BTC_JPY", "market_type": "Spot"}]

    monkeypatch.setattr(cli, "run", fake_run)
    assert cli.main(["markets"]) == 0
    assert sent == [GetMarkets()]
    assert json.loads(capsys.readouterr().out) == [{"product_code": "BTC_JPY", "market_type": "Spot"}]


def test_main_reports_client_errors(monkeypatch, capsys):
    async def failing_run(args, config=None):
        raise HttpError(500, GetMarkets(), "boom")

    monkeypatch.setattr(cli, "run", failing_run)
    assert cli.main(["markets"]) == 1
    assert "status=500" in capsys.readouterr().err


def test_private_command_without_credentials_fails(monkeypatch, capsys):
    for name in ("API_KEY", "API_SECRET", "API_KEY_FILE", "API_SECRET_FILE"):
        monkeypatch.delenv(name, raising=False)
    assert cli.main(["balance"]) == 1
    assert "credentials required" in capsys.readouterr().err


def test_positions_accepts_product_code():
    parser = cli.build_parser()
    args = parser.parse_args(["positions", "--product-code", "FX_BTC_JPY"])
    assert cli.BUILDERS["positions"](args) == GetPositions(product_code=ProductCode.FX_BTC_JPY)
    args = parser.parse_args(["positions", "--product-code", "BTC_JPY"])
    assert cli.BUILDERS["positions"](args).query_string() == "product_code=BTC_JPY"


def test_invalid_timeout_env_is_reported(monkeypatch, capsys):
    monkeypatch.setenv("BITFLYER_TIMEOUT", "soon")
    assert cli.main(["markets"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: invalid client configuration")
    assert "Traceback" not in err
