"""Tests for the net_worth_cli adapter."""

from decimal import Decimal
from unittest.mock import MagicMock

from networth.adapters import net_worth_cli
from networth.domain.models import AllocationEntry, NetWorthSummary


def _patch_wiring(monkeypatch, summary=None):
    fake_logger = MagicMock()
    fake_repository = object()
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = summary
    monkeypatch.setattr(net_worth_cli.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(net_worth_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(
        net_worth_cli,
        "build_finance_repository",
        lambda: fake_repository,
    )
    monkeypatch.setattr(net_worth_cli, "build_rate_table", lambda: {"USD": 4})

    def _fake_use_case(repository):
        assert repository is fake_repository
        return fake_use_case

    monkeypatch.setattr(
        net_worth_cli,
        "build_net_worth_summary_use_case",
        _fake_use_case,
    )
    return fake_logger, fake_use_case


def test_main_prints_formatted_summary(monkeypatch, capsys):
    summary = NetWorthSummary(
        valuated_sources=(),
        net_worth=Decimal("2500"),
        liquid_assets=Decimal("500.5"),
        asset_allocation=(AllocationEntry(name="Flat", value=Decimal("2000")),),
        currency_code="USD",
        missing_currencies=frozenset({"CHF"}),
    )
    _, fake_use_case = _patch_wiring(monkeypatch, summary)
    monkeypatch.setenv("NETWORTH_USER_ID", "user-1")
    monkeypatch.setenv("NETWORTH_DISPLAY_CURRENCY", "usd")

    net_worth_cli.main()

    fake_use_case.execute.assert_called_once_with(
        "user-1",
        {"USD": 4},
        display_currency="USD",
    )
    out = capsys.readouterr().out
    assert "Net worth: 2500,00 $" in out
    assert "Liquid assets: 500,50 $" in out
    assert "Flat: 2000,00 $" in out
    assert "CHF" in out


def test_main_requires_user(monkeypatch, capsys):
    fake_logger, fake_use_case = _patch_wiring(monkeypatch)
    monkeypatch.delenv("NETWORTH_USER_ID", raising=False)

    net_worth_cli.main()

    fake_logger.warning.assert_called_once()
    fake_use_case.execute.assert_not_called()
    assert capsys.readouterr().out == ""
