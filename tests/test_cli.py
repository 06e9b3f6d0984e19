"""Tests for the command line entry point."""

import logging
from unittest.mock import MagicMock

import pytest
from rich.logging import RichHandler

import cli
from pfm.config import LogConfig
from pfm.errors import ApiError, TransportError
from pfm.log import configure_logging
from pfm.models import AuthToken, Currency, ExchangeRate, State, User
from pfm.store import StateStore


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state.json"


def run(state_file, *args, client=None):
    return cli.main(["--state-file", str(state_file), *args], client=client or MagicMock())


class TestSet:
    def test_set_symbol_amount(self, state_file):
        assert run(state_file, "set", "BTC", "0.5") == 0
        assert StateStore(state_file).load().portfolio.currencies == [Currency("BTC", 0.5)]

    def test_set_currency_variant(self, state_file):
        assert run(state_file, "set", "currency", "EUR", "12.5") == 0
        assert StateStore(state_file).load().portfolio.currencies == [Currency("EUR", 12.5)]

    def test_set_with_unknown_extra_argument(self, state_file):
        with pytest.raises(SystemExit) as excinfo:
            run(state_file, "set", "BTC", "1", "2")
        assert excinfo.value.code == 2

    def test_set_missing_amount(self, state_file):
        with pytest.raises(SystemExit) as excinfo:
            run(state_file, "set", "BTC")
        assert excinfo.value.code == 2

    def test_invalid_amount_exits_nonzero(self, state_file, capsys):
        assert run(state_file, "set", "BTC", "lots") == 1
        assert "Invalid amount: 'lots'" in capsys.readouterr().err
        assert not state_file.exists()


class TestSignup:
    def test_signup_stores_credentials(self, state_file, capsys):
        client = MagicMock()
        client.create_user.return_value = (User("alice"), AuthToken("tok-1"))

        assert run(state_file, "signup", "alice", "secret", client=client) == 0

        assert capsys.readouterr().out == "Signed up as alice\n"
        state = StateStore(state_file).load()
        assert state.auth_token == AuthToken("tok-1")

    def test_api_error_exits_zero(self, state_file, capsys):
        client = MagicMock()
        client.create_user.side_effect = ApiError(code=409, message="Username is taken")

        assert run(state_file, "signup", "alice", "secret", client=client) == 0

        assert capsys.readouterr().out == "Username is taken\n"
        assert not state_file.exists()

    def test_transport_error_exits_nonzero(self, state_file, capsys):
        client = MagicMock()
        client.create_user.side_effect = TransportError("POST /users/ failed: refused")

        assert run(state_file, "signup", "alice", "secret", client=client) == 1

        assert "Error: POST /users/ failed: refused" in capsys.readouterr().err

    def test_error_text_printed_verbatim(self, state_file, capsys):
        client = MagicMock()
        client.create_user.side_effect = TransportError("refused :warning: [red]x[/red]")

        assert run(state_file, "signup", "alice", "secret", client=client) == 1

        assert "Error: refused :warning: [red]x[/red]" in capsys.readouterr().err


class TestShowTotal:
    def test_no_subcommand_shows_total(self, state_file, capsys):
        store = StateStore(state_file)
        store.save(State(auth_token=AuthToken("tok-1")))
        run(state_file, "set", "USD", "100")
        run(state_file, "set", "BTC", "0.5")
        client = MagicMock()
        client.get_exchange_rate.side_effect = lambda quote, base, token: ExchangeRate(
            quote, base, {"USD": 1.0, "BTC": 20000.0}[quote]
        )

        assert run(state_file, client=client) == 0

        out = capsys.readouterr().out
        assert out.splitlines()[-1] == "Total: $10100.00"
        assert "BTC: 0.50000000" in out

    def test_verbosity_does_not_change_output(self, state_file, capsys):
        client = MagicMock()
        assert run(state_file, client=client) == 0
        quiet = capsys.readouterr().out
        assert run(state_file, "-vvv", client=client) == 0
        assert capsys.readouterr().out == quiet

    def test_corrupt_state_exits_nonzero(self, state_file, capsys):
        state_file.write_text("{")
        assert run(state_file) == 1
        assert "is corrupt" in capsys.readouterr().err


class TestParser:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--version"])
        assert excinfo.value.code == 0
        assert capsys.readouterr().out.strip() == "pfm 0.1.0"

    def test_defaults(self):
        args = cli.build_parser().parse_args([])
        assert args.command is None
        assert args.verbose == 0
        assert args.state_file == "state.json"
        assert args.api_url == "https://api.easyportfol.io"

    def test_repeated_verbose(self):
        args = cli.build_parser().parse_args(["-vv", "set", "BTC", "1"])
        assert args.verbose == 2


class TestLogging:
    @pytest.mark.parametrize(
        "verbosity, level",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_level_from_verbosity(self, verbosity, level):
        assert LogConfig(verbosity).level == level

    def test_library_logs_only_at_trace(self):
        assert LogConfig(2).library_level == logging.WARNING
        assert LogConfig(3).library_level == logging.DEBUG

    def test_configure_is_idempotent(self):
        configure_logging(LogConfig(1))
        logger = configure_logging(LogConfig(2))
        handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.DEBUG
