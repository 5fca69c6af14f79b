"""
Tests for the interactive key shell and its command line front-end
"""


import io
from typing import Iterable

import pytest

from sigkey.crypto.key_utils import create_initial_key_from_signature, derive_key_from_initial_key_and_timelock
from sigkey.crypto.options import DerivationOptions
from sigkey.shell import key_shell
from sigkey.shell.key_shell import EXIT_FAILURE, EXIT_OK, KeyShell, main

SIG_AA = "0x" + "aa" * 32


def scripted(answers: Iterable[str]):
    """Input function replaying answers, then raising EOFError like input() on a closed stdin"""
    remaining = iter(answers)

    def fake_input(prompt: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return fake_input


def make_shell(answers: Iterable[str], options: DerivationOptions = None) -> KeyShell:
    return KeyShell(options=options, input_fn=scripted(answers), out=io.StringIO(), err=io.StringIO())


class TestKeyShellRun:
    """Session flow"""

    def test_initial_key_then_exit(self) -> None:
        shell = make_shell([SIG_AA, "1", "2"])
        assert shell.run() == EXIT_OK
        output = shell.out.getvalue()
        assert f"Initial key: {create_initial_key_from_signature(SIG_AA, '1')}" in output
        assert output.rstrip().endswith("Done.")

    def test_derive_with_timelocks(self) -> None:
        shell = make_shell([SIG_AA, "0x1", "1", "1000", "1", "0x7d0", "2"])
        assert shell.run() == EXIT_OK
        initial = create_initial_key_from_signature(SIG_AA, "1")
        output = shell.out.getvalue()
        assert f"Derived key: {derive_key_from_initial_key_and_timelock(initial, 1000)}" in output
        assert f"Derived key: {derive_key_from_initial_key_and_timelock(initial, 2000)}" in output

    def test_child_failure_keeps_session_alive(self) -> None:
        shell = make_shell([SIG_AA, "1", "1", "-5", "1", "abc", "1", "42", "2"])
        assert shell.run() == EXIT_OK
        errors = shell.err.getvalue()
        assert "[KeyShell] Error deriving key" in errors
        assert "numeric" in errors
        assert errors.count("Error deriving key") == 2
        assert shell.out.getvalue().count("Derived key:") == 1

    def test_initial_failure_returns_nonzero(self) -> None:
        shell = make_shell(["0xaa", "1"])
        assert shell.run() == EXIT_FAILURE
        assert "at least" in shell.err.getvalue()
        assert "Initial key" not in shell.out.getvalue()

    def test_non_numeric_chain_id(self) -> None:
        shell = make_shell([SIG_AA, "solana:mainnet-beta"])
        assert shell.run() == EXIT_FAILURE
        assert "numeric" in shell.err.getvalue()

    def test_invalid_choice(self) -> None:
        shell = make_shell([SIG_AA, "1", "3", "2"])
        assert shell.run() == EXIT_OK
        assert "Invalid choice. Please enter 1 or 2." in shell.out.getvalue()

    def test_eof_in_menu_ends_session(self) -> None:
        shell = make_shell([SIG_AA, "1"])
        assert shell.run() == EXIT_OK
        assert "Done." in shell.out.getvalue()

    def test_eof_before_initial_key(self) -> None:
        shell = make_shell([SIG_AA])
        assert shell.run() == EXIT_FAILURE

    def test_supplied_values_skip_prompts(self) -> None:
        shell = make_shell(["2"])
        assert shell.run(signature=SIG_AA, chain_id="255") == EXIT_OK
        assert create_initial_key_from_signature(SIG_AA, "0xff") in shell.out.getvalue()

    def test_options_are_used(self) -> None:
        opts = DerivationOptions(output_length=16)
        shell = make_shell([SIG_AA, "1", "1", "5", "2"], options=opts)
        assert shell.run() == EXIT_OK
        initial = create_initial_key_from_signature(SIG_AA, "1", opts)
        assert shell.initial_key == initial
        assert derive_key_from_initial_key_and_timelock(initial, 5, opts) in shell.out.getvalue()


class TestMain:
    """Command line entry point"""

    def test_main_with_arguments(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
        monkeypatch.setattr("builtins.input", scripted(["1", "1000", "2"]))
        status = main(["--signature", SIG_AA, "--chain-id", "1"])
        assert status == EXIT_OK
        initial = create_initial_key_from_signature(SIG_AA, "1")
        out = capsys.readouterr().out
        assert derive_key_from_initial_key_and_timelock(initial, 1000) in out

    def test_main_width_options(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
        monkeypatch.setattr("builtins.input", scripted(["2"]))
        status = main(["--signature", SIG_AA, "--chain-id", "5", "--chain-id-width", "8"])
        assert status == EXIT_OK
        expected = create_initial_key_from_signature(SIG_AA, "5", DerivationOptions(chain_id_width=8))
        assert expected in capsys.readouterr().out

    def test_main_rejects_bad_option(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--timelock-width", "0"])
        assert excinfo.value.code == 2
        assert "timelockWidth" in capsys.readouterr().err

    def test_main_initial_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("builtins.input", scripted([]))
        assert main(["--signature", "0x", "--chain-id", "1"]) == EXIT_FAILURE

    def test_parser_defaults(self) -> None:
        args = key_shell.build_parser().parse_args([])
        assert args.signature is None
        assert args.output_length == 32
        assert args.chain_id_width == 32
        assert args.timelock_width == 8
