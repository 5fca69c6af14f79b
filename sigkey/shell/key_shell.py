"""
- File:     sigkey/shell/key_shell.py
- Desc:     Interactive shell around the two derivation functions: reads a signature and
            chain id, prints the initial key, then derives timelock keys until the user exits
- Author:   Vasu Makadia
- License:  Apache License 2.0
"""


# Import required modules
import argparse
import sys
from typing import Callable, List, Optional, TextIO

# Import custom modules
from sigkey.crypto.errors import KeyDerivationError
from sigkey.crypto.key_utils import create_initial_key_from_signature, derive_key_from_initial_key_and_timelock
from sigkey.crypto.options import (
    DEFAULT_CHAIN_ID_WIDTH,
    DEFAULT_OUTPUT_LENGTH,
    DEFAULT_TIMELOCK_WIDTH,
    DerivationOptions,
)


# Define global variables
EXIT_OK = 0
EXIT_FAILURE = 1
CHOICE_DERIVE = "1"
CHOICE_EXIT = "2"


class KeyShell:
    """
    A line based session that derives one initial key and any number of timelock keys
    """
    # a method to initialize the parameters
    def __init__ (
            self,
            options: Optional[DerivationOptions] = None,
            input_fn: Optional[Callable[[str], str]] = None,
            out: Optional[TextIO] = None,
            err: Optional[TextIO] = None
    ):
        self.options = options or DerivationOptions()
        self.input_fn = input_fn or input
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.initial_key: Optional[str] = None


    def say (self, text: str = "") -> None:
        """
        Brief:
            Print one line of session output
        Parameters:
            text (str):     line to print, blank when omitted
        Returns:
            None
        """
        print(text, file=self.out)


    def report_error (self, prefix: str, exc) -> None:
        """
        Brief:
            Print a tagged error line to the error stream
        Parameters:
            prefix (str):   short description of the failed step
            exc (Exception | str): the failure or its message
        Returns:
            None
        """
        print(f"[KeyShell] {prefix}: {exc}", file=self.err)


    def ask (self, prompt: str) -> str:
        """
        Brief:
            Prompt the user and return the trimmed answer
        Parameters:
            prompt (str):   text shown before reading
        Returns:
            str:            the answer without surrounding whitespace
        Raises:
            EOFError:       when the input stream is exhausted
        """
        return self.input_fn(prompt).strip()


    def print_banner (self) -> None:
        self.say("=== Signature Key Derivation Tool ===")
        self.say()
        self.say("Notes:")
        self.say("- signature: hex bytes (0x...)")
        self.say('- chainId: numeric only: decimal like "1" or hex like "0x1"')
        self.say(f"- timelock: decimal or 0x-hex; encoded big-endian in {self.options.timelock_width} bytes")
        self.say()


    def derive_timelock_key (self) -> None:
        """
        Brief:
            Read one timelock and print the derived key. Failures are reported
            and the session continues
        """
        timelock = self.ask("Enter timelock (Unix timestamp, decimal or 0x hex): ")
        try:
            derived = derive_key_from_initial_key_and_timelock(self.initial_key, timelock, self.options)
        except KeyDerivationError as e:
            self.report_error("Error deriving key", e)
            return
        self.say()
        self.say(f"Derived key: {derived}")


    def run (self, signature: Optional[str] = None, chain_id: Optional[str] = None) -> int:
        """
        Brief:
            Execute a full session
        Parameters:
            signature (str):    signature hex, prompted for when None
            chain_id (str):     chain id text, prompted for when None
        Returns:
            int:                process exit status
        """
        self.print_banner()
        try:
            if signature is None:
                signature = self.ask("Enter signature (hex, e.g. 0x1234...): ")
            if chain_id is None:
                chain_id = self.ask('Enter numeric chain ID (decimal like "1" or hex like "0x1"): ')
        except EOFError:
            self.report_error("Error", "input closed before a signature and chain ID were given")
            return EXIT_FAILURE

        try:
            self.initial_key = create_initial_key_from_signature(signature, chain_id, self.options)
        except KeyDerivationError as e:
            self.report_error("Error", e)
            return EXIT_FAILURE

        self.say()
        self.say(f"Initial key: {self.initial_key}")

        while True:
            self.say()
            self.say("Options:")
            self.say("  1) Derive key from initial key and timelock")
            self.say("  2) Exit")
            try:
                choice = self.ask("Choose an option (1/2): ")
                if choice == CHOICE_EXIT:
                    break
                elif choice == CHOICE_DERIVE:
                    self.derive_timelock_key()
                else:
                    self.say("Invalid choice. Please enter 1 or 2.")
            except EOFError:
                break

        self.say()
        self.say("Done.")
        return EXIT_OK


def build_parser () -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sigkey",
        description="Derive deterministic keys from a signature, a chain ID and timelocks",
    )
    parser.add_argument("--signature", help="signature hex (prompted for when omitted)")
    parser.add_argument("--chain-id", help="numeric chain ID, decimal or 0x-hex (prompted for when omitted)")
    parser.add_argument("--output-length", type=int, default=DEFAULT_OUTPUT_LENGTH,
                        help="derived key length in bytes (default: %(default)s)")
    parser.add_argument("--chain-id-width", type=int, default=DEFAULT_CHAIN_ID_WIDTH,
                        help="chain ID encoding width in bytes (default: %(default)s)")
    parser.add_argument("--timelock-width", type=int, default=DEFAULT_TIMELOCK_WIDTH,
                        help="timelock encoding width in bytes (default: %(default)s)")
    return parser


def main (argv: Optional[List[str]] = None) -> int:
    """
    Brief:
        Command line entry point
    Parameters:
        argv (List[str]):   arguments without the program name, sys.argv[1:] when None
    Returns:
        int:                exit status for sys.exit
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        options = DerivationOptions(
            output_length=args.output_length,
            chain_id_width=args.chain_id_width,
            timelock_width=args.timelock_width,
        )
    except KeyDerivationError as e:
        parser.error(str(e))

    shell = KeyShell(options=options)
    return shell.run(signature=args.signature, chain_id=args.chain_id)
