#!/usr/bin/env python3
"""Interactive text menu over the bank ledger.

Usage::

    bank-ledger
    bank-ledger --demo-customers 5 --seed 42 --id-strategy sequential
    python -m bank_ledger --json --log-level INFO --log-format json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, TextIO

from bank_ledger import __version__
from bank_ledger.config import LOG_FORMATS, BankConfig
from bank_ledger.exceptions import ConfigurationError, LedgerError, LedgerIntegrityError
from bank_ledger.generators import DemoLedgerGenerator
from bank_ledger.identifiers import STRATEGIES
from bank_ledger.logging import get_logger, setup_logging
from bank_ledger.models import AccountType
from bank_ledger.render import (
    format_account,
    format_customer,
    format_transaction,
    to_dict,
)
from bank_ledger.service import BankService

logger = get_logger(__name__)

MENU = """\
========= BANK MENU =========
0. Exit
1. Create Customer
2. Open Account
3. List Customer Accounts
4. Deposit
5. Withdraw
6. Transfer Between Accounts
7. View Account Balance
8. View Transaction History
9. View All Customers"""

MAX_OPTION = 9


class BankMenu:
    """Menu loop translating console input into ``BankService`` calls.

    Parameters
    ----------
    service : BankService
        Ledger to operate on.
    stdin : TextIO | None
        Input stream (default ``sys.stdin``).
    stdout : TextIO | None
        Output stream (default ``sys.stdout``).
    as_json : bool
        Render listings as JSON instead of text.
    """

    def __init__(
        self,
        service: BankService,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        as_json: bool = False,
    ) -> None:
        self.service = service
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.as_json = as_json
        self._actions: dict[int, Callable[[], None]] = {
            1: self.create_customer,
            2: self.open_account,
            3: self.list_customer_accounts,
            4: self.deposit,
            5: self.withdraw,
            6: self.transfer,
            7: self.view_balance,
            8: self.view_history,
            9: self.view_all_customers,
        }

    def run(self) -> int:
        """Run until Exit or end of input; returns the process exit code."""
        self._print(MENU)
        try:
            while True:
                self._print("\nSelect option: ", end="")
                if self.handle_selection(_read_int(self._readline())):
                    break
        except EOFError:
            self._print("")
        self._print("GoodBye!")
        return 0

    def handle_selection(self, choice: int) -> bool:
        """Dispatch one menu choice; returns True when the loop should stop."""
        if choice == -1:
            self._print("Please enter correct option no.")
            return False
        if choice < 0 or choice > MAX_OPTION:
            self._print(f"Please choose an option in between 0 to {MAX_OPTION}")
            return False
        if choice == 0:
            return True
        try:
            self._actions[choice]()
        except LedgerError as e:
            self._print(f"Error [{e.kind.value}]: {e}")
        return False

    # Actions

    def create_customer(self) -> None:
        name = self._ask("Enter name: ")
        email = self._ask("Enter email: ")
        customer = self.service.create_customer(name, email)
        self._print(f"Customer created with ID: {customer.customer_id}")

    def open_account(self) -> None:
        customer_id = self._ask("Enter customer ID: ")
        choices = ", ".join(t.value for t in AccountType)
        raw_type = self._ask(f"Select account type ({choices}): ").upper()
        try:
            account_type = AccountType(raw_type)
        except ValueError:
            self._print(f"Unknown account type: {raw_type or '<empty>'}")
            return
        account = self.service.open_account(customer_id, account_type)
        self._print(f"Account created with ID: {account.account_number}")

    def list_customer_accounts(self) -> None:
        customer_id = self._ask("Enter customer ID: ")
        accounts = self.service.list_accounts_of(customer_id)
        self._emit(accounts, format_account, empty="No accounts found.")

    def deposit(self) -> None:
        account_id = self._ask("Enter account ID: ")
        amount = self._ask("Enter amount: ")
        note = self._ask("Enter note (optional): ")
        balance = self.service.deposit(account_id, amount, note)
        self._print(f"Deposit successful. New balance: {balance}")

    def withdraw(self) -> None:
        account_id = self._ask("Enter account ID: ")
        amount = self._ask("Enter amount: ")
        note = self._ask("Enter note (optional): ")
        balance = self.service.withdraw(account_id, amount, note)
        self._print(f"Withdrawal successful. New balance: {balance}")

    def transfer(self) -> None:
        from_id = self._ask("Enter source account ID: ")
        to_id = self._ask("Enter destination account ID: ")
        amount = self._ask("Enter amount: ")
        note = self._ask("Enter note (optional): ")
        from_balance, to_balance = self.service.transfer(from_id, to_id, amount, note)
        self._print(
            f"Transfer successful. {from_id} balance: {from_balance}, "
            f"{to_id} balance: {to_balance}"
        )

    def view_balance(self) -> None:
        account_id = self._ask("Enter account ID: ")
        account = self.service.get_account(account_id)
        if self.as_json:
            self._print(json.dumps(to_dict(account), ensure_ascii=False))
        else:
            self._print(
                f"Balance of {account.account_number}: {account.balance} ({account.status.value})"
            )

    def view_history(self) -> None:
        account_id = self._ask("Enter account ID: ")
        history = self.service.view_history(account_id)
        self._emit(history, format_transaction, empty="No transactions yet.")

    def view_all_customers(self) -> None:
        customers = self.service.list_customers()
        self._emit(customers, format_customer, empty="No customers yet.")

    # I/O helpers

    def _emit(self, records: tuple, formatter: Callable[[Any], str], empty: str) -> None:
        if self.as_json:
            self._print(json.dumps([to_dict(r) for r in records], indent=2, ensure_ascii=False))
            return
        if not records:
            self._print(empty)
            return
        for i, record in enumerate(records, start=1):
            self._print(f"  {i}. {formatter(record)}")

    def _ask(self, prompt: str) -> str:
        self._print(prompt, end="")
        return self._readline().strip()

    def _readline(self) -> str:
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line

    def _print(self, text: str, end: str = "\n") -> None:
        print(text, end=end, file=self.stdout, flush=True)


def _read_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return -1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bank-ledger",
        description="In-memory banking ledger with an interactive menu",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=LOG_FORMATS,
        default="standard",
        help="Log line format (default: standard)",
    )
    parser.add_argument(
        "--id-strategy",
        type=str,
        choices=STRATEGIES,
        default="random",
        help="Identifier generation strategy (default: random)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Render listings as JSON",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check every ledger invariant before exiting",
    )

    demo_group = parser.add_argument_group("demo data")
    demo_group.add_argument(
        "--demo-customers",
        type=int,
        default=0,
        help="Number of synthetic customers to pre-load (default: 0)",
    )
    demo_group.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible demo data",
    )
    demo_group.add_argument(
        "--locale",
        type=str,
        default="en_US",
        help="Faker locale for demo names and emails (default: en_US)",
    )
    return parser


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Main entry point; ``stdin``/``stdout`` default to the process streams."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = BankConfig.from_args(args)
    except ConfigurationError as e:
        parser.error(str(e))

    setup_logging(level=config.log_level, format_type=config.log_format)
    service = BankService.from_config(config.ledger)

    if config.demo.num_customers:
        generator = DemoLedgerGenerator(
            seed=config.demo.seed,
            locale=config.demo.locale,
            max_accounts_per_customer=config.demo.max_accounts_per_customer,
        )
        generator.populate(service, config.demo.num_customers)

    exit_code = BankMenu(service, stdin=stdin, stdout=stdout, as_json=config.output.json).run()

    if config.verify:
        try:
            service.verify_integrity()
        except LedgerIntegrityError as e:
            logger.error("Ledger integrity check failed: %s", e)
            return 1
        logger.info("Ledger integrity verified", extra={"extra": service.summary()})

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
