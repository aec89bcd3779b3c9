"""Tests for the interactive menu and CLI entry point."""

import io

import pytest

from bank_ledger.cli import BankMenu, build_parser, main
from bank_ledger.identifiers import IdGenerator
from bank_ledger.models import Money
from bank_ledger.service import BankService

pytestmark = pytest.mark.usefixtures("restore_root_logging")


def _run(lines: list[str], *args: str) -> tuple[int, str]:
    stdin = io.StringIO("".join(f"{line}\n" for line in lines))
    stdout = io.StringIO()
    code = main(["--id-strategy", "sequential", *args], stdin=stdin, stdout=stdout)
    return code, stdout.getvalue()


def _menu(service: BankService, lines: list[str], as_json: bool = False) -> str:
    stdin = io.StringIO("".join(f"{line}\n" for line in lines))
    stdout = io.StringIO()
    BankMenu(service, stdin=stdin, stdout=stdout, as_json=as_json).run()
    return stdout.getvalue()


class TestMenuLoop:
    """Tests for menu dispatch."""

    def test_exit(self) -> None:
        code, output = _run(["0"])

        assert code == 0
        assert "========= BANK MENU =========" in output
        assert "9. View All Customers" in output
        assert "GoodBye!" in output

    def test_end_of_input_exits_cleanly(self) -> None:
        code, output = _run([])
        assert code == 0
        assert "GoodBye!" in output

    def test_non_numeric_option(self) -> None:
        _, output = _run(["abc", "0"])
        assert "Please enter correct option no." in output

    @pytest.mark.parametrize("option", ["10", "-3"])
    def test_out_of_range_option(self, option: str) -> None:
        _, output = _run([option, "0"])
        assert "Please choose an option in between 0 to 9" in output

    def test_handle_selection_return_values(self, service: BankService) -> None:
        menu = BankMenu(service, stdin=io.StringIO(), stdout=io.StringIO())
        assert menu.handle_selection(0) is True
        assert menu.handle_selection(42) is False
        assert menu.handle_selection(-1) is False


class TestMenuActions:
    """Tests for each menu option."""

    def test_full_session(self) -> None:
        code, output = _run(
            [
                "1", "Ada Lovelace", "ada@example.com",
                "2", "C-00000001", "checking",
                "2", "C-00000001", "SAVINGS",
                "4", "A-00000001", "100.00", "salary",
                "6", "A-00000001", "A-00000002", "30", "",
                "5", "A-00000002", "5.5", "",
                "7", "A-00000001",
                "8", "A-00000002",
                "3", "C-00000001",
                "9",
                "0",
            ]
        )

        assert code == 0
        assert "Customer created with ID: C-00000001" in output
        assert "Account created with ID: A-00000001" in output
        assert "Account created with ID: A-00000002" in output
        assert "Deposit successful. New balance: 100.00" in output
        assert "A-00000001 balance: 70.00, A-00000002 balance: 30.00" in output
        assert "Withdrawal successful. New balance: 24.50" in output
        assert "Balance of A-00000001: 70.00 (ACTIVE)" in output
        assert "TRANSFER_IN" in output
        assert "WITHDRAWAL" in output
        assert "Ada Lovelace <ada@example.com>  2 accounts" in output

    def test_errors_are_reported_and_loop_continues(self) -> None:
        _, output = _run(
            [
                "4", "A-00000009", "10", "",
                "1", "Ada", "a@x",
                "2", "C-00000001", "CHECKING",
                "5", "A-00000001", "75", "",
                "4", "A-00000001", "-5", "",
                "6", "A-00000001", "A-00000001", "1", "",
                "2", "C-00000404", "CHECKING",
                "0",
            ]
        )

        assert "Error [UNKNOWN_ACCOUNT]" in output
        assert "Error [INSUFFICIENT_FUNDS]" in output
        assert "Error [INVALID_AMOUNT]" in output
        assert "Error [SAME_ACCOUNT]" in output
        assert "Error [UNKNOWN_CUSTOMER]" in output
        assert "GoodBye!" in output

    def test_unknown_account_type(self) -> None:
        _, output = _run(["1", "Ada", "a@x", "2", "C-00000001", "BROKERAGE", "0"])
        assert "Unknown account type: BROKERAGE" in output

    def test_empty_listings(self, service: BankService) -> None:
        customer = service.create_customer("Ada", "a@x")
        output = _menu(service, ["9", "3", customer.customer_id, "0"])
        assert "No accounts found." in output

        output = _menu(BankService(), ["9", "0"])
        assert "No customers yet." in output

    def test_json_listing(self, service: BankService) -> None:
        customer = service.create_customer("Ada", "a@x")
        output = _menu(service, ["9", "0"], as_json=True)

        assert f'"customer_id": "{customer.customer_id}"' in output
        assert '"email": "a@x"' in output

    def test_history_of_frozen_account(self, service: BankService) -> None:
        customer = service.create_customer("Ada", "a@x")
        account = service.open_account(customer.customer_id, "CHECKING")
        service.deposit(account.account_number, "8")
        service.freeze_account(account.account_number)

        output = _menu(service, ["8", account.account_number, "7", account.account_number, "0"])

        assert "DEPOSIT" in output
        assert "(FROZEN)" in output


class TestMain:
    """Tests for the CLI entry point."""

    def test_demo_customers_with_verify(self) -> None:
        code, output = _run(["9", "0"], "--demo-customers", "3", "--seed", "42", "--verify")

        assert code == 0
        assert "C-00000003" in output

    def test_json_flag(self) -> None:
        _, output = _run(["1", "Ada", "a@x", "9", "0"], "--json")
        assert '"customer_id": "C-00000001"' in output

    def test_invalid_demo_count_exits(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _run(["0"], "--demo-customers", "-2")
        assert exc_info.value.code == 2

    def test_parser_defaults(self) -> None:
        args = build_parser().parse_args([])

        assert args.id_strategy == "random"
        assert args.log_level == "WARNING"
        assert args.demo_customers == 0
        assert args.json is False

    def test_random_ids_are_prefixed(self) -> None:
        stdin = io.StringIO("1\nAda\na@x\n0\n")
        stdout = io.StringIO()
        main([], stdin=stdin, stdout=stdout)
        assert "Customer created with ID: C-" in stdout.getvalue()


class TestMenuService:
    """Menu actions leave the service in the expected state."""

    def test_deposit_through_menu(self) -> None:
        service = BankService(ids=IdGenerator(strategy="sequential"))
        customer = service.create_customer("Ada", "a@x")
        account = service.open_account(customer.customer_id, "SAVINGS")

        _menu(service, ["4", account.account_number, "12.34", "cash", "0"])

        assert account.balance == Money.parse("12.34")
        assert account.transactions[-1].description == "cash"
