"""End-to-end tests for the complete transfer list workflow."""

import subprocess
import sys
import tempfile
from pathlib import Path

from transferlist.generator import TransfersListGenerator

INVOICE_HEADER = (
    "No\tCompany name (Invoice)\tCompany name (White list)\tInvoice number\tNIP\t"
    "Bank account number\tAmount\tPayment deadline\tIs the counterparty on the white list?\t"
    "Status\tP&S Unit\tCost centre\tDescription\tRegular payment\t\t\n"
)

INVOICE_ROWS = (
    "1\tABC Company Ltd\tABC COMPANY LTD\tINV/2023/001\t1234567890\t"
    "11 2222 3333 4444 5555 6666 7777\tPLN 123,80\t2023-10-01\tYes\tPENDING\tIT\tCC1\tOffice supplies\tNo\t\t\n"
    "2\tXYZ Services\tXYZ SERVICES\tINV/2023/002\t0987654321\t"
    "22 3333 4444 5555 6666 7777 8888\t4567,09 PLN\t2023-10-02\tYes\tTO PAY\tIT\tCC2\tConsulting\tNo\t\t\n"
    "3\tRejected Corp\tREJECTED CORP\tINV/2023/003\t1111111111\t"
    "33 4444 5555 6666 7777 8888 9999\tPLN 99,00\t2023-10-03\tNo\tREJECTED\tIT\tCC3\tDisputed\tNo\t\t\n"
)

REIMBURSEMENT_ROWS = (
    "4\tJohn Smith\t\t\t\t"
    '"Reimbursement to the employee John Smith\n12 3456 7890 1234 5678 9012 3456"'
    "\tPLN 700.00\t2023-10-04\t\tPENDING\tHR\tCC4\tHotel in Warsaw\tNo\t\t\n"
    "5\tJane Doe\t\t\t\t"
    "Expenses reimbursement to the employee Jane Doe 34 5678 9012 3456 7890 1234 5678"
    "\tPLN 350,50\t2023-10-05\t\tTO PAY\tHR\tCC4\tTrain tickets\tNo\t\t\n"
)

TRIP_TABLE = (
    "Name\tBank account number\tAmount\tTrip number\tStatus\n"
    "John Smith\t12 3456 7890 1234 5678 9012 3456\tPLN 1 500,00\tTRIP/2023/001\tPENDING\n"
    "Jane Doe\t34 5678 9012 3456 7890 1234 5678\t2300,50 PLN\tTRIP/2023/002\tTO PAY\n"
    "Bob Brown\t56 7890 1234 5678 9012 3456 7890\tPLN 80,00\tTRIP/2023/003\tREJECTED\n"
)


class TestEndToEnd:
    """End-to-end tests using real files and CLI."""

    def test_e2e_invoices_and_reimbursements(self):
        """Test a combined invoice and reimbursement table."""
        generator = TransfersListGenerator()

        output = generator.generate_from_strings(
            INVOICE_HEADER + INVOICE_ROWS + REIMBURSEMENT_ROWS,
        )

        assert output.splitlines() == [
            ";11 2222 3333 4444 5555 6666 7777;ABC Company Ltd;;;;INV/2023/001;123.80",
            ";22 3333 4444 5555 6666 7777 8888;XYZ Services;;;;INV/2023/002;4567.09",
            ";12345678901234567890123456;John Smith;;;;Reimbursement - Hotel in Warsaw;700.00",
            ";34567890123456789012345678;Jane Doe;;;;Reimbursement - Train tickets;350.50",
        ]

    def test_e2e_with_business_trips(self):
        """Test that trips follow the invoices in the output."""
        generator = TransfersListGenerator()

        result = generator.generate_bank_transfer_data(
            INVOICE_HEADER + INVOICE_ROWS,
            TRIP_TABLE,
        )

        assert [r.title for r in result] == [
            "INV/2023/001",
            "INV/2023/002",
            "TRIP/2023/001",
            "TRIP/2023/002",
        ]
        assert [r.amount for r in result][2:] == ["1500.00", "2300.50"]
        assert [(s.source, s.row_number) for s in result.skipped] == [
            ("invoice", 3),
            ("trip", 3),
        ]

        summary = generator.format_summary(result)
        assert "Transfers: 4" in summary
        assert "Total amount: 8491.39 PLN" in summary

    def test_e2e_cli(self):
        """Test running the CLI as a module."""
        with tempfile.TemporaryDirectory() as tmpdir:
            invoice_file = Path(tmpdir) / "invoices.csv"
            trip_file = Path(tmpdir) / "trips.csv"
            output_file = Path(tmpdir) / "transfers.ebgz"
            invoice_file.write_text(INVOICE_HEADER + INVOICE_ROWS, encoding="utf-8")
            trip_file.write_text(TRIP_TABLE, encoding="utf-8")

            completed = subprocess.run(
                [
                    sys.executable,
                    "-m",
                    "transferlist.cli",
                    str(invoice_file),
                    str(trip_file),
                    "--output",
                    str(output_file),
                ],
                capture_output=True,
                text=True,
                check=False,
                cwd=Path(__file__).resolve().parent.parent / "src",
            )

            assert completed.returncode == 0, completed.stderr
            lines = output_file.read_text(encoding="utf-8").splitlines()
            assert len(lines) == 4
            assert lines[3].startswith(";34 5678 9012 3456 7890 1234 5678;Jane Doe;")
