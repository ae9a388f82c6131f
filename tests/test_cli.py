"""Unit tests for cli.py."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from transferlist.cli import main

INVOICE_TABLE = (
    "Company name (Invoice)\tBank account number\tDescription\tInvoice number\tAmount\tStatus\n"
    "ABC Company Ltd\t11 2222 3333 4444 5555 6666 7777\tOffice supplies\tINV/2023/001\tPLN 123,80\tPENDING\n"
    "XYZ Services\t22 3333 4444 5555 6666 7777 8888\tConsulting\tINV/2023/002\t4567,09 PLN\tREJECTED\n"
)

TRIP_TABLE = (
    "Name;Bank account number;Amount;Trip number;Status\n"
    "John Smith;12 3456 7890 1234 5678 9012 3456;1500,00;TRIP/2023/001;APPROVED\n"
)


class TestCLIMain:
    """Tests for main() function."""

    def test_main_generates_output(self):
        """Test generating a transfer list via CLI."""
        with tempfile.TemporaryDirectory() as tmpdir:
            invoice_file = Path(tmpdir) / "invoices.csv"
            output_file = Path(tmpdir) / "out.ebgz"
            invoice_file.write_text(INVOICE_TABLE, encoding="utf-8")

            with (
                patch(
                    "sys.argv",
                    ["cli.py", str(invoice_file), "--output", str(output_file)],
                ),
                patch("transferlist.cli.logger") as mock_logger,
            ):
                main()

                mock_logger.info.assert_called()

            assert output_file.read_text(encoding="utf-8") == (
                ";11 2222 3333 4444 5555 6666 7777;ABC Company Ltd;;;;INV/2023/001;123.80\n"
            )

    def test_main_with_config_and_trips(self):
        """Test that the JSON config selects the trip status vocabulary."""
        with tempfile.TemporaryDirectory() as tmpdir:
            invoice_file = Path(tmpdir) / "invoices.csv"
            trip_file = Path(tmpdir) / "trips.csv"
            config_file = Path(tmpdir) / "config.json"
            output_file = Path(tmpdir) / "out.ebgz"
            invoice_file.write_text(INVOICE_TABLE, encoding="utf-8")
            trip_file.write_text(TRIP_TABLE, encoding="utf-8")
            with open(config_file, "w", encoding="utf-8") as f:
                json.dump({"trip_statuses": ["APPROVED"]}, f)

            with patch(
                "sys.argv",
                [
                    "cli.py",
                    "--config",
                    str(config_file),
                    str(invoice_file),
                    str(trip_file),
                    "-o",
                    str(output_file),
                    "--summary",
                ],
            ):
                main()

            lines = output_file.read_text(encoding="utf-8").splitlines()
            assert len(lines) == 2
            assert "TRIP/2023/001" in lines[1]
            assert lines[1].endswith(";1500.00")

    def test_main_summary_logged(self):
        """Test that --summary logs totals and skipped rows."""
        with tempfile.TemporaryDirectory() as tmpdir:
            invoice_file = Path(tmpdir) / "invoices.csv"
            output_file = Path(tmpdir) / "out.ebgz"
            invoice_file.write_text(INVOICE_TABLE, encoding="utf-8")

            with (
                patch(
                    "sys.argv",
                    ["cli.py", str(invoice_file), "-o", str(output_file), "--summary"],
                ),
                patch("transferlist.cli.logger") as mock_logger,
            ):
                main()

            messages = [call.args[0] for call in mock_logger.info.call_args_list]
            summary = next(m for m in messages if "Transfer List Summary" in m)
            assert "Transfers: 1" in summary
            assert "Skipped rows: 1" in summary

    def test_main_missing_invoice_file(self):
        """Test that a missing input file exits with an error."""
        with (
            patch("sys.argv", ["cli.py", "/nonexistent/invoices.csv"]),
            patch("transferlist.cli.logger") as mock_logger,
            pytest.raises(SystemExit) as exc_info,
        ):
            main()

        assert exc_info.value.code == 1
        mock_logger.error.assert_called_once()

    def test_main_empty_invoice_file(self):
        """Test that an empty invoice file is reported as an input error."""
        with tempfile.TemporaryDirectory() as tmpdir:
            invoice_file = Path(tmpdir) / "invoices.csv"
            invoice_file.write_text("", encoding="utf-8")

            with (
                patch(
                    "sys.argv",
                    ["cli.py", str(invoice_file), "-o", str(Path(tmpdir) / "out")],
                ),
                patch("transferlist.cli.logger") as mock_logger,
                pytest.raises(SystemExit) as exc_info,
            ):
                main()

            assert exc_info.value.code == 1
            assert "Invoice data" in mock_logger.error.call_args.args[0]

    def test_main_requires_invoice_file(self):
        with patch("sys.argv", ["cli.py"]), pytest.raises(SystemExit):
            main()
