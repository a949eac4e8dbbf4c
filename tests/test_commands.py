"""Tests for the list and report commands against fake services."""

import csv
import io
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from adsense_cli import accounts, ad_clients, ad_units, app, reports
from adsense_cli.sheets import SpreadsheetWriter
from tests.fakes import FakeMethod, FakeSheetsService, make_adsense_service, make_http_error

runner = CliRunner()

REPORT_RESPONSE = {
    "headers": [{"name": "DATE"}, {"name": "CLICKS"}, {"name": "ESTIMATED_EARNINGS"}],
    "rows": [
        {"cells": [{"value": "2024-03-01"}, {"value": "4"}, {"value": "1.20"}]},
        {"cells": [{"value": "2024-03-02"}, {"value": "7"}, {"value": "2.05"}]},
    ],
}


def parse_csv(output: str) -> list[dict[str, str]]:
    return list(csv.DictReader(io.StringIO(output)))


class TestAccounts:
    def test_lists_every_page(self, use_service) -> None:
        method = FakeMethod(
            {
                "accounts": [{"name": "accounts/pub-1", "displayName": "First", "state": "READY"}],
                "nextPageToken": "page-2",
            },
            {"accounts": [{"name": "accounts/pub-2", "displayName": "Second", "timeZone": {"id": "UTC"}}]},
        )
        use_service(accounts, make_adsense_service(accounts_list=method))

        result = runner.invoke(app, ["accounts", "list", "--format", "csv"])

        assert result.exit_code == 0
        rows = parse_csv(result.stdout)
        assert [r["name"] for r in rows] == ["accounts/pub-1", "accounts/pub-2"]
        assert rows[1]["time_zone"] == "UTC"
        assert method.calls == [{"pageSize": 50}, {"pageSize": 50, "pageToken": "page-2"}]

    def test_page_size_option(self, use_service) -> None:
        method = FakeMethod({"accounts": [{"name": "accounts/pub-1"}]})
        use_service(accounts, make_adsense_service(accounts_list=method))

        result = runner.invoke(app, ["accounts", "list", "--page-size", "5", "--format", "csv"])

        assert result.exit_code == 0
        assert method.calls == [{"pageSize": 5}]

    def test_warns_when_empty(self, use_service) -> None:
        use_service(accounts, make_adsense_service(accounts_list=FakeMethod({})))

        result = runner.invoke(app, ["accounts", "list"])

        assert result.exit_code == 0
        assert "No accounts found" in result.stdout

    def test_api_error_exits(self, use_service) -> None:
        use_service(accounts, make_adsense_service(accounts_list=FakeMethod(make_http_error())))

        result = runner.invoke(app, ["accounts", "list"])

        assert result.exit_code == 1


class TestAdClients:
    def test_lists_ad_clients_for_account(self, use_service) -> None:
        method = FakeMethod(
            {
                "adClients": [
                    {
                        "name": "accounts/pub-1/adclients/ca-pub-1",
                        "productCode": "AFC",
                        "reportingDimensionId": "ca-pub-1",
                        "state": "READY",
                    }
                ]
            }
        )
        use_service(ad_clients, make_adsense_service(adclients_list=method))

        result = runner.invoke(app, ["ad-clients", "list", "pub-1", "--format", "csv"])

        assert result.exit_code == 0
        rows = parse_csv(result.stdout)
        assert rows[0]["reporting_dimension_id"] == "ca-pub-1"
        assert rows[0]["product_code"] == "AFC"
        assert method.calls[0]["parent"] == "accounts/pub-1"

    def test_warns_when_empty(self, use_service) -> None:
        use_service(ad_clients, make_adsense_service())

        result = runner.invoke(app, ["ad-clients", "list", "accounts/pub-1"])

        assert result.exit_code == 0
        assert "No ad clients found" in result.stdout


class TestAdUnits:
    def test_lists_ad_units_across_empty_page(self, use_service) -> None:
        parent = "accounts/pub-1/adclients/ca-pub-1"
        method = FakeMethod(
            {"nextPageToken": "t"},
            {
                "adUnits": [
                    {
                        "name": f"{parent}/adunits/42",
                        "displayName": "Sidebar",
                        "state": "ACTIVE",
                        "contentAdsSettings": {"type": "DISPLAY"},
                    }
                ]
            },
        )
        use_service(ad_units, make_adsense_service(adunits_list=method))

        result = runner.invoke(app, ["ad-units", "list", parent, "--format", "csv"])

        assert result.exit_code == 0
        rows = parse_csv(result.stdout)
        assert rows == [
            {"name": f"{parent}/adunits/42", "display_name": "Sidebar", "state": "ACTIVE", "type": "DISPLAY"}
        ]
        assert len(method.calls) == 2

    def test_api_error_exits(self, use_service) -> None:
        use_service(ad_units, make_adsense_service(adunits_list=FakeMethod(make_http_error(404, "Not found"))))

        result = runner.invoke(app, ["ad-units", "list", "accounts/pub-1/adclients/missing"])

        assert result.exit_code == 1


class TestReports:
    @pytest.fixture
    def sheets(self, monkeypatch: pytest.MonkeyPatch) -> FakeSheetsService:
        service = FakeSheetsService()
        monkeypatch.setattr(reports, "get_sheets_writer", lambda _settings: SpreadsheetWriter(service))
        return service

    def test_sends_trailing_week_query(self, use_service, sheets: FakeSheetsService) -> None:
        generate = FakeMethod(REPORT_RESPONSE)
        use_service(reports, make_adsense_service(reports_generate=generate))

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1", "--end", "2024-03-08"])

        assert result.exit_code == 0
        call = generate.calls[0]
        assert call["account"] == "accounts/pub-1"
        assert call["dateRange"] == "CUSTOM"
        assert call["filters"] == ["AD_CLIENT_ID==ca-pub-1"]
        assert call["dimensions"] == ["DATE"]
        assert call["orderBy"] == ["+DATE"]
        assert (call["startDate_year"], call["startDate_month"], call["startDate_day"]) == (2024, 3, 1)
        assert (call["endDate_year"], call["endDate_month"], call["endDate_day"]) == (2024, 3, 8)

    def test_creates_spreadsheet_and_writes_table(self, use_service, sheets: FakeSheetsService) -> None:
        use_service(reports, make_adsense_service(reports_generate=FakeMethod(REPORT_RESPONSE)))

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1", "--title", "Weekly"])

        assert result.exit_code == 0
        assert sheets.create.calls[0]["body"] == {"properties": {"title": "Weekly"}}
        update = sheets.update.calls[0]
        assert update["spreadsheetId"] == "sheet-123"
        assert update["range"] == "A1"
        assert update["body"]["values"] == [
            ["DATE", "CLICKS", "ESTIMATED_EARNINGS"],
            ["2024-03-01", "4", "1.20"],
            ["2024-03-02", "7", "2.05"],
        ]

    def test_writes_into_existing_spreadsheet(self, use_service, sheets: FakeSheetsService) -> None:
        use_service(reports, make_adsense_service(reports_generate=FakeMethod(REPORT_RESPONSE)))

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1", "--spreadsheet", "existing"])

        assert result.exit_code == 0
        assert sheets.create.calls == []
        assert sheets.update.calls[0]["spreadsheetId"] == "existing"

    def test_empty_report_writes_nothing(self, use_service, sheets: FakeSheetsService) -> None:
        use_service(reports, make_adsense_service(reports_generate=FakeMethod({"headers": [{"name": "DATE"}]})))

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1"])

        assert result.exit_code == 0
        assert "No rows returned" in result.stdout
        assert sheets.create.calls == []
        assert sheets.update.calls == []

    def test_saves_csv(self, use_service, tmp_path: Path) -> None:
        use_service(reports, make_adsense_service(reports_generate=FakeMethod(REPORT_RESPONSE)))
        output = tmp_path / "report.csv"

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1", "-o", str(output)])

        assert result.exit_code == 0
        rows = list(csv.reader(output.open()))
        assert rows[0] == ["DATE", "CLICKS", "ESTIMATED_EARNINGS"]
        assert rows[2] == ["2024-03-02", "7", "2.05"]

    def test_saves_json(self, use_service, tmp_path: Path) -> None:
        use_service(reports, make_adsense_service(reports_generate=FakeMethod(REPORT_RESPONSE)))
        output = tmp_path / "report.json"

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1", "-o", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text())[0] == {
            "DATE": "2024-03-01",
            "CLICKS": "4",
            "ESTIMATED_EARNINGS": "1.20",
        }

    def test_rejects_unknown_file_format_before_request(self, use_service, tmp_path: Path) -> None:
        generate = FakeMethod(REPORT_RESPONSE)
        use_service(reports, make_adsense_service(reports_generate=generate))

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1", "-o", str(tmp_path / "r.xlsx")])

        assert result.exit_code == 1
        assert generate.calls == []
        assert not (tmp_path / "r.xlsx").exists()

    def test_rejects_output_with_print(self, use_service, tmp_path: Path) -> None:
        generate = FakeMethod(REPORT_RESPONSE)
        use_service(reports, make_adsense_service(reports_generate=generate))
        output = tmp_path / "report.csv"

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1", "-o", str(output), "--print"])

        assert result.exit_code == 1
        assert generate.calls == []
        assert not output.exists()

    def test_prints_table(self, use_service, sheets: FakeSheetsService) -> None:
        use_service(reports, make_adsense_service(reports_generate=FakeMethod(REPORT_RESPONSE)))

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1", "--print"])

        assert result.exit_code == 0
        assert "ESTIMATED_EARNINGS" in result.stdout
        assert "2024-03-01" in result.stdout
        assert "2.05" in result.stdout
        assert sheets.create.calls == []
        assert sheets.update.calls == []

    def test_uses_configured_spreadsheet(self, use_service, settings, sheets: FakeSheetsService) -> None:
        settings.spreadsheet_id = "configured"
        use_service(reports, make_adsense_service(reports_generate=FakeMethod(REPORT_RESPONSE)))

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1"])

        assert result.exit_code == 0
        assert sheets.create.calls == []
        assert sheets.update.calls[0]["spreadsheetId"] == "configured"

    def test_invalid_end_date(self) -> None:
        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1", "--end", "08/03/2024"])

        assert result.exit_code != 0

    def test_api_error_exits(self, use_service, sheets: FakeSheetsService) -> None:
        use_service(reports, make_adsense_service(reports_generate=FakeMethod(make_http_error(400, "Bad filter"))))

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1"])

        assert result.exit_code == 1
        assert sheets.update.calls == []

    def test_api_error_shows_status_and_message(self, use_service) -> None:
        use_service(reports, make_adsense_service(reports_generate=FakeMethod(make_http_error(400, "Bad filter"))))

        result = runner.invoke(app, ["reports", "generate", "pub-1", "ca-pub-1"])

        assert result.exit_code == 1
        assert "API Error" in result.output
        assert "Bad filter" in result.output
        assert "Status code: 400" in result.output
