import json

from typer.testing import CliRunner

from adapters.location_sources import FakeLocationProvider
from cli import main as cli_main
from core.domain.errors import LocationError, LocationErrorKind, ServiceError
from core.domain.models import Address, Coordinates

runner = CliRunner()

TOKYO = Coordinates(latitude=35.6895123, longitude=139.6917)


class DummyGeocoder:
    def __init__(self, result):
        self.result = result

    async def reverse_geocode(self, coordinates, language_tag):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def _patch(monkeypatch, location_result, geocode_result):
    monkeypatch.setenv("GENZAICHI_LOG_LEVEL", "ERROR")
    monkeypatch.setattr(
        cli_main,
        "build_location_provider",
        lambda settings, prompter=None: FakeLocationProvider(location_result, prompter=prompter),
    )
    monkeypatch.setattr(cli_main, "NominatimGeocodingClient", lambda settings: DummyGeocoder(geocode_result))


def test_locate_json_success(monkeypatch, tmp_path):
    _patch(monkeypatch, TOKYO, Address(prefecture="東京都", town="渋谷区"))
    output = tmp_path / "out" / "state.json"

    result = runner.invoke(cli_main.app, ["locate", "--json", "--yes", "--output", str(output)])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["status"] == "success"
    assert payload["formatted_address"] == "東京都 渋谷区"
    assert payload["latitude_text"] == "35.689512"
    assert json.loads(output.read_text(encoding="utf-8")) == payload


def test_locate_json_with_interactive_permission(monkeypatch):
    _patch(monkeypatch, TOKYO, Address(prefecture="東京都"))

    result = runner.invoke(cli_main.app, ["locate", "--json"], input="y\n")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["status"] == "success"
    assert payload["formatted_address"] == "東京都"
    assert "現在地の取得を許可しますか？" not in result.stdout


def test_locate_address_failure_exit_code(monkeypatch):
    _patch(monkeypatch, TOKYO, ServiceError(500))

    result = runner.invoke(cli_main.app, ["locate", "--json", "--yes"])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["status"] == "error"
    assert payload["error_message"] == "住所情報の取得でエラーが発生しました。"
    assert payload["coordinates"]["latitude"] == TOKYO.latitude
    assert payload["address"] is None


def test_locate_retry_loop(monkeypatch):
    _patch(
        monkeypatch,
        [LocationError(LocationErrorKind.TIMEOUT), TOKYO],
        Address(prefecture="東京都"),
    )

    # Deny retry after the second attempt; the first answer retries.
    result = runner.invoke(cli_main.app, ["locate", "--yes"], input="y\nn\n")

    assert result.exit_code == 0, result.output
    assert "位置情報の取得がタイムアウトしました。" in result.output
    assert "東京都" in result.output
    assert "35.689512" in result.output


def test_locate_permission_prompt_denied(monkeypatch):
    _patch(monkeypatch, TOKYO, Address())

    result = runner.invoke(cli_main.app, ["locate", "--once"], input="n\n")

    assert result.exit_code == 1
    assert "位置情報の取得が許可されませんでした。" in result.output


def test_doctor_provider_check_does_not_acquire():
    from cli.doctor import _check_provider
    from core.config import AppSettings

    ok, detail = _check_provider(
        AppSettings(location_provider="static", static_latitude=None, static_longitude=None)
    )
    assert not ok
    assert "static" in detail

    ok, detail = _check_provider(AppSettings(location_provider="ip", ip_location_url="https://ip.test/"))
    assert ok
    assert detail == "IpLocationProvider"


def test_doctor_setup_location_rejects_out_of_range(monkeypatch, tmp_path):
    from core import config

    monkeypatch.setattr(config, "get_user_config_dir", lambda: tmp_path)
    result = runner.invoke(cli_main.app, ["doctor", "setup-location"], input="95\n10\n")
    assert result.exit_code != 0
    assert not (tmp_path / ".env").exists()

    result = runner.invoke(cli_main.app, ["doctor", "setup-location"], input="35.5\n139.25\n")
    assert result.exit_code == 0, result.output
    text = (tmp_path / ".env").read_text(encoding="utf-8")
    assert "GENZAICHI_LOCATION_PROVIDER=static" in text
    assert "GENZAICHI_STATIC_LATITUDE=35.5" in text
