"""User-facing text for the single supported display language.

This module centralizes every string the presentation layer shows. Keeping
it in the domain layer lets the controller, the CLI and the JSON exporter
share one source of truth without importing each other.
"""

from __future__ import annotations

from core.domain.errors import LocationErrorKind

DISPLAY_LANGUAGE = "ja"
"""Language tag sent to the geocoding service (`accept-language`)."""

STATUS_TEXTS: dict[str, str] = {
    "idle": "",
    "acquiring_location": "位置情報を取得中です…",
    "acquiring_address": "住所情報を取得中です…",
    "success": "取得が完了しました。",
    "error": "",
}

LOCATION_ERROR_MESSAGES: dict[LocationErrorKind, str] = {
    LocationErrorKind.PERMISSION_DENIED: "位置情報の取得が許可されませんでした。",
    LocationErrorKind.UNAVAILABLE: "位置情報を取得できませんでした。",
    LocationErrorKind.TIMEOUT: "位置情報の取得がタイムアウトしました。",
    LocationErrorKind.UNSUPPORTED: "この環境は位置情報取得に対応していません。",
}

GENERIC_LOCATION_ERROR = "位置情報の取得中に予期せぬエラーが発生しました。"
ADDRESS_FETCH_ERROR = "住所情報の取得でエラーが発生しました。"

LATITUDE_LABEL = "緯度"
LONGITUDE_LABEL = "経度"
ADDRESS_LABEL = "住所推定"
SECTION_TITLE = "現在地情報"
RETRY_PROMPT = "再取得する？"
PERMISSION_PROMPT = "現在地の取得を許可しますか？"


def status_text_for(status: str) -> str:
    """Return the progress text for a `FlowStatus` value."""

    return STATUS_TEXTS.get(status, "")


def location_error_message(kind: LocationErrorKind | None) -> str:
    """Map a failure kind to its message; unmapped kinds get the generic one."""

    if kind is None:
        return GENERIC_LOCATION_ERROR
    return LOCATION_ERROR_MESSAGES.get(kind, GENERIC_LOCATION_ERROR)
