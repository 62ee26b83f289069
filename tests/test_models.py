import pytest
from pydantic import ValidationError

from core.domain.errors import LocationErrorKind
from core.domain.messages import GENERIC_LOCATION_ERROR, location_error_message
from core.domain.models import (
    Address,
    Coordinates,
    FlowState,
    FlowStatus,
    LocationRequestOptions,
    format_address,
    format_degrees,
)


def test_formatted_address_skips_empty_segments():
    address = Address(prefecture="東京都", city="", town="渋谷区")
    assert address.formatted() == "東京都 渋谷区"


def test_formatted_address_empty_or_absent():
    assert format_address(Address()) == ""
    assert format_address(None) == ""


def test_format_degrees_six_places():
    assert format_degrees(35.6895123) == "35.689512"
    assert format_degrees(139.6917) == "139.691700"
    assert format_degrees(-0.0000005) == "-0.000001"
    assert format_degrees(0.0000005) == "0.000001"


def test_coordinates_range_is_validated():
    with pytest.raises(ValidationError):
        Coordinates(latitude=91.0, longitude=0.0)
    with pytest.raises(ValidationError):
        Coordinates(latitude=0.0, longitude=-180.5)


def test_coordinates_are_immutable():
    coords = Coordinates(latitude=35.0, longitude=139.0)
    with pytest.raises(ValidationError):
        coords.latitude = 1.0


def test_location_options_defaults():
    options = LocationRequestOptions()
    assert options.high_accuracy is True
    assert options.timeout_ms == 10_000
    assert options.force_fresh is True
    assert options.timeout_seconds == 10.0
    with pytest.raises(ValidationError):
        LocationRequestOptions(timeout_ms=0)


def test_flow_state_derived_values():
    state = FlowState(
        status=FlowStatus.SUCCESS,
        coordinates=Coordinates(latitude=35.6895123, longitude=139.6917),
        address=Address(prefecture="東京都", town="渋谷区"),
    )
    assert state.status_text == "取得が完了しました。"
    assert state.latitude_text == "35.689512"
    assert state.longitude_text == "139.691700"
    assert state.formatted_address == "東京都 渋谷区"

    dumped = state.model_dump(mode="json")
    assert dumped["formatted_address"] == "東京都 渋谷区"
    assert dumped["status"] == "success"


def test_flow_state_invariants():
    coords = Coordinates(latitude=1.0, longitude=2.0)
    with pytest.raises(ValidationError):
        FlowState(status=FlowStatus.SUCCESS, coordinates=coords)
    with pytest.raises(ValidationError):
        FlowState(status=FlowStatus.ERROR)
    with pytest.raises(ValidationError):
        FlowState(status=FlowStatus.ACQUIRING_ADDRESS)
    with pytest.raises(ValidationError):
        FlowState(status=FlowStatus.ACQUIRING_LOCATION, coordinates=coords)

    partial = FlowState(status=FlowStatus.ERROR, coordinates=coords, error_message="x")
    assert partial.address is None
    assert partial.formatted_address == ""


def test_location_error_messages_are_distinct():
    kinds = [
        LocationErrorKind.PERMISSION_DENIED,
        LocationErrorKind.UNAVAILABLE,
        LocationErrorKind.TIMEOUT,
        LocationErrorKind.UNSUPPORTED,
    ]
    messages = {location_error_message(kind) for kind in kinds}
    assert len(messages) == 4
    assert GENERIC_LOCATION_ERROR not in messages
    assert location_error_message(LocationErrorKind.UNKNOWN) == GENERIC_LOCATION_ERROR
    assert location_error_message(None) == GENERIC_LOCATION_ERROR
