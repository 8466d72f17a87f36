"""Tests for the demo tool server functions."""

from datetime import datetime

from mcp_demo.config import ServerConfig
from mcp_demo.server import add, create_app, echo, format_full_datetime, get_date_time


def test_echo_prefixes_hello():
    assert echo("world") == "hello world"
    assert echo("") == "hello "


def test_add_integral_sum_is_int():
    result = add(42, 17)
    assert result == 59
    assert isinstance(result, int)


def test_add_fractional_sum_is_float():
    assert add(0.5, 0.25) == 0.75
    assert add(-1.5, 1) == -0.5


def test_full_datetime_format():
    assert format_full_datetime(datetime(2026, 10, 16, 15, 4, 5)) == "Friday, October 16, 2026 3:04:05 PM"
    assert format_full_datetime(datetime(2026, 1, 1, 0, 5, 9)) == "Thursday, January 1, 2026 12:05:09 AM"
    assert format_full_datetime(datetime(2026, 1, 1, 12, 0, 0)) == "Thursday, January 1, 2026 12:00:00 PM"


def test_get_date_time_is_current_year():
    assert str(datetime.now().year) in get_date_time()


def test_app_uses_configured_name():
    app = create_app(ServerConfig(name="custom-server"))
    assert app.name == "custom-server"
