from datetime import datetime, timedelta, timezone

import pytest

from tonic.logger import (
    BLUE,
    CYAN,
    GREEN,
    MAGENTA,
    RED,
    RESET,
    WHITE,
    YELLOW,
    ColorMode,
    LogFormatterParams,
    LoggerConfig,
    console_color_mode,
    default_log_formatter,
    disable_console_color,
    force_console_color,
    format_duration,
    set_console_color_mode,
)


@pytest.fixture(autouse=True)
def _restore_color_mode():
    set_console_color_mode(ColorMode.AUTO)
    yield
    set_console_color_mode(ColorMode.AUTO)


TIMESTAMP = datetime.fromtimestamp(1544173902, tz=timezone.utc)
LONG = timedelta(milliseconds=9876543210)


def _params(latency, is_term, **extra):
    return LogFormatterParams(
        timestamp=TIMESTAMP,
        status_code=200,
        latency=latency,
        client_ip="20.20.20.20",
        method="GET",
        path="/",
        is_term=is_term,
        **extra,
    )


@pytest.mark.parametrize(
    "latency,is_term,expected",
    [
        (5, False, '[TONIC] 2018/12/07 - 09:11:42 | 200 |            5s |     20.20.20.20 | GET      "/"\n'),
        (LONG, False, '[TONIC] 2018/12/07 - 09:11:42 | 200 |    2743h29m3s |     20.20.20.20 | GET      "/"\n'),
        (5, True, '[TONIC] 2018/12/07 - 09:11:42 |\x1b[97;42m 200 \x1b[0m|            5s |     20.20.20.20 |\x1b[97;44m GET     \x1b[0m "/"\n'),
        (LONG, True, '[TONIC] 2018/12/07 - 09:11:42 |\x1b[97;42m 200 \x1b[0m|    2743h29m3s |     20.20.20.20 |\x1b[97;44m GET     \x1b[0m "/"\n'),
    ],
)
def test_default_log_formatter(latency, is_term, expected):
    assert default_log_formatter(_params(latency, is_term)) == expected


def test_default_formatter_appends_error_message():
    line = default_log_formatter(_params(5, False, error_message="boom"))
    assert line.endswith('"/"\nboom')


def test_default_formatter_quotes_path():
    params = _params(5, False)
    params.path = 'a"b\nc'
    assert default_log_formatter(params).endswith('"a\\"b\\nc"\n')


@pytest.mark.parametrize(
    "method,color",
    [
        ("GET", BLUE),
        ("POST", CYAN),
        ("PUT", YELLOW),
        ("DELETE", RED),
        ("PATCH", GREEN),
        ("HEAD", MAGENTA),
        ("OPTIONS", WHITE),
        ("TRACE", RESET),
    ],
)
def test_color_for_method(method, color):
    assert LogFormatterParams(method=method).method_color() == color


@pytest.mark.parametrize(
    "code,color", [(200, GREEN), (301, WHITE), (404, YELLOW), (2, RED), (500, RED)]
)
def test_color_for_status(code, color):
    assert LogFormatterParams(status_code=code).status_code_color() == color


def test_reset_color():
    assert LogFormatterParams().reset_color() == bytes([27, 91, 48, 109]).decode()


def test_is_output_color_with_terminal():
    p = LogFormatterParams(is_term=True)
    assert p.is_output_color() is True
    force_console_color()
    assert p.is_output_color() is True
    disable_console_color()
    assert p.is_output_color() is False


def test_is_output_color_without_terminal():
    p = LogFormatterParams(is_term=False)
    assert p.is_output_color() is False
    force_console_color()
    assert p.is_output_color() is True
    disable_console_color()
    assert p.is_output_color() is False


def test_disable_console_color():
    assert console_color_mode() is ColorMode.AUTO
    disable_console_color()
    assert console_color_mode() is ColorMode.DISABLE


def test_force_console_color():
    assert console_color_mode() is ColorMode.AUTO
    force_console_color()
    assert console_color_mode() is ColorMode.FORCE


@pytest.mark.parametrize(
    "duration,expected",
    [
        (0, "0s"),
        (5, "5s"),
        (LONG, "2743h29m3s"),
        (0.0015, "1.5ms"),
        (3600, "1h0m0s"),
        (-1.5, "-1.5s"),
    ],
)
def test_format_duration(duration, expected):
    assert format_duration(duration) == expected


def test_logger_config_defaults_to_default_formatter():
    config = LoggerConfig()
    params = _params(5, False)
    assert config.formatter(params) == default_log_formatter(params)
    assert config.output is None
    assert list(config.skip_paths) == []