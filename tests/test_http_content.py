"""Content resolution and marker substitution."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from webworker.config import SERVER_NAME, ServerConfig
from webworker.errors import ContentNotFound
from webworker.http_content import (
    DATE_MARKER,
    SERVER_MARKER,
    Found,
    NotFound,
    format_http_date,
    resolve_content,
    resolve_file_path,
    substitute_line,
)
from webworker.http_request import NOT_FOUND_TARGET

FIXED_NOW = datetime(2026, 10, 18, 4, 24, 0, tzinfo=timezone.utc)


@pytest.fixture
def config(tmp_path: Path) -> ServerConfig:
    return ServerConfig(web_root=str(tmp_path))


def test_format_http_date_is_gmt() -> None:
    assert format_http_date(FIXED_NOW) == "Sun, 18 Oct 2026 04:24:00 GMT"


def test_format_http_date_normalizes_to_utc() -> None:
    local = FIXED_NOW.astimezone(timezone(timedelta(hours=-7)))
    assert format_http_date(local) == "Sun, 18 Oct 2026 04:24:00 GMT"


def test_substitute_line_replaces_whole_line() -> None:
    assert substitute_line(f"<p>Today is {DATE_MARKER}</p>", SERVER_NAME, FIXED_NOW) == (
        "Sun, 18 Oct 2026 04:24:00 GMT"
    )
    assert substitute_line(f"<b>{SERVER_MARKER}</b>", SERVER_NAME) == "Luke's Server"
    assert substitute_line("plain text", SERVER_NAME) == "plain text"


def test_substitute_line_prefers_date_marker() -> None:
    line = f"{SERVER_MARKER} {DATE_MARKER}"
    assert substitute_line(line, SERVER_NAME, FIXED_NOW) == "Sun, 18 Oct 2026 04:24:00 GMT"


def test_resolve_content_substitutes_markers(tmp_path: Path, config: ServerConfig) -> None:
    (tmp_path / "test.html").write_text("Hello\n<cs371date>\ncs371server>\n")

    content = resolve_content("/test.html", config, now=FIXED_NOW)

    assert content == Found(body=" Hello\nSun, 18 Oct 2026 04:24:00 GMT\nLuke's Server\n")


def test_resolve_content_leaves_other_lines_alone(tmp_path: Path, config: ServerConfig) -> None:
    (tmp_path / "page.html").write_text("<html>\r\n  <body>\r\nno newline at end")

    content = resolve_content("/page.html", config)

    assert content == Found(body=" <html>\n  <body>\nno newline at end\n")


def test_resolve_content_empty_file(tmp_path: Path, config: ServerConfig) -> None:
    (tmp_path / "empty.html").write_text("")

    assert resolve_content("/empty.html", config) == Found(body=" ")


def test_resolve_content_is_stable_apart_from_date(tmp_path: Path, config: ServerConfig) -> None:
    (tmp_path / "test.html").write_text("a\n<cs371date>\nb\n")

    first = resolve_content("/test.html", config, now=FIXED_NOW)
    second = resolve_content("/test.html", config, now=FIXED_NOW + timedelta(hours=1))

    assert isinstance(first, Found) and isinstance(second, Found)
    first_lines = first.body.split("\n")
    second_lines = second.body.split("\n")
    assert first_lines[1] != second_lines[1]
    assert first_lines[:1] + first_lines[2:] == second_lines[:1] + second_lines[2:]


def test_resolve_content_nested_path(tmp_path: Path, config: ServerConfig) -> None:
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "a.txt").write_text("nested\n")

    assert resolve_content("/docs/a.txt", config) == Found(body=" nested\n")


@pytest.mark.parametrize(
    "target",
    [NOT_FOUND_TARGET, "/missing.html", "/", "", "missing.html", "/../outside.html"],
)
def test_resolve_content_not_found(target, config: ServerConfig) -> None:
    assert isinstance(resolve_content(target, config), NotFound)


def test_resolve_content_undecodable_file_is_not_found(tmp_path: Path, config: ServerConfig) -> None:
    (tmp_path / "binary.html").write_bytes(b"\xff\xfe\x00bad")

    assert isinstance(resolve_content("/binary.html", config), NotFound)


def test_resolve_file_path_stays_inside_web_root(tmp_path: Path) -> None:
    assert resolve_file_path("/a/../b.html", str(tmp_path)) == str(tmp_path / "b.html")

    with pytest.raises(ContentNotFound):
        resolve_file_path("/../../etc/passwd", str(tmp_path))
