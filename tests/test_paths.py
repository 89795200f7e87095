import os
import stat

import pytest

from pipex.paths import (
    CommandNotFoundError,
    find_binary,
    get_path,
    resolve_command,
)


def _make_file(path, executable=True):
    path.write_text("#!/bin/sh\nexit 0\n")
    mode = stat.S_IRUSR | stat.S_IWUSR
    if executable:
        mode |= stat.S_IXUSR
    os.chmod(path, mode)
    return path


def test_get_path_splits_and_drops_empty_parts():
    assert get_path({"PATH": "/a::/b:"}) == ["/a", "/b"]


def test_get_path_missing_variable():
    assert get_path({"HOME": "/home"}) == []


def test_get_path_empty_value():
    assert get_path({"PATH": ""}) == []


def test_find_binary_returns_first_executable(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    first.mkdir()
    second.mkdir()
    _make_file(first / "tool", executable=False)
    _make_file(second / "tool")
    result = find_binary([str(first), str(second)], "tool")
    assert result == f"{second}/tool"


def test_find_binary_prefers_earlier_directory(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    first.mkdir()
    second.mkdir()
    _make_file(first / "tool")
    _make_file(second / "tool")
    assert find_binary([str(first), str(second)], "tool") == f"{first}/tool"


def test_find_binary_without_name_or_directories(tmp_path):
    assert find_binary([str(tmp_path)], None) is None
    assert find_binary(None, "tool") is None


def test_find_binary_missing(tmp_path):
    assert find_binary([str(tmp_path)], "absent") is None


def test_resolve_command_through_path(tmp_path):
    _make_file(tmp_path / "tool")
    env = {"PATH": str(tmp_path)}
    assert resolve_command(["tool", "-x"], env) == f"{tmp_path}/tool"


def test_resolve_command_direct_path(tmp_path):
    target = _make_file(tmp_path / "script")
    assert resolve_command([str(target)], {"PATH": ""}) == str(target)


def test_resolve_command_not_found_plain_name(tmp_path):
    with pytest.raises(CommandNotFoundError) as info:
        resolve_command(["nosuchcmd"], {"PATH": str(tmp_path)})
    assert info.value.message == "nosuchcmd: command not found"
    assert info.value.exit_code == 127
    assert info.value.name == "nosuchcmd"


def test_resolve_command_empty_argv():
    with pytest.raises(CommandNotFoundError) as info:
        resolve_command([], {"PATH": "/bin"})
    assert info.value.message == "(null): command not found"
    assert info.value.name is None


def test_resolve_command_missing_path_with_slash(tmp_path):
    missing = str(tmp_path / "gone")
    with pytest.raises(CommandNotFoundError) as info:
        resolve_command([missing], {})
    assert info.value.message == f"{missing}: {os.strerror(2)}"
    assert info.value.exit_code == 127


def test_resolve_command_not_executable_with_slash(tmp_path):
    target = _make_file(tmp_path / "plain", executable=False)
    if os.access(str(target), os.X_OK):
        expected_found = True
    else:
        expected_found = False
    if expected_found:
        assert resolve_command([str(target)], {}) == str(target)
    else:
        with pytest.raises(CommandNotFoundError) as info:
            resolve_command([str(target)], {})
        assert info.value.message.startswith(f"{target}: ")