"""Pytest configuration and fixtures for mcp-browser-finder tests."""

import pytest

from mcp_browser_finder.utils.exec import ExecutionError


class FakeRunner:
    """Command runner returning canned output and recording every call."""

    def __init__(self, outputs=None, failures=None):
        self.outputs = dict(outputs or {})
        self.failures = dict(failures or {})
        self.calls: list[str] = []

    async def __call__(self, command: str) -> str:
        self.calls.append(command)
        if command in self.failures:
            raise self.failures[command]
        if command not in self.outputs:
            raise ExecutionError(command, returncode=1, stderr="unexpected command")
        return self.outputs[command]


class FakeConsole(FakeRunner):
    """FakeRunner that also emulates `chcp` code page switching."""

    def __init__(self, code_page="437", outputs=None, failures=None):
        super().__init__(outputs, failures)
        self.code_page = code_page

    async def __call__(self, command: str) -> str:
        if command == "chcp":
            self.calls.append(command)
            return f"Active code page: {self.code_page}\r\n"
        if command.startswith("chcp "):
            self.calls.append(command)
            self.code_page = command.split()[1]
            return f"Active code page: {self.code_page}\r\n"
        return await super().__call__(command)


def fake_exists(*paths):
    """Build an existence check that only knows the given paths."""
    existing = set(paths)

    async def exists(path: str) -> bool:
        return path in existing

    return exists


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def make_console():
    return FakeConsole


@pytest.fixture
def make_exists():
    return fake_exists
