"""Tests for the discovery orchestrator and its cache."""

import asyncio

import pytest

from mcp_browser_finder.cache import InstallationsCache
from mcp_browser_finder.enumerators import (
    EDGE_QUERY_COMMAND,
    LINUX_ALTERNATIVES_COMMAND,
    MAC_LIST_COMMAND,
    REGISTRY_QUERY_COMMAND,
)
from mcp_browser_finder.finder import BrowserFinder
from mcp_browser_finder.utils.exec import ExecutionError


class TestGetInstallations:
    """Test discovery through BrowserFinder."""

    @pytest.mark.parametrize("platform,command,output,path", [
        ("linux", LINUX_ALTERNATIVES_COMMAND, "/usr/bin/firefox\n", "/usr/bin/firefox"),
        ("mac", MAC_LIST_COMMAND, "Firefox.app\n", "/Applications/Firefox.app"),
    ])
    @pytest.mark.asyncio
    async def test_second_call_is_cached(self, make_runner, make_exists, platform, command, output, path):
        """The second call should return the same mapping without running commands."""
        runner = make_runner({command: output})
        finder = BrowserFinder(run=runner, exists=make_exists(path), platform=platform)

        first = await finder.get_installations()
        second = await finder.get_installations()

        assert first is second
        assert "firefox" in first
        assert len(runner.calls) == 1

    @pytest.mark.asyncio
    async def test_windows_cached(self, make_console, make_exists):
        console = make_console(outputs={REGISTRY_QUERY_COMMAND: "", EDGE_QUERY_COMMAND: "SUCCESS"})
        finder = BrowserFinder(run=console, exists=make_exists(), platform="windows")

        first = await finder.get_installations()
        calls = len(console.calls)
        second = await finder.get_installations()

        assert first is second
        assert list(first) == ["edge"]
        assert len(console.calls) == calls

    @pytest.mark.asyncio
    async def test_concurrent_first_calls_run_once(self, make_exists):
        """Simultaneous first callers should share one discovery run."""
        calls = []

        async def slow_runner(command):
            calls.append(command)
            await asyncio.sleep(0.01)
            return "/usr/bin/firefox\n"

        finder = BrowserFinder(run=slow_runner, exists=make_exists("/usr/bin/firefox"), platform="linux")

        results = await asyncio.gather(*(finder.get_installations() for _ in range(5)))

        assert len(calls) == 1
        assert all(result is results[0] for result in results)

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(self, make_runner, make_exists):
        """A failed discovery should be retried from scratch on the next call."""
        runner = make_runner(failures={
            LINUX_ALTERNATIVES_COMMAND: ExecutionError(LINUX_ALTERNATIVES_COMMAND, returncode=2),
        })
        finder = BrowserFinder(run=runner, exists=make_exists("/usr/bin/firefox"), platform="linux")

        with pytest.raises(ExecutionError):
            await finder.get_installations()
        assert not finder.cache.populated

        del runner.failures[LINUX_ALTERNATIVES_COMMAND]
        runner.outputs[LINUX_ALTERNATIVES_COMMAND] = "/usr/bin/firefox\n"

        installations = await finder.get_installations()
        assert list(installations) == ["firefox"]
        assert len(runner.calls) == 2

    @pytest.mark.asyncio
    async def test_unsupported_platform(self, make_runner):
        """Unknown platforms should yield an empty, uncached result."""
        runner = make_runner()
        cache = InstallationsCache()
        finder = BrowserFinder(run=runner, platform="unknown", cache=cache)

        assert await finder.get_installations() == {}
        assert runner.calls == []
        assert not cache.populated

    @pytest.mark.asyncio
    async def test_shared_cache(self, make_runner, make_exists):
        """Finders sharing a cache should share its result."""
        cache = InstallationsCache()
        runner = make_runner({LINUX_ALTERNATIVES_COMMAND: "/usr/bin/firefox\n"})
        exists = make_exists("/usr/bin/firefox")

        first = await BrowserFinder(run=runner, exists=exists, platform="linux", cache=cache).get_installations()
        second = await BrowserFinder(run=runner, exists=exists, platform="linux", cache=cache).get_installations()

        assert first is second
        assert len(runner.calls) == 1


class TestGetBrowserInfo:
    """Test alias and path resolution."""

    @pytest.mark.asyncio
    async def test_alias(self, make_runner, make_exists):
        runner = make_runner({LINUX_ALTERNATIVES_COMMAND: "/usr/bin/firefox\n"})
        finder = BrowserFinder(run=runner, exists=make_exists("/usr/bin/firefox"), platform="linux")

        info = await finder.get_browser_info("firefox")

        assert info.path == "/usr/bin/firefox"
        assert info.extra_args == "-new-window"

    @pytest.mark.asyncio
    async def test_existing_path(self, make_runner, tmp_path):
        """A path to an unlisted browser should resolve to ad-hoc metadata."""
        executable = tmp_path / "my-browser.exe"
        executable.touch()
        runner = make_runner({LINUX_ALTERNATIVES_COMMAND: ""})
        finder = BrowserFinder(run=runner, platform="linux")

        info = await finder.get_browser_info(str(executable))

        assert info.identifier == "my-browser"
        assert info.path == str(executable)
        assert info.extra_args == ""
        assert info.mac_launch_template == 'open -a "{{{path}}}" {{{pageUrl}}} --args {{{cmd}}}'

    @pytest.mark.asyncio
    async def test_unknown(self, make_runner, make_exists):
        runner = make_runner({LINUX_ALTERNATIVES_COMMAND: ""})
        finder = BrowserFinder(run=runner, exists=make_exists(), platform="linux")

        assert await finder.get_browser_info("netscape") is None

    @pytest.mark.asyncio
    async def test_malformed_path(self, make_runner):
        """A path with an embedded NUL should resolve to nothing, not raise."""
        runner = make_runner({LINUX_ALTERNATIVES_COMMAND: ""})
        finder = BrowserFinder(run=runner, platform="linux")

        assert await finder.get_browser_info("/usr/bin/fire\x00fox") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
