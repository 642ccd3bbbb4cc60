"""Tests for the detectors that fetch remote content (curl, wget, PowerShell)."""

import httpx
import pytest

from shellscope.detector.curl import (
    INSECURE_SSL_WARNING,
    PIPE_TO_SHELL_WARNING as CURL_PIPE_WARNING,
    CurlDetector,
    parse_curl_flags,
)
from shellscope.detector.powershell import (
    AUTO_EXECUTE_WARNING,
    REMOTE_CODE_CAUTION,
    PowerShellDetector,
)
from shellscope.detector.orchestrator import Classifier
from shellscope.detector.remote import FETCH_FAILED_WARNING, apply_fetch, pipes_to_shell
from shellscope.detector.wget import PIPE_TO_SHELL_WARNING as WGET_PIPE_WARNING, WgetDetector
from shellscope.fetcher.client import ContentFetcher
from shellscope.fetcher.relays import DIRECT
from shellscope.fetcher.types import FetchResult

BASH = "#!/bin/bash\necho 'install'\ncurl https://mirror.example/a.tgz\ncurl https://mirror.example/a.tgz\n"
PS1 = "function Install-App {\n  Invoke-WebRequest https://cdn.example/app.zip\n}\n"
EXE = "MZ\x90\x00" + "\x00" * 200


# ---------------------------------------------------------------------------
# curl
# ---------------------------------------------------------------------------

class TestCurl:
    async def test_insecure_silent_flags(self, make_fetcher):
        result = await CurlDetector(make_fetcher(BASH)).try_match(
            "curl -sk https://example.com/x.sh"
        )
        assert result.type == "cURL - HTTP Download"
        assert result.parameters["mode"] == "silent"
        assert result.parameters["SSL"] == "ignore certificates"
        assert INSECURE_SSL_WARNING in result.warnings

    async def test_fetched_script_is_profiled(self, make_fetcher):
        fetcher = make_fetcher(BASH)
        result = await CurlDetector(fetcher).try_match(
            "curl -fsSL https://get.example.com/install.sh | sudo bash"
        )
        assert fetcher.calls == ["https://get.example.com/install.sh"]
        assert result.extracted_code == BASH
        assert result.code_language == "bash"
        assert result.urls == ("https://mirror.example/a.tgz",)
        assert result.parameters["redirect"] == "follow redirects"
        assert result.warnings == (CURL_PIPE_WARNING,)

    async def test_fetch_failure(self, make_fetcher):
        result = await CurlDetector(make_fetcher()).try_match(
            "curl https://get.example.com/install.sh | bash"
        )
        assert result.extracted_code.startswith("Download error: all routes failed")
        assert result.urls == ("https://get.example.com/install.sh",)
        assert result.warnings == (FETCH_FAILED_WARNING,)

    async def test_binary_download(self, make_fetcher):
        result = await CurlDetector(make_fetcher(EXE)).try_match(
            "curl -LO https://dl.example.com/setup.exe"
        )
        assert result.binary_info.is_binary is True
        assert result.binary_info.file_extension == ".exe"
        assert result.code_language == "text"
        assert result.urls == ()
        assert "This is a Windows executable file" in result.warnings

    async def test_no_url_does_not_fetch(self, make_fetcher):
        fetcher = make_fetcher(BASH)
        result = await CurlDetector(fetcher).try_match("curl --version")
        assert fetcher.calls == []
        assert result.extracted_code is None
        assert result.code_language == "bash"

    async def test_not_curl(self, make_fetcher):
        assert await CurlDetector(make_fetcher(BASH)).try_match("wget x") is None

    def test_long_flags(self):
        assert parse_curl_flags("curl --silent --location --insecure u") == {
            "mode": "silent",
            "redirect": "follow redirects",
            "SSL": "ignore certificates",
        }

    def test_k_inside_a_url_is_not_a_flag(self):
        assert parse_curl_flags("curl https://example.com/-k") == {}


class TestPipesToShell:
    @pytest.mark.parametrize(
        "command",
        ["x | bash", "x|sh", "x | sudo bash", "x | sudo -E bash -s -- --yes"],
    )
    def test_pipes(self, command):
        assert pipes_to_shell(command) is True

    @pytest.mark.parametrize("command", ["x > out.sh", "x | bashful", "x | zsh"])
    def test_not_pipes(self, command):
        assert pipes_to_shell(command) is False


# ---------------------------------------------------------------------------
# wget
# ---------------------------------------------------------------------------

class TestWget:
    @pytest.mark.parametrize(
        "command",
        [
            "wget -O- https://get.example.com/i.sh",
            "wget -qO- https://get.example.com/i.sh",
            "wget -O - https://get.example.com/i.sh",
            "wget --output-document=- https://get.example.com/i.sh",
        ],
    )
    async def test_stdout_output(self, make_fetcher, command):
        result = await WgetDetector(make_fetcher(BASH)).try_match(command)
        assert result.parameters["output"] == "stdout (direct output)"

    async def test_output_to_file(self, make_fetcher):
        result = await WgetDetector(make_fetcher(BASH)).try_match(
            "wget -O tool.sh https://get.example.com/i.sh"
        )
        assert "output" not in result.parameters

    async def test_pipe_to_shell(self, make_fetcher):
        result = await WgetDetector(make_fetcher(BASH)).try_match(
            "wget -qO- https://get.example.com/i.sh | sh"
        )
        assert result.type == "wget - File Download"
        assert result.warnings == (WGET_PIPE_WARNING,)
        assert result.extracted_code == BASH

    async def test_failure_lists_command_urls(self, make_fetcher):
        result = await WgetDetector(make_fetcher()).try_match(
            "wget https://a.example/x.sh https://b.example/y.sh"
        )
        assert result.urls == ("https://a.example/x.sh", "https://b.example/y.sh")
        assert result.warnings == (FETCH_FAILED_WARNING,)


# ---------------------------------------------------------------------------
# PowerShell
# ---------------------------------------------------------------------------

class TestPowerShell:
    async def test_irm_iex(self, make_fetcher):
        result = await PowerShellDetector(make_fetcher(PS1)).try_match(
            "irm https://get.example.com/install.ps1 | iex"
        )
        assert result.type == "PowerShell - Web Request"
        assert result.extracted_code == PS1
        assert result.code_language == "powershell"
        assert result.urls == ("https://cdn.example/app.zip",)
        assert result.warnings == (
            "Content contains PowerShell code",
            AUTO_EXECUTE_WARNING,
        )

    async def test_bash_content(self, make_fetcher):
        result = await PowerShellDetector(make_fetcher(BASH)).try_match(
            "Invoke-WebRequest https://get.example.com/i.sh"
        )
        assert result.warnings == ("Content is a bash script that would be executed",)

    async def test_failure(self, make_fetcher):
        command = "iwr -useb https://christitus.com/win | iex"
        result = await PowerShellDetector(make_fetcher()).try_match(command)
        assert result.extracted_code == command
        assert result.code_language == "powershell"
        assert result.urls == ("https://christitus.com/win",)
        assert result.warnings == (FETCH_FAILED_WARNING, REMOTE_CODE_CAUTION, AUTO_EXECUTE_WARNING)

    async def test_expand_content(self, make_fetcher):
        result = await PowerShellDetector(make_fetcher(PS1)).try_match(
            "iwr https://x.example/a.ps1 | select -ExpandProperty Content"
        )
        assert result.parameters["expansion"] == "extracts only text content"
        assert AUTO_EXECUTE_WARNING not in result.warnings

    async def test_without_url(self, make_fetcher):
        fetcher = make_fetcher(PS1)
        result = await PowerShellDetector(fetcher).try_match("Invoke-RestMethod $uri | iex")
        assert fetcher.calls == []
        assert result.extracted_code == "Invoke-RestMethod $uri | iex"
        assert result.warnings == (AUTO_EXECUTE_WARNING,)

    async def test_unrelated(self, make_fetcher):
        assert await PowerShellDetector(make_fetcher(PS1)).try_match("Get-ChildItem") is None


# ---------------------------------------------------------------------------
# Shared fetch handling
# ---------------------------------------------------------------------------

class TestApplyFetch:
    def test_success_profiles_content(self):
        fetched = FetchResult(
            url="https://get.example.com/i.sh",
            final_url="https://get.example.com/i.sh",
            content=BASH,
            route="direct",
        )
        remote = apply_fetch(fetched, "curl https://get.example.com/i.sh", "bash")
        assert remote.ok
        assert remote.extracted_code == BASH
        assert remote.code_language == "bash"
        assert remote.urls == ["https://mirror.example/a.tgz"]
        assert remote.binary_info is None
        assert remote.warnings == []

    def test_binary_success_keeps_text_language(self):
        fetched = FetchResult(
            url="https://dl.example.com/setup.exe",
            final_url="https://dl.example.com/setup.exe",
            content=EXE,
            route="direct",
        )
        remote = apply_fetch(fetched, "curl -LO https://dl.example.com/setup.exe", "bash")
        assert remote.code_language == "text"
        assert remote.binary_info is not None
        assert remote.urls == []
        assert remote.warnings == [remote.binary_info.warning]

    def test_failure_uses_command_urls_and_download_error(self):
        fetched = FetchResult(
            url="https://a.example/x.sh",
            final_url="https://a.example/x.sh",
            failure_reason="all routes failed (direct: HTTP 500)",
        )
        command = "curl https://a.example/x.sh https://b.example/y.sh | bash"
        remote = apply_fetch(fetched, command, "bash")
        assert not remote.ok
        assert remote.extracted_code == "Download error: all routes failed (direct: HTTP 500)"
        assert remote.code_language == "bash"
        assert remote.urls == ["https://a.example/x.sh", "https://b.example/y.sh"]
        assert remote.warnings == [FETCH_FAILED_WARNING]

    def test_failure_code_override(self):
        command = "irm https://a.example/x.ps1 | iex"
        fetched = FetchResult(url="https://a.example/x.ps1", final_url="https://a.example/x.ps1")
        remote = apply_fetch(fetched, command, "powershell", failure_code=command)
        assert remote.extracted_code == command
        assert remote.code_language == "powershell"


# ---------------------------------------------------------------------------
# Malformed URLs through the real fetcher
# ---------------------------------------------------------------------------

class TestMalformedCommandUrls:
    @pytest.fixture
    def real_fetcher(self):
        return ContentFetcher(
            routes=[DIRECT],
            shortcuts=(),
            transport=httpx.MockTransport(lambda request: httpx.Response(404)),
        )

    async def test_curl_with_unclosed_ipv6_bracket(self, registry, real_fetcher):
        command = "curl -fsSL http://[::1/x.sh | bash"

        result = await Classifier(registry, real_fetcher).classify(command)

        assert result.type == "cURL - HTTP Download"
        assert result.extracted_code.startswith("Download error: all routes failed")
        assert result.urls == ("http://[::1/x.sh",)
        assert FETCH_FAILED_WARNING in result.warnings
        assert CURL_PIPE_WARNING not in result.warnings

    async def test_wget_with_unclosed_ipv6_bracket(self, registry, real_fetcher):
        result = await Classifier(registry, real_fetcher).classify("wget -qO- http://[::1 | sh")

        assert result.type == "wget - File Download"
        assert FETCH_FAILED_WARNING in result.warnings
