"""Tests for the binary sniffer and file-size formatting."""

import pytest

from shellscope.sniffer.binary import (
    detect_binary,
    estimate_base64_size,
    extract_file_extension,
    extract_file_name,
)
from shellscope.sniffer.types import BinaryInfo, format_file_size


# ---------------------------------------------------------------------------
# Magic bytes
# ---------------------------------------------------------------------------

class TestMagicBytes:
    def test_mz_header_is_windows_executable(self):
        info = detect_binary("MZ\x90\x00\x03\x00\x00\x00", "https://host/dl/setup.exe")
        assert info.is_binary is True
        assert info.file_extension == ".exe"
        assert info.mime_type == "application/x-msdownload"
        assert info.file_name == "setup.exe"
        assert info.warning == "This is a Windows executable file"

    @pytest.mark.parametrize(
        "content, extension, mime_type",
        [
            ("PK\x03\x04rest", ".zip", "application/zip"),
            ("Rar!\x1a\x07\x00", ".rar", "application/x-rar-compressed"),
            ("\x7fELF\x02\x01\x01", ".bin", "application/x-executable"),
            ("%PDF-1.7\n", ".pdf", "application/pdf"),
        ],
    )
    def test_signatures(self, content, extension, mime_type):
        info = detect_binary(content)
        assert info.is_binary is True
        assert info.file_extension == extension
        assert info.mime_type == mime_type
        assert info.warning == f"This is a {extension} file, not a script"

    def test_magic_must_be_at_start(self):
        assert detect_binary("echo PK is not a zip").is_binary is False


# ---------------------------------------------------------------------------
# data: URLs and control-character ratio
# ---------------------------------------------------------------------------

class TestEncodedAndRatio:
    def test_octet_stream_data_url(self):
        payload = "A" * 400
        info = detect_binary(
            "data:application/octet-stream;base64," + payload,
            "https://host/files/tool.msi",
        )
        assert info.is_binary is True
        assert info.mime_type == "application/octet-stream"
        assert info.file_extension == ".msi"
        assert info.file_name == "tool.msi"
        assert info.size == 300

    def test_control_heavy_content_is_binary(self):
        content = "\x00\x01\x02\x03" * 40
        info = detect_binary(content)
        assert info.is_binary is True
        assert "content analysis" in info.warning

    def test_short_control_content_is_not_ratio_checked(self):
        assert detect_binary("\x00" * 50).is_binary is False

    def test_tabs_and_newlines_do_not_count(self):
        assert detect_binary("\t\n\r" * 100).is_binary is False

    def test_plain_script_is_not_binary(self):
        info = detect_binary("#!/bin/bash\necho hello\n" * 10)
        assert info == BinaryInfo(is_binary=False)


# ---------------------------------------------------------------------------
# URL / size helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    def test_file_name_from_url_path(self):
        assert extract_file_name("https://host/a/b/install.ps1?x=1") == "install.ps1"

    def test_file_name_none_for_bare_host(self):
        assert extract_file_name("https://host/") is None
        assert extract_file_name(None) is None

    def test_extension_requires_dot(self):
        assert extract_file_extension("https://host/bin/tool") is None
        assert extract_file_extension("https://host/bin/tool.tar.gz") == ".gz"

    def test_base64_size_strips_prefix(self):
        assert estimate_base64_size("data:text/plain;base64,AAAA") == 3

    @pytest.mark.parametrize(
        "size, expected",
        [
            (512, "512 B"),
            (1536, "1.5 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (2 * 1024 * 1024 * 1024, "2.0 GB"),
        ],
    )
    def test_format_file_size(self, size, expected):
        assert format_file_size(size) == expected

    def test_to_dict_includes_size_display(self):
        info = BinaryInfo(is_binary=True, size=2048)
        assert info.to_dict()["size_display"] == "2.0 KB"
        assert BinaryInfo(is_binary=False).to_dict()["size_display"] is None
