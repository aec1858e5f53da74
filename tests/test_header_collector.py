import unittest
import os
import sys
import tempfile
from pathlib import Path

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from ffi_coverage.errors import DirectoryNotFound, HeaderReadFailure
from ffi_coverage.header_collector import (
    collect_headers, display_path, module_include_dir, read_header,
)
from ffi_coverage.signature import Module

MOCK_API = os.path.join(PROJECT_ROOT, "tests", "mock_api")


class TestCollectHeaders(unittest.TestCase):

    def test_mock_core_headers_sorted(self):
        headers = collect_headers(module_include_dir(MOCK_API, Module.CORE))
        self.assertEqual(
            [display_path(h, MOCK_API) for h in headers],
            ["core/inc/fmod.h", "core/inc/fmod_common.h", "core/inc/fmod_dsp.h"],
        )

    def test_missing_directory(self):
        with self.assertRaises(DirectoryNotFound) as ctx:
            collect_headers(os.path.join(MOCK_API, "nope", "inc"))
        self.assertIn("does not exist", str(ctx.exception))

    def test_file_instead_of_directory(self):
        with self.assertRaises(DirectoryNotFound) as ctx:
            collect_headers(os.path.join(MOCK_API, "core", "inc", "fmod.h"))
        self.assertIn("is not a directory", str(ctx.exception))

    def test_nested_and_non_header_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "sub").mkdir()
            (root / ".hidden").mkdir()
            (root / "b.h").write_text("")
            (root / "a.hpp").write_text("")
            (root / "sub" / "c.h").write_text("")
            (root / ".hidden" / "d.h").write_text("")
            (root / "readme.txt").write_text("")
            headers = collect_headers(root)
            self.assertEqual(
                [display_path(h, root) for h in headers],
                ["a.hpp", "b.h", "sub/c.h"],
            )

    def test_empty_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(collect_headers(tmp), [])


class TestReadHeader(unittest.TestCase):

    def test_binary_file_is_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "blob.h"
            path.write_bytes(b"\x00\x01\x02int f(void);")
            with self.assertRaises(HeaderReadFailure) as ctx:
                read_header(path)
            self.assertEqual(ctx.exception.reason, "file looks binary")

    def test_missing_file(self):
        with self.assertRaises(HeaderReadFailure):
            read_header(os.path.join(MOCK_API, "core", "inc", "missing.h"))

    def test_invalid_utf8_is_replaced(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "latin1.h"
            path.write_bytes(b"/* caf\xe9 */\nint f(void);\n")
            text = read_header(path)
            self.assertIn("int f(void);", text)
            self.assertIn("\ufffd", text)


if __name__ == '__main__':
    unittest.main()
