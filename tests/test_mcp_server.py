"""
MCP tool tests: the decorated tool functions are called directly.
"""
import unittest
import os
import sys
import json

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

import fastmcp_server

MOCK_API = os.path.join(PROJECT_ROOT, "tests", "mock_api")
MOCK_WRAPPER = os.path.join(PROJECT_ROOT, "tests", "mock_wrapper")


class TestCoverageReportTool(unittest.TestCase):

    def test_summary(self):
        report = fastmcp_server.coverage_report(MOCK_API)
        self.assertEqual(report, "Core: 60.00% (1 warning)\nStudio: 57.14%\n")

    def test_missing_api_dir(self):
        report = fastmcp_server.coverage_report(os.path.join(MOCK_API, "nope"))
        self.assertTrue(report.startswith("Error:"))

    def test_missing_module_dir_is_reported_not_raised(self):
        report = fastmcp_server.coverage_report(os.path.join(MOCK_API, "core"))
        self.assertTrue(report.startswith("Error: header directory"))

    def test_bindings_dir(self):
        report = fastmcp_server.coverage_report(MOCK_API, print_full=True, bindings_dir=MOCK_WRAPPER)
        self.assertIn("Core: 15 total, 5 covered, 10 missing", report.splitlines())


class TestListMissingTool(unittest.TestCase):

    def test_core(self):
        payload = json.loads(fastmcp_server.list_missing(MOCK_API, "core"))
        self.assertEqual(payload["module"], "Core")
        self.assertEqual(payload["total"], 15)
        self.assertEqual(payload["covered"], 9)
        self.assertEqual(payload["percentage"], 60.0)
        names = [m["name"] for m in payload["missing"]]
        self.assertEqual(names[0], "FMOD_System_Release")
        self.assertEqual(len(names), 6)
        deprecated = [m["name"] for m in payload["missing"] if m["deprecated"]]
        self.assertEqual(deprecated, ["FMOD_System_GetSpeakerModeChannels"])
        self.assertEqual(payload["warnings"][0]["kind"], "ParseFailure")

    def test_studio(self):
        payload = json.loads(fastmcp_server.list_missing(MOCK_API, "Studio"))
        self.assertEqual(
            [m["category"] for m in payload["missing"]],
            ["Studio System", "Studio EventInstance", "Studio EventInstance"],
        )

    def test_unknown_module(self):
        self.assertTrue(fastmcp_server.list_missing(MOCK_API, "lowlevel").startswith("Error: unknown module"))


class TestCheckBindingTool(unittest.TestCase):

    def test_direct_binding(self):
        self.assertIn("is covered by the wrapper", fastmcp_server.check_binding("FMOD_System_Create"))

    def test_shared_binding(self):
        self.assertIn("shared binding", fastmcp_server.check_binding("FMOD_Channel_SetPan"))

    def test_not_covered(self):
        self.assertIn("NOT covered", fastmcp_server.check_binding("FMOD_System_Close"))

    def test_empty_name(self):
        self.assertTrue(fastmcp_server.check_binding("  ").startswith("Error:"))


if __name__ == '__main__':
    unittest.main()
