import unittest
import os
import sys

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from ffi_coverage.binding_registry import (
    AliasRule, BindingRegistry, collect_referenced_functions,
)
from ffi_coverage.errors import DirectoryNotFound
from ffi_coverage.known_bindings import KNOWN_BINDINGS

MOCK_WRAPPER = os.path.join(PROJECT_ROOT, "tests", "mock_wrapper")


class TestBindingRegistry(unittest.TestCase):

    def test_default_registry_covers_system_create(self):
        registry = BindingRegistry.default()
        self.assertTrue(registry.is_covered("FMOD_System_Create"))
        self.assertFalse(registry.is_covered("FMOD_System_Close"))
        self.assertEqual(len(registry), len(set(KNOWN_BINDINGS)))

    def test_known_bindings_are_unique(self):
        self.assertEqual(len(KNOWN_BINDINGS), len(set(KNOWN_BINDINGS)))

    def test_channel_names_resolve_through_channel_control(self):
        registry = BindingRegistry.from_names(["FMOD_ChannelControl_SetPan"])
        self.assertTrue(registry.is_covered("FMOD_Channel_SetPan"))
        self.assertTrue(registry.is_covered("FMOD_ChannelGroup_SetPan"))
        self.assertFalse(registry.is_covered("FMOD_Sound_SetPan"))
        self.assertNotIn("FMOD_Channel_SetPan", registry.all_known_names())

    def test_without_aliases(self):
        registry = BindingRegistry.from_names(["FMOD_ChannelControl_SetPan"], aliases=())
        self.assertFalse(registry.is_covered("FMOD_Channel_SetPan"))

    def test_custom_alias_rule(self):
        rule = AliasRule(r"^FMOD_Studio_(.+)$", r"FMOD_\1")
        self.assertEqual(rule.target("FMOD_Studio_Bank_Load"), "FMOD_Bank_Load")
        self.assertIsNone(rule.target("FMOD_System_Create"))

    def test_with_names_returns_new_registry(self):
        base = BindingRegistry.from_names(["FMOD_System_Create"])
        extended = base.with_names(["FMOD_System_Close"])
        self.assertTrue(extended.is_covered("FMOD_System_Close"))
        self.assertFalse(base.is_covered("FMOD_System_Close"))

    def test_empty_registry_covers_nothing(self):
        registry = BindingRegistry.from_names([])
        self.assertEqual(len(registry), 0)
        self.assertFalse(registry.is_covered("FMOD_System_Create"))


class TestWrapperSources(unittest.TestCase):

    def test_identifiers_in_calls_paths_and_macros(self):
        source = b"""
        /// Wraps FMOD_System_Release.
        fn f() {
            unsafe { ffi::FMOD_System_Create(&mut p, ffi::FMOD_VERSION) };
            ffi_call!(FMOD_Sound_Release(sound));
            let ok = FMOD_OK;
        }
        """
        names = collect_referenced_functions(source)
        self.assertEqual(names, {"FMOD_System_Create", "FMOD_Sound_Release"})

    def test_rebuild_from_mock_wrapper(self):
        registry = BindingRegistry.from_wrapper_sources(MOCK_WRAPPER)
        self.assertEqual(
            registry.all_known_names(),
            frozenset({
                "FMOD_System_Create",
                "FMOD_System_Init",
                "FMOD_System_CreateSound",
                "FMOD_Memory_GetStats",
                "FMOD_ChannelControl_SetPan",
                "FMOD_Studio_ParseID",
            }),
        )
        # only mentioned in comments or under target/
        self.assertFalse(registry.is_covered("FMOD_System_Release"))
        self.assertFalse(registry.is_covered("FMOD_System_Close"))
        self.assertTrue(registry.is_covered("FMOD_Channel_SetPan"))

    def test_missing_wrapper_directory(self):
        with self.assertRaises(DirectoryNotFound):
            BindingRegistry.from_wrapper_sources(os.path.join(MOCK_WRAPPER, "nope"))


if __name__ == '__main__':
    unittest.main()
