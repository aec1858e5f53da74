import unittest
import os
import sys

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from ffi_coverage.signature import (
    FunctionSignature, Module, Parameter, ParameterKind,
    category_of, normalize_signature, normalize_type, same_function,
)


def _sig(name="FMOD_System_Create", ret="FMOD_RESULT", params=(), header="core/inc/fmod.h",
         module=Module.CORE, order=0):
    return FunctionSignature(
        name=name,
        return_type=ret,
        parameters=tuple(params),
        source_header=header,
        module=module,
        declaration_order=order,
    )


class TestNormalizeType(unittest.TestCase):

    def test_pointer_spacing_variants_agree(self):
        self.assertEqual(normalize_type("char *"), "char*")
        self.assertEqual(normalize_type("char*"), "char*")
        self.assertEqual(normalize_type("char  *  "), "char*")

    def test_double_pointer(self):
        self.assertEqual(normalize_type("FMOD_SYSTEM * *"), "FMOD_SYSTEM**")

    def test_words_collapse_to_single_space(self):
        self.assertEqual(normalize_type("unsigned   int"), "unsigned int")
        self.assertEqual(normalize_type(" const\tchar * "), "const char*")

    def test_const_after_pointer(self):
        self.assertEqual(normalize_type("char * const"), "char* const")

    def test_array_suffix(self):
        self.assertEqual(normalize_type("float [ 16 ]"), "float[16]")

    def test_idempotent(self):
        for text in ("const char *", "FMOD_SYSTEM **", "unsigned long long", "char* const*"):
            once = normalize_type(text)
            self.assertEqual(normalize_type(once), once)


class TestFunctionSignature(unittest.TestCase):

    def test_canonical_form(self):
        sig = _sig(params=[
            Parameter(type="FMOD_SYSTEM**", name="system"),
            Parameter(type="unsigned int", name="headerversion"),
        ])
        self.assertEqual(
            sig.canonical(),
            "FMOD_RESULT FMOD_System_Create(FMOD_SYSTEM**, unsigned int)",
        )
        self.assertEqual(
            sig.display(),
            "FMOD_RESULT FMOD_System_Create(FMOD_SYSTEM** system, unsigned int headerversion)",
        )

    def test_no_parameters(self):
        self.assertEqual(_sig(name="FMOD_Thing_Reset").canonical(), "FMOD_RESULT FMOD_Thing_Reset()")

    def test_variadic(self):
        sig = _sig(name="FMOD_Debug_Log", ret="void", params=[
            Parameter(type="const char*", name="fmt"),
            Parameter(type="...", kind=ParameterKind.VARIADIC),
        ])
        self.assertTrue(sig.is_variadic)
        self.assertEqual(sig.canonical(), "void FMOD_Debug_Log(const char*, ...)")
        self.assertFalse(_sig().is_variadic)

    def test_sort_key_orders_core_before_studio(self):
        core = _sig(header="z.h", order=9)
        studio = _sig(name="FMOD_Studio_ParseID", header="a.h", module=Module.STUDIO)
        self.assertLess(core.sort_key, studio.sort_key)

    def test_same_function_is_name_identity(self):
        a = _sig(params=[Parameter(type="int")])
        b = _sig(header="other.h", params=[Parameter(type="float")])
        c = _sig(name="FMOD_System_Release")
        self.assertTrue(same_function(a, b))
        self.assertFalse(same_function(a, c))

    def test_module_include_subdir(self):
        self.assertEqual(Module.CORE.include_subdir, ("core", "inc"))
        self.assertEqual(Module.STUDIO.include_subdir, ("studio", "inc"))


class TestNormalizeSignature(unittest.TestCase):

    def test_types_are_normalized_and_names_kept(self):
        sig = _sig(ret="FMOD_RESULT ", params=[
            Parameter(type="FMOD_SYSTEM * *", name="system"),
            Parameter(type="unsigned  int", name="headerversion"),
        ])
        norm = normalize_signature(sig)
        self.assertEqual(norm.return_type, "FMOD_RESULT")
        self.assertEqual(norm.parameter_types(), ("FMOD_SYSTEM**", "unsigned int"))
        self.assertEqual([p.name for p in norm.parameters], ["system", "headerversion"])

    def test_idempotent(self):
        sig = _sig(params=[
            Parameter(type="const char *", name="name"),
            Parameter(type="...", kind=ParameterKind.VARIADIC),
        ])
        once = normalize_signature(sig)
        self.assertEqual(normalize_signature(once), once)


class TestCategory(unittest.TestCase):

    def test_core_family(self):
        self.assertEqual(category_of("FMOD_System_Create"), "System")
        self.assertEqual(category_of("FMOD_ChannelGroup_GetNumGroups"), "ChannelGroup")

    def test_studio_family(self):
        self.assertEqual(category_of("FMOD_Studio_System_Create"), "Studio System")
        self.assertEqual(category_of("FMOD_Studio_EventInstance_Start"), "Studio EventInstance")

    def test_studio_global_function(self):
        self.assertEqual(category_of("FMOD_Studio_ParseID"), "Studio")

    def test_unrecognised_name(self):
        self.assertEqual(category_of("fmod_lowercase"), "Unknown")


if __name__ == '__main__':
    unittest.main()
