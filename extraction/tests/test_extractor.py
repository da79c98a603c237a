"""
Integration tests for extractor.py

Tests the driver over whole compilation units and projects.
"""

import unittest

from extraction.config import ExtractionOptions
from extraction.extractor import (
    ExtractionStats,
    extract_project,
    extract_to_dict_list,
    extract_type_model,
)
from symbols.model import (
    Access,
    AttributeArgument,
    CodeAttribute,
    CodeClass,
    CodeElement,
    CodeEnum,
    CodeEnumMember,
    CodeNamespace,
    CodeProperty,
    CodeTypeRef,
    CompilationUnit,
    Getter,
    SymbolAccessError,
    TypeKind,
)


def _string_prop(owner, name, **kwargs):
    return CodeProperty(
        name=name,
        full_name=f"{owner}.{name}",
        type=CodeTypeRef(kind=TypeKind.STRING, as_string="System.String"),
        getter=kwargs.pop("getter", Getter()),
        **kwargs,
    )


def _customer():
    return CodeClass(
        name="Customer",
        full_name="Acme.Models.Customer",
        doc_text="<doc><summary>A customer.</summary></doc>",
        attributes=[
            CodeAttribute(
                name="TypeScriptModule",
                arguments=[AttributeArgument(name="", value='"Crm"')],
            )
        ],
        members=[
            _string_prop("Acme.Models.Customer", "Name"),
            _string_prop("Acme.Models.Customer", "Secret", getter=Getter(access=Access.PRIVATE)),
        ],
    )


def _status():
    return CodeEnum(
        name="Status",
        full_name="Acme.Models.Status",
        members=[
            CodeEnumMember(name="Active", full_name="Acme.Models.Status.Active"),
            CodeEnumMember(name="Closed", full_name="Acme.Models.Status.Closed"),
        ],
    )


class _BrokenClass(CodeClass):
    """A class whose provider fails when its members are enumerated."""

    @property
    def members(self):
        raise SymbolAccessError("symbol graph is inconsistent")

    @members.setter
    def members(self, value):
        pass


class TestExtractionStats(unittest.TestCase):
    """Test ExtractionStats class."""

    def test_creation(self):
        """Test stats start at zero."""
        stats = ExtractionStats()
        self.assertEqual(stats.to_dict(), {
            "units_processed": 0,
            "units_skipped": 0,
            "units_failed": 0,
            "types_extracted": 0,
        })

    def test_str_representation(self):
        """Test stats string formatting."""
        stats = ExtractionStats()
        stats.units_processed = 3
        self.assertIn("processed=3", str(stats))


class TestExtractTypeModel(unittest.TestCase):
    """Test extract_type_model."""

    def test_no_symbol_model_returns_none(self):
        """Test a unit without a symbol model yields None."""
        self.assertIsNone(extract_type_model(CompilationUnit(path="README.md")))

    def test_empty_model_returns_empty_list(self):
        """Test an empty symbol model yields no descriptors."""
        self.assertEqual(extract_type_model(CompilationUnit(path="Empty.cs", code_elements=[])), [])

    def test_class_inside_namespace(self):
        """Test a class declared inside a namespace is extracted."""
        unit = CompilationUnit(
            path="Customer.cs",
            code_elements=[
                CodeNamespace(name="Acme.Models", full_name="Acme.Models", members=[_customer()])
            ],
        )
        (descriptor,) = extract_type_model(unit)
        self.assertEqual(descriptor.name, "Customer")
        self.assertEqual(descriptor.full_name, "Acme.Models.Customer")
        self.assertEqual(descriptor.namespace, "Crm")
        self.assertFalse(descriptor.is_enum)
        self.assertEqual(descriptor.summary, "A customer.")
        self.assertEqual([p.name for p in descriptor.properties], ["Name"])

    def test_top_level_enum(self):
        """Test an enum declared at unit level is extracted."""
        unit = CompilationUnit(path="Status.cs", code_elements=[_status()])
        (descriptor,) = extract_type_model(unit)
        self.assertTrue(descriptor.is_enum)
        self.assertEqual(descriptor.namespace, "server")
        self.assertEqual([p.name for p in descriptor.properties], ["Active", "Closed"])
        self.assertTrue(all(p.type is None for p in descriptor.properties))

    def test_class_without_exported_properties_dropped(self):
        """Test classes with nothing to export are dropped."""
        hidden = CodeClass(
            name="Hidden",
            full_name="Acme.Hidden",
            members=[
                _string_prop("Acme.Hidden", "A", getter=None),
                _string_prop("Acme.Hidden", "B", getter=Getter(is_static=True)),
                _string_prop(
                    "Acme.Hidden",
                    "C",
                    attributes=[CodeAttribute(name="IgnoreDataMember")],
                ),
            ],
        )
        unit = CompilationUnit(path="Hidden.cs", code_elements=[hidden])
        self.assertEqual(extract_type_model(unit), [])

    def test_enum_without_members_dropped(self):
        """Test enums without members are dropped."""
        empty = CodeEnum(name="Nothing", full_name="Acme.Nothing")
        self.assertEqual(extract_type_model(CompilationUnit(path="N.cs", code_elements=[empty])), [])

    def test_other_kinds_ignored(self):
        """Test non-type elements are ignored."""
        unit = CompilationUnit(
            path="Mixed.cs",
            code_elements=[
                CodeElement(name="IService", full_name="Acme.IService"),
                _status(),
            ],
        )
        self.assertEqual([d.name for d in extract_type_model(unit)], ["Status"])

    def test_nested_namespace_not_entered(self):
        """Test only one namespace level is walked."""
        inner = CodeNamespace(
            name="Inner",
            full_name="Acme.Inner",
            members=[_status()],
        )
        outer = CodeNamespace(name="Acme", full_name="Acme", members=[inner, _customer()])
        unit = CompilationUnit(path="Nested.cs", code_elements=[outer])
        self.assertEqual([d.name for d in extract_type_model(unit)], ["Customer"])

    def test_declaration_order_preserved(self):
        """Test descriptors follow declaration order."""
        unit = CompilationUnit(
            path="Both.cs",
            code_elements=[
                CodeNamespace(
                    name="Acme.Models",
                    full_name="Acme.Models",
                    members=[_status(), _customer()],
                )
            ],
        )
        self.assertEqual([d.name for d in extract_type_model(unit)], ["Status", "Customer"])

    def test_options_default_module(self):
        """Test the default module name comes from options."""
        unit = CompilationUnit(path="Status.cs", code_elements=[_status()])
        (descriptor,) = extract_type_model(unit, ExtractionOptions(default_module_name="api"))
        self.assertEqual(descriptor.namespace, "api")

    def test_provider_failure_propagates(self):
        """Test symbol provider errors are not swallowed."""
        broken = _BrokenClass(name="Broken", full_name="Acme.Broken")
        unit = CompilationUnit(path="Broken.cs", code_elements=[broken])
        with self.assertRaises(SymbolAccessError):
            extract_type_model(unit)

    def test_malformed_class_doc_does_not_abort(self):
        """Test a broken doc comment does not stop extraction."""
        customer = _customer()
        customer.doc_text = "<doc><summary>broken"
        unit = CompilationUnit(path="Customer.cs", code_elements=[customer])
        with self.assertLogs("extraction.documentation", level="WARNING"):
            (descriptor,) = extract_type_model(unit)
        self.assertIsNone(descriptor.summary)
        self.assertEqual([p.name for p in descriptor.properties], ["Name"])


class TestExtractProject(unittest.TestCase):
    """Test extract_project and extract_to_dict_list."""

    def _units(self):
        return [
            CompilationUnit(path="Customer.cs", code_elements=[_customer()]),
            CompilationUnit(path="site.css"),
            CompilationUnit(
                path="Broken.cs",
                code_elements=[_BrokenClass(name="Broken", full_name="Acme.Broken")],
            ),
            CompilationUnit(path="Status.cs", code_elements=[_status()]),
        ]

    def test_continue_on_error(self):
        """Test failing units are counted and skipped."""
        with self.assertLogs("extraction.extractor", level="ERROR"):
            descriptors, stats = extract_project(self._units())
        self.assertEqual([d.name for d in descriptors], ["Customer", "Status"])
        self.assertEqual(stats.units_processed, 2)
        self.assertEqual(stats.units_skipped, 1)
        self.assertEqual(stats.units_failed, 1)
        self.assertEqual(stats.types_extracted, 2)

    def test_stop_on_error(self):
        """Test the first failing unit aborts the run."""
        with self.assertLogs("extraction.extractor", level="ERROR"):
            with self.assertRaises(SymbolAccessError):
                extract_project(self._units(), continue_on_error=False)

    def test_to_dict_list(self):
        """Test descriptors serialize to camelCase dicts."""
        units = [CompilationUnit(path="Customer.cs", code_elements=[_customer()])]
        (payload,) = extract_to_dict_list(units)
        self.assertEqual(payload["fullName"], "Acme.Models.Customer")
        self.assertEqual(payload["namespace"], "Crm")
        self.assertFalse(payload["isEnum"])
        prop = payload["properties"][0]
        self.assertEqual(prop["name"], "Name")
        self.assertEqual(prop["type"]["sourceTypeName"], "System.String")
        self.assertFalse(prop["type"]["isArray"])
        self.assertIsNone(prop["type"]["shape"])


if __name__ == "__main__":
    unittest.main()
