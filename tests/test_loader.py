"""Tests for the two-pass entity loader."""

from __future__ import annotations

from typing import List

import pytest

from objcgen.entities import (
    Attribute,
    AttributeHost,
    BaseNode,
    DuplicateDefinitionError,
    EntityStore,
    ProtocolType,
    StructType,
)
from objcgen.ir import Array, EntityRef, Primitive, StringType, Unknown
from objcgen.loader import EntityLoader, UnsupportedSectionError, receiver_from_definition, receiver_is_protocol
from objcgen.models import CompoundDef, Param
from tests._fixtures.entries import attribute, entry, method, param, prop, ref, section, text


class AttributeOnly(BaseNode, AttributeHost):
    def __init__(self, name: str) -> None:
        super().__init__(refid=name.lower(), name=name)
        self.attributes: List[Attribute] = []

    def add_attribute(self, attribute: Attribute) -> None:
        self.attributes.append(attribute)


def _loader() -> EntityLoader:
    return EntityLoader(EntityStore())


def test_receiver_from_definition() -> None:
    assert receiver_from_definition("void NSAlert::layout") == "NSAlert"
    assert receiver_from_definition("void NSAlertDelegate-p::alertShowHelp:") == "NSAlertDelegate"
    assert receiver_from_definition("NSInteger NSApplicationMain") == ""


def test_receiver_is_protocol() -> None:
    assert receiver_is_protocol("BOOL NSObject-p::isProxy") is True
    assert receiver_is_protocol("BOOL NSObject::isProxy") is False
    assert receiver_is_protocol("void NSBeep") is False


def test_load_struct_members() -> None:
    loader = _loader()
    loader.load(
        [
            entry(
                "class",
                "class_n_s_alert",
                "NSAlert",
                [
                    section("property", [prop("messageText", text("NSString *"))]),
                    section("protected-attrib", [attribute("_buttons", text("id"))]),
                    section(
                        "public-func",
                        [method("addButtonWithTitle:", "NSAlert", ref("class_n_s_button"), [param("title", text("NSString *"))])],
                    ),
                ],
            )
        ]
    )

    alert = loader.store.lookup_by_name("NSAlert")
    assert isinstance(alert, StructType)
    assert alert.is_class is True
    assert str(alert.location) == "NSAlert.h:10"
    assert alert.properties[0].type == StringType()
    assert alert.properties[0].writable is True
    assert alert.attributes[0].name == "_buttons"

    (added,) = alert.methods
    assert added.receiver == "NSAlert"
    assert added.signature.args[0].type == StringType()
    assert added.signature.ret == EntityRef("class_n_s_button", loader.store)
    assert loader.function_by_name("NSAlert::addButtonWithTitle:") is added


def test_attribute_section_sets_static() -> None:
    loader = _loader()
    loader.load(
        [
            entry(
                "struct",
                "struct_point",
                "NSPoint",
                [section("public-static-attrib", [attribute("zero", text("int"), "[2]")])],
            )
        ]
    )
    (zero,) = loader.store.lookup_by_name("NSPoint").attributes
    assert zero.static is True
    assert zero.type == Array(Primitive("int"), "2")


def test_unsupported_section_names_the_host_and_section() -> None:
    loader = _loader()
    host = AttributeOnly("Widget")
    definition = CompoundDef(
        sections=[
            section("public-func", [method("draw", "Widget")]),
            section("protected-static-attrib", [attribute("count", text("int"))]),
        ]
    )

    with pytest.raises(UnsupportedSectionError) as excinfo:
        loader.load_compound(host, definition)

    assert str(excinfo.value) == "AttributeOnly Widget cannot host functions (section public-func)"
    assert host.attributes == []


def test_protocol_rejects_attributes() -> None:
    loader = _loader()
    with pytest.raises(UnsupportedSectionError):
        loader.load(
            [entry("protocol", "protocol_p", "NSAlertDelegate-p", [section("public-attrib", [attribute("x", text("int"))])])]
        )


def test_methods_declared_elsewhere_attach_in_second_pass() -> None:
    loader = _loader()
    header = entry(
        "file",
        "file_n_s_alert_h",
        "NSAlert.h",
        [
            section(
                "func",
                [
                    method("layout", "NSAlert"),
                    method("alertShowHelp:", "NSAlertDelegate-p", text("BOOL")),
                    method("orphan", "NSMissing"),
                    method("NSBeep", ""),
                ],
            )
        ],
    )
    # The header is indexed before the types it extends.
    loaded = loader.load_entries(
        [
            header,
            entry("class", "class_n_s_alert", "NSAlert"),
            entry("protocol", "protocol_n_s_alert_delegate", "NSAlertDelegate-p"),
        ]
    )
    assert loaded == 3
    assert len(loader.pending) == 3

    summary = loader.attach_methods()

    assert (summary.attached, summary.unresolved, summary.duplicates) == (2, 1, 0)
    assert loader.pending == []
    assert [m.name for m in loader.store.lookup_by_name("NSAlert").methods] == ["layout"]
    delegate = loader.store.lookup_by_name("NSAlertDelegate")
    assert isinstance(delegate, ProtocolType)
    assert delegate.methods[0].signature.ret == Primitive("bool")
    (header_node,) = loader.store.files()
    assert [f.name for f in header_node.functions] == ["NSBeep"]


def test_duplicate_methods_keep_first_declaration() -> None:
    loader = _loader()
    summary = loader.load(
        [
            entry(
                "class",
                "class_a",
                "A",
                [
                    section("public-func", [method("run", "A", text("int"))]),
                    section("public-static-func", [method("run", "A", text("BOOL"))]),
                ],
            ),
            entry("file", "file_a", "A.h", [section("func", [method("run", "A")])]),
        ]
    )

    (run,) = loader.store.lookup_by_name("A").methods
    assert run.signature.ret == Primitive("int")
    assert run.static is False
    assert summary.duplicates == 1


def test_static_section_marks_class_methods() -> None:
    loader = _loader()
    loader.load(
        [entry("class", "class_a", "A", [section("public-static-func", [method("alloc", "A", text("instancetype"))])])]
    )
    assert loader.store.lookup_by_name("A").methods[0].static is True


@pytest.mark.parametrize("order", [("a", "b"), ("b", "a")])
def test_cyclic_references_resolve_in_any_order(order) -> None:
    definitions = {
        "a": entry("class", "class_a", "A", [section("public-func", [method("peer", "A", ref("class_b"))])]),
        "b": entry("class", "class_b", "B", [section("public-func", [method("peer", "B", ref("class_a"))])]),
    }
    loader = _loader()
    loader.load([definitions[key] for key in order])

    a = loader.store.lookup_by_name("A")
    b = loader.store.lookup_by_name("B")
    assert a.methods[0].signature.ret.target is b
    assert b.methods[0].signature.ret.target is a
    assert a.methods[0].signature.ret.cast_to_host("r") == ("AsB(r)", True)


def test_duplicate_refid_in_one_load_raises() -> None:
    loader = _loader()
    with pytest.raises(DuplicateDefinitionError):
        loader.load_entries([entry("class", "class_a", "A"), entry("class", "class_a", "A")])


def test_unknown_kinds_are_ignored() -> None:
    loader = _loader()
    assert loader.load_entries([entry("enum", "enum_a", "NSAlertStyle"), entry("class", "class_a", "A")]) == 1
    assert [e.name for e in loader.store.entities()] == ["A"]


def test_unparseable_types_become_unknown() -> None:
    loader = _loader()
    loader.load([entry("class", "class_a", "A", [section("public-func", [method("broken", "A", text("int )("))])])])
    ret = loader.store.lookup_by_name("A").methods[0].signature.ret
    assert isinstance(ret, Unknown)
    assert ret.raw == "int )("


def test_extern_functions_and_array_parameters() -> None:
    loader = _loader()
    function = method("NSRectFillList", "", text("APPKIT_EXTERN void"), [param("rects", text("int"))])
    function.params.append(Param(declname="counts", type=text("NSInteger"), array="[4]"))
    loader.load([entry("file", "file_graphics", "NSGraphics.h", [section("func", [function])])])

    (loaded,) = loader.store.files()[0].functions
    assert loaded.extern is True
    assert loaded.signature.ret is None
    assert loaded.signature.args[1].type == Array(Primitive("int"), "4")


@pytest.mark.parametrize("protocol_first", [True, False])
def test_pending_methods_pick_class_or_protocol_by_marker(protocol_first: bool) -> None:
    header = entry(
        "file",
        "file_n_s_object_h",
        "NSObject.h",
        [section("func", [method("isProxy", "NSObject-p", text("BOOL")), method("description", "NSObject")])],
    )
    protocol = entry("protocol", "protocol_n_s_object_p", "NSObject-p")
    cls = entry("class", "class_n_s_object", "NSObject")
    loader = _loader()

    summary = loader.load([header, protocol, cls] if protocol_first else [header, cls, protocol])

    assert summary.attached == 2
    by_kind = {entity.kind: entity for entity in loader.store.entities()}
    assert [m.name for m in by_kind["protocol"].methods] == ["isProxy"]
    assert [m.name for m in by_kind["struct"].methods] == ["description"]
