"""Tests for the type algebra shared by the resolver and the emitter."""

from __future__ import annotations

from objcgen.entities import EntityStore
from objcgen.ir import (
    Array,
    Const,
    EntityRef,
    FuncArg,
    FunctionType,
    Named,
    Nullable,
    ObjectType,
    Pointer,
    Primitive,
    StringType,
    Unknown,
    describe,
)


def test_primitive_casts() -> None:
    assert Primitive("int").host_type_name() == ("int", True)
    assert Primitive("int").cast_to_native("x") == ("x", True)
    assert Primitive("bool").cast_to_host("r") == ("r.Bool()", True)
    assert Primitive("float32").cast_to_host("r") == ("float32(r.Float())", True)
    assert Primitive("complex128").cast_to_host("r") == ("r", False)


def test_named_is_spellable_but_not_castable() -> None:
    named = Named("NSRect")
    assert named.host_type_name() == ("NSRect", True)
    assert named.cast_to_native("x")[1] is False
    assert named.cast_to_host("x")[1] is False


def test_wrappers_forward_casts_and_decorate_names() -> None:
    elem = Primitive("int")
    assert Pointer(elem).host_type_name() == ("*int", True)
    assert Array(elem, "4").host_type_name() == ("[4]int", True)
    assert Array(elem).host_type_name() == ("[]int", True)
    assert Const(elem).host_type_name() == elem.host_type_name()
    assert Nullable(Pointer(elem)).cast_to_host("r") == elem.cast_to_host("r")
    assert Const(None).host_type_name() == ("", False)


def test_function_type_renders_go_signature() -> None:
    fn = FunctionType(
        ret=Primitive("bool"),
        args=(FuncArg("count", Primitive("int")), FuncArg("", Primitive("uintptr"))),
    )
    assert fn.host_type_name() == ("func(count int, arg1 uintptr) bool", True)
    assert fn.cast_to_native("f")[1] is False
    assert FunctionType().host_type_name() == ("func()", True)


def test_function_type_with_missing_argument_type_is_not_ok() -> None:
    fn = FunctionType(args=(FuncArg("x", None),))
    assert fn.render_args() == ("(x)", False)


def test_unknown_keeps_a_safe_comment() -> None:
    assert Unknown().host_type_name() == ("interface{}", False)
    name, ok = Unknown(raw="struct foo */ bar").host_type_name()
    assert not ok
    assert name == "interface{} /* struct foo * / bar */"


def test_string_and_object_types() -> None:
    assert StringType().cast_to_native("s") == ("foundation.NSStringFromString(s)", True)
    assert StringType().cast_to_host("r") == ("r.String()", True)
    assert ObjectType().host_type_name() == ("objc.Object", True)


def test_entity_ref_follows_store_definition() -> None:
    store = EntityStore()
    ref = store.reference("class_n_s_button")
    assert ref.host_type_name() == ("class_n_s_button", False)

    store.define_struct("class_n_s_button", is_class=True).define("NSButton")

    assert ref.host_type_name() == ("NSButton", True)
    assert ref.cast_to_host("r") == ("AsNSButton(r)", True)
    assert ref == EntityRef("class_n_s_button", EntityStore())


def test_describe() -> None:
    assert describe(None) == "void"
    assert describe(Pointer(Primitive("int"))) == "*int"
