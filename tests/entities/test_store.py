"""Tests for the run-scoped entity store."""

from __future__ import annotations

import pytest

from objcgen.entities import (
    DuplicateDefinitionError,
    EntityStore,
    FileNode,
    ProtocolType,
    StoreSealedError,
    StructType,
)


def test_get_or_create_returns_one_object_per_refid(store: EntityStore) -> None:
    first = store.get_or_create("class_a")
    assert store.get_or_create("class_a") is first
    assert isinstance(first, StructType)
    assert first.defined is False
    assert len(store) == 1


def test_define_struct_fills_placeholder_in_place(store: EntityStore) -> None:
    placeholder = store.get_or_create("class_a")
    entity = store.define_struct("class_a", is_class=True)
    entity.define("A")

    assert entity is placeholder
    assert entity.is_class is True
    assert entity.host_type_name() == ("A", True)


def test_define_protocol_replaces_placeholder(store: EntityStore) -> None:
    ref = store.reference("protocol_delegate")
    protocol = store.define_protocol("protocol_delegate")
    protocol.define("NSWindowDelegate-p")

    assert isinstance(store.get("protocol_delegate"), ProtocolType)
    assert protocol.name == "NSWindowDelegate"
    assert ref.target is protocol
    assert ref.host_type_name() == ("NSWindowDelegate", True)
    assert ref.cast_to_host("r") == ("r", True)


def test_entities_skip_placeholders_and_sort_by_name(store: EntityStore) -> None:
    store.get_or_create("class_unused")
    store.define_struct("class_b").define("B")
    store.define_struct("class_a").define("A")

    assert [entity.name for entity in store.entities()] == ["A", "B"]
    assert len(store.entities(include_placeholders=True)) == 3


def test_lookup_by_name(store: EntityStore) -> None:
    entity = store.define_struct("class_a")
    entity.define("NSAlert")

    assert store.lookup_by_name("NSAlert") is entity
    assert store.lookup_by_name("NSPanel") is None
    assert store.index_by_name() == {"NSAlert": entity}


def test_redefinition_resets_members(store: EntityStore) -> None:
    entity = store.define_struct("class_a")
    entity.define("A")
    entity.methods.append(object())
    entity.define("A")
    assert entity.methods == []


def test_register_file_rejects_duplicates(store: EntityStore) -> None:
    store.register_file(FileNode(refid="file_a", name="NSAlert.h"))
    with pytest.raises(DuplicateDefinitionError):
        store.register_file(FileNode(refid="file_a", name="NSAlert.h"))
    assert [node.name for node in store.files()] == ["NSAlert.h"]


def test_sealed_store_rejects_new_entities(store: EntityStore) -> None:
    store.define_struct("class_a").define("A")
    store.seal()

    assert store.get_or_create("class_a").name == "A"
    with pytest.raises(StoreSealedError):
        store.get_or_create("class_b")
    with pytest.raises(StoreSealedError):
        store.define_protocol("protocol_c")


def test_seal_renames_protocol_sharing_a_class_name(store: EntityStore) -> None:
    protocol = store.define_protocol("protocol_n_s_object_p")
    protocol.define("NSObject-p")
    store.define_struct("class_n_s_object", is_class=True).define("NSObject")
    store.define_protocol("protocol_n_s_copying_p").define("NSCopying-p")
    # Name lookups made while loading must not pin the shared name.
    assert protocol.host_type_name() == ("NSObject", True)

    store.seal()

    assert protocol.host_type_name() == ("NSObjectProtocol", True)
    assert store.lookup_by_name("NSCopying").host_type_name() == ("NSCopying", True)
    assert store.index_by_name("protocol").keys() == {"NSObject", "NSCopying"}
