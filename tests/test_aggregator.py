"""Tests for package grouping and external stub synthesis."""

from __future__ import annotations

from umlgen.aggregator import (
    EXTERNAL_PACKAGE_NAME,
    Aggregator,
    PackageAccumulator,
    find_external_names,
    package_name_for,
)
from umlgen.analyzers.complexity import compute_complexity
from umlgen.models import ClassRecord, SequentialIdFactory


def _record(record_id: str, name: str, package: str, **kwargs) -> ClassRecord:  # type: ignore[no-untyped-def]
    return ClassRecord(
        id=record_id,
        name=name,
        package_path=package,
        file_path=f"{package}/{name}.ts",
        complexity=compute_complexity("", 0),
        **kwargs,
    )


def test_package_name_for_uses_last_segment() -> None:
    assert package_name_for("src/components") == "components"
    assert package_name_for("root") == "root"


def test_aggregate_groups_records_by_directory() -> None:
    records = [
        _record("c1", "A", "src"),
        _record("c2", "B", "src/components"),
        _record("c3", "C", "src"),
    ]

    result = Aggregator(SequentialIdFactory()).aggregate(records)

    assert [(package.path, package.name) for package in result.packages] == [
        ("src", "src"),
        ("src/components", "components"),
    ]
    assert result.packages[0].class_ids == ["c1", "c3"]
    assert result.packages[1].class_ids == ["c2"]
    assert result.stubs == []


def test_aggregate_creates_stub_for_unknown_parent() -> None:
    records = [_record("c1", "A", "src", extends=["B"])]

    result = Aggregator(SequentialIdFactory()).aggregate(records)

    assert [record.name for record in result.classes] == ["A", "B"]
    stub = result.classes[1]
    assert stub.id == "external_b"
    assert stub.is_external
    assert stub.subtype == "external"
    assert stub.package_path == "external"
    assert stub.file_path == "external/B"
    assert stub.complexity.lines_of_code == 75
    assert stub.complexity.threat_level == "EXTERNAL"

    external = result.packages[-1]
    assert external.id == "package_external"
    assert external.name == EXTERNAL_PACKAGE_NAME
    assert external.class_ids == ["external_b"]


def test_aggregate_skips_stubs_for_known_names() -> None:
    records = [
        _record("c1", "A", "src", extends=["B"], implements=["Shape", "B"]),
        _record("c2", "B", "src/base"),
    ]

    result = Aggregator(SequentialIdFactory()).aggregate(records)

    assert [stub.name for stub in result.stubs] == ["Shape"]
    assert len([package for package in result.packages if package.path == "external"]) == 1


def test_aggregate_deduplicates_stub_names_and_sanitizes_ids() -> None:
    records = [
        _record("c1", "A", "src", extends=["React.Component"]),
        _record("c2", "B", "src", extends=["React.Component"], implements=["Iterable"]),
    ]

    result = Aggregator(SequentialIdFactory()).aggregate(records)

    assert [(stub.id, stub.name) for stub in result.stubs] == [
        ("external_react_component", "React.Component"),
        ("external_iterable", "Iterable"),
    ]


def test_aggregate_suffixes_colliding_stub_ids() -> None:
    records = [_record("c1", "A", "src", implements=["Foo.Bar", "Foo_Bar"])]

    result = Aggregator(SequentialIdFactory()).aggregate(records)

    ids = [stub.id for stub in result.stubs]
    assert ids[0] == "external_foo_bar"
    assert ids[1] != ids[0]
    assert ids[1].startswith("external_foo_bar_")


def test_aggregate_reuses_real_external_directory() -> None:
    records = [
        _record("c1", "Client", "external", extends=["Base"]),
    ]

    result = Aggregator(SequentialIdFactory()).aggregate(records)

    assert len(result.packages) == 1
    package = result.packages[0]
    assert package.name == "external"
    assert package.class_ids == ["c1", "external_base"]


def test_find_external_names_preserves_first_seen_order() -> None:
    records = [
        _record("c1", "A", "src", extends=["Z"], implements=["Y", "Z"]),
        _record("c2", "B", "src", implements=["X", "A"]),
    ]

    assert find_external_names(records) == ["Z", "Y", "X"]


def test_accumulator_external_package_is_shared() -> None:
    accumulator = PackageAccumulator(SequentialIdFactory())

    first = accumulator.external_package()
    second = accumulator.external_package()

    assert first is second
    assert accumulator.packages() == [first]
