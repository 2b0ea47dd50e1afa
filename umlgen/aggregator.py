"""Grouping of class records into packages and external stub synthesis."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .analyzers.complexity import external_complexity
from .logging import get_logger
from .models import ClassRecord, IdFactory, PackageRecord

EXTERNAL_PACKAGE_PATH = "external"
EXTERNAL_PACKAGE_ID = "package_external"
EXTERNAL_PACKAGE_NAME = "External Libraries"


def package_name_for(path: str) -> str:
    return path.split("/")[-1] or "root"


class PackageAccumulator:
    """Ordered ``package path -> PackageRecord`` map built during aggregation."""

    def __init__(self, id_factory: IdFactory | None = None) -> None:
        self._ids = id_factory or IdFactory()
        self._packages: Dict[str, PackageRecord] = {}

    def add(self, record: ClassRecord) -> PackageRecord:
        package = self.get_or_create(record.package_path)
        package.class_ids.append(record.id)
        return package

    def get_or_create(self, path: str) -> PackageRecord:
        package = self._packages.get(path)
        if package is None:
            package = PackageRecord(
                id=self._ids.new("package"),
                name=package_name_for(path),
                path=path,
            )
            self._packages[path] = package
        return package

    def external_package(self) -> PackageRecord:
        """Return the shared stub package, reusing a real ``external`` directory if present."""
        package = self._packages.get(EXTERNAL_PACKAGE_PATH)
        if package is None:
            package_id = EXTERNAL_PACKAGE_ID
            if not self._ids.claim(package_id):
                package_id = self._ids.new(EXTERNAL_PACKAGE_ID)
            package = PackageRecord(
                id=package_id,
                name=EXTERNAL_PACKAGE_NAME,
                path=EXTERNAL_PACKAGE_PATH,
            )
            self._packages[EXTERNAL_PACKAGE_PATH] = package
        return package

    def packages(self) -> List[PackageRecord]:
        return list(self._packages.values())


@dataclass
class AggregationResult:
    """Packages plus the class list extended with external stubs."""

    packages: List[PackageRecord]
    classes: List[ClassRecord]

    @property
    def stubs(self) -> List[ClassRecord]:
        return [record for record in self.classes if record.is_external]


def find_external_names(records: Iterable[ClassRecord]) -> List[str]:
    """Names used in extends/implements that no record defines, first-seen order."""
    records = list(records)
    defined = {record.name for record in records}
    external: Dict[str, None] = {}
    for record in records:
        for name in [*record.extends, *record.implements]:
            if name not in defined:
                external.setdefault(name, None)
    return list(external)


class Aggregator:
    """Folds per-file records into the project-level package graph."""

    def __init__(self, id_factory: IdFactory | None = None) -> None:
        self._ids = id_factory or IdFactory()
        self.logger = get_logger("aggregator")

    def aggregate(
        self,
        records: Iterable[ClassRecord],
        accumulator: Optional[PackageAccumulator] = None,
    ) -> AggregationResult:
        accumulator = accumulator or PackageAccumulator(self._ids)
        classes = list(records)
        for record in classes:
            accumulator.add(record)

        external_names = find_external_names(classes)
        if external_names:
            self.logger.info(
                "Creating %d stub classes for external dependencies", len(external_names)
            )
            package = accumulator.external_package()
            for name in external_names:
                stub = self._build_stub(name, package.path)
                classes.append(stub)
                package.class_ids.append(stub.id)
                self.logger.debug("Created stub for %s", name)

        return AggregationResult(packages=accumulator.packages(), classes=classes)

    def _build_stub(self, name: str, package_path: str) -> ClassRecord:
        stub_id = f"external_{name.replace('.', '_').lower()}"
        if not self._ids.claim(stub_id):
            stub_id = self._ids.new(stub_id)
        return ClassRecord(
            id=stub_id,
            name=name,
            package_path=package_path,
            file_path=f"{package_path}/{name}",
            complexity=external_complexity(),
            is_external=True,
        )


__all__ = [
    "AggregationResult",
    "Aggregator",
    "EXTERNAL_PACKAGE_NAME",
    "EXTERNAL_PACKAGE_PATH",
    "PackageAccumulator",
    "find_external_names",
    "package_name_for",
]
