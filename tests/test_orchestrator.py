"""End-to-end tests for the UML generation pipeline."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests._fixtures.repo_builder import RepoBuilder
from umlgen.git.history import GitHistory
from umlgen.models import GitCommit, GitMetrics, SequentialIdFactory
from umlgen.orchestrator import UmlGenerator


def _classes_by_name(snapshot) -> dict:  # type: ignore[no-untyped-def]
    return {record.name: record for record in snapshot.classes}


def test_generate_creates_stub_for_external_parent(
    repo_builder: RepoBuilder, generator: UmlGenerator
) -> None:
    repo_builder.write({"src/A.ts": "export class A extends B {}\n"})

    snapshot = generator.generate(repo_builder.path()).snapshot
    document = snapshot.to_dict()

    assert [cls["name"] for cls in document["classes"]] == ["A", "B"]
    a_record, b_record = document["classes"]
    assert a_record["extends"] == ["B"]
    assert a_record["package"] == "src"
    assert a_record["subtype"] == "utility"
    assert b_record["subtype"] == "external"
    assert b_record["package"] == "external"
    assert b_record["metrics"]["lines"] == 75

    packages = {package["path"]: package for package in document["packages"]}
    assert packages["external"]["name"] == "External Libraries"
    assert packages["external"]["classes"] == [b_record["id"]]
    assert packages["src"]["classes"] == [a_record["id"]]


def test_generate_ignores_non_source_files(
    repo_builder: RepoBuilder, generator: UmlGenerator
) -> None:
    repo_builder.write(
        {
            "README.md": "# Docs\n",
            "src/util.ts": "export function util() { return 1; }\n",
        }
    )

    snapshot = generator.generate(repo_builder.path(), include=[]).snapshot

    assert len(snapshot.classes) == 1
    record = snapshot.classes[0]
    assert record.name == "util"
    assert record.package_path == "src"
    assert [package.path for package in snapshot.packages] == ["src"]


def test_generate_skips_undecodable_files(
    repo_builder: RepoBuilder, generator: UmlGenerator
) -> None:
    repo_builder.write(
        {
            "src/one.ts": "export const one = 1;\n",
            "src/two.ts": "export const two = 2;\n",
        }
    )
    repo_builder.write_bytes("src/broken.ts", b"export const x = '\xff\xfe';\n")

    outcome = generator.generate(repo_builder.path())

    assert sorted(record.name for record in outcome.snapshot.classes) == ["one", "two"]
    assert outcome.skipped == ["src/broken.ts"]
    assert sorted(outcome.analyzed) == ["src/one.ts", "src/two.ts"]


def test_generate_keeps_syntactically_broken_files(
    repo_builder: RepoBuilder, generator: UmlGenerator
) -> None:
    repo_builder.write({"src/Broken.ts": "export class Broken extends Base { method( {\n"})

    outcome = generator.generate(repo_builder.path())

    assert outcome.skipped == []
    assert outcome.snapshot.classes[0].name == "Broken"


def test_generate_honors_excludes_and_detects_tests(
    repo_builder: RepoBuilder, generator: UmlGenerator
) -> None:
    repo_builder.write(
        {
            "src/Button.tsx": "export const Button = () => null;\n",
            "src/Button.test.tsx": "test('renders', () => {});\n",
            "src/Card.tsx": "export const Card = () => null;\n",
            "node_modules/lib/index.js": "export const lib = 1;\n",
        }
    )

    snapshot = generator.generate(repo_builder.path(), include=[]).snapshot
    records = _classes_by_name(snapshot)

    assert sorted(records) == ["Button", "Card"]
    assert records["Button"].test_exists is True
    assert records["Card"].test_exists is False
    assert all("node_modules" not in record.file_path for record in snapshot.classes)


def test_generate_groups_root_files_under_root_package(
    repo_builder: RepoBuilder, generator: UmlGenerator
) -> None:
    repo_builder.write({"index.ts": "export const main = () => 1;\n"})

    snapshot = generator.generate(repo_builder.path(), include=[]).snapshot

    assert snapshot.classes[0].package_path == "root"
    assert snapshot.packages[0].name == "root"


def test_generate_records_react_components_and_dependencies(
    repo_builder: RepoBuilder, generator: UmlGenerator
) -> None:
    repo_builder.write(
        {
            "src/components/App.jsx": """
                import React from 'react';
                import { format } from '../utils/format';
                import Header from './Header.jsx';

                export default function App() {
                  if (!format) {
                    return null;
                  }
                  return <Header />;
                }
            """,
        }
    )

    record = generator.generate(repo_builder.path()).snapshot.classes[0]

    assert record.name == "App"
    assert record.subtype == "react_component"
    assert record.dependencies == ["format", "Header"]
    assert record.package_path == "src/components"
    assert record.complexity.cyclomatic_complexity == 1


def test_generate_is_idempotent(repo_builder: RepoBuilder, generator: UmlGenerator) -> None:
    repo_builder.write(
        {
            "src/A.ts": "export class A extends B implements C {}\n",
            "src/lib/D.ts": "export class D extends A {}\n",
        }
    )

    first = generator.generate(repo_builder.path()).snapshot.to_dict()
    second = generator.generate(repo_builder.path()).snapshot.to_dict()

    assert first["packages"] == second["packages"]
    assert first["classes"] == second["classes"]
    assert first["project"] == second["project"]


def test_generate_applies_config_file(repo_builder: RepoBuilder, generator: UmlGenerator) -> None:
    repo_builder.write(
        {
            ".umlgen.yml": """
                include: [app]
                project:
                  name: storefront
                  language: TypeScript
            """,
            "app/a.ts": "export const a = 1;\n",
            "src/b.ts": "export const b = 2;\n",
        }
    )

    snapshot = generator.generate(repo_builder.path()).snapshot

    assert [record.file_path for record in snapshot.classes] == ["app/a.ts"]
    assert snapshot.project.name == "storefront"
    assert snapshot.project.language == "TypeScript"


def test_generate_rejects_missing_root(tmp_path: Path, generator: UmlGenerator) -> None:
    with pytest.raises(FileNotFoundError):
        generator.generate(tmp_path / "missing")


def test_run_writes_default_output(
    repo_builder: RepoBuilder, generator: UmlGenerator, tmp_path: Path, monkeypatch
) -> None:
    repo_builder.write({"src/a.ts": "export const a = 1;\n"})
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    outcome = generator.run(repo_builder.path())

    assert outcome.output_path == workdir / "repo-uml.json"
    document = json.loads(outcome.output_path.read_text(encoding="utf-8"))
    assert document["version"] == "6.0"
    assert document["project"]["name"] == "repo"
    assert [cls["name"] for cls in document["classes"]] == ["a"]


def test_run_writes_explicit_output(
    repo_builder: RepoBuilder, generator: UmlGenerator, tmp_path: Path
) -> None:
    repo_builder.write({"src/a.ts": "export const a = 1;\n"})
    target = tmp_path / "out" / "city.json"

    outcome = generator.run(repo_builder.path(), target)

    assert outcome.output_path == target
    assert target.exists()


def test_analyze_file_attaches_git_metrics(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"src/a.ts": "export const a = 1;\n"})

    class StaticHistory(GitHistory):
        def metrics(self, file_path: Path, project_root: Path) -> GitMetrics:
            return GitMetrics(
                commit_count=4,
                last_commit=GitCommit(
                    hash="abc1234",
                    author="Dev",
                    email="dev@example.com",
                    date="2024-01-01T00:00:00Z",
                    message="init",
                    days_ago=10,
                ),
            )

    root = repo_builder.path().resolve()
    record = UmlGenerator(git_history=StaticHistory()).analyze_file(
        root / "src" / "a.ts", root, id_factory=SequentialIdFactory()
    )

    assert record.id == "component_1"
    assert record.git_metrics.commit_count == 4
    assert record.to_dict()["gitMetrics"]["lastCommit"]["daysAgo"] == 10
    assert record.to_dict()["gitMetrics"]["isGitTracked"] is True
