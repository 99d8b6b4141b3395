from __future__ import annotations

"""
Unit tests for the Version Listing Service.

Verifies row selection (print_all), template substitution, header and
line-ending handling, and CSV output.
"""

from typing import Dict
from unittest.mock import MagicMock

import pytest

from bumpguard.core.services.version_lister import list_versions, render_template
from bumpguard.domain.change_models import ModuleDescriptor
from bumpguard.domain.report_models import ListOptions
from bumpguard.infra.network import RemoteRepository, VersionLookup

CENTRAL = RemoteRepository("central", "https://repo.example.org/maven2")


@pytest.fixture
def context() -> MagicMock:
    """root is up to date, core is behind, api was never published."""
    remote = {"root": "1.0", "core": "0.9"}
    ctx = MagicMock()
    ctx.find_latest_version.side_effect = lambda g, a: (
        VersionLookup(remote[a], CENTRAL) if a in remote else VersionLookup()
    )
    return ctx


def _options(**overrides) -> ListOptions:
    values = dict(
        print_header=True,
        print_all=False,
        header="coords,local,remote",
        template="groupId:artifactId,localVersion,remoteVersion",
        line_ending="\n",
    )
    values.update(overrides)
    return ListOptions(**values)


def test_only_differing_modules_by_default(
        sample_descriptors: Dict[str, ModuleDescriptor], context: MagicMock
) -> None:
    result = list_versions(sample_descriptors, context, _options())

    assert result.rows == ["g:api,1.0,", "g:core,1.0,0.9"]
    assert result.content == "coords,local,remote\ng:api,1.0,\ng:core,1.0,0.9"
    assert result.output_path is None


def test_print_all_without_header(sample_descriptors: Dict[str, ModuleDescriptor], context: MagicMock) -> None:
    result = list_versions(
        sample_descriptors, context, _options(print_all=True, print_header=False, line_ending="\r\n")
    )

    assert len(result.rows) == 3
    assert result.content == "g:api,1.0,\r\ng:core,1.0,0.9\r\ng:root,1.0,1.0"


def test_output_file_gets_csv_suffix(
        sample_descriptors: Dict[str, ModuleDescriptor], context: MagicMock, tmp_path
) -> None:
    base = tmp_path / "out" / "versions"
    result = list_versions(sample_descriptors, context, _options(output_file=str(base), line_ending="\r\n"))

    expected_path = str(base) + ".csv"
    assert result.output_path == expected_path
    with open(expected_path, "r", encoding="utf-8", newline="") as f:
        assert f.read() == result.content


def test_render_template_all_tokens() -> None:
    module = ModuleDescriptor("org.acme", "core", "2.0", "/repo/core", pom_path="/repo/core/pom.xml")
    template = (
        "baseDir|pomPath|groupId|artifactId|localVersion|"
        "remoteVersion|remoteRepositoryId|remoteRepositoryUrl"
    )

    row = render_template(template, module, VersionLookup("1.5", CENTRAL))

    assert row == (
        "/repo/core|/repo/core/pom.xml|org.acme|core|2.0|"
        "1.5|central|https://repo.example.org/maven2"
    )


def test_render_template_missing_remote_is_empty() -> None:
    module = ModuleDescriptor("g", "a", "1.0", "/a")
    assert render_template("[remoteVersion][remoteRepositoryId]", module, VersionLookup()) == "[][]"


def test_render_template_keeps_plain_text() -> None:
    module = ModuleDescriptor("g", "a", "1.0", "/a")
    assert render_template("version of artifactId: localVersion", module, VersionLookup()) == (
        "version of a: 1.0"
    )
