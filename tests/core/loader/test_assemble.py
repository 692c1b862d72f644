# tests/core/loader/test_assemble.py
"""
Testes da classificação de entradas e da montagem da árvore.

Cobre cada linha da tabela de convenções de caminho, o agrupamento de
subcharts por nome, a resolução em formato diretório e `.tgz`, e a
propagação de erros com contexto.
"""

import pytest

from chartkit.core.chart import Entry
from chartkit.core.config import LoaderConfig
from chartkit.core.context import LoadContext
from chartkit.core.errors import (
    EmptyArchiveError,
    FormatError,
    MissingMetadataError,
    StructureError,
    UnsupportedFormatError,
)
from chartkit.core.loader import EntryKind, assemble_chart, classify


def _entries(files):
    return [Entry(path=k, data=v) for k, v in files.items()]


@pytest.mark.parametrize(
    "path,kind,group",
    [
        ("Chart.yaml", EntryKind.METADATA, None),
        ("values.toml", EntryKind.LEGACY_VALUES, None),
        ("values.yaml", EntryKind.VALUES, None),
        ("templates/a.yaml", EntryKind.TEMPLATE, None),
        ("templates/_helpers.tpl", EntryKind.TEMPLATE, None),
        ("charts/db-1.0.0.tgz.prov", EntryKind.PROVENANCE, None),
        ("charts/.prov", EntryKind.PROVENANCE, None),
        ("charts/db/.prov", EntryKind.PROVENANCE, None),
        ("charts/.cache/x", EntryKind.IGNORED, ".cache"),
        ("charts/_skip/Chart.yaml", EntryKind.IGNORED, "_skip"),
        ("charts/db/Chart.yaml", EntryKind.SUBCHART, "db"),
        ("charts/db-1.0.0.tgz", EntryKind.SUBCHART, "db-1.0.0.tgz"),
        ("README.md", EntryKind.FILE, None),
        ("sub/values.yaml", EntryKind.FILE, None),
    ],
)
def test_classify(path, kind, group):
    item = classify(Entry(path=path, data=b""))
    assert item.kind is kind
    assert item.group == group


def test_subchart_child_path_drops_charts_prefix():
    item = classify(Entry(path="charts/db/templates/a.yaml", data=b"a"))
    assert item.child == Entry(path="db/templates/a.yaml", data=b"a")


def test_assemble_basic(chartfile, load_ctx):
    chart = assemble_chart(
        _entries(
            {
                "Chart.yaml": chartfile("x"),
                "values.yaml": b"a: 1\n",
                "templates/b.yaml": b"b",
                "templates/a.yaml": b"a",
                "LICENSE": b"MIT",
                "charts/db-1.0.0.tgz.prov": b"signature",
            }
        ),
        ctx=load_ctx,
    )

    assert chart.metadata.name == "x"
    assert chart.values == b"a: 1\n"
    assert [t.name for t in chart.templates] == ["templates/b.yaml", "templates/a.yaml"]
    assert [(f.name, f.data) for f in chart.files] == [
        ("LICENSE", b"MIT"),
        ("charts/db-1.0.0.tgz.prov", b"signature"),
    ]
    assert chart.dependencies == []


def test_bare_prov_files_stay_with_parent(chartfile, load_ctx):
    chart = assemble_chart(
        _entries(
            {
                "Chart.yaml": chartfile("parent"),
                "charts/.prov": b"sig",
                "charts/db/Chart.yaml": chartfile("db"),
                "charts/db/.prov": b"db-sig",
            }
        ),
        ctx=load_ctx,
    )

    assert [f.name for f in chart.files] == ["charts/.prov", "charts/db/.prov"]
    assert chart.dependencies[0].files == []
    assert "parent" not in load_ctx.warnings


def test_missing_chartfile(load_ctx):
    with pytest.raises(MissingMetadataError):
        assemble_chart(_entries({"values.yaml": b"a: 1\n"}), ctx=load_ctx)


def test_chartfile_without_name(load_ctx):
    with pytest.raises(MissingMetadataError):
        assemble_chart(_entries({"Chart.yaml": b"version: 1.0.0\n"}), ctx=load_ctx)


def test_malformed_chartfile(load_ctx):
    with pytest.raises(FormatError):
        assemble_chart(_entries({"Chart.yaml": b"name: [\n"}), ctx=load_ctx)


def test_values_toml_rejected_even_with_valid_chart(chartfile, load_ctx):
    with pytest.raises(UnsupportedFormatError):
        assemble_chart(
            _entries({"Chart.yaml": chartfile("x"), "values.yaml": b"", "values.toml": b""}),
            ctx=load_ctx,
        )


def test_directory_subcharts_in_discovery_order(chartfile, load_ctx):
    chart = assemble_chart(
        _entries(
            {
                "Chart.yaml": chartfile("parent"),
                "charts/zeta/Chart.yaml": chartfile("zeta"),
                "charts/alpha/Chart.yaml": chartfile("alpha"),
                "charts/alpha/templates/x.yaml": b"x",
                "charts/zeta/values.yaml": b"z: 1\n",
            }
        ),
        ctx=load_ctx,
    )

    assert [d.name for d in chart.dependencies] == ["zeta", "alpha"]
    zeta, alpha = chart.dependencies
    assert zeta.values == b"z: 1\n"
    assert [t.name for t in alpha.templates] == ["templates/x.yaml"]


def test_nested_subcharts_are_rerooted(chartfile, load_ctx):
    chart = assemble_chart(
        _entries(
            {
                "Chart.yaml": chartfile("a"),
                "charts/b/Chart.yaml": chartfile("b"),
                "charts/b/charts/c/Chart.yaml": chartfile("c"),
                "charts/b/charts/c/templates/t.yaml": b"t",
                "charts/b/charts/c/notes.txt": b"n",
            }
        ),
        ctx=load_ctx,
    )

    b = chart.dependencies[0]
    c = b.dependencies[0]
    assert c.name == "c"
    assert [t.name for t in c.templates] == ["templates/t.yaml"]
    assert [f.name for f in c.files] == ["notes.txt"]
    assert b.files == [] and b.templates == []


def test_hidden_groups_are_skipped(chartfile, load_ctx):
    chart = assemble_chart(
        _entries(
            {
                "Chart.yaml": chartfile("parent"),
                "charts/_ignored/Chart.yaml": chartfile("ignored"),
                "charts/.hidden/Chart.yaml": chartfile("hidden"),
                "charts/real/Chart.yaml": chartfile("real"),
            }
        ),
        ctx=load_ctx,
    )

    assert [d.name for d in chart.dependencies] == ["real"]
    assert load_ctx.warnings["parent"] == ["ignoring subchart _ignored", "ignoring subchart .hidden"]


def test_archive_subchart(chartfile, make_tgz, load_ctx):
    inner = make_tgz({"db/Chart.yaml": chartfile("db"), "db/templates/s.yaml": b"s"})

    chart = assemble_chart(
        _entries({"Chart.yaml": chartfile("parent"), "charts/db-1.0.0.tgz": inner}),
        ctx=load_ctx,
    )

    (db,) = chart.dependencies
    assert db.name == "db"
    assert [t.name for t in db.templates] == ["templates/s.yaml"]


def test_archive_subchart_member_mismatch(chartfile, load_ctx):
    with pytest.raises(StructureError) as exc:
        assemble_chart(
            _entries({"Chart.yaml": chartfile("parent"), "charts/foo.tgz/bar": b"x"}),
            ctx=load_ctx,
        )

    msg = str(exc.value)
    assert "parent" in msg and "foo" in msg
    assert exc.value.details["member"] == "foo.tgz/bar"


def test_subchart_errors_are_wrapped(chartfile, load_ctx):
    with pytest.raises(MissingMetadataError) as exc:
        assemble_chart(
            _entries({"Chart.yaml": chartfile("parent"), "charts/broken/values.yaml": b""}),
            ctx=load_ctx,
        )

    err = exc.value
    assert str(err).startswith("error unpacking broken in parent: ")
    assert err.details["chart"] == "parent"
    assert err.details["subchart"] == "broken"
    assert isinstance(err.__cause__, MissingMetadataError)


def test_empty_archive_subchart(chartfile, make_tgz, load_ctx):
    with pytest.raises(EmptyArchiveError) as exc:
        assemble_chart(
            _entries({"Chart.yaml": chartfile("parent"), "charts/db.tgz": make_tgz({}, dirs=["db"])}),
            ctx=load_ctx,
        )

    assert "db.tgz" in str(exc.value)


def test_max_depth(chartfile):
    ctx = LoadContext(config=LoaderConfig(max_depth=2))
    files = {"Chart.yaml": chartfile("l0")}
    prefix = ""
    for level in range(1, 4):
        prefix += f"charts/l{level}/"
        files[f"{prefix}Chart.yaml"] = chartfile(f"l{level}")

    with pytest.raises(StructureError) as exc:
        assemble_chart(_entries(files), ctx=ctx)

    assert "maximum depth of 2" in str(exc.value)


def test_depth_within_limit(chartfile):
    ctx = LoadContext(config=LoaderConfig(max_depth=2))
    files = {
        "Chart.yaml": chartfile("l0"),
        "charts/l1/Chart.yaml": chartfile("l1"),
        "charts/l1/charts/l2/Chart.yaml": chartfile("l2"),
    }

    chart = assemble_chart(_entries(files), ctx=ctx)

    assert [(d, c.name) for d, c in chart.walk()] == [(0, "l0"), (1, "l1"), (2, "l2")]


def test_events_are_recorded(chartfile, load_ctx):
    assemble_chart(_entries({"Chart.yaml": chartfile("x")}), ctx=load_ctx)

    ev = load_ctx.events[-1]
    assert ev["load_id"] == "load-test-001"
    assert ev["message"] == "chart assembled"
    assert ev["chart"] == "x"
