# tests/conftest.py
"""
Fixtures compartilhados para testes do chartkit.

Este módulo fornece construtores determinísticos de fontes de chart:
- archives `.tgz` montados em memória
- árvores de diretório escritas em `tmp_path`
- conteúdo mínimo de Chart.yaml

Decisões arquiteturais:
    - Fixtures retornam funções (factories), não arquivos prontos
    - Nenhum fixture depende de arquivos versionados em disco
    - Imports do chartkit são lazy para mensagens de erro mais claras

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica de classificação
"""

import io
import tarfile
from pathlib import Path
from typing import Dict, Iterable

import pytest


def _chartfile(name: str, version: str = "0.1.0") -> bytes:
    return f"apiVersion: v1\nname: {name}\nversion: {version}\n".encode("utf-8")


def _tgz(files: Dict[str, bytes], dirs: Iterable[str] = ()) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for d in dirs:
            info = tarfile.TarInfo(d)
            info.type = tarfile.DIRTYPE
            info.mode = 0o755
            tar.addfile(info)
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def _write_tree(root: Path, files: Dict[str, bytes]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for name, data in files.items():
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
    return root


@pytest.fixture
def chartfile():
    """Factory de conteúdo Chart.yaml mínimo: `chartfile("nginx")`."""
    return _chartfile


@pytest.fixture
def make_tgz():
    """
    Factory de archives `.tgz` em memória.

    Uso: `make_tgz({"mychart/Chart.yaml": b"..."}, dirs=["mychart"])`.
    Entradas são gravadas na ordem do dicionário.
    """
    return _tgz


@pytest.fixture
def write_tree():
    """Factory que escreve `{caminho_relativo: bytes}` sob um diretório."""
    return _write_tree


@pytest.fixture
def sample_files(chartfile) -> Dict[str, bytes]:
    """Chart `frontend` com values, templates, arquivo opaco e subchart `db`."""
    return {
        "Chart.yaml": chartfile("frontend", "1.2.3"),
        "values.yaml": b"replicas: 2\n",
        "templates/deployment.yaml": b"kind: Deployment\n",
        "templates/service.yaml": b"kind: Service\n",
        "README.md": b"# frontend\n",
        "charts/db/Chart.yaml": chartfile("db"),
        "charts/db/templates/statefulset.yaml": b"kind: StatefulSet\n",
    }


@pytest.fixture
def load_ctx():
    """LoadContext novo com a configuração default."""
    from chartkit.core.context import LoadContext

    return LoadContext(load_id="load-test-001")
