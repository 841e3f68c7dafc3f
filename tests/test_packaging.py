import re
from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def test_pyproject_installs_dependencies_not_a_second_package_root():
    data = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))

    assert data["tool"]["setuptools"]["packages"] == []
    assert "package-dir" not in data["tool"]["setuptools"]
    names = {re.split(r"[<>=!~ ]", dep, maxsplit=1)[0] for dep in data["project"]["dependencies"]}
    assert {"Flask", "python-dotenv", "mysql-connector-python"} <= names
