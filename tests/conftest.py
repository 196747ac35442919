from pathlib import Path

import pytest

from mdsite.config import Settings


def write_page(root: Path, rel: str, body: str = "", **meta: str) -> Path:
    lines = ["---"]
    lines.extend(f"{key}: {value}" for key, value in meta.items())
    lines.append("---")
    lines.append(body)
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def site_dir(tmp_path):
    root = tmp_path / "dist"
    root.mkdir()
    return root


@pytest.fixture
def settings(site_dir):
    return Settings(source_dir=site_dir, output_dir=site_dir, site_name="Test Site")


@pytest.fixture
def make_page(site_dir):
    def _make(rel: str, body: str = "", **meta: str) -> Path:
        return write_page(site_dir, rel, body, **meta)

    return _make
