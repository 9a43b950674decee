"""Fixtures for integration tests: a small on-disk project to format."""

from pathlib import Path

import pytest

UNFORMATTED_TSX = """import styled from "styled-components";

export const Button = styled.button`
        color:red;   font-size:12px;
`;
"""

FORMATTED_TSX = """import styled from "styled-components";

export const Button = styled.button`
  color: red;
  font-size: 12px;
`;
"""

CLEAN_TS = """import { css } from "styled-components";

export const base = css`
  margin: 0;
`;
"""


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A project root (also the cwd) with one dirty file, one clean file and ignored folders."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "Button.tsx").write_text(UNFORMATTED_TSX, encoding="utf-8")
    (tmp_path / "src" / "base.ts").write_text(CLEAN_TS, encoding="utf-8")
    for ignored in ("node_modules/lib", "dist"):
        (tmp_path / ignored).mkdir(parents=True)
        (tmp_path / ignored / "index.ts").write_text(UNFORMATTED_TSX, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    for name in ("STYLED_FMT_INDENT", "STYLED_FMT_TAGS", "STYLED_FMT_ON_TEMPLATE_ERROR"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path
