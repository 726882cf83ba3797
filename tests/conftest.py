from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Проект с документами всех диалектов и конфигом svgshield.yaml."""
    root = tmp_path
    write(
        root / "src" / "Icon.tsx",
        'export const Icon = () => (\n'
        '  <svg className="icon" viewBox="0 0 24 24">\n'
        '    <path strokeWidth={2} d="M0 0L10 10" />\n'
        '  </svg>\n'
        ');\n',
    )
    write(
        root / "src" / "Icon.vue",
        '<template>\n'
        '  <svg :width="size" viewBox="0 0 24 24"><path d="M0 0"/></svg>\n'
        '</template>\n',
    )
    write(root / "assets" / "logo.svg", '<svg viewBox="0 0 10 10"><rect width="10" height="10"/></svg>\n')
    write(root / "README.md", "# not processed\n<svg></svg>\n")
    return root
