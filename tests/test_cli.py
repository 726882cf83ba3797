import shlex
import sys
from pathlib import Path

from tests.infrastructure.cli_utils import jload, run_cli
from tests.infrastructure.file_utils import write


def test_detect(tmp_path: Path):
    cp = run_cli(tmp_path, "detect", stdin='<svg :width="w"></svg>')
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == {"foreign": True}

    cp = run_cli(tmp_path, "detect", stdin='<svg width="1"></svg>')
    assert jload(cp.stdout) == {"foreign": False}


def test_prepare_reads_file(tmp_path: Path):
    write(tmp_path / "icon.svg", "<svg><path strokeWidth={2} /></svg>")
    cp = run_cli(tmp_path, "prepare", "icon.svg")
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == {"preparedFragment": '<svg><path stroke-width="2" /></svg>', "wasForeign": True}


def test_prepare_finalize_round_trip(tmp_path: Path):
    fragment = '<svg className="icon" onClick={() => go(1)} {...rest}><text>{label}</text></svg>'
    prepared = jload(run_cli(tmp_path, "prepare", stdin=fragment).stdout)
    assert prepared["wasForeign"] is True

    cp = run_cli(tmp_path, "finalize", "--was-foreign", stdin=prepared["preparedFragment"])
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == fragment


def test_finalize_without_flag_is_identity(tmp_path: Path):
    text = '<svg data-svgshield-p-__COLON__x="y"></svg>'
    assert run_cli(tmp_path, "finalize", stdin=text).stdout == text


def test_no_camel_case(tmp_path: Path):
    fragment = '<svg className="a" :x="y"></svg>'
    prepared = jload(run_cli(tmp_path, "prepare", "--no-camel-case", stdin=fragment).stdout)
    assert 'className="a"' in prepared["preparedFragment"]
    cp = run_cli(tmp_path, "finalize", "--no-camel-case", "--was-foreign", stdin=prepared["preparedFragment"])
    assert cp.stdout == fragment


def test_optimize_identity(tmpproj: Path):
    cp = run_cli(tmpproj, "optimize", ".", "--identity")
    assert cp.returncode == 0, cp.stderr
    data = jload(cp.stdout)
    assert data["formatVersion"] == 1
    assert data["total"]["files"] == 3
    assert data["total"]["fragments"] == 3
    tsx = next(f for f in data["files"] if f["path"] == "src/Icon.tsx")
    assert tsx["dialect"] == "jsx"
    assert tsx["useCamelCase"] is True
    assert tsx["fragments"][0]["status"] == "unchanged"
    logo = next(f for f in data["files"] if f["path"] == "assets/logo.svg")
    assert (logo["dialect"], logo["mode"]) == ("svg", "document")
    assert tsx["mode"] == "inline"
    assert data["documentOptimizer"] == "IdentityOptimizer()"


def test_optimize_camel_case_override(tmpproj: Path):
    cp = run_cli(tmpproj, "optimize", "src/Icon.tsx", "--identity", "--no-camel-case")
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout)["files"][0]["useCamelCase"] is False


def test_optimize_missing_optimizer_reports_failure(tmpproj: Path):
    cp = run_cli(tmpproj, "optimize", "assets", "--command", "svgshield-no-such-tool -i -")
    assert cp.returncode == 1
    data = jload(cp.stdout)
    fragment = data["files"][0]["fragments"][0]
    assert fragment["status"] == "failed"
    assert "not found" in fragment["error"]
    assert data["total"]["failed"] == 1


def test_optimize_document_command_only_for_svg_files(tmpproj: Path):
    cp = run_cli(tmpproj, "optimize", ".", "--identity", "--document-command", "svgshield-no-such-tool")
    assert cp.returncode == 0, cp.stderr

    copy = shlex.join([sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read())"])
    cp = run_cli(tmpproj, "optimize", "assets", "src", "--command", copy, "--document-command", "svgshield-no-such-tool")
    data = jload(cp.stdout)
    assert cp.returncode == 1
    assert [f["path"] for f in data["files"] if f["fragments"][0]["status"] == "failed"] == ["assets/logo.svg"]


def test_bad_config_is_a_user_error(tmpproj: Path):
    write(tmpproj / "svgshield.yaml", "optimizer:\n  timeout: soon\n")
    cp = run_cli(tmpproj, "optimize", ".")
    assert cp.returncode == 2
    assert "svgshield.yaml.optimizer.timeout: expected float, got str" in cp.stderr
    assert "Traceback" not in cp.stderr


def test_missing_file(tmp_path: Path):
    cp = run_cli(tmp_path, "prepare", "nope.svg")
    assert cp.returncode == 2
    assert "File not found" in cp.stderr


def test_version(tmp_path: Path):
    cp = run_cli(tmp_path, "--version")
    assert cp.returncode == 0
    assert cp.stdout.startswith("svgshield ")
