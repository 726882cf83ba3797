import shlex
import sys
from pathlib import Path

import pytest

from svgshield.config import OptimizerConfig
from svgshield.errors import OptimizerError
from svgshield.optimizer import CommandOptimizer, IdentityOptimizer, Optimizer, build_optimizer

from tests.infrastructure.file_utils import write


def _script(tmp_path: Path, body: str) -> str:
    script = write(tmp_path / "opt.py", "import sys, time\n" + body)
    return shlex.join([sys.executable, str(script)])


def test_command_pipes_stdin_to_stdout(tmp_path: Path):
    cmd = _script(tmp_path, "sys.stdout.write(sys.stdin.read().replace(' fill=\"none\"', ''))\n")
    opt = CommandOptimizer(cmd)
    assert opt('<svg fill="none"><g/></svg>') == "<svg><g/></svg>"


def test_nonzero_exit_is_an_error(tmp_path: Path):
    cmd = _script(tmp_path, "sys.stderr.write('bad svg')\nsys.exit(3)\n")
    with pytest.raises(OptimizerError, match="exited with code 3: bad svg"):
        CommandOptimizer(cmd)("<svg/>")


def test_missing_executable():
    with pytest.raises(OptimizerError, match="not found: svgshield-no-such-tool"):
        CommandOptimizer("svgshield-no-such-tool -i -")("<svg/>")


def test_timeout(tmp_path: Path):
    cmd = _script(tmp_path, "time.sleep(5)\n")
    with pytest.raises(OptimizerError, match="timed out after 0.2s"):
        CommandOptimizer(cmd, timeout=0.2)("<svg/>")


def test_empty_command():
    with pytest.raises(OptimizerError, match="empty"):
        CommandOptimizer("   ")


def test_build_optimizer():
    assert isinstance(build_optimizer(OptimizerConfig(identity=True)), IdentityOptimizer)
    opt = build_optimizer(OptimizerConfig(command="svgo --multipass -i - -o -", timeout=5))
    assert isinstance(opt, CommandOptimizer)
    assert opt.argv == ["svgo", "--multipass", "-i", "-", "-o", "-"]
    assert isinstance(opt, Optimizer)
    assert IdentityOptimizer()("<svg/>") == "<svg/>"


def test_build_document_optimizer_falls_back_to_command():
    cfg = OptimizerConfig(command="svgo -i - -o -")
    assert build_optimizer(cfg, document=True).argv == ["svgo", "-i", "-", "-o", "-"]
    cfg = OptimizerConfig(command="svgo -i - -o -", document_command="svgo --multipass -i - -o -")
    assert build_optimizer(cfg, document=True).argv[1] == "--multipass"
    assert build_optimizer(cfg).argv[1] == "-i"
    assert isinstance(build_optimizer(OptimizerConfig(identity=True), document=True), IdentityOptimizer)
