import subprocess
import sys
from pathlib import Path

import pytest
import yaml

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from build_env.config import ConfigLoader
from build_env.descriptor import resolve_environment
from build_env.exceptions import ProvisioningFailure
from build_env.provisioners import (
    ManifestProvisioner,
    NixShellProvisioner,
    ProvisioningOrchestrator,
)
from build_env.provisioners.nix_provisioner import _nix_string
from build_env.utils import Logger

DARWIN_EXPRESSION = """with import <nixpkgs> {};

stdenv.mkDerivation {
  name = "Pijul";
  buildInputs = with pkgs; [
    xxHash
    zstd
    libsodium
    openssl
    pkgconfig
    darwin.apple_sdk.frameworks.CoreServices
    darwin.apple_sdk.frameworks.Security
    darwin.apple_sdk.frameworks.SystemConfiguration
  ];
}
"""


class RecordingRun:
    """subprocess.run stand-in that records calls"""

    def __init__(self, returncode=0, stdout="", stderr=""):
        self.calls = []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


def _dependency_set(host):
    return resolve_environment(ConfigLoader().get_environment_spec(), host)


def _nix(tmp_path, dry_run=False, **config):
    config.setdefault("executable", "nix-shell")
    return NixShellProvisioner(config=config, work_dir=tmp_path,
                               logger=Logger(verbose=True), dry_run=dry_run)


def test_render_darwin_expression(tmp_path):
    assert _nix(tmp_path).render(_dependency_set("darwin")) == DARWIN_EXPRESSION


def test_render_linux_expression_has_no_frameworks(tmp_path):
    expression = _nix(tmp_path).render(_dependency_set("linux"))

    assert "    pkgconfig\n  ];" in expression
    assert "apple_sdk" not in expression


def test_render_custom_package_set(tmp_path):
    expression = _nix(tmp_path, package_set="./nixpkgs").render(_dependency_set("linux"))

    assert expression.startswith("with import ./nixpkgs {};")


def test_nix_string_escaping():
    assert _nix_string('a"b') == '"a\\"b"'
    assert _nix_string("${x}") == '"\\${x}"'


def test_dry_run_writes_nothing(tmp_path, monkeypatch):
    run = RecordingRun()
    monkeypatch.setattr(subprocess, "run", run)

    handle = _nix(tmp_path, dry_run=True).provision(_dependency_set("linux"))

    assert run.calls == []
    assert not (tmp_path / "shell.nix").exists()
    assert handle.returncode == 0
    assert handle.provisioner == "nix"
    assert handle.expression_path == tmp_path / "shell.nix"


def test_provision_runs_nix_shell(tmp_path, monkeypatch):
    run = RecordingRun()
    monkeypatch.setattr(subprocess, "run", run)

    handle = _nix(tmp_path).provision(_dependency_set("darwin"), command="cargo build")

    expression_path = tmp_path / "shell.nix"
    assert expression_path.read_text() == DARWIN_EXPRESSION
    cmd, kwargs = run.calls[0]
    assert cmd == ["nix-shell", str(expression_path.resolve()), "--run", "cargo build"]
    assert kwargs["cwd"] == tmp_path
    assert handle.dependency_set.identifiers[-1] == "SystemConfiguration"


def test_pure_shell(tmp_path, monkeypatch):
    run = RecordingRun()
    monkeypatch.setattr(subprocess, "run", run)

    _nix(tmp_path, pure=True).provision(_dependency_set("linux"))

    assert run.calls[0][0][:2] == ["nix-shell", "--pure"]


def test_orchestrator_failure_passed_through(tmp_path, monkeypatch):
    stderr = "error: undefined variable 'xxHash'\n"
    monkeypatch.setattr(subprocess, "run", RecordingRun(returncode=3, stderr=stderr))

    with pytest.raises(ProvisioningFailure) as excinfo:
        _nix(tmp_path).provision(_dependency_set("linux"), capture_output=True)

    assert excinfo.value.returncode == 3
    assert excinfo.value.stderr == stderr


def test_missing_orchestrator(tmp_path, monkeypatch):
    def missing(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", missing)

    with pytest.raises(ProvisioningFailure, match="nix-shell not found") as excinfo:
        _nix(tmp_path).provision(_dependency_set("linux"))

    assert excinfo.value.returncode is None


def test_manifest_provisioner(tmp_path):
    provisioner = ManifestProvisioner(config={"filename": "deps.yaml"}, work_dir=tmp_path,
                                      logger=Logger())

    handle = provisioner.provision(_dependency_set("linux"))

    manifest = yaml.safe_load((tmp_path / "deps.yaml").read_text())
    assert handle.manifest_path == tmp_path / "deps.yaml"
    assert manifest == {
        "name": "Pijul",
        "platform": "linux",
        "dependencies": ["xxHash", "zstd", "libsodium", "openssl", "pkgconfig"],
    }


def test_orchestrator_selects_provisioner(tmp_path):
    orchestrator = ProvisioningOrchestrator(config=ConfigLoader(), host_platform="darwin",
                                            work_dir=tmp_path, logger=Logger())

    assert isinstance(orchestrator.get_provisioner(), NixShellProvisioner)
    assert isinstance(orchestrator.get_provisioner("manifest"), ManifestProvisioner)
    with pytest.raises(ValueError, match="Unknown provisioner"):
        orchestrator.get_provisioner("docker")


def test_orchestrator_provision_info(tmp_path):
    orchestrator = ProvisioningOrchestrator(config=ConfigLoader(), host_platform="darwin",
                                            work_dir=tmp_path, logger=Logger())

    info = orchestrator.get_provision_info()

    assert info["condition_holds"] is True
    assert info["condition"] == "host is darwin"
    assert len(info["dependencies"]) == 8
