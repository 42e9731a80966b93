"""Tests for the CLI."""
from typer.testing import CliRunner

from main import app

runner = CliRunner()

INPUTS = """
serviceAccount: sa1
namespace: weblogic-operator
targetNamespaces: ns1,ns2
image: weblogic-kubernetes-operator:1.0
externalRestOption: none
remoteDebugNodePortEnabled: true
internalDebugHttpPort: 8453
externalDebugHttpPort: 30002
"""


def test_inspect(render_manifest, write_manifest):
    """Test listing the resources of a manifest."""
    path = write_manifest(render_manifest())
    result = runner.invoke(app, ["inspect", path])
    assert result.exit_code == 0
    assert "ConfigMap" in result.output


def test_inspect_malformed(write_manifest):
    """Test that a parse error exits non-zero."""
    path = write_manifest("kind: [unclosed\n")
    result = runner.invoke(app, ["inspect", path])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_verify_passes(render_manifest, write_manifest):
    """Test a manifest that matches its inputs."""
    path = write_manifest(render_manifest(ports=[("debug", 8453, 30002)]))
    inputs_path = write_manifest(INPUTS, name="inputs.yaml")
    result = runner.invoke(app, ["verify", path, "--inputs", inputs_path,
                                 "--external-cert", "CERTA", "--external-key", "KEYA"])
    assert result.exit_code == 0
    assert "matches" in result.output


def test_verify_mismatch(render_manifest, write_manifest):
    """Test that a mismatch exits non-zero and names the field."""
    path = write_manifest(render_manifest())
    inputs_path = write_manifest(INPUTS, name="inputs.yaml")
    result = runner.invoke(app, ["verify", path, "--inputs", inputs_path,
                                 "--external-cert", "CERTA", "--external-key", "KEYA"])
    assert result.exit_code == 1
    assert "external-weblogic-operator-service" in result.output
