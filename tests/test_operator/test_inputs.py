"""Tests for operator inputs loading."""
import pytest
from manifestcheck.manifest.errors import ParseError
from manifestcheck.operator.inputs import OperatorInputs


def test_load_inputs(tmp_path):
    """Test loading an inputs file with unquoted ports and flags."""
    yaml_content = """
    serviceAccount: sa1
    namespace: weblogic-operator
    targetNamespaces: ns1,ns2
    externalRestOption: self-signed-cert
    externalRestHttpsPort: 30001
    remoteDebugNodePortEnabled: true
    internalDebugHttpPort: 8453
    externalDebugHttpPort: 30002
    """
    inputs_path = tmp_path / "inputs.yaml"
    inputs_path.write_text(yaml_content)

    inputs = OperatorInputs.load(str(inputs_path))
    assert inputs.service_account == "sa1"
    assert inputs.target_namespaces == "ns1,ns2"
    assert inputs.external_rest_https_port == "30001"
    assert inputs.internal_debug_http_port == "8453"
    assert inputs.remote_debug_node_port_enabled == "true"
    assert inputs.external_rest_enabled
    assert inputs.debug_enabled


def test_defaults():
    """Test that an empty inputs file falls back to the shipped defaults."""
    inputs = OperatorInputs.from_dict({})
    assert inputs.namespace == "weblogic-operator"
    assert inputs.target_namespaces == "default"
    assert inputs.external_rest_https_port == "31001"
    assert not inputs.external_rest_enabled
    assert not inputs.debug_enabled


def test_invalid_port_kept_as_string():
    """Test that non-numeric ports survive loading."""
    inputs = OperatorInputs(externalDebugHttpPort="not-a-port")
    assert inputs.external_debug_http_port == "not-a-port"


def test_invalid_inputs_file(tmp_path):
    """Test that a non-mapping inputs file is a parse error."""
    inputs_path = tmp_path / "inputs.yaml"
    inputs_path.write_text("- just\n- a list\n")
    with pytest.raises(ParseError):
        OperatorInputs.load(str(inputs_path))


def test_nonexistent_inputs_file():
    """Test loading a nonexistent inputs file."""
    with pytest.raises(ParseError):
        OperatorInputs.load("nonexistent.yaml")
