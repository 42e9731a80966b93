"""Tests for expected shapes derived from inputs."""
import pytest
from manifestcheck.operator.inputs import OperatorInputs
from manifestcheck.operator.models import (ExpectedPort, Presence, expected_external_ports,
                                           external_service_presence)


@pytest.mark.parametrize("debug_enabled,external_rest_enabled,presence", [
    (False, False, Presence.ABSENT),
    (True, False, Presence.PRESENT),
    (False, True, Presence.PRESENT),
    (True, True, Presence.PRESENT),
])
def test_external_service_presence(debug_enabled, external_rest_enabled, presence):
    """Test the service exists only when a feature needs it."""
    assert external_service_presence(debug_enabled, external_rest_enabled) is presence


def test_rest_port_precedes_debug_port():
    """Test port order when both features are enabled."""
    inputs = OperatorInputs(externalRestHttpsPort=30001, internalDebugHttpPort=8453,
                            externalDebugHttpPort=30002)
    assert expected_external_ports(inputs, True, True) == [
        ExpectedPort("rest-https", "8081", "30001"),
        ExpectedPort("debug", "8453", "30002"),
    ]


def test_no_ports_when_disabled():
    """Test that nothing is expected with both features off."""
    assert expected_external_ports(OperatorInputs(), False, False) == []
