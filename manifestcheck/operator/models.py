"""Expected shapes derived from operator inputs."""
from dataclasses import dataclass
from enum import Enum
from typing import List

from .inputs import OperatorInputs

EXTERNAL_REST_PORT = "8081"
INTERNAL_REST_PORT = "8082"


class Presence(Enum):
    """Whether a conditionally generated resource should exist."""
    ABSENT = "absent"
    PRESENT = "present"


@dataclass(frozen=True)
class ExpectedPort:
    """A service port as the inputs say it should be.

    Port values are strings; actual ports are converted to strings before
    comparison so malformed expected values show up as mismatches.
    """
    name: str
    port: str
    node_port: str


def external_service_presence(debug_enabled: bool, external_rest_enabled: bool) -> Presence:
    """The external service only exists when it has a port to expose."""
    if debug_enabled or external_rest_enabled:
        return Presence.PRESENT
    return Presence.ABSENT


def expected_external_ports(inputs: OperatorInputs, debug_enabled: bool,
                            external_rest_enabled: bool) -> List[ExpectedPort]:
    """Ports of the external service in the order the generator emits them."""
    ports = []
    if external_rest_enabled:
        ports.append(ExpectedPort("rest-https", EXTERNAL_REST_PORT, inputs.external_rest_https_port))
    if debug_enabled:
        ports.append(ExpectedPort("debug", inputs.internal_debug_http_port, inputs.external_debug_http_port))
    return ports
