"""Assertions over a generated weblogic-operator manifest."""
from typing import Any, Collection, List, Optional

from rich.console import Console

from ..manifest.errors import AssertionMismatch
from ..manifest.index import ResourceIndex
from ..manifest.parser import ManifestParser
from ..manifest.schema import (ConfigMap, Deployment, KubernetesResource,
                               ObjectMeta, Secret, Service, ServicePort)
from .inputs import OperatorInputs
from .models import (INTERNAL_REST_PORT, ExpectedPort, Presence,
                     expected_external_ports, external_service_presence)

console = Console(stderr=True)

API_V1 = "v1"
API_EXTENSIONS_V1BETA1 = "extensions/v1beta1"
OPERATOR_APP = "weblogic-operator"

CONFIG_MAP_NAME = "operator-config-map"
SECRETS_NAME = "operator-secrets"
DEPLOYMENT_NAME = "weblogic-operator"
INTERNAL_SERVICE_NAME = "internal-weblogic-operator-service"
EXTERNAL_SERVICE_NAME = "external-weblogic-operator-service"

SERVICE_ACCOUNT = "serviceaccount"
TARGET_NAMESPACES = "targetNamespaces"
EXTERNAL_OPERATOR_CERT = "externalOperatorCert"
INTERNAL_OPERATOR_CERT = "internalOperatorCert"
EXTERNAL_OPERATOR_KEY = "externalOperatorKey"
INTERNAL_OPERATOR_KEY = "internalOperatorKey"


def _expect(field: str, expected: Any, actual: Any) -> None:
    if actual != expected:
        raise AssertionMismatch(field, expected, actual)


def _expect_present(field: str, actual: Any) -> None:
    if actual is None:
        raise AssertionMismatch(field, "a value", None)


def _expect_keys(field: str, expected: Collection[str], actual: Collection[str]) -> None:
    """Key sets must match exactly, in any order."""
    missing = sorted(set(expected) - set(actual))
    extra = sorted(set(actual) - set(expected))
    if missing or extra:
        raise AssertionMismatch(field, sorted(expected), sorted(actual),
                                f"missing {missing}, unexpected {extra}")


class ManifestVerifier:
    """Stateless checks of operator resources against the operator inputs.

    Each check raises AssertionMismatch at the first field that differs.
    """

    @staticmethod
    def assert_metadata(metadata: Optional[ObjectMeta], name: str, namespace: str) -> None:
        _expect_present("metadata", metadata)
        _expect("metadata.name", name, metadata.name)
        _expect("metadata.namespace", namespace, metadata.namespace)

    @staticmethod
    def assert_resource(resource: Optional[KubernetesResource], kind: str, api_version: str,
                        name: str, namespace: str) -> None:
        """Check the apiVersion/kind/metadata triple of a resource."""
        _expect_present(f"{kind} {name}", resource)
        _expect("kind", kind, resource.kind)
        _expect("apiVersion", api_version, resource.api_version)
        ManifestVerifier.assert_metadata(resource.metadata, name, namespace)

    @staticmethod
    def assert_config_map(config_map: Optional[ConfigMap], inputs: OperatorInputs,
                          expected_external_cert: str) -> None:
        """Check the operator config map.

        The internal certificate is generated when the manifest is built, so
        only its presence is checked.
        """
        ManifestVerifier.assert_resource(config_map, "ConfigMap", API_V1,
                                         CONFIG_MAP_NAME, inputs.namespace)
        data = config_map.data
        _expect_present("data", data)
        _expect_keys("data keys",
                     [SERVICE_ACCOUNT, TARGET_NAMESPACES, EXTERNAL_OPERATOR_CERT, INTERNAL_OPERATOR_CERT],
                     data.keys())
        _expect(f"data.{SERVICE_ACCOUNT}", inputs.service_account, data[SERVICE_ACCOUNT])
        _expect(f"data.{TARGET_NAMESPACES}", inputs.target_namespaces, data[TARGET_NAMESPACES])
        _expect(f"data.{EXTERNAL_OPERATOR_CERT}", expected_external_cert, data[EXTERNAL_OPERATOR_CERT])
        _expect_present(f"data.{INTERNAL_OPERATOR_CERT}", data[INTERNAL_OPERATOR_CERT])

    @staticmethod
    def assert_secret(secret: Optional[Secret], inputs: OperatorInputs,
                      expected_external_key: str) -> None:
        """Check the operator secrets.

        Secret values are compared after base64 decoding. The internal key is
        generated, so only its presence is checked.
        """
        ManifestVerifier.assert_resource(secret, "Secret", API_V1,
                                         SECRETS_NAME, inputs.namespace)
        data = secret.data
        _expect_present("data", data)
        _expect_keys("data keys", [EXTERNAL_OPERATOR_KEY, INTERNAL_OPERATOR_KEY], data.keys())
        key_bytes = data[EXTERNAL_OPERATOR_KEY]
        _expect_present(f"data.{EXTERNAL_OPERATOR_KEY}", key_bytes)
        try:
            key = key_bytes.decode('utf-8')
        except UnicodeDecodeError as e:
            raise AssertionMismatch(f"data.{EXTERNAL_OPERATOR_KEY}", expected_external_key,
                                    key_bytes, f"not UTF-8 text: {e}") from e
        _expect(f"data.{EXTERNAL_OPERATOR_KEY}", expected_external_key, key)
        _expect_present(f"data.{INTERNAL_OPERATOR_KEY}", data[INTERNAL_OPERATOR_KEY])

    @staticmethod
    def assert_service(service: Optional[Service], name: str, namespace: str,
                       service_type: str) -> List[ServicePort]:
        """Check a weblogic-operator service and return its ports."""
        ManifestVerifier.assert_resource(service, "Service", API_V1, name, namespace)
        spec = service.spec
        _expect_present("spec", spec)
        _expect("spec.type", service_type, spec.type)
        _expect_present("spec.selector", spec.selector)
        _expect("spec.selector", {"app": OPERATOR_APP}, spec.selector)
        _expect_present("spec.ports", spec.ports)
        return spec.ports

    @staticmethod
    def assert_port(ports: List[ServicePort], index: int, expected: ExpectedPort) -> None:
        """Check the port at a position against its expected name and numbers."""
        field = f"spec.ports[{index}]"
        if len(ports) <= index:
            raise AssertionMismatch(field, expected.name, None, f"only {len(ports)} ports")
        port = ports[index]
        _expect(f"{field}.name", expected.name, port.name)
        # Inputs hold ports as strings, so compare the string form
        _expect(f"{field}.port", expected.port, str(port.port))
        _expect(f"{field}.nodePort", expected.node_port, str(port.node_port))

    @staticmethod
    def assert_external_service(service: Optional[Service], inputs: OperatorInputs,
                                debug_enabled: bool, external_rest_enabled: bool) -> None:
        """Check the NodePort service exposing REST and remote debugging.

        The service must be absent when neither feature is enabled. Ports are
        checked in order: rest-https first, then debug.
        """
        presence = external_service_presence(debug_enabled, external_rest_enabled)
        if presence is Presence.ABSENT:
            if service is not None:
                raise AssertionMismatch(EXTERNAL_SERVICE_NAME, Presence.ABSENT.value,
                                        Presence.PRESENT.value,
                                        "neither debugging nor external REST is enabled")
            return

        ports = ManifestVerifier.assert_service(service, EXTERNAL_SERVICE_NAME,
                                                inputs.namespace, "NodePort")
        expected = expected_external_ports(inputs, debug_enabled, external_rest_enabled)
        for index, port in enumerate(expected):
            ManifestVerifier.assert_port(ports, index, port)
        _expect("len(spec.ports)", len(expected), len(ports))

    @staticmethod
    def assert_internal_service(service: Optional[Service], inputs: OperatorInputs) -> None:
        """Check the ClusterIP service used by the operator's own REST clients."""
        ports = ManifestVerifier.assert_service(service, INTERNAL_SERVICE_NAME,
                                                inputs.namespace, "ClusterIP")
        _expect("len(spec.ports)", 1, len(ports))
        _expect("spec.ports[0].name", "rest-https", ports[0].name)
        _expect("spec.ports[0].port", INTERNAL_REST_PORT, str(ports[0].port))
        _expect("spec.ports[0].nodePort", None, ports[0].node_port)

    @staticmethod
    def assert_deployment(deployment: Optional[Deployment], inputs: OperatorInputs) -> None:
        """Check the operator deployment's identity, pod template and container."""
        ManifestVerifier.assert_resource(deployment, "Deployment", API_EXTENSIONS_V1BETA1,
                                         DEPLOYMENT_NAME, inputs.namespace)
        spec = deployment.spec
        _expect_present("spec", spec)
        _expect("spec.replicas", 1, spec.replicas)
        _expect_present("spec.template", spec.template)
        template = spec.template
        _expect_present("spec.template.metadata", template.metadata)
        _expect("spec.template.metadata.labels.app", OPERATOR_APP,
                template.metadata.labels.get("app"))
        _expect_present("spec.template.spec", template.spec)
        pod = template.spec
        _expect("spec.template.spec.serviceAccountName", inputs.service_account,
                pod.service_account_name)
        _expect("len(spec.template.spec.containers)", 1, len(pod.containers))
        container = pod.containers[0]
        _expect("containers[0].name", OPERATOR_APP, container.name)
        _expect("containers[0].image", inputs.image, container.image)
        _expect("containers[0].imagePullPolicy", inputs.image_pull_policy,
                container.image_pull_policy)


class ParsedOperatorManifest:
    """The five resources of a generated weblogic-operator manifest."""

    def __init__(self, index: ResourceIndex):
        self.index = index
        self.config_map = index.get_config_map(CONFIG_MAP_NAME)
        self.secret = index.get_secret(SECRETS_NAME)
        self.deployment = index.get_deployment(DEPLOYMENT_NAME)
        self.internal_service = index.get_service(INTERNAL_SERVICE_NAME)
        self.external_service = index.get_service(EXTERNAL_SERVICE_NAME)

    @staticmethod
    def load(file_path: str, debug: bool = False) -> "ParsedOperatorManifest":
        return ParsedOperatorManifest(ManifestParser.load(file_path, debug=debug))

    def verify(self, inputs: OperatorInputs, expected_external_cert: str,
               expected_external_key: str, debug: bool = False) -> None:
        """Run every check, stopping at the first mismatch.

        Raises:
            AssertionMismatch: If any resource differs from the inputs.
        """
        checks = [
            ("config map", lambda: ManifestVerifier.assert_config_map(
                self.config_map, inputs, expected_external_cert)),
            ("secrets", lambda: ManifestVerifier.assert_secret(
                self.secret, inputs, expected_external_key)),
            ("deployment", lambda: ManifestVerifier.assert_deployment(self.deployment, inputs)),
            ("internal service", lambda: ManifestVerifier.assert_internal_service(
                self.internal_service, inputs)),
            ("external service", lambda: ManifestVerifier.assert_external_service(
                self.external_service, inputs, inputs.debug_enabled, inputs.external_rest_enabled)),
        ]
        for label, check in checks:
            if debug:
                console.print(f"Debug: Checking {label}")
            check()
