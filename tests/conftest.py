"""Shared fixtures for manifest tests."""
import base64
import textwrap

import pytest

CONFIG_MAP = """
apiVersion: v1
kind: ConfigMap
metadata:
  name: operator-config-map
  namespace: {namespace}
data:
  serviceaccount: {service_account}
  targetNamespaces: "{target_namespaces}"
  externalOperatorCert: {external_cert}
  internalOperatorCert: anything
"""

SECRET = """
apiVersion: v1
kind: Secret
metadata:
  name: operator-secrets
  namespace: {namespace}
type: Opaque
data:
  externalOperatorKey: {external_key}
  internalOperatorKey: {internal_key}
"""

DEPLOYMENT = """
apiVersion: extensions/v1beta1
kind: Deployment
metadata:
  name: weblogic-operator
  namespace: {namespace}
spec:
  replicas: 1
  template:
    metadata:
      labels:
        app: weblogic-operator
    spec:
      serviceAccountName: {service_account}
      containers:
      - name: weblogic-operator
        image: {image}
        imagePullPolicy: IfNotPresent
        command: ["bash"]
        args: ["/operator/operator.sh"]
        env:
        - name: OPERATOR_NAMESPACE
          value: {namespace}
"""

INTERNAL_SERVICE = """
apiVersion: v1
kind: Service
metadata:
  name: internal-weblogic-operator-service
  namespace: {namespace}
spec:
  type: ClusterIP
  selector:
    app: weblogic-operator
  ports:
  - port: 8082
    name: rest-https
"""

EXTERNAL_SERVICE = """
apiVersion: v1
kind: Service
metadata:
  name: external-weblogic-operator-service
  namespace: {namespace}
spec:
  type: NodePort
  selector:
    app: weblogic-operator
  ports:
{ports}
"""


def _port_yaml(name, port, node_port):
    return f"  - port: {port}\n    nodePort: {node_port}\n    name: {name}"


@pytest.fixture
def render_manifest():
    """Render a weblogic-operator manifest as a YAML string."""
    def render(namespace="weblogic-operator", service_account="sa1",
               target_namespaces="ns1,ns2", external_cert="CERTA",
               external_key="KEYA", image="weblogic-kubernetes-operator:1.0",
               ports=None, include_external_service=None):
        values = dict(
            namespace=namespace,
            service_account=service_account,
            target_namespaces=target_namespaces,
            external_cert=external_cert,
            external_key=base64.b64encode(external_key.encode('utf-8')).decode('ascii'),
            internal_key=base64.b64encode(b"generated").decode('ascii'),
            image=image,
        )
        docs = [CONFIG_MAP, SECRET, DEPLOYMENT, INTERNAL_SERVICE]
        ports = ports or []
        if include_external_service is None:
            include_external_service = bool(ports)
        if include_external_service:
            values["ports"] = "\n".join(_port_yaml(*p) for p in ports) if ports else "  []"
            docs.append(EXTERNAL_SERVICE)
        return "---".join(textwrap.dedent(doc).format(**values) for doc in docs)
    return render


@pytest.fixture
def write_manifest(tmp_path):
    """Write YAML text to a file under tmp_path and return its path."""
    def write(text, name="weblogic-operator.yaml"):
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return write
