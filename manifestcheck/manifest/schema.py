"""Pydantic models for the Kubernetes resources found in a manifest."""
import base64
import binascii
from typing import ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FrozenModel(BaseModel):
    """Base for every model here; fields can't be reassigned after loading."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ObjectMeta(FrozenModel):
    """Resource metadata."""
    name: str
    namespace: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)


class KubernetesResource(FrozenModel):
    """Fields shared by every resource, used as-is for kinds without a model."""
    KIND: ClassVar[Optional[str]] = None

    api_version: str = Field(alias='apiVersion')
    kind: str
    metadata: ObjectMeta


class ConfigMap(KubernetesResource):
    """ConfigMap with plain string data.

    A key written with no value loads as None so the verifier can report it.
    """
    KIND: ClassVar[str] = "ConfigMap"

    data: Optional[Dict[str, Optional[str]]] = None


class Secret(KubernetesResource):
    """Secret whose data values are decoded from base64 on load."""
    KIND: ClassVar[str] = "Secret"

    type: Optional[str] = None
    data: Optional[Dict[str, Optional[bytes]]] = None

    @field_validator('data', mode='before')
    @classmethod
    def decode_data(cls, value):
        if value is None:
            return None
        if not isinstance(value, dict):
            raise ValueError("Secret data must be a mapping")
        decoded = {}
        for key, encoded in value.items():
            # Keys with no value stay None, the verifier reports them
            if encoded is None or isinstance(encoded, bytes):
                decoded[key] = encoded
                continue
            if not isinstance(encoded, str):
                raise ValueError(
                    f"Secret key '{key}' must be a base64 string, not {type(encoded).__name__}"
                )
            try:
                decoded[key] = base64.b64decode(encoded, validate=True)
            except binascii.Error as e:
                raise ValueError(f"Secret key '{key}' is not valid base64: {e}")
        return decoded


class ServicePort(FrozenModel):
    """A single service port."""
    name: Optional[str] = None
    port: int
    node_port: Optional[int] = Field(default=None, alias='nodePort')
    target_port: Optional[Union[int, str]] = Field(default=None, alias='targetPort')
    protocol: Optional[str] = None


class ServiceSpec(FrozenModel):
    """Service spec."""
    type: Optional[str] = None
    selector: Optional[Dict[str, str]] = None
    ports: Optional[List[ServicePort]] = None


class Service(KubernetesResource):
    """Service resource."""
    KIND: ClassVar[str] = "Service"

    spec: Optional[ServiceSpec] = None


class EnvVar(FrozenModel):
    """Container environment variable."""
    name: str
    value: Optional[str] = None


class Container(FrozenModel):
    """Pod container."""
    name: str
    image: Optional[str] = None
    image_pull_policy: Optional[str] = Field(default=None, alias='imagePullPolicy')
    command: List[str] = Field(default_factory=list)
    args: List[str] = Field(default_factory=list)
    env: List[EnvVar] = Field(default_factory=list)


class PodSpec(FrozenModel):
    """Pod spec."""
    service_account_name: Optional[str] = Field(default=None, alias='serviceAccountName')
    containers: List[Container] = Field(default_factory=list)


class TemplateMeta(FrozenModel):
    """Pod template metadata, which carries no name of its own."""
    labels: Dict[str, str] = Field(default_factory=dict)


class PodTemplateSpec(FrozenModel):
    """Pod template."""
    metadata: Optional[TemplateMeta] = None
    spec: Optional[PodSpec] = None


class DeploymentSpec(FrozenModel):
    """Deployment spec."""
    replicas: Optional[int] = None
    template: Optional[PodTemplateSpec] = None


class Deployment(KubernetesResource):
    """Deployment resource."""
    KIND: ClassVar[str] = "Deployment"

    spec: Optional[DeploymentSpec] = None


# Kinds with a dedicated model; everything else loads as KubernetesResource
MODELS: Dict[str, type] = {
    model.KIND: model for model in (ConfigMap, Secret, Service, Deployment)
}


def model_for_kind(kind: str) -> type:
    """Return the model class used to load documents of the given kind."""
    return MODELS.get(kind, KubernetesResource)
