"""Operator inputs the generated manifest is checked against."""
import yaml
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..manifest.errors import ParseError

EXTERNAL_REST_NONE = "none"


class OperatorInputs(BaseModel):
    """Values of the operator's create-inputs file.

    Every value is kept as a string, including ports and flags, so fixtures
    can carry deliberately invalid values such as a non-numeric port.
    """
    model_config = ConfigDict(populate_by_name=True)

    service_account: str = Field(default="weblogic-operator", alias='serviceAccount')
    namespace: str = "weblogic-operator"
    target_namespaces: str = Field(default="default", alias='targetNamespaces')
    image: str = "container-registry.oracle.com/middleware/weblogic-kubernetes-operator:latest"
    image_pull_policy: str = Field(default="IfNotPresent", alias='imagePullPolicy')
    external_rest_option: str = Field(default=EXTERNAL_REST_NONE, alias='externalRestOption')
    external_rest_https_port: str = Field(default="31001", alias='externalRestHttpsPort')
    remote_debug_node_port_enabled: str = Field(default="false", alias='remoteDebugNodePortEnabled')
    internal_debug_http_port: str = Field(default="30999", alias='internalDebugHttpPort')
    external_debug_http_port: str = Field(default="30999", alias='externalDebugHttpPort')
    java_logging_level: str = Field(default="INFO", alias='javaLoggingLevel')
    elk_integration_enabled: str = Field(default="false", alias='elkIntegrationEnabled')

    @field_validator('*', mode='before')
    @classmethod
    def as_string(cls, value: Any) -> Any:
        # YAML turns unquoted ports and flags into int/bool
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @property
    def external_rest_enabled(self) -> bool:
        return self.external_rest_option != EXTERNAL_REST_NONE

    @property
    def debug_enabled(self) -> bool:
        return self.remote_debug_node_port_enabled == "true"

    @staticmethod
    def load(file_path: str) -> "OperatorInputs":
        """Load and validate an operator inputs YAML file.

        Args:
            file_path: Path to the inputs YAML file.

        Returns:
            OperatorInputs: Validated inputs, with defaults for missing keys.

        Raises:
            ParseError: If the file is unreadable, malformed or invalid.
        """
        try:
            with open(file_path, 'r') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ParseError(f"Failed to load inputs {file_path}: {e}") from e
        return OperatorInputs.from_dict(data or {}, source=str(file_path))

    @staticmethod
    def from_dict(data: Dict[str, Any], source: str = "<dict>") -> "OperatorInputs":
        try:
            return OperatorInputs.model_validate(data)
        except ValidationError as e:
            raise ParseError(f"Invalid inputs in {source}: {e}") from e
