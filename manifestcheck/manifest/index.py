"""Typed lookup over the resources of a parsed manifest."""
from typing import Dict, Iterator, List, Optional, Tuple, Type, TypeVar

from .errors import DuplicateResourceError, TypeMismatchError
from .schema import ConfigMap, Deployment, KubernetesResource, Secret, Service

ResourceKey = Tuple[str, str]
R = TypeVar('R', bound=KubernetesResource)


class ResourceIndex:
    """Read-only mapping from (kind, name) to a loaded resource model.

    Models are frozen, so their fields can't be reassigned. Dict and list
    field values are the loaded objects, not copies.
    """

    def __init__(self, resources: List[KubernetesResource]):
        """Index resources by kind and name.

        Args:
            resources: Resource models in document order.

        Raises:
            DuplicateResourceError: If two resources share a kind and name.
        """
        self._resources: Dict[ResourceKey, KubernetesResource] = {}
        for resource in resources:
            key = (resource.kind, resource.metadata.name)
            if key in self._resources:
                raise DuplicateResourceError(*key)
            self._resources[key] = resource

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[ResourceKey]:
        return iter(self._resources)

    def __contains__(self, key: ResourceKey) -> bool:
        return key in self._resources

    def kinds(self) -> List[str]:
        """Distinct kinds in first-seen order."""
        return list(dict.fromkeys(kind for kind, _ in self._resources))

    def resources(self) -> List[KubernetesResource]:
        return list(self._resources.values())

    def get(self, kind: str, name: str,
            expected_type: Type[R] = KubernetesResource) -> Optional[R]:
        """Look up a resource, checking it is an instance of the expected model.

        Args:
            kind: Resource kind, e.g. "Service".
            name: Value of metadata.name.
            expected_type: Model class the resource must be.

        Returns:
            The resource, or None if no document has this kind and name.

        Raises:
            TypeMismatchError: If the stored resource is not an expected_type.
        """
        resource = self._resources.get((kind, name))
        if resource is None:
            return None
        if not isinstance(resource, expected_type):
            raise TypeMismatchError(kind, name, expected_type, resource)
        return resource

    def get_config_map(self, name: str) -> Optional[ConfigMap]:
        """The config map with this name, or None if only another kind uses the name."""
        return self.get(ConfigMap.KIND, name, ConfigMap)

    def get_secret(self, name: str) -> Optional[Secret]:
        """The secret with this name, or None if only another kind uses the name."""
        return self.get(Secret.KIND, name, Secret)

    def get_deployment(self, name: str) -> Optional[Deployment]:
        """The deployment with this name, or None if only another kind uses the name."""
        return self.get(Deployment.KIND, name, Deployment)

    def get_service(self, name: str) -> Optional[Service]:
        """The service with this name, or None if only another kind uses the name."""
        return self.get(Service.KIND, name, Service)
