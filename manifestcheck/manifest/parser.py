"""Multi-document YAML manifest parser."""
import yaml
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError
from rich.console import Console

from .errors import ParseError
from .index import ResourceIndex
from .schema import KubernetesResource, model_for_kind

console = Console(stderr=True)


@dataclass(frozen=True)
class RawManifest:
    """Documents of a manifest in stream order, before typing."""
    source: str
    documents: Tuple[Dict[str, Any], ...]

    def __len__(self) -> int:
        return len(self.documents)


class ManifestParser:
    """Parser for generated Kubernetes manifests."""

    @staticmethod
    def read(file_path: str, debug: bool = False) -> RawManifest:
        """Read a multi-document YAML file without typing its documents.

        Args:
            file_path: Path to the YAML manifest file.
            debug: If True, print verbose debug information.

        Returns:
            RawManifest: The non-empty documents in file order.

        Raises:
            ParseError: If the file can't be read or the YAML is malformed.
        """
        try:
            with open(file_path, 'r') as f:
                text = f.read()
        except OSError as e:
            raise ParseError(f"Failed to read manifest {file_path}: {e}") from e
        return ManifestParser.read_text(text, source=str(file_path), debug=debug)

    @staticmethod
    def read_text(text: str, source: str = "<string>", debug: bool = False) -> RawManifest:
        """Split a YAML document stream into a RawManifest.

        Raises:
            ParseError: If the YAML is malformed or a document isn't a mapping.
        """
        try:
            loaded = list(yaml.safe_load_all(text))
        except yaml.YAMLError as e:
            raise ParseError(f"Malformed YAML in {source}: {e}") from e

        documents = []
        for position, doc in enumerate(loaded):
            # Empty documents between '---' separators
            if doc is None:
                continue
            if not isinstance(doc, dict):
                raise ParseError(
                    f"Document {position} in {source} is a {type(doc).__name__}, not a mapping"
                )
            documents.append(doc)

        if debug:
            console.print(f"Debug: Read {len(documents)} documents from {source}")
        return RawManifest(source=source, documents=tuple(documents))

    @staticmethod
    def build_index(raw: RawManifest, debug: bool = False) -> ResourceIndex:
        """Type every document of a RawManifest and index it by kind and name.

        Raises:
            ParseError: If a document doesn't validate against its kind's model.
            DuplicateResourceError: If two documents share a kind and name.
        """
        resources: List[KubernetesResource] = []
        for position, doc in enumerate(raw.documents):
            model = model_for_kind(str(doc.get('kind', '')))
            try:
                resource = model.model_validate(doc)
            except ValidationError as e:
                raise ParseError(f"Invalid document {position} in {raw.source}: {e}") from e
            if debug:
                console.print(
                    f"Debug: {resource.kind}/{resource.metadata.name} loaded as {model.__name__}"
                )
            resources.append(resource)
        return ResourceIndex(resources)

    @staticmethod
    def load(file_path: str, debug: bool = False) -> ResourceIndex:
        """Load a manifest file into a ResourceIndex.

        Args:
            file_path: Path to the YAML manifest file.
            debug: If True, print verbose debug information.

        Returns:
            ResourceIndex: Typed resources keyed by kind and name.

        Raises:
            ParseError: If the file is unreadable, malformed or holds an invalid
                or duplicate resource.
        """
        raw = ManifestParser.read(file_path, debug=debug)
        return ManifestParser.build_index(raw, debug=debug)

    @staticmethod
    def loads(text: str, debug: bool = False) -> ResourceIndex:
        """Load a manifest from a YAML string."""
        raw = ManifestParser.read_text(text, debug=debug)
        return ManifestParser.build_index(raw, debug=debug)
