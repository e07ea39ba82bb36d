"""Integration adapters for converting node trees to and from other libraries.

Each adapter converts a node sequence into the target library's document
object (``to_target``) and back (``from_target``). Adapters never raise:
failures, including a missing optional library, are reported through a
``ConversionResult`` with ``success=False``.
"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Sequence, Type

from markup_tree.parsing import parse
from markup_tree.serialization import serialize
from markup_tree.shared import DiagnosticEntry, DiagnosticSeverity, get_logger
from markup_tree.tree.nodes import CommentNode, ElementNode, Node, TextNode

FRAGMENT_TAG = "fragment"


class AdapterType(Enum):
    """Types of integration adapters."""

    TREE_LIBRARY = auto()     # Element tree APIs (ElementTree, lxml)
    MARKUP_LIBRARY = auto()   # Markup soup libraries (BeautifulSoup)


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    adapter_type: AdapterType
    target_library: str
    description: str


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


class IntegrationAdapter(ABC):
    """Base class for bidirectional node tree conversion."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def to_target(self, nodes: Sequence[Node]) -> ConversionResult:
        """Convert a node sequence into the target library's representation."""

    @abstractmethod
    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert the target library's representation into a node list."""

    def _success(self, converted: Any, original: Any, start_time: float) -> ConversionResult:
        return ConversionResult(
            success=True,
            converted_data=converted,
            original_data=original,
            conversion_time_ms=(time.time() - start_time) * 1000
        )

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        start_time: float
    ) -> ConversionResult:
        self._logger.warning(error_message)
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=(time.time() - start_time) * 1000,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id
                )
            ]
        )


class ElementTreeAdapter(IntegrationAdapter):
    """Adapter for ``xml.etree.ElementTree`` elements.

    A node sequence becomes the children of a ``<fragment>`` wrapper element.
    Text nodes map onto ``text``/``tail`` and comments onto ``Comment``
    elements. Converting back unwraps the wrapper again.
    """

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            adapter_type=AdapterType.TREE_LIBRARY,
            target_library="xml.etree.ElementTree",
            description="Conversion between node lists and ElementTree elements"
        )

    def _etree(self) -> Any:
        import xml.etree.ElementTree as ET
        return ET

    def is_available(self) -> bool:
        try:
            self._etree()
            return True
        except ImportError:
            return False

    def to_target(self, nodes: Sequence[Node]) -> ConversionResult:
        start_time = time.time()
        try:
            etree = self._etree()
            root = etree.Element(FRAGMENT_TAG)
            self._append_nodes(root, nodes, etree)
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert to {self.metadata.target_library}: {e}",
                nodes,
                start_time
            )
        return self._success(root, nodes, start_time)

    def from_target(self, target_data: Any) -> ConversionResult:
        start_time = time.time()
        if not hasattr(target_data, "tag"):
            return self._create_error_result(
                "Target data is not an element", target_data, start_time
            )
        try:
            etree = self._etree()
            if target_data.tag == FRAGMENT_TAG:
                nodes = self._convert_children(target_data, etree)
            else:
                nodes = [self._convert_element(target_data, etree)]
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert from {self.metadata.target_library}: {e}",
                target_data,
                start_time
            )
        return self._success(nodes, target_data, start_time)

    def _append_nodes(self, parent: Any, nodes: Sequence[Node], etree: Any) -> None:
        last = None
        for node in nodes:
            if isinstance(node, TextNode):
                if last is None:
                    parent.text = (parent.text or "") + node.content
                else:
                    last.tail = (last.tail or "") + node.content
            elif isinstance(node, CommentNode):
                last = etree.Comment(node.content)
                parent.append(last)
            elif isinstance(node, ElementNode):
                last = etree.SubElement(parent, node.tag_name, dict(node.attributes))
                self._append_nodes(last, node.children, etree)

    def _convert_children(self, element: Any, etree: Any) -> List[Node]:
        nodes: List[Node] = []
        _append_text(nodes, element.text)
        for child in element:
            if child.tag is etree.Comment:
                nodes.append(CommentNode((child.text or "").strip()))
            elif isinstance(child.tag, str):
                nodes.append(self._convert_element(child, etree))
            _append_text(nodes, child.tail)
        return nodes

    def _convert_element(self, element: Any, etree: Any) -> ElementNode:
        return ElementNode(
            element.tag.lower(),
            dict(element.attrib),
            tuple(self._convert_children(element, etree))
        )


class LxmlAdapter(ElementTreeAdapter):
    """Adapter for ``lxml.etree`` elements; same mapping as ElementTreeAdapter."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            adapter_type=AdapterType.TREE_LIBRARY,
            target_library="lxml.etree",
            description="Conversion between node lists and lxml elements"
        )

    def _etree(self) -> Any:
        from lxml import etree
        return etree


class BeautifulSoupAdapter(IntegrationAdapter):
    """Adapter for BeautifulSoup documents, exchanged as serialized markup."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="beautifulsoup",
            adapter_type=AdapterType.MARKUP_LIBRARY,
            target_library="beautifulsoup4",
            description="Conversion between node lists and BeautifulSoup documents"
        )

    def is_available(self) -> bool:
        try:
            import bs4  # noqa: F401
            return True
        except ImportError:
            return False

    def to_target(self, nodes: Sequence[Node]) -> ConversionResult:
        start_time = time.time()
        try:
            from bs4 import BeautifulSoup
            soup = BeautifulSoup(serialize(list(nodes)), "html.parser")
        except Exception as e:
            return self._create_error_result(
                f"Failed to convert to BeautifulSoup: {e}", nodes, start_time
            )
        return self._success(soup, nodes, start_time)

    def from_target(self, target_data: Any) -> ConversionResult:
        start_time = time.time()
        if not hasattr(target_data, "prettify"):
            return self._create_error_result(
                "Target data is not a BeautifulSoup object", target_data, start_time
            )
        return self._success(parse(str(target_data)), target_data, start_time)


def _append_text(nodes: List[Node], text: Optional[str]) -> None:
    if text and text.strip():
        nodes.append(TextNode(text.strip()))


class AdapterRegistry:
    """Registry of adapter classes by name."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        with self._lock:
            self._adapters[adapter_class().metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance if it is registered and its library is available."""
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        adapter = adapter_class(correlation_id)
        return adapter if adapter.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """Metadata of registered adapters whose library can be imported."""
        with self._lock:
            adapter_classes = list(self._adapters.values())
        available = []
        for adapter_class in adapter_classes:
            adapter = adapter_class()
            if adapter.is_available():
                available.append(adapter.metadata)
        return available


_adapter_registry = AdapterRegistry()
for _adapter_class in (ElementTreeAdapter, LxmlAdapter, BeautifulSoupAdapter):
    _adapter_registry.register(_adapter_class)


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered, available adapter instance by name."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List metadata of all available adapters."""
    return _adapter_registry.list_available_adapters()
