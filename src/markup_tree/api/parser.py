"""Parser API with progressive disclosure for markup-tree.

Level 1 is the pair of module functions ``parse_string`` and ``parse_file``.
Level 2 is ``MarkupParser``, which carries a ``ParserConfig``, keeps usage
statistics and offers an opt-in strict mode. Both levels wrap the pure
scanner and serializer and never raise in their default configuration.
"""

import re
import time
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from markup_tree.api.result import ParseResult, RoundTripResult
from markup_tree.parsing import scan_document
from markup_tree.serialization import serialize
from markup_tree.shared import (
    DiagnosticSeverity,
    ParserConfig,
    Recovery,
    get_logger,
)
from markup_tree.tree.nodes import Node

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000

_WHITESPACE_RUN = re.compile(r"\s+")


class StrictModeError(Exception):
    """Raised in strict mode when the scanner had to recover from malformed markup."""

    def __init__(self, recovery: Recovery, recoveries: Optional[List[Recovery]] = None):
        super().__init__(f"{recovery.kind.name} at offset {recovery.offset}: {recovery.message}")
        self.recovery = recovery
        self.recoveries = recoveries or [recovery]


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to one space and trim the ends."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def structurally_equal(original: str, rendered: str) -> bool:
    """Compare two documents the way round-trip verification does."""
    return normalize_whitespace(original) == normalize_whitespace(rendered)


def parse_string(
    markup: str,
    correlation_id: Optional[str] = None,
    config: Optional[ParserConfig] = None
) -> ParseResult:
    """Parse markup from a string.

    Args:
        markup: Markup content
        correlation_id: Optional correlation ID for request tracking
        config: Parser configuration; strict mode is ignored at this level

    Returns:
        ParseResult containing nodes, recoveries and diagnostics

    Examples:
        >>> result = parse_string('<p class="intro">Hello</p>')
        >>> result.nodes[0].get_attribute("class")
        'intro'
    """
    logger = get_logger(__name__, correlation_id, "parse_string")
    logger.info(
        "Starting string parse operation",
        extra={
            "content_length": len(markup),
            "preview": (
                markup[:PREVIEW_LENGTH] + "..."
                if len(markup) > PREVIEW_LENGTH else markup
            )
        }
    )
    return _parse_text(markup, config or ParserConfig(), correlation_id)


def parse_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    correlation_id: Optional[str] = None,
    config: Optional[ParserConfig] = None
) -> ParseResult:
    """Parse markup from a file.

    Missing files, directories, permission problems and undecodable content
    produce a ParseResult with ``success=False`` and a CRITICAL diagnostic.

    Args:
        file_path: Path to the markup file
        encoding: Text encoding of the file
        correlation_id: Optional correlation ID for request tracking
        config: Parser configuration

    Returns:
        ParseResult containing nodes and diagnostics
    """
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "parse_file")
    path_obj = Path(file_path)

    logger.info(
        "Starting file parse operation",
        extra={"file_path": str(path_obj), "encoding": encoding}
    )

    error_message = None
    if not path_obj.exists():
        error_message = f"File not found: {path_obj}"
    elif not path_obj.is_file():
        error_message = f"Path is not a file: {path_obj}"
    else:
        try:
            content = path_obj.read_text(encoding=encoding)
        except PermissionError:
            error_message = f"Permission denied accessing file: {path_obj}"
        except (UnicodeDecodeError, LookupError) as e:
            error_message = f"Cannot decode {path_obj} as {encoding}: {e}"
        except OSError as e:
            error_message = f"Cannot read {path_obj}: {e}"

    if error_message:
        logger.warning(error_message, extra={"file_path": str(path_obj)})
        result = _create_error_result(
            error_message,
            correlation_id,
            (time.time() - start_time) * MS_PER_SECOND
        )
    else:
        result = _parse_text(content, config or ParserConfig(), correlation_id)
    result.source = str(path_obj)
    return result


def _parse_text(
    markup: str,
    config: ParserConfig,
    correlation_id: Optional[str]
) -> ParseResult:
    """Scan markup and wrap the outcome in a ParseResult."""
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "parse_text")

    try:
        scan_result = scan_document(markup, config.scan)
    except Exception as e:
        # Never-fail: the scanner is total for str input, this guards misuse
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        logger.exception(
            "Markup parsing failed",
            extra={"processing_time_ms": processing_time}
        )
        return _create_error_result(
            f"Markup parsing failed: {e}",
            correlation_id,
            processing_time
        )

    result = ParseResult(
        nodes=scan_result.nodes,
        recoveries=scan_result.recoveries,
        correlation_id=correlation_id
    )
    if config.api.include_diagnostic_info:
        for recovery in scan_result.recoveries:
            result.add_diagnostic(
                recovery.severity,
                recovery.message,
                "scanner",
                position={"offset": recovery.offset},
                details={"kind": recovery.kind.name, "tag_name": recovery.tag_name}
            )

    processing_time = (time.time() - start_time) * MS_PER_SECOND
    result.performance.processing_time_ms = processing_time
    result.performance.characters_processed = len(markup)
    result.performance.nodes_created = result.node_count
    result.performance.recovery_operations = result.recovery_count

    logger.info(
        "Markup parsing completed",
        extra={
            "top_level_nodes": len(result.nodes),
            "recovery_count": result.recovery_count,
            "processing_time_ms": processing_time
        }
    )
    return result


def _create_error_result(
    error_message: str,
    correlation_id: Optional[str],
    processing_time: float
) -> ParseResult:
    """Create error result following never-fail philosophy."""
    result = ParseResult(correlation_id=correlation_id, success=False)
    result.performance.processing_time_ms = processing_time
    result.add_diagnostic(
        DiagnosticSeverity.CRITICAL,
        error_message,
        "api_parser"
    )
    return result


class MarkupParser:
    """Configured parser for repeated parse and render operations.

    Attributes:
        config: Current parser configuration
        correlation_id: Correlation ID for request tracking

    Examples:
        >>> parser = MarkupParser()
        >>> result = parser.parse('<ul><li>one</li></ul>')
        >>> parser.serialize(result.nodes)
        '<ul><li>one</li></ul>'

        Strict mode rejects malformed markup:
        >>> MarkupParser(ParserConfig.strict()).parse('<p>unclosed')
        Traceback (most recent call last):
        ...
        markup_tree.api.parser.StrictModeError: MISSING_CLOSING_TAG at offset 3: ...
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = (
            correlation_id if self.config.global_.enable_correlation_tracking else None
        )
        self.logger = get_logger(__name__, self.correlation_id, "markup_parser")

        self._parse_count = 0
        self._recovery_count = 0
        self._total_processing_time = 0.0

        self.logger.debug(
            "MarkupParser initialized",
            extra={"config_name": self.config.name, "strict_mode": self.config.api.strict_mode}
        )

    def parse(self, input_data: Any) -> ParseResult:
        """Parse markup from a string, bytes, Path or file-like object.

        Bytes are decoded as UTF-8 with replacement characters. Other objects
        are converted with ``str()``.

        Raises:
            StrictModeError: In strict mode, when any recovery was needed
        """
        if isinstance(input_data, Path):
            result = parse_file(
                input_data,
                correlation_id=self.correlation_id,
                config=self._effective_config()
            )
        else:
            markup = self._read_input(input_data)
            result = _parse_text(markup, self._effective_config(), self.correlation_id)

        self._parse_count += 1
        self._recovery_count += result.recovery_count
        self._total_processing_time += result.performance.processing_time_ms

        if self.config.api.strict_mode and result.recoveries:
            self.logger.warning(
                "Strict mode rejected malformed markup",
                extra={"recovery_count": result.recovery_count}
            )
            raise StrictModeError(result.recoveries[0], result.recoveries)
        return result

    def serialize(self, nodes: Union[Node, Sequence[Node]]) -> str:
        """Render nodes using the configured void element set."""
        return serialize(nodes, self.config.serialize.void_elements)

    def roundtrip(self, markup: str) -> RoundTripResult:
        """Parse and re-serialize markup, comparing after whitespace normalization."""
        result = self.parse(markup)
        rendered = self.serialize(result.nodes)
        matches = structurally_equal(markup, rendered)
        self.logger.info(
            "Round trip completed",
            extra={"matches": matches, "recovery_count": result.recovery_count}
        )
        return RoundTripResult(
            original=markup,
            rendered=rendered,
            matches=matches,
            parse_result=result
        )

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the parser configuration."""
        self.config = config
        self.logger.info("Parser reconfigured", extra={"config_name": config.name})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "total_recoveries": self._recovery_count,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._recovery_count = 0
        self._total_processing_time = 0.0

    def _effective_config(self) -> ParserConfig:
        # Strict mode needs the recovery list even when diagnostics are off
        if self.config.api.strict_mode and not self.config.scan.collect_diagnostics:
            return replace(self.config, scan=replace(self.config.scan, collect_diagnostics=True))
        return self.config

    def _read_input(self, input_data: Any) -> str:
        if hasattr(input_data, "read"):
            input_data = input_data.read()
        if isinstance(input_data, bytes):
            return input_data.decode("utf-8", errors="replace")
        if isinstance(input_data, str):
            return input_data
        self.logger.warning(
            "Unknown input type converted to string",
            extra={"original_type": type(input_data).__name__}
        )
        return str(input_data)
