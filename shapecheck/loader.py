# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""YAML document loader with caching and source locations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .config import checker_config
from .exceptions import DocumentError

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(source_map: Optional[SourceMap], yaml_path: Optional[str]) -> SourceLocation:
    """Find the closest recorded location for ``yaml_path``.

    Missing values have no node of their own, so the lookup walks up to the
    nearest recorded parent.
    """
    if not source_map or yaml_path is None:
        return SourceLocation(yaml_path=yaml_path)

    path = yaml_path
    while True:
        entry = source_map.get(path)
        if entry:
            return SourceLocation(yaml_path=yaml_path, line=entry.get("line"), column=entry.get("column"))
        if not path:
            return SourceLocation(yaml_path=yaml_path)
        path = path.rsplit("/", 1)[0]


class DocumentLoader:
    """YAML loader for pattern and value documents."""

    def __init__(self, cache_enabled: bool = None):
        """Initialize the loader.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else checker_config.cache_enabled
        self._cache: Dict[Path, Tuple[Any, SourceMap]] = {}

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def _build_source_map(cls, content: str) -> SourceMap:
        """Map JSON-pointer paths of the document to 1-based line/column.

        Uses PyYAML's node tree (yaml.compose) so the data returned by
        safe_load keeps its shape.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            return source_map

        if root is None:
            return source_map

        # Aliases share one node object; each node is descended once.
        visited = set()

        def _walk(node, path: str) -> None:
            mark = node.start_mark
            source_map[path] = {"line": mark.line + 1, "column": mark.column + 1}
            if id(node) in visited:
                return
            visited.add(id(node))

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, f"{path}/{cls._json_pointer_escape(str(key))}")
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    def load_from_string_with_source(self, content: str) -> Tuple[Any, SourceMap]:
        """Parse YAML content and return (data, source_map)."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise DocumentError(f"Failed to parse YAML content: {exc}") from exc
        except RecursionError as exc:
            raise DocumentError("Failed to parse YAML content: document is nested too deeply") from exc
        try:
            source_map = self._build_source_map(content)
        except RecursionError as exc:
            raise DocumentError("Failed to parse YAML content: document is nested too deeply") from exc
        return data, source_map

    def load_from_string(self, content: str) -> Any:
        """Parse YAML content.

        An empty document yields ``None``, which the matcher treats as null.
        """
        data, _ = self.load_from_string_with_source(content)
        return data

    def load_with_source(self, file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
        """Load a YAML file and return (data, source_map).

        Raises:
            DocumentError: If the file is missing or cannot be parsed.
        """
        path = Path(file_path)

        if not path.exists():
            raise DocumentError(f"Document not found: {path}")

        if not path.is_file():
            raise DocumentError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading document from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading document: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DocumentError(f"Failed to read document {path}: {exc}") from exc

        try:
            loaded = self.load_from_string_with_source(content)
        except DocumentError as exc:
            raise DocumentError(f"Failed to parse YAML file {path}: {exc.__cause__}") from exc

        if self.cache_enabled:
            self._cache[path] = loaded
        return loaded

    def load(self, file_path: Union[str, Path]) -> Any:
        """Load a YAML file."""
        data, _ = self.load_with_source(file_path)
        return data

    def clear_cache(self) -> None:
        """Clear the document cache."""
        self._cache.clear()
        logger.debug("Document cache cleared")


# Global loader instance
document_loader = DocumentLoader()
