# Copyright 2025 TIER IV, inc.
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

"""JSON/YAML payload parser with caching and source locations."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from ..config import validator_config
from ..exceptions import PayloadLoadError

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")
PAYLOAD_SUFFIXES = JSON_SUFFIXES + YAML_SUFFIXES

SourceMap = Dict[str, Dict[str, int]]

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class PayloadLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted dates and times as strings.

    Payloads mirror decoded JSON, which has no date type; a bare ``2024-01-01``
    must reach string fields as text.
    """


PayloadLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class PayloadParser:
    """Parser for decoded payload trees, keeping a path -> line/column map."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize payload parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else validator_config.cache_enabled
        self._cache: Dict[Path, Tuple[Any, SourceMap]] = {}

    @staticmethod
    def build_source_map(content: str) -> SourceMap:
        """Build a mapping from report paths (``/a/b[0]``) to 1-based line/column.

        Uses PyYAML's node tree (yaml.compose), which also reads JSON documents,
        so locations are tracked without changing the parsed data.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=PayloadLoader)
        except yaml.YAMLError:
            # Parsing errors are reported by the loader itself.
            return source_map

        if root is None:
            return source_map

        def _walk(node, path: str) -> None:
            mark = node.start_mark
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": mark.line + 1, "column": mark.column + 1}

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, f"{path}/{key}")
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}[{idx}]")

        _walk(root, "")
        return source_map

    @staticmethod
    def _decode(content: str, is_json: bool) -> Any:
        if is_json:
            return json.loads(content)
        data = yaml.load(content, Loader=PayloadLoader)
        return {} if data is None else data

    def load_with_source(self, file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
        """Load a payload file and return (data, source_map).

        Raises:
            PayloadLoadError: If the file cannot be read or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise PayloadLoadError(f"Payload file not found: {path}")

        if not path.is_file():
            raise PayloadLoadError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading payload from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading payload file: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PayloadLoadError(f"Failed to read payload file {path}: {exc}") from exc

        data, source_map = self.load_from_string_with_source(content, is_json=path.suffix.lower() in JSON_SUFFIXES)

        if self.cache_enabled:
            self._cache[path] = (data, source_map)
        return data, source_map

    def load(self, file_path: Union[str, Path]) -> Any:
        data, _ = self.load_with_source(file_path)
        return data

    def load_from_string_with_source(self, content: str, is_json: bool = False) -> Tuple[Any, SourceMap]:
        """Parse payload content and return (data, source_map).

        Raises:
            PayloadLoadError: If the content cannot be parsed
        """
        try:
            data = self._decode(content, is_json)
        except json.JSONDecodeError as exc:
            raise PayloadLoadError(f"Failed to parse JSON content: {exc}") from exc
        except yaml.YAMLError as exc:
            raise PayloadLoadError(f"Failed to parse YAML content: {exc}") from exc
        return data, self.build_source_map(content)

    def load_from_string(self, content: str, is_json: bool = False) -> Any:
        data, _ = self.load_from_string_with_source(content, is_json=is_json)
        return data

    def clear_cache(self) -> None:
        self._cache.clear()


payload_parser = PayloadParser()
