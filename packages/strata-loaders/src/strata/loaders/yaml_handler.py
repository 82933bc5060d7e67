from pathlib import Path
from typing import Any, Dict, Union

import yaml

from strata.spec import DecodeError, FileHandlerProtocol
from .json_handler import _to_text


class YamlHandler(FileHandlerProtocol):
    """Decodes fragments written as YAML mappings (.yaml, .yml)."""

    extension = ".yaml"

    def match(self, path: Union[str, Path]) -> bool:
        return str(path).lower().endswith((".yaml", ".yml"))

    def decode(self, content: Union[bytes, str], path: str) -> Dict[str, Any]:
        text = _to_text(content, path)
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DecodeError(f"Invalid YAML in {path}: {e}", path=path) from e
        # An empty document is an empty fragment, not an error.
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DecodeError(
                f"{path} must contain a mapping, got {type(data).__name__}", path=path
            )
        return data

    def save(self, path: Path, data: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, allow_unicode=True, sort_keys=True)
