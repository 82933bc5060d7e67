import json
from pathlib import Path
from typing import Any, Dict, Union

from strata.spec import DecodeError, FileHandlerProtocol


def _to_text(content: Union[bytes, str], path: str) -> str:
    if isinstance(content, bytes):
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"{path} is not valid UTF-8: {e}", path=path) from e
    return content


class JsonHandler(FileHandlerProtocol):
    extension = ".json"

    def match(self, path: Union[str, Path]) -> bool:
        return str(path).lower().endswith(self.extension)

    def decode(self, content: Union[bytes, str], path: str) -> Dict[str, Any]:
        text = _to_text(content, path)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Invalid JSON in {path}: {e}", path=path) from e
        if not isinstance(data, dict):
            raise DecodeError(
                f"{path} must contain an object, got {type(data).__name__}", path=path
            )
        return data

    def save(self, path: Path, data: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True, ensure_ascii=False)
