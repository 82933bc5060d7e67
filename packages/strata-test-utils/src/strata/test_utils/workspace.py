import json
import subprocess
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List, Mapping, Optional

from strata.loaders import JsonHandler, YamlHandler
from strata.locale import Locale, sublocale_dir


def _toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_toml_value(v) for v in value) + "]"
    return json.dumps(value)


class WorkspaceFactory:
    """
    Builds an on-disk data tree for tests.

    Files are collected first and written by `build()`, so a test reads as a
    description of the tree:

        root = (
            WorkspaceFactory(tmp_path)
            .with_fragment("data", "root", "info", {"a": 1})
            .with_fragment("data", "en-US", "info", {"a": 2})
            .build()
        )
    """

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files: List[tuple] = []
        self._config: Optional[Dict[str, Any]] = None

    def with_config(self, config: Mapping[str, Any]) -> "WorkspaceFactory":
        self._config = dict(config)
        return self

    def with_fragment(
        self,
        data_root: str,
        sublocale: str,
        basename: str,
        data: Mapping[str, Any],
        fmt: str = "json",
    ) -> "WorkspaceFactory":
        spec = Locale.parse(sublocale).spec
        directory = sublocale_dir(spec)
        rel = Path(data_root) / directory / f"{basename}.{fmt}"
        self._files.append(("data", rel, dict(data), fmt))
        return self

    def with_bundle(
        self, data_root: str, locale: str, bundle: Mapping[str, Any]
    ) -> "WorkspaceFactory":
        rel = Path(data_root) / f"{Locale.parse(locale).spec}.json"
        self._files.append(("data", rel, dict(bundle), "json"))
        return self

    def with_raw_file(self, path: str, content: str) -> "WorkspaceFactory":
        self._files.append(("raw", Path(path), dedent(content).strip() + "\n", None))
        return self

    def init_git(self) -> "WorkspaceFactory":
        self.root_path.mkdir(parents=True, exist_ok=True)
        subprocess.run(
            ["git", "init", "--quiet"], cwd=self.root_path, check=True, capture_output=True
        )
        return self

    def build(self) -> Path:
        self.root_path.mkdir(parents=True, exist_ok=True)
        if self._config is not None:
            lines = ["[tool.strata]"]
            lines += [f"{k} = {_toml_value(v)}" for k, v in self._config.items()]
            (self.root_path / "pyproject.toml").write_text(
                "\n".join(lines) + "\n", encoding="utf-8"
            )

        for kind, rel, payload, fmt in self._files:
            target = self.root_path / rel
            if kind == "raw":
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(payload, encoding="utf-8")
            elif fmt == "yaml":
                YamlHandler().save(target, payload)
            else:
                JsonHandler().save(target, payload)
        return self.root_path
