import pytest

from strata.runtime import find_project_root, load_config_from_path, resolve_locale
from strata.spec import ConfigurationError


def test_find_project_root_walks_up_to_pyproject(workspace_factory):
    root = workspace_factory.with_config({"roots": ["locale"]}).build()
    nested = root / "src" / "deep"
    nested.mkdir(parents=True)

    assert find_project_root(nested) == root.resolve()


def test_find_project_root_accepts_git_marker(tmp_path):
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "a"
    nested.mkdir()

    assert find_project_root(nested) == tmp_path.resolve()


def test_load_config_resolves_relative_roots(workspace_factory, tmp_path):
    root = workspace_factory.with_config(
        {"roots": ["locale", str(tmp_path / "abs")], "locale": "de-DE", "sync": False}
    ).build()

    config = load_config_from_path(root)

    assert config.roots == [root / "locale", tmp_path / "abs"]
    assert config.locale == "de-DE"
    assert config.sync is False


def test_missing_config_gives_defaults(tmp_path):
    config = load_config_from_path(tmp_path)

    assert config.roots == []
    assert config.locale is None
    assert config.sync is True


@pytest.mark.parametrize(
    "content",
    ["[tool.strata\nroots = 1", '[tool.strata]\nroots = 1', '[tool.strata]\nsync = "yes"'],
    ids=["bad-toml", "roots-not-list", "sync-not-bool"],
)
def test_invalid_config_is_a_configuration_error(tmp_path, content):
    (tmp_path / "pyproject.toml").write_text(content)

    with pytest.raises(ConfigurationError):
        load_config_from_path(tmp_path)


def test_resolve_locale_priority(monkeypatch):
    monkeypatch.setenv("STRATA_LOCALE", "fr-CA")
    monkeypatch.setenv("LANG", "de_DE.UTF-8")
    assert resolve_locale("ja-JP") == "ja-JP"
    assert resolve_locale() == "fr-CA"

    monkeypatch.delenv("STRATA_LOCALE")
    assert resolve_locale() == "de-DE"

    monkeypatch.setenv("LANG", "C.UTF-8")
    assert resolve_locale() == "en-US"

    monkeypatch.delenv("LANG")
    assert resolve_locale(default="es") == "es"
