"""
Tests for the registry schema and the configuration loader.

Covers:
- Registry defaults, projects() paths and order, immutability
- Duplicate published skill names
- deep_merge, YAML loading, env vars, CLI overrides, precedence
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from skillsync.config import AppConfig, Registry, VendorConfig, load_config
from skillsync.config.loader import deep_merge, find_config, load_env_overrides, load_yaml_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for var in ("SKILLSYNC_WORKSPACE", "SKILLSYNC_LOG_LEVEL", "SKILLSYNC_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)


# ── Tests: Registry ──────────────────────────────────────────────────────


class TestRegistry:
    def test_default_sources_and_vendors(self):
        registry = Registry()
        assert set(registry.sources) == {"vue", "nuxt", "vite", "unocss"}
        assert set(registry.vendors) == {"slidev", "vueuse", "vue-best-practices"}
        assert registry.vendors["vueuse"].skills == {"vueuse-functions": "vueuse"}
        assert registry.vendors["slidev"].official is True
        assert registry.vendors["vue-best-practices"].official is False

    def test_projects_paths_and_order(self, demo_registry: Registry):
        projects = demo_registry.projects()
        assert [(p.name, p.kind, p.path) for p in projects] == [
            ("vue", "source", "sources/vue"),
            ("demo", "vendor", "vendor/demo"),
        ]
        assert projects[1].url == "https://example.com/demo.git"

    def test_project_label(self, demo_registry: Registry):
        assert demo_registry.projects()[0].label == "vue (source)"

    def test_registry_is_frozen(self, demo_registry: Registry):
        with pytest.raises(ValidationError):
            demo_registry.sources = {}

    def test_vendor_config_is_frozen(self):
        cfg = VendorConfig(source="https://x", skills={"a": "b"})
        with pytest.raises(ValidationError):
            cfg.official = True

    def test_duplicate_output_name_rejected(self):
        with pytest.raises(ValidationError, match="published by both"):
            Registry(
                sources={},
                vendors={
                    "one": {"source": "https://a", "skills": {"x": "shared"}},
                    "two": {"source": "https://b", "skills": {"y": "shared"}},
                },
            )

    def test_unknown_vendor_key_rejected(self):
        with pytest.raises(ValidationError):
            VendorConfig(source="https://a", branch="main")

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "..\\x"])
    def test_published_name_must_be_single_folder(self, name):
        with pytest.raises(ValidationError, match="single folder name"):
            VendorConfig(source="https://a", skills={"demo-skill": name})

    @pytest.mark.parametrize("name", ["..", "../escape"])
    def test_source_skill_name_must_be_single_folder(self, name):
        with pytest.raises(ValidationError, match="single folder name"):
            VendorConfig(source="https://a", skills={name: "demo"})

    def test_project_names_must_be_single_folder(self):
        with pytest.raises(ValidationError, match="single folder name"):
            Registry(sources={"../vue": "https://a"}, vendors={})
        with pytest.raises(ValidationError, match="single folder name"):
            Registry(sources={}, vendors={"": {"source": "https://a"}})

    def test_dotted_names_are_allowed(self):
        cfg = VendorConfig(source="https://a", skills={"v1.2": "vue.js"})
        assert cfg.skills == {"v1.2": "vue.js"}


# ── Tests: loader ────────────────────────────────────────────────────────


class TestDeepMerge:
    def test_nested_merge(self):
        base = {"a": {"b": 1, "c": 2}, "d": 3}
        override = {"a": {"b": 99}, "e": 4}
        assert deep_merge(base, override) == {"a": {"b": 99, "c": 2}, "d": 3, "e": 4}

    def test_does_not_mutate_base(self):
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestYamlConfig:
    def test_none_path(self):
        assert load_yaml_config(None) == {}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_yaml_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "skillsync.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_non_mapping_rejected(self, tmp_path: Path):
        path = tmp_path / "skillsync.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_yaml_config(path)

    def test_find_config(self, tmp_path: Path):
        assert find_config(tmp_path) is None
        (tmp_path / "skillsync.yaml").write_text("{}")
        assert find_config(tmp_path) == tmp_path / "skillsync.yaml"


class TestLoadConfig:
    def test_defaults(self, tmp_path: Path):
        config = load_config(cli_args={"workspace": tmp_path})
        assert isinstance(config, AppConfig)
        assert config.workspace.root == tmp_path
        assert config.logging.level == "human"
        assert "vue" in config.registry.sources

    def test_yaml_replaces_vendors_only(self, tmp_path: Path):
        path = tmp_path / "custom.yaml"
        path.write_text(
            "registry:\n"
            "  vendors:\n"
            "    demo:\n"
            "      source: https://example.com/demo.git\n"
            "      skills:\n"
            "        demo-skill: demo\n"
        )
        config = load_config(config_path=path)
        assert list(config.registry.vendors) == ["demo"]
        assert "vue" in config.registry.sources

    def test_workspace_yaml_found_automatically(self, tmp_path: Path):
        (tmp_path / "skillsync.yaml").write_text("registry:\n  sources: {}\n")
        config = load_config(cli_args={"workspace": tmp_path})
        assert config.registry.sources == {}

    def test_env_workspace_yaml_found_automatically(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        (tmp_path / "skillsync.yaml").write_text("registry:\n  sources: {}\n")
        monkeypatch.setenv("SKILLSYNC_WORKSPACE", str(tmp_path))
        monkeypatch.chdir("/")
        config = load_config()
        assert config.workspace.root == tmp_path
        assert config.registry.sources == {}

    def test_env_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SKILLSYNC_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SKILLSYNC_LOG_FILE", str(tmp_path / "log.jsonl"))
        overrides = load_env_overrides()
        assert overrides["logging"] == {"level": "debug", "file": str(tmp_path / "log.jsonl")}

    def test_cli_wins_over_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SKILLSYNC_WORKSPACE", "/somewhere/else")
        config = load_config(cli_args={"workspace": tmp_path, "verbose": 2})
        assert config.workspace.root == tmp_path
        assert config.logging.verbose == 2

    def test_invalid_yaml_key(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("registry:\n  nonsense: 1\n")
        with pytest.raises(ValidationError):
            load_config(config_path=path)
