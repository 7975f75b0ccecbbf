"""
Pydantic models for skillsync configuration.

The registry models are frozen: they are built once at startup and passed
explicitly to every operation.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .defaults import DEFAULT_SOURCES, DEFAULT_VENDORS, SOURCES_DIR, VENDOR_DIR


def check_folder_name(name: str, what: str) -> str:
    """Validate that name is usable as a single directory name.

    Raises:
        ValueError: If name is empty, `.`, `..` or contains a path separator.
    """
    if name in ("", ".", "..") or "/" in name or "\\" in name:
        raise ValueError(f"invalid {what} name '{name}': must be a single folder name")
    return name


class VendorConfig(BaseModel):
    """A repository that already ships skill folders."""

    source: str = Field(description="Remote URL of the vendor repository")
    official: bool = Field(
        default=False,
        description="True if the skills are maintained by the library authors",
    )
    skills: dict[str, str] = Field(
        default_factory=dict,
        description="Source skill folder name -> published skill folder name",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("skills")
    @classmethod
    def _skill_names_are_folders(cls, v: dict[str, str]) -> dict[str, str]:
        for source, output in v.items():
            check_folder_name(source, "source skill")
            check_folder_name(output, "published skill")
        return v


class Project(BaseModel):
    """A repository registered (or to be registered) as a submodule."""

    name: str
    url: str
    kind: Literal["source", "vendor"]
    path: str

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return f"{self.name} ({self.kind})"


class Registry(BaseModel):
    """Source and vendor repositories managed as submodules."""

    sources: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SOURCES))
    vendors: dict[str, VendorConfig] = Field(
        default_factory=lambda: {
            name: VendorConfig(**cfg) for name, cfg in DEFAULT_VENDORS.items()
        }
    )

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("sources", "vendors")
    @classmethod
    def _project_names_are_folders(cls, v: dict) -> dict:
        for name in v:
            check_folder_name(name, "project")
        return v

    @field_validator("vendors")
    @classmethod
    def _published_names_unique(cls, v: dict[str, VendorConfig]) -> dict[str, VendorConfig]:
        seen: dict[str, str] = {}
        for vendor_name, cfg in v.items():
            for output in cfg.skills.values():
                if output in seen:
                    raise ValueError(
                        f"skill '{output}' is published by both "
                        f"'{seen[output]}' and '{vendor_name}'"
                    )
                seen[output] = vendor_name
        return v

    def projects(self) -> list[Project]:
        """All projects, sources first, with their submodule paths."""
        projects = [
            Project(name=name, url=url, kind="source", path=f"{SOURCES_DIR}/{name}")
            for name, url in self.sources.items()
        ]
        projects.extend(
            Project(name=name, url=cfg.source, kind="vendor", path=f"{VENDOR_DIR}/{name}")
            for name, cfg in self.vendors.items()
        )
        return projects


class LoggingConfig(BaseModel):
    """Logging system configuration."""

    level: Literal["debug", "info", "human", "warn", "error"] = "human"
    file: Path | None = None
    verbose: int = 0

    model_config = {"extra": "forbid"}


class WorkspaceConfig(BaseModel):
    """Workspace (repository root) configuration."""

    root: Path = Path(".")

    model_config = {"extra": "forbid"}


class AppConfig(BaseModel):
    """Complete application configuration."""

    registry: Registry = Field(default_factory=Registry)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)

    model_config = {"extra": "forbid"}
