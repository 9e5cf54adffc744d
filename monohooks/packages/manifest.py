"""
Package Manifest Configuration

Reads the hook configuration section of a package manifest:

    {
      "name": "web",
      "monohooks": {
        "enabled": true,
        "skip-users": ["release-bot"],
        "restrictions": {"fileTypes": ["js", "ts"], "folders": ["src"]},
        "commit-msg": "^JIRA-\\\\d+",
        "pre-commit": ["npm run lint"],
        "pre-push": ["npm test"]
      }
    }

Every hook event name is a top-level key holding an ordered list of shell
commands. The section is parsed fresh on every run.
"""

import json
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from monohooks.configs import DEFAULT_CONFIG_KEY, TASK_EVENTS, HookEvent, get_logger
from monohooks.exceptions import InvalidConfigError, NoConfigError, PathNotFoundError
from monohooks.packages.discovery import Package
from monohooks.utils import is_a_file

logger = get_logger("manifest")


def _as_list(value: Any) -> Any:
    """Treat null as an empty list and a lone string as a one-item list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


class Restrictions(BaseModel):
    """Which changed files count as relevant for a package."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    folders: list[str] = Field(default_factory=list)
    file_types: list[str] = Field(default_factory=list, alias="fileTypes")

    @field_validator("folders", "file_types", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Any:
        return _as_list(value)

    @property
    def is_empty(self) -> bool:
        return not self.folders and not self.file_types


class HookConfig(BaseModel):
    """A package's hook configuration."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    enabled: bool = True
    skip_users: list[str] = Field(default_factory=list, alias="skip-users")
    restrictions: Restrictions = Field(default_factory=Restrictions)
    commit_msg: Optional[str] = Field(None, alias="commit-msg")
    tasks: dict[HookEvent, list[str]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_sections(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        data["tasks"] = {
            event: _as_list(data.pop(event.value))
            for event in TASK_EVENTS
            if event.value in data
        }

        # Older installers nested skip-users inside restrictions
        restrictions = data.get("restrictions")
        if isinstance(restrictions, dict) and "skip-users" in restrictions:
            legacy = _as_list(restrictions.get("skip-users"))
            data["skip-users"] = list(_as_list(data.get("skip-users"))) + list(legacy)

        if data.get("enabled") is None:
            data.pop("enabled", None)
        if data.get("restrictions") is None:
            data.pop("restrictions", None)
        if not data.get("commit-msg"):
            data.pop("commit-msg", None)
        if "skip-users" in data:
            data["skip-users"] = _as_list(data["skip-users"])
        return data

    @field_validator("tasks")
    @classmethod
    def _tasks_not_blank(cls, tasks: dict[HookEvent, list[str]]) -> dict[HookEvent, list[str]]:
        for event, commands in tasks.items():
            if any(not command.strip() for command in commands):
                raise ValueError(f"{event.value} contains an empty command")
        return tasks

    def tasks_for(self, event: HookEvent) -> list[str]:
        """Commands configured for an event, in execution order."""
        return list(self.tasks.get(event, []))

    def skips_user(self, user: str) -> bool:
        return bool(user) and user in self.skip_users


# =============================================================================
# Manifest I/O
# =============================================================================


def load_manifest(manifest_path: str) -> dict:
    """
    Parse a manifest file (JSON, or YAML for .yaml/.yml).

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content cannot be parsed into a mapping
    """
    path = Path(manifest_path)
    content = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML: {e}")
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON: {e}")

    if not isinstance(data, dict):
        raise ValueError("manifest is not a mapping")
    return data


def _validation_summary(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "section"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def resolve_config(package: Package, config_key: str = DEFAULT_CONFIG_KEY) -> HookConfig:
    """
    Load the hook configuration of a package.

    Args:
        package: Discovered package
        config_key: Manifest key holding the configuration section

    Returns:
        Validated HookConfig (enabled defaults to True)

    Raises:
        NoConfigError: Manifest unreadable or section missing
        InvalidConfigError: Section present but invalid
    """
    try:
        manifest = load_manifest(package.manifest_path)
    except (OSError, ValueError) as e:
        raise NoConfigError(package.name, reason=str(e))

    section = manifest.get(config_key)
    if section is None:
        raise NoConfigError(package.name)
    if not isinstance(section, dict):
        raise InvalidConfigError(package.name, reason=f"'{config_key}' must be a mapping")

    try:
        return HookConfig.model_validate(section)
    except ValidationError as e:
        raise InvalidConfigError(package.name, reason=_validation_summary(e))


def default_config_section() -> dict:
    """Configuration section written by `monohooks init`."""
    section: dict[str, Any] = {
        "enabled": True,
        "skip-users": [],
        "restrictions": {"fileTypes": [], "folders": []},
    }
    for event in TASK_EVENTS:
        section[event.value] = []
    return section


def write_default_config(manifest_path: str, config_key: str = DEFAULT_CONFIG_KEY) -> bool:
    """
    Add an empty hook configuration section to a manifest.

    Other manifest keys are preserved. Nothing is written when the section
    already exists.

    Returns:
        True if the manifest was updated

    Raises:
        PathNotFoundError: If the manifest does not exist
        ValueError: If the manifest cannot be parsed
    """
    path = Path(manifest_path)
    if not is_a_file(path):
        raise PathNotFoundError(str(path), path.name)

    manifest = load_manifest(str(path))
    if config_key in manifest:
        return False

    manifest[config_key] = default_config_section()
    if path.suffix in (".yaml", ".yml"):
        path.write_text(yaml.safe_dump(manifest, default_flow_style=False, sort_keys=False))
    else:
        path.write_text(json.dumps(manifest, indent=2) + "\n")
    logger.info(f"Building empty configuration object in {path}")
    return True
