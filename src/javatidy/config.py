"""
Runtime Configuration Store.

Settings are read from the ``[tool.javatidy]`` table of the nearest
``pyproject.toml`` and overridden by CLI arguments.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from rich.markup import escape

from javatidy.core.rules import available_rules
from javatidy.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_MAX_PASSES = 10


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the refactoring engine.
  """

  enabled_rules: List[str] = Field(
    default_factory=available_rules,
    description="Rule names to run, in order. Defaults to every registered rule.",
  )
  max_passes: int = Field(
    DEFAULT_MAX_PASSES,
    ge=1,
    description="Upper bound on parse/traverse/apply passes per file.",
  )
  fail_fast: bool = Field(False, description="If True, stop a directory batch at the first failed file.")
  selected_element: Optional[str] = Field(None, description="Element name the preview surface is filtered by.")

  @field_validator("enabled_rules")
  @classmethod
  def validate_rules(cls, v: List[str]) -> List[str]:
    """
    Ensures every rule is registered.

    Args:
        v (List[str]): Rule names to validate.

    Returns:
        List[str]: Normalized rule names, duplicates removed.

    Raises:
        ValueError: If a rule is not found in the registry.
    """
    known = available_rules()
    cleaned = list(dict.fromkeys(name.strip().lower() for name in v))
    unknown = [name for name in cleaned if name not in known]
    if unknown:
      raise ValueError(f"Unknown rules: {unknown}. Available rules: {known}")
    return cleaned

  @classmethod
  def load(
    cls,
    enabled_rules: Optional[List[str]] = None,
    max_passes: Optional[int] = None,
    fail_fast: Optional[bool] = None,
    selected_element: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        enabled_rules (Optional[List[str]]): Override for the rule list.
        max_passes (Optional[int]): Override for the pass limit.
        fail_fast (Optional[bool]): Override for batch fail-fast.
        selected_element (Optional[str]): Override for the preview filter.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    values: Dict[str, Any] = {}

    final_rules = enabled_rules or toml_config.get("enabled_rules")
    if final_rules:
      values["enabled_rules"] = final_rules

    final_passes = max_passes if max_passes is not None else toml_config.get("max_passes")
    if final_passes is not None:
      values["max_passes"] = final_passes

    final_fail_fast = fail_fast if fail_fast is not None else toml_config.get("fail_fast")
    if final_fail_fast is not None:
      values["fail_fast"] = final_fail_fast

    final_selected = selected_element or toml_config.get("selected_element")
    if final_selected:
      values["selected_element"] = final_selected

    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable {toml_path}: {escape(str(e))}")
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("javatidy", {}), parent

  return {}, None
