"""Registering the generated declaration file in the project config."""

import json
import os

from wctypegen.config import COMPONENT_DTS, PROJECT_CONFIG
from wctypegen.errors import ProjectConfigError, ProjectConfigNotFound
from wctypegen.log import get_logger

logger = get_logger("registrar")


def load_project_config(config_path):
    if not os.path.isfile(config_path):
        raise ProjectConfigNotFound(config_path)
    with open(config_path, "r", encoding="utf-8") as f:
        raw = f.read()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ProjectConfigError(f"Unable to parse {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ProjectConfigError(f"{config_path} must contain a JSON object")
    return data


def add_type_entry(data, dts_name=COMPONENT_DTS):
    """Make sure ``compilerOptions.types`` references ``dts_name``.

    Returns True when ``data`` was modified.
    """
    changed = False
    compiler_options = data.get("compilerOptions")
    if not isinstance(compiler_options, dict):
        compiler_options = {}
        data["compilerOptions"] = compiler_options
        changed = True
    types = compiler_options.get("types")
    if not isinstance(types, list):
        types = []
        compiler_options["types"] = types
        changed = True

    if not any(isinstance(t, str) and dts_name in t for t in types):
        types.append(f"./{dts_name}")
        changed = True
    return changed


def register_declaration_file(cwd, dts_name=COMPONENT_DTS, config_name=PROJECT_CONFIG):
    config_path = os.path.join(cwd, config_name)
    data = load_project_config(config_path)
    if not add_type_entry(data, dts_name):
        logger.debug("%s already lists %s", config_name, dts_name)
        return False

    with open(config_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(json.dumps(data, indent=2, ensure_ascii=False) + "\n")
    logger.info("Registered ./%s in %s", dts_name, config_name)
    return True
