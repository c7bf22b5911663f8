from dataclasses import dataclass, field
from typing import Tuple

WEB_COMPONENT_NAME = "WebComponent"
COMPONENT_MEMBER_NAME = "componentName"
COMPONENT_DTS = "components.d.ts"
PROJECT_CONFIG = "deno.json"
DEFAULT_COMPONENT_ROOT = "src"
SOURCE_EXTS = (".ts", ".tsx")
FORMAT_COMMAND = ("deno", "fmt")


@dataclass
class BuildConfig:
    base_marker: str = WEB_COMPONENT_NAME
    member_name: str = COMPONENT_MEMBER_NAME
    output_name: str = COMPONENT_DTS
    project_config: str = PROJECT_CONFIG
    extensions: Tuple[str, ...] = SOURCE_EXTS
    format_command: Tuple[str, ...] = field(default=FORMAT_COMMAND)
    run_formatter: bool = True
    # exact name match on the heritage type instead of substring match
    strict_base: bool = False
    respect_gitignore: bool = True
    show_progress: bool = True
