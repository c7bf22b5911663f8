from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourceFile:
    path: str
    name: str


@dataclass
class ComponentRecord:
    class_name: str
    tag_name: str
    file_path: str
    interface_type: Optional[str] = None
    is_default_export: bool = False


@dataclass
class SkippedClass:
    class_name: str
    file_path: str
    reason: str
