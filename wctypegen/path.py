"""Locating the component root and walking its source files."""

import os
from typing import Iterable, Iterator, Optional

import pathspec

from wctypegen.config import DEFAULT_COMPONENT_ROOT, SOURCE_EXTS
from wctypegen.errors import ComponentRootNotFound
from wctypegen.models import SourceFile


def resolve_component_root(arg: Optional[str] = None) -> str:
    """Turn the optional CLI argument into a component root.

    The argument is treated as a directory stem, so ``src/app.ts`` resolves
    to ``src/app``.
    """
    if not arg:
        return DEFAULT_COMPONENT_ROOT
    arg_path = os.path.normpath(arg)
    head, tail = os.path.split(arg_path)
    stem, _ = os.path.splitext(tail)
    return os.path.join(head, stem) if head else stem


def ensure_component_root(cwd: str, component_root: str) -> str:
    root = os.path.normpath(os.path.join(cwd, component_root))
    if not os.path.isdir(root):
        raise ComponentRootNotFound(root)
    return root


def load_ignore_spec(project_root: str) -> Optional[pathspec.PathSpec]:
    gitignore_pth = os.path.join(project_root, ".gitignore")
    if not os.path.isfile(gitignore_pth):
        return None
    with open(gitignore_pth, "r", encoding="utf-8") as f:
        gitign_pattern = f.read().splitlines()
    return pathspec.PathSpec.from_lines("gitwildmatch", gitign_pattern)


def _is_ignored(spec, project_root, path, is_dir=False):
    if spec is None:
        return False
    try:
        rel = os.path.relpath(path, project_root)
    except ValueError:
        return False
    if rel.startswith(".."):
        return False
    rel = rel.replace(os.sep, "/")
    if is_dir:
        rel += "/"
    return spec.match_file(rel)


def walk_source_files(
    root: str,
    extensions: Iterable[str] = SOURCE_EXTS,
    ignore_spec: Optional[pathspec.PathSpec] = None,
    project_root: Optional[str] = None,
    exclude: Iterable[str] = (),
) -> Iterator[SourceFile]:
    """Yield every source file under ``root`` in a stable order.

    Directories are visited sorted by name. Symlinked directories are not
    descended into.
    """
    exts = tuple(extensions)
    excluded = {os.path.abspath(p) for p in exclude}
    project_root = project_root or root

    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames[:] = sorted(
            d for d in dirnames
            if not _is_ignored(ignore_spec, project_root, os.path.join(dirpath, d), is_dir=True)
        )
        for fname in sorted(filenames):
            if not fname.endswith(exts):
                continue
            file_path = os.path.abspath(os.path.join(dirpath, fname))
            if file_path in excluded:
                continue
            if _is_ignored(ignore_spec, project_root, file_path):
                continue
            yield SourceFile(path=file_path, name=fname)
