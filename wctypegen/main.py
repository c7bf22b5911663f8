import argparse
import os
import sys
from dataclasses import dataclass, field, replace
from typing import List, Optional

from tqdm import tqdm

from wctypegen.config import BuildConfig
from wctypegen.emitter import emit_declarations, write_declarations
from wctypegen.errors import FatalPrecondition, ProjectConfigNotFound, TypeGenError
from wctypegen.log import configure_logging, get_logger
from wctypegen.models import ComponentRecord, SkippedClass
from wctypegen.path import (
    ensure_component_root,
    load_ignore_spec,
    resolve_component_root,
    walk_source_files,
)
from wctypegen.registrar import register_declaration_file
from wctypegen.registry.extractor_registry import get_extractor, language_for_file
from wctypegen.utils.formatter import format_declaration_file

logger = get_logger()


@dataclass
class BuildResult:
    output_path: str
    records: List[ComponentRecord] = field(default_factory=list)
    skipped: List[SkippedClass] = field(default_factory=list)
    config_changed: bool = False
    formatted: bool = False


def collect_components(files, config: BuildConfig):
    """Run the extractor over every file, keeping discovery order."""
    extractors = {}
    records: List[ComponentRecord] = []
    skipped: List[SkippedClass] = []

    for source in tqdm(files, desc="Generating type caches", unit="file",
                       disable=not config.show_progress, leave=False):
        language = language_for_file(source.name)
        extractor = extractors.get(language)
        if extractor is None:
            extractor = extractors[language] = get_extractor(language, config)
        extractor.process_file(source.path)
        records.extend(extractor.extract_all_components())
        skipped.extend(extractor.extract_skipped())
    return records, skipped


def build_types(cwd: str, component_root: Optional[str] = None,
                config: Optional[BuildConfig] = None) -> BuildResult:
    config = config or BuildConfig()
    cwd = os.path.abspath(cwd)
    component_root = component_root or resolve_component_root()
    root = ensure_component_root(cwd, component_root)

    config_path = os.path.join(cwd, config.project_config)
    if not os.path.isfile(config_path):
        raise ProjectConfigNotFound(config_path)

    output_path = os.path.join(cwd, config.output_name)
    logger.info("Building from: %s", component_root)
    logger.info("Finding files...")
    ignore_spec = load_ignore_spec(cwd) if config.respect_gitignore else None
    files = list(walk_source_files(
        root,
        extensions=config.extensions,
        ignore_spec=ignore_spec,
        project_root=cwd,
        exclude=[output_path],
    ))
    logger.debug("Found %d source files", len(files))

    records, skipped = collect_components(files, config)
    logger.info("Type cache built: %d components, %d skipped", len(records), len(skipped))

    logger.info("Writing %s...", config.output_name)
    write_declarations(emit_declarations(records, cwd), output_path)

    formatted = False
    if config.run_formatter:
        formatted = format_declaration_file(cwd, config.output_name, config.format_command)

    config_changed = register_declaration_file(cwd, config.output_name, config.project_config)
    return BuildResult(
        output_path=output_path,
        records=records,
        skipped=skipped,
        config_changed=config_changed,
        formatted=formatted,
    )


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="wctypegen",
        description="Generate components.d.ts for the WebComponents in a project.",
    )
    parser.add_argument("path", nargs="?", default=None,
                        help="Component root, relative to the project (default: src)")
    parser.add_argument("--cwd", default=None,
                        help="Project root holding deno.json (default: current directory)")
    parser.add_argument("--no-format", action="store_true",
                        help="Do not run `deno fmt` on the generated file")
    parser.add_argument("--strict-base", action="store_true",
                        help="Require the base class to be named exactly WebComponent")
    parser.add_argument("--no-gitignore", action="store_true",
                        help="Scan files even when .gitignore excludes them")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Increase log verbosity")
    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    config = replace(
        BuildConfig(),
        run_formatter=not args.no_format,
        strict_base=args.strict_base,
        respect_gitignore=not args.no_gitignore,
        show_progress=sys.stderr.isatty(),
    )
    cwd = args.cwd or os.getcwd()

    try:
        result = build_types(cwd, resolve_component_root(args.path), config)
    except FatalPrecondition as e:
        logger.error("%s", e)
        sys.exit(1)
    except TypeGenError as e:
        logger.error("Error: %s", e)
        sys.exit(2)

    logger.info("Wrote %s", os.path.relpath(result.output_path, cwd))


if __name__ == "__main__":
    main()
