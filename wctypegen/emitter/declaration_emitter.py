import os
from collections import OrderedDict
from typing import Iterable, List

from wctypegen.emitter.nodes import (
    Block,
    DeclarationFile,
    Identifier,
    ImportDecl,
    ImportTypeRef,
    InterfaceDecl,
    Intersection,
    PropertyEntry,
    RawStatement,
)
from wctypegen.log import get_logger
from wctypegen.models import ComponentRecord

logger = get_logger("emitter")

ADDITIONAL_TYPES = "AdditionalTypes"

ADDITIONAL_TYPES_DECL = f"""type {ADDITIONAL_TYPES} = {{
  ref?: string;
  style?: Partial<CSSStyleDeclaration>;
  children?: HTMLElement;
}} & Partial<Omit<HTMLElement, "style">>;"""


def import_path(file_path: str, project_root: str) -> str:
    rel = os.path.relpath(file_path, project_root).replace("\\", "/")
    if rel.startswith("../"):
        return rel
    return f"./{rel}"


def _by_tag(records: Iterable[ComponentRecord]) -> "OrderedDict[str, ComponentRecord]":
    tags = OrderedDict()
    for rec in records:
        previous = tags.get(rec.tag_name)
        if previous is not None:
            logger.warning(
                "Tag <%s> is declared by both %s and %s; keeping %s",
                rec.tag_name, previous.class_name, rec.class_name, rec.class_name,
            )
        tags[rec.tag_name] = rec
    return tags


def build_declaration_file(records: List[ComponentRecord], project_root: str) -> DeclarationFile:
    imports = [
        ImportDecl(
            name=rec.class_name,
            module=import_path(rec.file_path, project_root),
            default=rec.is_default_export,
        )
        for rec in records
    ]
    if not imports:
        # declare global is only legal inside a module
        imports = [RawStatement("export {};")]

    tags = _by_tag(records)

    tag_name_map = InterfaceDecl("HTMLElementTagNameMap", [
        PropertyEntry(tag, Identifier(rec.class_name)) for tag, rec in tags.items()
    ])

    jsx_entries = []
    for tag, rec in tags.items():
        if rec.interface_type:
            value = Intersection([
                ImportTypeRef(import_path(rec.file_path, project_root), rec.interface_type),
                Identifier(ADDITIONAL_TYPES),
            ])
        else:
            value = Identifier(ADDITIONAL_TYPES)
        jsx_entries.append(PropertyEntry(tag, value))

    intrinsic_elements = Block("namespace JSX", [
        InterfaceDecl("IntrinsicElements", jsx_entries),
    ])

    return DeclarationFile([
        imports,
        [RawStatement(ADDITIONAL_TYPES_DECL)],
        [Block("declare global", [tag_name_map, intrinsic_elements])],
    ])


def emit_declarations(records: List[ComponentRecord], project_root: str) -> str:
    return build_declaration_file(records, project_root).render()


def write_declarations(text: str, output_path: str) -> None:
    with open(output_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
