import os
from typing import List, Optional, Tuple

import chardet
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from wctypegen.base.component_extractor import ComponentExtractor
from wctypegen.config import COMPONENT_MEMBER_NAME, WEB_COMPONENT_NAME
from wctypegen.log import get_logger
from wctypegen.models import ComponentRecord, SkippedClass

logger = get_logger("extractor")

CLASS_NODE_TYPES = ("class_declaration", "abstract_class_declaration", "class")

_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b",
    "f": "\f", "v": "\v", "0": "\0",
}
_LINE_CONTINUATIONS = ("\n", "\r", "\r\n", "\u2028", "\u2029")


def read_source(file_path: str) -> str:
    with open(file_path, 'rb') as f:
        raw = f.read()
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        guess = chardet.detect(raw)
        encoding = guess.get('encoding') or 'utf-8'
        return raw.decode(encoding, errors='replace')


def unescape_js(sequence: str) -> str:
    """Decode a single JS escape sequence such as ``\\n`` or ``\\u{1F600}``."""
    body = sequence[1:]
    if body in _LINE_CONTINUATIONS:
        return ""
    try:
        if body.startswith("u{") and body.endswith("}"):
            return chr(int(body[2:-1], 16))
        if body.startswith("u") and len(body) == 5:
            return chr(int(body[1:], 16))
        if body.startswith("x") and len(body) == 3:
            return chr(int(body[1:], 16))
    except ValueError:
        return body
    return _SIMPLE_ESCAPES.get(body, body)


class TypeScriptComponentExtractor(ComponentExtractor):
    """Finds Web Component classes among the top-level declarations of a file.

    A class qualifies when the first type of its first heritage clause
    contains ``base_marker`` in its name. Qualifying classes must declare a
    ``static <member_name> = "tag-name"`` field to produce a record; those that
    don't are reported and skipped.
    """

    def __init__(self, tsx=False, base_marker=WEB_COMPONENT_NAME,
                 member_name=COMPONENT_MEMBER_NAME, strict_base=False):
        grammar = (tree_sitter_typescript.language_tsx() if tsx
                   else tree_sitter_typescript.language_typescript())
        self.language = Language(grammar)
        self.parser = Parser(self.language)
        self.base_marker = base_marker
        self.member_name = member_name
        self.strict_base = strict_base
        self.all_components: List[ComponentRecord] = []
        self.skipped: List[SkippedClass] = []

    def extract_all_components(self):
        return self.all_components

    def extract_skipped(self):
        return self.skipped

    def parse_source(self, code: str):
        return self.parser.parse(code.encode('utf-8'))

    def get_text(self, node: Node) -> str:
        return node.text.decode('utf-8', errors='replace')

    def process_file(self, file_path):
        self.all_components = []
        self.skipped = []
        try:
            code = read_source(file_path)
        except OSError as e:
            logger.warning("Unable to read %s (%s); skipping it", file_path, e)
            return self.all_components
        self.process_source(code, file_path)
        return self.all_components

    def process_source(self, code, file_path):
        self.all_components = []
        self.skipped = []
        tree = self.parse_source(code)
        if tree.root_node.has_error:
            logger.debug("%s has syntax errors; analysing what parsed", file_path)
        file_name = os.path.basename(file_path)

        for node in tree.root_node.children:
            class_node, in_default_export = self.unwrap_export(node)
            if class_node is None:
                continue

            super_parent, interface_type = self.extract_heritage(class_node)
            if not super_parent or not self.matches_base(super_parent):
                continue

            name_node = class_node.child_by_field_name('name')
            if name_node is None:
                continue
            class_name = self.get_text(name_node)

            component_name = self.extract_component_name(class_node)
            if not component_name:
                logger.warning("%s: <%s> has no static %s; skipping",
                               file_name, class_name, self.member_name)
                self.skipped.append(SkippedClass(
                    class_name=class_name,
                    file_path=file_path,
                    reason=f"missing static {self.member_name}",
                ))
                continue

            is_default = in_default_export or f"export default {class_name}" in code
            self.all_components.append(ComponentRecord(
                class_name=class_name,
                tag_name=component_name,
                file_path=file_path,
                interface_type=interface_type,
                is_default_export=is_default,
            ))
        return self.all_components

    def matches_base(self, super_parent: str) -> bool:
        if self.strict_base:
            return super_parent == self.base_marker
        return self.base_marker in super_parent

    def unwrap_export(self, node: Node) -> Tuple[Optional[Node], bool]:
        if node.type in CLASS_NODE_TYPES:
            return node, False
        if node.type != 'export_statement':
            return None, False
        is_default = any(c.type == 'default' for c in node.children)
        decl = node.child_by_field_name('declaration') or node.child_by_field_name('value')
        if decl is not None and decl.type in CLASS_NODE_TYPES:
            return decl, is_default
        return None, False

    def extract_heritage(self, node: Node) -> Tuple[Optional[str], Optional[str]]:
        """Return the first heritage type name and its first generic argument."""
        heritage = None
        for c in node.children:
            if c.type == 'class_heritage':
                heritage = c
                break
        if heritage is None:
            return None, None

        clauses = [c for c in heritage.named_children if c.type != 'comment']
        if not clauses:
            return None, None
        clause = clauses[0]

        if clause.type == 'extends_clause':
            value = clause.child_by_field_name('value')
            type_args = clause.child_by_field_name('type_arguments')
            if value is not None and value.type == 'instantiation_expression':
                type_args = value.child_by_field_name('type_arguments')
                value = value.named_children[0] if value.named_children else None
            if value is None or value.type != 'identifier':
                return None, None
            return self.get_text(value), self.extract_type_argument(type_args)

        if clause.type == 'implements_clause':
            types = [c for c in clause.named_children if c.type != 'comment']
            if not types:
                return None, None
            first = types[0]
            if first.type == 'type_identifier':
                return self.get_text(first), None
            if first.type == 'generic_type':
                name = first.child_by_field_name('name')
                if name is None or name.type != 'type_identifier':
                    return None, None
                return (self.get_text(name),
                        self.extract_type_argument(first.child_by_field_name('type_arguments')))
        return None, None

    def extract_type_argument(self, type_args: Optional[Node]) -> Optional[str]:
        if type_args is None:
            return None
        args = [a for a in type_args.named_children if a.type != 'comment']
        if not args:
            return None
        first = args[0]
        # unions, nested generics and qualified names have no single name
        if first.type != 'type_identifier':
            return None
        return self.get_text(first)

    def extract_modifiers(self, node: Node):
        mods = []
        name = node.child_by_field_name('name')
        for c in node.children:
            if name is not None and c.start_byte >= name.start_byte:
                break
            if c.type in ('static', 'readonly', 'declare', 'abstract', 'accessor'):
                mods.append(c.type)
            elif c.type in ('accessibility_modifier', 'override_modifier'):
                mods.append(self.get_text(c))
        return mods

    def extract_component_name(self, class_node: Node) -> Optional[str]:
        body = class_node.child_by_field_name('body')
        if body is None:
            return None
        component_name = None
        for member in body.named_children:
            if member.type != 'public_field_definition':
                continue
            if 'static' not in self.extract_modifiers(member):
                continue
            name = member.child_by_field_name('name')
            if name is None or name.type != 'property_identifier':
                continue
            if self.get_text(name) != self.member_name:
                continue
            value = member.child_by_field_name('value')
            if value is None or value.type != 'string':
                continue
            component_name = self.string_value(value)
        return component_name

    def string_value(self, node: Node) -> str:
        parts = []
        for c in node.named_children:
            if c.type == 'string_fragment':
                parts.append(self.get_text(c))
            elif c.type == 'escape_sequence':
                parts.append(unescape_js(self.get_text(c)))
        return "".join(parts)
