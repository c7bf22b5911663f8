import logging
import os

from wctypegen.emitter import emit_declarations, write_declarations
from wctypegen.emitter.declaration_emitter import import_path
from wctypegen.models import ComponentRecord

ROOT = os.path.join(os.sep, "proj")


def record(class_name, tag, rel, interface=None, default=False):
    return ComponentRecord(
        class_name=class_name,
        tag_name=tag,
        file_path=os.path.join(ROOT, *rel.split("/")),
        interface_type=interface,
        is_default_export=default,
    )


def test_full_output_for_single_component():
    text = emit_declarations([record("Foo", "foo-el", "src/foo.ts", "IFooProps", True)], ROOT)
    assert text == (
        'import Foo from "./src/foo.ts";\n'
        "\n"
        "type AdditionalTypes = {\n"
        "  ref?: string;\n"
        "  style?: Partial<CSSStyleDeclaration>;\n"
        "  children?: HTMLElement;\n"
        '} & Partial<Omit<HTMLElement, "style">>;\n'
        "\n"
        "declare global {\n"
        "  interface HTMLElementTagNameMap {\n"
        '    "foo-el": Foo;\n'
        "  }\n"
        "  namespace JSX {\n"
        "    interface IntrinsicElements {\n"
        '      "foo-el": import("./src/foo.ts").IFooProps & AdditionalTypes;\n'
        "    }\n"
        "  }\n"
        "}\n"
    )


def test_named_import_and_plain_additional_types():
    text = emit_declarations([record("Bar", "bar-el", "src/ui/bar.tsx")], ROOT)
    assert 'import { Bar } from "./src/ui/bar.tsx";' in text
    assert '"bar-el": Bar;' in text
    assert '"bar-el": AdditionalTypes;' in text


def test_empty_records_still_produce_valid_module():
    text = emit_declarations([], ROOT)
    assert text.startswith("export {};\n")
    assert "type AdditionalTypes = {" in text
    assert "  interface HTMLElementTagNameMap {}\n" in text
    assert "    interface IntrinsicElements {}\n" in text
    assert text.count("{") == text.count("}")


def test_entries_follow_record_order():
    text = emit_declarations([
        record("Zed", "z-el", "src/z.ts"),
        record("Alpha", "a-el", "src/a.ts"),
    ], ROOT)
    assert text.index('import { Zed }') < text.index('import { Alpha }')
    assert text.index('"z-el": Zed;') < text.index('"a-el": Alpha;')


def test_tag_collision_keeps_last_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="wctypegen"):
        text = emit_declarations([
            record("First", "dup-el", "src/first.ts"),
            record("Second", "dup-el", "src/second.ts", "ISecond"),
        ], ROOT)
    assert '"dup-el": First;' not in text
    assert text.count('"dup-el": Second;') == 1
    assert '"dup-el": import("./src/second.ts").ISecond & AdditionalTypes;' in text
    # both files are still imported
    assert 'import { First } from "./src/first.ts";' in text
    assert any("dup-el" in r.getMessage() for r in caplog.records)


def test_tag_names_are_escaped():
    text = emit_declarations([record("Odd", 'odd"el', "src/odd.ts")], ROOT)
    assert '"odd\\"el": Odd;' in text


def test_output_is_deterministic():
    records = [
        record("Foo", "foo-el", "src/foo.ts", "IFooProps", True),
        record("Bar", "bar-el", "src/bar.ts"),
    ]
    assert emit_declarations(records, ROOT) == emit_declarations(list(records), ROOT)


def test_import_path_outside_project():
    assert import_path(os.path.join(ROOT, "src", "a.ts"), ROOT) == "./src/a.ts"
    outside = os.path.join(os.sep, "elsewhere", "a.ts")
    assert import_path(outside, ROOT) == "../elsewhere/a.ts"


def test_write_declarations_overwrites(tmp_path):
    out = tmp_path / "components.d.ts"
    out.write_text("stale content that is much longer than the new one\n")
    write_declarations("export {};\n", str(out))
    assert out.read_text() == "export {};\n"
