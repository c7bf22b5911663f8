import json
import logging

import pytest

from wctypegen.config import BuildConfig
from wctypegen.errors import ComponentRootNotFound, ProjectConfigNotFound
from wctypegen.main import build_types, main

QUIET = BuildConfig(run_formatter=False, show_progress=False)

FOO = (
    'import { WebComponent } from "../lib/web-component.ts";\n'
    "export interface IFooProps { size?: number }\n"
    "class Foo extends WebComponent<IFooProps> {\n"
    '  static componentName = "foo-el";\n'
    "}\n"
    "export default Foo;\n"
)

BAR = (
    "export class Bar extends WebComponent {\n"
    '  static componentName = "bar-el";\n'
    "}\n"
    "export class Broken extends WebComponent {}\n"
    "export class Helper {}\n"
)


def write_sources(project):
    (project / "src" / "foo.ts").write_text(FOO)
    (project / "src" / "widgets").mkdir()
    (project / "src" / "widgets" / "bar.tsx").write_text(BAR)


def test_end_to_end(project):
    write_sources(project)

    result = build_types(str(project), config=QUIET)

    assert [r.class_name for r in result.records] == ["Foo", "Bar"]
    assert [s.class_name for s in result.skipped] == ["Broken"]
    assert result.config_changed is True

    text = (project / "components.d.ts").read_text()
    assert 'import Foo from "./src/foo.ts";' in text
    assert 'import { Bar } from "./src/widgets/bar.tsx";' in text
    assert '"foo-el": Foo;' in text
    assert '"foo-el": import("./src/foo.ts").IFooProps & AdditionalTypes;' in text
    assert '"bar-el": AdditionalTypes;' in text
    assert "Broken" not in text
    assert "Helper" not in text

    types = json.loads((project / "deno.json").read_text())["compilerOptions"]["types"]
    assert types == ["./components.d.ts"]


def test_second_run_is_identical(project):
    write_sources(project)

    build_types(str(project), config=QUIET)
    first_dts = (project / "components.d.ts").read_bytes()
    first_cfg = (project / "deno.json").read_bytes()

    result = build_types(str(project), config=QUIET)
    assert result.config_changed is False
    assert (project / "components.d.ts").read_bytes() == first_dts
    assert (project / "deno.json").read_bytes() == first_cfg


def test_empty_tree(project):
    result = build_types(str(project), config=QUIET)
    assert result.records == []
    text = (project / "components.d.ts").read_text()
    assert "interface HTMLElementTagNameMap {}" in text
    assert "type AdditionalTypes" in text


def test_custom_component_root(project):
    (project / "app" / "ui").mkdir(parents=True)
    (project / "app" / "ui" / "x.ts").write_text(
        'export class X extends WebComponent { static componentName = "x-el"; }\n'
    )
    write_sources(project)
    result = build_types(str(project), "app/ui", config=QUIET)
    assert [r.tag_name for r in result.records] == ["x-el"]


def test_missing_root_writes_nothing(project):
    with pytest.raises(ComponentRootNotFound):
        build_types(str(project), "nope", config=QUIET)
    assert not (project / "components.d.ts").exists()


def test_missing_project_config_writes_nothing(project):
    (project / "deno.json").unlink()
    with pytest.raises(ProjectConfigNotFound):
        build_types(str(project), config=QUIET)
    assert not (project / "components.d.ts").exists()


def test_cli_exits_with_1_on_missing_root(project, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["missing", "--cwd", str(project), "--no-format"])
    assert exc.value.code == 1
    assert "doesn't exist" in capsys.readouterr().err
    assert not (project / "components.d.ts").exists()


def test_cli_success(project):
    write_sources(project)
    main(["--cwd", str(project), "--no-format"])
    assert (project / "components.d.ts").exists()
    assert logging.getLogger("wctypegen").handlers


def test_cli_strict_base(project):
    (project / "src" / "w.ts").write_text(
        'export class W extends MyWebComponentBase { static componentName = "w-el"; }\n'
    )
    main(["--cwd", str(project), "--no-format", "--strict-base"])
    assert '"w-el"' not in (project / "components.d.ts").read_text()
