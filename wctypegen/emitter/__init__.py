from wctypegen.emitter.declaration_emitter import (
    build_declaration_file,
    emit_declarations,
    write_declarations,
)

__all__ = ["build_declaration_file", "emit_declarations", "write_declarations"]
