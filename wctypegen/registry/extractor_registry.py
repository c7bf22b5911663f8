from wctypegen.config import BuildConfig
from wctypegen.extractors.typescript_extractor import TypeScriptComponentExtractor

EXT_MAP = {
    "typescript": [".ts", ".mts", ".cts"],
    "tsx": [".tsx"],
}

INVERSE_EXTS = {ext: lang for lang, exts in EXT_MAP.items() for ext in exts}


def language_for_file(file_name: str) -> str:
    for ext, lang in INVERSE_EXTS.items():
        if file_name.endswith(ext):
            return lang
    return "typescript"


def get_extractor(language: str, config: BuildConfig = None):
    config = config or BuildConfig()
    lang = language.lower()
    kwargs = dict(
        base_marker=config.base_marker,
        member_name=config.member_name,
        strict_base=config.strict_base,
    )
    if lang == "typescript":
        return TypeScriptComponentExtractor(tsx=False, **kwargs)
    if lang == "tsx":
        return TypeScriptComponentExtractor(tsx=True, **kwargs)
    raise ValueError(f"No extractor for language: {language}")
