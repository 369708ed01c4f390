from __future__ import annotations

import re

SCRIPT_EXT = {".js", ".jsx", ".ts", ".tsx"}

# import logo from ./assets/logo.png  ->  import logo from './assets/logo.png'
ASSET_DEFAULT_IMPORT = re.compile(
    r"^([ \t]*import[ \t]+\w+[ \t]+from[ \t]+)['\"]?(\.{1,2}/assets/[^'\"\s;]+)['\"]?([ \t]*;?[ \t]*)$",
    re.MULTILINE,
)

# import App from './App  ->  import App from './App'
DEFAULT_IMPORT = re.compile(
    r"^([ \t]*import[ \t]+\w+[ \t]+from[ \t]+)(['\"])([^'\"\n]+?)(?:\2)?([ \t]*;?[ \t]*)$",
    re.MULTILINE,
)

# } from './hooks  ->  } from './hooks'
# Only import/export statements and the closing brace of a multi-line one.
FROM_CLAUSE = re.compile(
    r"^([ \t]*(?:(?:import|export)\b[^'\"\n]*?|\}[ \t]*)\bfrom[ \t]+)(['\"])([^'\"\n]+?)(?:\2)?([ \t]*;?[ \t]*)$",
    re.MULTILINE,
)


def _close_quote(m: re.Match) -> str:
    return f"{m.group(1)}{m.group(2)}{m.group(3)}{m.group(2)}{m.group(4)}"


def repair_imports(text: str) -> str:
    """
    Best-effort normalisation of one-line import statements.

    Pattern based, not a parser: unusual but valid source can slip through.
    Well-formed input comes back unchanged.
    """
    text = ASSET_DEFAULT_IMPORT.sub(r"\1'\2'\3", text)
    text = DEFAULT_IMPORT.sub(_close_quote, text)
    text = FROM_CLAUSE.sub(_close_quote, text)
    return text


def is_script(name: str) -> bool:
    return any(name.endswith(ext) for ext in SCRIPT_EXT)
