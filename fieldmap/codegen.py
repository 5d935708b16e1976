"""Render templates and write generated output.

Takes the collected mapping and produces a Go source file declaring it
as a single map[string]string variable.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from .errors import OutputError

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "mapping.go.j2"

DEFAULT_OUTPUT = Path("generate") / "mapping" / "field_and_json_mapping.go"
DEFAULT_PACKAGE = "mapping"
DEFAULT_VAR_NAME = "AllMappings"

_GO_ESCAPES: dict[str, str] = {
    "\a": r"\a",
    "\b": r"\b",
    "\f": r"\f",
    "\n": r"\n",
    "\r": r"\r",
    "\t": r"\t",
    "\v": r"\v",
    "\\": r"\\",
    '"': r"\"",
}


def go_quote(value: str) -> str:
    """Return ``value`` as a double-quoted Go string literal."""
    parts = ['"']
    for ch in value:
        if ch in _GO_ESCAPES:
            parts.append(_GO_ESCAPES[ch])
        elif "\udc80" <= ch <= "\udcff":
            # a byte that was not valid UTF-8 in the source tag
            parts.append(f"\\x{ord(ch) - 0xDC00:02x}")
        elif ch.isprintable():
            parts.append(ch)
        elif ord(ch) < 0x80:
            parts.append(f"\\x{ord(ch):02x}")
        elif ord(ch) <= 0xFFFF:
            parts.append(f"\\u{ord(ch):04x}")
        else:
            parts.append(f"\\U{ord(ch):08x}")
    parts.append('"')
    return "".join(parts)


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["go_quote"] = go_quote
    return env


def render(
    mappings: dict[str, str],
    package: str = DEFAULT_PACKAGE,
    var_name: str = DEFAULT_VAR_NAME,
) -> str:
    """Render the Go source for ``mappings`` with keys in sorted order."""
    template = _environment().get_template(TEMPLATE_NAME)
    return template.render(
        package=package,
        var_name=var_name,
        mappings=sorted(mappings.items()),
    )


def generate(
    mappings: dict[str, str],
    output_path: Path = DEFAULT_OUTPUT,
    package: str = DEFAULT_PACKAGE,
    var_name: str = DEFAULT_VAR_NAME,
) -> Path:
    """Render the mapping and overwrite ``output_path`` with it."""
    output = render(mappings, package, var_name)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"failed to write {output_path}: {e}") from e

    print(f"Generated {output_path} ({len(mappings)} mappings)")
    return output_path
