"""Generate the Node.js dispatcher embedded in the umbrella package.

The dispatcher is a fixed program skeleton. Only two things vary: the
platform mapping and the expression for the directory that holds the
platform packages. Both are serialized by ``encode_js_literal``, never by
string interpolation of raw values.

Escaping rules:
- Values are emitted with ``json.dumps(..., ensure_ascii=True)``. JSON is
  valid JavaScript literal syntax, and ASCII-only output also escapes
  U+2028/U+2029, which pre-ES2019 engines reject inside string literals.
- A path segment (prefix, package name, binary name, platform tag) must be
  non-empty, must not be ``.`` or ``..``, and must not contain ``/``, ``\\``,
  control characters or lone surrogates. Such values would either change
  which file ``path.join`` resolves or not survive encoding.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from ..core.result import Err, Ok, Result
from .errors import UnencodableDefinition
from .model import PackageDefinition
from .platforms import NODE_ARCH_TO_GOARCH, NODE_PLATFORM_TO_GOOS

UNSUPPORTED_EXIT_CODE = 1

MODULES_DIRECTORY = "path.dirname(__dirname)"
SCOPED_MODULES_DIRECTORY = "path.dirname(path.dirname(__dirname))"

_SKELETON = """#!/usr/bin/env node
const path = require('path');
const fs = require('fs');
const os = require('os');
const child_process = require('child_process');
const platforms = {platforms};
const architectures = {architectures};
const mapping = {mapping};
const modulesDirectory = {directory};
const platform = platforms[process.platform] || process.platform;
let arch = architectures[process.arch] || process.arch;
if (arch === 'ppc64' && os.endianness() === 'LE') {{
  arch = 'ppc64le';
}}
const definition = mapping[platform + '_' + arch];
if (!definition) {{
  console.error('Unsupported platform: ' + process.platform + ' ' + process.arch);
  process.exit({unsupported});
}}
const packagePaths = [
  path.join(modulesDirectory, ...definition),
  path.join(__dirname, 'node_modules', ...definition),
];
const packagePath = packagePaths.find(p => fs.existsSync(p)) || packagePaths[0];
const child = child_process.spawn(packagePath, process.argv.slice(2), {{
  stdio: 'inherit',
  env: process.env,
}});
child.on('error', err => {{
  console.error(err.message);
  process.exit(1);
}});
child.on('exit', (code, signal) => {{
  if (signal) {{
    process.kill(process.pid, signal);
    return;
  }}
  process.exit(code === null ? 1 : code);
}});
"""


def _segment_problem(value: str) -> str | None:
    if not value:
        return "empty value"
    if value in (".", ".."):
        return "relative path segment"
    if "/" in value or "\\" in value:
        return "contains a path separator"
    for ch in value:
        code = ord(ch)
        if code < 0x20 or code == 0x7F:
            return f"contains control character U+{code:04X}"
        if 0xD800 <= code <= 0xDFFF:
            return f"contains lone surrogate U+{code:04X}"
    return None


def check_segment(field: str, value: str) -> Result[str, UnencodableDefinition]:
    problem = _segment_problem(value)
    if problem is not None:
        return Err(UnencodableDefinition(field=field, value=value, reason=problem))
    return Ok(value)


def encode_js_literal(value: object) -> str:
    """Serialize a dict/list/str/number into JavaScript literal source."""
    return json.dumps(value, ensure_ascii=True)


def build_mapping(
    definitions: Sequence[PackageDefinition],
    prefix: str | None,
) -> Result[dict[str, list[str]], UnencodableDefinition]:
    """Map ``"{os}_{cpu}"`` to the path segments of each platform binary."""
    mapping: dict[str, list[str]] = {}
    if prefix:
        checked = check_segment("prefix", prefix)
        if isinstance(checked, Err):
            return checked
        if not prefix.startswith("@") or len(prefix) < 2:
            return Err(
                UnencodableDefinition(
                    field="prefix", value=prefix, reason="npm scope must look like @name"
                )
            )

    for definition in definitions:
        for field, value in (
            ("os", definition.os),
            ("cpu", definition.cpu),
            ("name", definition.name),
            ("bin", definition.bin),
        ):
            checked = check_segment(f"{definition.name}.{field}", value)
            if isinstance(checked, Err):
                return checked

        segments = [prefix] if prefix else []
        segments += [definition.name, definition.bin]
        mapping[definition.platform_key] = segments

    return Ok(mapping)


def modules_directory_expression(prefix: str | None) -> str:
    """Directory holding sibling packages, seen from the umbrella's __dirname.

    A scope adds one directory level (node_modules/@scope/pkg).
    """
    return SCOPED_MODULES_DIRECTORY if prefix else MODULES_DIRECTORY


def render_exec_script(mapping: dict[str, list[str]], directory: str) -> str:
    """Fill the fixed dispatcher skeleton. ``directory`` is JS source."""
    return _SKELETON.format(
        platforms=encode_js_literal(NODE_PLATFORM_TO_GOOS),
        architectures=encode_js_literal(NODE_ARCH_TO_GOARCH),
        mapping=encode_js_literal(mapping),
        directory=directory,
        unsupported=UNSUPPORTED_EXIT_CODE,
    )


def build_exec_script(
    definitions: Sequence[PackageDefinition],
    prefix: str | None,
) -> Result[str, UnencodableDefinition]:
    mapping = build_mapping(definitions, prefix)
    if isinstance(mapping, Err):
        return mapping
    return Ok(render_exec_script(mapping.value, modules_directory_expression(prefix)))
