"""Go/npm platform tags.

Build descriptors use Go's GOOS/GOARCH names; package.json ``os``/``cpu``
fields use Node's ``process.platform``/``process.arch`` names.
"""

from __future__ import annotations

GOOS_TO_NODE: dict[str, str] = {
    "aix": "aix",
    "android": "android",
    "darwin": "darwin",
    "freebsd": "freebsd",
    "linux": "linux",
    "netbsd": "netbsd",
    "openbsd": "openbsd",
    "solaris": "sunos",
    "windows": "win32",
}

GOARCH_TO_NODE: dict[str, str] = {
    "386": "ia32",
    "amd64": "x64",
    "arm": "arm",
    "arm64": "arm64",
    "loong64": "loong64",
    "mips": "mips",
    "mipsle": "mipsel",
    "mips64le": "mips64el",
    "ppc64": "ppc64",
    "ppc64le": "ppc64",
    "riscv64": "riscv64",
    "s390x": "s390x",
}

# Node names that differ from Go names, reversed for the dispatcher.
# Node reports both ppc64 and ppc64le as ppc64; the dispatcher tells them
# apart by endianness at run time.
NODE_PLATFORM_TO_GOOS: dict[str, str] = {"sunos": "solaris", "win32": "windows"}
NODE_ARCH_TO_GOARCH: dict[str, str] = {
    "ia32": "386",
    "mips64el": "mips64le",
    "mipsel": "mipsle",
    "x64": "amd64",
}


def node_os(goos: str) -> str:
    return GOOS_TO_NODE.get(goos, goos)


def node_cpu(goarch: str) -> str:
    return GOARCH_TO_NODE.get(goarch, goarch)


def split_platform_segment(segment: str) -> tuple[str, str] | None:
    """Split a build directory name into (goos, goarch).

    Handles both plain (``darwin_amd64``) and goreleaser-style
    (``mytool_darwin_amd64_v1``) names. Returns None when fewer than two
    tokens are present.
    """
    tokens = [t for t in segment.split("_") if t]
    if len(tokens) < 2:
        return None

    for i, token in enumerate(tokens[:-1]):
        if token in GOOS_TO_NODE:
            return token, tokens[i + 1]

    return tokens[-2], tokens[-1]
