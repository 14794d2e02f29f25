from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.result import Result
from ..platform.process import ProcessError, run

_PUBLISH_TIMEOUT_SECONDS = 10 * 60.0


@dataclass(frozen=True, slots=True)
class PublishOptions:
    tag: str | None = None
    token: str | None = None


def publish_command(options: PublishOptions) -> list[str]:
    cmd = ["npm", "publish", "--access", "public"]
    if options.tag:
        cmd += ["--tag", options.tag]
    return cmd


def publish_env(options: PublishOptions) -> dict[str, str]:
    """Token environment for npm.

    NODE_AUTH_TOKEN is what setup-node's .npmrc reads; npm_config__authToken
    works without any .npmrc.
    """
    if not options.token:
        return {}
    return {"NODE_AUTH_TOKEN": options.token, "npm_config__authToken": options.token}


def publish(path: Path, options: PublishOptions | None = None) -> Result[str, ProcessError]:
    """Publish the package directory ``path`` with public access."""
    options = options or PublishOptions()
    return run(
        publish_command(options),
        cwd=path,
        extra_env=publish_env(options),
        timeout=_PUBLISH_TIMEOUT_SECONDS,
    )
