"""Git remote reference listing via ``git ls-remote``."""

import asyncio
import os
from typing import Optional

from ..config import AuditConfig
from ..core.models import RemoteRef, RemoteRefSet
from ..exceptions import RemoteRefError
from ..utils.logging import get_logger

_HEADS_PREFIX = "refs/heads/"
_TAGS_PREFIX = "refs/tags/"
_PEELED_SUFFIX = "^{}"


def parse_ls_remote(output: str) -> RemoteRefSet:
    """Parse the output of ``git ls-remote``.

    Peeled tag entries (``refs/tags/<tag>^{}``) replace the tag object sha
    with the sha of the commit it points to.

    Args:
        output: Raw command output, one ``<sha>\\t<ref>`` per line

    Returns:
        Branches, tags and HEAD of the remote
    """
    refs = RemoteRefSet()

    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue

        parts = line.split(None, 1)
        if len(parts) != 2:
            continue
        sha, ref = parts

        if ref == "HEAD":
            refs.head = RemoteRef("HEAD", sha)
        elif ref.startswith(_HEADS_PREFIX):
            name = ref[len(_HEADS_PREFIX):]
            refs.branches[name] = RemoteRef(name, sha)
        elif ref.startswith(_TAGS_PREFIX):
            name = ref[len(_TAGS_PREFIX):]
            if name.endswith(_PEELED_SUFFIX):
                name = name[:-len(_PEELED_SUFFIX)]
            refs.tags[name] = RemoteRef(name, sha)

    return refs


class GitRemoteClient:
    """Lists remote references by running ``git ls-remote``."""

    def __init__(self, config: Optional[AuditConfig] = None) -> None:
        self.config = config or AuditConfig()
        self.logger = get_logger("dep_drift.git")

    async def ls_remote(self, remote: str) -> RemoteRefSet:
        """List the references of a remote.

        Args:
            remote: Remote URL

        Returns:
            Branches, tags and HEAD of the remote

        Raises:
            RemoteRefError: If git is missing, times out or fails
        """
        self.logger.debug(f"git ls-remote {remote}")
        env = dict(os.environ, GIT_TERMINAL_PROMPT="0")

        try:
            process = await asyncio.create_subprocess_exec(
                self.config.git_binary, "ls-remote", remote,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except FileNotFoundError as e:
            raise RemoteRefError(remote, f"git executable not found: {self.config.git_binary}") from e
        except OSError as e:
            raise RemoteRefError(remote, f"unable to run {self.config.git_binary}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.config.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise RemoteRefError(remote, f"timed out after {self.config.timeout:g}s") from e

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise RemoteRefError(remote, message or f"git exited with status {process.returncode}")

        return parse_ls_remote(stdout.decode("utf-8", errors="replace"))
