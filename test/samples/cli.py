from __future__ import annotations

from typing import Annotated

from plaincommands import CommandSet, command, option


class Repository(CommandSet, namespace="repo"):
    token: Annotated[str, option(descr="access token")] = ""

    def __init__(self):
        self.loaded = []

    @command(shortcuts=["gh"])
    def loadFromGitHub(self, owner, name, *, branch="main"):
        """Load a repository from GitHub."""
        self.loaded.append((owner, name, branch, self.token))


class Plain:
    """Not a command set; ignored by discovery."""

    @command
    def ignored(self):
        pass
