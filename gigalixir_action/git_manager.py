# gigalixir_action/git_manager.py
from typing import List

import git
from git.exc import GitCommandError
from loguru import logger

from .errors import GitPushError


class PushProgress(git.RemoteProgress):
    """
    Logs what the remote prints during a push. Gigalixir streams its build
    output as ``remote: ...`` lines, which GitPython hands to ``line_dropped``.
    """

    def __init__(self):
        super().__init__()
        self.lines: List[str] = []

    def line_dropped(self, line: str) -> None:
        line = line.rstrip()
        if line:
            self.lines.append(line)
            logger.info(line)


class GitManager:
    def __init__(self, repo_path: str = "."):
        self.repo_path = str(repo_path)

    def _repo(self) -> git.Repo:
        return git.Repo(self.repo_path, search_parent_directories=True)

    def get_commit_hash(self, short: bool = False) -> str:
        hexsha = self._repo().head.commit.hexsha
        return hexsha[:7] if short else hexsha

    @staticmethod
    def _with_remote_output(message: str, progress: PushProgress) -> str:
        lines = progress.lines + [
            line.rstrip() for line in progress.error_lines if line.rstrip()
        ]
        if not lines:
            return message
        return message + "\n" + "\n".join(dict.fromkeys(lines))

    def force_push(self, remote_name: str = "gigalixir", branch: str = "master"):
        """
        Force-push HEAD to ``refs/heads/<branch>`` on ``remote_name``.
        Whatever the remote had is replaced, fast-forward or not.
        """
        repo = self._repo()
        refspec = f"HEAD:refs/heads/{branch}"
        progress = PushProgress()
        logger.info(f"$ git push -f {remote_name} {refspec}")

        try:
            remote = repo.remote(remote_name)
            results = remote.push(refspec=refspec, progress=progress, force=True)
        except (GitCommandError, ValueError) as e:
            raise GitPushError(
                self._with_remote_output(f"git push to {remote_name} failed: {e}", progress)
            ) from e

        for info in results:
            if info.flags & info.ERROR:
                raise GitPushError(
                    self._with_remote_output(
                        f"git push to {remote_name} rejected: {info.summary.strip()}",
                        progress,
                    )
                )
        logger.info(f"Pushed {self.get_commit_hash(short=True)} to {remote_name}/{branch}")
