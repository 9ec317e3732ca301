#!/usr/bin/env python3

import os
import subprocess
from typing import List, Optional, Tuple


class RepositoryError(Exception):
    """Raised when there is no usable checkout of the source repository"""


def repo_name(repo: str) -> str:
    """Derive the checkout directory name from a repository URL or path.

    "https://github.com/org/hvisor-book.git" becomes "hvisor-book".
    """
    name = repo.rstrip('/').replace('\\', '/').split('/')[-1].split(':')[-1]
    if name.endswith('.git'):
        name = name[:-len('.git')]
    if not name:
        raise RepositoryError(f"Cannot derive a repository name from '{repo}'")
    return name


class GitOperations:
    """Handles Git operations for the translation workflow"""

    def run_command(self, command: List[str], cwd: Optional[str] = None) -> Tuple[int, str, str]:
        """Run shell command and return exit code, stdout, stderr"""
        try:
            process = subprocess.run(
                command,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False
            )
            return process.returncode, process.stdout, process.stderr
        except Exception as e:
            print(f"Error running command {' '.join(command)}: {e}")
            return 1, "", str(e)

    @staticmethod
    def _print_output(stdout: str, stderr: str) -> None:
        for stream in (stdout, stderr):
            if stream.strip():
                print(stream.rstrip())

    def sync_repository(self, repo: str, branch: str, repo_path: str) -> bool:
        """Pull the checkout if it exists, otherwise clone the branch into it.

        Failures are reported, not raised: the caller decides whether the
        remaining checkout is usable.
        """
        if os.path.isdir(repo_path):
            print(f"  🔄 Pulling the latest changes from the repo: {repo}")
            code, stdout, stderr = self.run_command(['git', 'pull'], cwd=repo_path)
        else:
            print(f"  📥 Cloning the repo: {repo} (branch: {branch})")
            code, stdout, stderr = self.run_command(['git', 'clone', '--branch', branch, repo, repo_path])

        self._print_output(stdout, stderr)
        if code != 0:
            print(f"  ⚠️ Git sync failed with exit code {code}")
            return False
        return True

    def get_head_commit(self, repo_path: str) -> str:
        """Return the HEAD commit hash of the checkout, '' if it cannot be resolved"""
        code, stdout, stderr = self.run_command(['git', 'rev-parse', 'HEAD'], cwd=repo_path)
        if code != 0:
            print(f"  ⚠️ Could not resolve HEAD in {repo_path}: {stderr.strip()}")
            return ""
        return stdout.strip()

    def commit_and_push(self, repo_path: str, commit_message: str, push: bool = True) -> bool:
        """Commit every change in the checkout and optionally push it.

        A clean checkout counts as success; only a failing git command returns False.
        """
        try:
            code, _, stderr = self.run_command(['git', 'add', '-A'], cwd=repo_path)
            if code != 0:
                print(f"  ❌ Error adding files: {stderr}")
                return False

            # Check for changes
            code, stdout, stderr = self.run_command(['git', 'status', '--porcelain'], cwd=repo_path)
            if code != 0:
                print(f"  ❌ Error checking status: {stderr}")
                return False
            if not stdout.strip():
                print("  ℹ️ No changes detected to commit.")
                return True

            print("📦 Committing changes...")
            code, stdout, stderr = self.run_command(['git', 'commit', '-m', commit_message], cwd=repo_path)
            if code != 0:
                if "nothing to commit" in stdout + stderr:
                    print("  ℹ️ No changes to commit")
                    return True
                print(f"  ❌ Error committing: {stderr}")
                return False

            if push:
                print(f"🚀 Pushing {repo_path}...")
                code, _, stderr = self.run_command(['git', 'push'], cwd=repo_path)
                if code != 0:
                    print(f"  ❌ Error pushing: {stderr}")
                    return False

            print("  ✅ Changes committed successfully.")
            return True

        except Exception as e:
            print(f"Error in commit and push: {e}")
            return False
