"""Git plumbing used by the gitguard hooks."""

from gitguard.git.exec import ExecError, ExecResult, run_git

__all__ = ["ExecError", "ExecResult", "run_git"]
