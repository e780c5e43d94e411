"""Finding the KUBECONFIG files to read and write, following kubectl's rules.

- If an explicit path is given, only that file is used.
- Otherwise, if $KUBECONFIG is set, it is a list of paths separated by the
  system's path list separator; new values go to the first file that exists,
  or to the last file when none exist.
- Otherwise ``$HOME/.kube/config`` is used.
"""

from __future__ import annotations

import os
import posixpath
import stat
import sys
from typing import Callable, Iterable, Optional

KUBECONFIG_ENV = "KUBECONFIG"

GetEnv = Callable[[str], Optional[str]]

_PLATFORM = "windows" if os.name == "nt" else sys.platform


def _getenv(get_env: GetEnv, key: str) -> str:
    return get_env(key) or ""


def paths(explicit_path: str, get_env: GetEnv) -> list[str]:
    """Return the list of paths to consider for kubeconfig files."""
    if explicit_path:
        return [explicit_path]
    env_value = _getenv(get_env, KUBECONFIG_ENV)
    found = discard_empty_and_duplicates(env_value.split(os.pathsep) if env_value else [])
    if found:
        return found
    home = home_dir(_PLATFORM, get_env)
    return [posixpath.normpath(posixpath.join(home, ".kube", "config"))]


def path_for_merge(explicit_path: str, get_env: GetEnv) -> str:
    """Return the file that kubectl would merge new entries into."""
    candidates = paths(explicit_path, get_env)
    if len(candidates) == 1:
        return candidates[0]
    return next((p for p in candidates if file_exists(p)), candidates[-1])


def file_exists(filename: str) -> bool:
    """Return True if ``filename`` exists and is not a directory."""
    try:
        info = os.stat(filename)
    except OSError:
        return False
    return not stat.S_ISDIR(info.st_mode)


def discard_empty_and_duplicates(paths: Iterable[str]) -> list[str]:
    """Return ``paths`` without empty entries and repeats, keeping first order."""
    return list(dict.fromkeys(p for p in paths if p))


def home_dir(platform: str, get_env: GetEnv) -> str:
    """Return the home directory of the current user.

    On Windows:
    1. the first of %HOME%, %HOMEDRIVE%%HOMEPATH%, %USERPROFILE% holding a
       ``.kube/config`` file;
    2. else the first of %HOME%, %USERPROFILE%, %HOMEDRIVE%%HOMEPATH% that
       exists and is writeable;
    3. else the first of those that exists;
    4. else the first of those that is set.
    Elsewhere $HOME is returned.
    """
    if platform != "windows":
        return _getenv(get_env, "HOME")

    home = _getenv(get_env, "HOME")
    home_drive = _getenv(get_env, "HOMEDRIVE")
    home_path = _getenv(get_env, "HOMEPATH")
    home_drive_home_path = home_drive + home_path if home_drive and home_path else ""
    user_profile = _getenv(get_env, "USERPROFILE")

    for p in (home, home_drive_home_path, user_profile):
        if p and os.path.exists(os.path.join(p, ".kube", "config")):
            return p

    first_set = ""
    first_existing = ""
    for p in (home, user_profile, home_drive_home_path):
        if not p:
            continue
        first_set = first_set or p
        try:
            info = os.stat(p)
        except OSError:
            continue
        first_existing = first_existing or p
        if stat.S_ISDIR(info.st_mode) and info.st_mode & stat.S_IWUSR:
            return p

    return first_existing or first_set