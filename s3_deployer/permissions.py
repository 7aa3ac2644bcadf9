# -*- coding: utf-8 -*-

"""
Normalize file permissions of an installed release.

This is best effort: a file that can't be changed, or a listed script that
doesn't exist, produces a :class:`~s3_deployer.exc.PermissionWarning` which is
logged and returned, but never raised.
"""

import typing as T

import os
import stat
import dataclasses
import logging
from pathlib import Path

from . import constants
from . import exc
from .utils import split_scripts, is_within

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class PermissionPolicy:
    """
    :param group_writable: add the group write bit.
    :param remove_other_permissions: clear all "other" bits.
    :param scripts: paths relative to the release root that must be owner
        executable. Files ending with ``.sh`` are always made owner executable.
    """

    group_writable: bool = dataclasses.field(default=False)
    remove_other_permissions: bool = dataclasses.field(default=False)
    scripts: T.Tuple[str, ...] = dataclasses.field(default_factory=tuple)

    @classmethod
    def new(
        cls,
        group_writable: bool = False,
        remove_other_permissions: bool = False,
        scripts: T.Optional[str] = None,
    ) -> "PermissionPolicy":
        """
        Create a policy from the raw comma separated ``scripts`` string.
        """
        return cls(
            group_writable=group_writable,
            remove_other_permissions=remove_other_permissions,
            scripts=tuple(split_scripts(scripts)),
        )

    def apply_mode(self, mode: int, is_file: bool, name: str) -> int:
        if self.group_writable:
            mode |= stat.S_IWGRP
        if self.remove_other_permissions:
            mode &= ~stat.S_IRWXO
        if is_file and name.endswith(constants.SCRIPT_SUFFIX):
            mode |= stat.S_IXUSR
        return mode


def _chmod(
    path: Path,
    mode: int,
    warnings: T.List[exc.PermissionWarning],
):
    try:
        os.chmod(path, mode)
    except OSError as e:
        warning = exc.PermissionWarning(f"failed to chmod {path}: {e}")
        logger.warning(str(warning))
        warnings.append(warning)


def _normalize_entry(
    path: Path,
    policy: PermissionPolicy,
    warnings: T.List[exc.PermissionWarning],
):
    try:
        st = path.lstat()
    except OSError as e:
        warning = exc.PermissionWarning(f"failed to stat {path}: {e}")
        logger.warning(str(warning))
        warnings.append(warning)
        return
    if stat.S_ISLNK(st.st_mode):
        return
    mode = stat.S_IMODE(st.st_mode)
    new_mode = policy.apply_mode(
        mode,
        is_file=stat.S_ISREG(st.st_mode),
        name=path.name,
    )
    if new_mode != mode:
        _chmod(path, new_mode, warnings)


def _normalize_tree(
    release_root: Path,
    policy: PermissionPolicy,
    warnings: T.List[exc.PermissionWarning],
):
    # the root itself, like ``chmod -R``
    _normalize_entry(release_root, policy, warnings)
    for dirpath, dirnames, filenames in os.walk(release_root):
        dirpath = Path(dirpath)
        for name in dirnames + filenames:
            _normalize_entry(dirpath / name, policy, warnings)


def _make_scripts_executable(
    release_root: Path,
    policy: PermissionPolicy,
    warnings: T.List[exc.PermissionWarning],
):
    root = release_root.resolve()
    for script in policy.scripts:
        path = release_root / script
        try:
            if not is_within(root, path.resolve()):
                raise FileNotFoundError(script)
            mode = stat.S_IMODE(path.stat().st_mode)
        except OSError:
            warning = exc.PermissionWarning(
                f"script {script!r} does not exist in {release_root}"
            )
            logger.warning(str(warning))
            warnings.append(warning)
            continue
        _chmod(path, mode | stat.S_IXUSR, warnings)


def normalize(
    release_root: T.Union[str, Path],
    policy: PermissionPolicy,
) -> T.List[exc.PermissionWarning]:
    """
    Apply ``policy`` to every entry under ``release_root``, then make every
    script in ``policy.scripts`` owner executable. The tree walk finishes
    before the script list is processed.

    :returns: the warnings produced, an empty list means everything went fine.
    """
    release_root = Path(release_root)
    warnings: T.List[exc.PermissionWarning] = list()
    _normalize_tree(release_root, policy, warnings)
    _make_scripts_executable(release_root, policy, warnings)
    return warnings
