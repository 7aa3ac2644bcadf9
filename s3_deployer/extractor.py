# -*- coding: utf-8 -*-

"""
Extract a zip artifact into a release directory.

Every member is checked before anything is written, a member that would land
outside of the destination (absolute path, ``..`` segment, or anything else
that resolves outside) rejects the whole archive.

Partially extracted output is not cleaned up when a write fails half way.
"""

import typing as T

import shutil
import logging
import zlib
import zipfile
from pathlib import Path, PurePosixPath

from . import constants
from . import exc
from .utils import is_within

logger = logging.getLogger(__name__)


def get_member_path(
    member: zipfile.ZipInfo,
    destination_root: Path,
) -> Path:
    """
    Resolve the destination path of an archive member.

    :raises: :class:`~s3_deployer.exc.UnsafeArchiveEntryError` if the member
        would be written outside ``destination_root``.
    """
    name = member.filename.replace("\\", "/")
    parts = PurePosixPath(name).parts
    if name.startswith("/") or ".." in parts:
        raise exc.UnsafeArchiveEntryError(f"unsafe archive entry: {member.filename!r}")
    path = destination_root.joinpath(*parts)
    if not is_within(destination_root.resolve(), path.resolve()):
        raise exc.UnsafeArchiveEntryError(
            f"archive entry escapes destination: {member.filename!r}"
        )
    return path


def extract(
    archive_path: T.Union[str, Path],
    destination_root: T.Union[str, Path],
    buffer_size: int = constants.BUFFER_SIZE,
):
    """
    Extract all members of ``archive_path`` under ``destination_root``.

    :raises: :class:`~s3_deployer.exc.UnsafeArchiveEntryError` if any member
        escapes the destination, nothing is written in that case.
        :class:`~s3_deployer.exc.LocalIOError` if the archive can't be read or
        a directory / file can't be created.
    """
    destination_root = Path(destination_root)
    try:
        zf = zipfile.ZipFile(archive_path)
    except (zipfile.BadZipFile, OSError) as e:
        raise exc.LocalIOError(f"cannot open archive {archive_path}: {e}") from e

    with zf:
        members = [
            (member, get_member_path(member, destination_root))
            for member in zf.infolist()
        ]
        logger.debug(
            "extracting %s members from %s to %s",
            len(members),
            archive_path,
            destination_root,
        )
        try:
            destination_root.mkdir(parents=True, exist_ok=True)
            for member, path in members:
                if member.is_dir():
                    path.mkdir(parents=True, exist_ok=True)
                    continue
                path.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(member) as src, path.open("wb") as dst:
                    shutil.copyfileobj(src, dst, buffer_size)
        except (
            OSError,
            zipfile.BadZipFile,
            zlib.error,
            RuntimeError,
            NotImplementedError,
            EOFError,
        ) as e:
            raise exc.LocalIOError(
                f"failed to extract {archive_path} to {destination_root}: {e}"
            ) from e
