# -*- coding: utf-8 -*-

import typing as T
from pathlib import Path

from . import constants
from . import exc


def validate_path_component(value: str, field: str) -> str:
    """
    Make sure ``value`` can be used as a single S3 key segment and a single
    local directory name.

    :raises: :class:`~s3_deployer.exc.UsageError` if it cannot.
    """
    if not isinstance(value, str) or not value.strip():
        raise exc.UsageError(f"{field} cannot be empty")
    if value in (".", "..") or "/" in value or "\\" in value:
        raise exc.UsageError(f"invalid {field}: {value!r}")
    return value


def encode_artifact_key(application: str, version: str) -> str:
    """
    Example::

        >>> encode_artifact_key("legoland", "09924950")
        'legoland/legoland-09924950.zip'
    """
    return f"{application}/{application}-{version}{constants.ARTIFACT_SUFFIX}"


def get_release_dir(deployment_root: T.Union[str, Path], version: str) -> Path:
    return Path(deployment_root).joinpath(constants.RELEASES_DIRNAME, version)


def split_scripts(scripts: T.Optional[str]) -> T.List[str]:
    """
    Parse the comma separated ``--scripts`` option. Surrounding whitespace
    is trimmed and empty items are dropped.
    """
    if not scripts:
        return []
    return [script.strip() for script in scripts.split(",") if script.strip()]


def is_within(root: Path, path: Path) -> bool:
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False
