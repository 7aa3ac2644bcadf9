# -*- coding: utf-8 -*-

"""
Install an application version as a release directory.

The pipeline is::

    check existing -> fetch -> extract -> normalize permissions

If ``{deployment_root}/releases/{version}`` already exists the install is
considered done and nothing else happens. Fetch and extract errors propagate
to the caller, permission problems only produce warnings.
"""

import typing as T

import enum
import dataclasses
import logging
from pathlib import Path

from . import exc
from .config import Config
from .storage import Storage
from .fetcher import ArtifactFetcher
from .extractor import extract
from .permissions import PermissionPolicy, normalize
from .utils import validate_path_component, get_release_dir

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class InstallRequest:
    """
    :param application: application name, also the S3 "folder" of its artifacts.
    :param version: version identifier, usually a commit or content hash.
    :param scripts: comma separated list of script paths relative to the
        release root that must be made owner executable.
    :param group_writable: make every file group writable.
    :param remove_other_permissions: strip all permissions for "other".
    """

    application: str = dataclasses.field()
    version: str = dataclasses.field()
    scripts: T.Optional[str] = dataclasses.field(default=None)
    group_writable: bool = dataclasses.field(default=False)
    remove_other_permissions: bool = dataclasses.field(default=False)

    def __post_init__(self):
        validate_path_component(self.application, "application")
        validate_path_component(self.version, "version")

    @property
    def policy(self) -> PermissionPolicy:
        return PermissionPolicy.new(
            group_writable=self.group_writable,
            remove_other_permissions=self.remove_other_permissions,
            scripts=self.scripts,
        )


class InstallStatus(str, enum.Enum):
    INSTALLED = "installed"
    ALREADY_INSTALLED = "already_installed"


@dataclasses.dataclass
class InstallResult:
    status: InstallStatus = dataclasses.field()
    release_dir: Path = dataclasses.field()
    warnings: T.List[exc.PermissionWarning] = dataclasses.field(
        default_factory=list
    )


@dataclasses.dataclass
class Installer:
    """
    :param config: process wide configuration, provides the deployment root.
    :param fetcher: downloads artifacts from S3.

    **Usage Example**::

        config = Config.load("/etc/pagerduty/devtools.yml")
        installer = Installer.new(config)
        result = installer.install(InstallRequest("legoland", "09924950"))
    """

    config: Config = dataclasses.field()
    fetcher: ArtifactFetcher = dataclasses.field()

    @classmethod
    def new(cls, config: Config) -> "Installer":
        return cls(
            config=config,
            fetcher=ArtifactFetcher(
                storage=Storage(bsm=config.bsm),
                bucket=config.bucket,
            ),
        )

    def get_release_dir(self, version: str) -> Path:
        return get_release_dir(self.config.deployment_root, version)

    def install(self, request: InstallRequest) -> InstallResult:
        """
        Run the install pipeline for one request.

        :raises: :class:`~s3_deployer.exc.ArtifactNotFoundError` if the artifact
            does not exist, :class:`~s3_deployer.exc.StorageError` for other S3
            failures, :class:`~s3_deployer.exc.LocalIOError` if the artifact
            cannot be written or extracted.
        """
        release_dir = self.get_release_dir(request.version)
        if release_dir.exists():
            logger.info(
                "%s version %s is already installed at %s, nothing to do",
                request.application,
                request.version,
                release_dir,
            )
            return InstallResult(
                status=InstallStatus.ALREADY_INSTALLED,
                release_dir=release_dir,
            )

        logger.info(
            "installing %s version %s to %s",
            request.application,
            request.version,
            release_dir,
        )
        path_zip = self.fetcher.fetch(request.application, request.version)
        try:
            extract(path_zip, release_dir)
        finally:
            try:
                path_zip.unlink(missing_ok=True)
            except OSError as e:  # pragma: no cover
                logger.warning("failed to remove temp file %s: %s", path_zip, e)

        warnings = normalize(release_dir, request.policy)
        logger.info(
            "installed %s version %s to %s (%s permission warnings)",
            request.application,
            request.version,
            release_dir,
            len(warnings),
        )
        return InstallResult(
            status=InstallStatus.INSTALLED,
            release_dir=release_dir,
            warnings=warnings,
        )
