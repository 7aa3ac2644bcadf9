# -*- coding: utf-8 -*-

"""
Download an artifact from S3 to a local temp file.
"""

import typing as T

import os
import dataclasses
import logging
import tempfile
from pathlib import Path

import botocore.exceptions
from s3pathlib import S3Path

from . import constants
from . import exc
from .utils import encode_artifact_key
from .storage import Storage

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ArtifactFetcher:
    """
    :param storage: the storage adapter.
    :param bucket: bucket the artifacts live in.
    :param buffer_size: chunk size used when streaming the body to disk.
    :param tmp_dir: where to create the temp file, ``None`` means the
        system default.
    """

    storage: Storage = dataclasses.field()
    bucket: str = dataclasses.field(default=constants.DEFAULT_BUCKET)
    buffer_size: int = dataclasses.field(default=constants.BUFFER_SIZE)
    tmp_dir: T.Optional[str] = dataclasses.field(default=None)

    def get_artifact_s3path(self, application: str, version: str) -> S3Path:
        return S3Path(self.bucket, encode_artifact_key(application, version))

    def fetch(self, application: str, version: str) -> Path:
        """
        Download ``{application}/{application}-{version}.zip`` and return the
        path of the local temp file. The caller is responsible for removing it.

        :raises: :class:`~s3_deployer.exc.ArtifactNotFoundError`,
            :class:`~s3_deployer.exc.StorageError` or
            :class:`~s3_deployer.exc.LocalIOError`.
        """
        s3path = self.get_artifact_s3path(application, version)
        try:
            body = self.storage.get_object(bucket=s3path.bucket, key=s3path.key)
        except exc.ArtifactNotFoundError as e:
            raise exc.ArtifactNotFoundError(
                f"artifact {application!r} version {version!r} "
                f"does not exist at {s3path.uri}",
                code=e.code,
                application=application,
                version=version,
                key=s3path.key,
            ) from e

        try:
            path = self._write_body(body)
        finally:
            body.close()
        logger.info("downloaded %s to %s", s3path.uri, path)
        return path

    def _write_body(self, body) -> Path:
        try:
            fd, tmp = tempfile.mkstemp(
                prefix="s3_deployer-",
                suffix=constants.ARTIFACT_SUFFIX,
                dir=self.tmp_dir,
            )
        except OSError as e:
            raise exc.LocalIOError(f"cannot create temp file: {e}") from e

        path = Path(tmp)
        try:
            with os.fdopen(fd, "wb") as f:
                while True:
                    try:
                        chunk = body.read(self.buffer_size)
                    except (OSError, botocore.exceptions.BotoCoreError) as e:
                        raise exc.LocalIOError(
                            f"failed reading artifact stream: {e}"
                        ) from e
                    if not chunk:
                        break
                    f.write(chunk)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise exc.LocalIOError(f"failed writing {path}: {e}") from e
        except exc.LocalIOError:
            path.unlink(missing_ok=True)
            raise
        return path
