# -*- coding: utf-8 -*-

"""
Error kinds raised by this project. Nothing outside of :mod:`s3_deployer.storage`
looks at backend specific error codes, everything else works with these.
"""

import typing as T


class S3DeployerError(Exception):
    pass


class ConfigError(S3DeployerError):
    pass


class UsageError(S3DeployerError):
    pass


class StorageError(S3DeployerError):
    def __init__(
        self,
        message: str,
        code: T.Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message


class BucketNotFoundError(StorageError):
    pass


class AccessDeniedError(StorageError):
    pass


class ArtifactNotFoundError(StorageError):
    def __init__(
        self,
        message: str,
        code: T.Optional[str] = None,
        application: T.Optional[str] = None,
        version: T.Optional[str] = None,
        key: T.Optional[str] = None,
    ):
        super().__init__(message, code=code)
        self.application = application
        self.version = version
        self.key = key


class LocalIOError(S3DeployerError):
    pass


class UnsafeArchiveEntryError(LocalIOError):
    pass


class PermissionWarning(UserWarning):
    pass
